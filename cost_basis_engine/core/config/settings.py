# cost_basis_engine/core/config/settings.py

from decimal import Decimal
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from cost_basis_engine.core.enums.cost_method import CostBasisMethod

class Settings(BaseSettings):
    """
    Application settings loaded from environment variables or .env file.
    Includes general app settings and cost basis calculation defaults.
    """
    # General App Settings
    APP_NAME: str = "Cost Basis Engine API"
    APP_VERSION: str = "0.1.0"
    DEBUG_MODE: bool = False

    # API Specific Settings
    API_V1_STR: str = "/api/v1"

    # Logging Settings
    LOG_LEVEL: str = "INFO" # e.g., DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Cost Calculation Settings
    DEFAULT_COST_BASIS_METHOD: CostBasisMethod = CostBasisMethod.FIFO
    DECIMAL_PRECISION: int = 38 # 18 fractional digits for crypto quantities plus headroom
    QUANTITY_DECIMAL_PLACES: int = 18
    COST_TOLERANCE: Decimal = Decimal("0.01")
    LONG_TERM_HOLDING_PERIOD_DAYS: int = 365

    # Raise on disposal results that would drive a lot negative instead of clamping
    STRICT_LOT_UPDATES: bool = True

    # Pydantic-settings configuration
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent.parent / ".env"),
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

settings = Settings()
