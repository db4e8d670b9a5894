# cost_basis_engine/core/models/summary.py

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from cost_basis_engine.core.numbers import DecimalString


class LotValidationResult(BaseModel):
    """
    Result of a lot integrity audit. Errors are collected, never raised.
    """
    is_valid: bool = Field(..., alias="isValid")
    errors: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class TaxYearSummary(BaseModel):
    """Realized gains and losses for one tax year, split by holding term."""
    tax_year: int = Field(..., alias="taxYear")
    disposal_count: int = Field(0, alias="disposalCount")
    total_proceeds: DecimalString = Field(Decimal(0), alias="totalProceeds")
    total_cost_basis: DecimalString = Field(Decimal(0), alias="totalCostBasis")
    short_term_gain_loss: DecimalString = Field(Decimal(0), alias="shortTermGainLoss")
    long_term_gain_loss: DecimalString = Field(Decimal(0), alias="longTermGainLoss")
    net_gain_loss: DecimalString = Field(Decimal(0), alias="netGainLoss")

    model_config = ConfigDict(populate_by_name=True)
