# cost_basis_engine/tests/conftest.py

import pytest
from decimal import Decimal, getcontext

from cost_basis_engine.core.config.settings import settings
from cost_basis_engine.core.models.lot import Lot

# Same precision the application sets at startup
getcontext().prec = settings.DECIMAL_PRECISION


@pytest.fixture
def make_lot():
    """
    Factory for BTC lots. acquisition_cost is quantity * cost_per_unit unless given.
    """
    def _make_lot(lot_id, acquisition_date, quantity, cost_per_unit, remaining_quantity=None, **extra):
        fields = dict(
            lot_id=lot_id,
            acquisition_date=acquisition_date,
            quantity=Decimal(quantity),
            remaining_quantity=Decimal(remaining_quantity if remaining_quantity is not None else quantity),
            acquisition_cost=Decimal(quantity) * Decimal(cost_per_unit),
            cost_per_unit=Decimal(cost_per_unit),
            asset_symbol="BTC",
            classification="held-for-investment",
            measurement_basis="historical-cost",
        )
        fields.update(extra)
        return Lot(**fields)
    return _make_lot


@pytest.fixture
def sample_lots(make_lot):
    """
    lot1: oldest, mid price. lot2: middle, highest price. lot3: newest, lowest price.
    """
    return [
        make_lot("lot1", "2023-01-15", "1.0", "20000"),
        make_lot("lot2", "2023-03-20", "0.5", "25000"),
        make_lot("lot3", "2023-06-10", "1.5", "18000"),
    ]
