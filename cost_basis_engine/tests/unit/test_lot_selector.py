# cost_basis_engine/tests/unit/test_lot_selector.py

import pytest
from datetime import date
from decimal import Decimal

from cost_basis_engine.core.enums.cost_method import CostBasisMethod
from cost_basis_engine.core.exceptions import (
    InsufficientQuantityError,
    NoMatchingLotsError,
    SpecificLotIdsRequiredError,
)
from cost_basis_engine.logic.lot_selector import (
    allocate,
    filter_eligible_lots,
    order_lots,
    order_specific_lots,
)

def ids(lots):
    return [lot.lot_id for lot in lots]

# --- filter_eligible_lots ---

def test_filter_keeps_input_order(sample_lots):
    assert ids(filter_eligible_lots(list(reversed(sample_lots)), "BTC")) == ["lot3", "lot2", "lot1"]

def test_filter_by_symbol_closed_and_cutoff(make_lot):
    lots = [
        make_lot("open", "2023-01-01", "1", "10"),
        make_lot("closed", "2023-01-01", "1", "10", remaining_quantity="0"),
        make_lot("late", "2023-06-01", "1", "10"),
        make_lot("eth", "2023-01-01", "1", "10", asset_symbol="ETH"),
    ]
    assert ids(filter_eligible_lots(lots, "BTC", date(2023, 3, 1))) == ["open"]
    assert ids(filter_eligible_lots(lots)) == ["open", "late", "eth"]

# --- order_lots ---

def test_order_fifo(sample_lots):
    assert ids(order_lots(list(reversed(sample_lots)), CostBasisMethod.FIFO)) == ["lot1", "lot2", "lot3"]

def test_order_lifo(sample_lots):
    assert ids(order_lots(sample_lots, CostBasisMethod.LIFO)) == ["lot3", "lot2", "lot1"]

def test_order_lifo_ties_use_lot_id_ascending(make_lot):
    lots = [make_lot("z", "2023-01-01", "1", "1"), make_lot("a", "2023-01-01", "1", "1"),
            make_lot("m", "2022-01-01", "1", "1")]
    assert ids(order_lots(lots, CostBasisMethod.LIFO)) == ["a", "z", "m"]

def test_order_hifo(sample_lots):
    assert ids(order_lots(sample_lots, CostBasisMethod.HIFO)) == ["lot2", "lot1", "lot3"]

def test_order_accepts_datetime_strings(make_lot):
    lots = [make_lot("b", "2023-02-01T10:00:00Z", "1", "1"), make_lot("a", "2023-01-31T23:59:59Z", "1", "1")]
    assert ids(order_lots(lots, CostBasisMethod.FIFO)) == ["a", "b"]

@pytest.mark.parametrize("method", [CostBasisMethod.SPECIFIC_ID, CostBasisMethod.AVG_COST])
def test_order_rejects_non_ordering_methods(sample_lots, method):
    with pytest.raises(ValueError):
        order_lots(sample_lots, method)

# --- order_specific_lots ---

def test_specific_order_and_duplicates(sample_lots):
    assert ids(order_specific_lots(sample_lots, ["lot3", "lot1", "lot3"])) == ["lot3", "lot1"]

def test_specific_requires_ids(sample_lots):
    with pytest.raises(SpecificLotIdsRequiredError):
        order_specific_lots(sample_lots, [])

def test_specific_reports_every_missing_id(sample_lots):
    with pytest.raises(NoMatchingLotsError) as excinfo:
        order_specific_lots(sample_lots, ["lot1", "x", "y"])
    assert excinfo.value.context["missing_lot_ids"] == ["x", "y"]

# --- allocate ---

def test_allocate_exact_and_partial(sample_lots):
    allocations = allocate(sample_lots, Decimal("1.2"))

    assert [(lot.lot_id, qty) for lot, qty in allocations] == [("lot1", Decimal("1.0")), ("lot2", Decimal("0.2"))]

def test_allocate_stops_when_satisfied(sample_lots):
    allocations = allocate(sample_lots, Decimal("1.0"))
    assert len(allocations) == 1

def test_allocate_high_precision_quantities(make_lot):
    lots = [make_lot("a", "2023-01-01", "0.000000000000000001", "1"),
            make_lot("b", "2023-01-02", "1", "1")]
    allocations = allocate(lots, Decimal("0.500000000000000001"))

    assert [qty for _, qty in allocations] == [Decimal("0.000000000000000001"), Decimal("0.5")]

def test_allocate_insufficient(sample_lots):
    with pytest.raises(InsufficientQuantityError) as excinfo:
        allocate(sample_lots, Decimal("3.5"))
    assert excinfo.value.context["available"] == "3.0"
