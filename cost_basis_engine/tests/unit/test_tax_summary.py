# cost_basis_engine/tests/unit/test_tax_summary.py

import pytest
from datetime import date
from decimal import Decimal

from cost_basis_engine.core.models.disposal import CostBasisResult, LotDisposal, LotUsage
from cost_basis_engine.logic.tax_summary import build_lot_disposals, summarize_tax_year

@pytest.fixture
def fifo_result():
    """FIFO disposal of 1.2 BTC from the sample lots."""
    return CostBasisResult(
        total_cost_basis=Decimal("25000"),
        average_cost_per_unit=Decimal("25000") / Decimal("1.2"),
        lots_used=[
            LotUsage(lot_id="lot1", acquired_date="2023-01-15", quantity_used=Decimal("1.0"), cost_basis=Decimal("20000")),
            LotUsage(lot_id="lot2", acquired_date="2023-03-20", quantity_used=Decimal("0.2"), cost_basis=Decimal("5000")),
        ]
    )

def test_proceeds_split_by_quantity(sample_lots, fifo_result):
    records = build_lot_disposals(fifo_result, sample_lots, "2024-03-01", "36000")

    assert [r.proceeds for r in records] == [Decimal("30000"), Decimal("6000")]
    assert [r.gain_loss for r in records] == [Decimal("10000"), Decimal("1000")]
    assert [r.quantity_disposed for r in records] == [Decimal("1.0"), Decimal("0.2")]

def test_holding_period_per_lot(sample_lots, fifo_result):
    records = build_lot_disposals(fifo_result, sample_lots, date(2024, 3, 1), "36000")

    assert records[0].holding_period_days == 411
    assert records[0].is_long_term is True
    assert records[1].holding_period_days == 347
    assert records[1].is_long_term is False
    assert records[0].disposal_date == date(2024, 3, 1)

def test_proceeds_shares_add_up_exactly():
    result = CostBasisResult(
        total_cost_basis=Decimal("3"),
        average_cost_per_unit=Decimal("1"),
        lots_used=[LotUsage(lot_id=f"lot{i}", acquired_date="2023-01-01", quantity_used=Decimal("1"), cost_basis=Decimal("1"))
                   for i in range(3)]
    )
    records = build_lot_disposals(result, [], "2023-06-01", "100")

    assert sum(r.proceeds for r in records) == Decimal("100")
    assert records[0].proceeds == records[1].proceeds

def test_unknown_acquisition_date_leaves_term_open():
    result = CostBasisResult(
        total_cost_basis=Decimal("10"),
        average_cost_per_unit=Decimal("10"),
        lots_used=[LotUsage(lot_id="gone", quantity_used=Decimal("1"), cost_basis=Decimal("10"))]
    )
    record = build_lot_disposals(result, [], "2023-06-01", "15")[0]

    assert record.holding_period_days is None
    assert record.is_long_term is None
    assert record.gain_loss == Decimal("5")

def make_disposal(disposal_date, proceeds, cost_basis, is_long_term):
    return LotDisposal(
        lot_id="lot",
        disposal_date=disposal_date,
        quantity_disposed=Decimal("1"),
        proceeds=Decimal(proceeds),
        cost_basis=Decimal(cost_basis),
        gain_loss=Decimal(proceeds) - Decimal(cost_basis),
        is_long_term=is_long_term
    )

def test_summarize_tax_year():
    disposals = [
        make_disposal(date(2024, 2, 1), "30000", "20000", True),
        make_disposal(date(2024, 5, 1), "6000", "5000", False),
        make_disposal(date(2024, 9, 1), "1000", "4000", False),
        make_disposal(date(2023, 12, 31), "999", "1", True),
    ]
    summary = summarize_tax_year(disposals, 2024)

    assert summary.disposal_count == 3
    assert summary.total_proceeds == Decimal("37000")
    assert summary.total_cost_basis == Decimal("29000")
    assert summary.long_term_gain_loss == Decimal("10000")
    assert summary.short_term_gain_loss == Decimal("-2000")
    assert summary.net_gain_loss == Decimal("8000")

def test_unknown_term_counts_as_short_term():
    summary = summarize_tax_year([make_disposal(date(2024, 1, 1), "15", "10", None)], 2024)
    assert summary.short_term_gain_loss == Decimal("5")
    assert summary.long_term_gain_loss == Decimal("0")

def test_empty_year():
    summary = summarize_tax_year([], 2022)
    assert summary.disposal_count == 0
    assert summary.model_dump(mode="json", by_alias=True)["netGainLoss"] == "0"
