# cost_basis_engine/logic/tax_summary.py

import logging
from decimal import Decimal
from typing import Sequence

from cost_basis_engine.core.models.disposal import CostBasisResult, LotDisposal
from cost_basis_engine.core.models.lot import Lot
from cost_basis_engine.core.models.summary import TaxYearSummary
from cost_basis_engine.core.numbers import DateLike, DecimalLike, parse_calendar_date, to_decimal
from cost_basis_engine.logic.gain_loss import calculate_gain_loss
from cost_basis_engine.logic.holding_period import calculate_holding_period

logger = logging.getLogger(__name__)


def build_lot_disposals(
    result: CostBasisResult,
    lots: Sequence[Lot],
    disposal_date: DateLike,
    proceeds: DecimalLike
) -> list[LotDisposal]:
    """
    Splits a disposal into one realized record per lot used.

    Proceeds are shared out by quantity; the last record takes the rounding
    remainder so the shares add up to the total exactly. The holding period
    comes from the lot's acquisition date (the usage's own date when the lot
    is not in `lots`).
    """
    disposed_on = parse_calendar_date(disposal_date)
    total_proceeds = to_decimal(proceeds)
    total_quantity = sum((usage.quantity_used for usage in result.lots_used), Decimal(0))
    lots_by_id = {lot.lot_id: lot for lot in lots}

    records: list[LotDisposal] = []
    allocated = Decimal(0)
    for index, usage in enumerate(result.lots_used):
        if index == len(result.lots_used) - 1:
            share = total_proceeds - allocated
        else:
            share = total_proceeds * usage.quantity_used / total_quantity
        allocated += share

        lot = lots_by_id.get(usage.lot_id)
        acquired_date = lot.acquisition_date if lot is not None else usage.acquired_date
        holding = calculate_holding_period(acquired_date, disposed_on) if acquired_date else None

        records.append(LotDisposal(
            lot_id=usage.lot_id,
            acquired_date=acquired_date,
            disposal_date=disposed_on,
            quantity_disposed=usage.quantity_used,
            proceeds=share,
            cost_basis=usage.cost_basis,
            gain_loss=calculate_gain_loss(usage.cost_basis, share).gain_loss,
            holding_period_days=holding.days if holding else None,
            is_long_term=holding.is_long_term if holding else None
        ))
    return records


def summarize_tax_year(disposals: Sequence[LotDisposal], tax_year: int) -> TaxYearSummary:
    """
    Totals realized results for disposals dated in `tax_year`.
    Records with an unknown holding term are counted as short-term.
    """
    summary = TaxYearSummary(tax_year=tax_year)
    for disposal in disposals:
        if disposal.disposal_date.year != tax_year:
            continue
        summary.disposal_count += 1
        summary.total_proceeds += disposal.proceeds
        summary.total_cost_basis += disposal.cost_basis
        if disposal.is_long_term:
            summary.long_term_gain_loss += disposal.gain_loss
        else:
            summary.short_term_gain_loss += disposal.gain_loss

    summary.net_gain_loss = summary.short_term_gain_loss + summary.long_term_gain_loss
    logger.debug(f"Tax year {tax_year}: {summary.disposal_count} disposals, net {summary.net_gain_loss}.")
    return summary
