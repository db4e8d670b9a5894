# cost_basis_engine/logic/cost_calculator.py

import logging
from decimal import ROUND_DOWN, Decimal, localcontext
from typing import Any, Optional, Sequence

from cost_basis_engine.core.config.settings import settings
from cost_basis_engine.core.enums.cost_method import CostBasisMethod
from cost_basis_engine.core.exceptions import (
    InsufficientQuantityError,
    InvalidQuantityError,
    NoMatchingLotsError,
    SpecificLotIdsRequiredError,
    UnknownMethodError,
)
from cost_basis_engine.core.models.disposal import CostBasisResult, DisposalRequest, LotUsage
from cost_basis_engine.core.models.lot import Lot
from cost_basis_engine.core.numbers import DateLike, DecimalLike, parse_calendar_date, to_decimal
from cost_basis_engine.logic.lot_selector import (
    allocate,
    filter_eligible_lots,
    order_lots,
    order_specific_lots,
)
from cost_basis_engine.logic.weighted_average import calculate_weighted_average

logger = logging.getLogger(__name__)

COMPARISON_METHODS = (CostBasisMethod.FIFO, CostBasisMethod.LIFO, CostBasisMethod.HIFO)


def resolve_method(method: Any) -> CostBasisMethod:
    """Maps a method name to CostBasisMethod, raising UnknownMethodError for anything else."""
    if not CostBasisMethod.is_valid(method):
        raise UnknownMethodError(method)
    return CostBasisMethod(method)


def calculate_cost_basis(request: DisposalRequest, lots: Sequence[Lot]) -> CostBasisResult:
    """
    Computes which lots a disposal consumes and the cost basis attributed to it.
    The lots are not modified; apply the result with update_lots_after_disposal.
    """
    method = resolve_method(request.method)
    logger.debug(f"Cost basis: {method.value} disposal of {request.quantity} {request.asset_symbol} on {request.disposal_date} (as_of={request.as_of_date}).")

    if method == CostBasisMethod.SPECIFIC_ID and not request.specific_lot_ids:
        raise SpecificLotIdsRequiredError()

    with localcontext() as ctx:
        ctx.prec = settings.DECIMAL_PRECISION
        eligible = filter_eligible_lots(lots, request.asset_symbol, request.as_of_date)
        return _calculate_for_method(
            method,
            eligible,
            request.quantity,
            asset_symbol=request.asset_symbol,
            specific_lot_ids=request.specific_lot_ids
        )


def calculate_all_methods(
    lots: Sequence[Lot],
    quantity: DecimalLike,
    as_of_date: Optional[DateLike] = None,
    asset_symbol: Optional[str] = None
) -> dict[CostBasisMethod, Decimal]:
    """
    Runs FIFO, LIFO and HIFO against the same lots and returns each total cost basis,
    keyed by method. Nothing is mutated.
    """
    quantity = to_decimal(quantity)
    if quantity <= 0:
        raise InvalidQuantityError(quantity)
    cutoff = parse_calendar_date(as_of_date) if as_of_date is not None else None

    with localcontext() as ctx:
        ctx.prec = settings.DECIMAL_PRECISION
        eligible = filter_eligible_lots(lots, asset_symbol, cutoff)
        totals = {
            method: _calculate_for_method(method, eligible, quantity, asset_symbol=asset_symbol).total_cost_basis
            for method in COMPARISON_METHODS
        }
    logger.debug(f"Method comparison for {quantity}: {[(m.value, str(t)) for m, t in totals.items()]}")
    return totals


def _calculate_for_method(
    method: CostBasisMethod,
    eligible: Sequence[Lot],
    quantity: Decimal,
    asset_symbol: Optional[str] = None,
    specific_lot_ids: Optional[Sequence[str]] = None
) -> CostBasisResult:
    if quantity <= 0:
        raise InvalidQuantityError(quantity)

    if not eligible:
        detail = f"no open lots of '{asset_symbol}'" if asset_symbol else "no open lots"
        logger.warning(f"Cost basis: {detail}.")
        raise NoMatchingLotsError(detail)

    if method == CostBasisMethod.AVG_COST:
        available = sum((lot.remaining_quantity for lot in eligible), Decimal(0))
        if quantity > available:
            raise InsufficientQuantityError(quantity, available, asset_symbol)
        return _average_cost_result(eligible, quantity)

    if method == CostBasisMethod.SPECIFIC_ID:
        ordered = order_specific_lots(eligible, specific_lot_ids)
    else:
        ordered = order_lots(eligible, method)

    available = sum((lot.remaining_quantity for lot in ordered), Decimal(0))
    if quantity > available:
        logger.warning(f"Cost basis: requested {quantity} exceeds available {available} for '{asset_symbol}'.")
        raise InsufficientQuantityError(quantity, available, asset_symbol)

    lots_used: list[LotUsage] = []
    total_cost_basis = Decimal(0)
    for lot, quantity_used in allocate(ordered, quantity):
        cost_basis = quantity_used * lot.cost_per_unit
        total_cost_basis += cost_basis
        lots_used.append(LotUsage(
            lot_id=lot.lot_id,
            acquired_date=lot.acquisition_date,
            quantity_used=quantity_used,
            cost_basis=cost_basis,
            cost_per_unit=lot.cost_per_unit
        ))

    logger.debug(f"{method.value}: total cost basis {total_cost_basis} across {[u.lot_id for u in lots_used]}.")
    return CostBasisResult(
        total_cost_basis=total_cost_basis,
        average_cost_per_unit=total_cost_basis / quantity,
        lots_used=lots_used,
        method=method
    )


def _average_cost_result(eligible: Sequence[Lot], quantity: Decimal) -> CostBasisResult:
    """
    Prices the whole quantity at the weighted average and draws every eligible lot
    down in proportion to its share of the total remaining quantity.
    """
    total_cost = sum((lot.remaining_quantity * lot.cost_per_unit for lot in eligible), Decimal(0))
    total_remaining = sum((lot.remaining_quantity for lot in eligible), Decimal(0))
    average_cost = calculate_weighted_average(eligible)
    shares = _proportional_shares(eligible, quantity)

    lots_used = [
        LotUsage(
            lot_id=lot.lot_id,
            acquired_date=lot.acquisition_date,
            quantity_used=share,
            cost_basis=share * total_cost / total_remaining,
            cost_per_unit=average_cost
        )
        for lot, share in zip(eligible, shares)
        if share > 0
    ]
    # Multiply before dividing; a full disposal equals the cost held exactly
    total_cost_basis = quantity * total_cost / total_remaining
    logger.debug(f"AvgCost: {quantity} at {average_cost} = {total_cost_basis}, spread over {[u.lot_id for u in lots_used]}.")
    return CostBasisResult(
        total_cost_basis=total_cost_basis,
        average_cost_per_unit=average_cost,
        lots_used=lots_used,
        method=CostBasisMethod.AVG_COST
    )


def _proportional_shares(lots: Sequence[Lot], quantity: Decimal) -> list[Decimal]:
    step = Decimal(1).scaleb(-settings.QUANTITY_DECIMAL_PLACES)
    total_remaining = sum((lot.remaining_quantity for lot in lots), Decimal(0))

    shares = [
        min(
            (quantity * lot.remaining_quantity / total_remaining).quantize(step, rounding=ROUND_DOWN),
            lot.remaining_quantity
        )
        for lot in lots
    ]

    # Rounding residual goes to the last-listed lots first, never past what a lot holds
    residual = quantity - sum(shares, Decimal(0))
    for index in reversed(range(len(lots))):
        if residual <= 0:
            break
        extra = min(lots[index].remaining_quantity - shares[index], residual)
        shares[index] += extra
        residual -= extra
    return shares
