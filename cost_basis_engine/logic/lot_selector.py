# cost_basis_engine/logic/lot_selector.py

import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Optional, Sequence

from cost_basis_engine.core.enums.cost_method import CostBasisMethod
from cost_basis_engine.core.exceptions import (
    InsufficientQuantityError,
    NoMatchingLotsError,
    SpecificLotIdsRequiredError,
)
from cost_basis_engine.core.models.lot import Lot

logger = logging.getLogger(__name__)


def filter_eligible_lots(
    lots: Sequence[Lot],
    asset_symbol: Optional[str] = None,
    as_of_date: Optional[date] = None
) -> list[Lot]:
    """
    Returns the lots a disposal may draw from: matching asset, still open,
    and acquired on or before as_of_date when one is given.
    Input order is preserved.
    """
    eligible = [
        lot for lot in lots
        if (asset_symbol is None or lot.asset_symbol == asset_symbol)
        and not lot.is_closed
        and (as_of_date is None or lot.acquired_on <= as_of_date)
    ]
    logger.debug(f"Eligible lots for asset={asset_symbol}, as_of={as_of_date}: {[lot.lot_id for lot in eligible]}")
    return eligible


def _fifo_key(lot: Lot):
    return (lot.acquired_on, lot.lot_id)


def _lifo_key(lot: Lot):
    # Newest first, lot_id ascending within a day
    return (-lot.acquired_on.toordinal(), lot.lot_id)


def _hifo_key(lot: Lot):
    return (-lot.cost_per_unit, lot.acquired_on, lot.lot_id)


_ORDERINGS: dict[CostBasisMethod, Callable[[Lot], tuple]] = {
    CostBasisMethod.FIFO: _fifo_key,
    CostBasisMethod.LIFO: _lifo_key,
    CostBasisMethod.HIFO: _hifo_key,
}


def order_lots(lots: Sequence[Lot], method: CostBasisMethod) -> list[Lot]:
    """
    Orders lots for FIFO, LIFO or HIFO selection.

    Sorting Rules:
    1. FIFO: acquisition date ascending, then lot_id.
    2. LIFO: acquisition date descending, then lot_id.
    3. HIFO: cost per unit descending, then acquisition date ascending, then lot_id.
    """
    try:
        key = _ORDERINGS[method]
    except KeyError:
        raise ValueError(f"{method} is not an ordering method") from None
    ordered = sorted(lots, key=key)
    logger.debug(f"{method.value} order: {[lot.lot_id for lot in ordered]}")
    return ordered


def order_specific_lots(lots: Sequence[Lot], specific_lot_ids: Optional[Sequence[str]]) -> list[Lot]:
    """
    Picks lots strictly in the order the caller named them.
    Repeated ids are used once. Every id must be among the given (eligible) lots.
    """
    if not specific_lot_ids:
        raise SpecificLotIdsRequiredError()

    by_id = {lot.lot_id: lot for lot in lots}
    requested_ids = list(dict.fromkeys(specific_lot_ids))
    missing = [lot_id for lot_id in requested_ids if lot_id not in by_id]
    if missing:
        logger.warning(f"SpecificID: lots {missing} are not among eligible lots {list(by_id)}.")
        raise NoMatchingLotsError(
            f"lot IDs {', '.join(missing)} are not available for disposal",
            missing_lot_ids=missing
        )
    return [by_id[lot_id] for lot_id in requested_ids]


def allocate(ordered_lots: Sequence[Lot], quantity: Decimal) -> list[tuple[Lot, Decimal]]:
    """
    Greedily consumes quantity from the ordered lots.
    Returns (lot, quantity_used) pairs covering exactly `quantity`, or raises
    InsufficientQuantityError without returning anything partial.
    """
    still_needed = quantity
    allocations: list[tuple[Lot, Decimal]] = []

    for lot in ordered_lots:
        if still_needed <= 0:
            break
        used = min(lot.remaining_quantity, still_needed)
        if used <= 0:
            continue
        allocations.append((lot, used))
        still_needed -= used
        logger.debug(f"  Allocated {used} from {lot.lot_id} (remaining before: {lot.remaining_quantity}). Still needed: {still_needed}.")

    if still_needed > 0:
        available = quantity - still_needed
        logger.warning(f"Allocation failed: requested {quantity}, available {available}.")
        raise InsufficientQuantityError(quantity, available)

    return allocations
