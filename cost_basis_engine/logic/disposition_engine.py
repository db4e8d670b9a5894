# cost_basis_engine/logic/disposition_engine.py

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Optional, Sequence

from cost_basis_engine.core.config.settings import settings
from cost_basis_engine.core.exceptions import LotConsistencyError
from cost_basis_engine.core.models.disposal import CostBasisResult
from cost_basis_engine.core.models.lot import Lot

logger = logging.getLogger(__name__)


def update_lots_after_disposal(
    lots: Sequence[Lot],
    result: CostBasisResult,
    strict: Optional[bool] = None
) -> list[Lot]:
    """
    Applies a computed disposal to a lot collection.

    Returns a new list in the input order. Every lot referenced in
    result.lots_used is replaced by a copy with its remaining quantity reduced;
    other lots are returned as they are. The input lots are never modified.

    Args:
        lots: The lot snapshot the result was computed against.
        result: Output of calculate_cost_basis (or a hand-built equivalent).
        strict: Raise LotConsistencyError when the result references an unknown
            lot or would drive a lot below zero. Defaults to settings.STRICT_LOT_UPDATES.
            When not strict, the problem is logged and the lot is clamped at zero.

    Returns:
        A new list of lots.
    """
    if strict is None:
        strict = settings.STRICT_LOT_UPDATES

    used_by_lot: dict[str, Decimal] = defaultdict(Decimal)
    for usage in result.lots_used:
        used_by_lot[usage.lot_id] += usage.quantity_used

    known_ids = {lot.lot_id for lot in lots}
    unknown_ids = [lot_id for lot_id in used_by_lot if lot_id not in known_ids]
    if unknown_ids:
        message = f"Disposal references lots not in the collection: {unknown_ids}"
        if strict:
            raise LotConsistencyError(message, context={"lot_ids": unknown_ids})
        logger.warning(f"{message}. Ignoring them.")

    updated_lots: list[Lot] = []
    for lot in lots:
        used = used_by_lot.get(lot.lot_id)
        if used is None:
            updated_lots.append(lot)
            continue

        new_remaining = lot.remaining_quantity - used
        if new_remaining < 0:
            message = (f"Lot {lot.lot_id}: disposing {used} exceeds remaining quantity "
                       f"{lot.remaining_quantity}")
            if strict:
                raise LotConsistencyError(message, context={"lot_id": lot.lot_id})
            logger.warning(f"{message}. Clamping remaining quantity to 0.")
            new_remaining = Decimal(0)

        logger.debug(f"Lot {lot.lot_id}: remaining {lot.remaining_quantity} -> {new_remaining}.")
        updated_lots.append(lot.model_copy(update={"remaining_quantity": new_remaining}))

    return updated_lots
