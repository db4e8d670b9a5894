# cost_basis_engine/logic/weighted_average.py

import logging
from decimal import Decimal
from typing import Sequence

from cost_basis_engine.core.models.lot import Lot

logger = logging.getLogger(__name__)


def calculate_weighted_average(lots: Sequence[Lot]) -> Decimal:
    """
    Average cost per unit across open lots, weighted by remaining quantity.
    Returns Decimal(0) when no lot has anything remaining.
    """
    total_quantity = Decimal(0)
    total_cost = Decimal(0)
    for lot in lots:
        if lot.remaining_quantity <= 0:
            continue
        total_quantity += lot.remaining_quantity
        total_cost += lot.remaining_quantity * lot.cost_per_unit

    if total_quantity == 0:
        logger.debug("Weighted average: no open lots, returning 0.")
        return Decimal(0)

    average = total_cost / total_quantity
    logger.debug(f"Weighted average: total_cost={total_cost}, total_quantity={total_quantity}, average={average}")
    return average
