# cost_basis_engine/logic/lot_validator.py

import logging
from decimal import Decimal
from typing import Optional, Sequence

from cost_basis_engine.core.config.settings import settings
from cost_basis_engine.core.exceptions import InvalidDateError
from cost_basis_engine.core.models.lot import Lot
from cost_basis_engine.core.models.summary import LotValidationResult
from cost_basis_engine.core.numbers import parse_calendar_date

logger = logging.getLogger(__name__)


def validate_lots(lots: Sequence[Lot], cost_tolerance: Optional[Decimal] = None) -> LotValidationResult:
    """
    Audits a lot collection and reports every violation found.

    Checks, run independently for every lot:
    1. lot ID already used by an earlier lot.
    2. remaining quantity exceeds the original quantity.
    3. remaining quantity is negative.
    4. acquisition cost differs from quantity * cost per unit by more than the tolerance.
    5. acquisition date is not a valid calendar date.

    Nothing is raised for bad data; the caller gets every message, including
    repeats for lots that share an ID.
    """
    tolerance = settings.COST_TOLERANCE if cost_tolerance is None else cost_tolerance
    errors: list[str] = []
    seen_ids: set[str] = set()

    for lot in lots:
        if lot.lot_id in seen_ids:
            errors.append(f"Lot {lot.lot_id}: Duplicate lot ID")
        seen_ids.add(lot.lot_id)

        if lot.remaining_quantity > lot.quantity:
            errors.append(
                f"Lot {lot.lot_id}: Remaining quantity {lot.remaining_quantity} exceeds total quantity {lot.quantity}"
            )

        if lot.remaining_quantity < 0:
            errors.append(f"Lot {lot.lot_id}: Negative remaining quantity {lot.remaining_quantity}")

        expected_cost = lot.quantity * lot.cost_per_unit
        if abs(lot.acquisition_cost - expected_cost) > tolerance:
            errors.append(
                f"Lot {lot.lot_id}: Cost mismatch: acquisition cost {lot.acquisition_cost} != "
                f"quantity {lot.quantity} x cost per unit {lot.cost_per_unit} ({expected_cost})"
            )

        try:
            parse_calendar_date(lot.acquisition_date)
        except InvalidDateError:
            errors.append(f"Lot {lot.lot_id}: Invalid acquisition date '{lot.acquisition_date}'")

    if errors:
        logger.warning(f"Lot validation found {len(errors)} problem(s) across {len(lots)} lots checked.")
    return LotValidationResult(is_valid=not errors, errors=errors)
