# cost_basis_engine/logic/parser.py

import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from cost_basis_engine.core.models.lot import Lot
from cost_basis_engine.logic.error_reporter import ErrorReporter

logger = logging.getLogger(__name__)

UNKNOWN_LOT_ID = "UNKNOWN_LOT_ID"

class LotParser:
    """
    Parses raw lot dictionaries (as stored by the ledger) into validated Lot objects.
    Lots that fail validation are left out of the result and reported to the
    shared ErrorReporter under their lot ID.
    """
    def __init__(self, error_reporter: ErrorReporter):
        self._lot_adapter = TypeAdapter(Lot)
        self._error_reporter = error_reporter

    @property
    def error_reporter(self) -> ErrorReporter:
        return self._error_reporter

    def parse_lots(self, raw_lots: list[dict[str, Any]]) -> list[Lot]:
        parsed_lots: list[Lot] = []

        for index, raw_lot in enumerate(raw_lots):
            if not isinstance(raw_lot, dict):
                self._error_reporter.add_error(f"{UNKNOWN_LOT_ID}[{index}]", f"Expected an object, got {type(raw_lot).__name__}")
                continue

            lot_id = raw_lot.get("lotId", raw_lot.get("lot_id")) or f"{UNKNOWN_LOT_ID}[{index}]"
            try:
                parsed_lots.append(self._lot_adapter.validate_python(raw_lot))
            except ValidationError as e:
                error_messages = "; ".join(
                    f"{'.'.join(str(part) for part in err['loc']) or 'lot'}: {err['msg']}" for err in e.errors()
                )
                logger.warning(f"LotParser: lot {lot_id} failed validation: {error_messages}")
                self._error_reporter.add_error(str(lot_id), f"Validation error: {error_messages}")

        logger.debug(f"LotParser: parsed {len(parsed_lots)} of {len(raw_lots)} lots.")
        return parsed_lots
