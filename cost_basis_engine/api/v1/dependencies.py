# cost_basis_engine/api/v1/dependencies.py

from typing import Any

from fastapi import HTTPException, status

from cost_basis_engine.core.models.lot import Lot
from cost_basis_engine.core.models.response import ErrorResponse
from cost_basis_engine.logic.error_reporter import ErrorReporter
from cost_basis_engine.logic.parser import LotParser
from cost_basis_engine.services.disposal_processor import DisposalProcessor


def get_lot_parser() -> LotParser:
    """
    Provides a LotParser with its own ErrorReporter, so nothing is shared between requests.
    """
    return LotParser(error_reporter=ErrorReporter())


def get_disposal_processor() -> DisposalProcessor:
    return DisposalProcessor()


def parse_lots_or_reject(parser: LotParser, raw_lots: list[dict[str, Any]]) -> list[Lot]:
    """
    Parses the request's lots. Any malformed lot rejects the whole request with 422,
    listing every bad lot.
    """
    lots = parser.parse_lots(raw_lots)
    reporter = parser.error_reporter

    if reporter.has_errors():
        body = ErrorResponse(
            error="INVALID_LOTS",
            message=f"{len(reporter.get_errors())} lot(s) failed validation",
            errored_lots=reporter.get_errors()
        )
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=body.model_dump(mode="json", by_alias=True)
        )
    return lots
