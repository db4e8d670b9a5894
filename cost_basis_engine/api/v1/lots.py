# cost_basis_engine/api/v1/lots.py

from fastapi import APIRouter, Depends

from cost_basis_engine.api.v1.dependencies import get_lot_parser, parse_lots_or_reject
from cost_basis_engine.core.models.request import ApplyDisposalRequest, LotsPayload
from cost_basis_engine.core.models.response import ApplyDisposalResponse, ErrorResponse, WeightedAverageResponse
from cost_basis_engine.core.models.summary import LotValidationResult
from cost_basis_engine.logic.disposition_engine import update_lots_after_disposal
from cost_basis_engine.logic.lot_validator import validate_lots
from cost_basis_engine.logic.parser import LotParser
from cost_basis_engine.logic.weighted_average import calculate_weighted_average

router = APIRouter()

@router.post(
    "/apply-disposal",
    response_model=ApplyDisposalResponse,
    responses={422: {"model": ErrorResponse}},
    summary="Apply a computed disposal to a lot snapshot",
    description="Reduces the remaining quantity of every lot used by the disposal result "
                "and returns the new snapshot for the ledger to persist."
)
async def apply_disposal_endpoint(
    payload: ApplyDisposalRequest,
    parser: LotParser = Depends(get_lot_parser)
) -> ApplyDisposalResponse:
    lots = parse_lots_or_reject(parser, payload.lots)
    return ApplyDisposalResponse(lots=update_lots_after_disposal(lots, payload.result))


@router.post(
    "/validate",
    response_model=LotValidationResult,
    summary="Audit a lot snapshot",
    description="Reports every quantity, cost and date inconsistency found in the lots."
)
async def validate_lots_endpoint(
    payload: LotsPayload,
    parser: LotParser = Depends(get_lot_parser)
) -> LotValidationResult:
    lots = parse_lots_or_reject(parser, payload.lots)
    return validate_lots(lots)


@router.post(
    "/weighted-average",
    response_model=WeightedAverageResponse,
    summary="Weighted average cost of open lots"
)
async def weighted_average_endpoint(
    payload: LotsPayload,
    parser: LotParser = Depends(get_lot_parser)
) -> WeightedAverageResponse:
    lots = parse_lots_or_reject(parser, payload.lots)
    return WeightedAverageResponse(cost_per_unit=calculate_weighted_average(lots))
