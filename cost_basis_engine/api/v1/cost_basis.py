# cost_basis_engine/api/v1/cost_basis.py

from fastapi import APIRouter, Depends

from cost_basis_engine.api.v1.dependencies import get_lot_parser, parse_lots_or_reject
from cost_basis_engine.core.models.disposal import CostBasisResult
from cost_basis_engine.core.models.request import CostBasisRequest, MethodComparisonRequest
from cost_basis_engine.core.models.response import ErrorResponse
from cost_basis_engine.core.numbers import to_decimal_string
from cost_basis_engine.logic.cost_calculator import calculate_all_methods, calculate_cost_basis
from cost_basis_engine.logic.parser import LotParser

router = APIRouter()

@router.post(
    "",
    response_model=CostBasisResult,
    responses={422: {"model": ErrorResponse}},
    summary="Calculate the cost basis of a disposal",
    description="Selects lots for the disposal with the requested method (FIFO, LIFO, HIFO, "
                "SpecificID or AvgCost) and returns the per-lot allocation and total cost basis. "
                "Lots are not modified."
)
async def calculate_cost_basis_endpoint(
    payload: CostBasisRequest,
    parser: LotParser = Depends(get_lot_parser)
) -> CostBasisResult:
    lots = parse_lots_or_reject(parser, payload.lots)
    return calculate_cost_basis(payload.request, lots)


@router.post(
    "/compare",
    response_model=dict[str, str],
    responses={422: {"model": ErrorResponse}},
    summary="Compare FIFO, LIFO and HIFO",
    description="Returns the total cost basis each ordering method would produce for the same quantity."
)
async def compare_methods_endpoint(
    payload: MethodComparisonRequest,
    parser: LotParser = Depends(get_lot_parser)
) -> dict[str, str]:
    lots = parse_lots_or_reject(parser, payload.lots)
    totals = calculate_all_methods(
        lots,
        payload.quantity,
        as_of_date=payload.as_of_date,
        asset_symbol=payload.asset_symbol
    )
    return {method.value: to_decimal_string(total) for method, total in totals.items()}
