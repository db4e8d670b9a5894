# cost_basis_engine/api/v1/disposals.py

from fastapi import APIRouter, Depends

from cost_basis_engine.api.v1.dependencies import get_disposal_processor, get_lot_parser, parse_lots_or_reject
from cost_basis_engine.core.models.disposal import DisposalReport, GainLossResult, HoldingPeriod
from cost_basis_engine.core.models.request import (
    GainLossRequest,
    HoldingPeriodRequest,
    RealizeDisposalRequest,
    TaxSummaryRequest,
)
from cost_basis_engine.core.models.response import ErrorResponse
from cost_basis_engine.core.models.summary import TaxYearSummary
from cost_basis_engine.logic.gain_loss import calculate_gain_loss
from cost_basis_engine.logic.holding_period import calculate_holding_period
from cost_basis_engine.logic.parser import LotParser
from cost_basis_engine.logic.tax_summary import summarize_tax_year
from cost_basis_engine.services.disposal_processor import DisposalProcessor

router = APIRouter()

@router.post(
    "/realize",
    response_model=DisposalReport,
    responses={422: {"model": ErrorResponse}},
    summary="Realize a disposal",
    description="Calculates the cost basis, overall and per-lot gain/loss and holding periods, "
                "and returns the post-disposal lot snapshot."
)
async def realize_disposal_endpoint(
    payload: RealizeDisposalRequest,
    parser: LotParser = Depends(get_lot_parser),
    processor: DisposalProcessor = Depends(get_disposal_processor)
) -> DisposalReport:
    lots = parse_lots_or_reject(parser, payload.lots)
    return processor.realize(payload.request, lots, payload.proceeds)


@router.post(
    "/holding-period",
    response_model=HoldingPeriod,
    summary="Holding period between acquisition and disposal"
)
async def holding_period_endpoint(payload: HoldingPeriodRequest) -> HoldingPeriod:
    return calculate_holding_period(payload.acquisition_date, payload.disposal_date)


@router.post(
    "/gain-loss",
    response_model=GainLossResult,
    summary="Gain or loss of a disposal"
)
async def gain_loss_endpoint(payload: GainLossRequest) -> GainLossResult:
    return calculate_gain_loss(payload.cost_basis, payload.proceeds)


@router.post(
    "/tax-summary",
    response_model=TaxYearSummary,
    summary="Realized gains and losses for a tax year"
)
async def tax_summary_endpoint(payload: TaxSummaryRequest) -> TaxYearSummary:
    return summarize_tax_year(payload.disposals, payload.tax_year)
