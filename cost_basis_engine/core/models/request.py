# cost_basis_engine/core/models/request.py

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from cost_basis_engine.core.models.disposal import CostBasisResult, DisposalRequest, LotDisposal
from cost_basis_engine.core.numbers import DecimalString

_EXAMPLE_LOTS = [
    {
        "lotId": "lot1",
        "acquisitionDate": "2023-01-15",
        "quantity": "1.0",
        "acquisitionCost": "20000",
        "costPerUnit": "20000",
        "assetSymbol": "BTC"
    },
    {
        "lotId": "lot2",
        "acquisitionDate": "2023-03-20",
        "quantity": "0.5",
        "acquisitionCost": "12500",
        "costPerUnit": "25000",
        "assetSymbol": "BTC"
    }
]


class LotsPayload(BaseModel):
    """
    Base payload carrying a raw lot snapshot. Lots stay raw dictionaries so a
    malformed lot can be reported by ID instead of failing the whole request.
    """
    lots: list[dict[str, Any]] = Field(default_factory=list, description="Lot snapshot supplied by the ledger")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"lots": _EXAMPLE_LOTS}},
        extra='ignore'
    )


class CostBasisRequest(LotsPayload):
    request: DisposalRequest = Field(..., description="The disposal to price")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "request": {
                    "assetSymbol": "BTC",
                    "quantity": "1.0",
                    "disposalDate": "2023-12-01",
                    "method": "HIFO"
                },
                "lots": _EXAMPLE_LOTS
            }
        }
    )


class MethodComparisonRequest(LotsPayload):
    quantity: DecimalString = Field(..., gt=0)
    as_of_date: Optional[date] = Field(None, alias="asOfDate")
    asset_symbol: Optional[str] = Field(None, alias="assetSymbol")


class ApplyDisposalRequest(LotsPayload):
    result: CostBasisResult


class RealizeDisposalRequest(LotsPayload):
    request: DisposalRequest
    proceeds: DecimalString


class HoldingPeriodRequest(BaseModel):
    acquisition_date: date = Field(..., alias="acquisitionDate")
    disposal_date: date = Field(..., alias="disposalDate")

    model_config = ConfigDict(populate_by_name=True)


class GainLossRequest(BaseModel):
    cost_basis: DecimalString = Field(..., alias="costBasis")
    proceeds: DecimalString

    model_config = ConfigDict(populate_by_name=True)


class TaxSummaryRequest(BaseModel):
    disposals: list[LotDisposal] = Field(default_factory=list)
    tax_year: int = Field(..., alias="taxYear")

    model_config = ConfigDict(populate_by_name=True)
