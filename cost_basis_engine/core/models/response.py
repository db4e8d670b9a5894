# cost_basis_engine/core/models/response.py

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from cost_basis_engine.core.models.lot import Lot
from cost_basis_engine.core.numbers import DecimalString

class ErroredLot(BaseModel):
    """
    Represents a lot that could not be used, along with the reason.
    """
    lot_id: str = Field(..., alias="lotId", description="The ID of the lot that failed.")
    error_reason: str = Field(..., alias="errorReason", description="Why the lot was rejected.")

    model_config = ConfigDict(populate_by_name=True)


class ApplyDisposalResponse(BaseModel):
    lots: List[Lot] = Field(..., description="Lot snapshot after the disposal")


class WeightedAverageResponse(BaseModel):
    cost_per_unit: DecimalString = Field(..., alias="costPerUnit")

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    """
    Body returned for rejected calculations.
    """
    error: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable reason")
    context: dict = Field(default_factory=dict)
    errored_lots: List[ErroredLot] = Field(default_factory=list, alias="erroredLots")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "error": "INSUFFICIENT_QUANTITY",
                "message": "Insufficient quantity of 'BTC': requested 10.0, available 3.0",
                "context": {"requested": "10.0", "available": "3.0", "asset_symbol": "BTC"},
                "erroredLots": []
            }
        }
    )
