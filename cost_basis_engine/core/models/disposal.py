# cost_basis_engine/core/models/disposal.py

from datetime import date
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from cost_basis_engine.core.config.settings import settings
from cost_basis_engine.core.enums.cost_method import CostBasisMethod
from cost_basis_engine.core.models.lot import Lot
from cost_basis_engine.core.numbers import DecimalString


class DisposalRequest(BaseModel):
    """
    Describes a sale, exchange or consumption of an asset.
    The method is accepted as free text and resolved when the cost basis is
    calculated, so an unsupported value surfaces as UnknownMethodError.
    """
    asset_symbol: str = Field(..., alias="assetSymbol", description="Asset whose lots are drawn from")
    quantity: DecimalString = Field(..., gt=0, description="Quantity being disposed")
    disposal_date: date = Field(..., alias="disposalDate", description="Date of the disposal")
    method: Union[CostBasisMethod, str] = Field(
        default_factory=lambda: settings.DEFAULT_COST_BASIS_METHOD,
        description="FIFO, LIFO, HIFO, SpecificID or AvgCost"
    )
    specific_lot_ids: Optional[list[str]] = Field(None, alias="specificLotIds", description="Lots to draw from, in order (SpecificID only)")
    as_of_date: Optional[date] = Field(None, alias="asOfDate", description="Only lots acquired on or before this date are eligible")

    model_config = ConfigDict(populate_by_name=True)


class LotUsage(BaseModel):
    """One lot's share of a disposal."""
    lot_id: str = Field(..., alias="lotId")
    acquired_date: Optional[str] = Field(None, alias="acquiredDate")
    quantity_used: DecimalString = Field(..., alias="quantityUsed")
    cost_basis: DecimalString = Field(..., alias="costBasis")
    cost_per_unit: Optional[DecimalString] = Field(None, alias="costPerUnit")

    model_config = ConfigDict(populate_by_name=True)


class CostBasisResult(BaseModel):
    """
    Output of the cost basis calculator.
    lots_used is in selection order and its quantities sum to the requested quantity.
    """
    total_cost_basis: DecimalString = Field(..., alias="totalCostBasis")
    average_cost_per_unit: DecimalString = Field(..., alias="averageCostPerUnit")
    lots_used: list[LotUsage] = Field(default_factory=list, alias="lotsUsed")
    method: Optional[CostBasisMethod] = Field(None, description="Method the result was computed with")

    model_config = ConfigDict(populate_by_name=True)


class LotDisposal(BaseModel):
    """Realized outcome of disposing part (or all) of a single lot."""
    lot_id: str = Field(..., alias="lotId")
    acquired_date: Optional[str] = Field(None, alias="acquiredDate")
    disposal_date: date = Field(..., alias="disposalDate")
    quantity_disposed: DecimalString = Field(..., alias="quantityDisposed")
    proceeds: DecimalString
    cost_basis: DecimalString = Field(..., alias="costBasis")
    gain_loss: DecimalString = Field(..., alias="gainLoss")
    holding_period_days: Optional[int] = Field(None, alias="holdingPeriodDays")
    is_long_term: Optional[bool] = Field(None, alias="isLongTerm")

    model_config = ConfigDict(populate_by_name=True)


class GainLossResult(BaseModel):
    gain_loss: DecimalString = Field(..., alias="gainLoss")
    is_gain: bool = Field(..., alias="isGain", description="True for zero as well as positive results")

    model_config = ConfigDict(populate_by_name=True)


class HoldingPeriod(BaseModel):
    days: int
    is_long_term: bool = Field(..., alias="isLongTerm")

    model_config = ConfigDict(populate_by_name=True)


class DisposalReport(BaseModel):
    """Everything produced by realizing one disposal."""
    cost_basis: CostBasisResult = Field(..., alias="costBasis")
    proceeds: DecimalString
    gain_loss: GainLossResult = Field(..., alias="gainLoss")
    disposals: list[LotDisposal] = Field(default_factory=list)
    updated_lots: list[Lot] = Field(default_factory=list, alias="updatedLots")

    model_config = ConfigDict(populate_by_name=True)
