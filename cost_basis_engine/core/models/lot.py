# cost_basis_engine/core/models/lot.py

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cost_basis_engine.core.numbers import DecimalString, parse_calendar_date


class Lot(BaseModel):
    """
    A discrete acquisition of a fungible asset at a specific cost.
    Quantities and costs are Decimals; the acquisition date is kept as the ISO
    string it arrived as so malformed records can still be audited by the validator.
    """
    lot_id: str = Field(..., alias="lotId", description="Unique identifier of the lot")
    acquisition_date: str = Field(..., alias="acquisitionDate", description="Acquisition date (ISO 8601)")
    quantity: DecimalString = Field(..., description="Originally acquired quantity")
    remaining_quantity: Optional[DecimalString] = Field(None, alias="remainingQuantity", description="Quantity not yet disposed; defaults to quantity")
    acquisition_cost: Optional[DecimalString] = Field(None, alias="acquisitionCost", description="Total cost of the full quantity")
    cost_per_unit: Optional[DecimalString] = Field(None, alias="costPerUnit", description="Unit cost, acquisition_cost / quantity")
    asset_symbol: str = Field(..., alias="assetSymbol", description="Ticker of the asset held in this lot")

    # --- Classification / measurement metadata, carried through untouched
    classification: Optional[str] = Field(None, description="Accounting classification, e.g. held-for-investment")
    measurement_basis: Optional[str] = Field(None, alias="measurementBasis")
    fair_value_at_acquisition: Optional[DecimalString] = Field(None, alias="fairValueAtAcquisition")
    current_fair_value: Optional[DecimalString] = Field(None, alias="currentFairValue")
    last_fair_value_update: Optional[str] = Field(None, alias="lastFairValueUpdate")

    model_config = ConfigDict(
        populate_by_name=True,
        extra='allow'
    )

    @field_validator("acquisition_date", "last_fair_value_update", mode="before")
    @classmethod
    def _dates_as_iso_strings(cls, value):
        if isinstance(value, datetime):
            return value.date().isoformat()
        if isinstance(value, date):
            return value.isoformat()
        return value

    @model_validator(mode="after")
    def _fill_derived_amounts(self) -> "Lot":
        if self.remaining_quantity is None:
            self.remaining_quantity = self.quantity
        if self.cost_per_unit is None:
            if self.acquisition_cost is None:
                raise ValueError("Either acquisitionCost or costPerUnit must be provided")
            self.cost_per_unit = self.acquisition_cost / self.quantity if self.quantity != 0 else Decimal(0)
        if self.acquisition_cost is None:
            self.acquisition_cost = self.quantity * self.cost_per_unit
        return self

    @property
    def is_closed(self) -> bool:
        """A lot with nothing remaining is never selected again."""
        return self.remaining_quantity <= 0

    @property
    def acquired_on(self) -> date:
        """Parsed acquisition date. Raises InvalidDateError for malformed data."""
        return parse_calendar_date(self.acquisition_date)
