# cost_basis_engine/core/exceptions.py

"""Error taxonomy for cost basis calculations.

Every error here is a caller-input error: nothing is transient and nothing is
retried. All of them derive from ``ValueError`` so callers that only care about
"bad input" can catch that.
"""

from typing import Any, Optional

from cost_basis_engine.core.enums.cost_method import CostBasisMethod


class CostBasisError(ValueError):
    """Base class for all cost basis calculation errors."""

    error_code: str = "COST_BASIS_ERROR"

    def __init__(self, message: str, *, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert the error to a dictionary for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
        }


class InsufficientQuantityError(CostBasisError):
    """Raised when eligible lots cannot cover the requested disposal quantity."""

    error_code = "INSUFFICIENT_QUANTITY"

    def __init__(self, requested, available, asset_symbol: Optional[str] = None):
        where = f" of '{asset_symbol}'" if asset_symbol else ""
        super().__init__(
            f"Insufficient quantity{where}: requested {requested}, available {available}",
            context={
                "requested": str(requested),
                "available": str(available),
                "asset_symbol": asset_symbol,
            },
        )


class InvalidQuantityError(CostBasisError):
    """Raised when a disposal quantity is zero or negative."""

    error_code = "INVALID_QUANTITY"

    def __init__(self, quantity: Any):
        super().__init__(
            f"Disposal quantity must be positive, got {quantity}",
            context={"quantity": str(quantity)},
        )


class UnknownMethodError(CostBasisError):
    """Raised when a disposal names a method that is not supported."""

    error_code = "UNKNOWN_METHOD"

    def __init__(self, method: Any):
        super().__init__(
            f"Unknown cost basis method: {method}",
            context={"method": str(method), "supported": CostBasisMethod.list()},
        )


class SpecificLotIdsRequiredError(CostBasisError):
    """Raised when the SpecificID method is used without any lot IDs."""

    error_code = "SPECIFIC_LOT_IDS_REQUIRED"

    def __init__(self):
        super().__init__("Specific lot IDs required for SpecificID method")


class NoMatchingLotsError(CostBasisError):
    """Raised when no eligible lot matches the disposal."""

    error_code = "NO_MATCHING_LOTS"

    def __init__(self, detail: str, missing_lot_ids: Optional[list[str]] = None):
        super().__init__(
            f"No matching lots found: {detail}",
            context={"missing_lot_ids": missing_lot_ids or []},
        )


class InvalidDateError(CostBasisError):
    """Raised when a value cannot be read as a calendar date."""

    error_code = "INVALID_DATE"

    def __init__(self, value: Any):
        super().__init__(
            f"Invalid date: {value!r}",
            context={"value": str(value)},
        )


class LotConsistencyError(CostBasisError):
    """Raised when applying a disposal would leave the lot collection inconsistent."""

    error_code = "LOT_CONSISTENCY"
