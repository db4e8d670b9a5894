# cost_basis_engine/core/numbers.py

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Union

from pydantic import PlainSerializer

from cost_basis_engine.core.exceptions import InvalidDateError

DecimalLike = Union[Decimal, str, int]
DateLike = Union[date, datetime, str]


def to_decimal(value: Any) -> Decimal:
    """
    Converts a numeric input to Decimal.
    Floats go through str() so 0.1 stays 0.1 instead of its binary expansion.
    NaN and infinities are rejected.
    """
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Not a decimal value: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"Not a finite decimal value: {value!r}")
    return result


def to_decimal_string(value: Decimal) -> str:
    """
    Renders a Decimal without exponent or trailing zeros: 20000.0 -> "20000", 0.50 -> "0.5".
    """
    if value == 0:
        return "0"
    return format(value.normalize(), "f")


def parse_calendar_date(value: DateLike) -> date:
    """
    Reads a calendar date from a date, datetime or ISO 8601 string.
    Datetimes are truncated to their date; time of day never matters here.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            raise InvalidDateError(value) from None
    raise InvalidDateError(value)


# Decimal that serializes to a plain string in JSON mode
DecimalString = Annotated[
    Decimal,
    PlainSerializer(to_decimal_string, return_type=str, when_used="json"),
]
