# cost_basis_engine/logic/holding_period.py

from typing import Optional

from cost_basis_engine.core.config.settings import settings
from cost_basis_engine.core.models.disposal import HoldingPeriod
from cost_basis_engine.core.numbers import DateLike, parse_calendar_date


def calculate_holding_period(
    acquisition_date: DateLike,
    disposal_date: DateLike,
    long_term_days: Optional[int] = None
) -> HoldingPeriod:
    """
    Counts calendar days from acquisition to disposal and classifies the term.
    Long-term means strictly more than the threshold (365 by default), so a lot
    held exactly one non-leap year is still short-term.
    """
    threshold = settings.LONG_TERM_HOLDING_PERIOD_DAYS if long_term_days is None else long_term_days
    days = (parse_calendar_date(disposal_date) - parse_calendar_date(acquisition_date)).days
    return HoldingPeriod(days=days, is_long_term=days > threshold)
