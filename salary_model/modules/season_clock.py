"""
Season clock: how far into the regular season a given date falls.

The fraction drives the partial-year aging adjustment. Halfway through the
season, half of this year's expected aging delta has already been "banked".
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Optional, Union

from salary_model.models.valuation_config import SeasonWindow

DateLike = Union[date, datetime]


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.replace(tzinfo=None)
    return datetime.combine(value, time())


def season_progress(as_of: DateLike, start: DateLike, end: DateLike) -> float:
    """Fraction of the season elapsed at ``as_of``, clamped to [0, 1]."""
    start_dt = _as_datetime(start)
    duration = (_as_datetime(end) - start_dt).total_seconds()
    elapsed = (_as_datetime(as_of) - start_dt).total_seconds()
    return max(0.0, min(1.0, elapsed / duration))


def current_season_progress(season: SeasonWindow, as_of: Optional[DateLike] = None) -> float:
    return season_progress(as_of or season.data_as_of, season.start_date, season.end_date)


def season_progress_label(progress: float) -> str:
    return f"{round(progress * 100)}%"
