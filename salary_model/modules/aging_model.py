"""
Aging Model
===========
Position-specific aging curves expressed as DARKO deltas per year.

Aging is a rating delta rather than a multiplier: DARKO can be negative, and
deltas add up the same way on both sides of zero.

Functions:
• Position code → aging category (guard / wing / big, default wing)
• Full-year delta at an age
• Partial-year delta for the season in progress
• Cumulative delta over several seasons
"""

from __future__ import annotations

import math
from typing import Optional, Union

from salary_model.models.valuation_config import ValuationConfig, get_default_valuation_config
from salary_model.modules.model_types import PositionCategory
from salary_model.modules.season_clock import current_season_progress

Position = Union[PositionCategory, str, None]


def normalize_position_code(code: Optional[str]) -> str:
    """``"PG"``, ``"pg"`` and ``"pg_pos"`` all normalize to ``"pg_pos"``."""
    token = str(code or "").strip().lower()
    if token and not token.endswith("_pos"):
        token = f"{token}_pos"
    return token


class AgingModel:
    """Aging curve lookups bound to one valuation config."""

    def __init__(self, config: Optional[ValuationConfig] = None):
        self.config = config or get_default_valuation_config()

    def category_for(self, position: Position) -> PositionCategory:
        if isinstance(position, PositionCategory):
            return position
        raw = str(position or "").strip().lower()
        try:
            return PositionCategory(raw)
        except ValueError:
            pass
        return self.config.position_categories.get(normalize_position_code(raw), self.config.default_category)

    def clamp_age(self, age: float) -> int:
        return max(self.config.min_age, min(self.config.max_age, int(math.floor(age))))

    def full_year_delta(self, age: float, position: Position) -> float:
        """Expected DARKO change over one full year starting at ``age``."""
        curve = self.config.aging_curves[self.category_for(position)]
        return curve[self.clamp_age(age)]

    def partial_year_delta(self, age: float, position: Position, progress: Optional[float] = None) -> float:
        """
        Share of this season's delta already realized.

        ``progress`` defaults to the season progress at the config's data
        snapshot date.
        """
        if progress is None:
            progress = current_season_progress(self.config.season)
        return self.full_year_delta(age, position) * progress

    def cumulative_delta(
        self,
        current_age: float,
        position: Position,
        years_forward: int,
        include_current_partial_year: bool = False,
        progress: Optional[float] = None,
    ) -> float:
        total = 0.0
        if include_current_partial_year:
            total += self.partial_year_delta(current_age, position, progress)
        for i in range(years_forward):
            total += self.full_year_delta(current_age + i, position)
        return total

    def position_label(self, position: Optional[str]) -> str:
        code = normalize_position_code(position)
        return self.config.position_labels.get(code, str(position or "").upper())
