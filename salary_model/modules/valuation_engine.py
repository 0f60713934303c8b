"""
Valuation Engine
================
Converts playing time and impact into a fair-market salary (millions).

Core formula:
  wins  = (games × minutes / MINUTES_BASELINE) × (DARKO − REPLACEMENT_LEVEL)
  value = wins × WIN_COST

Star / replacement adjustment:
  boost = min(CAP, (|DARKO| / DIVISOR) ^ EXPONENT × CAP)
  positive DARKO → × (1 + boost), negative DARKO → × (1 − boost)

Anything under the minimum-salary threshold is reported as SalaryFloor.MINIMUM.
"""

from __future__ import annotations

from typing import Optional

from salary_model.models.valuation_config import (
    SalaryConstants,
    ValuationConfig,
    get_default_valuation_config,
)
from salary_model.modules.model_types import SalaryFloor, SalaryValue


def wins_above_replacement(games: float, minutes: float, rating: float, constants: SalaryConstants) -> float:
    return (games * minutes / constants.minutes_baseline) * (rating - constants.replacement_level_rating)


def star_boost(rating: float, constants: SalaryConstants) -> float:
    """Size of the star bonus / replacement penalty, never above the cap."""
    raw = (abs(rating) / constants.bonus_divisor) ** constants.bonus_exponent * constants.mvp_bonus_cap
    return min(raw, constants.mvp_bonus_cap)


def adjustment_factor(rating: float, constants: SalaryConstants) -> float:
    boost = star_boost(rating, constants)
    if rating > 0:
        return 1 + boost
    if rating < 0:
        return 1 - boost
    return 1.0


def calculate_salary(
    games: float,
    minutes: float,
    rating: float,
    constants: Optional[SalaryConstants] = None,
) -> SalaryValue:
    """
    Fair salary in millions, rounded to 0.1, or SalaryFloor.MINIMUM.

    Inputs are used as given; range checks belong to the caller.
    """
    constants = constants or get_default_valuation_config().salary

    salary = wins_above_replacement(games, minutes, rating, constants) * constants.win_cost_millions
    salary *= adjustment_factor(rating, constants)

    if salary < constants.minimum_salary_threshold:
        return SalaryFloor.MINIMUM
    return round(salary, 1)


class ValuationEngine:
    """Salary valuation bound to one valuation config."""

    def __init__(self, config: Optional[ValuationConfig] = None):
        self.config = config or get_default_valuation_config()
        self.constants = self.config.salary

    def valuate(self, games: float, minutes: float, rating: float) -> SalaryValue:
        return calculate_salary(games, minutes, rating, self.constants)

    def rating_tier(self, rating: float) -> str:
        for tier in self.config.rating_tiers:
            if rating >= tier.threshold:
                return tier.label
        return self.config.rating_tiers[-1].label
