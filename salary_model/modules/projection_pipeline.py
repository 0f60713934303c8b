"""
Projection Pipeline
===================
Current-season valuation plus five future seasons for one player/scenario.

Effective DARKO:
  current season   = base + manual adjustment + partial-year aging delta
  future season k  = base + manual adjustment + Σ full-year deltas (age .. age+k-1)

The partial-year delta is applied to the current season only. Future seasons
start from the current age with full-year deltas, so the current season's
aging is not counted twice.

Future values are multiplied by the season's cap-inflation scaler (1.0 when
the season has none). Surplus = projected value − contracted salary, only for
seasons with a contract; the running total adds every defined surplus.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from salary_model.models.valuation_config import ValuationConfig, get_default_valuation_config
from salary_model.modules.aging_model import AgingModel
from salary_model.modules.model_types import (
    ComparisonScenario,
    CurrentSeasonValuation,
    PlayerRecord,
    ProjectionResult,
    ProjectionRow,
    SalaryFloor,
    contracted_salary,
    is_minimum,
    salary_amount,
)
from salary_model.modules.season_clock import current_season_progress
from salary_model.modules.valuation_engine import ValuationEngine


class ProjectionPipeline:
    """Stateless projection of PlayerRecord × ComparisonScenario."""

    def __init__(self, config: Optional[ValuationConfig] = None):
        self.config = config or get_default_valuation_config()
        self.aging = AgingModel(self.config)
        self.engine = ValuationEngine(self.config)

    def project(
        self,
        player: PlayerRecord,
        scenario: Optional[ComparisonScenario] = None,
        as_of: Optional[date] = None,
    ) -> ProjectionResult:
        scenario = scenario or ComparisonScenario()
        category = self.aging.category_for(player.position)
        base_rating = player.darko + scenario.rating_adjustment

        current = self._current_season(player, scenario, base_rating, as_of)
        rows = [
            self._future_season(player, scenario, base_rating, k)
            for k in range(1, len(self.config.future_seasons) + 1)
        ]

        total_surplus = current.surplus or 0.0
        total_surplus += sum(row.surplus for row in rows if row.surplus is not None)

        return ProjectionResult(
            player_name=player.name,
            position_category=category,
            current=current,
            rows=tuple(rows),
            total_surplus=total_surplus,
        )

    def _current_season(
        self,
        player: PlayerRecord,
        scenario: ComparisonScenario,
        base_rating: float,
        as_of: Optional[date],
    ) -> CurrentSeasonValuation:
        progress = current_season_progress(self.config.season, as_of)
        aging_delta = self.aging.partial_year_delta(player.age, player.position, progress)
        rating = base_rating + aging_delta
        salary = self.engine.valuate(scenario.games, scenario.minutes, rating)

        actual = contracted_salary(player.actual_salary)
        surplus = salary_amount(salary) - actual if actual is not None else None

        return CurrentSeasonValuation(
            season=self.config.season.label,
            salary=salary,
            effective_rating=rating,
            aging_delta=aging_delta,
            season_progress=progress,
            actual_salary=actual,
            surplus=surplus,
        )

    def _future_season(
        self,
        player: PlayerRecord,
        scenario: ComparisonScenario,
        base_rating: float,
        years_forward: int,
    ) -> ProjectionRow:
        season = self.config.future_seasons[years_forward - 1]
        rating = base_rating + self.aging.cumulative_delta(
            player.age, player.position, years_forward, include_current_partial_year=False
        )
        raw = self.engine.valuate(scenario.games, scenario.minutes, rating)
        multiplier = self.config.inflation_for(season)

        if is_minimum(raw):
            projected = SalaryFloor.MINIMUM
            value = 0.0
        else:
            value = salary_amount(raw) * multiplier
            projected = value

        actual = contracted_salary(player.future_salaries.get(season))
        surplus = value - actual if actual is not None else None

        return ProjectionRow(
            season=season,
            projected_age=player.age + years_forward,
            projected_salary=projected,
            projected_value_m=value,
            inflation_multiplier=multiplier,
            effective_rating=rating,
            actual_salary=actual,
            surplus=surplus,
        )


def project_player(
    player: PlayerRecord,
    scenario: Optional[ComparisonScenario] = None,
    as_of: Optional[date] = None,
    config: Optional[ValuationConfig] = None,
) -> ProjectionResult:
    """One-shot helper: build a pipeline for ``config`` and project ``player``."""
    return ProjectionPipeline(config).project(player, scenario, as_of)


def project_many(
    players: List[PlayerRecord],
    scenario: Optional[ComparisonScenario] = None,
    as_of: Optional[date] = None,
    config: Optional[ValuationConfig] = None,
) -> List[ProjectionResult]:
    pipeline = ProjectionPipeline(config)
    return [pipeline.project(p, scenario, as_of) for p in players]
