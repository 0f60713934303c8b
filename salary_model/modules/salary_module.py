"""
Salary Module
=============
League-wide batch valuation over a players DataFrame.

Runs the projection pipeline for every row and adds current value, surplus
and multi-year total surplus columns, plus a text report.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd

from salary_model.models.valuation_config import ValuationConfig, get_default_valuation_config
from salary_model.modules.model_types import ComparisonScenario, PlayerRecord, ProjectionResult, is_minimum
from salary_model.modules.projection_pipeline import ProjectionPipeline
from salary_model.modules.season_clock import current_season_progress, season_progress_label


class SalaryModule:
    """Batch salary valuation"""

    def __init__(
        self,
        config: Optional[ValuationConfig] = None,
        scenario: Optional[ComparisonScenario] = None,
        as_of=None,
    ):
        self.config = config or get_default_valuation_config()
        self.scenario = scenario or ComparisonScenario()
        self.as_of = as_of
        self.pipeline = ProjectionPipeline(self.config)

    def analyze(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Main entry point.

        Input columns: PLAYER_NAME, POSITION, AGE, DARKO, SALARY_M, FUTURE_SALARIES
        Optional per-row overrides: GAMES, MINUTES, RATING_ADJUSTMENT
        Added columns: POSITION_LABEL, POSITION_CATEGORY, RATING_TIER, AGING_DELTA_PARTIAL,
                       EFFECTIVE_DARKO, PROJECTED_VALUE_M, IS_MINIMUM, SALARY_SURPLUS_M,
                       CONTRACT_YEARS, TOTAL_SURPLUS_M
        """
        df = df.copy()
        if df.empty:
            for col in self.output_columns():
                df[col] = pd.Series(dtype=float)
            return df

        results = df.apply(self._project_row, axis=1)

        df['POSITION_LABEL'] = df['POSITION'].apply(self.pipeline.aging.position_label)
        df['POSITION_CATEGORY'] = results.apply(lambda r: r.position_category.value)
        df['RATING_TIER'] = df['DARKO'].apply(self.pipeline.engine.rating_tier)
        df['AGING_DELTA_PARTIAL'] = results.apply(lambda r: round(r.current.aging_delta, 3))
        df['EFFECTIVE_DARKO'] = results.apply(lambda r: round(r.current.effective_rating, 2))

        df['IS_MINIMUM'] = results.apply(lambda r: is_minimum(r.current.salary))
        df['PROJECTED_VALUE_M'] = results.apply(
            lambda r: np.nan if is_minimum(r.current.salary) else float(r.current.salary)
        )
        df['SALARY_SURPLUS_M'] = results.apply(
            lambda r: np.nan if r.current.surplus is None else round(r.current.surplus, 2)
        )
        df['CONTRACT_YEARS'] = results.apply(self._contract_years)
        df['TOTAL_SURPLUS_M'] = results.apply(lambda r: round(r.total_surplus, 2))

        return df

    @staticmethod
    def output_columns():
        return [
            'POSITION_LABEL', 'POSITION_CATEGORY', 'RATING_TIER', 'AGING_DELTA_PARTIAL',
            'EFFECTIVE_DARKO', 'IS_MINIMUM', 'PROJECTED_VALUE_M', 'SALARY_SURPLUS_M',
            'CONTRACT_YEARS', 'TOTAL_SURPLUS_M',
        ]

    def _row_scenario(self, row: pd.Series) -> ComparisonScenario:
        games = row.get('GAMES', np.nan)
        minutes = row.get('MINUTES', np.nan)
        adjustment = row.get('RATING_ADJUSTMENT', np.nan)
        return ComparisonScenario(
            games=self.scenario.games if pd.isna(games) else int(games),
            minutes=self.scenario.minutes if pd.isna(minutes) else float(minutes),
            rating_adjustment=self.scenario.rating_adjustment if pd.isna(adjustment) else float(adjustment),
        )

    def _project_row(self, row: pd.Series) -> ProjectionResult:
        salary = row.get('SALARY_M')
        future = row.get('FUTURE_SALARIES')
        player = PlayerRecord(
            name=str(row['PLAYER_NAME']),
            position=str(row.get('POSITION') or ''),
            age=float(row['AGE']),
            darko=float(row['DARKO']),
            actual_salary=None if salary is None or pd.isna(salary) else float(salary),
            future_salaries=future if isinstance(future, dict) else {},
        )
        return self.pipeline.project(player, self._row_scenario(row), self.as_of)

    @staticmethod
    def _contract_years(result: ProjectionResult) -> int:
        years = 1 if result.current.actual_salary is not None else 0
        return years + sum(1 for r in result.rows if r.actual_salary is not None)

    def report(self, df: pd.DataFrame, top_n: int = 10) -> str:
        """Render the valuation report"""
        progress = current_season_progress(self.config.season, self.as_of)
        lines = []
        lines.append("=" * 70)
        lines.append(f"NBA Salary Model | {self.config.season.label} | config {self.config.name} ({self.config.config_hash})")
        lines.append(
            f"Scenario: {self.scenario.games} games x {self.scenario.minutes:.1f} min, "
            f"adjustment {self.scenario.rating_adjustment:+.1f}, season {season_progress_label(progress)} complete"
        )
        lines.append("=" * 70)

        lines.append("\n▸ DARKO tiers:")
        tier_counts = df['RATING_TIER'].value_counts()
        for tier, count in tier_counts.items():
            lines.append(f"  {tier:20s}: {count:3d}")

        lines.append(f"\n▸ Valued at minimum: {int(df['IS_MINIMUM'].sum())}")

        contracted = df[df['CONTRACT_YEARS'] > 0]

        lines.append(f"\n▸ Best total surplus Top {top_n}:")
        for _, row in contracted.nlargest(top_n, 'TOTAL_SURPLUS_M').iterrows():
            lines.append(self._report_line(row))

        lines.append(f"\n▸ Worst total surplus Top {top_n}:")
        for _, row in contracted.nsmallest(top_n, 'TOTAL_SURPLUS_M').iterrows():
            lines.append(self._report_line(row))

        return "\n".join(lines)

    @staticmethod
    def _report_line(row: pd.Series) -> str:
        value = "Min" if row['IS_MINIMUM'] else f"${row['PROJECTED_VALUE_M']:5.1f}M"
        salary = "FA" if pd.isna(row['SALARY_M']) else f"${row['SALARY_M']:5.1f}M"
        return (
            f"  {row['PLAYER_NAME']:25s} "
            f"salary={salary:>7s}  "
            f"value={value:>7s}  "
            f"total={row['TOTAL_SURPLUS_M']:+7.1f}M"
        )
