"""
Non-visual dashboard logic helpers.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import pandas as pd

from salary_model.data_collection.load_players import normalize_name
from salary_model.modules.model_types import (
    ComparisonScenario,
    PlayerRecord,
    ProjectionResult,
    SalaryValue,
    is_minimum,
)


def format_salary(value: SalaryValue) -> str:
    if is_minimum(value):
        return "Min"
    return f"${float(value):.1f}M"


def format_actual_salary(value: Optional[float]) -> str:
    if not value:
        return "Free Agent"
    return f"${float(value):.1f}M"


def format_surplus(surplus: float) -> Dict[str, object]:
    sign = "+" if surplus > 0 else ""
    return {"text": f"{sign}{surplus:.1f}M", "is_positive": surplus > 0}


def format_delta(delta: float, digits: int = 2) -> str:
    sign = "+" if delta >= 0 else ""
    return f"{sign}{delta:.{digits}f}"


def filter_players(players: Sequence[PlayerRecord], search_term: str, limit: int = 10) -> List[PlayerRecord]:
    term = normalize_name(search_term)
    if not term:
        return []
    return [p for p in players if term in normalize_name(p.name)][:limit]


def build_rating_breakdown(
    player: PlayerRecord,
    scenario: ComparisonScenario,
    result: ProjectionResult,
    tier_label,
    progress_label: str,
) -> List[str]:
    current = result.current
    return [
        f"Base DARKO: {player.darko:.2f} ({tier_label(player.darko)})",
        f"+ Manual adjustment: {format_delta(scenario.rating_adjustment, 1)}",
        f"+ Partial-year aging ({progress_label} through season): {format_delta(current.aging_delta)}",
        f"Effective DARKO: {current.effective_rating:.2f} ({tier_label(current.effective_rating)})",
    ]


def build_projection_table(result: ProjectionResult) -> pd.DataFrame:
    rows = []
    for row in result.rows:
        rows.append(
            {
                "Season": row.season,
                "Age": int(row.projected_age),
                "Projected": format_salary(row.projected_salary),
                "Actual": format_actual_salary(row.actual_salary),
                "Surplus": "" if row.surplus is None else format_surplus(row.surplus)["text"],
            }
        )
    return pd.DataFrame(rows, columns=["Season", "Age", "Projected", "Actual", "Surplus"])


def build_value_chart_frame(result: ProjectionResult) -> pd.DataFrame:
    """Long-format projected vs actual values per season, for plotting."""
    seasons = [(result.current.season, result.current.salary, result.current.actual_salary)]
    seasons += [(r.season, r.projected_salary, r.actual_salary) for r in result.rows]

    records = []
    for season, projected, actual in seasons:
        projected_m = 0.0 if is_minimum(projected) else float(projected)
        records.append({"season": season, "kind": "Projected", "value_m": projected_m})
        records.append({"season": season, "kind": "Actual", "value_m": actual or 0.0})
    return pd.DataFrame(records, columns=["season", "kind", "value_m"])
