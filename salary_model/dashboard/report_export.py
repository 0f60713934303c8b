"""
Export utilities for player valuation reports.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from salary_model.dashboard.dashboard_logic import (
    build_projection_table,
    format_actual_salary,
    format_salary,
    format_surplus,
)
from salary_model.models.valuation_config import ValuationConfig
from salary_model.modules.model_types import ComparisonScenario, ProjectionResult


def build_markdown_report(result: ProjectionResult, scenario: ComparisonScenario, config: ValuationConfig) -> str:
    ts = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    current = result.current
    table = build_projection_table(result)

    lines = [
        f"# Salary Projection: {result.player_name}",
        f"Generated: {ts}",
        "",
        f"- Scenario: {scenario.games} games, {scenario.minutes:.1f} min/game, adjustment {scenario.rating_adjustment:+.1f}",
        f"- Aging curve: {result.position_category.value}",
        f"- Effective DARKO ({current.season}): {current.effective_rating:.2f}",
        f"- Projected value ({current.season}): {format_salary(current.salary)}",
        f"- Actual salary ({current.season}): {format_actual_salary(current.actual_salary)}",
        f"- Config: {config.name} ({config.config_hash})",
        "",
        "## Multi-Year Projections",
        "",
        "| " + " | ".join(table.columns) + " |",
        "|" + "---|" * len(table.columns),
    ]
    for _, row in table.iterrows():
        lines.append("| " + " | ".join(str(v) for v in row.tolist()) + " |")
    lines += ["", f"**Total contract surplus:** {format_surplus(result.total_surplus)['text']}"]
    return "\n".join(lines)


def export_markdown(path: str, content: str) -> str:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")
    return str(p)
