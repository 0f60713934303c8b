from datetime import date
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from salary_model.data_collection.load_players import load_players, players_to_frame
from salary_model.modules.model_types import ComparisonScenario
from salary_model.modules.projection_pipeline import project_player
from salary_model.modules.salary_module import SalaryModule
from salary_model.modules.valuation_engine import calculate_salary


FIXTURES_DIR = Path(__file__).parent / "fixtures"
PRESEASON = date(2025, 10, 1)


@pytest.fixture
def players():
    return load_players(FIXTURES_DIR / "sample_players.json")


def _row(df, name):
    return df[df["PLAYER_NAME"] == name].iloc[0]


def test_salary_module_analyze_adds_expected_columns_and_values(players):
    result = SalaryModule(as_of=PRESEASON).analyze(players_to_frame(players))

    for col in SalaryModule.output_columns():
        assert col in result.columns

    prime = _row(result, "Prime Guard")
    assert prime["POSITION_LABEL"] == "PG"
    assert prime["POSITION_CATEGORY"] == "guard"
    assert prime["RATING_TIER"] == "All-Star"
    assert prime["AGING_DELTA_PARTIAL"] == 0.0
    assert prime["PROJECTED_VALUE_M"] == 32.1
    assert not prime["IS_MINIMUM"]
    assert prime["SALARY_SURPLUS_M"] == 12.1
    assert prime["CONTRACT_YEARS"] == 3

    expected_total = project_player(players[0], as_of=PRESEASON).total_surplus
    assert prime["TOTAL_SURPLUS_M"] == round(expected_total, 2)


def test_free_agents_and_minimum_players(players):
    result = SalaryModule(as_of=PRESEASON).analyze(players_to_frame(players))

    free_agent = _row(result, "Free Agent Wing")
    assert np.isnan(free_agent["SALARY_SURPLUS_M"])
    assert free_agent["CONTRACT_YEARS"] == 0
    assert free_agent["TOTAL_SURPLUS_M"] == 0.0

    mystery = _row(result, "Mystery Position")
    assert mystery["POSITION_CATEGORY"] == "wing"
    assert mystery["IS_MINIMUM"]
    assert np.isnan(mystery["PROJECTED_VALUE_M"])


def test_per_row_scenario_overrides(players):
    df = players_to_frame(players)
    df["GAMES"] = [82] + [np.nan] * (len(df) - 1)
    result = SalaryModule(scenario=ComparisonScenario(games=50), as_of=PRESEASON).analyze(df)

    assert _row(result, "Prime Guard")["PROJECTED_VALUE_M"] == calculate_salary(82, 30.0, 2.0)
    assert _row(result, "Nikola Jokić")["PROJECTED_VALUE_M"] == calculate_salary(50, 30.0, 8.4)


def test_report_lists_surplus_rankings(players):
    module = SalaryModule(as_of=PRESEASON)
    text = module.report(module.analyze(players_to_frame(players)))

    assert "DARKO tiers" in text
    assert "Best total surplus" in text
    assert "Worst total surplus" in text
    assert "Prime Guard" in text
    assert "Free Agent Wing" not in text


def test_analyze_empty_frame():
    result = SalaryModule().analyze(players_to_frame([]))
    assert result.empty
    assert "TOTAL_SURPLUS_M" in result.columns


def test_analyze_does_not_mutate_input(players):
    df = players_to_frame(players)
    SalaryModule().analyze(df)
    assert "TOTAL_SURPLUS_M" not in df.columns
    assert isinstance(df, pd.DataFrame)
