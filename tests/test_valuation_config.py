import copy
import dataclasses
from datetime import date

import pytest

from salary_model.models.valuation_config import (
    CONFIG_DIR,
    ValuationConfigError,
    build_valuation_config,
    get_default_valuation_config,
    load_valuation_config,
    read_config_file,
)
from salary_model.modules.model_types import PositionCategory


@pytest.fixture
def raw_config():
    return copy.deepcopy(read_config_file(CONFIG_DIR / "default.yaml"))


def test_load_default_config_has_meta_and_tables():
    cfg = load_valuation_config("default")
    assert cfg.name == "default"
    assert len(cfg.config_hash) == 12
    assert cfg.season.start_date == date(2025, 10, 22)
    assert cfg.season.end_date == date(2026, 4, 13)
    assert cfg.season.data_as_of == date(2026, 1, 28)
    assert cfg.default_category == PositionCategory.WING
    assert cfg.position_categories["c_pos"] == PositionCategory.BIG
    assert len(cfg.future_seasons) == 5
    for curve in cfg.aging_curves.values():
        assert sorted(curve) == list(range(20, 37))


def test_default_salary_constants():
    salary = get_default_valuation_config().salary
    assert salary.minutes_baseline == 1475
    assert salary.replacement_level_rating == -3.0
    assert salary.win_cost_millions == 4.32
    assert salary.mvp_bonus_cap == 0.10
    assert salary.bonus_exponent == 1.2
    assert salary.bonus_divisor == 4
    assert salary.minimum_salary_threshold == 3.0


def test_config_is_cached_and_immutable():
    cfg = load_valuation_config("default")
    assert load_valuation_config("default") is cfg
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.name = "other"  # type: ignore[misc]
    with pytest.raises(TypeError):
        cfg.aging_curves[PositionCategory.GUARD][20] = 5.0  # type: ignore[index]


def test_inflation_for_unknown_season_is_one():
    cfg = get_default_valuation_config()
    assert cfg.inflation_for("2026-27") == 1.074
    assert cfg.inflation_for("2040-41") == 1.0


def test_load_unknown_config_raises():
    with pytest.raises(ValuationConfigError):
        load_valuation_config("does_not_exist")


def test_hash_changes_with_content(raw_config):
    base = build_valuation_config(raw_config)
    raw_config["salary"]["win_cost_millions"] = 5.0
    assert build_valuation_config(raw_config).config_hash != base.config_hash


def test_missing_age_in_curve_raises(raw_config):
    del raw_config["aging"]["curves"]["guard"][27]
    with pytest.raises(ValuationConfigError, match="missing ages"):
        build_valuation_config(raw_config)


def test_missing_category_raises(raw_config):
    del raw_config["aging"]["curves"]["big"]
    with pytest.raises(ValuationConfigError, match="missing categories"):
        build_valuation_config(raw_config)


def test_unknown_salary_key_raises(raw_config):
    raw_config["salary"]["luxury_tax"] = 186.0
    with pytest.raises(ValuationConfigError, match="unknown keys"):
        build_valuation_config(raw_config)


def test_missing_root_key_raises(raw_config):
    del raw_config["projection"]
    with pytest.raises(ValuationConfigError, match="missing keys"):
        build_valuation_config(raw_config)


@pytest.mark.parametrize(
    "section,key,value",
    [
        ("season", "end_date", date(2025, 10, 1)),
        ("season", "start_date", "not-a-date"),
        ("positions", "default_category", "center"),
        ("salary", "minutes_baseline", 0),
        ("salary", "bonus_divisor", -1),
    ],
)
def test_invalid_values_raise(raw_config, section, key, value):
    raw_config[section][key] = value
    with pytest.raises(ValuationConfigError):
        build_valuation_config(raw_config)


def test_non_positive_inflation_raises(raw_config):
    raw_config["projection"]["inflation_scalers"]["2027-28"] = 0
    with pytest.raises(ValuationConfigError):
        build_valuation_config(raw_config)


def test_empty_future_seasons_raises(raw_config):
    raw_config["projection"]["future_seasons"] = []
    with pytest.raises(ValuationConfigError):
        build_valuation_config(raw_config)
