"""
Valuation configuration loader and validator.

The YAML file holds every tunable table of the salary model: season window,
salary constants, position mappings, aging curves, inflation scalers and the
DARKO tier labels. It is loaded once into an immutable ValuationConfig that is
handed to the aging model, valuation engine and projection pipeline.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from datetime import date, datetime
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from salary_model.config import DEFAULT_VALUATION_CONFIG
from salary_model.modules.model_types import PositionCategory


logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent / "configs"


class ValuationConfigError(ValueError):
    pass


@dataclass(frozen=True)
class SeasonWindow:
    label: str
    start_date: date
    end_date: date
    data_as_of: date


@dataclass(frozen=True)
class SalaryConstants:
    minutes_baseline: float = 1475.0
    replacement_level_rating: float = -3.0
    win_cost_millions: float = 4.32
    mvp_bonus_cap: float = 0.10
    bonus_exponent: float = 1.2
    bonus_divisor: float = 4.0
    minimum_salary_threshold: float = 3.0


@dataclass(frozen=True)
class RatingTier:
    threshold: float
    label: str


@dataclass(frozen=True)
class ValuationConfig:
    name: str
    season: SeasonWindow
    salary: SalaryConstants
    position_categories: Mapping[str, PositionCategory]
    position_labels: Mapping[str, str]
    default_category: PositionCategory
    aging_curves: Mapping[PositionCategory, Mapping[int, float]]
    min_age: int
    max_age: int
    future_seasons: Tuple[str, ...]
    inflation_scalers: Mapping[str, float]
    rating_tiers: Tuple[RatingTier, ...]
    config_hash: str = ""
    path: str = ""

    def inflation_for(self, season: str) -> float:
        return float(self.inflation_scalers.get(season, 1.0))


_SALARY_KEYS = {
    "minutes_baseline",
    "replacement_level_rating",
    "win_cost_millions",
    "mvp_bonus_cap",
    "bonus_exponent",
    "bonus_divisor",
    "minimum_salary_threshold",
}


def _require_keys(obj: Dict[str, Any], keys: set, prefix: str) -> None:
    if not isinstance(obj, dict):
        raise ValuationConfigError(f"{prefix} must be a mapping")
    missing = [k for k in keys if k not in obj]
    extra = [k for k in obj.keys() if k not in keys]
    if missing:
        raise ValuationConfigError(f"{prefix} missing keys: {sorted(missing)}")
    if extra:
        raise ValuationConfigError(f"{prefix} unknown keys: {sorted(extra)}")


def _as_date(value: Any, key: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValuationConfigError(f"season.{key} is not an ISO date: {value!r}") from None


def _category(value: Any, prefix: str) -> PositionCategory:
    try:
        return PositionCategory(str(value).lower())
    except ValueError:
        raise ValuationConfigError(f"{prefix}: unknown position category {value!r}") from None


def _build_season(raw: Dict[str, Any]) -> SeasonWindow:
    _require_keys(raw, {"label", "start_date", "end_date", "data_as_of"}, "season")
    season = SeasonWindow(
        label=str(raw["label"]),
        start_date=_as_date(raw["start_date"], "start_date"),
        end_date=_as_date(raw["end_date"], "end_date"),
        data_as_of=_as_date(raw["data_as_of"], "data_as_of"),
    )
    if season.end_date <= season.start_date:
        raise ValuationConfigError("season.end_date must be after season.start_date")
    return season


def _build_salary(raw: Dict[str, Any]) -> SalaryConstants:
    _require_keys(raw, _SALARY_KEYS, "salary")
    constants = SalaryConstants(**{k: float(v) for k, v in raw.items()})
    if constants.minutes_baseline <= 0:
        raise ValuationConfigError("salary.minutes_baseline must be positive")
    if constants.bonus_divisor <= 0:
        raise ValuationConfigError("salary.bonus_divisor must be positive")
    if constants.mvp_bonus_cap < 0:
        raise ValuationConfigError("salary.mvp_bonus_cap must not be negative")
    return constants


def _build_curves(raw: Dict[str, Any]) -> Tuple[Dict[PositionCategory, Mapping[int, float]], int, int]:
    _require_keys(raw, {"min_age", "max_age", "curves"}, "aging")
    min_age, max_age = int(raw["min_age"]), int(raw["max_age"])
    if max_age < min_age:
        raise ValuationConfigError("aging.max_age must not be below aging.min_age")

    curves: Dict[PositionCategory, Mapping[int, float]] = {}
    for name, table in (raw["curves"] or {}).items():
        category = _category(name, "aging.curves")
        by_age = {int(age): float(delta) for age, delta in (table or {}).items()}
        missing = [age for age in range(min_age, max_age + 1) if age not in by_age]
        if missing:
            raise ValuationConfigError(f"aging.curves.{category.value} missing ages: {missing}")
        curves[category] = MappingProxyType(by_age)

    absent = [c.value for c in PositionCategory if c not in curves]
    if absent:
        raise ValuationConfigError(f"aging.curves missing categories: {absent}")
    return curves, min_age, max_age


def _build_tiers(raw: Any) -> Tuple[RatingTier, ...]:
    tiers = []
    for entry in raw or []:
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise ValuationConfigError(f"rating_tiers entries must be [threshold, label], got {entry!r}")
        threshold, label = entry
        tiers.append(RatingTier(float("-inf") if threshold is None else float(threshold), str(label)))
    if not tiers:
        raise ValuationConfigError("rating_tiers must not be empty")
    return tuple(sorted(tiers, key=lambda t: t.threshold, reverse=True))


def _hash_config(config: Dict[str, Any]) -> str:
    content = yaml.safe_dump(config, sort_keys=True).encode("utf-8")
    return hashlib.sha256(content).hexdigest()[:12]


def build_valuation_config(raw: Dict[str, Any], path: Optional[Path] = None) -> ValuationConfig:
    """Validate a parsed config mapping and freeze it into a ValuationConfig."""
    _require_keys(raw, {"name", "season", "salary", "positions", "aging", "projection", "rating_tiers"}, "root")
    _require_keys(raw["positions"], {"default_category", "categories", "labels"}, "positions")
    _require_keys(raw["projection"], {"future_seasons", "inflation_scalers"}, "projection")

    positions = raw["positions"]
    categories = {
        str(code).lower(): _category(cat, f"positions.categories.{code}")
        for code, cat in (positions["categories"] or {}).items()
    }
    labels = {str(code).lower(): str(label) for code, label in (positions["labels"] or {}).items()}

    curves, min_age, max_age = _build_curves(raw["aging"])

    future_seasons = tuple(str(s) for s in raw["projection"]["future_seasons"] or [])
    if not future_seasons:
        raise ValuationConfigError("projection.future_seasons must not be empty")
    scalers = {str(k): float(v) for k, v in (raw["projection"]["inflation_scalers"] or {}).items()}
    bad = [k for k, v in scalers.items() if v <= 0]
    if bad:
        raise ValuationConfigError(f"projection.inflation_scalers must be positive: {bad}")

    return ValuationConfig(
        name=str(raw["name"]),
        season=_build_season(raw["season"]),
        salary=_build_salary(raw["salary"]),
        position_categories=MappingProxyType(categories),
        position_labels=MappingProxyType(labels),
        default_category=_category(positions["default_category"], "positions.default_category"),
        aging_curves=MappingProxyType(curves),
        min_age=min_age,
        max_age=max_age,
        future_seasons=future_seasons,
        inflation_scalers=MappingProxyType(scalers),
        rating_tiers=_build_tiers(raw["rating_tiers"]),
        config_hash=_hash_config(raw),
        path=str(path) if path else "",
    )


def read_config_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ValuationConfigError(f"config not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@lru_cache(maxsize=8)
def load_valuation_config(name: str = DEFAULT_VALUATION_CONFIG) -> ValuationConfig:
    path = CONFIG_DIR / f"{name}.yaml"
    config = build_valuation_config(read_config_file(path), path=path)
    logger.debug("loaded valuation config %s (%s) from %s", config.name, config.config_hash, path)
    return config


def get_default_valuation_config() -> ValuationConfig:
    return load_valuation_config(DEFAULT_VALUATION_CONFIG)
