"""
Types shared by the valuation and projection modules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union


class PositionCategory(str, Enum):
    GUARD = "guard"
    WING = "wing"
    BIG = "big"


class SalaryFloor(str, Enum):
    """Valued at the league minimum; shown as such instead of a dollar figure."""

    MINIMUM = "Minimum Salary"


SalaryValue = Union[float, SalaryFloor]


def is_minimum(value: SalaryValue) -> bool:
    return value is SalaryFloor.MINIMUM


def salary_amount(value: SalaryValue) -> float:
    """Numeric millions for surplus math; a minimum valuation counts as 0."""
    if is_minimum(value):
        return 0.0
    return float(value)


def contracted_salary(value: Any) -> Optional[float]:
    """Contracted salary in millions, or None for free agents (missing or zero)."""
    if value is None:
        return None
    amount = float(value)
    if amount != amount or amount == 0:
        return None
    return amount


@dataclass(frozen=True)
class PlayerRecord:
    name: str
    position: str
    age: float
    darko: float
    actual_salary: Optional[float] = None
    future_salaries: Mapping[str, float] = field(default_factory=dict)
    team: str = ""

    def __post_init__(self):
        object.__setattr__(self, "future_salaries", MappingProxyType(dict(self.future_salaries)))

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "PlayerRecord":
        future = payload.get("futureSalaries") or payload.get("future_salaries") or {}
        if not isinstance(future, Mapping):
            raise TypeError(f"futureSalaries must be an object, got {type(future).__name__}")
        actual = payload.get("actualSalary", payload.get("actual_salary"))
        return cls(
            name=str(payload["name"]),
            position=str(payload.get("pos") or payload.get("position") or ""),
            age=float(payload["age"]),
            darko=float(payload["darko"]),
            actual_salary=None if actual is None else float(actual),
            future_salaries={str(k): float(v) for k, v in future.items() if v is not None},
            team=str(payload.get("team") or ""),
        )


@dataclass(frozen=True)
class ComparisonScenario:
    games: int = 70
    minutes: float = 30.0
    rating_adjustment: float = 0.0


@dataclass(frozen=True)
class CurrentSeasonValuation:
    season: str
    salary: SalaryValue
    effective_rating: float
    aging_delta: float
    season_progress: float
    actual_salary: Optional[float]
    surplus: Optional[float]


@dataclass(frozen=True)
class ProjectionRow:
    season: str
    projected_age: float
    projected_salary: SalaryValue
    projected_value_m: float
    inflation_multiplier: float
    effective_rating: float
    actual_salary: Optional[float]
    surplus: Optional[float]


@dataclass(frozen=True)
class ProjectionResult:
    player_name: str
    position_category: PositionCategory
    current: CurrentSeasonValuation
    rows: Tuple[ProjectionRow, ...]
    total_surplus: float
