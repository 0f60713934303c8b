"""
Load the static player dataset (players.json) into PlayerRecords.

The file is a JSON array of objects with ``name``, ``pos``, ``age``,
``darko``, ``actualSalary`` and ``futureSalaries`` (season label → millions).
"""

from __future__ import annotations

import json
import logging
import re
import unicodedata
from pathlib import Path
from typing import List, Union

import pandas as pd

from salary_model.config import DEFAULT_PLAYERS_PATH
from salary_model.modules.model_types import PlayerRecord


logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "age", "darko")


class PlayerDataError(ValueError):
    pass


def normalize_name(name: str) -> str:
    """Lowercase ASCII key with accents and punctuation removed."""
    if name is None or pd.isna(name):
        return ""
    normalized = unicodedata.normalize("NFD", str(name))
    ascii_name = normalized.encode("ascii", "ignore").decode("ascii")
    ascii_name = ascii_name.lower()
    ascii_name = re.sub(r"[^a-z0-9 ]", "", ascii_name)
    ascii_name = re.sub(r"\s+", " ", ascii_name).strip()
    return ascii_name


def parse_players(payload: object, strict: bool = False) -> List[PlayerRecord]:
    if not isinstance(payload, list):
        raise PlayerDataError("player dataset must be a JSON array")

    players: List[PlayerRecord] = []
    for idx, item in enumerate(payload):
        try:
            if not isinstance(item, dict):
                raise PlayerDataError(f"row {idx} is not an object")
            missing = [k for k in REQUIRED_FIELDS if item.get(k) is None]
            if missing:
                raise PlayerDataError(f"row {idx} missing fields: {missing}")
            players.append(PlayerRecord.from_dict(item))
        except (PlayerDataError, TypeError, ValueError) as exc:
            if strict:
                raise PlayerDataError(str(exc)) from exc
            logger.warning("skipping player row %s: %s", idx, exc)
    return players


def load_players(path: Union[str, Path] = DEFAULT_PLAYERS_PATH, strict: bool = False) -> List[PlayerRecord]:
    p = Path(path)
    if not p.exists():
        raise PlayerDataError(f"player dataset not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as exc:
            raise PlayerDataError(f"invalid JSON in {p}: {exc}") from exc

    players = parse_players(payload, strict=strict)
    logger.info("loaded %d players from %s", len(players), p)
    return players


def players_to_frame(players: List[PlayerRecord]) -> pd.DataFrame:
    rows = [
        {
            "PLAYER_NAME": p.name,
            "TEAM": p.team,
            "POSITION": p.position,
            "AGE": p.age,
            "DARKO": p.darko,
            "SALARY_M": p.actual_salary,
            "FUTURE_SALARIES": dict(p.future_salaries),
        }
        for p in players
    ]
    columns = ["PLAYER_NAME", "TEAM", "POSITION", "AGE", "DARKO", "SALARY_M", "FUTURE_SALARIES"]
    return pd.DataFrame(rows, columns=columns)
