import json
import logging
from pathlib import Path

import pandas as pd
import pytest

from salary_model.data_collection.load_players import (
    PlayerDataError,
    load_players,
    normalize_name,
    parse_players,
    players_to_frame,
)
from salary_model.modules.model_types import PlayerRecord


FIXTURES_DIR = Path(__file__).parent / "fixtures"
PLAYERS_FIXTURE = FIXTURES_DIR / "sample_players.json"


def test_normalize_name_handles_accents_and_punctuation():
    assert normalize_name("Nikola Jokić") == "nikola jokic"
    assert normalize_name("D'Angelo   Russell") == "dangelo russell"
    assert normalize_name(None) == ""


def test_load_players_skips_malformed_rows(caplog):
    with caplog.at_level(logging.WARNING):
        players = load_players(PLAYERS_FIXTURE)

    assert [p.name for p in players] == [
        "Prime Guard",
        "Old Big",
        "Nikola Jokić",
        "Free Agent Wing",
        "Mystery Position",
    ]
    assert "skipping player row 5" in caplog.text


@pytest.mark.parametrize("future", [["x"], "2026-27", 12.5])
def test_load_players_skips_rows_with_non_mapping_future_salaries(tmp_path, caplog, future):
    path = tmp_path / "players.json"
    rows = [
        {"name": "Ok", "pos": "sf_pos", "age": 24, "darko": 0.5},
        {"name": "Bad", "pos": "sf_pos", "age": 24, "darko": 0.5, "futureSalaries": future},
    ]
    path.write_text(json.dumps(rows), encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        players = load_players(path)

    assert [p.name for p in players] == ["Ok"]
    assert "futureSalaries must be an object" in caplog.text

    with pytest.raises(PlayerDataError, match="futureSalaries"):
        load_players(path, strict=True)


def test_load_players_strict_raises():
    with pytest.raises(PlayerDataError, match="missing fields"):
        load_players(PLAYERS_FIXTURE, strict=True)


def test_load_players_missing_file_raises(tmp_path):
    with pytest.raises(PlayerDataError, match="not found"):
        load_players(tmp_path / "nope.json")


def test_load_players_rejects_non_array(tmp_path):
    path = tmp_path / "players.json"
    path.write_text('{"name": "x"}', encoding="utf-8")
    with pytest.raises(PlayerDataError, match="JSON array"):
        load_players(path)


def test_load_players_rejects_invalid_json(tmp_path):
    path = tmp_path / "players.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(PlayerDataError, match="invalid JSON"):
        load_players(path)


def test_record_maps_dataset_keys():
    record = PlayerRecord.from_dict(
        {
            "name": "Prime Guard",
            "pos": "pg_pos",
            "age": 25.3,
            "darko": 2.0,
            "actualSalary": 20,
            "futureSalaries": {"2026-27": 22, "2027-28": None},
        }
    )
    assert record.position == "pg_pos"
    assert record.actual_salary == 20.0
    assert record.future_salaries == {"2026-27": 22.0}
    assert record.team == ""


def test_record_future_salaries_are_read_only():
    source = {"2026-27": 22.0}
    record = PlayerRecord(name="A", position="pg_pos", age=25, darko=1.0, future_salaries=source)

    source["2027-28"] = 30.0
    assert record.future_salaries == {"2026-27": 22.0}
    with pytest.raises(TypeError):
        record.future_salaries["2027-28"] = 30.0


def test_parse_players_without_salary_fields():
    players = parse_players([{"name": "A", "age": 22, "darko": 0.1}])
    assert players[0].actual_salary is None
    assert players[0].future_salaries == {}
    assert players[0].position == ""


def test_players_to_frame_columns():
    df = players_to_frame(load_players(PLAYERS_FIXTURE))
    assert list(df.columns) == ["PLAYER_NAME", "TEAM", "POSITION", "AGE", "DARKO", "SALARY_M", "FUTURE_SALARIES"]
    assert len(df) == 5

    mystery = df[df["PLAYER_NAME"] == "Mystery Position"].iloc[0]
    assert pd.isna(mystery["SALARY_M"])
    assert mystery["FUTURE_SALARIES"] == {}


def test_players_to_frame_empty():
    df = players_to_frame([])
    assert df.empty
    assert "PLAYER_NAME" in df.columns
