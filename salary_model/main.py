"""
NBA Salary Model - command line entry point
===========================================

Values every player in the dataset under one playing-time scenario:
  1. Load players.json
  2. Salary module → current value, surplus, multi-year total surplus
  3. Report + CSV output

With --player, prints the full multi-year projection for one player instead.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import date
from typing import List, Optional

import pandas as pd

from salary_model.config import DEFAULT_PLAYERS_PATH, DEFAULT_VALUATION_CONFIG, PROCESSED_DIR
from salary_model.dashboard.dashboard_logic import filter_players
from salary_model.dashboard.report_export import build_markdown_report
from salary_model.data_collection.load_players import PlayerDataError, load_players, players_to_frame
from salary_model.models.valuation_config import ValuationConfigError, load_valuation_config
from salary_model.modules.model_types import ComparisonScenario
from salary_model.modules.projection_pipeline import ProjectionPipeline
from salary_model.modules.salary_module import SalaryModule


logger = logging.getLogger(__name__)

RANKING_COLS = [
    'PLAYER_NAME', 'TEAM', 'POSITION_LABEL', 'POSITION_CATEGORY', 'AGE',
    'DARKO', 'RATING_TIER', 'AGING_DELTA_PARTIAL', 'EFFECTIVE_DARKO',
    'SALARY_M', 'PROJECTED_VALUE_M', 'IS_MINIMUM', 'SALARY_SURPLUS_M',
    'CONTRACT_YEARS', 'TOTAL_SURPLUS_M',
]


def run_pipeline(
    players_path: str = DEFAULT_PLAYERS_PATH,
    output_dir: str = PROCESSED_DIR,
    config_name: str = DEFAULT_VALUATION_CONFIG,
    scenario: Optional[ComparisonScenario] = None,
    as_of: Optional[date] = None,
) -> pd.DataFrame:
    """Value the whole dataset and write salary_projections.csv to ``output_dir``."""
    config = load_valuation_config(config_name)
    scenario = scenario or ComparisonScenario()

    print("=" * 70)
    print("🏀 NBA Salary Model")
    print("=" * 70)

    print("\n[1/3] Loading players...")
    df = players_to_frame(load_players(players_path))
    print(f"  {len(df)} players")

    print("\n[2/3] Valuing players...")
    module = SalaryModule(config=config, scenario=scenario, as_of=as_of)
    df = module.analyze(df)
    df = df.sort_values('TOTAL_SURPLUS_M', ascending=False).reset_index(drop=True)

    print("\n[3/3] Report")
    print(module.report(df))

    os.makedirs(output_dir, exist_ok=True)
    output = os.path.join(output_dir, "salary_projections.csv")
    available_cols = [c for c in RANKING_COLS if c in df.columns]
    df[available_cols].to_csv(output, index=False)
    print(f"\nResults saved to {output}")

    return df


def print_player_projection(
    name: str,
    players_path: str = DEFAULT_PLAYERS_PATH,
    config_name: str = DEFAULT_VALUATION_CONFIG,
    scenario: Optional[ComparisonScenario] = None,
    as_of: Optional[date] = None,
) -> bool:
    config = load_valuation_config(config_name)
    scenario = scenario or ComparisonScenario()
    matches = filter_players(load_players(players_path), name, limit=1)
    if not matches:
        print(f"No player matching {name!r}")
        return False

    result = ProjectionPipeline(config).project(matches[0], scenario, as_of)
    print(build_markdown_report(result, scenario, config))
    return True


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Value NBA players from DARKO and playing time")
    parser.add_argument("--players", default=DEFAULT_PLAYERS_PATH, help="Path to players.json")
    parser.add_argument("--config", default=DEFAULT_VALUATION_CONFIG, help="Valuation config name")
    parser.add_argument("--games", type=int, default=70, help="Games played estimate (1-82)")
    parser.add_argument("--minutes", type=float, default=30.0, help="Minutes per game estimate (0-48)")
    parser.add_argument("--adjust", type=float, default=0.0, help="Manual DARKO adjustment (-5..5)")
    parser.add_argument("--as-of", type=date.fromisoformat, default=None, help="Season progress date (YYYY-MM-DD)")
    parser.add_argument("--player", default=None, help="Print the projection for one player")
    parser.add_argument("--output-dir", default=PROCESSED_DIR, help="Directory for CSV output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    scenario = ComparisonScenario(games=args.games, minutes=args.minutes, rating_adjustment=args.adjust)

    try:
        if args.player:
            found = print_player_projection(args.player, args.players, args.config, scenario, args.as_of)
            return 0 if found else 1
        run_pipeline(args.players, args.output_dir, args.config, scenario, args.as_of)
    except (PlayerDataError, ValuationConfigError) as exc:
        logger.error("%s", exc)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
