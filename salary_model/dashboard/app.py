"""
NBA Salary Model dashboard: side-by-side player valuation calculator.
"""

from __future__ import annotations

import os
import sys
from typing import List

import plotly.express as px
import streamlit as st

# Project path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from salary_model.config import DEFAULT_PLAYERS_PATH, DEFAULT_VALUATION_CONFIG
from salary_model.dashboard.dashboard_logic import (
    build_projection_table,
    build_rating_breakdown,
    build_value_chart_frame,
    filter_players,
    format_actual_salary,
    format_salary,
    format_surplus,
)
from salary_model.dashboard.report_export import build_markdown_report
from salary_model.data_collection.load_players import PlayerDataError, load_players
from salary_model.models.valuation_config import ValuationConfig, load_valuation_config
from salary_model.modules.model_types import ComparisonScenario, PlayerRecord
from salary_model.modules.projection_pipeline import ProjectionPipeline
from salary_model.modules.season_clock import current_season_progress, season_progress_label


st.set_page_config(
    page_title="NBA Salary Model",
    page_icon="🏀",
    layout="wide",
)

st.markdown(
    """
<style>
.card {
  border: 1px solid #dbe3ef;
  border-radius: 12px;
  padding: 0.9rem 1rem;
  background: #f7faff;
}
.metric-k { color: #5b6b82; font-size: 0.78rem; text-transform: uppercase; letter-spacing: 0.06em; }
.metric-v { font-size: 1.6rem; font-weight: 700; }
.good { color: #16a34a; }
.bad { color: #dc2626; }
</style>
""",
    unsafe_allow_html=True,
)


@st.cache_resource
def load_data(path: str = DEFAULT_PLAYERS_PATH) -> List[PlayerRecord]:
    return load_players(path)


def _render_header(config: ValuationConfig, players: List[PlayerRecord], progress_label: str):
    st.title("NBA Salary Model")
    st.caption("Contract value from DARKO and a custom minutes projection.")
    st.caption(
        f"Loaded {len(players)} players · Season {config.season.label} {progress_label} complete · "
        f"DARKO as of {config.season.data_as_of:%m/%d/%y} · Config {config.name} ({config.config_hash})"
    )


def _init_state():
    if "cards" not in st.session_state:
        st.session_state["cards"] = [1]


def _metric(col, label: str, value: str, css: str = ""):
    col.markdown(
        f"<div class='metric-k'>{label}</div><div class='metric-v {css}'>{value}</div>",
        unsafe_allow_html=True,
    )


def _render_card(card_id: int, index: int, players: List[PlayerRecord], pipeline: ProjectionPipeline, progress_label: str):
    config = pipeline.config
    header, remove = st.columns([5, 1])
    header.subheader(f"Player {index + 1}")
    if len(st.session_state["cards"]) > 1 and remove.button("Remove", key=f"remove_{card_id}"):
        st.session_state["cards"].remove(card_id)
        st.rerun()

    term = st.text_input("Search player", key=f"search_{card_id}")
    matches = filter_players(players, term)
    if not matches:
        if term:
            st.info("No matching players.")
        return

    choice = st.selectbox(
        "Player",
        range(len(matches)),
        format_func=lambda i: f"{matches[i].name} ({pipeline.aging.position_label(matches[i].position)})",
        key=f"player_{card_id}",
    )
    player = matches[choice]

    games = st.slider("Estimate games played (1-82)", 1, 82, 70, key=f"games_{card_id}")
    minutes = st.slider("Estimate minutes per game (0-48)", 0, 48, 30, key=f"minutes_{card_id}")
    adjustment = st.slider(
        "I know ball better than DARKO. Adjust by", -5.0, 5.0, 0.0, step=0.1, key=f"adjust_{card_id}"
    )

    scenario = ComparisonScenario(games=games, minutes=float(minutes), rating_adjustment=adjustment)
    result = pipeline.project(player, scenario)
    current = result.current

    with st.container():
        for line in build_rating_breakdown(player, scenario, result, pipeline.engine.rating_tier, progress_label):
            st.markdown(f"- {line}")
        st.caption(
            f"Position: {pipeline.aging.position_label(player.position)} · "
            f"Aging curve: {result.position_category.value} · Age: {player.age:.1f}"
        )

    c1, c2 = st.columns(2)
    _metric(c1, f"Projected Value ({current.season})", format_salary(current.salary))
    _metric(c2, f"Actual Salary ({current.season})", format_actual_salary(current.actual_salary))
    if current.surplus is not None:
        info = format_surplus(current.surplus)
        c2.markdown(f"<span class='{'good' if info['is_positive'] else 'bad'}'>{info['text']} surplus</span>", unsafe_allow_html=True)

    st.markdown("#### Multi-Year Projections")
    st.dataframe(build_projection_table(result), use_container_width=True, hide_index=True)

    total = format_surplus(result.total_surplus)
    _metric(st, "Total Contract Surplus", total["text"], "good" if total["is_positive"] else "bad")

    fig = px.bar(
        build_value_chart_frame(result),
        x="season",
        y="value_m",
        color="kind",
        barmode="group",
        title=f"{player.name}: projected vs actual ($M)",
    )
    st.plotly_chart(fig, use_container_width=True, key=f"chart_{card_id}")

    st.download_button(
        "Download report",
        build_markdown_report(result, scenario, config),
        file_name=f"{player.name.replace(' ', '_').lower()}_projection.md",
        key=f"download_{card_id}",
    )


def main():
    config = load_valuation_config(DEFAULT_VALUATION_CONFIG)
    try:
        players = load_data()
    except PlayerDataError as exc:
        st.error(f"Failed to load player data: {exc}")
        st.caption(f"Make sure `{DEFAULT_PLAYERS_PATH}` exists relative to the working directory.")
        return

    progress_label = season_progress_label(current_season_progress(config.season))
    _render_header(config, players, progress_label)
    _init_state()

    pipeline = ProjectionPipeline(config)
    cards: List[int] = st.session_state["cards"]
    columns = st.columns(min(len(cards), 3))
    for index, card_id in enumerate(list(cards)):
        with columns[index % len(columns)]:
            _render_card(card_id, index, players, pipeline, progress_label)

    if st.button("Add Player Comparison"):
        cards.append(max(cards) + 1)
        st.rerun()


if __name__ == "__main__":
    main()
