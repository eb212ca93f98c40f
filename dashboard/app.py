"""
Career Pathfinder — Streamlit Dashboard
=======================================

Optional local UI for a user's quiz history. Reads the SQLite attempt store
and ``data/outputs/recommendations/`` only; taking the quiz stays in the CLI.

App structure (3 tabs)
----------------------
  1. Latest Result — Primary / secondary paths of the most recent attempt,
                     with roadmap and learning resources.
  2. History       — Attempt table, completion rate, streak, monthly trends.
  3. Distribution  — How often each career path came out on top, and the
                     mean raw score per category.

Usage
-----
    pip install -e ".[dashboard]"
    streamlit run dashboard/app.py
"""

from __future__ import annotations

import sys
from pathlib import Path

# ── Ensure project root is importable ────────────────────────────────────────
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st

# ── Must be the first Streamlit call ─────────────────────────────────────────
st.set_page_config(
    page_title="Career Pathfinder",
    layout="wide",
    initial_sidebar_state="expanded",
)

import pandas as pd

from career_pathfinder.config import load_config, resolve_path
from career_pathfinder.errors import ConfigurationError
from career_pathfinder.quiz.catalog import load_career_catalog
from career_pathfinder.recommendations.ranker import build_recommendation_set
from career_pathfinder.reporting.history import (
    average_scores,
    career_path_distribution,
    monthly_trends,
    summarize_history,
)
from career_pathfinder.taxonomy.career_taxonomy import RoadmapTier
from dashboard.data_loader import load_attempts, load_latest_report, load_user_ids

_config = load_config()
_DB_PATH = str(resolve_path(_config.database.db_path))
_REC_DIR = str(resolve_path(_config.output.export_dir) / "recommendations")

try:
    _catalog = load_career_catalog(resolve_path(_config.quiz.catalog_file))
except ConfigurationError as exc:
    st.error(f"Career catalog could not be loaded: {exc}")
    st.stop()


# ── Sidebar ───────────────────────────────────────────────────────────────────

with st.sidebar:
    st.title("Career Pathfinder")
    st.caption("Local quiz history — reads the attempt database only")
    st.divider()

    known_users = load_user_ids(_DB_PATH)
    if known_users:
        user_id = st.selectbox("User", options=known_users, index=0)
    else:
        user_id = st.text_input("User", value="")

    if st.button("Clear cache", help="Force re-read of the database and reports."):
        st.cache_data.clear()
        st.rerun()

    st.divider()
    st.caption("Take the quiz from the terminal:")
    st.code("career-pathfinder take-quiz --user <you>")


def _no_data_msg() -> None:
    st.info(
        f"No quiz attempts recorded for **{user_id or '(no user)'}**. "
        "Run `career-pathfinder take-quiz` to get your first recommendation."
    )


attempts = load_attempts(_DB_PATH, user_id) if user_id else []

tab_latest, tab_history, tab_dist = st.tabs(["Latest Result", "History", "Distribution"])


# ══════════════════════════════════════════════════════════════════════════════
# Tab 1 — Latest Result
# ══════════════════════════════════════════════════════════════════════════════

with tab_latest:
    st.header("Your Career Path")

    latest_scores = None
    if attempts:
        latest_scores = attempts[0].scores
        st.caption(f"From attempt #{attempts[0].attempt_id} on {attempts[0].created_at:%Y-%m-%d %H:%M} UTC")
    else:
        report = load_latest_report(user_id, _REC_DIR) if user_id else None
        if report is not None:
            latest_scores = report[1]
            st.caption("From the latest exported recommendations report")

    if latest_scores is None:
        _no_data_msg()
    else:
        result = build_recommendation_set(
            latest_scores, _catalog, secondary_count=_config.quiz.secondary_count
        )
        primary = result.primary.career_path

        st.subheader(f"{primary.title}")
        st.write(primary.description)
        if primary.skills:
            st.markdown("**Key skills:** " + ", ".join(primary.skills))

        cols = st.columns(len(RoadmapTier))
        for col, tier in zip(cols, RoadmapTier):
            with col:
                st.markdown(f"**{tier.value.capitalize()}**")
                for step in primary.roadmap.steps_for(tier):
                    st.markdown(f"- {step}")

        if primary.resources:
            st.markdown("**Learning resources**")
            for res in primary.resources:
                st.markdown(f"- [{res.name}]({res.url}) ({res.resource_type})")

        if result.secondary:
            st.divider()
            st.markdown("**Also worth exploring**")
            for rec in result.secondary:
                st.markdown(f"- #{rec.rank} {rec.career_path.title} (score {rec.score})")

        st.divider()
        df_scores = pd.DataFrame(
            [{"Category": r.category.value, "Score": r.score} for r in result.all]
        ).set_index("Category")
        st.bar_chart(df_scores)


# ══════════════════════════════════════════════════════════════════════════════
# Tab 2 — History
# ══════════════════════════════════════════════════════════════════════════════

with tab_history:
    st.header("Quiz History")

    if not attempts:
        _no_data_msg()
    else:
        summary = summarize_history(attempts)
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Attempts", summary["total_attempts"])
        c2.metric("Completion rate", f"{summary['completion_rate']:.1f}%")
        c3.metric("Streak", f"{summary['streak_days']} day(s)")
        c4.metric("Paths explored", summary["unique_paths"])

        df_hist = pd.DataFrame(
            [
                {
                    "ID":        a.attempt_id,
                    "Taken":     a.created_at,
                    "Career":    _catalog[a.category].title,
                    "Score":     a.score,
                    "Answered":  f"{a.answered_count}/{a.total_questions}",
                }
                for a in attempts
            ]
        )
        st.dataframe(df_hist, use_container_width=True, hide_index=True)

        trends = monthly_trends(attempts)
        if len(trends) > 1:
            st.subheader("Monthly trends")
            df_trends = pd.DataFrame(trends).set_index("month").fillna(0)
            st.line_chart(df_trends)


# ══════════════════════════════════════════════════════════════════════════════
# Tab 3 — Distribution
# ══════════════════════════════════════════════════════════════════════════════

with tab_dist:
    st.header("Career Path Distribution")

    if not attempts:
        _no_data_msg()
    else:
        dist = career_path_distribution(attempts)
        df_dist = pd.DataFrame(dist).set_index("category")
        st.bar_chart(df_dist["count"])
        st.dataframe(df_dist, use_container_width=True)

        st.subheader("Average score per category")
        avg = average_scores(attempts)
        df_avg = pd.DataFrame(
            [{"Category": cat.value, "Average": value} for cat, value in avg.items()]
        ).set_index("Category")
        st.bar_chart(df_avg)
