import uuid

import streamlit as st

from wealthpath.core.schemas import PlanRequest
from wealthpath.services.plan_service import PlanService
from wealthpath.web_app.ui_helpers import _badge, _fmt, rows_frame, trajectory_figure


def render():
    st.subheader("Dashboard")
    profile = st.session_state.get("profile")
    if profile is None:
        st.info("Save your financial profile first to see projections.")
        return

    # recomputed on every rerun; nothing is cached
    req = PlanRequest(
        request_id=str(uuid.uuid4()),
        session_id=st.session_state["session_id"],
        profile=profile,
        goals=list(st.session_state["goal_book"]),
    )
    resp = PlanService().run(req)
    if resp.error:
        st.error(f"Plan computation failed: {resp.error.get('message')}")
        return

    summary = resp.data["summary"]
    m1, m2, m3 = st.columns(3)
    m1.metric("Projected wealth", _fmt(summary["total_projected_wealth"]))
    m2.metric("Total goals", _fmt(summary["total_goals_amount"]))
    m3.metric("Overall funding", f"{round(summary['overall_funding_ratio'])}%")

    for w in resp.warnings:
        _badge(w, "warn")

    st.plotly_chart(trajectory_figure(summary["rows"]), use_container_width=True)

    for gm in summary["goal_metrics"]:
        kind = "ok" if gm["is_on_track"] else "bad"
        _badge(f"{gm['goal_name']}: {round(gm['funding_ratio'])}% funded", kind)
        st.progress(min(100, int(gm["funding_ratio"])) / 100)
        label = "Surplus" if gm["is_on_track"] else "Shortfall"
        st.caption(f"{label}: {_fmt(abs(gm['shortfall']))}")

    with st.expander("Year-by-year projection"):
        st.dataframe(rows_frame(summary["rows"]), use_container_width=True, hide_index=True)

    with st.expander("Report"):
        st.markdown(resp.answer_md)
