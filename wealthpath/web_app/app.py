import streamlit as st
import uuid
from wealthpath.core.config import SETTINGS
from wealthpath.utils.logging import setup_logging
from wealthpath.utils.goal_book import GoalBook
from wealthpath.pages import profile, goals, dashboard

# Setup logging
setup_logging(SETTINGS.log_level)

st.set_page_config(page_title="Wealth Path", layout="wide")

# Session initialization
def _init_session() -> None:
    st.session_state.setdefault("session_id", str(uuid.uuid4()))
    st.session_state.setdefault("profile_form", {})
    st.session_state.setdefault("profile", None)
    st.session_state.setdefault("goal_book", GoalBook())
    st.session_state.setdefault("editing_goal_id", None)

_init_session()

with st.sidebar:
    st.subheader("Assumptions")
    st.caption(f"Trajectory horizon: {SETTINGS.projection_horizon_years} years")
    st.caption(f"Goals: {len(st.session_state['goal_book'])}")
    st.divider()
    st.caption(f"Session: {st.session_state['session_id']}")

# Main UI
st.title("Wealth Path")

tab_profile, tab_goals, tab_dashboard = st.tabs(["Profile", "Goals", "Dashboard"])

with tab_profile:
    profile.render()

with tab_goals:
    goals.render()

with tab_dashboard:
    dashboard.render()
