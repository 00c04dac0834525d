import streamlit as st

from wealthpath.utils.goal_book import MISSING_FINANCIALS_MSG, GoalBook, profile_form_problems
from wealthpath.utils.plan_models import FinancialProfile

_FIELDS = [
    ("currentAge", "Current age", "30"),
    ("monthlySIP", "Monthly SIP", "10000"),
    ("expectedReturn", "Expected return (% p.a.)", "12"),
    ("currentAUM", "Current wealth (AUM)", "500000"),
    ("annualSIPIncrease", "Annual SIP increase (%)", "10"),
    ("inflationRate", "Inflation (% p.a.)", "6"),
]


def render():
    st.subheader("Financial profile")
    form = st.session_state["profile_form"]

    cols = st.columns(2, gap="large")
    for i, (key, label, placeholder) in enumerate(_FIELDS):
        with cols[i % 2]:
            form[key] = st.text_input(label, value=form.get(key, ""), placeholder=placeholder, key=f"pf_{key}")

    c1, c2 = st.columns([0.2, 0.8])
    with c1:
        if st.button("Save profile", type="primary"):
            problems = profile_form_problems(form)
            if MISSING_FINANCIALS_MSG in problems:
                st.error(MISSING_FINANCIALS_MSG)
            else:
                for p in problems:
                    st.warning(p)
                st.session_state["profile"] = FinancialProfile(**form)
                st.success("Profile saved. Open the Dashboard tab.")
    with c2:
        if st.button("Reset"):
            st.session_state["profile_form"] = {}
            for key, _, _ in _FIELDS:
                st.session_state.pop(f"pf_{key}", None)
            st.session_state["profile"] = None
            st.session_state["goal_book"] = GoalBook()
            st.rerun()
