from datetime import date
from typing import Optional

import streamlit as st

from wealthpath.utils.goal_book import (
    GoalBook, GoalFormError, build_goal_from_form, goal_form_from_goal, years_away_label
)
from wealthpath.utils.plan_models import GOAL_CATEGORIES

_EMPTY_FORM = {"name": "", "category": "Retirement", "targetYear": "", "targetAmount": "", "currentValue": "0"}


def _goal_form(editing_id: Optional[str]) -> None:
    form = st.session_state.setdefault("goal_form", dict(_EMPTY_FORM))

    form["name"] = st.text_input("Goal name", value=form["name"])
    form["category"] = st.selectbox("Category", GOAL_CATEGORIES, index=GOAL_CATEGORIES.index(form["category"]))
    form["targetYear"] = st.text_input("Target year", value=form["targetYear"], placeholder=str(date.today().year + 10))
    form["targetAmount"] = st.text_input("Target amount (today's money)", value=form["targetAmount"], placeholder="5000000")
    form["currentValue"] = st.text_input("Already saved for this goal", value=form["currentValue"])

    if st.button("Update goal" if editing_id else "Add goal", type="primary"):
        book: GoalBook = st.session_state["goal_book"]
        try:
            goal = build_goal_from_form(form, goal_id=editing_id)
        except GoalFormError as e:
            st.error(str(e))
            return
        st.session_state["goal_book"] = book.upsert(goal)
        st.session_state["goal_form"] = dict(_EMPTY_FORM)
        st.session_state["editing_goal_id"] = None
        st.rerun()


def render():
    st.subheader("Life goals")
    book: GoalBook = st.session_state["goal_book"]
    cy = date.today().year

    col_l, col_r = st.columns([0.45, 0.55], gap="large")

    with col_l:
        _goal_form(st.session_state.get("editing_goal_id"))

    with col_r:
        if not len(book):
            st.info("No goals yet. Add one on the left.")
        for g in book.sorted_by_year():
            with st.container(border=True):
                st.markdown(f"**{g.name}** · {g.category}")
                st.caption(f"{g.target_year} • {years_away_label(g, cy)} away")
                st.write(f"Target {g.display_target_amount} · saved {g.display_current_value}")
                b1, b2 = st.columns(2)
                if b1.button("Edit", key=f"edit_{g.id}"):
                    st.session_state["goal_form"] = goal_form_from_goal(g)
                    st.session_state["editing_goal_id"] = g.id
                    st.rerun()
                if b2.button("Delete", key=f"del_{g.id}"):
                    st.session_state["goal_book"] = book.remove(g.id)
                    st.rerun()
