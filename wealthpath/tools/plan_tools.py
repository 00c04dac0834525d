from __future__ import annotations

from typing import Any, Dict, List, Optional

from wealthpath.core.config import SETTINGS
from wealthpath.utils.plan_models import FinancialProfile, Goal
from wealthpath.utils.projection_engine import compute_goal_metrics, compute_plan_summary

_PROFILE_ALIASES = {
    "age": "current_age",
    "sip": "monthly_contribution",
    "monthly_sip": "monthly_contribution",
    "aum": "current_wealth",
    "current_aum": "current_wealth",
    "expected_return": "expected_return_pct",
    "sip_step_up_pct": "annual_contribution_growth_pct",
    "inflation": "inflation_pct",
}


def _profile_from_payload(payload: Optional[Dict[str, Any]]) -> FinancialProfile:
    p = dict(payload or {})

    # map common aliases -> canonical fields expected by FinancialProfile
    for alias, canonical in _PROFILE_ALIASES.items():
        if canonical not in p and alias in p:
            p[canonical] = p.pop(alias)

    return FinancialProfile(**p)


def _goals_from_payload(goals: Optional[List[Any]]) -> List[Goal]:
    out: List[Goal] = []
    for g in goals or []:
        out.append(g if isinstance(g, Goal) else Goal(**dict(g)))
    return out


def tool_compute_plan(payload: Dict[str, Any]) -> Dict[str, Any]:
    p = dict(payload or {})
    profile = _profile_from_payload(p.get("profile"))
    goals = _goals_from_payload(p.get("goals"))

    horizon = p.get("horizon_years")
    out = compute_plan_summary(
        profile,
        goals,
        current_year=p.get("current_year"),
        horizon_years=SETTINGS.projection_horizon_years if horizon is None else int(horizon),
    )
    return out.model_dump()


def tool_compute_goal_metrics(
    profile_payload: Dict[str, Any],
    goal_payload: Dict[str, Any],
    current_year: Optional[int] = None,
) -> Dict[str, Any]:
    profile = _profile_from_payload(profile_payload)
    goal = _goals_from_payload([goal_payload])[0]
    return compute_goal_metrics(profile, goal, current_year=current_year).model_dump()
