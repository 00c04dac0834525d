from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation, getcontext
from typing import Iterable, List, Optional, Sequence, Tuple

from wealthpath.utils.logging import get_logger
from wealthpath.utils.plan_models import (
    FinancialProfile, Goal, GoalMetrics, PlanSummary, ProjectionRow
)

getcontext().prec = 28

log = get_logger(__name__)

DEFAULT_HORIZON_YEARS = 30
MAX_PROJECTION_YEARS = 150
MONTHS_PER_YEAR = 12

_ONE = Decimal(1)
_HUNDRED = Decimal(100)


def _safe_float(x: Decimal) -> float:
    try:
        return float(x.quantize(Decimal("0.01")))
    except InvalidOperation:
        # too many digits to keep cents at this precision
        return float(x)


def _pct(x: Decimal) -> Decimal:
    return x / _HUNDRED


def _resolve_year(current_year: Optional[int]) -> int:
    return date.today().year if current_year is None else int(current_year)


def _power(base: Decimal, n: int) -> Decimal:
    # 0 ** 0 is 1, as in float math; Decimal raises InvalidOperation for it
    if n == 0:
        return _ONE
    return base ** n


def _clamp_years(years: int) -> int:
    return min(years, MAX_PROJECTION_YEARS)


def _monthly_contribution_for_year(profile: FinancialProfile, year_offset: int) -> Decimal:
    # step-up happens once per year, not per month
    growth = _ONE + _pct(profile.annual_contribution_growth_pct)
    return profile.monthly_contribution * _power(growth, year_offset)


def _contributions_with_growth(monthly: Decimal, monthly_rate: Decimal) -> Decimal:
    # month 0 compounds for 12 periods, month 11 for 1
    total = Decimal(0)
    for month in range(MONTHS_PER_YEAR):
        total += monthly * _power(_ONE + monthly_rate, MONTHS_PER_YEAR - month)
    return total


def _advance_year(wealth: Decimal, monthly: Decimal, annual_rate: Decimal) -> Decimal:
    """One projection year: grow the existing wealth, then add the year's SIPs."""
    wealth = wealth * (_ONE + annual_rate)
    return wealth + _contributions_with_growth(monthly, annual_rate / MONTHS_PER_YEAR)


def project_wealth(profile: FinancialProfile, years: int) -> Decimal:
    """
    Wealth after `years` full projection years; current wealth when years <= 0.
    Horizons longer than MAX_PROJECTION_YEARS are evaluated at that bound.
    """
    wealth = profile.current_wealth
    if years <= 0:
        return wealth

    r = _pct(profile.expected_return_pct)
    for k in range(_clamp_years(years)):
        wealth = _advance_year(wealth, _monthly_contribution_for_year(profile, k), r)
    return wealth


def inflation_adjusted_target(amount: Decimal, years: int, inflation_pct: Decimal) -> Decimal:
    if years <= 0:
        return amount
    return amount * _power(_ONE + _pct(inflation_pct), _clamp_years(years))


def _furthest_goal_year(goals: Sequence[Goal]) -> Optional[int]:
    if not goals:
        return None
    return max(g.target_year for g in goals)


def trajectory_horizon(goals: Sequence[Goal], current_year: int, horizon_years: int = DEFAULT_HORIZON_YEARS) -> int:
    """Last year offset shown in the trajectory (may be negative: no rows)."""
    furthest = _furthest_goal_year(goals)
    if furthest is None:
        return _clamp_years(horizon_years)
    return _clamp_years(min(furthest, current_year + horizon_years) - current_year)


def compute_trajectory(
    profile: FinancialProfile,
    goals: Iterable[Goal],
    *,
    current_year: Optional[int] = None,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
) -> List[ProjectionRow]:
    goals = list(goals)
    cy = _resolve_year(current_year)
    last_offset = trajectory_horizon(goals, cy, horizon_years)

    r = _pct(profile.expected_return_pct)
    wealth = profile.current_wealth
    rows: List[ProjectionRow] = []

    for k in range(last_offset + 1):
        year = cy + k
        monthly = _monthly_contribution_for_year(profile, k)
        wealth = _advance_year(wealth, monthly, r)

        required = Decimal(0)
        for g in goals:
            if g.target_year == year:
                required += inflation_adjusted_target(g.target_amount, k, profile.inflation_pct)

        rows.append(
            ProjectionRow(
                year=year,
                age=int(profile.current_age + k),
                investment_value=_safe_float(wealth),
                monthly_contribution=_safe_float(monthly),
                annual_contribution=_safe_float(monthly * MONTHS_PER_YEAR),
                goals_required=_safe_float(required),
                surplus_or_deficit=_safe_float(wealth - required),
            )
        )

    log.debug("trajectory computed current_year=%s rows=%d goals=%d", cy, len(rows), len(goals))
    return rows


def _evaluate_goal(profile: FinancialProfile, goal: Goal, current_year: int) -> Tuple[GoalMetrics, Decimal]:
    """Metrics for one goal plus its unrounded funding ratio."""
    years = goal.target_year - current_year
    adjusted = inflation_adjusted_target(goal.target_amount, years, profile.inflation_pct)
    # every goal sees the whole projected wealth; nothing is allocated between goals
    projected = project_wealth(profile, years) + goal.current_value

    shortfall = adjusted - projected
    if adjusted > 0:
        ratio = min(_HUNDRED, max(Decimal(0), projected / adjusted * _HUNDRED))
    else:
        ratio = Decimal(0)

    metrics = GoalMetrics(
        goal_id=goal.id,
        goal_name=goal.name,
        target_year=goal.target_year,
        years_to_goal=years,
        adjusted_target=_safe_float(adjusted),
        projected_value=_safe_float(projected),
        shortfall=_safe_float(shortfall),
        funding_ratio=_safe_float(ratio),
        is_on_track=shortfall <= 0,
    )
    return metrics, ratio


def compute_goal_metrics(
    profile: FinancialProfile,
    goal: Goal,
    *,
    current_year: Optional[int] = None,
) -> GoalMetrics:
    metrics, _ = _evaluate_goal(profile, goal, _resolve_year(current_year))
    return metrics


def compute_total_projected_wealth(
    profile: FinancialProfile,
    goals: Iterable[Goal],
    *,
    current_year: Optional[int] = None,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
) -> float:
    """Projected wealth at the furthest goal year (uncapped), or after `horizon_years` with no goals."""
    cy = _resolve_year(current_year)
    furthest = _furthest_goal_year(list(goals))
    years = horizon_years if furthest is None else furthest - cy
    return _safe_float(project_wealth(profile, years))


def compute_total_goals_amount(goals: Iterable[Goal]) -> float:
    return _safe_float(sum((g.target_amount for g in goals), Decimal(0)))


def _mean_funding_ratio(ratios: Sequence[Decimal]) -> float:
    if not ratios:
        return 0.0
    return _safe_float(sum(ratios, Decimal(0)) / len(ratios))


def compute_overall_funding_ratio(
    profile: FinancialProfile,
    goals: Iterable[Goal],
    *,
    current_year: Optional[int] = None,
) -> float:
    goals = list(goals)
    if not goals:
        return 0.0
    cy = _resolve_year(current_year)
    return _mean_funding_ratio([_evaluate_goal(profile, g, cy)[1] for g in goals])


def compute_plan_summary(
    profile: FinancialProfile,
    goals: Iterable[Goal],
    *,
    current_year: Optional[int] = None,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
) -> PlanSummary:
    goals = sorted(goals, key=lambda g: g.target_year)
    cy = _resolve_year(current_year)
    warnings: List[str] = []

    rows = compute_trajectory(profile, goals, current_year=cy, horizon_years=horizon_years)
    evaluated = [_evaluate_goal(profile, g, cy) for g in goals]
    metrics = [m for m, _ in evaluated]
    total_wealth = compute_total_projected_wealth(profile, goals, current_year=cy, horizon_years=horizon_years)

    for g in goals:
        if g.target_year <= cy:
            warnings.append(f"Goal '{g.name}' has target year {g.target_year}, which is not in the future; no inflation or growth applied.")
        elif g.target_year > cy + horizon_years:
            warnings.append(f"Goal '{g.name}' ({g.target_year}) is beyond the {horizon_years}-year trajectory; evaluated individually only.")
        if g.target_year - cy > MAX_PROJECTION_YEARS:
            warnings.append(f"Goal '{g.name}' ({g.target_year}) is more than {MAX_PROJECTION_YEARS} years away; it is projected over {MAX_PROJECTION_YEARS} years.")

    combined_target = sum((m.adjusted_target for m in metrics), 0.0)
    if len(metrics) > 1 and combined_target > total_wealth:
        warnings.append(
            "Combined inflation-adjusted goals exceed projected wealth; each goal is checked against the full projected wealth, not a share of it."
        )

    log.debug("plan summary current_year=%s goals=%d warnings=%d", cy, len(goals), len(warnings))

    return PlanSummary(
        current_year=cy,
        horizon_years=horizon_years,
        rows=rows,
        goal_metrics=metrics,
        total_projected_wealth=total_wealth,
        total_goals_amount=compute_total_goals_amount(goals),
        overall_funding_ratio=_mean_funding_ratio([ratio for _, ratio in evaluated]),
        on_track_count=sum(1 for m in metrics if m.is_on_track),
        furthest_goal_year=_furthest_goal_year(goals),
        warnings=warnings,
    )
