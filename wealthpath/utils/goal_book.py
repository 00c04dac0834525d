from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from wealthpath.utils.amount_codec import normalize_amount, read_number
from wealthpath.utils.plan_models import Goal

REQUIRED_GOAL_FIELDS = ("name", "targetYear", "targetAmount")
PROFILE_FINANCIAL_FIELDS = ("currentAge", "monthlySIP", "currentAUM")
PROFILE_NUMERIC_FIELDS = PROFILE_FINANCIAL_FIELDS + ("expectedReturn", "annualSIPIncrease", "inflationRate")
MISSING_FINANCIALS_MSG = "Please enter at least some financial information (Age, Monthly SIP, or Current AUM)"
MAX_GOAL_HORIZON_YEARS = 100


class GoalFormError(ValueError):
    """Raised when the goal form is missing required fields or holds unusable values."""

    def __init__(self, missing: List[str], problems: Optional[List[str]] = None) -> None:
        self.missing = list(missing)
        self.problems = list(problems or [])
        parts = []
        if self.missing:
            parts.append(f"Missing required goal fields: {', '.join(self.missing)}")
        parts.extend(self.problems)
        super().__init__("; ".join(parts))


def _blank(v: Any) -> bool:
    return v is None or (isinstance(v, str) and v.strip() == "")


def _target_year_problem(raw: Any, current_year: int) -> Optional[str]:
    year = read_number(raw)
    if year is None:
        return f"Target year '{raw}' is not a number"
    if year > current_year + MAX_GOAL_HORIZON_YEARS:
        return f"Target year {int(year)} is more than {MAX_GOAL_HORIZON_YEARS} years away"
    return None


def build_goal_from_form(
    form: Mapping[str, Any],
    *,
    goal_id: Optional[str] = None,
    current_year: Optional[int] = None,
) -> Goal:
    """
    Turn raw goal-form fields into a Goal. Amounts are stored at the precision
    their display string keeps (e.g. 1234567 -> 12.35L -> 1235000).
    """
    missing = [k for k in REQUIRED_GOAL_FIELDS if _blank(form.get(k))]
    if missing:
        raise GoalFormError(missing)

    cy = date.today().year if current_year is None else current_year
    problem = _target_year_problem(form["targetYear"], cy)
    if problem:
        raise GoalFormError([], [problem])

    fields: Dict[str, Any] = {
        "name": form["name"],
        "category": form.get("category") or "Retirement",
        "target_year": form["targetYear"],
        "target_amount": normalize_amount(form["targetAmount"]),
        "current_value": normalize_amount(form.get("currentValue") or 0),
    }
    if goal_id:
        fields["id"] = goal_id
    return Goal(**fields)


def goal_form_from_goal(goal: Goal) -> Dict[str, str]:
    """Inverse of build_goal_from_form, for editing an existing goal."""
    return {
        "name": goal.name,
        "category": goal.category,
        "targetYear": str(goal.target_year),
        "targetAmount": f"{goal.target_amount.normalize():f}",
        "currentValue": f"{goal.current_value.normalize():f}",
    }


def profile_form_problems(form: Mapping[str, Any]) -> List[str]:
    problems: List[str] = []
    if all(_blank(form.get(k)) for k in PROFILE_FINANCIAL_FIELDS):
        problems.append(MISSING_FINANCIALS_MSG)
    for k in PROFILE_NUMERIC_FIELDS:
        v = form.get(k)
        if not _blank(v) and read_number(v) is None:
            problems.append(f"'{k}' is not a number and will be treated as empty")
    return problems


def years_away_label(goal: Goal, current_year: int) -> str:
    n = goal.years_away(current_year)
    return f"{n} {'year' if n == 1 else 'years'}"


class GoalBook:
    """Immutable in-memory goal collection; every change returns a new book."""

    def __init__(self, goals: Optional[Tuple[Goal, ...]] = None) -> None:
        self._goals: Tuple[Goal, ...] = tuple(goals or ())

    def __len__(self) -> int:
        return len(self._goals)

    def __iter__(self) -> Iterator[Goal]:
        return iter(self._goals)

    def __repr__(self) -> str:
        return f"GoalBook({len(self._goals)} goals)"

    @property
    def goals(self) -> Tuple[Goal, ...]:
        return self._goals

    def get(self, goal_id: str) -> Optional[Goal]:
        for g in self._goals:
            if g.id == goal_id:
                return g
        return None

    def add(self, goal: Goal) -> "GoalBook":
        if self.get(goal.id) is not None:
            raise ValueError(f"Goal id already present: {goal.id}")
        return GoalBook(self._goals + (goal,))

    def replace(self, goal: Goal) -> "GoalBook":
        if self.get(goal.id) is None:
            raise KeyError(goal.id)
        return GoalBook(tuple(goal if g.id == goal.id else g for g in self._goals))

    def upsert(self, goal: Goal) -> "GoalBook":
        return self.replace(goal) if self.get(goal.id) is not None else self.add(goal)

    def remove(self, goal_id: str) -> "GoalBook":
        return GoalBook(tuple(g for g in self._goals if g.id != goal_id))

    def sorted_by_year(self) -> List[Goal]:
        return sorted(self._goals, key=lambda g: g.target_year)

    def furthest_goal(self) -> Optional[Goal]:
        if not self._goals:
            return None
        # first goal wins ties
        best = self._goals[0]
        for g in self._goals[1:]:
            if g.target_year > best.target_year:
                best = g
        return best
