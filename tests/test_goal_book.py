from decimal import Decimal

import pytest

from wealthpath.utils.goal_book import (
    GoalBook,
    GoalFormError,
    build_goal_from_form,
    goal_form_from_goal,
    profile_form_problems,
    years_away_label,
)
from wealthpath.utils.plan_models import Goal


def _form(**overrides):
    form = {"name": "House", "category": "House", "targetYear": "2035", "targetAmount": "1234567", "currentValue": "0"}
    form.update(overrides)
    return form


def test_build_goal_normalizes_amounts_to_display_precision():
    g = build_goal_from_form(_form())
    assert g.name == "House"
    assert g.category == "House"
    assert g.target_year == 2035
    assert g.target_amount == Decimal("1235000")
    assert g.current_value == 0


def test_build_goal_reports_missing_fields():
    with pytest.raises(GoalFormError) as exc:
        build_goal_from_form(_form(name=" ", targetAmount=""))
    assert exc.value.missing == ["name", "targetAmount"]
    assert isinstance(exc.value, ValueError)


def test_build_goal_keeps_id_when_editing():
    g = build_goal_from_form(_form(), goal_id="abc")
    assert g.id == "abc"


def test_goal_form_round_trip():
    g = build_goal_from_form(_form(targetAmount="₹50.00L", currentValue="250000"))
    form = goal_form_from_goal(g)
    assert form["targetAmount"] == "5000000"
    assert form["currentValue"] == "250000"
    again = build_goal_from_form(form, goal_id=g.id)
    assert again == g


def test_profile_form_problems():
    assert profile_form_problems({}) == [
        "Please enter at least some financial information (Age, Monthly SIP, or Current AUM)"
    ]
    assert profile_form_problems({"monthlySIP": "10000"}) == []
    problems = profile_form_problems({"currentAge": "30", "expectedReturn": "lots"})
    assert problems == ["'expectedReturn' is not a number and will be treated as empty"]


def test_years_away_label():
    assert years_away_label(Goal(name="a", target_year=2026), 2025) == "1 year"
    assert years_away_label(Goal(name="a", target_year=2035), 2025) == "10 years"


def test_goal_book_is_immutable():
    a = Goal(name="A", target_year=2030)
    b = Goal(name="B", target_year=2028)
    empty = GoalBook()
    book = empty.add(a).add(b)

    assert len(empty) == 0
    assert len(book) == 2
    assert book.get(a.id) == a
    assert [g.name for g in book.sorted_by_year()] == ["B", "A"]
    assert [g.name for g in book] == ["A", "B"]

    smaller = book.remove(a.id)
    assert len(smaller) == 1
    assert len(book) == 2


def test_goal_book_replace_and_upsert():
    a = Goal(name="A", target_year=2030)
    book = GoalBook().add(a)
    edited = a.model_copy(update={"name": "A2"})

    assert book.replace(edited).get(a.id).name == "A2"
    assert len(book.upsert(edited)) == 1
    assert len(book.upsert(Goal(name="C", target_year=2031))) == 2

    with pytest.raises(KeyError):
        book.replace(Goal(name="missing"))
    with pytest.raises(ValueError):
        book.add(a)


def test_furthest_goal():
    assert GoalBook().furthest_goal() is None
    a = Goal(name="A", target_year=2040)
    b = Goal(name="B", target_year=2040)
    c = Goal(name="C", target_year=2030)
    assert GoalBook((c, a, b)).furthest_goal() == a


@pytest.mark.parametrize("year", ["999999999", "1e9", "2126"])
def test_build_goal_rejects_target_years_too_far_out(year):
    with pytest.raises(GoalFormError) as exc:
        build_goal_from_form(_form(targetYear=year), current_year=2025)
    assert exc.value.missing == []
    assert "more than 100 years away" in str(exc.value)


def test_build_goal_rejects_non_numeric_target_year():
    with pytest.raises(GoalFormError) as exc:
        build_goal_from_form(_form(targetYear="next year"), current_year=2025)
    assert exc.value.problems == ["Target year 'next year' is not a number"]


def test_build_goal_accepts_last_year_in_range():
    g = build_goal_from_form(_form(targetYear="2125"), current_year=2025)
    assert g.target_year == 2125
