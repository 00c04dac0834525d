from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any, List, Literal, Optional, get_args

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from wealthpath.utils.amount_codec import format_amount, parse_amount, read_number

GoalCategory = Literal["Retirement", "Education", "House", "Vacation", "Other"]
GOAL_CATEGORIES = get_args(GoalCategory)

DEFAULT_EXPECTED_RETURN_PCT = Decimal("12")
DEFAULT_CONTRIBUTION_GROWTH_PCT = Decimal("10")
DEFAULT_INFLATION_PCT = Decimal("6")


def _or_default(v: Any, default: Decimal) -> Decimal:
    d = read_number(v)
    return default if d is None else d


def _non_negative(v: Any) -> Decimal:
    d = read_number(v)
    if d is None or d < 0:
        return Decimal(0)
    return d


class FinancialProfile(BaseModel):
    """
    Normalized financial profile. Construction never fails on numeric input:
    blank or unparsable fields fall back to their documented defaults.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    current_age: Decimal = Field(
        default=Decimal(0),
        validation_alias=AliasChoices("current_age", "currentAge"),
    )
    monthly_contribution: Decimal = Field(
        default=Decimal(0),
        validation_alias=AliasChoices("monthly_contribution", "monthlyContribution", "monthlySIP"),
    )
    expected_return_pct: Decimal = Field(
        default=DEFAULT_EXPECTED_RETURN_PCT,
        validation_alias=AliasChoices("expected_return_pct", "expectedReturnPct", "expectedReturn"),
    )
    current_wealth: Decimal = Field(
        default=Decimal(0),
        validation_alias=AliasChoices("current_wealth", "currentWealth", "currentAUM"),
    )
    annual_contribution_growth_pct: Decimal = Field(
        default=DEFAULT_CONTRIBUTION_GROWTH_PCT,
        validation_alias=AliasChoices(
            "annual_contribution_growth_pct", "annualContributionGrowthPct", "annualSIPIncrease"
        ),
    )
    inflation_pct: Decimal = Field(
        default=DEFAULT_INFLATION_PCT,
        validation_alias=AliasChoices("inflation_pct", "inflationPct", "inflationRate"),
    )

    @field_validator("current_age", "monthly_contribution", "current_wealth", mode="before")
    @classmethod
    def _amounts(cls, v: Any) -> Decimal:
        return _non_negative(v)

    @field_validator("expected_return_pct", mode="before")
    @classmethod
    def _return(cls, v: Any) -> Decimal:
        return _or_default(v, DEFAULT_EXPECTED_RETURN_PCT)

    @field_validator("annual_contribution_growth_pct", mode="before")
    @classmethod
    def _growth(cls, v: Any) -> Decimal:
        return _or_default(v, DEFAULT_CONTRIBUTION_GROWTH_PCT)

    @field_validator("inflation_pct", mode="before")
    @classmethod
    def _inflation(cls, v: Any) -> Decimal:
        return _or_default(v, DEFAULT_INFLATION_PCT)


class Goal(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str = Field(..., min_length=1)
    category: GoalCategory = "Other"
    target_year: int = Field(default=0, validation_alias=AliasChoices("target_year", "targetYear"))
    target_amount: Decimal = Field(
        default=Decimal(0), validation_alias=AliasChoices("target_amount", "targetAmount")
    )
    current_value: Decimal = Field(
        default=Decimal(0), validation_alias=AliasChoices("current_value", "currentValue")
    )

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v: Any) -> str:
        return str(v).strip() if v is not None else ""

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, v: Any) -> str:
        s = str(v or "").strip().title()
        return s if s in GOAL_CATEGORIES else "Other"

    @field_validator("target_year", mode="before")
    @classmethod
    def _year(cls, v: Any) -> int:
        d = read_number(v)
        return int(d) if d is not None else 0

    @field_validator("target_amount", "current_value", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> Decimal:
        return parse_amount(v)

    @property
    def display_target_amount(self) -> str:
        return format_amount(self.target_amount)

    @property
    def display_current_value(self) -> str:
        return format_amount(self.current_value)

    def years_away(self, current_year: int) -> int:
        return self.target_year - current_year


class ProjectionRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    age: int
    investment_value: float
    monthly_contribution: float
    annual_contribution: float
    goals_required: float
    surplus_or_deficit: float


class GoalMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    goal_id: str
    goal_name: str
    target_year: int
    years_to_goal: int
    adjusted_target: float
    projected_value: float
    shortfall: float = Field(..., description="adjusted_target - projected_value; negative means surplus")
    funding_ratio: float = Field(..., ge=0, le=100)
    is_on_track: bool


class PlanSummary(BaseModel):
    current_year: int
    horizon_years: int
    rows: List[ProjectionRow] = Field(default_factory=list)
    goal_metrics: List[GoalMetrics] = Field(default_factory=list)
    total_projected_wealth: float = 0.0
    total_goals_amount: float = 0.0
    overall_funding_ratio: float = 0.0
    on_track_count: int = 0
    furthest_goal_year: Optional[int] = None
    warnings: List[str] = Field(default_factory=list)
