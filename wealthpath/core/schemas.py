from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from wealthpath.utils.plan_models import FinancialProfile, Goal


# -------------------------
# Errors
# -------------------------

class ErrorEnvelope(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None
    retriable: bool = False


# -------------------------
# Plan requests / responses
# -------------------------

class PlanRequest(BaseModel):
    request_id: str
    session_id: str

    profile: Optional[FinancialProfile] = None
    goals: List[Goal] = Field(default_factory=list)

    # fixed "today" for reproducible runs; defaults to the calendar year
    current_year: Optional[int] = None
    horizon_years: Optional[int] = Field(default=None, ge=0)

    requested_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class PlanResponse(BaseModel):
    """Standard service output.

    `data` carries the raw PlanSummary dump for tables and charts; `answer_md`
    is the human-readable report.
    """

    model_config = ConfigDict(extra="allow")

    service_name: str
    answer_md: str
    data: Dict[str, Any] = Field(default_factory=dict)
    warnings: List[str] = Field(default_factory=list)
    confidence: Literal["high", "medium", "low"] = "medium"
    error: Optional[Dict[str, Any]] = None
