from __future__ import annotations

from typing import List

from wealthpath.core.config import SETTINGS
from wealthpath.core.schemas import ErrorEnvelope, PlanRequest, PlanResponse
from wealthpath.services.base_service import BaseService
from wealthpath.utils.amount_codec import format_amount
from wealthpath.utils.logging import get_logger, set_log_context
from wealthpath.utils.plan_models import PlanSummary
from wealthpath.utils.projection_engine import compute_plan_summary

log = get_logger(__name__)


def _goal_lines(summary: PlanSummary) -> List[str]:
    lines = []
    for m in summary.goal_metrics:
        status = "on track" if m.is_on_track else "shortfall"
        gap = format_amount(abs(m.shortfall))
        lines.append(
            f"- **{m.goal_name}** ({m.target_year}): target {format_amount(m.adjusted_target)} "
            f"vs projected {format_amount(m.projected_value)}, "
            f"{m.funding_ratio:.0f}% funded, {status} ({'surplus' if m.is_on_track else 'gap'} {gap})"
        )
    return lines


def render_summary_md(summary: PlanSummary) -> str:
    goal_lines = _goal_lines(summary)
    last = summary.rows[-1] if summary.rows else None

    md = (
        "## Wealth path\n"
        f"- Projected wealth: **{format_amount(summary.total_projected_wealth)}**\n"
        f"- Total of goals (today's money): **{format_amount(summary.total_goals_amount)}**\n"
        f"- Overall funding: **{summary.overall_funding_ratio:.0f}%** "
        f"({summary.on_track_count}/{len(summary.goal_metrics)} goals on track)\n"
    )
    if last is not None:
        md += f"- Trajectory: {summary.rows[0].year}-{last.year}, ending at {format_amount(last.investment_value)}\n"

    md += "\n### Goals\n" + ("\n".join(goal_lines) if goal_lines else "- (none)")
    md += (
        "\n\n### Notes\n"
        "- Targets are inflation-adjusted to their target year.\n"
        "- Each goal is compared with the full projected wealth; goals do not share it out.\n"
    )
    return md


class PlanService(BaseService):
    name = "plan_service"

    def run(self, req: PlanRequest) -> PlanResponse:
        set_log_context(request_id=req.request_id, session_id=req.session_id)
        try:
            if req.profile is None:
                return PlanResponse(
                    service_name=self.name,
                    answer_md="Please provide a financial profile in `PlanRequest.profile`.",
                    data={},
                    warnings=["MISSING_PROFILE"],
                    confidence="low",
                )

            horizon = SETTINGS.projection_horizon_years if req.horizon_years is None else req.horizon_years
            summary = compute_plan_summary(
                req.profile,
                req.goals,
                current_year=req.current_year,
                horizon_years=horizon,
            )
            log.info(
                "plan computed goals=%d rows=%d on_track=%d",
                len(summary.goal_metrics), len(summary.rows), summary.on_track_count,
            )

            return PlanResponse(
                service_name=self.name,
                answer_md=render_summary_md(summary),
                data={"summary": summary.model_dump()},
                warnings=list(summary.warnings),
                confidence="high",
            )
        except Exception as e:
            log.exception("plan computation failed")
            return PlanResponse(
                service_name=self.name,
                answer_md="Plan computation failed.",
                data={},
                warnings=["PLAN_FAILED"],
                confidence="low",
                error=ErrorEnvelope(code="PLAN_FAILED", message=str(e)).model_dump(),
            )
