from __future__ import annotations

import argparse
from datetime import date

from wealthpath.tools.plan_tools import tool_compute_plan
from wealthpath.utils.amount_codec import format_amount


def main():
    ap = argparse.ArgumentParser(description="Run the reference wealth-path scenario.")
    ap.add_argument("--year", type=int, default=date.today().year, help="Calendar year treated as 'now'")
    args = ap.parse_args()

    payload = {
        "current_year": args.year,
        "profile": {
            "currentAge": "30",
            "monthlySIP": "10000",
            "expectedReturn": "12",
            "currentAUM": "500000",
            "annualSIPIncrease": "10",
            "inflationRate": "6",
        },
        "goals": [
            {"name": "Child education", "category": "Education", "targetYear": args.year + 10, "targetAmount": "₹50.00L"},
            {"name": "Retirement", "category": "Retirement", "targetYear": args.year + 40, "targetAmount": "₹5.00Cr"},
        ],
    }
    out = tool_compute_plan(payload)

    print("Rows:", len(out["rows"]), f"({out['rows'][0]['year']}-{out['rows'][-1]['year']})")
    print("Total projected wealth:", format_amount(out["total_projected_wealth"]))
    print("Total goals:", format_amount(out["total_goals_amount"]))
    print("Overall funding ratio:", out["overall_funding_ratio"])
    for m in out["goal_metrics"]:
        print(
            "Goal:", m["goal_name"],
            "adjusted", format_amount(m["adjusted_target"]),
            "projected", format_amount(m["projected_value"]),
            "funded", f"{m['funding_ratio']}%",
            "on track" if m["is_on_track"] else "behind",
        )
    for w in out["warnings"]:
        print("Warning:", w)


if __name__ == "__main__":
    main()
