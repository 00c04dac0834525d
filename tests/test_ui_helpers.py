from wealthpath.utils.plan_models import FinancialProfile, Goal
from wealthpath.utils.projection_engine import compute_trajectory
from wealthpath.web_app.ui_helpers import rows_frame, trajectory_figure


def _rows():
    p = FinancialProfile(current_age=30, current_wealth=500000, monthly_contribution=10000)
    g = Goal(name="Education", target_year=2027, target_amount=5000000)
    return [r.model_dump() for r in compute_trajectory(p, [g], current_year=2025)]


def test_rows_frame_uses_compact_amounts():
    df = rows_frame(_rows())
    assert list(df.columns) == [
        "Year", "Age", "Investment value", "Monthly SIP", "Annual SIP", "Goals required", "Surplus / deficit"
    ]
    assert len(df) == 3
    assert df.iloc[0]["Monthly SIP"] == "₹10.00K"
    assert df.iloc[0]["Goals required"] == "₹0"
    assert df.iloc[2]["Goals required"].endswith("L")


def test_rows_frame_empty():
    assert rows_frame([]).empty


def test_trajectory_figure_traces_and_axis_labels():
    fig = trajectory_figure(_rows())
    assert [t.name for t in fig.data] == ["Projected wealth", "Goals required"]
    assert fig.layout.yaxis.ticktext[0] == "₹0"
    assert all(len(label) > 1 for label in fig.layout.yaxis.ticktext)
