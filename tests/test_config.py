import pytest

from wealthpath.core.config import load_settings

_KEYS = ("APP_ENV", "LOG_LEVEL", "PROJECTION_HORIZON_YEARS", "CURRENCY_SYMBOL", "AXIS_DECIMALS")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for k in _KEYS:
        monkeypatch.delenv(k, raising=False)


def test_defaults_without_config(tmp_path):
    s = load_settings(str(tmp_path / "missing.yaml"))
    assert s.env == "dev"
    assert s.log_level == "INFO"
    assert s.projection_horizon_years == 30
    assert s.currency_symbol == "₹"
    assert s.axis_decimals == 1


def test_yaml_values_and_env_overrides(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        "app:\n  env: prod\n  log_level: debug\nprojection:\n  horizon_years: 25\n",
        encoding="utf-8",
    )
    s = load_settings(str(cfg))
    assert s.env == "prod"
    assert s.log_level == "DEBUG"
    assert s.projection_horizon_years == 25

    monkeypatch.setenv("PROJECTION_HORIZON_YEARS", "40")
    monkeypatch.setenv("LOG_LEVEL", "")
    s = load_settings(str(cfg))
    assert s.projection_horizon_years == 40
    assert s.log_level == "DEBUG"


def test_negative_horizon_rejected(tmp_path, monkeypatch):
    monkeypatch.setenv("PROJECTION_HORIZON_YEARS", "-1")
    with pytest.raises(ValueError):
        load_settings(str(tmp_path / "missing.yaml"))
