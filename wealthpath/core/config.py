from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict

import yaml
from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    env: str
    log_level: str

    projection_horizon_years: int

    currency_symbol: str
    axis_decimals: int


def _deep_get(d: Dict[str, Any], path: str, default=None):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def load_settings(config_path: str = "config.yaml") -> Settings:
    """
    Loads config.yaml + overrides from .env/environment variables.
    """
    load_dotenv()  # loads .env into env vars

    cfg: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}

    # Empty env vars count as "not set" so they don't mask config.yaml.
    def _env_or_cfg(key: str, cfg_path: str, default):
        v = os.getenv(key)
        if v is None:
            return _deep_get(cfg, cfg_path, default)
        v = v.strip()
        return _deep_get(cfg, cfg_path, default) if v == "" else v

    env = _env_or_cfg("APP_ENV", "app.env", "dev")
    log_level = _env_or_cfg("LOG_LEVEL", "app.log_level", "INFO")

    horizon = int(_env_or_cfg("PROJECTION_HORIZON_YEARS", "projection.horizon_years", 30))
    if horizon < 0:
        raise ValueError("projection.horizon_years cannot be negative")

    currency_symbol = str(_env_or_cfg("CURRENCY_SYMBOL", "display.currency_symbol", "₹"))
    axis_decimals = int(_env_or_cfg("AXIS_DECIMALS", "display.axis_decimals", 1))

    return Settings(
        env=env,
        log_level=str(log_level).upper(),
        projection_horizon_years=horizon,
        currency_symbol=currency_symbol,
        axis_decimals=axis_decimals,
    )


# Optional convenience singleton
SETTINGS = load_settings()
