"""Engine configuration with environment-specific profiles.

Supports dev, staging, and production environments via APP_ENV.
All values can be overridden by environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """Immutable engine settings resolved from environment."""

    app_env: str = "dev"
    log_level: str = "INFO"

    # Optional JSON file replacing the embedded time cost model
    time_cost_model_path: Optional[str] = None

    # Plan validation thresholds
    plan_underfill_ratio: float = 0.5
    plan_max_reported_ids: int = 5

    default_top_equipment: int = 3

    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    request_id_header_name: str = "X-Request-ID"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"


# -- Environment profiles --

_ENV_PROFILES: dict[str, dict] = {
    "dev": {
        "log_level": "DEBUG",
    },
    "staging": {
        "log_level": "INFO",
    },
    "production": {
        "log_level": "WARNING",
    },
}


def _split_origins(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build Settings by merging environment profile with env-var overrides."""
    app_env = os.getenv("APP_ENV", "dev")
    profile = _ENV_PROFILES.get(app_env, _ENV_PROFILES["dev"])

    return Settings(
        app_env=app_env,
        log_level=os.getenv("LOG_LEVEL", profile.get("log_level", "INFO")),
        time_cost_model_path=os.getenv("TIME_COST_MODEL_PATH") or None,
        plan_underfill_ratio=float(os.getenv("PLAN_UNDERFILL_RATIO", "0.5")),
        plan_max_reported_ids=int(os.getenv("PLAN_MAX_REPORTED_IDS", "5")),
        default_top_equipment=int(os.getenv("DEFAULT_TOP_EQUIPMENT", "3")),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")) or ["*"],
        request_id_header_name=os.getenv("REQUEST_ID_HEADER_NAME", "X-Request-ID"),
    )
