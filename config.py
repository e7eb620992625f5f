"""
Centralised settings loader (pydantic-settings).
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime ────────────────────────────────────────────────────
    env_name: str = Field("local", validation_alias="ENV_NAME")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    # ─── estimator ──────────────────────────────────────────────────
    # logging on clamp always happens; this only toggles OutOfRangeWarning
    warn_on_clamp: bool = Field(True, validation_alias="WARN_ON_CLAMP")

    # ─── analytics ──────────────────────────────────────────────────
    evaluation_interval_days: int = Field(30, validation_alias="EVALUATION_INTERVAL_DAYS")

    # allow unrelated env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
