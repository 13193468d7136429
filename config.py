"""
Centralised settings loader.

Values come from the process environment and an optional `.env` file.
The app builds one `Settings` at startup and hands it to the routes through
the `get_settings` dependency, so tests can override it without touching
`os.environ`.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class Settings(BaseSettings):
    # ─── runtime ─────────────────────────────────────────────────────
    env_name: str = Field("development", validation_alias=AliasChoices("env_name", "node_env"))
    deployment_type: str = "standard"
    log_level: str = "INFO"

    # ─── upstream webhook (no defaults: must be configured) ─────────
    webhook_url: str | None = Field(
        None,
        validation_alias=AliasChoices("webhook_url", "dinner_planner_webhook_url"),
    )
    webhook_username: str | None = None
    webhook_password: str | None = None
    webhook_timeout_seconds: float = 30.0

    # unrelated env-vars (PATH, host tooling) are ignored, not rejected
    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    @property
    def is_production(self) -> bool:
        return self.env_name.lower() == "production"

    @property
    def webhook_configured(self) -> bool:
        return not self.missing_webhook_settings()

    def missing_webhook_settings(self) -> list[str]:
        """Env-var names of the webhook settings that are unset or blank."""
        missing = []
        if not self.webhook_url:
            missing.append("WEBHOOK_URL")
        if not self.webhook_username:
            missing.append("WEBHOOK_USERNAME")
        if not self.webhook_password:
            missing.append("WEBHOOK_PASSWORD")
        return missing


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def get_settings() -> Settings:  # pragma: no cover
    return Settings()  # type: ignore[call-arg]
