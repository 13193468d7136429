from __future__ import annotations

from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

SAFE_LINK_SCHEMES = ("http", "https")


class Meal(BaseModel):
    """One dinner suggestion from the webhook; links limited to http(s)."""

    mealName: str | None = None
    name: str | None = None          # legacy field, older webhook flows
    mealLink: str | None = None
    cuisine: str | None = None
    cookTime: str | None = None
    reason: str | None = None
    description: str | None = None
    tags: list[str] | None = None

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("mealLink")
    @classmethod
    def _drop_unsafe_link(cls, value: str | None) -> str | None:
        # links come from a third party and end up in an href
        if value is None:
            return None
        parsed = urlparse(value.strip())
        if parsed.scheme.lower() not in SAFE_LINK_SCHEMES or not parsed.netloc:
            return None
        return value.strip()

    @model_validator(mode="after")
    def _require_a_name(self) -> "Meal":
        if not self.mealName and not self.name:
            raise ValueError("meal needs either 'mealName' or 'name'")
        return self

    @property
    def display_name(self) -> str:
        return self.mealName or self.name or ""

    @property
    def body_text(self) -> str | None:
        return self.reason or self.description or None
