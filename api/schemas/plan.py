# api/schemas/plan.py
from __future__ import annotations
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.errors import RequestValidationFailed
from core.models.meal import Meal


class PlanRequest(BaseModel):
    dinnerCount: int = Field(..., strict=True, ge=1, le=7, examples=[3])
    preferences: str | None = Field(
        None, strict=True, examples=["vegetarian, no nuts, quick 30-minute meals"]
    )
    timestamp: str | None = Field(None, strict=True)

    model_config = ConfigDict(extra="ignore", frozen=True)


class PlanResponse(BaseModel):
    meals: list[Meal]


class ErrorResponse(BaseModel):
    success: Literal[False] = False
    message: str
    errors: list[dict[str, Any]] | None = None
    debug: Any = None


def _violations(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {"path": list(err["loc"]), "message": err["msg"], "code": err["type"]}
        for err in exc.errors(include_url=False)
    ]


def parse_plan_request(raw: Any) -> PlanRequest:
    """Validate an already-decoded JSON body, raising `RequestValidationFailed`."""
    if not isinstance(raw, dict):
        raise RequestValidationFailed(
            [{"path": [], "message": "Expected a JSON object", "code": "invalid_type"}]
        )
    try:
        return PlanRequest.model_validate(raw)
    except ValidationError as exc:
        raise RequestValidationFailed(_violations(exc)) from exc
