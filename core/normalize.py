"""
core/normalize.py
────────────────────────────────────────────────────────────────────────
Turn whatever the relay returned into meals for display.

The webhook has shipped three body shapes over time:

* a bare JSON array of meals,
* an object with a `meals` array,
* an error object `{"success": false, "message": ...}`.

`classify_plan_response()` maps a decoded body onto exactly one of the
variants below; `normalize_plan_response()` is what the page calls.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Union

from pydantic import ValidationError

from core.errors import PlanFailedError, UnrecognizedResponseShapeError
from core.models.meal import Meal

_LOG = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Failed to plan your dinners. Please try again."


@dataclass(frozen=True)
class BareMealList:
    meals: List[Meal] = field(default_factory=list)


@dataclass(frozen=True)
class MealEnvelope:
    meals: List[Meal] = field(default_factory=list)


@dataclass(frozen=True)
class PlanFailure:
    message: str = DEFAULT_FAILURE_MESSAGE


PlanResult = Union[BareMealList, MealEnvelope, PlanFailure]


def parse_meals(items: list[Any]) -> list[Meal]:
    """Validate each entry, dropping (and logging) the ones that aren't meals."""
    meals: list[Meal] = []
    for idx, item in enumerate(items):
        try:
            meals.append(Meal.model_validate(item))
        except ValidationError as exc:
            _LOG.warning("Skipping meal #%d: %s", idx, exc.errors(include_url=False))
    return meals


def classify_plan_response(value: Any) -> PlanResult:
    if isinstance(value, list):
        return BareMealList(parse_meals(value))
    if isinstance(value, dict):
        if isinstance(value.get("meals"), list):
            return MealEnvelope(parse_meals(value["meals"]))
        if value.get("success") is False:
            message = value.get("message")
            if not isinstance(message, str) or not message:
                message = DEFAULT_FAILURE_MESSAGE
            return PlanFailure(message)
    raise UnrecognizedResponseShapeError(
        f"unrecognised plan response of type {type(value).__name__}"
    )


def normalize_plan_response(value: Any) -> list[Meal]:
    """
    Meals to render, in upstream order.

    Raises `PlanFailedError` for an error body; callers surface its message
    and leave the meals already on screen alone.  Unknown shapes yield [].
    """
    try:
        result = classify_plan_response(value)
    except UnrecognizedResponseShapeError as exc:
        _LOG.warning("%s; showing no meals", exc)
        return []

    if isinstance(result, PlanFailure):
        raise PlanFailedError(result.message)
    return list(result.meals)
