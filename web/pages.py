# web/pages.py
"""
Browser-facing pages.

The form posts back here; we go through the very same relay the JSON API
uses, then normalise its body for display.  The current meals and the
like/dislike board ride along in a hidden `state` field, so the server keeps
nothing between requests.
"""
from __future__ import annotations
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import httpx
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, Field, ValidationError

from config import Settings, get_settings
from core.errors import PlanFailedError, PlannerError
from core.feedback import FeedbackBoard
from core.models.meal import Meal
from core.normalize import normalize_plan_response, parse_meals
from services.webhook import get_http_client, plan_dinners

_LOG = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()

DINNER_CHOICES = range(1, 8)
GENERIC_ERROR = "Sorry, we encountered an error planning your dinners. Please try again."


class PageState(BaseModel):
    """What the browser holds between requests."""

    meals: list[dict[str, Any]] = Field(default_factory=list)
    board: dict[str, Any] = Field(default_factory=dict)


# ───────────────────────── helpers ──────────────────────────
def _load_state(raw: str) -> tuple[list[Meal], FeedbackBoard]:
    if not raw:
        return [], FeedbackBoard()
    try:
        state = PageState.model_validate_json(raw)
        meals, board = parse_meals(state.meals), FeedbackBoard.from_dict(state.board)
    except (ValidationError, TypeError, ValueError) as exc:
        _LOG.warning("Discarding unreadable page state: %s", exc)
        return [], FeedbackBoard()

    # indices must point at a meal on the page
    valid = set(range(len(meals)))
    board.liked &= valid
    board.disliked &= valid
    if board.pending_dislike not in valid:
        board.pending_dislike = None
    return meals, board


def _dump_state(meals: list[Meal], board: FeedbackBoard) -> str:
    return json.dumps(
        {
            "meals": [m.model_dump(exclude_none=True) for m in meals],
            "board": board.to_dict(),
        }
    )


def _coerce_count(raw: str) -> int | str | None:
    raw = raw.strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return raw


def _success_notice(count: int) -> str:
    return f"Successfully planned {count} delicious dinner{'s' if count > 1 else ''}!"


def _render(
    request: Request,
    meals: list[Meal],
    board: FeedbackBoard,
    *,
    dinner_count: int | str | None = None,
    preferences: str = "",
    notice: str | None = None,
    error: str | None = None,
    error_title: str = "Error",
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "planner.html",
        {
            "choices": DINNER_CHOICES,
            "dinner_count": dinner_count,
            "preferences": preferences,
            "meals": meals,
            "board": board,
            "state_json": _dump_state(meals, board),
            "notice": notice,
            "error": error,
            "error_title": error_title,
        },
    )


# ───────────────────────── pages ────────────────────────────
@router.get("/", response_class=HTMLResponse)
def planner_page(request: Request) -> HTMLResponse:
    return _render(request, [], FeedbackBoard())


@router.post("/", response_class=HTMLResponse)
async def submit_plan(
    request: Request,
    dinner_count: str = Form(""),
    preferences: str = Form(""),
    state: str = Form(""),
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> HTMLResponse:
    previous_meals, previous_board = _load_state(state)
    count = _coerce_count(dinner_count)
    form = {"dinner_count": count, "preferences": preferences}
    body = {
        "dinnerCount": count,
        "preferences": preferences,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    try:
        data = await plan_dinners(body, settings, client)
    except PlannerError as exc:
        data = exc.to_body()
    except Exception:
        _LOG.exception("Unexpected error planning dinners")
        return _render(request, previous_meals, previous_board, error=GENERIC_ERROR, **form)

    try:
        meals = normalize_plan_response(data)
    except PlanFailedError as exc:
        return _render(
            request,
            previous_meals,
            previous_board,
            error=exc.message,
            error_title="Planning Failed",
            **form,
        )

    return _render(request, meals, FeedbackBoard(), notice=_success_notice(count), **form)


@router.post("/feedback", response_class=HTMLResponse)
def meal_feedback(
    request: Request,
    action: str = Form(...),
    index: int | None = Form(None),
    reason: str = Form(""),
    state: str = Form(""),
) -> HTMLResponse:
    meals, board = _load_state(state)
    in_range = index is not None and 0 <= index < len(meals)

    if action == "like" and in_range:
        board.like(index)
    elif action == "dislike" and in_range:
        board.request_dislike(index)
    elif action == "confirm-dislike":
        board.confirm_dislike(reason)
    elif action == "cancel-dislike":
        board.cancel_dislike()
    elif action == "regenerate" and in_range:
        board.regenerate(index)
    else:
        _LOG.warning("Ignoring feedback action %r for index %r", action, index)

    return _render(request, meals, board)
