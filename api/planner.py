# api/planner.py
from __future__ import annotations
import asyncio
import json
import logging

import httpx
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from api.schemas import ErrorResponse, PlanResponse, WebhookProbeFailure, WebhookProbeOut
from config import Settings, get_settings
from core.errors import PlannerError, RequestValidationFailed
from services.webhook import get_http_client, plan_dinners, probe_webhook

_LOG = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/plan-dinners",
    status_code=status.HTTP_200_OK,
    summary="Relay a dinner-planning request to the meal webhook",
    responses={
        200: {"model": PlanResponse},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def plan_dinners_route(
    request: Request,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> JSONResponse:
    """
    Validate the body, forward it to the webhook and pass the webhook's JSON
    straight back.  Every failure comes back as `{"success": false, ...}`.
    """
    try:
        raw = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        err = RequestValidationFailed(
            [{"path": [], "message": "Body must be valid JSON", "code": "invalid_json"}]
        )
        return JSONResponse(status_code=err.status_code, content=err.to_body())

    try:
        data = await plan_dinners(raw, settings, client)
        return JSONResponse(status_code=status.HTTP_200_OK, content=data)
    except PlannerError as exc:
        _LOG.warning("plan-dinners failed (%s): %s", type(exc).__name__, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())
    except Exception:
        _LOG.exception("Unexpected error planning dinners")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Failed to plan dinners. Please try again later.",
            },
        )


@router.post(
    "/test-webhook",
    summary="Send a fixed probe request to the configured webhook",
    responses={
        200: {"model": WebhookProbeOut},
        500: {"model": WebhookProbeFailure},
    },
)
async def test_webhook(
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> JSONResponse:
    try:
        result = await probe_webhook(settings, client)
    except PlannerError as exc:
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())
    except (httpx.RequestError, asyncio.TimeoutError) as exc:
        _LOG.error("Webhook probe failed: %r", exc)
        failure = WebhookProbeFailure(
            error=str(exc) or type(exc).__name__,
            type=type(exc).__name__,
            url=settings.webhook_url,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=failure.model_dump(),
        )
    return JSONResponse(status_code=status.HTTP_200_OK, content=result)
