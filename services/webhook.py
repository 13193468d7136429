# services/webhook.py
"""
Relay to the third-party meal-generation webhook.

The webhook is opaque: we rename our request fields into its payload shape,
authenticate with HTTP Basic, make exactly one bounded POST and map whatever
happens into the `core.errors` taxonomy.  A successful body is handed back
untouched; shaping it for display is the presentation layer's job.
"""
from __future__ import annotations

import asyncio
import base64
import json
import logging
from typing import Any, AsyncGenerator

import httpx

from api.schemas.plan import PlanRequest, parse_plan_request
from config import Settings
from core.errors import (
    ConfigurationError,
    UpstreamHttpError,
    UpstreamNetworkError,
    UpstreamPayloadError,
    UpstreamTimeoutError,
)

_LOG = logging.getLogger(__name__)

USER_AGENT = "DinnerPlanner/1.0"
MEAL_TYPES = ["dinner"]
PREVIEW_CHARS = 500
PROBE_PAYLOAD: dict[str, Any] = {
    "number_of_meals": 1,
    "personalization": "test",
    "mealTypes": MEAL_TYPES,
}


# ───────────── HTTP client dependency ─────────────
async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """One client per incoming request; closing it releases every socket."""
    async with httpx.AsyncClient() as client:
        yield client


# ───────────── payload / headers ─────────────
def build_webhook_payload(request: PlanRequest) -> dict[str, Any]:
    return {
        "number_of_meals": request.dinnerCount,
        "personalization": request.preferences or "",
        "mealTypes": list(MEAL_TYPES),
    }


def basic_auth_header(username: str, password: str) -> str:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def _require_webhook(settings: Settings) -> tuple[str, dict[str, str]]:
    """Return (url, headers) or raise before anything touches the network."""
    missing = settings.missing_webhook_settings()
    if missing:
        raise ConfigurationError(
            "Webhook not configured. Please set the "
            + ", ".join(missing)
            + " environment variable" + ("s." if len(missing) > 1 else ".")
        )
    headers = {
        "Content-Type": "application/json",
        "Authorization": basic_auth_header(
            settings.webhook_username, settings.webhook_password  # type: ignore[arg-type]
        ),
        "User-Agent": USER_AGENT,
    }
    return settings.webhook_url, headers  # type: ignore[return-value]


# ───────────── relay ─────────────
async def call_webhook(
    payload: dict[str, Any],
    settings: Settings,
    client: httpx.AsyncClient,
) -> Any:
    """POST `payload` once and return the decoded JSON body."""
    url, headers = _require_webhook(settings)
    timeout = settings.webhook_timeout_seconds

    _LOG.info("Calling webhook %s for %s meal(s)", url, payload.get("number_of_meals"))
    try:
        # httpx bounds each phase; wait_for bounds the whole exchange, body included
        resp = await asyncio.wait_for(
            client.post(url, json=payload, headers=headers, timeout=timeout),
            timeout,
        )
    except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
        _LOG.error("Webhook timed out after %gs: %r", timeout, exc)
        raise UpstreamTimeoutError(
            f"Webhook request timed out after {timeout:g} seconds. Please try again."
        ) from exc
    except httpx.RequestError as exc:
        _LOG.error("Webhook unreachable: %r", exc)
        raise UpstreamNetworkError(
            f"Failed to reach webhook: {str(exc) or type(exc).__name__}"
        ) from exc

    if not resp.is_success:
        detail = resp.text
        _LOG.error("Webhook returned %s: %s", resp.status_code, detail[:PREVIEW_CHARS])
        message = f"Webhook request failed with status {resp.status_code}"
        if settings.is_production:
            raise UpstreamHttpError(resp.status_code, message)
        raise UpstreamHttpError(
            resp.status_code,
            f"{message}: {detail}",
            debug={"status": resp.status_code, "body": detail},
        )

    try:
        data = resp.json()
        # NaN/Infinity decode fine but cannot be sent back as strict JSON
        json.dumps(data, allow_nan=False)
    except ValueError as exc:
        _LOG.error("Webhook returned a non-JSON body: %s", resp.text[:PREVIEW_CHARS])
        raise UpstreamPayloadError("Webhook returned an invalid JSON response") from exc

    _LOG.info("Webhook answered %s", resp.status_code)
    return data


async def plan_dinners(
    raw_body: Any,
    settings: Settings,
    client: httpx.AsyncClient,
) -> Any:
    """Validate → check configuration → relay.  Order matters: a bad request
    never learns anything about the credential setup."""
    request = parse_plan_request(raw_body)
    return await call_webhook(build_webhook_payload(request), settings, client)


async def probe_webhook(
    settings: Settings,
    client: httpx.AsyncClient,
) -> dict[str, Any]:
    """Send the fixed probe payload and report what came back, whatever the status.

    Transport failures propagate as `httpx.RequestError`; an overrun of the
    overall deadline as `asyncio.TimeoutError`.
    """
    url, headers = _require_webhook(settings)
    timeout = settings.webhook_timeout_seconds
    resp = await asyncio.wait_for(
        client.post(url, json=PROBE_PAYLOAD, headers=headers, timeout=timeout),
        timeout,
    )
    _LOG.info("Webhook probe answered %s", resp.status_code)
    return {
        "success": resp.is_success,
        "status": resp.status_code,
        "statusText": resp.reason_phrase,
        "url": url,
        "responsePreview": resp.text[:PREVIEW_CHARS],
    }
