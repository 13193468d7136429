"""
core/errors.py
────────────────────────────────────────────────────────────────────────
Error taxonomy for the planner.

Server side, every `PlannerError` knows its HTTP status and how to render
itself as the `{success: false, ...}` JSON body; routes catch them at the
boundary.  The last two classes are raised while normalising a relay
response for display and never leave the presentation layer.
"""
from __future__ import annotations

from typing import Any


class PlannerError(Exception):
    status_code: int = 500

    def __init__(self, message: str, *, debug: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.debug = debug

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"success": False, "message": self.message}
        if self.debug is not None:
            body["debug"] = self.debug
        return body


class RequestValidationFailed(PlannerError):
    """Malformed client request. Never reaches the webhook."""

    status_code = 400

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__("Invalid request data")
        self.errors = errors

    def to_body(self) -> dict[str, Any]:
        body = super().to_body()
        body["errors"] = self.errors
        return body


class ConfigurationError(PlannerError):
    """Webhook URL or credentials missing; detected before any network call."""


# ───────── upstream failures ─────────────────────────────────────────
class UpstreamError(PlannerError):
    pass


class UpstreamHttpError(UpstreamError):
    def __init__(self, status: int, message: str, *, debug: Any = None) -> None:
        super().__init__(message, debug=debug)
        self.status = status


class UpstreamTimeoutError(UpstreamError):
    pass


class UpstreamNetworkError(UpstreamError):
    pass


class UpstreamPayloadError(UpstreamError):
    """Webhook answered 2xx but the body was not JSON."""


# ───────── presentation-side ─────────────────────────────────────────
class PlanFailedError(Exception):
    """The relay answered with a `{success: false}` body."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnrecognizedResponseShapeError(ValueError):
    pass
