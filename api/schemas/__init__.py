"""Re-export individual schema modules for easy imports."""

from .plan import ErrorResponse, PlanRequest, PlanResponse, parse_plan_request
from .meta import HealthOut, WebhookProbeFailure, WebhookProbeOut

__all__ = [
    "PlanRequest",
    "PlanResponse",
    "ErrorResponse",
    "parse_plan_request",
    "HealthOut",
    "WebhookProbeOut",
    "WebhookProbeFailure",
]
