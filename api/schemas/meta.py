from __future__ import annotations

from pydantic import BaseModel


class HealthOut(BaseModel):
    status: str = "ok"
    timestamp: str
    environment: str
    webhookConfigured: bool
    deploymentType: str
    serverRunning: bool = True


class WebhookProbeOut(BaseModel):
    success: bool
    status: int
    statusText: str
    url: str
    responsePreview: str


class WebhookProbeFailure(BaseModel):
    success: bool = False
    error: str
    type: str
    url: str | None = None
