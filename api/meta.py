# api/meta.py
from __future__ import annotations
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status

from api.schemas import HealthOut
from config import Settings, get_settings

router = APIRouter()


@router.get("/health", response_model=HealthOut, status_code=status.HTTP_200_OK)
def health(settings: Settings = Depends(get_settings)) -> HealthOut:
    return HealthOut(
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.env_name,
        webhookConfigured=settings.webhook_configured,
        deploymentType=settings.deployment_type,
    )
