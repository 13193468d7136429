# tests/conftest.py
from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from config import Settings, get_settings
from main import app
from services.webhook import get_http_client

WEBHOOK_URL = "https://hooks.example.test/webhook/dinner"


class FakeWebhook:
    """Stands in for the third-party webhook and records every call."""

    def __init__(self) -> None:
        self.calls: list[httpx.Request] = []
        self.clients: list[httpx.AsyncClient] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda req: httpx.Response(
            200, json={"meals": [{"mealName": "Tacos"}]}
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        return self.handler(request)

    def reply(self, status: int = 200, **kwargs: Any) -> None:
        self.handler = lambda req: httpx.Response(status, **kwargs)

    def fail_with(self, exc_type: type[httpx.RequestError], message: str) -> None:
        def _raise(req: httpx.Request) -> httpx.Response:
            raise exc_type(message, request=req)

        self.handler = _raise

    @property
    def last_json(self) -> Any:
        return json.loads(self.calls[-1].content)


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "env_name": "development",
        "webhook_url": WEBHOOK_URL,
        "webhook_username": "planner",
        "webhook_password": "s3cret",
        "_env_file": None,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def webhook() -> FakeWebhook:
    return FakeWebhook()


@pytest.fixture
def use_settings() -> Callable[..., Settings]:
    """Swap the injected settings for the rest of the test."""

    def _use(**overrides: Any) -> Settings:
        settings = make_settings(**overrides)
        app.dependency_overrides[get_settings] = lambda: settings
        return settings

    return _use


@pytest.fixture
def client(webhook: FakeWebhook, use_settings):
    async def _http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(webhook)) as c:
            webhook.clients.append(c)
            yield c

    use_settings()
    app.dependency_overrides[get_http_client] = _http_client
    with TestClient(app) as tc:
        yield tc
    app.dependency_overrides.clear()
