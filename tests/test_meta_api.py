# tests/test_meta_api.py
from __future__ import annotations

import asyncio
from datetime import datetime

import httpx


# ── /api/health ─────────────────────────────────────────────────────
def test_health_reports_configuration(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["serverRunning"] is True
    assert body["environment"] == "development"
    assert body["webhookConfigured"] is True
    assert body["deploymentType"] == "standard"
    datetime.fromisoformat(body["timestamp"])


def test_health_flags_missing_webhook(client, use_settings):
    use_settings(webhook_password=None, deployment_type="autoscale")
    body = client.get("/api/health").json()
    assert body["webhookConfigured"] is False
    assert body["deploymentType"] == "autoscale"


# ── /api/test-webhook ───────────────────────────────────────────────
def test_probe_sends_fixed_payload(client, webhook):
    webhook.reply(200, text='{"meals": []}')
    r = client.post("/api/test-webhook")
    assert r.status_code == 200
    body = r.json()
    assert body == {
        "success": True,
        "status": 200,
        "statusText": "OK",
        "url": "https://hooks.example.test/webhook/dinner",
        "responsePreview": '{"meals": []}',
    }
    assert webhook.last_json == {
        "number_of_meals": 1,
        "personalization": "test",
        "mealTypes": ["dinner"],
    }
    assert webhook.calls[0].headers["Authorization"].startswith("Basic ")


def test_probe_reports_upstream_error_status(client, webhook):
    webhook.reply(404, text="x" * 2000)
    body = client.post("/api/test-webhook").json()
    assert body["success"] is False
    assert body["status"] == 404
    assert body["statusText"] == "Not Found"
    assert len(body["responsePreview"]) == 500


def test_probe_reports_transport_failure(client, webhook):
    webhook.fail_with(httpx.ConnectError, "connection refused")
    r = client.post("/api/test-webhook")
    assert r.status_code == 500
    assert r.json() == {
        "success": False,
        "error": "connection refused",
        "type": "ConnectError",
        "url": "https://hooks.example.test/webhook/dinner",
    }


def test_probe_without_configuration(client, webhook, use_settings):
    use_settings(webhook_url=None)
    r = client.post("/api/test-webhook")
    assert r.status_code == 500
    assert r.json()["success"] is False
    assert webhook.calls == []


def test_probe_respects_overall_deadline(client, webhook, use_settings):
    use_settings(webhook_timeout_seconds=0.2)

    async def _trickle():
        for _ in range(30):
            await asyncio.sleep(0.1)
            yield b"."

    webhook.handler = lambda req: httpx.Response(200, content=_trickle())
    r = client.post("/api/test-webhook")
    assert r.status_code == 500
    body = r.json()
    assert body["success"] is False
    assert body["type"] == "TimeoutError"
