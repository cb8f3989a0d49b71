"""Tests for single-target triggers and the restart-all batch."""

import logging

import httpx
import pytest

from coolify_restarter.config import Settings
from coolify_restarter.deploy import (
    ApiAppTarget,
    WebhookTarget,
    restart_all_apps,
    trigger_deployment,
)


def _recording_client(requests: list[httpx.Request], status_for=lambda request: 200) -> httpx.AsyncClient:
    async def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        status = status_for(request)
        return httpx.Response(status, text="boom" if status >= 400 else "queued")

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_trigger_sends_bearer_token_and_json_header(make_settings):
    settings = make_settings(webhook_urls="https://coolify.test/hook")
    requests: list[httpx.Request] = []
    async with _recording_client(requests) as client:
        result = await trigger_deployment(client, WebhookTarget(url="https://coolify.test/hook"), settings)

    assert result.ok is True
    assert result.status_code == 200
    assert len(requests) == 1
    request = requests[0]
    assert request.method == "POST"
    assert request.headers["Authorization"] == "Bearer test-token-0123456789"
    assert request.headers["Content-Type"] == "application/json"
    assert request.content == b""


@pytest.mark.asyncio
async def test_force_webhook_request_target(make_settings):
    settings = make_settings(webhook_urls="https://x/y?a=1", force=True)
    requests: list[httpx.Request] = []
    async with _recording_client(requests) as client:
        await trigger_deployment(client, WebhookTarget(url="https://x/y?a=1"), settings)

    assert str(requests[0].url) == "https://x/y?a=1&force=true"


@pytest.mark.asyncio
async def test_force_api_app_request_target(make_settings):
    settings = make_settings(
        coolify_api_url="https://coolify.test/api/v1",
        coolify_app_uuids="abc",
        force="true",
    )
    requests: list[httpx.Request] = []
    async with _recording_client(requests) as client:
        await restart_all_apps(settings, http_client=client)

    assert [str(r.url) for r in requests] == ["https://coolify.test/api/v1/deploy?uuid=abc&force=true"]


@pytest.mark.asyncio
async def test_non_2xx_is_reported_not_raised(make_settings, caplog):
    settings = make_settings(webhook_urls="https://coolify.test/hook")
    requests: list[httpx.Request] = []
    caplog.set_level(logging.INFO)
    async with _recording_client(requests, status_for=lambda request: 500) as client:
        result = await trigger_deployment(client, WebhookTarget(url="https://coolify.test/hook"), settings)

    assert result.ok is False
    assert result.status_code == 500
    assert result.error == "boom"
    assert "Failed to trigger deployment | https://coolify.test/hook | status: 500" in caplog.text


@pytest.mark.asyncio
async def test_transport_error_is_swallowed(make_settings):
    settings = make_settings(webhook_urls="https://coolify.test/hook")

    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await trigger_deployment(client, WebhookTarget(url="https://coolify.test/hook"), settings)

    assert result.ok is False
    assert result.status_code is None
    assert "connection refused" in result.error


@pytest.mark.asyncio
async def test_batch_issues_one_request_per_target_and_isolates_failures(make_settings):
    """3 webhooks + 2 UUIDs: 5 requests, the 500 does not stop the rest."""
    settings = make_settings(
        webhook_urls="https://a.test/h1,https://b.test/h2,https://c.test/h3",
        coolify_api_url="https://coolify.test/api/v1",
        coolify_app_uuids="abc,def",
    )
    requests: list[httpx.Request] = []

    def status_for(request: httpx.Request) -> int:
        return 500 if request.url.host == "b.test" else 200

    async with _recording_client(requests, status_for=status_for) as client:
        summary = await restart_all_apps(settings, http_client=client)

    assert len(requests) == 5
    assert summary.total == 5
    assert summary.succeeded == 4
    assert summary.failed == 1
    by_name = {r.target.display_name: r for r in summary.results}
    assert by_name["https://b.test/h2"].ok is False
    assert by_name["https://b.test/h2"].status_code == 500
    assert by_name["app abc"].ok is True
    assert by_name["app def"].ok is True
    assert isinstance(summary.results[-1].target, ApiAppTarget)


@pytest.mark.asyncio
async def test_batch_survives_unexpected_trigger_error(make_settings, monkeypatch):
    settings = make_settings(webhook_urls="https://a.test/h1,https://b.test/h2")
    requests: list[httpx.Request] = []

    from coolify_restarter.deploy import batch as batch_module

    real_trigger = batch_module.trigger_deployment

    async def flaky_trigger(client, target, settings):
        if target.url == "https://a.test/h1":
            raise RuntimeError("unexpected")
        return await real_trigger(client, target, settings)

    monkeypatch.setattr(batch_module, "trigger_deployment", flaky_trigger)
    async with _recording_client(requests) as client:
        summary = await restart_all_apps(settings, http_client=client)

    assert len(requests) == 1
    assert [r.ok for r in summary.results] == [False, True]
    assert summary.results[0].error == "unexpected"


@pytest.mark.asyncio
async def test_batch_with_no_targets_warns(caplog):
    """Bypassing validation: no targets means no requests and a warning."""
    settings = Settings.model_construct(coolify_token="secret")
    requests: list[httpx.Request] = []
    caplog.set_level(logging.WARNING)
    async with _recording_client(requests) as client:
        summary = await restart_all_apps(settings, http_client=client)

    assert requests == []
    assert summary.total == 0
    assert "No deployment methods configured" in caplog.text


@pytest.mark.asyncio
async def test_force_on_unparseable_webhook_is_recorded_as_failure(make_settings, caplog):
    """Concatenated URL is posted; the real transport rejects it and the failure is reported."""
    settings = make_settings(webhook_urls="not-a-url", force=True)
    caplog.set_level(logging.DEBUG)
    async with httpx.AsyncClient() as client:
        result = await trigger_deployment(client, WebhookTarget(url="not-a-url"), settings)

    assert result.ok is False
    assert result.status_code is None
    assert "protocol" in result.error
    assert "Invalid URL format: not-a-url" in caplog.text
    assert "URL: not-a-url?force=true" in caplog.text
    assert "Error triggering deployment | not-a-url | UnsupportedProtocol" in caplog.text
