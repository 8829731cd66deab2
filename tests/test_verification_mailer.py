from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from verification_mailer import email_service, rate_limiter
from verification_mailer.email_templates import verification_code_template
from verification_mailer.main import app, verification_rate_limit


@pytest.fixture
def mailer() -> TestClient:
    app.dependency_overrides[verification_rate_limit] = lambda: None
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health(mailer) -> None:
    assert mailer.get("/api/health").json() == {"status": "Email service is running"}


def test_sends_code(mailer) -> None:
    with patch("verification_mailer.main.send_verification_code", new=AsyncMock()) as send:
        response = mailer.post("/api/send-verification", json={"email": "u@example.com", "code": "482913"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Verification code sent to your email"}
    send.assert_awaited_once_with("u@example.com", "482913")


@pytest.mark.parametrize(
    "body",
    [{"email": "u@example.com"}, {"code": "123456"}, {"email": "", "code": "123456"}, None],
)
def test_email_and_code_are_required(mailer, body) -> None:
    with patch("verification_mailer.main.send_verification_code", new=AsyncMock()) as send:
        response = mailer.post("/api/send-verification", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Email and code are required"}
    send.assert_not_awaited()


def test_numeric_code_is_accepted(mailer) -> None:
    with patch("verification_mailer.main.send_verification_code", new=AsyncMock()) as send:
        response = mailer.post("/api/send-verification", json={"email": "u@example.com", "code": 123456})

    assert response.status_code == 200
    send.assert_awaited_once_with("u@example.com", "123456")


def test_delivery_failure(mailer) -> None:
    failing = AsyncMock(side_effect=email_service.EmailDeliveryError("SMTP auth failed"))
    with patch("verification_mailer.main.send_verification_code", new=failing):
        response = mailer.post("/api/send-verification", json={"email": "u@example.com", "code": "1"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to send verification code", "details": "SMTP auth failed"}


def test_template_embeds_code() -> None:
    mjml = verification_code_template("482913")

    assert "482913" in mjml
    assert "<mjml>" in mjml
    assert "10 minutes" in mjml


def test_template_escapes_markup_in_code() -> None:
    mjml = verification_code_template('<a href="https://evil.example">Reset</a>')

    assert "<a href" not in mjml
    assert "&lt;a href=&quot;https://evil.example&quot;&gt;Reset&lt;/a&gt;" in mjml


@pytest.mark.anyio
async def test_send_verification_code_uses_subject_and_template() -> None:
    with patch.object(email_service, "send_email", new=AsyncMock(return_value={"id": "x"})) as send:
        await email_service.send_verification_code("u@example.com", "482913")

    kwargs = send.await_args.kwargs
    assert kwargs["to"] == "u@example.com"
    assert kwargs["subject"] == "Quick Accounting Service - Verification Code"
    assert "482913" in kwargs["mjml_content"]


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.mark.anyio
async def test_send_email_without_any_provider_fails() -> None:
    with (
        patch.object(email_service, "compile_mjml_to_html", return_value="<html></html>"),
        patch.object(email_service, "smtp_configured", return_value=False),
        patch.object(email_service, "RESEND_API_KEY", None),
    ):
        with pytest.raises(email_service.EmailDeliveryError):
            await email_service.send_email("u@example.com", "subject", "<mjml></mjml>")


@pytest.mark.anyio
async def test_send_email_prefers_smtp() -> None:
    smtp = MagicMock(return_value={"id": "smtp-1", "success": True})
    with (
        patch.object(email_service, "compile_mjml_to_html", return_value="<html>code</html>"),
        patch.object(email_service, "smtp_configured", return_value=True),
        patch.object(email_service, "send_via_smtp", new=smtp),
    ):
        result = await email_service.send_email("u@example.com", "subject", "<mjml></mjml>")

    assert result["success"] is True
    recipients, subject, html, _sender = smtp.call_args.args
    assert recipients == ["u@example.com"]
    assert html == "<html>code</html>"


def test_rate_limit_counts_per_key() -> None:
    rate_limiter.memory_cache.clear()
    redis_client = MagicMock()
    redis_client.get.return_value = None
    redis_client.ttl.return_value = -2

    results = [rate_limiter.check_rate_limit("send_verification:1.2.3.4", 2, 600, redis_client) for _ in range(3)]
    other = rate_limiter.check_rate_limit("send_verification:5.6.7.8", 2, 600, redis_client)

    assert [allowed for allowed, _, _ in results] == [True, True, False]
    assert results[-1][2] > 0
    assert other[0] is True


def test_rate_limit_exceeded_answers_429_with_retry_after() -> None:
    rate_limiter.memory_cache.clear()
    redis_client = MagicMock()
    redis_client.get.return_value = "5"
    redis_client.ttl.return_value = 120

    with (
        patch.object(rate_limiter, "get_redis_client", return_value=redis_client),
        patch("verification_mailer.main.send_verification_code", new=AsyncMock()),
    ):
        response = TestClient(app).post(
            "/api/send-verification", json={"email": "u@example.com", "code": "1"}
        )

    assert response.status_code == 429
    assert 0 < int(response.headers["Retry-After"]) <= 120
    assert "error" in response.json()


def test_rate_limiter_counts_in_memory_without_redis() -> None:
    rate_limiter.memory_cache.clear()
    client = TestClient(app)

    with (
        patch.object(rate_limiter, "get_redis_client", return_value=None),
        patch("verification_mailer.main.send_verification_code", new=AsyncMock()),
    ):
        missing = client.post("/api/send-verification", json={})
        sent = client.post("/api/send-verification", json={"email": "u@example.com", "code": "1"})

    assert missing.status_code == 400
    assert missing.json() == {"error": "Email and code are required"}
    assert sent.status_code == 200
    assert rate_limiter.memory_cache["send_verification:testclient"]["count"] == 2


def test_rate_limiter_still_enforces_the_limit_without_redis() -> None:
    rate_limiter.memory_cache.clear()
    results = [rate_limiter.check_rate_limit("send_verification:9.9.9.9", 1, 600, None) for _ in range(2)]

    assert [allowed for allowed, _, _ in results] == [True, False]


def test_unreachable_redis_is_not_retried_until_backoff_expires(monkeypatch) -> None:
    monkeypatch.setattr(rate_limiter, "redis_client", None)
    monkeypatch.setattr(rate_limiter, "redis_retry_at", 0.0)
    monkeypatch.delenv("REDIS_URL", raising=False)
    broken = MagicMock()
    broken.ping.side_effect = ConnectionError("refused")

    with patch.object(rate_limiter.redis, "Redis", return_value=broken) as factory:
        first = rate_limiter.get_redis_client()
        second = rate_limiter.get_redis_client()

    assert first is None
    assert second is None
    assert factory.call_count == 1
    assert rate_limiter.redis_retry_at > 0


def request_from(forwarded: str | None, peer: str = "10.0.0.5") -> Request:
    headers = [(b"x-forwarded-for", forwarded.encode())] if forwarded else []
    return Request({"type": "http", "headers": headers, "client": (peer, 51000)})


def test_client_ip_ignores_forwarded_header_by_default() -> None:
    with patch.object(rate_limiter, "TRUST_PROXY_HEADERS", False):
        assert rate_limiter.client_ip(request_from("1.1.1.1")) == "10.0.0.5"


def test_client_ip_uses_right_most_hop_behind_trusted_proxy() -> None:
    with patch.object(rate_limiter, "TRUST_PROXY_HEADERS", True):
        assert rate_limiter.client_ip(request_from("6.6.6.6, 203.0.113.7")) == "203.0.113.7"
        assert rate_limiter.client_ip(request_from(None)) == "10.0.0.5"


def test_spoofed_forwarded_header_does_not_reset_the_limit() -> None:
    rate_limiter.memory_cache.clear()
    client = TestClient(app)

    with (
        patch.object(rate_limiter, "TRUST_PROXY_HEADERS", False),
        patch.object(rate_limiter, "get_redis_client", return_value=None),
        patch.object(rate_limiter, "check_rate_limit", wraps=rate_limiter.check_rate_limit) as check,
        patch("verification_mailer.main.send_verification_code", new=AsyncMock()),
    ):
        for n in range(2):
            client.post(
                "/api/send-verification",
                json={"email": "u@example.com", "code": "1"},
                headers={"X-Forwarded-For": f"198.51.100.{n}"},
            )

    keys = {call.args[0] for call in check.call_args_list}
    assert keys == {"send_verification:testclient"}
