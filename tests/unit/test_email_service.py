from unittest.mock import MagicMock, patch

import pytest

from circles.services.email_service import EmailService, EmailServiceConfig, substitution_context


def test_config_validate_and_is_configured(monkeypatch):
    monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
    monkeypatch.setenv("SMTP_PORT", "587")
    monkeypatch.setenv("FROM_EMAIL", "noreply@example.com")
    cfg = EmailServiceConfig()
    assert cfg.is_configured() is True
    assert cfg.validate() == []

    monkeypatch.setenv("SMTP_HOST", "")
    monkeypatch.setenv("SMTP_PORT", "-1")
    monkeypatch.setenv("FROM_EMAIL", "")
    monkeypatch.setenv("SMTP_USE_TLS", "true")
    monkeypatch.setenv("SMTP_USE_SSL", "true")
    errs = EmailServiceConfig().validate()
    assert any("SMTP_HOST" in e for e in errs)
    assert any("SMTP_PORT" in e for e in errs)
    assert any("FROM_EMAIL" in e for e in errs)
    assert any("SSL" in e for e in errs)


@pytest.mark.asyncio
async def test_send_email_not_configured(monkeypatch):
    monkeypatch.setenv("SMTP_HOST", "")
    out = await EmailService().send_email("user@example.com", "Subject", "<b>Hi</b>")
    assert out["success"] is False
    assert "not configured" in out["error"]


class _SMTPMock(MagicMock):
    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def login(self, username, password):
        return None

    async def send_message(self, message):
        return {"status": "250 OK"}


@pytest.mark.asyncio
async def test_send_email_success_with_mocked_smtp(monkeypatch):
    monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
    monkeypatch.setenv("SMTP_PORT", "587")
    monkeypatch.setenv("FROM_EMAIL", "noreply@example.com")
    svc = EmailService()
    with patch("aiosmtplib.SMTP", _SMTPMock):
        out = await svc.send_email("user@example.com", "Subject", "<b>Hi</b>", text_content="Hi")
    assert out["success"] is True
    assert "smtp_result" in out


@pytest.mark.asyncio
async def test_send_email_failure_is_reported(monkeypatch):
    monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
    svc = EmailService()
    with patch("aiosmtplib.SMTP", side_effect=OSError("connection refused")):
        out = await svc.send_email("user@example.com", "Subject", "<b>Hi</b>")
    assert out["success"] is False
    assert "user@example.com" in out["error"]


def test_send_email_sync_runs_coroutine(monkeypatch):
    monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
    svc = EmailService()
    with patch("aiosmtplib.SMTP", _SMTPMock):
        out = svc.send_email_sync("user@example.com", "Subject", "<b>Hi</b>")
    assert out["success"] is True


def test_html_to_text_conversion():
    svc = EmailService()
    html = "<html><body>Hello &amp; world &lt;3&gt; &#39;quote&#39;</body></html>"
    assert "Hello & world <3> 'quote'" in svc._html_to_text(html)


def test_substitution_context_keeps_strings_and_numbers():
    values = substitution_context({"name": "Ada", "hours": 2, "ratio": 0.5, "flag": True, "items": [1], "none": None})
    assert values == {"name": "Ada", "hours": 2, "ratio": 0.5}
    assert substitution_context(None) == {}


def test_render_template_leaves_unsupported_placeholders(tmp_path, monkeypatch):
    (tmp_path / "hello.html").write_text("<p>Hi {{ userName }}, see {{ items }}</p>")
    monkeypatch.setenv("EMAIL_TEMPLATE_DIR", str(tmp_path))
    html, text = EmailService().render_template("hello", {"userName": "Ada", "items": ["a", "b"]})
    assert "Hi Ada" in html
    assert "{{ items }}" in html
    # No .txt template: the text part is derived from the html
    assert text.startswith("Hi Ada")


def test_render_packaged_templates():
    html, text = EmailService().render_template(
        "verify_email_account",
        {"userName": "Ada", "validationUrl": "http://x/user/validateEmail?token=t"},
    )
    assert "Ada" in html
    assert "http://x/user/validateEmail?token=t" in text
