from types import SimpleNamespace

import pytest

from src.adapter.services import email_sender as email_module
from src.adapter.services.email_sender import (
    LoggingEmailSender,
    SmtpEmailSender,
    build_email_sender,
)


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.calls = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        return False

    def ehlo(self):
        self.calls.append("ehlo")

    def starttls(self):
        self.calls.append("starttls")

    def login(self, username, password):
        self.calls.append(("login", username))

    def sendmail(self, from_email, to, message):
        self.calls.append(("sendmail", from_email, tuple(to)))


def _smtp_sender(**overrides) -> SmtpEmailSender:
    fields = dict(host="smtp.test", port=587, from_email="no-reply@acme.com")
    fields.update(overrides)
    return SmtpEmailSender(**fields)


@pytest.mark.asyncio
async def test_smtp_sender_delivers(monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr(email_module.smtplib, "SMTP", FakeSMTP)

    sent = await _smtp_sender(username="mailer", password="pw").send(
        "bob@acme.com", "Hello", "<p>hi</p>"
    )

    assert sent is True
    calls = FakeSMTP.instances[0].calls
    assert calls[:2] == ["ehlo", "starttls"]
    assert ("login", "mailer") in calls
    assert calls[-1] == ("sendmail", "no-reply@acme.com", ("bob@acme.com",))


@pytest.mark.asyncio
async def test_smtp_failure_reports_false(monkeypatch):
    def refuse(*args, **kwargs):
        raise ConnectionRefusedError("no relay")

    monkeypatch.setattr(email_module.smtplib, "SMTP", refuse)

    assert await _smtp_sender().send("bob@acme.com", "Hello", "<p>hi</p>") is False


@pytest.mark.asyncio
async def test_logging_sender_always_succeeds():
    assert await LoggingEmailSender().send("bob@acme.com", "Hello", "<p>hi</p>") is True


def test_backend_selection():
    smtp_config = SimpleNamespace(
        EMAIL_BACKEND="smtp",
        SMTP_HOST="smtp.test",
        SMTP_PORT=25,
        EMAIL_FROM="no-reply@acme.com",
        SMTP_USERNAME="",
        SMTP_PASSWORD="",
    )

    assert isinstance(build_email_sender(smtp_config), SmtpEmailSender)
    assert isinstance(build_email_sender(SimpleNamespace(EMAIL_BACKEND="log")), LoggingEmailSender)
