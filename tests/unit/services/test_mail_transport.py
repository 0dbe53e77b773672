from __future__ import annotations

from dataclasses import replace

from invoicely.services import mail_transport
from invoicely.services.mail_transport import LoggingMailTransport, SmtpMailTransport, build_mail_transport


class _FakeSMTP:
    instances: list["_FakeSMTP"] = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.calls: list[str] = []
        self.messages = []
        _FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, username, password):
        self.calls.append(f"login:{username}")

    def send_message(self, message):
        self.messages.append(message)


def test_build_mail_transport_falls_back_to_logging(test_config):
    cfg = replace(test_config, SMTP_HOST=None, SMTP_USERNAME="u", SMTP_PASSWORD="p")
    assert isinstance(build_mail_transport(cfg), LoggingMailTransport)


def test_build_mail_transport_uses_smtp_when_configured(test_config):
    cfg = replace(test_config, SMTP_HOST="smtp.test", SMTP_USERNAME="u", SMTP_PASSWORD="p", SMTP_FROM=None)
    transport = build_mail_transport(cfg)

    assert isinstance(transport, SmtpMailTransport)
    assert transport.from_email == "u"


def test_smtp_transport_sends_plain_text(monkeypatch):
    _FakeSMTP.instances.clear()
    monkeypatch.setattr(mail_transport.smtplib, "SMTP", _FakeSMTP)
    transport = SmtpMailTransport("smtp.test", 2525, "user", "pass", from_email="billing@me.test", timeout=5)

    transport.deliver("to@acme.test", "Invoice 1", "Hello")

    server = _FakeSMTP.instances[0]
    assert (server.host, server.port, server.timeout) == ("smtp.test", 2525, 5)
    assert server.calls == ["starttls", "login:user"]
    message = server.messages[0]
    assert message["To"] == "to@acme.test"
    assert message["From"] == "billing@me.test"
    assert message["Subject"] == "Invoice 1"
