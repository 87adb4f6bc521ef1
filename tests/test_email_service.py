import smtplib

import pytest

from recruitment.config import settings
from recruitment.services import email_service
from recruitment.services.email_service import (
    EmailDeliveryError,
    build_message,
    notify_many,
    notify_status_change,
    render_status_email,
    send_application_status_email,
    send_mass_status_emails,
)


@pytest.fixture
def smtp_on(monkeypatch):
    monkeypatch.setattr(settings, "email_enabled", True)
    delivered = []
    monkeypatch.setattr(email_service, "_deliver", lambda msg: delivered.append(msg))
    return delivered


def test_shortlisted_template(monkeypatch):
    monkeypatch.setattr(settings, "institution_name", "LUANAR")
    subject, page = render_status_email("shortlisted", "Lecturer", "Chikondi Phiri")
    assert subject == "Congratulations! You've Been Shortlisted for Lecturer at LUANAR"
    assert "Dear Chikondi Phiri," in page
    assert "has been shortlisted" in page
    assert "interview will be communicated" in page


def test_rejected_template():
    subject, page = render_status_email("rejected", "Driver", "Jane Banda")
    assert subject.startswith("Update on Your Application for Driver")
    assert "move forward with other candidates" in page


def test_names_are_html_escaped():
    _, page = render_status_email("rejected", "R&D <Lead>", "<script>x</script>")
    assert "<script>" not in page
    assert "&lt;script&gt;" in page
    assert "R&amp;D &lt;Lead&gt;" in page


def test_no_template_for_other_statuses():
    with pytest.raises(ValueError):
        render_status_email("hired", "Driver", "Jane")


def test_message_headers(monkeypatch):
    monkeypatch.setattr(settings, "mail_from_name", "HR Office")
    monkeypatch.setattr(settings, "mail_from_address", "hr@luanar.example")
    msg = build_message("jane@example.com", "Subject", "<p>hi</p>")
    assert msg["From"] == "HR Office <hr@luanar.example>"
    assert msg["To"] == "jane@example.com"
    assert msg["X-Priority"] == "1"
    assert msg["Importance"] == "high"
    assert msg["Message-ID"]
    assert msg.get_body(preferencelist=("html",)).get_content().strip() == "<p>hi</p>"


def test_disabled_email_only_logs(monkeypatch):
    monkeypatch.setattr(settings, "email_enabled", False)
    monkeypatch.setattr(email_service, "_deliver", lambda msg: pytest.fail("SMTP must not be used"))
    assert send_application_status_email("a@example.com", "Driver", "Jane", "rejected")


def test_send_returns_message_id(smtp_on):
    message_id = send_application_status_email("a@example.com", "Driver", "Jane", "shortlisted")
    assert len(smtp_on) == 1
    assert smtp_on[0]["Message-ID"] == message_id


def test_smtp_failure_raises_delivery_error(monkeypatch):
    monkeypatch.setattr(settings, "email_enabled", True)

    def refuse(msg):
        raise smtplib.SMTPRecipientsRefused({"a@example.com": (550, b"no such user")})

    monkeypatch.setattr(email_service, "_deliver", refuse)
    with pytest.raises(EmailDeliveryError):
        send_application_status_email("a@example.com", "Driver", "Jane", "rejected")


def test_deliver_uses_starttls_and_login(monkeypatch):
    calls = []

    class FakeSMTP:
        def __init__(self, host, port, timeout=None):
            calls.append(("connect", host, port))

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def starttls(self):
            calls.append(("starttls",))

        def login(self, user, password):
            calls.append(("login", user))

        def send_message(self, msg):
            calls.append(("send", msg["To"]))

    monkeypatch.setattr(email_service.smtplib, "SMTP", FakeSMTP)
    monkeypatch.setattr(settings, "smtp_host", "smtp.example.com")
    monkeypatch.setattr(settings, "smtp_port", 587)
    monkeypatch.setattr(settings, "smtp_use_tls", True)
    monkeypatch.setattr(settings, "smtp_user", "hr")
    email_service._deliver(build_message("jane@example.com", "S", "<p>x</p>"))
    assert calls == [
        ("connect", "smtp.example.com", 587),
        ("starttls",),
        ("login", "hr"),
        ("send", "jane@example.com"),
    ]


def test_mass_send_counts_failures(monkeypatch):
    monkeypatch.setattr(settings, "email_enabled", True)
    monkeypatch.setattr(settings, "smtp_max_connections", 2)

    def deliver(msg):
        if msg["To"].startswith("bad"):
            raise OSError("mailbox unavailable")

    monkeypatch.setattr(email_service, "_deliver", deliver)
    recipients = [
        {"to": f"{prefix}{i}@example.com", "job_title": "Driver", "applicant_name": "A", "status": "rejected"}
        for i, prefix in enumerate(["ok", "bad", "ok", "ok"])
    ]
    result = send_mass_status_emails(recipients)
    assert result["sent"] == 3
    assert result["failed"] == 1
    assert result["failed_emails"] == [{"email": "bad1@example.com", "error": "Failed to send email notification"}]


def test_mass_send_with_no_recipients():
    assert send_mass_status_emails([]) == {"sent": 0, "failed": 0, "failed_emails": []}


def test_notify_swallows_delivery_errors(monkeypatch):
    monkeypatch.setattr(settings, "email_enabled", True)
    monkeypatch.setattr(email_service, "_deliver", lambda msg: (_ for _ in ()).throw(OSError("down")))
    notify_status_change("a@example.com", "Driver", "Jane", "rejected")


def test_notify_ignores_statuses_without_a_template(smtp_on):
    notify_status_change("a@example.com", "Driver", "Jane", "under_review")
    notify_many([{"to": "a@example.com", "job_title": "Driver", "applicant_name": "Jane", "status": "hired"}])
    assert smtp_on == []


def test_notify_many_sends_each(smtp_on):
    notify_many(
        [
            {"to": "a@example.com", "job_title": "Driver", "applicant_name": "A", "status": "shortlisted"},
            {"to": "b@example.com", "job_title": "Driver", "applicant_name": "B", "status": "shortlisted"},
        ]
    )
    assert sorted(m["To"] for m in smtp_on) == ["a@example.com", "b@example.com"]
