import html
import logging
import smtplib
from concurrent.futures import ThreadPoolExecutor, as_completed
from email.message import EmailMessage
from email.utils import formataddr, make_msgid

from recruitment.config import settings
from recruitment.core.pipeline import NOTIFY_STATUSES

logger = logging.getLogger(__name__)

PRIORITY_HEADERS = {
    "X-Priority": "1",
    "X-MSMail-Priority": "High",
    "Importance": "high",
}

_PAGE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Application Status Update</title>
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
    .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
    .header {{ margin-bottom: 20px; }}
    .footer {{ margin-top: 30px; color: #333; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="header"><p>Dear {applicant_name},</p></div>
    {body}
    <div class="footer">{signature}</div>
  </div>
</body>
</html>
"""

_BODIES = {
    "shortlisted": (
        "Congratulations! You've Been Shortlisted for {job_title} at {institution}",
        "<p>We are pleased to inform you that your application for the <strong>{job_title}</strong> "
        "position at {institution} has been shortlisted.</p>"
        "<p>Our hiring team was impressed with your qualifications and experience. The date, time and venue "
        "of your interview will be communicated to you shortly. Please monitor your email for these details.</p>",
    ),
    "rejected": (
        "Update on Your Application for {job_title} at {institution}",
        "<p>Thank you for your interest in the <strong>{job_title}</strong> position at {institution} "
        "and for taking the time to apply.</p>"
        "<p>After careful consideration, we regret to inform you that we have decided to move forward with "
        "other candidates whose qualifications more closely match our current needs.</p>"
        "<p>We appreciate your interest in {institution} and wish you the best in your job search.</p>",
    ),
}


class EmailDeliveryError(Exception):
    """Raised when a status email could not be handed to the SMTP server."""


def _signature() -> str:
    lines = [
        settings.hr_signature_name,
        settings.hr_signature_title,
        settings.institution_name,
        settings.hr_signature_address,
        f"CELL: {settings.hr_signature_phone}" if settings.hr_signature_phone else "",
        f"EMAIL: {settings.hr_signature_email}" if settings.hr_signature_email else "",
    ]
    block = "".join(f'<p style="margin: 0;">{html.escape(line)}</p>' for line in lines if line)
    motto = ""
    if settings.hr_signature_motto:
        motto = (
            '<p style="margin-top: 10px; font-style: italic; font-weight: bold;">'
            f'"{html.escape(settings.hr_signature_motto)}"</p>'
        )
    return (
        "<p>For any inquiries, do not hesitate to contact the HR Office using the contact details below.</p>"
        f"<p>Regards,</p>{block}{motto}"
    )


def render_status_email(status: str, job_title: str, applicant_name: str) -> tuple[str, str]:
    """Return (subject, html) for a shortlisted or rejected notice."""
    if status not in _BODIES:
        raise ValueError(f"No email template for status '{status}'")
    subject_tpl, body_tpl = _BODIES[status]
    subject = subject_tpl.format(job_title=job_title, institution=settings.institution_name)
    body = body_tpl.format(
        job_title=html.escape(job_title),
        institution=html.escape(settings.institution_name),
    )
    page = _PAGE.format(applicant_name=html.escape(applicant_name), body=body, signature=_signature())
    return subject, page


def build_message(to: str, subject: str, html_body: str) -> EmailMessage:
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = formataddr((settings.mail_from_name, settings.mail_from_address))
    msg["To"] = to
    msg["Message-ID"] = make_msgid()
    for name, value in PRIORITY_HEADERS.items():
        msg[name] = value
    msg.set_content("This message requires an HTML-capable email client.")
    msg.add_alternative(html_body, subtype="html")
    return msg


def _deliver(msg: EmailMessage) -> None:
    with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=settings.smtp_timeout_seconds) as smtp:
        if settings.smtp_use_tls:
            smtp.starttls()
        if settings.smtp_user:
            smtp.login(settings.smtp_user, settings.smtp_password)
        smtp.send_message(msg)


def send_application_status_email(to: str, job_title: str, applicant_name: str, status: str) -> str:
    """
    Render and send one status email. Returns the Message-ID.
    Raises EmailDeliveryError on SMTP failure, ValueError for an unknown status.
    """
    subject, html_body = render_status_email(status, job_title, applicant_name)
    msg = build_message(to, subject, html_body)
    if not settings.email_enabled:
        logger.info("Email disabled; would send '%s' to %s", subject, to)
        return msg["Message-ID"]
    try:
        _deliver(msg)
    except (smtplib.SMTPException, OSError) as e:
        logger.warning("Failed to send %s email to %s: %s", status, to, e)
        raise EmailDeliveryError("Failed to send email notification") from e
    logger.info("Status email sent: status=%s to=%s id=%s", status, to, msg["Message-ID"])
    return msg["Message-ID"]


def send_mass_status_emails(recipients: list[dict]) -> dict:
    """
    Send one email per recipient dict (to, job_title, applicant_name, status) over a bounded pool.
    Returns {"sent": int, "failed": int, "failed_emails": [{"email", "error"}]}.
    """
    if not recipients:
        return {"sent": 0, "failed": 0, "failed_emails": []}

    failed_emails: list[dict] = []
    sent = 0
    workers = max(1, min(settings.smtp_max_connections, len(recipients)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(
                send_application_status_email,
                r["to"],
                r["job_title"],
                r["applicant_name"],
                r["status"],
            ): r
            for r in recipients
        }
        for future in as_completed(futures):
            recipient = futures[future]
            try:
                future.result()
                sent += 1
            except Exception as e:
                failed_emails.append({"email": recipient["to"], "error": str(e) or "Unknown error"})

    logger.info("Mass email done: sent=%d failed=%d", sent, len(failed_emails))
    return {"sent": sent, "failed": len(failed_emails), "failed_emails": failed_emails}


def notify_status_change(to: str, job_title: str, applicant_name: str, status: str) -> None:
    """Best-effort notice after a status change. Failures are logged, never raised."""
    if status not in NOTIFY_STATUSES:
        return
    try:
        send_application_status_email(to, job_title, applicant_name, status)
    except Exception:
        logger.exception("Status email to %s for '%s' not delivered", to, job_title)


def notify_many(recipients: list[dict]) -> None:
    recipients = [r for r in recipients if r.get("status") in NOTIFY_STATUSES]
    if not recipients:
        return
    try:
        result = send_mass_status_emails(recipients)
    except Exception:
        logger.exception("Mass status notification failed")
        return
    if result["failed"]:
        logger.warning("Mass status notification: %d of %d failed", result["failed"], len(recipients))
