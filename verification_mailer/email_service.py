"""
Email sending for verification codes

Custom SMTP when credentials are configured, Resend otherwise (or when SMTP
fails). Templates are MJML compiled to HTML before sending.
"""

import logging
import smtplib
import ssl
from datetime import datetime, timezone
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional, Union

import resend
from fastapi.concurrency import run_in_threadpool
from mjml import mjml_to_html

from .config import (
    EMAIL_FROM_ADDRESS,
    RESEND_API_KEY,
    SMTP_HOST,
    SMTP_PASSWORD,
    SMTP_PORT,
    SMTP_TIMEOUT_SECONDS,
    SMTP_USE_TLS,
    SMTP_USERNAME,
    VERIFICATION_SUBJECT,
)
from .email_templates import verification_code_template

logger = logging.getLogger(__name__)

resend.api_key = RESEND_API_KEY


class EmailDeliveryError(Exception):
    """No configured provider accepted the message"""


def smtp_configured() -> bool:
    return bool(SMTP_USERNAME and SMTP_PASSWORD)


def send_via_smtp(recipients: list[str], subject: str, html_content: str, from_address: str) -> dict:
    """Send through the configured SMTP server; port 465 uses implicit TLS"""
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = from_address
    msg["To"] = ", ".join(recipients)
    msg.attach(MIMEText(html_content, "html"))

    context = ssl.create_default_context()
    if SMTP_PORT == 465:
        server = smtplib.SMTP_SSL(SMTP_HOST, SMTP_PORT, context=context, timeout=SMTP_TIMEOUT_SECONDS)
    else:
        server = smtplib.SMTP(SMTP_HOST, SMTP_PORT, timeout=SMTP_TIMEOUT_SECONDS)
        if SMTP_USE_TLS:
            server.starttls(context=context)

    try:
        server.login(SMTP_USERNAME, SMTP_PASSWORD)
        server.sendmail(from_address.split("<")[-1].rstrip(">"), recipients, msg.as_string())
    finally:
        server.quit()

    logger.info(f"SMTP email sent via {SMTP_HOST}")
    return {"id": f"smtp-{datetime.now(timezone.utc).timestamp()}", "success": True}


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    try:
        result = mjml_to_html(mjml_content)
        # mjml_to_html returns a dict with 'html' and 'errors' keys
        if isinstance(result, dict):
            if result.get("errors"):
                logger.warning(f"MJML compilation warnings: {result['errors']}")
            return result.get("html", "")
        return str(result)
    except Exception as e:
        logger.error(f"MJML compilation error: {e}")
        raise EmailDeliveryError(f"Failed to compile MJML template: {str(e)}") from e


async def send_email(
    to: Union[str, list[str]],
    subject: str,
    mjml_content: str,
    from_address: Optional[str] = None,
) -> dict:
    """
    Send an email using SMTP (if configured) or Resend (fallback)

    Args:
        to: Recipient email(s)
        subject: Email subject line
        mjml_content: MJML template content (will be compiled to HTML)
        from_address: Optional custom from address

    Returns:
        Send response dict
    """
    html_content = compile_mjml_to_html(mjml_content)
    recipients = [to] if isinstance(to, str) else to
    sender = from_address or EMAIL_FROM_ADDRESS

    if smtp_configured():
        try:
            return await run_in_threadpool(send_via_smtp, recipients, subject, html_content, sender)
        except Exception as e:
            if not RESEND_API_KEY:
                logger.error(f"SMTP send to {recipients} failed: {e}")
                raise EmailDeliveryError(str(e)) from e
            logger.warning(f"SMTP failed, falling back to Resend: {e}")

    if not RESEND_API_KEY:
        logger.error("No email service configured - SMTP credentials and RESEND_API_KEY missing")
        raise EmailDeliveryError("Email service not configured")

    try:
        email_data = {
            "from": sender,
            "to": recipients,
            "subject": subject,
            "html": html_content,
        }
        response = await run_in_threadpool(resend.Emails.send, email_data)
        logger.info(f"Email sent via Resend: {response}")
        return response
    except Exception as e:
        logger.error(f"Email send error to {recipients}: {e}")
        raise EmailDeliveryError(f"Failed to send email: {str(e)}") from e


async def send_verification_code(to: str, code: str) -> dict:
    """Send a sign-in verification code"""
    return await send_email(
        to=to,
        subject=VERIFICATION_SUBJECT,
        mjml_content=verification_code_template(code),
    )
