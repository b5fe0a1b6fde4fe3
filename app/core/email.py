"""
app/core/email.py

Email Sending Utilities

Handles sending transactional emails for:
- One-time verification codes (registration, password reset, email change)
- Welcome email after registration
- Phone verification requests routed to the support inbox
- Phone number change notices to the support inbox
"""

import logging
from datetime import datetime
from typing import Any

from fastapi import HTTPException
from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import EmailStr
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import From, Mail, To

from app.core.config import settings
from app.database.enums import VerificationType

logger = logging.getLogger(__name__)

OTP_SUBJECTS: dict[VerificationType, str] = {
    VerificationType.REGISTRATION: "Verify your email",
    VerificationType.PASSWORD_RESET: "Reset your password",
    VerificationType.EMAIL_CHANGE: "Verify your new email",
}

# Jinja2 template environment setup
jinja_env: Environment | None = None
try:
    jinja_env = Environment(
        loader=FileSystemLoader(settings.mail_templates_path),
        autoescape=select_autoescape(["html", "xml"]),
    )
    logger.info(f"Jinja2 environment initialized with templates in: {settings.mail_templates_path}")
except Exception:
    logger.exception("Failed to initialize Jinja2 environment")
    jinja_env = None


def _render_template(template_name: str, context: dict[str, Any]) -> str:
    """
    Renders an email template with the shared branding context.
    """
    if not jinja_env:
        logger.error("Jinja2 environment not available")
        raise RuntimeError("Email template environment not initialized")

    try:
        template = jinja_env.get_template(template_name)
        full_context = {
            "year": datetime.now().year,
            "company_name": settings.MAIL_FROM_NAME or settings.APP_NAME,
            "app_name": settings.APP_NAME,
            "base_url": str(settings.BASE_URL).rstrip("/"),
            "support_email": str(settings.SUPPORT_EMAIL),
            **context,
        }
        return template.render(full_context)
    except Exception as e:
        logger.error(f"Failed to render template '{template_name}': {str(e)}")
        raise ValueError(f"Failed to render email template {template_name}") from e


async def _send_email(to_email: EmailStr | str, subject: str, html_content: str) -> None:
    """
    Sends an email using the SendGrid API.

    Raises:
        HTTPException 500: On configuration or provider failure.
    """
    if not settings.EMAILS_ENABLED:
        logger.warning(
            f"Email sending disabled. Skipping send to {to_email} for subject '{subject}'"
        )
        return

    if not all([settings.SENDGRID_API_KEY, settings.MAIL_FROM]):
        logger.error("SendGrid API Key or MAIL_FROM setting is missing")
        raise HTTPException(status_code=500, detail="Email service configuration missing")

    message = Mail(
        from_email=From(email=str(settings.MAIL_FROM), name=settings.MAIL_FROM_NAME or settings.APP_NAME),
        to_emails=To(str(to_email)),
        subject=subject,
        html_content=html_content,
    )

    try:
        sg = SendGridAPIClient(settings.SENDGRID_API_KEY)
        response = sg.client.mail.send.post(request_body=message.get())
    except Exception as e:
        logger.error(f"Failed to send email to {to_email}: {str(e)}")
        raise HTTPException(
            status_code=500, detail="An unexpected error occurred while sending the email"
        )

    if response.status_code >= 300:
        logger.error(f"SendGrid API error: Status={response.status_code}, Body={response.body}")
        raise HTTPException(status_code=500, detail="Failed to send email via provider")
    logger.info(f"Email sent to {to_email} for subject '{subject}' with status code {response.status_code}")


async def send_otp_email(to_email: EmailStr | str, code: str, otp_type: VerificationType) -> None:
    """
    Sends a six digit verification code.

    Args:
        to_email: Recipient's address.
        code: The one-time code.
        otp_type: Selects the subject and wording.
    """
    subject = f"{OTP_SUBJECTS[otp_type]} - {settings.APP_NAME}"
    context = {
        "code": code,
        "otp_type": otp_type.value,
        "expires_minutes": settings.OTP_EXPIRE_MINUTES,
    }
    html_content = _render_template("otp.html", context)
    await _send_email(to_email, subject, html_content)
    logger.info(f"[OTP] {otp_type.value} code emailed to {to_email}")


async def send_welcome_email(to_email: EmailStr | str, name: str | None) -> None:
    base_url_str = str(settings.BASE_URL).rstrip("/")
    subject = f"Welcome to {settings.MAIL_FROM_NAME or settings.APP_NAME}"
    context = {
        "name": name,
        "dashboard_url": f"{base_url_str}/dashboard",
    }
    html_content = _render_template("welcome.html", context)
    await _send_email(to_email, subject, html_content)
    logger.info(f"Welcome email sent to {to_email}")


async def send_phone_verification_request_email(
    user_name: str | None, user_email: str, phone: str, code: str
) -> None:
    """
    Asks support staff to call the member and read out the verification code.
    """
    subject = f"Phone verification request - {user_email}"
    context = {
        "user_name": user_name or "Unknown",
        "user_email": user_email,
        "phone": phone,
        "code": code,
        "expires_hours": settings.PHONE_OTP_EXPIRE_HOURS,
    }
    html_content = _render_template("phone_verification_request.html", context)
    await _send_email(settings.SUPPORT_EMAIL, subject, html_content)
    logger.info(f"[PHONE] Verification request for {user_email} sent to support")


async def send_phone_update_email(
    user_name: str | None, user_email: str, old_phone: str | None, new_phone: str | None
) -> None:
    subject = f"Phone number changed - {user_email}"
    context = {
        "user_name": user_name or "Unknown",
        "user_email": user_email,
        "old_phone": old_phone or "Not set",
        "new_phone": new_phone or "Removed",
    }
    html_content = _render_template("phone_update.html", context)
    await _send_email(settings.SUPPORT_EMAIL, subject, html_content)
    logger.info(f"[PHONE] Phone change for {user_email} reported to support")
