"""Reply mailer: answers a contact-form message with one HTML email over SMTPS."""

from __future__ import annotations

import html
import smtplib
import ssl
from datetime import UTC, datetime
from email.header import Header
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import TYPE_CHECKING

import structlog

from lingvoblog import metrics
from lingvoblog.errors import ConfigurationError, MailDeliveryError

if TYPE_CHECKING:
    from lingvoblog.config import Settings

logger = structlog.get_logger()

_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif; margin: 0; padding: 0; background-color: #f5f5f5;">
<div style="max-width: 600px; margin: 0 auto; padding: 20px;">
<div style="background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); padding: 30px; border-radius: 12px 12px 0 0; text-align: center;">
<h1 style="color: white; margin: 0; font-size: 24px;">{brand}</h1>
</div>
<div style="background-color: white; padding: 30px; border-radius: 0 0 12px 12px; box-shadow: 0 4px 6px rgba(0,0,0,0.1);">
<p style="font-size: 16px; color: #333; margin-bottom: 20px;">Assalomu alaykum, {to_name}!</p>
<div style="font-size: 15px; color: #444; line-height: 1.6; margin-bottom: 20px;">{message}</div>
<div style="background-color: #f8f9fa; padding: 15px; border-radius: 8px; border-left: 4px solid #667eea; margin-top: 20px;">
<p style="font-size: 12px; color: #666; margin: 0 0 10px 0; font-weight: bold;">Sizning xabaringiz:</p>
<p style="font-size: 13px; color: #555; margin: 0;">{original}</p>
</div>
<hr style="border: none; border-top: 1px solid #eee; margin: 30px 0;">
<p style="font-size: 14px; color: #888; margin: 0;">Hurmat bilan,<br><strong style="color: #667eea;">{signature}</strong></p>
</div>
<div style="text-align: center; padding: 20px; color: #888; font-size: 12px;">
<p style="margin: 0;">&copy; {year} {brand}. Barcha huquqlar himoyalangan.</p>
</div>
</div>
</body>
</html>"""


def _as_html(text: str) -> str:
    return html.escape(text).replace("\n", "<br>")


def render_reply_html(
    to_name: str,
    message: str,
    original_message: str,
    *,
    brand: str,
    signature: str,
    year: int | None = None,
) -> str:
    return _TEMPLATE.format(
        brand=html.escape(brand),
        to_name=html.escape(to_name),
        message=_as_html(message),
        original=_as_html(original_message),
        signature=html.escape(signature),
        year=year or datetime.now(UTC).year,
    )


class ReplyMailer:
    """Sends contact-form replies through the site's mailbox."""

    def __init__(self, settings: Settings) -> None:
        self.host = settings.smtp_host
        self.port = settings.smtp_port
        self.username = settings.smtp_username
        self.password = settings.smtp_password
        self.from_name = settings.mail_from_name
        self.signature = settings.author_name.split()[0] if settings.author_name else ""

    def build_message(
        self, to: str, to_name: str, subject: str, message: str, original_message: str
    ) -> MIMEMultipart:
        body = render_reply_html(
            to_name, message, original_message, brand=self.from_name, signature=self.signature
        )
        msg = MIMEMultipart("alternative")
        msg["From"] = formataddr((self.from_name, self.username))
        msg["To"] = to
        msg["Subject"] = Header(subject, "utf-8")
        msg.attach(MIMEText(body, "html", "utf-8"))
        return msg

    def send_reply(
        self, to: str, to_name: str, subject: str, message: str, original_message: str
    ) -> None:
        """Send one reply.

        Raises:
            ConfigurationError: SMTP password is not set. Raised before any
                connection is opened.
            MailDeliveryError: the SMTP session failed at any point.
        """
        if not self.password:
            raise ConfigurationError("SMTP_PASSWORD is not configured")

        msg = self.build_message(to, to_name, subject, message, original_message)
        logger.info("Sending reply", to=to)

        try:
            smtp = smtplib.SMTP_SSL(self.host, self.port, context=ssl.create_default_context())
        except (OSError, smtplib.SMTPException) as exc:
            metrics.replies_total.labels(status="failed").inc()
            raise MailDeliveryError(str(exc)) from exc

        try:
            smtp.login(self.username, self.password)
            smtp.send_message(msg, from_addr=self.username, to_addrs=[to])
            smtp.quit()
        except (OSError, smtplib.SMTPException) as exc:
            metrics.replies_total.labels(status="failed").inc()
            logger.error("Reply delivery failed", to=to, error=str(exc))
            raise MailDeliveryError(str(exc)) from exc
        finally:
            smtp.close()

        metrics.replies_total.labels(status="sent").inc()
        logger.info("Reply sent", to=to)
