"""
Email sender adapters

SmtpEmailSender delivers over SMTP with STARTTLS; LoggingEmailSender only
logs the envelope and is meant for development.
"""

import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from src.app.services.email_sender import IEmailSender

logger = logging.getLogger(__name__)


class SmtpEmailSender(IEmailSender):
    """Delivers mail through an SMTP relay"""

    def __init__(
        self,
        host: str,
        port: int,
        from_email: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ):
        self.host = host
        self.port = port
        self.from_email = from_email
        self.username = username
        self.password = password

    def _build_message(self, to: str, subject: str, html_body: str) -> MIMEMultipart:
        msg = MIMEMultipart()
        msg["From"] = self.from_email
        msg["To"] = to
        msg["Subject"] = subject
        msg.attach(MIMEText(html_body, "html"))
        return msg

    def _send_sync(self, to: str, subject: str, html_body: str) -> None:
        msg = self._build_message(to, subject, html_body)
        with smtplib.SMTP(self.host, self.port, timeout=10) as server:
            server.ehlo()
            server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.sendmail(self.from_email, [to], msg.as_string())

    async def send(self, to: str, subject: str, html_body: str) -> bool:
        try:
            await asyncio.to_thread(self._send_sync, to, subject, html_body)
        except smtplib.SMTPAuthenticationError:
            logger.error(f"SMTP authentication failed sending '{subject}' to {to}")
            return False
        except (smtplib.SMTPException, OSError) as e:
            logger.warning(f"SMTP error sending '{subject}' to {to}: {e}")
            return False
        logger.info(f"Email sent: '{subject}' to {to}")
        return True


class LoggingEmailSender(IEmailSender):
    """Development sender: records the envelope in the log, never the body"""

    async def send(self, to: str, subject: str, html_body: str) -> bool:
        logger.info(f"[email:log] to={to} subject='{subject}' ({len(html_body)} bytes)")
        return True


def build_email_sender(config) -> IEmailSender:
    """Pick the email adapter named by EMAIL_BACKEND"""
    if config.EMAIL_BACKEND == "smtp":
        return SmtpEmailSender(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            from_email=config.EMAIL_FROM,
            username=config.SMTP_USERNAME,
            password=config.SMTP_PASSWORD,
        )
    return LoggingEmailSender()
