"""SMTP email adapter (Mailtrap-compatible)."""

import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

import structlog

from checkout.notification.channel.email_port import EmailPort
from checkout.notification.settings import MailSettings

logger = structlog.get_logger(__name__)


class SmtpEmailAdapter(EmailPort):
    """Sends mail through an SMTP relay, upgrading to TLS when offered."""

    def __init__(self, settings: MailSettings):
        self.settings = settings

    def _connect(self) -> smtplib.SMTP:
        smtp = smtplib.SMTP(self.settings.host, self.settings.port, timeout=self.settings.timeout)
        try:
            smtp.ehlo()
            if smtp.has_extn("starttls"):
                smtp.starttls()
                smtp.ehlo()
            smtp.login(self.settings.username, self.settings.password)
        except (smtplib.SMTPException, OSError):
            smtp.close()
            raise
        return smtp

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        message = EmailMessage()
        message["From"] = self.settings.from_email
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid(domain=self.settings.from_email.split("@")[-1])
        message.set_content(body)
        if html_body:
            message.add_alternative(html_body, subtype="html")

        try:
            with self._connect() as smtp:
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("SMTP delivery failed", to=to, error=str(exc))
            return {"message_id": None, "status": "failed", "error": str(exc)}

        return {"message_id": message["Message-ID"], "status": "sent"}

    def verify(self) -> dict:
        try:
            with self._connect() as smtp:
                smtp.noop()
        except (smtplib.SMTPException, OSError) as exc:
            return {"ok": False, "error": str(exc)}
        return {"ok": True}
