"""Email transport registry.

SMTP is used by default; tests install a FakeEmailAdapter with
set_email_transport() and undo it with reset_email_transport().
"""

from checkout.notification.channel.email_port import EmailPort
from checkout.notification.channel.smtp_email import SmtpEmailAdapter
from checkout.notification.settings import MailSettings

_override: EmailPort | None = None


def get_email_transport(settings: MailSettings) -> EmailPort:
    """Return the override if one is installed, else an SMTP adapter for ``settings``."""
    if _override is not None:
        return _override
    return SmtpEmailAdapter(settings)


def set_email_transport(transport: EmailPort) -> None:
    global _override
    _override = transport


def reset_email_transport() -> None:
    global _override
    _override = None
