"""In-memory email transport for tests and local runs without SMTP."""

from itertools import count

from checkout.notification.channel.email_port import EmailPort

_DEFAULT_FAILURE = "Email delivery failed"


class FakeEmailAdapter(EmailPort):
    """Keeps every accepted message in ``sent_emails``.

    ``configure(should_succeed=False)`` makes both ``send`` and ``verify``
    report ``failure_reason``; ``raise_on_send`` makes ``send`` raise
    instead, the way a dropped SMTP connection would.
    """

    def __init__(self):
        self._ids = count(1)
        self.sent_emails: list[dict] = []
        self.configure()

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = _DEFAULT_FAILURE,
        raise_on_send: bool = False,
    ):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.raise_on_send = raise_on_send

    def send(self, to: str, subject: str, body: str, html_body: str | None = None) -> dict:
        if self.raise_on_send:
            raise ConnectionError(self.failure_reason)
        if not self.should_succeed:
            return {"message_id": None, "status": "failed", "error": self.failure_reason}

        message_id = f"<fake-{next(self._ids)}@checkout.local>"
        self.sent_emails.append(
            {"message_id": message_id, "to": to, "subject": subject, "body": body, "html_body": html_body}
        )
        return {"message_id": message_id, "status": "sent"}

    def verify(self) -> dict:
        return {"ok": True} if self.should_succeed else {"ok": False, "error": self.failure_reason}

    def inbox(self, recipient: str) -> list[dict]:
        """Messages accepted for ``recipient``, oldest first."""
        return [email for email in self.sent_emails if email["to"] == recipient]

    def reset(self):
        self.sent_emails.clear()
        self.configure()
