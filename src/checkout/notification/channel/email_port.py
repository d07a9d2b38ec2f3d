"""Email channel port: abstract interface for email transports."""

from abc import ABC, abstractmethod


class EmailPort(ABC):
    """Abstract interface for email dispatch adapters."""

    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        """Send an email message.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...

    @abstractmethod
    def verify(self) -> dict:
        """Check that the transport is reachable and accepts our credentials.

        Returns:
            dict with keys: ok (bool), error (optional)
        """
        ...
