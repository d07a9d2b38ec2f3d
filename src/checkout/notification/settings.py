"""Mail transport configuration."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class MailSettings:
    host: str = "sandbox.smtp.mailtrap.io"
    port: int = 2525
    username: str | None = None
    password: str | None = None
    from_email: str = "noreply@ecommerce.com"
    timeout: float = 10.0

    @property
    def is_configured(self) -> bool:
        """True when SMTP credentials are present."""
        return bool(self.username and self.password)

    @classmethod
    def from_env(cls) -> "MailSettings":
        return cls(
            host=os.getenv("MAILTRAP_HOST", cls.host),
            port=int(os.getenv("MAILTRAP_PORT", cls.port)),
            username=os.getenv("MAILTRAP_USER") or None,
            password=os.getenv("MAILTRAP_PASS") or None,
            from_email=os.getenv("FROM_EMAIL", cls.from_email),
        )
