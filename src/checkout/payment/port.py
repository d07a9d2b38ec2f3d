"""Payment gateway port (abstract interface).

The order pipeline only ever talks to this contract, so the deterministic
simulator can be replaced in tests without touching order placement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class PaymentOutcome(Enum):
    APPROVED = "approved"
    DECLINED = "declined"
    FAILED = "failed"


@dataclass(frozen=True)
class PaymentResult:
    """Result of a payment attempt."""

    status: PaymentOutcome
    transaction_id: str | None = None
    error_message: str | None = None

    @property
    def approved(self) -> bool:
        return self.status is PaymentOutcome.APPROVED


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def charge(self, amount: float, simulation_code: str) -> PaymentResult:
        """Attempt to charge ``amount``. Unfavorable outcomes are results, not errors."""
        ...
