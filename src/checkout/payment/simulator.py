"""Deterministic payment simulator.

The outcome is a closed decision table keyed by the 3-digit simulation code.
Unlisted codes fall through to approval. No network calls are made.
"""

from uuid import uuid4

import structlog

from checkout.payment.port import PaymentGateway, PaymentOutcome, PaymentResult

logger = structlog.get_logger(__name__)

DECISION_TABLE: dict[str, tuple[PaymentOutcome, str | None]] = {
    "111": (PaymentOutcome.APPROVED, None),
    "222": (PaymentOutcome.DECLINED, "Card declined by issuer"),
    "333": (PaymentOutcome.FAILED, "Gateway timeout error"),
}
DEFAULT_DECISION = (PaymentOutcome.APPROVED, None)


def generate_transaction_id() -> str:
    return f"TXN-{uuid4().hex[:8]}"


def simulate(code: str) -> PaymentResult:
    status, error_message = DECISION_TABLE.get(code, DEFAULT_DECISION)
    if status is PaymentOutcome.APPROVED:
        return PaymentResult(status=status, transaction_id=generate_transaction_id())
    return PaymentResult(status=status, error_message=error_message)


class SimulatedGateway(PaymentGateway):
    """Gateway adapter backed by the decision table."""

    def charge(self, amount: float, simulation_code: str) -> PaymentResult:
        result = simulate(simulation_code)
        logger.info(
            "Payment simulated",
            amount=amount,
            status=result.status.value,
            transaction_id=result.transaction_id,
        )
        return result
