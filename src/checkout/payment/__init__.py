"""Payment gateway registry.

Card charges go through the simulator unless a test installs its own
gateway with set_gateway() and removes it with reset_gateway().
"""

from checkout.payment.port import PaymentGateway
from checkout.payment.simulator import SimulatedGateway

_simulator = SimulatedGateway()
_override: PaymentGateway | None = None


def get_gateway() -> PaymentGateway:
    if _override is not None:
        return _override
    return _simulator


def set_gateway(gateway: PaymentGateway) -> None:
    global _override
    _override = gateway


def reset_gateway() -> None:
    global _override
    _override = None
