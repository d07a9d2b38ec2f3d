"""Order notification dispatcher.

Renders the status email for a stored order and hands it to the email
transport. Delivery is decoupled from order placement: a failure here is
reported to the caller as ``DeliveryError`` and leaves the order untouched,
so sending can simply be retried later.

When no SMTP credentials are configured the dispatcher reports a simulated
success without sending anything or flagging the order.
"""

from dataclasses import dataclass

import structlog

from checkout.notification.channel import get_email_transport
from checkout.notification.channel.email_port import EmailPort
from checkout.notification.settings import MailSettings
from checkout.notification.templates import get_template
from checkout.order.notification_status import mark_notified
from checkout.order.order import Order
from checkout.shared.exceptions import DeliveryError
from checkout.utils.logging import order_log_context

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DispatchResult:
    order_number: str
    email_type: str
    recipient: str
    simulated: bool = False
    message_id: str | None = None


def build_context(order: Order) -> dict:
    """Flatten an order into the values the templates render."""
    customer = order.customer_info
    return {
        "customer_name": customer.full_name,
        "order_number": order.order_number,
        "transaction_id": order.transaction_id,
        "order_date": order.created_at.strftime("%Y-%m-%d") if order.created_at else "",
        "total": order.pricing.grand_total,
        "items": [
            {
                "name": item.product_name,
                "variants": item.variant_list,
                "quantity": item.quantity,
                "price": item.unit_price,
                "subtotal": item.subtotal,
            }
            for item in order.items
        ],
        "shipping": {
            "address": customer.address,
            "city": customer.city,
            "state": customer.state,
            "zip_code": customer.zip_code,
        },
    }


class OrderNotificationDispatcher:
    def __init__(self, settings: MailSettings, transport: EmailPort | None = None):
        self.settings = settings
        self.transport = transport or get_email_transport(settings)

    @property
    def is_configured(self) -> bool:
        return self.settings.is_configured

    def build_message(self, order: Order) -> dict:
        """Render subject and bodies for the order's status. No I/O."""
        template = get_template(order.status)
        message = template.render(build_context(order))
        message["email_type"] = template.email_type
        return message

    def send(self, order: Order) -> DispatchResult:
        with order_log_context(order.order_number, status=order.status):
            return self._send(order)

    def _send(self, order: Order) -> DispatchResult:
        message = self.build_message(order)
        recipient = order.customer_info.email

        if not self.is_configured:
            logger.info(
                "Mail transport not configured, email simulated",
                order_number=order.order_number,
                email_type=message["email_type"],
            )
            return DispatchResult(
                order_number=order.order_number,
                email_type=message["email_type"],
                recipient=recipient,
                simulated=True,
            )

        try:
            response = self.transport.send(
                to=recipient,
                subject=message["subject"],
                body=message["body"],
                html_body=message["html_body"],
            )
        except Exception as exc:
            logger.exception("Email transport raised", order_number=order.order_number)
            raise DeliveryError(str(exc), order_number=order.order_number) from exc

        if response.get("status") != "sent":
            error = response.get("error") or "Email delivery failed"
            logger.warning("Email delivery failed", order_number=order.order_number, error=error)
            raise DeliveryError(error, order_number=order.order_number)

        mark_notified(order.order_number)
        logger.info(
            "Order email sent",
            order_number=order.order_number,
            email_type=message["email_type"],
            message_id=response.get("message_id"),
        )
        return DispatchResult(
            order_number=order.order_number,
            email_type=message["email_type"],
            recipient=recipient,
            message_id=response.get("message_id"),
        )

    def verify_connection(self) -> dict:
        """Probe the transport. Returns ``{"ok": bool, "error": ...}``."""
        return self.transport.verify()


def get_dispatcher() -> OrderNotificationDispatcher:
    """Dispatcher wired from the process environment."""
    return OrderNotificationDispatcher(MailSettings.from_env())
