"""Template registry: maps an order status to the email sent for it.

Any status without its own template (including ``pending``) gets the
processing-error email.
"""

from checkout.notification.templates.order_approved import OrderApprovedTemplate
from checkout.notification.templates.payment_declined import PaymentDeclinedTemplate
from checkout.notification.templates.payment_failed import PaymentFailedTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    OrderApprovedTemplate.email_type: OrderApprovedTemplate,
    PaymentDeclinedTemplate.email_type: PaymentDeclinedTemplate,
    PaymentFailedTemplate.email_type: PaymentFailedTemplate,
}


def get_template(status: str):
    """Look up the template class for an order status."""
    return TEMPLATE_REGISTRY.get(status, PaymentFailedTemplate)
