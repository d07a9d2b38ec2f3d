"""Payment processing error: a transient gateway failure."""

from checkout.notification.templates.layout import greeting, items_text, money, page

RETRY_STEPS = [
    "Wait 15-30 minutes and try again",
    "Clear your browser cache and cookies",
    "Try using a different browser or device",
    "Contact our customer service team",
]


class PaymentFailedTemplate:
    email_type = "failed"

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context["order_number"]
        body = (
            f"Dear {context['customer_name']},\n\n"
            f"We encountered a technical error while processing your payment for order {order_number}. "
            "This issue is temporary and not related to your payment method.\n\n"
            f"{items_text(context)}\n\n"
            "Please try placing your order again in a few minutes. If the problem persists:\n"
            + "\n".join(f"- {step}" for step in RETRY_STEPS)
        )
        html_body = page(
            "⚠️ Payment Processing Error",
            "warning",
            greeting(context)
            + "<p>We encountered a technical error while processing your payment for order "
            f"{order_number}. This issue is temporary and not related to your payment method.</p>"
            "<h3>Order Details</h3>"
            f"<p><strong>Order Number:</strong> {order_number}</p>"
            '<p><strong>Status:</strong> <span class="warning">Processing Failed</span></p>'
            f"<p><strong>Order Date:</strong> {context['order_date']}</p>"
            f"<p><strong>Total:</strong> {money(context['total'])}</p>"
            "<h3>What's Next?</h3>"
            "<p>Please try placing your order again in a few minutes. If the problem persists:</p><ul>"
            + "".join(f"<li>{step}</li>" for step in RETRY_STEPS)
            + "</ul><p>We apologize for any inconvenience this may have caused.</p>",
            "Thank you for your patience!",
        )
        return {
            "subject": f"⚠️ Payment Processing Error - {order_number}",
            "body": body,
            "html_body": html_body,
        }
