"""Payment declined: the issuer refused the card."""

from checkout.notification.templates.layout import greeting, items_text, money, page

RETRY_STEPS = [
    "Check that your card details are correct",
    "Ensure you have sufficient funds available",
    "Contact your bank to authorize the transaction",
    "Try using a different payment method",
]


class PaymentDeclinedTemplate:
    email_type = "declined"

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context["order_number"]
        availability = "Your items will remain available subject to inventory."
        body = (
            f"Dear {context['customer_name']},\n\n"
            f"We're sorry to inform you that your payment for order {order_number} "
            "has been declined by your card issuer.\n\n"
            f"{items_text(context)}\n\n"
            "What's next?\n" + "\n".join(f"- {step}" for step in RETRY_STEPS) + "\n\n"
            f"You can retry your order anytime. {availability}"
        )
        html_body = page(
            "❌ Payment Declined",
            "error",
            greeting(context)
            + f"<p>We're sorry to inform you that your payment for order {order_number} "
            "has been declined by your card issuer.</p>"
            "<h3>Order Details</h3>"
            f"<p><strong>Order Number:</strong> {order_number}</p>"
            '<p><strong>Status:</strong> <span class="error">Declined</span></p>'
            f"<p><strong>Order Date:</strong> {context['order_date']}</p>"
            f"<p><strong>Total:</strong> {money(context['total'])}</p>"
            "<h3>What's Next?</h3><ul>"
            + "".join(f"<li>{step}</li>" for step in RETRY_STEPS)
            + f"</ul><p>You can retry your order anytime by visiting our website. {availability}</p>",
            "We're here to help!",
        )
        return {
            "subject": f"❌ Payment Declined - {order_number}",
            "body": body,
            "html_body": html_body,
        }
