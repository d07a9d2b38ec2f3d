"""Order confirmation: sent for approved orders."""

from html import escape

from checkout.notification.templates.layout import greeting, items_table, items_text, page


class OrderApprovedTemplate:
    email_type = "approved"

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context["order_number"]
        shipping = context["shipping"]
        body = (
            f"Dear {context['customer_name']},\n\n"
            "Thank you for your order! Your payment has been processed successfully.\n\n"
            f"Order Number: {order_number}\n"
            f"Transaction ID: {context['transaction_id']}\n"
            "Status: Approved\n"
            f"Order Date: {context['order_date']}\n\n"
            f"{items_text(context)}\n\n"
            f"Shipping to:\n{shipping['address']}\n"
            f"{shipping['city']}, {shipping['state']} {shipping['zip_code']}\n\n"
            "We'll send you another email with tracking information once your order ships."
        )
        html_body = page(
            "✅ Order Confirmed!",
            "success",
            greeting(context)
            + "<p>Thank you for your order! We're excited to confirm that your payment has been processed successfully.</p>"
            "<h3>Order Details</h3>"
            f"<p><strong>Order Number:</strong> {order_number}</p>"
            f"<p><strong>Transaction ID:</strong> {context['transaction_id']}</p>"
            '<p><strong>Status:</strong> <span class="success">Approved</span></p>'
            f"<p><strong>Order Date:</strong> {context['order_date']}</p>"
            + items_table(context)
            + "<h3>Shipping Information</h3>"
            f"<p>{escape(shipping['address'])}<br>"
            f"{escape(shipping['city'])}, {escape(shipping['state'])} {escape(shipping['zip_code'])}</p>"
            "<p>We'll send you another email with tracking information once your order ships.</p>",
            "Thank you for shopping with us!",
        )
        return {
            "subject": f"✅ Order Confirmation - {order_number}",
            "body": body,
            "html_body": html_body,
        }
