"""Shared HTML scaffolding for order emails."""

from html import escape

BASE_STYLE = """<style>
  body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
  .container { max-width: 600px; margin: 0 auto; padding: 20px; }
  .header { background-color: #f8f9fa; padding: 20px; text-align: center; border-radius: 8px 8px 0 0; }
  .content { background-color: #fff; padding: 30px; border: 1px solid #ddd; }
  .footer { background-color: #f8f9fa; padding: 20px; text-align: center; border-radius: 0 0 8px 8px; }
  .order-table { width: 100%; border-collapse: collapse; margin: 20px 0; }
  .order-table th { background-color: #f8f9fa; padding: 12px; text-align: left; border-bottom: 2px solid #dee2e6; }
  .order-table td { padding: 10px; border-bottom: 1px solid #eee; }
  .total-row { font-weight: bold; background-color: #f8f9fa; }
  .success { color: #28a745; }
  .error { color: #dc3545; }
  .warning { color: #ffc107; }
</style>"""

AUTOMATED_NOTICE = "This is an automated email. Please do not reply to this message."


def money(amount: float) -> str:
    return f"${amount:.2f}"


def item_label(item: dict) -> str:
    """Product name followed by its chosen variants, e.g. ``Sneaker (color: Black, size: 9)``."""
    variants = item.get("variants") or []
    if not variants:
        return item["name"]
    chosen = ", ".join(f"{v['name']}: {v['value']}" for v in variants)
    return f"{item['name']} ({chosen})"


def items_text(context: dict) -> str:
    lines = [
        f"- {item_label(item)} x{item['quantity']} @ {money(item['price'])} = {money(item['subtotal'])}"
        for item in context["items"]
    ]
    lines.append(f"Total: {money(context['total'])}")
    return "\n".join(lines)


def items_table(context: dict) -> str:
    rows = "".join(
        "<tr>"
        f"<td>{escape(item_label(item))}</td>"
        f'<td style="text-align: center;">{item["quantity"]}</td>'
        f'<td style="text-align: right;">{money(item["price"])}</td>'
        f'<td style="text-align: right;">{money(item["subtotal"])}</td>'
        "</tr>"
        for item in context["items"]
    )
    return (
        '<table class="order-table">'
        "<thead><tr><th>Item</th>"
        '<th style="text-align: center;">Qty</th>'
        '<th style="text-align: right;">Price</th>'
        '<th style="text-align: right;">Subtotal</th></tr></thead>'
        f"<tbody>{rows}"
        '<tr class="total-row"><td colspan="3" style="text-align: right; padding: 15px;">Total:</td>'
        f'<td style="text-align: right; padding: 15px;">{money(context["total"])}</td></tr>'
        "</tbody></table>"
    )


def page(heading: str, heading_class: str, content: str, footer: str) -> str:
    return (
        f"{BASE_STYLE}"
        '<div class="container">'
        f'<div class="header"><h1 class="{heading_class}">{heading}</h1></div>'
        f'<div class="content">{content}</div>'
        f'<div class="footer"><p>{footer}</p><p><small>{AUTOMATED_NOTICE}</small></p></div>'
        "</div>"
    )


def greeting(context: dict) -> str:
    return f"<p>Dear {escape(context['customer_name'])},</p>"
