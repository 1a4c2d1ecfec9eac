"""New order template: tells a seller a buyer has placed an order with them."""

from html import escape

from marketplace.notifications.notification import NotificationType


def _format_kz(amount) -> str:
    return f"{float(amount):,.2f} Kz"


class NewOrderTemplate:
    notification_type = NotificationType.NEW_ORDER.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        seller_name = context.get("seller_name", "")
        customer_name = context.get("customer_name", "")
        customer_phone = context.get("customer_phone", "")
        customer_address = context.get("customer_address", "")
        items = context.get("items", [])
        total = _format_kz(context.get("total_amount", 0))

        lines = [f"- {item['product_name']} x{item['quantity']} at {_format_kz(item['unit_price'])}" for item in items]
        rows = "".join(
            f"<li>{escape(str(item['product_name']))} &times; {int(item['quantity'])} "
            f"at {escape(_format_kz(item['unit_price']))}</li>"
            for item in items
        )

        return {
            "subject": f"New order #{order_id}",
            "body": (
                f"Hello {seller_name},\n\n"
                f"{customer_name} placed order #{order_id}.\n\n"
                + "\n".join(lines)
                + f"\n\nTotal: {total}\n"
                f"Deliver to: {customer_address}\n"
                f"Contact: {customer_phone}\n"
            ),
            "html_body": (
                f"<p>Hello {escape(seller_name)},</p>"
                f"<p><strong>{escape(customer_name)}</strong> placed order #{escape(str(order_id))}.</p>"
                f"<ul>{rows}</ul>"
                f"<p>Total: <strong>{escape(total)}</strong></p>"
                f"<p>Deliver to: {escape(customer_address)}<br>Contact: {escape(customer_phone)}</p>"
            ),
        }
