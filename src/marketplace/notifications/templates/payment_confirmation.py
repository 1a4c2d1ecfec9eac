"""Payment confirmation template: the buyer paid, the seller can ship."""

from html import escape

from marketplace.notifications.notification import NotificationType


class PaymentConfirmationTemplate:
    notification_type = NotificationType.PAYMENT_CONFIRMATION.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = str(context.get("order_id", "N/A"))
        seller_name = context.get("seller_name", "")
        customer_name = context.get("customer_name", "")
        customer_phone = context.get("customer_phone", "")
        customer_address = context.get("customer_address", "")
        status = context.get("status", "paid")

        return {
            "subject": f"Payment received for order #{order_id}",
            "body": (
                f"Hello {seller_name},\n\n"
                f"Order #{order_id} is now {status}. Please prepare it for delivery.\n\n"
                f"Customer: {customer_name}\n"
                f"Phone: {customer_phone}\n"
                f"Address: {customer_address}\n"
            ),
            "html_body": (
                f"<p>Hello {escape(seller_name)},</p>"
                f"<p>Order #{escape(order_id)} is now <strong>{escape(status)}</strong>. "
                "Please prepare it for delivery.</p>"
                "<ul>"
                f"<li>Customer: {escape(customer_name)}</li>"
                f"<li>Phone: {escape(customer_phone)}</li>"
                f"<li>Address: {escape(customer_address)}</li>"
                "</ul>"
            ),
        }
