"""Template registry: maps NotificationType to template classes."""

from marketplace.notifications.notification import NotificationType
from marketplace.notifications.templates.employee_credentials import EmployeeCredentialsTemplate
from marketplace.notifications.templates.new_order import NewOrderTemplate
from marketplace.notifications.templates.payment_confirmation import PaymentConfirmationTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationType.NEW_ORDER.value: NewOrderTemplate,
    NotificationType.PAYMENT_CONFIRMATION.value: PaymentConfirmationTemplate,
    NotificationType.EMPLOYEE_CREDENTIALS.value: EmployeeCredentialsTemplate,
}


def get_template(notification_type: str):
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
