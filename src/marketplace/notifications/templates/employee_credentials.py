"""Credentials for a newly hired employee."""

from html import escape

from marketplace.notifications.notification import NotificationType


class EmployeeCredentialsTemplate:
    notification_type = NotificationType.EMPLOYEE_CREDENTIALS.value

    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("employee_name", "")
        store_name = context.get("store_name", "")
        email = context.get("email", "")
        password = context.get("password", "")

        return {
            "subject": f"Your {store_name} account",
            "body": (
                f"Hello {name},\n\n"
                f"You have been registered as an employee of {store_name}.\n"
                f"Log in with {email} and the password {password}.\n"
            ),
            "html_body": (
                f"<p>Hello {escape(name)},</p>"
                f"<p>You have been registered as an employee of <strong>{escape(store_name)}</strong>.</p>"
                f"<p>Log in with {escape(email)} and the password <code>{escape(password)}</code>.</p>"
            ),
        }
