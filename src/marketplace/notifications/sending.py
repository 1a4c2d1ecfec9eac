"""Queue an email: render the template and record a Notification.

Delivery happens in ``dispatch.py`` once the notification is stored.
"""

import json

from protean.utils.globals import current_domain

from marketplace.notifications.notification import Notification
from marketplace.notifications.templates import get_template

# Context keys that never go into the stored context snapshot
_REDACTED_KEYS = frozenset({"password"})


def notify(notification_type: str, recipient: str, context: dict, recipient_id=None, source_event_type=None) -> str:
    """Create a notification for ``recipient`` and return its id."""
    rendered = get_template(notification_type).render(context)
    snapshot = {key: value for key, value in context.items() if key not in _REDACTED_KEYS}

    notification = Notification.create(
        recipient=recipient,
        recipient_id=recipient_id,
        notification_type=notification_type,
        subject=rendered["subject"],
        body=rendered["body"],
        html_body=rendered.get("html_body"),
        source_event_type=source_event_type,
        context_data=json.dumps(snapshot, default=str),
    )
    current_domain.repository_for(Notification).add(notification)
    return str(notification.id)
