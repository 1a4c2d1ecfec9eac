"""Domain events for the Notification aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Notification")
class NotificationCreated:
    """A notification was queued for delivery."""

    __version__ = 1

    notification_id: Identifier(required=True)
    recipient: String(required=True)
    notification_type: String(required=True)
    subject: String()
    created_at: DateTime(required=True)


@marketplace.event(part_of="Notification")
class NotificationSent:
    __version__ = 1

    notification_id: Identifier(required=True)
    recipient: String(required=True)
    sent_at: DateTime(required=True)


@marketplace.event(part_of="Notification")
class NotificationFailed:
    """The mail provider refused or could not take the message."""

    __version__ = 1

    notification_id: Identifier(required=True)
    recipient: String(required=True)
    reason: String(required=True)
    retry_count: Integer(required=True)
    max_retries: Integer(required=True)
    failed_at: DateTime(required=True)


@marketplace.event(part_of="Notification")
class NotificationRetried:
    __version__ = 1

    notification_id: Identifier(required=True)
    recipient: String(required=True)
    retry_count: Integer(required=True)
    retried_at: DateTime(required=True)
