"""Delivery of queued notifications through the configured mailer.

Reacts to NotificationCreated and NotificationRetried. The outcome is recorded
on the notification (SENT or FAILED); a failing mailer is logged here and
never reaches the code that queued the message.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.notifications.channel import get_mailer
from marketplace.notifications.events import NotificationCreated, NotificationRetried
from marketplace.notifications.notification import Notification, NotificationStatus

logger = structlog.get_logger(__name__)


@marketplace.event_handler(part_of=Notification)
class NotificationDispatcher:
    @handle(NotificationCreated)
    def on_notification_created(self, event: NotificationCreated) -> None:
        deliver(event.notification_id)

    @handle(NotificationRetried)
    def on_notification_retried(self, event: NotificationRetried) -> None:
        deliver(event.notification_id)


def deliver(notification_id) -> None:
    repo = current_domain.repository_for(Notification)

    try:
        notification = repo.get(notification_id)
    except ObjectNotFoundError:
        logger.error("Failed to load notification for dispatch", notification_id=str(notification_id))
        return

    if NotificationStatus(notification.status) != NotificationStatus.PENDING:
        logger.info(
            "Notification not in PENDING status, skipping dispatch",
            notification_id=str(notification_id),
            status=notification.status,
        )
        return

    try:
        result = get_mailer().send(
            to=notification.recipient,
            subject=notification.subject or "",
            body=notification.body,
            html_body=notification.html_body,
        )
        if result.get("status") == "sent":
            notification.mark_sent(provider_message_id=result.get("message_id"))
        else:
            notification.mark_failed(result.get("error", "Unknown dispatch error"))
    except Exception as exc:
        notification.mark_failed(str(exc) or exc.__class__.__name__)
        logger.error(
            "Notification dispatch failed",
            notification_id=str(notification.id),
            error=str(exc),
        )

    if notification.status == NotificationStatus.FAILED.value:
        logger.warning(
            "Notification not delivered",
            notification_id=str(notification.id),
            reason=notification.failure_reason,
            retry_count=notification.retry_count,
        )

    repo.add(notification)
