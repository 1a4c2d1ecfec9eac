"""Notification aggregate: one transactional email and its delivery outcome.

State Machine:
    PENDING → SENT
    PENDING → FAILED → (retry) → PENDING
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text

from marketplace.domain import marketplace
from marketplace.notifications.events import (
    NotificationCreated,
    NotificationFailed,
    NotificationRetried,
    NotificationSent,
)


class NotificationType(Enum):
    NEW_ORDER = "NewOrder"
    PAYMENT_CONFIRMATION = "PaymentConfirmation"
    EMPLOYEE_CREDENTIALS = "EmployeeCredentials"


class NotificationStatus(Enum):
    PENDING = "Pending"
    SENT = "Sent"
    FAILED = "Failed"


_VALID_TRANSITIONS = {
    NotificationStatus.PENDING: {NotificationStatus.SENT, NotificationStatus.FAILED},
    NotificationStatus.SENT: set(),
    NotificationStatus.FAILED: {NotificationStatus.PENDING},
}


@marketplace.aggregate
class Notification:
    """A single email to a recipient, kept for audit and retry."""

    recipient: String(required=True, max_length=254)
    recipient_id: Identifier()
    notification_type: String(choices=NotificationType, required=True)

    subject: String(max_length=500)
    body: Text(required=True)
    html_body: Text()

    source_event_type: String(max_length=200)
    context_data: Text()  # JSON

    status: String(choices=NotificationStatus, default=NotificationStatus.PENDING.value)
    provider_message_id: String(max_length=255)
    sent_at: DateTime()
    failure_reason: String(max_length=500)

    retry_count: Integer(default=0)
    max_retries: Integer(default=3)

    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(
        cls,
        recipient,
        notification_type,
        body,
        subject=None,
        html_body=None,
        recipient_id=None,
        source_event_type=None,
        context_data=None,
        max_retries=3,
    ):
        """Create a new notification in PENDING status."""
        now = datetime.now(UTC)

        notification = cls(
            recipient=recipient,
            recipient_id=recipient_id,
            notification_type=notification_type,
            subject=subject,
            body=body,
            html_body=html_body,
            source_event_type=source_event_type,
            context_data=context_data,
            status=NotificationStatus.PENDING.value,
            retry_count=0,
            max_retries=max_retries,
            created_at=now,
            updated_at=now,
        )
        notification.raise_(
            NotificationCreated(
                notification_id=str(notification.id),
                recipient=recipient,
                notification_type=notification_type,
                subject=subject,
                created_at=now,
            )
        )
        return notification

    def _assert_can_transition(self, target_status):
        current = NotificationStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def mark_sent(self, provider_message_id=None):
        self._assert_can_transition(NotificationStatus.SENT)

        now = datetime.now(UTC)
        self.status = NotificationStatus.SENT.value
        self.provider_message_id = provider_message_id
        self.sent_at = now
        self.updated_at = now

        self.raise_(NotificationSent(notification_id=str(self.id), recipient=self.recipient, sent_at=now))

    def mark_failed(self, reason):
        self._assert_can_transition(NotificationStatus.FAILED)

        now = datetime.now(UTC)
        self.status = NotificationStatus.FAILED.value
        self.failure_reason = reason
        self.retry_count = self.retry_count + 1
        self.updated_at = now

        self.raise_(
            NotificationFailed(
                notification_id=str(self.id),
                recipient=self.recipient,
                reason=reason,
                retry_count=self.retry_count,
                max_retries=self.max_retries,
                failed_at=now,
            )
        )

    def retry(self):
        """Put a failed notification back in the queue for another delivery attempt."""
        if NotificationStatus(self.status) != NotificationStatus.FAILED:
            raise ValidationError({"status": ["Only failed notifications can be retried"]})
        if self.retry_count >= self.max_retries:
            raise ValidationError({"retry_count": ["Maximum retry attempts exceeded"]})

        now = datetime.now(UTC)
        self.status = NotificationStatus.PENDING.value
        self.failure_reason = None
        self.updated_at = now

        self.raise_(
            NotificationRetried(
                notification_id=str(self.id),
                recipient=self.recipient,
                retry_count=self.retry_count,
                retried_at=now,
            )
        )


@marketplace.repository(part_of=Notification)
class NotificationRepository:
    def with_status(self, status: str | None = None) -> list[Notification]:
        query = self._dao.query
        if status:
            query = query.filter(status=status)
        return sorted(query.all().items, key=lambda n: n.created_at, reverse=True)

    def sent_to(self, recipient: str) -> list[Notification]:
        return sorted(
            self._dao.query.filter(recipient=recipient).all().items,
            key=lambda n: n.created_at,
        )
