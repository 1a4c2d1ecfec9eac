"""FastAPI routes for the notification log (administrators only)."""

from typing import Literal

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.dependencies import require
from marketplace.identity.authorization import Capability, Principal
from marketplace.notifications.api.schemas import (
    NotificationListResponse,
    NotificationResponse,
    StatusResponse,
)
from marketplace.notifications.notification import Notification
from marketplace.notifications.retry import RetryNotification

router = APIRouter(prefix="/notifications", tags=["notifications"])

_manage_notifications = require(Capability.MANAGE_NOTIFICATIONS)


def _notification_response(n: Notification) -> NotificationResponse:
    return NotificationResponse(
        notification_id=str(n.id),
        recipient=n.recipient,
        notification_type=n.notification_type,
        subject=n.subject,
        status=n.status,
        failure_reason=n.failure_reason,
        retry_count=n.retry_count or 0,
        max_retries=n.max_retries,
        created_at=str(n.created_at) if n.created_at else None,
        sent_at=str(n.sent_at) if n.sent_at else None,
    )


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    status: Literal["Pending", "Sent", "Failed"] | None = None,
    principal: Principal = Depends(_manage_notifications),
) -> NotificationListResponse:
    notifications = current_domain.repository_for(Notification).with_status(status)
    return NotificationListResponse(notifications=[_notification_response(n) for n in notifications])


@router.post("/{notification_id}/retry", status_code=201, response_model=StatusResponse)
def retry_notification(notification_id: str, principal: Principal = Depends(_manage_notifications)) -> StatusResponse:
    current_domain.process(RetryNotification(notification_id=notification_id), asynchronous=False)
    return StatusResponse(status="retried")
