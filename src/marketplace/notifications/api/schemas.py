"""Pydantic response models for the notification log API."""

from pydantic import BaseModel


class StatusResponse(BaseModel):
    status: str = "ok"


class NotificationResponse(BaseModel):
    notification_id: str
    recipient: str
    notification_type: str
    subject: str | None = None
    status: str
    failure_reason: str | None = None
    retry_count: int = 0
    max_retries: int = 3
    created_at: str | None = None
    sent_at: str | None = None


class NotificationListResponse(BaseModel):
    notifications: list[NotificationResponse]
