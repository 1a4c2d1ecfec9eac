"""Outbound mail port used by the notification dispatcher."""

from abc import ABC, abstractmethod


class EmailPort(ABC):
    """Sends one transactional email to one address.

    Implementations report a refused message through the returned ``status``;
    transport errors may also be raised. The dispatcher records either outcome
    on the Notification.
    """

    @abstractmethod
    def send(self, to: str, subject: str, body: str, html_body: str | None = None) -> dict:
        """Deliver ``body`` (plain text) and optionally ``html_body`` to ``to``.

        Returns ``{"message_id", "status": "sent" | "failed", "error"?}``.
        """
