"""Mailer registry.

One email adapter per process: Resend when an API key is configured, the
in-memory fake otherwise. Tests swap it with ``set_mailer``.
"""

from marketplace.config import Settings
from marketplace.notifications.channel.email_port import EmailPort
from marketplace.notifications.channel.fake_email import FakeEmailAdapter
from marketplace.notifications.channel.resend_email import ResendEmailAdapter

_mailer: EmailPort | None = None


def build_mailer(settings: Settings) -> EmailPort:
    if settings.resend_api_key is not None:
        return ResendEmailAdapter(api_key=settings.resend_api_key.get_secret_value(), sender=settings.mail_sender)
    return FakeEmailAdapter()


def get_mailer() -> EmailPort:
    """Return the configured email adapter, creating the fake one on first use."""
    global _mailer
    if _mailer is None:
        _mailer = FakeEmailAdapter()
    return _mailer


def set_mailer(mailer: EmailPort) -> None:
    global _mailer
    _mailer = mailer


def reset_mailer() -> None:
    global _mailer
    _mailer = None
