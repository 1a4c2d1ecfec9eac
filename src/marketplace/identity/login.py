"""Credential check and token issuance."""

from dataclasses import dataclass

from marketplace.config import Settings
from marketplace.errors import BadRequestError, NotFoundError
from marketplace.identity.authorization import Principal
from marketplace.identity.lookup import find_account_by_email
from marketplace.identity.passwords import verify_password
from marketplace.identity.tokens import issue_token
from marketplace.identity.user import Role
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Session:
    principal: Principal
    token: str


def open_session(account, settings: Settings) -> Session:
    principal = Principal(user_id=str(account.id), name=account.name, role=Role(account.role))
    return Session(principal=principal, token=issue_token(principal, settings))


def authenticate(email: str | None, password: str | None, settings: Settings) -> Session:
    if not email or not password:
        raise BadRequestError("Please provide both email and password.")

    account = find_account_by_email(email)
    if account is None:
        raise NotFoundError("No account is associated with this email.")

    if not verify_password(password, account.password_hash):
        logger.info("login_rejected", account_id=str(account.id))
        raise BadRequestError("Incorrect password.")

    return open_session(account, settings)
