"""Bearer tokens (HS256 JWTs) carrying the caller's id, name and role."""

from datetime import UTC, datetime

import jwt

from marketplace.config import Settings
from marketplace.errors import UnauthenticatedError
from marketplace.identity.authorization import Principal
from marketplace.identity.user import Role


def issue_token(principal: Principal, settings: Settings) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": str(principal.user_id),
        "name": principal.name,
        "role": principal.role.value,
        "iat": now,
        "exp": now + settings.jwt_lifetime,
    }
    return jwt.encode(payload, settings.jwt_secret.get_secret_value(), algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> Principal:
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret.get_secret_value(),
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
        return Principal(user_id=payload["sub"], name=payload.get("name", ""), role=Role(payload.get("role")))
    except (jwt.PyJWTError, ValueError) as exc:
        raise UnauthenticatedError("Access denied: invalid or expired token.") from exc
