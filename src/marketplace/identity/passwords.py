"""Password hashing with bcrypt."""

import secrets

import bcrypt
from protean.exceptions import ValidationError

MIN_PASSWORD_LENGTH = 6
_BCRYPT_ROUNDS = 10


def check_strength(password: str | None) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=_BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def generate_password(length: int = 10) -> str:
    """Random hexadecimal password handed to newly hired employees."""
    return secrets.token_hex(length)[:length]


def prepare_password(password: str | None) -> str:
    """Check a chosen password and return its bcrypt hash.

    Commands carry only the hash: they are written to the event store before
    any handler runs.
    """
    check_strength(password)
    return hash_password(password)
