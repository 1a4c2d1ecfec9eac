"""Read-side helpers other components use to resolve accounts."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.identity.employee import Employee
from marketplace.identity.user import Role, User


def find_user(user_id) -> User | None:
    if not user_id:
        return None
    try:
        return current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        return None


def find_seller(seller_id) -> User | None:
    user = find_user(seller_id)
    if user is None or user.role != Role.SELLER.value:
        return None
    return user


def find_account_by_email(email: str) -> User | Employee | None:
    """Users and employees share one login namespace."""
    return (
        current_domain.repository_for(User).find_by_email(email)
        or current_domain.repository_for(Employee).find_by_email(email)
    )
