"""Authorization gate.

Roles are a closed enum and every protected operation names the capability it
needs. The table below is the only place that decides which role may do what.
"""

from dataclasses import dataclass
from enum import Enum

from marketplace.errors import ForbiddenError
from marketplace.identity.user import Role


class Capability(Enum):
    PLACE_ORDERS = "place_orders"
    MANAGE_OWN_ORDERS = "manage_own_orders"
    VIEW_SELLER_ORDERS = "view_seller_orders"
    MANAGE_STORE = "manage_store"
    MANAGE_CATALOGUE = "manage_catalogue"
    REGISTER_EMPLOYEES = "register_employees"
    MANAGE_NOTIFICATIONS = "manage_notifications"
    MANAGE_USERS = "manage_users"


_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.BUYER: frozenset({Capability.PLACE_ORDERS, Capability.MANAGE_OWN_ORDERS}),
    Role.SELLER: frozenset(
        {
            Capability.PLACE_ORDERS,
            Capability.MANAGE_OWN_ORDERS,
            Capability.VIEW_SELLER_ORDERS,
            Capability.MANAGE_STORE,
            Capability.MANAGE_CATALOGUE,
            Capability.REGISTER_EMPLOYEES,
        }
    ),
    Role.EMPLOYEE: frozenset(),
    Role.ADMIN: frozenset(Capability),
}


def capabilities_of(role: Role) -> frozenset[Capability]:
    return _CAPABILITIES[role]


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, as carried by a verified bearer token."""

    user_id: str
    name: str
    role: Role

    def can(self, capability: Capability) -> bool:
        return capability in capabilities_of(self.role)

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def authorize(principal: Principal, capability: Capability) -> Principal:
    """Return ``principal`` if its role grants ``capability``, raise ``ForbiddenError`` otherwise."""
    if not principal.can(capability):
        raise ForbiddenError(f"Access denied: the {principal.role.value} role cannot {capability.value.replace('_', ' ')}.")
    return principal


def authorize_self_or_admin(principal: Principal, user_id: str) -> Principal:
    if principal.user_id != str(user_id) and not principal.can(Capability.MANAGE_USERS):
        raise ForbiddenError("Access denied: you can only manage your own account.")
    return principal
