"""Domain events for users and employees."""

from protean.fields import Boolean, DateTime, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="User")
class UserRegistered:
    """A buyer, seller or administrator account was created."""

    __version__ = 1

    user_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@marketplace.event(part_of="User")
class UserUpdated:
    __version__ = 1

    user_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    password_changed: Boolean(default=False)


@marketplace.event(part_of="Employee")
class EmployeeRegistered:
    """A store owner added a member of staff."""

    __version__ = 1

    employee_id: Identifier(required=True)
    store_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    registered_at: DateTime(required=True)
