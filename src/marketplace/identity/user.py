"""User aggregate: buyers, sellers and administrators."""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from marketplace.domain import marketplace
from marketplace.shared.formats import check_email, normalize_email

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class Role(Enum):
    """Closed set of roles understood by the authorization gate."""

    BUYER = "buyer"
    SELLER = "seller"
    EMPLOYEE = "employee"
    ADMIN = "admin"


@marketplace.aggregate
class User:
    """A person with a login on the marketplace.

    Sellers must supply the path of their business licence (alvará) when they
    register. Employees are not users; they belong to a store and live in the
    Employee aggregate.
    """

    name: String(required=True, min_length=3, max_length=20)
    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    role: String(choices=Role, default=Role.BUYER.value)
    business_licence: String(max_length=500)
    created_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        check_email("email", self.email)

    @invariant.post
    def sellers_must_provide_business_licence(self):
        if self.role == Role.SELLER.value and not self.business_licence:
            raise ValidationError({"business_licence": ["Sellers must upload their business licence"]})

    @invariant.post
    def employees_are_registered_through_their_store(self):
        if self.role == Role.EMPLOYEE.value:
            raise ValidationError({"role": ["Employees are registered by the owner of their store"]})

    @classmethod
    def register(cls, name, email, password_hash, role=Role.BUYER.value, business_licence=None):
        from marketplace.identity.events import UserRegistered

        now = datetime.now(UTC)
        user = cls(
            name=name,
            email=normalize_email(email),
            password_hash=password_hash,
            role=role,
            business_licence=business_licence,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                name=user.name,
                email=user.email,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    def update_details(self, name=_UNSET, email=_UNSET, password_hash=_UNSET):
        from marketplace.identity.events import UserUpdated

        with atomic_change(self):
            if name is not _UNSET:
                self.name = name
            if email is not _UNSET:
                self.email = normalize_email(email)
            if password_hash is not _UNSET:
                self.password_hash = password_hash

        self.raise_(
            UserUpdated(
                user_id=self.id,
                name=self.name,
                email=self.email,
                password_changed=password_hash is not _UNSET,
            )
        )


@marketplace.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        users = self._dao.query.filter(email=normalize_email(email)).all().items
        return users[0] if users else None
