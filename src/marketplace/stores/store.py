"""Store aggregate: the single shop a seller runs on the marketplace."""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.fields import DateTime, Identifier, String

from marketplace.domain import marketplace
from marketplace.shared.formats import (
    IBAN,
    NIF,
    Province,
    check_email,
    check_pattern,
    check_phone,
    normalize_email,
)

# Attributes an owner may change after registration
EDITABLE_FIELDS = ("name", "nif", "email", "phone", "iban", "commerce", "province", "address")
# Attributes no two stores may share
UNIQUE_FIELDS = ("nif", "email", "phone", "iban")


@marketplace.aggregate
class Store:
    """A seller's shop.

    Carries the legal and contact details buyers see after paying: the phone
    and email quoted in the payment confirmation come from here.
    """

    name = String(required=True, min_length=3, max_length=30)
    nif = String(required=True, max_length=14, unique=True)
    email = String(required=True, max_length=254, unique=True)
    phone = String(required=True, max_length=20, unique=True)
    iban = String(required=True, max_length=23, unique=True)
    commerce = String(required=True, max_length=100)
    province = String(required=True, choices=Province)
    address = String(required=True, max_length=255)
    owner_id = Identifier(required=True, unique=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def fiscal_details_must_be_well_formed(self):
        check_pattern("nif", self.nif, NIF, "NIF must have 14 digits")
        check_pattern("iban", self.iban, IBAN, "IBAN must be AO followed by 21 digits")

    @invariant.post
    def contact_details_must_be_well_formed(self):
        check_email("email", self.email)
        check_phone("phone", self.phone)

    @classmethod
    def register(cls, owner_id, name, nif, email, phone, iban, commerce, province, address):
        from marketplace.stores.events import StoreRegistered

        now = datetime.now(UTC)
        store = cls(
            owner_id=owner_id,
            name=name,
            nif=nif,
            email=normalize_email(email),
            phone=phone,
            iban=iban,
            commerce=commerce,
            province=province,
            address=address,
            created_at=now,
            updated_at=now,
        )
        store.raise_(
            StoreRegistered(
                store_id=store.id,
                owner_id=owner_id,
                name=name,
                province=province,
                registered_at=now,
            )
        )
        return store

    def update_details(self, **changes):
        from marketplace.stores.events import StoreUpdated

        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update store attributes: {sorted(unknown)}")
        if not changes:
            return

        with atomic_change(self):
            for field_name, value in changes.items():
                setattr(self, field_name, normalize_email(value) if field_name == "email" else value)
            self.updated_at = datetime.now(UTC)

        self.raise_(StoreUpdated(store_id=self.id, changed_fields=",".join(sorted(changes))))


@marketplace.repository(part_of=Store)
class StoreRepository:
    def find_owned(self, store_id, owner_id) -> Store | None:
        """Ownership filter: a store the owner does not hold is reported as absent."""
        stores = self._dao.query.filter(id=store_id, owner_id=owner_id).all().items
        return stores[0] if stores else None

    def find_for_owner(self, owner_id) -> Store | None:
        stores = self._dao.query.filter(owner_id=owner_id).all().items
        return stores[0] if stores else None

    def clashes(self, exclude_id=None, **fields) -> list[str]:
        """Names of the given unique attributes already used by another store."""
        taken = []
        for field_name, value in fields.items():
            if value is None:
                continue
            if field_name == "email":
                value = normalize_email(value)
            others = [s for s in self._dao.query.filter(**{field_name: value}).all().items if s.id != exclude_id]
            if others:
                taken.append(field_name)
        return taken
