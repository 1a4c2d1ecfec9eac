"""Employee aggregate: store staff created by the store owner."""

from datetime import UTC, datetime

from protean import invariant
from protean.fields import DateTime, Identifier, String

from marketplace.domain import marketplace
from marketplace.identity.user import Role
from marketplace.shared.formats import NATIONAL_ID, check_email, check_pattern, check_phone, normalize_email


@marketplace.aggregate
class Employee:
    name: String(required=True, min_length=3, max_length=20)
    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    national_id: String(required=True, max_length=14, unique=True)
    phone: String(required=True, max_length=20, unique=True)
    address: String(required=True, max_length=255)
    store_id: Identifier(required=True)
    created_at: DateTime()

    @property
    def role(self) -> str:
        return Role.EMPLOYEE.value

    @invariant.post
    def contact_details_must_be_well_formed(self):
        check_email("email", self.email)
        check_phone("phone", self.phone)

    @invariant.post
    def national_id_must_follow_bi_format(self):
        check_pattern("national_id", self.national_id, NATIONAL_ID, "Invalid B.I. number")

    @classmethod
    def hire(cls, store_id, name, email, password_hash, national_id, phone, address):
        from marketplace.identity.events import EmployeeRegistered

        now = datetime.now(UTC)
        employee = cls(
            store_id=store_id,
            name=name,
            email=normalize_email(email),
            password_hash=password_hash,
            national_id=national_id.upper() if national_id else national_id,
            phone=phone,
            address=address,
            created_at=now,
        )
        employee.raise_(
            EmployeeRegistered(
                employee_id=employee.id,
                store_id=store_id,
                name=employee.name,
                email=employee.email,
                registered_at=now,
            )
        )
        return employee


@marketplace.repository(part_of=Employee)
class EmployeeRepository:
    def find_by_email(self, email: str) -> Employee | None:
        employees = self._dao.query.filter(email=normalize_email(email)).all().items
        return employees[0] if employees else None

    def exists_with(self, **fields) -> bool:
        return bool(self._dao.query.filter(**fields).all().items)
