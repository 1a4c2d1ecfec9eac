"""Account registration: buyers, sellers and store employees."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.errors import BadRequestError, NotFoundError
from marketplace.identity.employee import Employee
from marketplace.identity.lookup import find_account_by_email
from marketplace.identity.passwords import generate_password, hash_password
from marketplace.identity.user import Role, User
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


def _ensure_email_is_free(email):
    if email and find_account_by_email(email) is not None:
        raise BadRequestError("An account with this email already exists.")


@marketplace.command(part_of="User")
class RegisterUser:
    """Open a buyer or seller account."""

    name: String(required=True, max_length=20)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=128)
    role: String(choices=Role, default=Role.BUYER.value)
    business_licence: String(max_length=500)


@marketplace.command(part_of="Employee")
class RegisterEmployee:
    """A seller adds a member of staff to the store they own."""

    owner_id: Identifier(required=True)
    store_id: Identifier(required=True)
    name: String(required=True, max_length=20)
    email: String(required=True, max_length=254)
    national_id: String(required=True, max_length=14)
    phone: String(required=True, max_length=20)
    address: String(required=True, max_length=255)


@marketplace.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        if command.role not in (Role.BUYER.value, Role.SELLER.value):
            raise BadRequestError("Only buyer and seller accounts can be self-registered.")
        if command.role == Role.SELLER.value and not command.business_licence:
            raise BadRequestError("Please upload your business licence (alvará).")

        _ensure_email_is_free(command.email)

        user = User.register(
            name=command.name,
            email=command.email,
            password_hash=command.password_hash,
            role=command.role,
            business_licence=command.business_licence,
        )
        current_domain.repository_for(User).add(user)
        logger.info("user_registered", user_id=str(user.id), role=user.role)
        return str(user.id)


@marketplace.command_handler(part_of=Employee)
class RegisterEmployeeHandler:
    @handle(RegisterEmployee)
    def register_employee(self, command):
        from marketplace.stores.store import Store

        store = current_domain.repository_for(Store).find_owned(command.store_id, command.owner_id)
        if store is None:
            raise NotFoundError(f"No store with ID {command.store_id} belongs to you.")

        _ensure_email_is_free(command.email)
        repo = current_domain.repository_for(Employee)
        if repo.exists_with(national_id=command.national_id.upper()):
            raise BadRequestError("An employee with this B.I. number already exists.")
        if repo.exists_with(phone=command.phone):
            raise BadRequestError("An employee with this phone number already exists.")

        password = generate_password()
        employee = Employee.hire(
            store_id=store.id,
            name=command.name,
            email=command.email,
            password_hash=hash_password(password),
            national_id=command.national_id,
            phone=command.phone,
            address=command.address,
        )
        repo.add(employee)
        logger.info("employee_registered", employee_id=str(employee.id), store_id=str(store.id))

        # The plain password leaves this handler exactly once, to be mailed to the employee
        return {
            "employee_id": str(employee.id),
            "password": password,
            "store_name": store.name,
        }
