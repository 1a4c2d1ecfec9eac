"""FastAPI routes for accounts: registration, login and self-service.

Thin adapters that translate HTTP requests into identity commands.
"""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.config import Settings
from marketplace.dependencies import current_principal, get_app_settings, require
from marketplace.errors import NotFoundError
from marketplace.identity.account import DeleteUser, UpdateUser
from marketplace.identity.api.schemas import (
    AccountSummary,
    AuthResponse,
    EmployeeRegisteredResponse,
    LoginRequest,
    RegisterBuyerRequest,
    RegisterEmployeeRequest,
    RegisterSellerRequest,
    StatusResponse,
    UpdateUserRequest,
    UserResponse,
)
from marketplace.identity.authorization import Capability, Principal, authorize_self_or_admin
from marketplace.identity.login import Session, authenticate, open_session
from marketplace.identity.lookup import find_user
from marketplace.identity.passwords import prepare_password
from marketplace.identity.registration import RegisterEmployee, RegisterUser
from marketplace.identity.user import Role, User
from marketplace.notifications.notification import NotificationType
from marketplace.notifications.sending import notify

auth_router = APIRouter(prefix="/auth", tags=["auth"])
user_router = APIRouter(prefix="/users", tags=["users"])


def _auth_response(session: Session) -> AuthResponse:
    principal = session.principal
    return AuthResponse(
        user=AccountSummary(user_id=principal.user_id, name=principal.name, role=principal.role.value),
        token=session.token,
    )


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        user_id=str(user.id),
        name=user.name,
        email=user.email,
        role=user.role,
        business_licence=user.business_licence,
        created_at=str(user.created_at) if user.created_at else None,
    )


def _register(command: RegisterUser, settings: Settings) -> AuthResponse:
    user_id = current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(user_id)
    return _auth_response(open_session(user, settings))


# ---------------------------------------------------------------------------
# Registration and login
# ---------------------------------------------------------------------------
@auth_router.post("/register", status_code=201, response_model=AuthResponse)
def register_buyer(body: RegisterBuyerRequest, settings: Settings = Depends(get_app_settings)) -> AuthResponse:
    command = RegisterUser(
        name=body.name,
        email=body.email,
        password_hash=prepare_password(body.password),
        role=Role.BUYER.value,
    )
    return _register(command, settings)


@auth_router.post("/seller-register", status_code=201, response_model=AuthResponse)
def register_seller(body: RegisterSellerRequest, settings: Settings = Depends(get_app_settings)) -> AuthResponse:
    command = RegisterUser(
        name=body.name,
        email=body.email,
        password_hash=prepare_password(body.password),
        role=Role.SELLER.value,
        business_licence=body.business_licence,
    )
    return _register(command, settings)


@auth_router.post("/employee-register", status_code=201, response_model=EmployeeRegisteredResponse)
def register_employee(
    body: RegisterEmployeeRequest,
    principal: Principal = Depends(require(Capability.REGISTER_EMPLOYEES)),
) -> EmployeeRegisteredResponse:
    """Hire an employee for the caller's store and email them their credentials."""
    command = RegisterEmployee(
        owner_id=principal.user_id,
        store_id=body.store_id,
        name=body.name,
        email=body.email,
        national_id=body.national_id,
        phone=body.phone,
        address=body.address,
    )
    result = current_domain.process(command, asynchronous=False)

    notify(
        NotificationType.EMPLOYEE_CREDENTIALS.value,
        recipient=body.email.strip().lower(),
        recipient_id=result["employee_id"],
        context={
            "employee_name": body.name,
            "store_name": result["store_name"],
            "email": body.email.strip().lower(),
            "password": result["password"],
        },
        source_event_type="Marketplace.EmployeeRegistered.v1",
    )
    return EmployeeRegisteredResponse(
        employee_id=result["employee_id"],
        name=body.name,
        role=Role.EMPLOYEE.value,
        message="Employee registered; their password was sent by email.",
    )


@auth_router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, settings: Settings = Depends(get_app_settings)) -> AuthResponse:
    return _auth_response(authenticate(body.email, body.password, settings))


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------
@user_router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, principal: Principal = Depends(current_principal)) -> UserResponse:
    authorize_self_or_admin(principal, user_id)
    user = find_user(user_id)
    if user is None:
        raise NotFoundError(f"No user with ID {user_id}.")
    return _user_response(user)


@user_router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    body: UpdateUserRequest,
    principal: Principal = Depends(current_principal),
) -> UserResponse:
    authorize_self_or_admin(principal, user_id)
    command = UpdateUser(
        user_id=user_id,
        name=body.name,
        email=body.email,
        password_hash=prepare_password(body.password) if body.password is not None else None,
    )
    current_domain.process(command, asynchronous=False)
    return _user_response(find_user(user_id))


@user_router.delete("/{user_id}", response_model=StatusResponse)
def delete_user(user_id: str, principal: Principal = Depends(current_principal)) -> StatusResponse:
    authorize_self_or_admin(principal, user_id)
    current_domain.process(DeleteUser(user_id=user_id), asynchronous=False)
    return StatusResponse(status="deleted")
