"""Pydantic request/response models for the identity API.

API schemas are separate from protean commands; passwords and hashes never
appear in a response model.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------
class RegisterBuyerRequest(BaseModel):
    name: str = Field(..., min_length=3, max_length=20)
    email: str = Field(..., max_length=254, examples=["ana@example.ao"])
    password: str = Field(..., min_length=6, max_length=128)


class RegisterSellerRequest(RegisterBuyerRequest):
    business_licence: str | None = Field(
        default=None,
        max_length=500,
        description="Path or URL of the uploaded business licence (alvará)",
    )


class RegisterEmployeeRequest(BaseModel):
    store_id: str
    name: str = Field(..., min_length=3, max_length=20)
    email: str = Field(..., max_length=254)
    national_id: str = Field(..., max_length=14, examples=["123456789LU042"])
    phone: str = Field(..., max_length=20, examples=["+244 923 456 789"])
    address: str = Field(..., max_length=255)


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UpdateUserRequest(BaseModel):
    name: str | None = Field(default=None, min_length=3, max_length=20)
    email: str | None = Field(default=None, max_length=254)
    password: str | None = Field(default=None, min_length=6, max_length=128)


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class AccountSummary(BaseModel):
    user_id: str
    name: str
    role: str


class AuthResponse(BaseModel):
    user: AccountSummary
    token: str


class EmployeeRegisteredResponse(BaseModel):
    employee_id: str
    name: str
    role: str
    message: str


class UserResponse(BaseModel):
    user_id: str
    name: str
    email: str
    role: str
    business_licence: str | None = None
    created_at: str | None = None
