"""Pydantic request/response models for the store directory API."""

from pydantic import BaseModel, Field

from marketplace.shared.formats import Province


class RegisterStoreRequest(BaseModel):
    name: str = Field(..., min_length=3, max_length=30)
    nif: str = Field(..., pattern=r"^\d{14}$", examples=["50001234567890"])
    email: str = Field(..., max_length=254)
    phone: str = Field(..., max_length=20, examples=["+244 923 456 789"])
    iban: str = Field(..., pattern=r"^AO\d{21}$")
    commerce: str = Field(..., max_length=100, description="Line of business")
    province: Province
    address: str = Field(..., max_length=255)


class UpdateStoreRequest(BaseModel):
    name: str | None = Field(default=None, min_length=3, max_length=30)
    nif: str | None = Field(default=None, pattern=r"^\d{14}$")
    email: str | None = Field(default=None, max_length=254)
    phone: str | None = Field(default=None, max_length=20)
    iban: str | None = Field(default=None, pattern=r"^AO\d{21}$")
    commerce: str | None = Field(default=None, max_length=100)
    province: Province | None = None
    address: str | None = Field(default=None, max_length=255)


class StoreIdResponse(BaseModel):
    store_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class StoreResponse(BaseModel):
    store_id: str
    owner_id: str
    name: str
    nif: str
    email: str
    phone: str
    iban: str
    commerce: str
    province: str
    address: str
    created_at: str | None = None
