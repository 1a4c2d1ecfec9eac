"""Pydantic request/response models for the catalogue API."""

from pydantic import BaseModel, Field


class AddProductRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    price: float = Field(..., ge=0, description="Price in Kwanza")
    image: str | None = Field(default=None, max_length=500, description="Path or URL of the uploaded image")
    description: str | None = None
    category: str | None = Field(default=None, max_length=50)
    colors: list[str] = []
    sizes: list[str] = []
    quantity: int = Field(default=0, ge=0)


class UpdateProductRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    price: float | None = Field(default=None, ge=0)
    image: str | None = Field(default=None, max_length=500)
    description: str | None = None
    category: str | None = Field(default=None, max_length=50)
    colors: list[str] | None = None
    sizes: list[str] | None = None
    quantity: int | None = Field(default=None, ge=0)


class ProductIdResponse(BaseModel):
    product_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class ProductResponse(BaseModel):
    product_id: str
    store_id: str
    name: str
    price: float
    image: str
    description: str | None = None
    category: str | None = None
    colors: list[str] = []
    sizes: list[str] = []
    quantity: int = 0


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
