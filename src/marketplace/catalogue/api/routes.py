"""FastAPI routes for the catalogue of the caller's store."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.catalogue.api.schemas import (
    AddProductRequest,
    ProductIdResponse,
    ProductListResponse,
    ProductResponse,
    StatusResponse,
    UpdateProductRequest,
)
from marketplace.catalogue.management import AddProduct, RemoveProduct, UpdateProduct, owned_store
from marketplace.catalogue.product import Product
from marketplace.dependencies import require
from marketplace.errors import NotFoundError
from marketplace.identity.authorization import Capability, Principal

router = APIRouter(prefix="/products", tags=["products"])

_manage_catalogue = require(Capability.MANAGE_CATALOGUE)


def _product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        store_id=str(product.store_id),
        name=product.name,
        price=product.price,
        image=product.image,
        description=product.description,
        category=product.category,
        colors=product.color_list,
        sizes=product.size_list,
        quantity=product.quantity or 0,
    )


@router.get("", response_model=ProductListResponse)
def list_products(principal: Principal = Depends(_manage_catalogue)) -> ProductListResponse:
    store = owned_store(principal.user_id)
    products = current_domain.repository_for(Product).in_store(store.id)
    return ProductListResponse(products=[_product_response(p) for p in products])


@router.post("", status_code=201, response_model=ProductIdResponse)
def add_product(body: AddProductRequest, principal: Principal = Depends(_manage_catalogue)) -> ProductIdResponse:
    command = AddProduct(
        owner_id=principal.user_id,
        name=body.name,
        price=body.price,
        image=body.image,
        description=body.description,
        category=body.category,
        colors=json.dumps(body.colors),
        sizes=json.dumps(body.sizes),
        quantity=body.quantity,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=product_id)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, principal: Principal = Depends(_manage_catalogue)) -> ProductResponse:
    store = owned_store(principal.user_id)
    product = current_domain.repository_for(Product).find_in_store(product_id, store.id)
    if product is None:
        raise NotFoundError(f"No product with ID {product_id}.")
    return _product_response(product)


@router.patch("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    body: UpdateProductRequest,
    principal: Principal = Depends(_manage_catalogue),
) -> ProductResponse:
    changes = body.model_dump(exclude_none=True)
    for list_field in ("colors", "sizes"):
        if list_field in changes:
            changes[list_field] = json.dumps(changes[list_field])

    command = UpdateProduct(owner_id=principal.user_id, product_id=product_id, **changes)
    current_domain.process(command, asynchronous=False)
    return _product_response(current_domain.repository_for(Product).get(product_id))


@router.delete("/{product_id}", response_model=StatusResponse)
def remove_product(product_id: str, principal: Principal = Depends(_manage_catalogue)) -> StatusResponse:
    current_domain.process(RemoveProduct(owner_id=principal.user_id, product_id=product_id), asynchronous=False)
    return StatusResponse(status="removed")
