"""Catalogue commands. Every product operation is scoped to the caller's store."""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.catalogue.product import EDITABLE_FIELDS, Product
from marketplace.domain import marketplace
from marketplace.errors import BadRequestError, NotFoundError
from marketplace.stores.lookup import find_store_for_owner
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="Product")
class AddProduct:
    owner_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    price = Float(required=True)
    image = String(max_length=500)
    description = Text()
    category = String(max_length=50)
    colors = Text()  # JSON-encoded list
    sizes = Text()  # JSON-encoded list
    quantity = Integer(default=0)


@marketplace.command(part_of="Product")
class UpdateProduct:
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String(max_length=100)
    price = Float()
    image = String(max_length=500)
    description = Text()
    category = String(max_length=50)
    colors = Text()
    sizes = Text()
    quantity = Integer()


@marketplace.command(part_of="Product")
class RemoveProduct:
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)


def owned_store(owner_id):
    """The caller's store, or ``NotFoundError`` when they have none."""
    store = find_store_for_owner(owner_id)
    if store is None:
        raise NotFoundError("You do not have a store yet.")
    return store


def _decoded(raw):
    return json.loads(raw) if raw else []


def _load_product(store, product_id) -> Product:
    product = current_domain.repository_for(Product).find_in_store(product_id, store.id)
    if product is None:
        raise NotFoundError(f"No product with ID {product_id}.")
    return product


@marketplace.command_handler(part_of=Product)
class CatalogueHandler:
    @handle(AddProduct)
    def add_product(self, command):
        if not command.image:
            raise BadRequestError("Please upload a product image.")
        store = owned_store(command.owner_id)

        product = Product.list_in_store(
            store_id=store.id,
            name=command.name,
            price=command.price,
            image=command.image,
            description=command.description,
            category=command.category,
            colors=_decoded(command.colors),
            sizes=_decoded(command.sizes),
            quantity=command.quantity or 0,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_listed", product_id=str(product.id), store_id=str(store.id))
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        store = owned_store(command.owner_id)
        product = _load_product(store, command.product_id)

        changes = {}
        for field_name in EDITABLE_FIELDS:
            value = getattr(command, field_name)
            if value is None:
                continue
            changes[field_name] = _decoded(value) if field_name in ("colors", "sizes") else value

        product.update_details(**changes)
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(RemoveProduct)
    def remove_product(self, command):
        store = owned_store(command.owner_id)
        product = _load_product(store, command.product_id)
        current_domain.repository_for(Product)._dao.delete(product)
