"""Catalogue lookups used by the order lifecycle and the checkout bridge."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.catalogue.product import Product


def find_product(product_id) -> Product | None:
    if not product_id:
        return None
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        return None
