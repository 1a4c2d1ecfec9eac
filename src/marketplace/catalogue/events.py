"""Domain events for the Product aggregate."""

from protean.fields import Float, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Product")
class ProductListed:
    """A store put a new product on sale."""

    __version__ = 1

    product_id = Identifier(required=True)
    store_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)


@marketplace.event(part_of="Product")
class ProductUpdated:
    __version__ = 1

    product_id = Identifier(required=True)
    store_id = Identifier(required=True)
    changed_fields = String(required=True)
