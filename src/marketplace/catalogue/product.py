"""Product aggregate: an item a store offers for sale."""

import json
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from marketplace.domain import marketplace

EDITABLE_FIELDS = ("name", "price", "description", "category", "colors", "sizes", "quantity", "image")


def _encode_list(values) -> str:
    return json.dumps(list(values or []))


@marketplace.aggregate
class Product:
    name = String(required=True, max_length=100)
    # Store currency (Kwanza)
    price = Float(required=True, min_value=0.0)
    description = Text()
    category = String(max_length=50)
    colors = Text(default="[]")
    sizes = Text(default="[]")
    quantity = Integer(default=0, min_value=0)
    image = String(required=True, max_length=500)
    store_id = Identifier(required=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def option_lists_must_be_json_arrays(self):
        for field_name in ("colors", "sizes"):
            raw = getattr(self, field_name)
            if not raw:
                continue
            try:
                parsed = json.loads(raw)
            except (json.JSONDecodeError, TypeError):
                raise ValidationError({field_name: [f"{field_name} must be a list"]}) from None
            if not isinstance(parsed, list):
                raise ValidationError({field_name: [f"{field_name} must be a list"]})

    @property
    def color_list(self) -> list[str]:
        return json.loads(self.colors) if self.colors else []

    @property
    def size_list(self) -> list[str]:
        return json.loads(self.sizes) if self.sizes else []

    @classmethod
    def list_in_store(cls, store_id, name, price, image, description=None, category=None, colors=None, sizes=None, quantity=0):
        from marketplace.catalogue.events import ProductListed

        now = datetime.now(UTC)
        product = cls(
            store_id=store_id,
            name=name,
            price=price,
            image=image,
            description=description,
            category=category,
            colors=_encode_list(colors),
            sizes=_encode_list(sizes),
            quantity=quantity,
            created_at=now,
            updated_at=now,
        )
        product.raise_(ProductListed(product_id=product.id, store_id=store_id, name=name, price=price))
        return product

    def update_details(self, **changes):
        from marketplace.catalogue.events import ProductUpdated

        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update product attributes: {sorted(unknown)}")
        if not changes:
            return

        with atomic_change(self):
            for field_name, value in changes.items():
                if field_name in ("colors", "sizes"):
                    value = _encode_list(value)
                setattr(self, field_name, value)
            self.updated_at = datetime.now(UTC)

        self.raise_(ProductUpdated(product_id=self.id, store_id=self.store_id, changed_fields=",".join(sorted(changes))))


@marketplace.repository(part_of=Product)
class ProductRepository:
    def find_in_store(self, product_id, store_id) -> Product | None:
        products = self._dao.query.filter(id=product_id, store_id=store_id).all().items
        return products[0] if products else None

    def in_store(self, store_id) -> list[Product]:
        products = self._dao.query.filter(store_id=store_id).all().items
        return sorted(products, key=lambda p: p.created_at)
