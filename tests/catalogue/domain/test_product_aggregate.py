"""Tests for the Product aggregate."""

import pytest
from marketplace.catalogue.events import ProductListed, ProductUpdated
from marketplace.catalogue.product import Product
from protean.exceptions import ValidationError


def _list(**overrides):
    data = {
        "store_id": "store-001",
        "name": "Capulana",
        "price": 5000.0,
        "image": "uploads/capulana.png",
    }
    data.update(overrides)
    return Product.list_in_store(**data)


class TestListProduct:
    def test_defaults(self):
        product = _list()
        assert product.quantity == 0
        assert product.color_list == []
        assert product.size_list == []

    def test_option_lists_are_kept_in_order(self):
        product = _list(colors=["red", "blue"], sizes=["M", "L"])
        assert product.color_list == ["red", "blue"]
        assert product.size_list == ["M", "L"]

    def test_raises_product_listed(self):
        product = _list()
        event = next(e for e in product._events if isinstance(e, ProductListed))
        assert event.product_id == product.id
        assert event.price == 5000.0

    def test_negative_price_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            _list(price=-1)
        assert "price" in exc_info.value.messages

    def test_negative_quantity_is_rejected(self):
        with pytest.raises(ValidationError):
            _list(quantity=-5)

    def test_image_is_required(self):
        with pytest.raises(ValidationError) as exc_info:
            _list(image=None)
        assert "image" in exc_info.value.messages

    def test_option_list_must_be_a_json_array(self):
        with pytest.raises(ValidationError) as exc_info:
            Product(store_id="store-001", name="Capulana", price=10.0, image="x.png", colors='{"a": 1}')
        assert "colors" in exc_info.value.messages


class TestUpdateProduct:
    def test_update(self):
        product = _list()
        product._events.clear()

        product.update_details(price=4500.0, sizes=["S"])

        assert product.price == 4500.0
        assert product.size_list == ["S"]
        event = next(e for e in product._events if isinstance(e, ProductUpdated))
        assert event.changed_fields == "price,sizes"

    def test_store_cannot_be_changed(self):
        with pytest.raises(ValueError):
            _list().update_details(store_id="store-002")
