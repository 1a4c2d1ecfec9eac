"""Application tests for OrderLifecycle: place, read, list, update and delete."""

import pytest
from marketplace.errors import BadRequestError, NotFoundError
from marketplace.ordering.order import Order
from marketplace.payments.gateway.port import PaymentGatewayError
from protean import current_domain


def _line(product, quantity=1, unit_price=5000.0, **extra):
    return {"product_id": product.id, "quantity": quantity, "unit_price": unit_price, **extra}


class TestPlaceOrder:
    def test_order_is_pending_with_computed_total(self, placed_order):
        assert placed_order.status == "pending"
        assert placed_order.total_amount == 10000.0

    def test_missing_product_name_comes_from_catalogue(self, placed_order):
        assert placed_order.items_snapshot()[0]["product_name"] == "Capulana"

    def test_given_product_name_is_kept(self, lifecycle, buyer, seller, product):
        placed = lifecycle.place_order(buyer.id, seller.id, [_line(product, product_name="Capulana azul")])
        order = current_domain.repository_for(Order).get(placed.order_id)
        assert order.items_snapshot()[0]["product_name"] == "Capulana azul"

    def test_intent_amount_is_converted_to_minor_units(self, lifecycle, buyer, seller, product, gateway):
        placed = lifecycle.place_order(buyer.id, seller.id, [_line(product)])

        [call] = gateway.calls_to("create_payment_intent")
        assert call["amount"] == 556
        assert call["currency"] == "eur"
        assert call["metadata"] == {"buyer_id": buyer.id, "seller_id": seller.id}
        assert placed.client_secret.startswith("pi_fake_")

    def test_intent_id_is_stored_on_the_order(self, placed_order):
        assert placed_order.payment_intent_id.startswith("pi_fake_")

    def test_client_total_is_never_used(self, lifecycle, buyer, seller, product):
        placed = lifecycle.place_order(buyer.id, seller.id, [_line(product, quantity=3, unit_price=100.0)])
        assert current_domain.repository_for(Order).get(placed.order_id).total_amount == 300.0

    def test_unknown_seller_opens_no_intent(self, lifecycle, buyer, product, gateway):
        with pytest.raises(NotFoundError):
            lifecycle.place_order(buyer.id, "ghost-seller", [_line(product)])
        assert gateway.calls_to("create_payment_intent") == []

    def test_buyer_is_not_a_seller(self, lifecycle, buyer, product):
        with pytest.raises(NotFoundError):
            lifecycle.place_order(buyer.id, buyer.id, [_line(product)])

    @pytest.mark.parametrize(
        "items",
        [
            [],
            None,
            [{"quantity": 1, "unit_price": 10.0}],
            [{"product_id": "p", "quantity": 0, "unit_price": 10.0}],
            [{"product_id": "p", "quantity": 1.5, "unit_price": 10.0}],
            [{"product_id": "p", "quantity": True, "unit_price": 10.0}],
            [{"product_id": "p", "quantity": 1, "unit_price": -1}],
        ],
    )
    def test_invalid_cart(self, lifecycle, buyer, seller, items, gateway):
        with pytest.raises(BadRequestError):
            lifecycle.place_order(buyer.id, seller.id, items)
        assert gateway.calls == []

    def test_unknown_product_without_name(self, lifecycle, buyer, seller):
        with pytest.raises(BadRequestError, match="not in the catalogue"):
            lifecycle.place_order(buyer.id, seller.id, [{"product_id": "ghost", "quantity": 1, "unit_price": 1.0}])

    def test_gateway_failure_persists_nothing(self, lifecycle, buyer, seller, product, gateway):
        gateway.configure(should_succeed=False, failure_reason="Provider down")

        with pytest.raises(PaymentGatewayError, match="Provider down"):
            lifecycle.place_order(buyer.id, seller.id, [_line(product)])
        assert lifecycle.list_for_buyer(buyer.id) == []


class TestReadOrders:
    def test_get_own_order(self, lifecycle, buyer, placed_order):
        assert lifecycle.get_order(buyer.id, placed_order.id).id == placed_order.id

    def test_someone_elses_order_is_not_found(self, lifecycle, seller, placed_order):
        with pytest.raises(NotFoundError):
            lifecycle.get_order(seller.id, placed_order.id)

    def test_list_for_buyer_oldest_first(self, lifecycle, buyer, seller, product, placed_order):
        second = lifecycle.place_order(buyer.id, seller.id, [_line(product)])
        assert [o.id for o in lifecycle.list_for_buyer(buyer.id)] == [placed_order.id, second.order_id]

    def test_list_for_seller_newest_first(self, lifecycle, buyer, seller, product, placed_order):
        second = lifecycle.place_order(buyer.id, seller.id, [_line(product)])
        assert [o.id for o in lifecycle.list_for_seller(seller.id)] == [second.order_id, placed_order.id]

    def test_list_for_seller_needs_an_id(self, lifecycle):
        with pytest.raises(BadRequestError):
            lifecycle.list_for_seller(None)


class TestUpdateOrder:
    def test_replace_items_recomputes_total(self, lifecycle, buyer, product, placed_order):
        order = lifecycle.update_order(buyer.id, placed_order.id, items=[_line(product, quantity=1, unit_price=700.0)])
        assert order.total_amount == 700.0
        assert len(order.items) == 1

    def test_delivery_details(self, lifecycle, buyer, placed_order):
        order = lifecycle.update_order(buyer.id, placed_order.id, customer_address="Rua 9")
        assert order.customer_address == "Rua 9"
        assert order.customer_name == "Ana"

    def test_cancel(self, lifecycle, buyer, placed_order):
        assert lifecycle.update_order(buyer.id, placed_order.id, status="cancelled").status == "cancelled"

    def test_paid_cannot_be_set_by_the_buyer(self, lifecycle, buyer, placed_order):
        from protean.exceptions import ValidationError

        with pytest.raises(ValidationError):
            lifecycle.update_order(buyer.id, placed_order.id, status="paid")
        assert lifecycle.get_order(buyer.id, placed_order.id).status == "pending"

    def test_ownership_is_checked_first(self, lifecycle, seller, placed_order):
        with pytest.raises(NotFoundError):
            lifecycle.update_order(seller.id, placed_order.id, items=[{"product_id": "ghost", "quantity": 1, "unit_price": 1}])


class TestDeleteOrder:
    def test_delete(self, lifecycle, buyer, placed_order):
        lifecycle.delete_order(buyer.id, placed_order.id)
        assert lifecycle.list_for_buyer(buyer.id) == []

    def test_delete_someone_elses_order(self, lifecycle, seller, placed_order):
        with pytest.raises(NotFoundError):
            lifecycle.delete_order(seller.id, placed_order.id)
