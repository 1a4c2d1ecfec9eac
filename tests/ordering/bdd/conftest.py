"""Shared BDD fixtures and step definitions for orders and payments."""

import pytest
from marketplace.checkout.bridge import CheckoutBridge
from marketplace.notifications.notification import Notification
from marketplace.ordering.order import Order
from protean import current_domain
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


@pytest.fixture()
def bridge(settings, gateway):
    return CheckoutBridge(settings=settings, gateway=gateway)


@pytest.fixture()
def checkout():
    """Session id and confirmation of the latest checkout."""
    return {"session_id": None, "confirmation": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a seller "{name}" with a store'), target_fixture="seller")
def seller_with_store(name, make_user, make_store):
    seller = make_user(name=name, role="seller")
    make_store(seller, name=name, phone="+244 923 456 789")
    return seller


@given(parsers.cfparse('a product "{name}" priced at {price:d} Kz in that store'), target_fixture="product")
def product_in_store(name, price, seller, make_product):
    return make_product(seller, name=name, price=float(price))


@given(parsers.cfparse('a buyer "{name}"'), target_fixture="buyer")
def a_buyer(name, make_user):
    return make_user(name=name, role="buyer")


@given(parsers.cfparse('the buyer has ordered {quantity:d} "{name}"'), target_fixture="order")
def buyer_has_ordered(quantity, name, lifecycle, buyer, seller, product):
    placed = lifecycle.place_order(
        buyer.id,
        seller.id,
        [{"product_id": product.id, "product_name": name, "quantity": quantity, "unit_price": product.price}],
        customer_name=buyer.name,
        customer_address="Rua 1, Luanda",
    )
    return current_domain.repository_for(Order).get(placed.order_id)


@given("the buyer cancelled the order")
def buyer_cancelled(lifecycle, buyer, order):
    lifecycle.update_order(buyer.id, order.id, status="cancelled")


@given("the mail service is down")
def mail_is_down(mailer):
    mailer.configure(should_raise=True, failure_reason="Connection refused")


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order is "{status}"'))
def order_has_status(order, status):
    assert current_domain.repository_for(Order).get(order.id).status == status


@then(parsers.cfparse('the seller received a "{notification_type}" email'))
def seller_received_email(seller, notification_type):
    notifications = [
        n
        for n in current_domain.repository_for(Notification).sent_to(seller.email)
        if n.notification_type == notification_type
    ]
    assert notifications and notifications[0].status == "Sent"


@then(parsers.cfparse('the seller received {count:d} "{notification_type}" email'))
def seller_received_count(seller, count, notification_type):
    notifications = [
        n
        for n in current_domain.repository_for(Notification).sent_to(seller.email)
        if n.notification_type == notification_type
    ]
    assert len(notifications) == count


@then(parsers.cfparse('the "{notification_type}" notification is "{status}"'))
def notification_has_status(seller, notification_type, status):
    [notification] = [
        n
        for n in current_domain.repository_for(Notification).sent_to(seller.email)
        if n.notification_type == notification_type
    ]
    assert notification.status == status
