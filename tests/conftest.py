import itertools
import os
from pathlib import Path

import pytest
from pydantic import SecretStr
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


# ---------------------------------------------------------------------------
# Domain
# ---------------------------------------------------------------------------
@pytest.fixture(scope="session")
def marketplace_bed():
    from marketplace.domain import marketplace

    bed = DomainFixture(marketplace)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(marketplace_bed):
    """Push the domain context for each test and wipe the in-memory stores afterwards."""
    with marketplace_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        for _, broker in current_domain.brokers.items():
            broker._data_reset()
        current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def gateway():
    """A fresh fake payment gateway per test."""
    from marketplace.payments.gateway import reset_gateway, set_gateway
    from marketplace.payments.gateway.fake_adapter import FakeGateway

    fake = FakeGateway()
    set_gateway(fake)
    yield fake
    reset_gateway()


@pytest.fixture(autouse=True)
def mailer():
    """A fresh fake mailer per test."""
    from marketplace.notifications.channel import reset_mailer, set_mailer
    from marketplace.notifications.channel.fake_email import FakeEmailAdapter

    fake = FakeEmailAdapter()
    set_mailer(fake)
    yield fake
    reset_mailer()


@pytest.fixture()
def settings():
    from marketplace.config import Settings

    return Settings(
        _env_file=None,
        environment="test",
        public_url="http://testserver",
        jwt_secret=SecretStr("test-secret-with-enough-bytes-for-hs256"),
        stripe_secret_key=None,
        resend_api_key=None,
    )


@pytest.fixture()
def client(settings, gateway, mailer):
    from fastapi.testclient import TestClient
    from marketplace.web import create_app

    return TestClient(create_app(settings, gateway=gateway, mailer=mailer))


@pytest.fixture()
def api(settings):
    """Prefix a path with the configured API base path."""
    return lambda path: f"{settings.api_prefix}{path}"


# ---------------------------------------------------------------------------
# Accounts, stores and products
# ---------------------------------------------------------------------------
_sequence = itertools.count(1)


def _unique():
    return next(_sequence)


@pytest.fixture()
def make_user():
    """Register a user through the RegisterUser command and return the aggregate."""
    from marketplace.identity.passwords import prepare_password
    from marketplace.identity.registration import RegisterUser
    from marketplace.identity.user import User
    from protean import current_domain

    def _make(name="Ana Silva", email=None, password="secret123", role="buyer", business_licence=None):
        if role == "seller" and business_licence is None:
            business_licence = "uploads/alvara.pdf"
        user_id = current_domain.process(
            RegisterUser(
                name=name,
                email=email or f"user{_unique()}@welw.ao",
                password_hash=prepare_password(password),
                role=role,
                business_licence=business_licence,
            ),
            asynchronous=False,
        )
        return current_domain.repository_for(User).get(user_id)

    return _make


@pytest.fixture()
def make_admin():
    from marketplace.identity.passwords import hash_password
    from marketplace.identity.user import Role, User
    from protean import current_domain

    def _make(name="Admin", email=None):
        admin = User.register(
            name=name,
            email=email or f"admin{_unique()}@welw.ao",
            password_hash=hash_password("admin-secret"),
            role=Role.ADMIN.value,
        )
        current_domain.repository_for(User).add(admin)
        return admin

    return _make


@pytest.fixture()
def buyer(make_user):
    return make_user(name="Buyer One", role="buyer")


@pytest.fixture()
def seller(make_user):
    return make_user(name="Seller One", role="seller")


def _store_details(**overrides):
    """Valid store attributes, unique per call."""
    n = _unique()
    details = {
        "name": f"Loja {n}",
        "nif": f"{n:014d}",
        "email": f"loja{n}@welw.ao",
        "phone": f"+244 9{n % 100:02d} {n % 1000:03d} {n % 1000:03d}",
        "iban": f"AO{n:021d}",
        "commerce": "Clothing",
        "province": "Luanda",
        "address": "Rua da Missão 12, Luanda",
    }
    details.update(overrides)
    return details


@pytest.fixture()
def store_details():
    return _store_details


@pytest.fixture()
def make_store():
    from marketplace.stores.management import RegisterStore
    from marketplace.stores.store import Store
    from protean import current_domain

    def _make(owner, **overrides):
        store_id = current_domain.process(
            RegisterStore(owner_id=owner.id, **_store_details(**overrides)),
            asynchronous=False,
        )
        return current_domain.repository_for(Store).get(store_id)

    return _make


@pytest.fixture()
def store(make_store, seller):
    return make_store(seller, phone="+244 923 456 789", email="kitanda@welw.ao", name="Kitanda")


@pytest.fixture()
def make_product():
    from marketplace.catalogue.management import AddProduct
    from marketplace.catalogue.product import Product
    from protean import current_domain

    def _make(owner, name="Capulana", price=5000.0, quantity=10, **extra):
        product_id = current_domain.process(
            AddProduct(
                owner_id=owner.id,
                name=name,
                price=price,
                image=extra.pop("image", "uploads/capulana.png"),
                quantity=quantity,
                **extra,
            ),
            asynchronous=False,
        )
        return current_domain.repository_for(Product).get(product_id)

    return _make


@pytest.fixture()
def token_for(settings):
    from marketplace.identity.login import open_session

    return lambda account: open_session(account, settings).token


@pytest.fixture()
def auth(token_for):
    """Authorization header for an account."""
    return lambda account: {"Authorization": f"Bearer {token_for(account)}"}


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@pytest.fixture()
def lifecycle(settings, gateway):
    from marketplace.ordering.lifecycle import OrderLifecycle

    return OrderLifecycle(settings=settings, gateway=gateway)


@pytest.fixture()
def product(make_product, seller, store):
    return make_product(seller, name="Capulana", price=5000.0)


@pytest.fixture()
def placed_order(lifecycle, buyer, seller, product):
    """A pending order of two capulanas from the seller's store."""
    from marketplace.ordering.order import Order
    from protean import current_domain

    placed = lifecycle.place_order(
        buyer_id=buyer.id,
        seller_id=seller.id,
        items=[{"product_id": product.id, "quantity": 2, "unit_price": 5000.0}],
        customer_name="Ana",
        customer_phone="923456789",
        customer_address="Rua 1, Luanda",
    )
    return current_domain.repository_for(Order).get(placed.order_id)
