"""Tests for the Store aggregate."""

import pytest
from marketplace.stores.events import StoreRegistered, StoreUpdated
from marketplace.stores.store import Store
from protean.exceptions import ValidationError


def _register(**overrides):
    data = {
        "owner_id": "seller-001",
        "name": "Kitanda",
        "nif": "50001234567890",
        "email": "Kitanda@Welw.ao",
        "phone": "+244 923 456 789",
        "iban": "AO" + "1" * 21,
        "commerce": "Clothing",
        "province": "Luanda",
        "address": "Rua da Missão 12",
    }
    data.update(overrides)
    return Store.register(**data)


class TestStoreRegistration:
    def test_register(self):
        store = _register()
        assert store.email == "kitanda@welw.ao"
        assert store.created_at == store.updated_at

    def test_raises_store_registered(self):
        store = _register()
        event = next(e for e in store._events if isinstance(e, StoreRegistered))
        assert event.store_id == store.id
        assert event.province == "Luanda"


class TestStoreInvariants:
    @pytest.mark.parametrize(
        "field,value",
        [
            ("nif", "123"),
            ("iban", "PT" + "1" * 21),
            ("phone", "12345"),
            ("email", "kitanda"),
        ],
    )
    def test_malformed_details(self, field, value):
        with pytest.raises(ValidationError) as exc_info:
            _register(**{field: value})
        assert field in exc_info.value.messages

    def test_unknown_province(self):
        with pytest.raises(ValidationError):
            _register(province="Lisboa")

    def test_name_too_short(self):
        with pytest.raises(ValidationError):
            _register(name="AB")


class TestStoreUpdate:
    def test_update_details(self):
        store = _register()
        store._events.clear()

        store.update_details(address="Avenida 4 de Fevereiro", email="NOVA@welw.ao")

        assert store.address == "Avenida 4 de Fevereiro"
        assert store.email == "nova@welw.ao"
        event = next(e for e in store._events if isinstance(e, StoreUpdated))
        assert event.changed_fields == "address,email"

    def test_owner_cannot_be_changed(self):
        store = _register()
        with pytest.raises(ValueError):
            store.update_details(owner_id="someone-else")

    def test_empty_update_raises_nothing(self):
        store = _register()
        store._events.clear()
        store.update_details()
        assert store._events == []

    def test_invalid_update_is_rejected(self):
        store = _register()
        with pytest.raises(ValidationError):
            store.update_details(iban="AO123")
