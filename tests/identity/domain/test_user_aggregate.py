"""Tests for the User aggregate: registration, invariants and updates."""

import pytest
from marketplace.identity.events import UserRegistered, UserUpdated
from marketplace.identity.user import Role, User
from protean.exceptions import ValidationError


def _register(**overrides):
    data = {
        "name": "Ana Silva",
        "email": "ana@welw.ao",
        "password_hash": "$2b$10$hash",
    }
    data.update(overrides)
    return User.register(**data)


class TestUserRegistration:
    def test_buyer_is_the_default_role(self):
        user = _register()
        assert user.role == Role.BUYER.value

    def test_email_is_normalized(self):
        user = _register(email="  Ana@WELW.ao ")
        assert user.email == "ana@welw.ao"

    def test_created_at_is_set(self):
        assert _register().created_at is not None

    def test_raises_user_registered(self):
        user = _register()
        events = [e for e in user._events if isinstance(e, UserRegistered)]
        assert len(events) == 1
        assert events[0].user_id == user.id
        assert events[0].role == "buyer"

    def test_seller_with_licence(self):
        user = _register(role=Role.SELLER.value, business_licence="uploads/alvara.pdf")
        assert user.business_licence == "uploads/alvara.pdf"

    def test_admin_role_is_allowed(self):
        assert _register(role=Role.ADMIN.value).role == "admin"


class TestUserInvariants:
    def test_seller_needs_business_licence(self):
        with pytest.raises(ValidationError) as exc_info:
            _register(role=Role.SELLER.value)
        assert "business_licence" in exc_info.value.messages

    def test_employee_role_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            _register(role=Role.EMPLOYEE.value)
        assert "role" in exc_info.value.messages

    def test_malformed_email_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            _register(email="not-an-email")
        assert "email" in exc_info.value.messages

    def test_name_too_short(self):
        with pytest.raises(ValidationError) as exc_info:
            _register(name="Al")
        assert "name" in exc_info.value.messages

    def test_name_too_long(self):
        with pytest.raises(ValidationError):
            _register(name="A" * 21)

    def test_unknown_role_is_rejected(self):
        with pytest.raises(ValidationError):
            _register(role="superuser")


class TestUserUpdate:
    def test_update_name_only(self):
        user = _register()
        user._events.clear()

        user.update_details(name="Ana Paula")

        assert user.name == "Ana Paula"
        assert user.email == "ana@welw.ao"
        event = next(e for e in user._events if isinstance(e, UserUpdated))
        assert event.password_changed is False

    def test_update_email_normalizes(self):
        user = _register()
        user.update_details(email="NEW@welw.ao")
        assert user.email == "new@welw.ao"

    def test_password_change_is_flagged(self):
        user = _register()
        user._events.clear()

        user.update_details(password_hash="$2b$10$other")

        event = next(e for e in user._events if isinstance(e, UserUpdated))
        assert event.password_changed is True

    def test_invalid_email_update_is_rejected(self):
        user = _register()
        with pytest.raises(ValidationError):
            user.update_details(email="broken")
