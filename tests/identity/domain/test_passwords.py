"""Tests for password strength, hashing and generation."""

import pytest
from marketplace.identity.passwords import (
    check_strength,
    generate_password,
    hash_password,
    prepare_password,
    verify_password,
)
from protean.exceptions import ValidationError


class TestStrength:
    def test_six_characters_is_enough(self):
        check_strength("abcdef")

    @pytest.mark.parametrize("password", [None, "", "abc12"])
    def test_short_passwords_rejected(self, password):
        with pytest.raises(ValidationError) as exc_info:
            check_strength(password)
        assert "password" in exc_info.value.messages


class TestHashing:
    def test_hash_is_not_the_password(self):
        hashed = hash_password("secret123")
        assert hashed != "secret123"
        assert hashed.startswith("$2")

    def test_verify_round_trip(self):
        hashed = hash_password("secret123")
        assert verify_password("secret123", hashed)
        assert not verify_password("secret124", hashed)

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("secret123", "not-a-bcrypt-hash") is False


class TestGeneratedPassword:
    def test_default_length(self):
        assert len(generate_password()) == 10

    def test_passwords_differ(self):
        assert generate_password() != generate_password()

    def test_generated_password_passes_strength_check(self):
        check_strength(generate_password())


class TestPreparePassword:
    def test_returns_a_verifiable_hash(self):
        hashed = prepare_password("secret123")
        assert "secret123" not in hashed
        assert verify_password("secret123", hashed)

    def test_weak_password_is_not_hashed(self):
        with pytest.raises(ValidationError):
            prepare_password("abc")
