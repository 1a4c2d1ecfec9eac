"""Tests for the shared format rules (email, phone, NIF, IBAN, B.I.)."""

import pytest
from marketplace.shared.formats import (
    IBAN,
    NATIONAL_ID,
    NIF,
    Province,
    check_email,
    check_pattern,
    check_phone,
    is_valid_email,
    normalize_email,
)
from protean.exceptions import ValidationError


class TestEmail:
    @pytest.mark.parametrize(
        "email",
        ["ana@welw.ao", "ana.silva@mail.example.com", "a+tag@x.co"],
    )
    def test_valid_addresses(self, email):
        assert is_valid_email(email)

    @pytest.mark.parametrize(
        "email",
        [
            "",
            "no-at-sign",
            "two@@welw.ao",
            "ana@localhost",
            ".ana@welw.ao",
            "ana.@welw.ao",
            "ana..silva@welw.ao",
            "ana@-welw.ao",
            "ana silva@welw.ao",
            "ana;x@welw.ao",
        ],
    )
    def test_invalid_addresses(self, email):
        assert not is_valid_email(email)

    def test_normalize_strips_and_lowercases(self):
        assert normalize_email("  Ana@Welw.AO ") == "ana@welw.ao"

    def test_normalize_leaves_none_alone(self):
        assert normalize_email(None) is None

    def test_check_email_raises_keyed_by_field(self):
        with pytest.raises(ValidationError) as exc_info:
            check_email("contact", "broken")
        assert "contact" in exc_info.value.messages

    def test_check_email_ignores_none(self):
        check_email("email", None)


class TestPhone:
    @pytest.mark.parametrize("phone", ["923456789", "+244 923 456 789", "+244923456789", "923-456-789"])
    def test_angolan_numbers_accepted(self, phone):
        check_phone("phone", phone)

    @pytest.mark.parametrize("phone", ["823456789", "+351 923 456 789", "92345678", "phone"])
    def test_other_numbers_rejected(self, phone):
        with pytest.raises(ValidationError) as exc_info:
            check_phone("phone", phone)
        assert "phone" in exc_info.value.messages


class TestFiscalPatterns:
    def test_nif_needs_fourteen_digits(self):
        assert NIF.match("50001234567890")
        assert not NIF.match("5000123456789")

    def test_iban_is_ao_and_21_digits(self):
        assert IBAN.match("AO" + "0" * 21)
        assert not IBAN.match("PT" + "0" * 21)
        assert not IBAN.match("AO" + "0" * 20)

    def test_national_id_format(self):
        assert NATIONAL_ID.match("123456789LU042")
        assert NATIONAL_ID.match("123456789lu042")
        assert not NATIONAL_ID.match("123456789XX042")

    def test_check_pattern_uses_given_message(self):
        with pytest.raises(ValidationError) as exc_info:
            check_pattern("nif", "123", NIF, "NIF must have 14 digits")
        assert exc_info.value.messages["nif"] == ["NIF must have 14 digits"]


class TestProvince:
    def test_has_twenty_one_provinces(self):
        assert len(Province) == 21

    def test_lookup_by_display_name(self):
        assert Province("Huíla") is Province.HUILA
