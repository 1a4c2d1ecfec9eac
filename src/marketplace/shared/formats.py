"""Format rules shared by identity, stores and employees.

Each ``check_*`` helper raises protean's ``ValidationError`` keyed by the field
name it was given, so aggregates can call them straight from their
invariants.
"""

import re
from enum import Enum

from protean.exceptions import ValidationError

ANGOLAN_PHONE = re.compile(r"^(?:\+244\s?)?9\d{2}[\s.-]?\d{3}[\s.-]?\d{3}$")
NIF = re.compile(r"^\d{14}$")
IBAN = re.compile(r"^AO\d{21}$")
# B.I.: nine digits, issuing province code, a check digit, then one or two characters
NATIONAL_ID = re.compile(
    r"^\d{9}(BN|BG|BI|CA|CC|CN|CS|CU|HU|HI|LU|LN|LS|MA|MO|NN|UI|UE|ZA)\d[A-Z0-9]{1,2}$",
    re.IGNORECASE,
)

_EMAIL_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


class Province(Enum):
    BENGO = "Bengo"
    BENGUELA = "Benguela"
    BIE = "Bié"
    CABINDA = "Cabinda"
    CUANDO = "Cuando"
    CUBANGO = "Cubango"
    CUANZA_NORTE = "Cuanza Norte"
    CUANZA_SUL = "Cuanza Sul"
    CUNENE = "Cunene"
    HUAMBO = "Huambo"
    HUILA = "Huíla"
    ICOLE_E_BENGO = "Icole e Bengo"
    LUANDA = "Luanda"
    LUNDA_NORTE = "Lunda Norte"
    LUNDA_SUL = "Lunda Sul"
    MALANJE = "Malanje"
    MOXICO = "Moxico"
    MOXICO_LESTE = "Moxico-Leste"
    NAMIBE = "Namibe"
    UIGE = "Uíge"
    ZAIRE = "Zaire"


def normalize_email(email: str | None) -> str | None:
    return email.strip().lower() if email else email


def is_valid_email(email: str) -> bool:
    """Structural check: one @, sane local and domain parts, no forbidden characters."""
    if not email or any(ch.isspace() for ch in email) or email.count("@") != 1:
        return False

    local_part, domain_part = email.split("@", 1)
    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return False
    if not domain_part or "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        return False
    if ".." in local_part or ".." in domain_part:
        return False
    if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
        return False

    return not any(ch in email for ch in _EMAIL_FORBIDDEN)


def check_email(field: str, email: str | None) -> None:
    if email is not None and not is_valid_email(email):
        raise ValidationError({field: [f"Invalid email address: {email!r}"]})


def check_pattern(field: str, value: str | None, pattern: re.Pattern, message: str) -> None:
    if value is not None and not pattern.match(value):
        raise ValidationError({field: [message]})


def check_phone(field: str, phone: str | None) -> None:
    check_pattern(field, phone, ANGOLAN_PHONE, f"Invalid Angolan phone number: {phone!r}")
