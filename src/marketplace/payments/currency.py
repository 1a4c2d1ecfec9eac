"""Conversion from store currency (Kwanza) to settlement minor units."""

from decimal import ROUND_HALF_UP, Decimal


def to_minor_units(amount: float, exchange_rate: float) -> int:
    """Convert ``amount`` in store currency to integer minor units of the settlement currency.

    ``exchange_rate`` is store-currency units per settlement unit (900 Kz per
    euro by default). The result is rounded half-up to the nearest minor unit:
    5000 Kz at 900 becomes 556 cents.
    """
    if exchange_rate is None or exchange_rate <= 0:
        raise ValueError(f"Exchange rate must be positive, got {exchange_rate!r}")
    if amount < 0:
        raise ValueError(f"Amount cannot be negative, got {amount!r}")

    minor = Decimal(str(amount)) / Decimal(str(exchange_rate)) * 100
    return int(minor.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
