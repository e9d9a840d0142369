"""Currency rounding and amount parsing helpers."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")


def round_currency(amount: float) -> float:
    """Round to cents using half-up rounding.

    The float's shortest repr is quantized rather than its exact binary
    value, so ``1.005`` rounds to ``1.01`` instead of ``1.00``.
    """

    quantized = Decimal(repr(float(amount))).quantize(CENT, rounding=ROUND_HALF_UP)
    # Normalise -0.0 so callers never see a signed zero.
    return float(quantized) + 0.0


def parse_amount(value: str | int | float | Decimal) -> float:
    """Parse a user-supplied amount and round it to cents.

    Strings may carry surrounding whitespace and ``,`` thousands separators.
    """

    if isinstance(value, bool):
        raise ValueError("Invalid amount format")
    if isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        if not cleaned:
            raise ValueError("Invalid amount format")
        try:
            number = Decimal(cleaned)
        except InvalidOperation as exc:
            raise ValueError("Invalid amount format") from exc
    else:
        number = Decimal(repr(value)) if isinstance(value, float) else Decimal(value)
    if not number.is_finite():
        raise ValueError("Invalid amount format")
    return float(number.quantize(CENT, rounding=ROUND_HALF_UP)) + 0.0


__all__ = ["round_currency", "parse_amount"]
