"""Two-decimal currency helpers."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    """
    Round a number to two decimal places.

    Args:
        value: A Decimal, int, str or float

    Returns:
        The value as a Decimal quantized to cents

    Raises:
        ValueError: If the value is not a finite number
    """
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
        if not amount.is_finite():
            raise ValueError(f"Not a finite number: {value!r}")
        amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
        # -0.00 compares equal to zero but would be stored with its sign
        return amount if amount else ZERO
    except InvalidOperation as err:
        raise ValueError(f"Not a number: {value!r}") from err


def format_money(amount: Decimal) -> str:
    """Format an amount with exactly two decimal digits."""
    return f"{to_money(amount):.2f}"
