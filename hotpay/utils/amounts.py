"""
Decimal amount handling.

Amounts travel as decimal strings end to end. Inputs may arrive as JSON
strings or numbers; numbers are converted through their text form so no
binary floating-point arithmetic ever touches an amount.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

# Wide enough for numeric(36, 18) plus overflow detection
_WORKING_PRECISION = 60


def parse_amount(value: Any, precision: int, scale: int) -> Decimal:
    """
    Parse and normalize an amount to a fixed number of fractional digits.

    Rounds half-up to `scale` places (what PostgreSQL numeric does on insert)
    and rejects values that would overflow a numeric(precision, scale) column.

    Args:
        value: Decimal string, int, float or Decimal
        precision: Total significant digits allowed by the column
        scale: Fractional digits kept

    Returns:
        Quantized Decimal

    Raises:
        ValueError: If the value is not a finite, non-negative decimal that fits
    """
    if isinstance(value, bool) or value is None:
        raise ValueError("amount must be a decimal string")

    if isinstance(value, (int, float, Decimal)):
        text = str(value)
    elif isinstance(value, str):
        text = value.strip()
    else:
        raise ValueError("amount must be a decimal string")

    if not text:
        raise ValueError("amount cannot be empty")

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"amount '{text}' is not a valid decimal") from None

    if not amount.is_finite():
        raise ValueError("amount must be a finite number")
    if amount < 0:
        raise ValueError("amount must not be negative")
    # normalizes -0
    amount = amount.copy_abs()

    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        try:
            quantized = amount.quantize(Decimal(1).scaleb(-scale), rounding=ROUND_HALF_UP)
        except InvalidOperation:
            raise ValueError(f"amount '{text}' is out of range") from None

    integer_digits = len(quantized.as_tuple().digits) - scale
    if integer_digits > precision - scale:
        raise ValueError(
            f"amount exceeds {precision - scale} integer digits"
        )

    return quantized


def format_amount(value: Any, scale: int) -> str:
    """
    Render an amount as a plain fixed-scale decimal string.

    Used on rows coming back from the store (exact decimal text thanks to
    the ::text cast on read) and on values about to be written. Always
    positional notation: 1E-18 renders as 0.000000000000000001.
    """
    amount = Decimal(str(value))
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        quantized = amount.quantize(Decimal(1).scaleb(-scale), rounding=ROUND_HALF_UP)
    return format(quantized, "f")
