"""Conversion between human-readable and raw (smallest unit) token amounts.

Raw amounts are integer strings, e.g. 1.5 of an 18-decimal token is
"1500000000000000000". Human -> raw uses exact Decimal arithmetic;
raw -> human returns a float and is for display only.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Optional, Union

from oneinch.models import Token

# Enough significant digits for any uint256 value
UINT256_DIGITS = 78

Number = Union[str, int, float, Decimal]


def _to_decimal(value: Number) -> Decimal:
    try:
        if isinstance(value, float):
            # str() gives the shortest repr, not the binary expansion
            value = str(value)
        result = Decimal(value.strip()) if isinstance(value, str) else Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"invalid amount: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"invalid amount: {value!r}")
    return result


def to_raw_amount(human_amount: Optional[Number], decimals: int) -> Optional[str]:
    """Convert a human amount to a raw integer amount string.

    Args:
        human_amount: Amount as a user types it ("1.5"); None passes through
        decimals: Token decimals

    Returns:
        Raw amount as a plain digit string, or None

    Raises:
        ValueError: If the amount is not a non-negative number or decimals < 0
    """
    if human_amount is None:
        return None
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    amount = _to_decimal(human_amount)
    if amount < 0:
        raise ValueError(f"amount must be non-negative, got {human_amount}")

    with localcontext() as ctx:
        ctx.prec = UINT256_DIGITS
        raw = amount.scaleb(decimals).quantize(Decimal(1), rounding=ROUND_HALF_UP)

    # "-0" passes the sign check above
    raw = raw.copy_abs()

    return f"{raw:f}"


def to_human_amount(raw_amount: Number, decimals: int) -> float:
    """Convert a raw amount to a float for display."""
    with localcontext() as ctx:
        ctx.prec = UINT256_DIGITS
        return float(_to_decimal(raw_amount).scaleb(-decimals))


def calculate_price(
    from_token: Token,
    from_token_amount: Number,
    to_token: Token,
    to_token_amount: Number,
) -> Optional[float]:
    """Units of ``to_token`` received per unit of ``from_token`` supplied.

    Returns None when the from amount is zero.
    """
    from_human = to_human_amount(from_token_amount, from_token.decimals)
    to_human = to_human_amount(to_token_amount, to_token.decimals)
    if from_human == 0:
        return None
    return to_human / from_human
