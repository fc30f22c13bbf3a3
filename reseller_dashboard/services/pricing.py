import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

FEE_RATE = 0.12  # assumed platform fee for the preview
SHIPPING_COST = 8

_NON_FINITE = re.compile(r"[+-]?(inf|infinity|nan)", re.IGNORECASE)
_NUMBER_PREFIX = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_amount(value: Union[str, float, int, None]) -> float:
    """
    Coerce free-text input to a number the way a browser number field does:
    leading whitespace is skipped and the longest numeric prefix wins
    ("12.5 EUR" -> 12.5). Empty or non-numeric text is 0.
    "inf"/"nan" style input passes through so callers can guard on it.
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    text = value.strip()
    if not text:
        return 0.0
    if _NON_FINITE.fullmatch(text):
        return float(text)
    m = _NUMBER_PREFIX.match(text)
    if not m:
        return 0.0
    return float(m.group(0))


def format_amount(value: Union[float, int]) -> str:
    """Two decimals, half-up on the exact binary value; non-finite -> "0.00"."""
    value = float(value)
    if not math.isfinite(value):
        return "0.00"
    return str(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def breakeven(purchase_price: Union[str, float, int, None]) -> str:
    """
    Suggested break-even sale price: (P + shipping) / (1 - fee rate),
    rendered with two decimals.
    """
    buy = parse_amount(purchase_price)
    try:
        result = (buy + SHIPPING_COST) / (1 - FEE_RATE)
    except (OverflowError, ZeroDivisionError):
        return "0.00"
    return format_amount(result)
