from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

CURRENCY_SYMBOL = "₹"

CRORE = Decimal("10000000")
LAKH = Decimal("100000")
THOUSAND = Decimal("1000")

_SUFFIXES = (
    ("CR", CRORE),
    ("L", LAKH),
    ("K", THOUSAND),
)

_NUMBER_PREFIX_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d{1,3})?")


def read_number(x: Any, *, symbol: str = CURRENCY_SYMBOL) -> Optional[Decimal]:
    """
    Read a plain or suffixed number. Returns None when there is nothing
    numeric to read (None, blank, NaN/inf, garbage text).
    """
    if x is None or isinstance(x, bool):
        return None
    if isinstance(x, Decimal):
        return x if x.is_finite() else None
    if isinstance(x, (int, float)):
        try:
            d = Decimal(str(x))
        except InvalidOperation:
            return None
        return d if d.is_finite() else None
    if not isinstance(x, str):
        return None

    s = x.strip().replace(symbol, "").replace(",", "").replace(" ", "")
    multiplier = Decimal(1)
    upper = s.upper()
    for suffix, mult in _SUFFIXES:
        if upper.endswith(suffix):
            s = s[: -len(suffix)]
            multiplier = mult
            break

    m = _NUMBER_PREFIX_RE.match(s)
    if not m:
        return None
    return Decimal(m.group(0)) * multiplier


def to_decimal(x: Any) -> Decimal:
    d = read_number(x)
    return Decimal(0) if d is None else d


def parse_amount(text: Any, *, symbol: str = CURRENCY_SYMBOL) -> Decimal:
    """
    Parse a display amount such as "₹1.25Cr", "₹50.00L", "₹12.5K" or "₹45,000".
    Strings that carry no leading number parse to 0.
    """
    d = read_number(text, symbol=symbol)
    return Decimal(0) if d is None else d


def group_indian(n: int) -> str:
    # 1234567 -> 12,34,567
    digits = str(abs(int(n)))
    if len(digits) <= 3:
        out = digits
    else:
        head, tail = digits[:-3], digits[-3:]
        parts = []
        while len(head) > 2:
            parts.insert(0, head[-2:])
            head = head[:-2]
        if head:
            parts.insert(0, head)
        out = ",".join(parts + [tail])
    return f"-{out}" if n < 0 else out


def _fixed(value: Decimal, decimals: int) -> str:
    q = Decimal(1).scaleb(-decimals)
    return f"{value.quantize(q, rounding=ROUND_HALF_UP):f}"


def format_amount(
    amount: Any,
    *,
    compact: bool = False,
    decimals: int = 2,
    symbol: str = CURRENCY_SYMBOL,
) -> str:
    """
    Render an amount with Indian magnitude suffixes.

    >= 1 crore renders as "Cr", >= 1 lakh as "L". Thousands render as "K" only
    in compact contexts (tables, axis labels); elsewhere they keep full
    grouped digits so that parse_amount() reads them back exactly.
    """
    value = to_decimal(amount)
    if value == 0:
        return f"{symbol}0"

    sign = "-" if value < 0 else ""
    value = abs(value)

    if value >= CRORE:
        body = f"{_fixed(value / CRORE, decimals)}Cr"
    elif value >= LAKH:
        body = f"{_fixed(value / LAKH, decimals)}L"
    elif value >= THOUSAND and compact:
        body = f"{_fixed(value / THOUSAND, decimals)}K"
    else:
        body = group_indian(int(value.to_integral_value(rounding=ROUND_HALF_UP)))

    return f"{sign}{symbol}{body}"


def normalize_amount(amount: Any) -> Decimal:
    """Quantize an amount to the precision its display band keeps."""
    return parse_amount(format_amount(amount))
