"""Integer arithmetic utilities for paise-based wallet amounts.

All balances and amounts held in memory are int paise (1/100 rupee).
The backend speaks rupees as JSON numbers; conversion happens at the edges.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation


def parse_rupees(raw: object) -> Decimal | None:
    """Parse user input into an exact rupee Decimal. None for anything non-numeric.

    Accepts str (trimmed), int and float. Rejects bool, NaN, infinity and
    empty strings. No rounding happens here.
    """
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, float) and not math.isfinite(raw):
        return None
    text = raw.strip() if isinstance(raw, str) else str(raw)
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def rupees_decimal_to_paise(value: Decimal) -> int:
    """Round an exact rupee amount half-up to whole paise."""
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_amount(raw: object) -> int | None:
    """Parse user input into paise, sub-paisa digits rounded half-up."""
    value = parse_rupees(raw)
    if value is None:
        return None
    return rupees_decimal_to_paise(value)


def rupees_to_paise(value: object) -> int:
    """Convert a wire amount to paise. Missing or malformed values become 0."""
    paise = parse_amount(value)
    return paise if paise is not None else 0


def paise_to_rupees(paise: int) -> int | float:
    """Convert paise to a JSON-friendly rupee number: 20000 -> 200, 1050 -> 10.5."""
    if paise % 100 == 0:
        return paise // 100
    return paise / 100


def paise_to_display(paise: int) -> str:
    """Convert paise to display string: 150000 -> '₹1,500.00', -1200 -> '-₹12.00'."""
    if paise < 0:
        abs_paise = -paise
        return f"-₹{abs_paise // 100:,}.{abs_paise % 100:02d}"
    return f"₹{paise // 100:,}.{paise % 100:02d}"


def paise_to_short_display(paise: int) -> str:
    """Compact form used in confirmations: 20000 -> '₹200', 1050 -> '₹10.5'."""
    sign = "-" if paise < 0 else ""
    abs_paise = abs(paise)
    if abs_paise % 100 == 0:
        return f"{sign}₹{abs_paise // 100:,}"
    return f"{sign}₹{abs_paise / 100:,.2f}".rstrip("0")
