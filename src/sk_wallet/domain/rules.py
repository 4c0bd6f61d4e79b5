"""Local amount validation for wallet mutations.

Runs before any remote call. Each check raises the specific AppError the
UI shows; on success the parsed amount in paise is returned.
"""

from decimal import Decimal

from src.sk_common.cents import paise_to_short_display, parse_rupees, rupees_decimal_to_paise
from src.sk_common.errors import (
    AboveMaximumError,
    BelowMinimumError,
    InsufficientBalanceError,
    InvalidAmountError,
)

DEPOSIT_MIN_PAISE: int = 1_000        # ₹10
DEPOSIT_MAX_PAISE: int = 1_000_000    # ₹10,000
WITHDRAW_MIN_PAISE: int = 5_000       # ₹50


def _parse_positive(raw: object) -> Decimal:
    """Exact, unrounded amount in paise. Limits are checked on this value."""
    value = parse_rupees(raw)
    if value is None or value <= 0:
        raise InvalidAmountError()
    return value * 100


def validate_deposit(raw: object) -> int:
    """Raise unless `raw` is a finite amount in [₹10, ₹10,000] inclusive."""
    exact = _parse_positive(raw)
    if exact < DEPOSIT_MIN_PAISE:
        raise BelowMinimumError("deposit", paise_to_short_display(DEPOSIT_MIN_PAISE))
    if exact > DEPOSIT_MAX_PAISE:
        raise AboveMaximumError("deposit", paise_to_short_display(DEPOSIT_MAX_PAISE))
    return rupees_decimal_to_paise(exact / 100)


def validate_withdraw(raw: object, available: int) -> int:
    """Raise unless `raw` is at least ₹50 and no more than `available` paise.

    Client-side only: the backend remains the final authority on balance.
    """
    exact = _parse_positive(raw)
    if exact > available:
        raise InsufficientBalanceError(
            requested=rupees_decimal_to_paise(exact / 100), available=available
        )
    if exact < WITHDRAW_MIN_PAISE:
        raise BelowMinimumError("withdrawal", paise_to_short_display(WITHDRAW_MIN_PAISE))
    return rupees_decimal_to_paise(exact / 100)
