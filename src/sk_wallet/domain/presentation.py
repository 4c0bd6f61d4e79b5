"""Pure display helpers for transactions.

Lookups accept a TransactionType or the raw wire string; anything
unrecognized falls back to the default entry.
"""

from src.sk_common.cents import paise_to_short_display
from src.sk_common.datetime_utils import format_timestamp
from src.sk_common.enums import TransactionType
from src.sk_wallet.domain.models import Transaction

ACCENT = "#e5e900"
GRAY = "#A0A8B8"
CREDIT_GREEN = "#4CAF50"
DEBIT_RED = "#FF6B6B"

DEFAULT_ICON = "cash"
DEFAULT_COLOR = GRAY

_ICONS: dict[TransactionType, str] = {
    TransactionType.TOURNAMENT_REWARD: "trophy",
    TransactionType.DEPOSIT: "add-circle",
    TransactionType.TOURNAMENT_ENTRY: "game-controller",
    TransactionType.WITHDRAW: "remove-circle",
    TransactionType.REFUND: "refresh-circle",
}

_COLORS: dict[TransactionType, str] = {
    TransactionType.TOURNAMENT_REWARD: "#FFD700",
    TransactionType.DEPOSIT: CREDIT_GREEN,
    TransactionType.TOURNAMENT_ENTRY: DEBIT_RED,
    TransactionType.WITHDRAW: DEBIT_RED,
    TransactionType.REFUND: ACCENT,
}


def _kind(kind: TransactionType | str | None) -> TransactionType:
    if isinstance(kind, TransactionType):
        return kind
    return TransactionType.from_wire(kind)


def signed_amount(tx: Transaction) -> int:
    """+amount for credit kinds (deposit, tournament_reward, refund), -amount otherwise."""
    return tx.signed_amount


def display_icon(kind: TransactionType | str | None) -> str:
    return _ICONS.get(_kind(kind), DEFAULT_ICON)


def display_color(kind: TransactionType | str | None) -> str:
    return _COLORS.get(_kind(kind), DEFAULT_COLOR)


def amount_color(tx: Transaction) -> str:
    return CREDIT_GREEN if tx.signed_amount >= 0 else DEBIT_RED


def format_signed_amount(tx: Transaction) -> str:
    """'+₹200' for credits, '-₹50' for debits."""
    value = tx.signed_amount
    if value >= 0:
        return f"+{paise_to_short_display(value)}"
    return paise_to_short_display(value)


def status_label(tx: Transaction) -> str:
    return tx.status.value.upper()


def describe(tx: Transaction) -> str:
    return tx.description or "Wallet transaction"


def format_created_at(tx: Transaction) -> str:
    return format_timestamp(tx.created_at)
