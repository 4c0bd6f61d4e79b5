"""Domain models for sk_wallet — pure dataclasses, no I/O.

All amounts are int paise.
"""

from dataclasses import dataclass, field
from datetime import datetime

from src.sk_common.enums import (
    CREDIT_TYPES,
    MutationKind,
    TransactionStatus,
    TransactionType,
    WalletPhase,
)


@dataclass(frozen=True)
class WalletSnapshot:
    balance: int = 0
    total_deposited: int = 0
    total_withdrawn: int = 0
    total_winnings: int = 0


@dataclass(frozen=True)
class WalletStats:
    total_winnings: int = 0      # paise
    tournaments_joined: int = 0
    tournaments_won: int = 0


@dataclass(frozen=True)
class Transaction:
    id: str
    type: TransactionType
    amount: int                  # paise, always >= 0; sign is derived
    description: str | None = None
    created_at: datetime | None = None
    status: TransactionStatus = TransactionStatus.COMPLETED

    @property
    def is_credit(self) -> bool:
        return self.type in CREDIT_TYPES

    @property
    def signed_amount(self) -> int:
        return self.amount if self.is_credit else -self.amount


@dataclass(frozen=True)
class PendingMutation:
    """A deposit/withdraw request for the duration of one submission. Never persisted."""

    amount: int
    kind: MutationKind


@dataclass(frozen=True)
class WalletState:
    """Everything a wallet screen renders, replaced whole on every change."""

    snapshot: WalletSnapshot = field(default_factory=WalletSnapshot)
    stats: WalletStats = field(default_factory=WalletStats)
    transactions: tuple[Transaction, ...] = ()
    phase: WalletPhase = WalletPhase.IDLE
    refreshing: bool = False
    processing: bool = False
    pending: PendingMutation | None = None
    last_refreshed_at: datetime | None = None

    @property
    def loading(self) -> bool:
        return self.phase == WalletPhase.LOADING
