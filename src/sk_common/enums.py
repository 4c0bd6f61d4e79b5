"""Global enums — values must match the backend's wire strings exactly."""

from enum import Enum


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"

    @classmethod
    def resolve(cls, value: object) -> "Role":
        """Map a stored/wire value onto the closed set; anything unknown is USER."""
        try:
            return cls(value)
        except ValueError:
            return cls.USER


class TransactionType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    TOURNAMENT_ENTRY = "tournament_entry"
    TOURNAMENT_REWARD = "tournament_reward"
    REFUND = "refund"
    OTHER = "other"

    @classmethod
    def from_wire(cls, value: object) -> "TransactionType":
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


CREDIT_TYPES: frozenset[TransactionType] = frozenset(
    {TransactionType.DEPOSIT, TransactionType.TOURNAMENT_REWARD, TransactionType.REFUND}
)


class TransactionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    OTHER = "other"

    @classmethod
    def from_wire(cls, value: object) -> "TransactionStatus":
        if value is None or value == "":
            return cls.COMPLETED
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


class MutationKind(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"


class WalletPhase(str, Enum):
    IDLE = "IDLE"
    LOADING = "LOADING"
    REFRESHING = "REFRESHING"
    POPULATED = "POPULATED"
