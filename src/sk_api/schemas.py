"""Pydantic wire schemas for the SK Win backend.

The backend speaks camelCase JSON and rupee amounts as numbers. Response
schemas convert amounts to int paise on the way in and default missing
numeric fields to 0, matching how the app has always read these payloads.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from src.sk_common.cents import rupees_to_paise

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str
    email: str
    password: str
    confirm_password: str = Field(..., serialization_alias="confirmPassword")


class TopupRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: int | float = Field(..., gt=0, description="Amount in rupees")
    payment_method: str = Field("manual", serialization_alias="paymentMethod")
    transaction_id: str = Field(..., serialization_alias="transactionId")


class WithdrawRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: int | float = Field(..., gt=0, description="Amount in rupees")
    bank_details: dict[str, Any] = Field(default_factory=dict, serialization_alias="bankDetails")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class AuthPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    token: str = Field(..., min_length=1)
    user: dict[str, Any] = Field(..., min_length=1)


class _PaiseModel(BaseModel):
    """Base for payloads whose numeric fields are rupee amounts."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class BalancePayload(_PaiseModel):
    balance: int = 0
    total_deposited: int = Field(0, validation_alias=AliasChoices("totalDeposited", "total_deposited"))
    total_withdrawn: int = Field(0, validation_alias=AliasChoices("totalWithdrawn", "total_withdrawn"))
    total_winnings: int = Field(0, validation_alias=AliasChoices("totalWinnings", "total_winnings"))

    @field_validator(
        "balance", "total_deposited", "total_withdrawn", "total_winnings", mode="before"
    )
    @classmethod
    def to_paise(cls, v: object) -> int:
        return max(rupees_to_paise(v), 0)


class TransactionPayload(_PaiseModel):
    id: str = Field("", validation_alias=AliasChoices("_id", "id"))
    type: str = ""
    amount: int = 0
    description: str | None = None
    created_at: str | None = Field(None, validation_alias=AliasChoices("createdAt", "created_at"))
    status: str | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def to_paise(cls, v: object) -> int:
        return abs(rupees_to_paise(v))

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: object) -> str:
        return "" if v is None else str(v)


class HistoryPayload(BaseModel):
    transactions: list[TransactionPayload] = Field(default_factory=list)

    @classmethod
    def from_wire(cls, data: object) -> "HistoryPayload":
        """Accept both `{"transactions": [...]}` and a bare list."""
        if isinstance(data, list):
            return cls(transactions=data)
        if isinstance(data, dict) and isinstance(data.get("transactions"), list):
            return cls(transactions=data["transactions"])
        return cls()


class TournamentStatsPayload(_PaiseModel):
    earnings: int = 0
    participated_count: int = Field(
        0, validation_alias=AliasChoices("participatedCount", "participated_count")
    )
    wins: int = 0

    @field_validator("earnings", mode="before")
    @classmethod
    def to_paise(cls, v: object) -> int:
        return max(rupees_to_paise(v), 0)

    @field_validator("participated_count", "wins", mode="before")
    @classmethod
    def to_count(cls, v: object) -> int:
        if isinstance(v, bool):
            return 0
        try:
            return max(int(v), 0)  # type: ignore[call-overload]
        except (TypeError, ValueError):
            return 0


class ProfilePayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    tournament: TournamentStatsPayload = Field(default_factory=TournamentStatsPayload)

    @field_validator("tournament", mode="before")
    @classmethod
    def default_tournament(cls, v: object) -> object:
        return v if isinstance(v, dict) else {}


class MutationResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool = True
    message: str | None = None
