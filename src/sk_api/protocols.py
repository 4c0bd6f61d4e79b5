"""Remote service Protocols — dependency inversion for testability.

Unit tests inject AsyncMock objects conforming to these Protocols.
src.sk_api.services provides the HTTP implementations.
"""

from typing import Protocol

from src.sk_api.schemas import (
    AuthPayload,
    BalancePayload,
    HistoryPayload,
    MutationResponse,
    ProfilePayload,
)


class AuthServiceProtocol(Protocol):
    async def login(self, identifier: str, secret: str) -> AuthPayload: ...

    async def register(
        self, name: str, identifier: str, secret: str, confirm_secret: str
    ) -> AuthPayload: ...


class WalletServiceProtocol(Protocol):
    async def get_balance(self) -> BalancePayload: ...

    async def get_history(self) -> HistoryPayload: ...

    async def topup(
        self, amount_paise: int, idempotency_key: str, payment_method: str = "manual"
    ) -> MutationResponse: ...

    async def withdraw(
        self, amount_paise: int, payout_details: dict | None = None
    ) -> MutationResponse: ...


class UserServiceProtocol(Protocol):
    async def get_profile(self) -> ProfilePayload: ...
