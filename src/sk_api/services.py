"""HTTP implementations of the remote service Protocols.

Each method is one request. Responses that parse as JSON but do not match
the expected shape raise TransportError: from the user's point of view a
garbled payload is the same as a failed connection.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from src.sk_api.client import ApiClient
from src.sk_api.schemas import (
    AuthPayload,
    BalancePayload,
    HistoryPayload,
    LoginRequest,
    MutationResponse,
    ProfilePayload,
    RegisterRequest,
    TopupRequest,
    WithdrawRequest,
)
from src.sk_common.cents import paise_to_rupees
from src.sk_common.errors import TransportError

M = TypeVar("M", bound=BaseModel)


def _parse(model: type[M], data: Any, endpoint: str) -> M:
    try:
        return model.model_validate(data if data is not None else {})
    except ValidationError as exc:
        raise TransportError(f"Unexpected payload from {endpoint}: {exc}") from exc


class HttpAuthService:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def login(self, identifier: str, secret: str) -> AuthPayload:
        body = LoginRequest(email=identifier, password=secret)
        data = await self._client.post("/auth/login", body.model_dump())
        return _parse(AuthPayload, data, "/auth/login")

    async def register(
        self, name: str, identifier: str, secret: str, confirm_secret: str
    ) -> AuthPayload:
        body = RegisterRequest(
            username=name,
            email=identifier,
            password=secret,
            confirm_password=confirm_secret,
        )
        data = await self._client.post("/auth/register", body.model_dump(by_alias=True))
        return _parse(AuthPayload, data, "/auth/register")


class HttpWalletService:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def get_balance(self) -> BalancePayload:
        data = await self._client.get("/wallet/balance")
        return _parse(BalancePayload, data, "/wallet/balance")

    async def get_history(self) -> HistoryPayload:
        data = await self._client.get("/wallet/history")
        try:
            return HistoryPayload.from_wire(data)
        except ValidationError as exc:
            raise TransportError(f"Unexpected payload from /wallet/history: {exc}") from exc

    async def topup(
        self, amount_paise: int, idempotency_key: str, payment_method: str = "manual"
    ) -> MutationResponse:
        body = TopupRequest(
            amount=paise_to_rupees(amount_paise),
            payment_method=payment_method,
            transaction_id=idempotency_key,
        )
        data = await self._client.post("/wallet/topup", body.model_dump(by_alias=True))
        return _parse(MutationResponse, data, "/wallet/topup")

    async def withdraw(
        self, amount_paise: int, payout_details: dict | None = None
    ) -> MutationResponse:
        body = WithdrawRequest(
            amount=paise_to_rupees(amount_paise),
            bank_details=payout_details or {},
        )
        data = await self._client.post("/wallet/withdraw", body.model_dump(by_alias=True))
        return _parse(MutationResponse, data, "/wallet/withdraw")


class HttpUserService:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def get_profile(self) -> ProfilePayload:
        data = await self._client.get("/users/profile")
        return _parse(ProfilePayload, data, "/users/profile")
