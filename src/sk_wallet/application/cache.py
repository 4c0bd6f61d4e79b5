"""WalletStateCache — the locally displayed wallet view.

refresh() fans out three independent requests (balance, history, profile)
with asyncio.gather. Each one resolves to its payload or None; a None slice
keeps whatever is currently displayed, which on the first load is the empty
default. The three slices are then applied in a single state replacement.

deposit()/withdraw() validate locally, submit once, and on success run a
silent refresh so the displayed balance comes from the backend, never from
client-side arithmetic.

After dispose(), late results are dropped instead of written to state.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from typing import TypeVar

from src.sk_api.protocols import UserServiceProtocol, WalletServiceProtocol
from src.sk_api.schemas import BalancePayload, HistoryPayload, ProfilePayload
from src.sk_common.cents import paise_to_short_display
from src.sk_common.datetime_utils import parse_timestamp, utc_now
from src.sk_common.enums import MutationKind, TransactionStatus, TransactionType, WalletPhase
from src.sk_common.errors import AppError, MutationInProgressError, RemoteRejectionError
from src.sk_common.id_generator import generate_idempotency_key
from src.sk_common.observable import Observable
from src.sk_common.response import (
    OperationResult,
    error_result,
    result_from_error,
    success_result,
)
from src.sk_wallet.domain.models import (
    PendingMutation,
    Transaction,
    WalletSnapshot,
    WalletState,
    WalletStats,
)
from src.sk_wallet.domain.rules import validate_deposit, validate_withdraw

logger = logging.getLogger("sk.wallet")

T = TypeVar("T")

_REJECTED_FALLBACK = {
    MutationKind.DEPOSIT: "Failed to add money. Please try again.",
    MutationKind.WITHDRAW: "Failed to process withdrawal. Please try again.",
}


class WalletStateCache:
    def __init__(
        self,
        wallet: WalletServiceProtocol,
        users: UserServiceProtocol,
        id_factory: Callable[[], str] = generate_idempotency_key,
    ) -> None:
        self._wallet = wallet
        self._users = users
        self._id_factory = id_factory
        self._state: Observable[WalletState] = Observable(WalletState())
        self._disposed = False

    @property
    def state(self) -> WalletState:
        return self._state.value

    @property
    def disposed(self) -> bool:
        return self._disposed

    def subscribe(self, listener: Callable[[WalletState], None]) -> Callable[[], None]:
        return self._state.subscribe(listener)

    def dispose(self) -> None:
        """Tear down: drop listeners and ignore any result that arrives later."""
        self._disposed = True
        self._state.clear_listeners()

    def _set(self, state: WalletState) -> None:
        if self._disposed:
            logger.debug("Wallet cache disposed; discarding state update")
            return
        self._state.publish(state)

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    async def refresh(self, silent: bool = False) -> WalletState:
        """Reload all three slices. Always ends POPULATED; never raises for fetch errors."""
        if self._disposed:
            return self.state

        if silent:
            self._set(replace(self.state, phase=WalletPhase.REFRESHING, refreshing=True))
        else:
            self._set(replace(self.state, phase=WalletPhase.LOADING, refreshing=False))

        try:
            balance, history, profile = await asyncio.gather(
                self._resolve("balance", self._wallet.get_balance()),
                self._resolve("history", self._wallet.get_history()),
                self._resolve("profile", self._users.get_profile()),
            )
            # Read state after the await: overlapping refreshes are last-write-wins
            current = self.state
            self._set(
                replace(
                    current,
                    snapshot=_snapshot_from(balance) if balance is not None else current.snapshot,
                    transactions=(
                        _transactions_from(history)
                        if history is not None
                        else current.transactions
                    ),
                    stats=_stats_from(profile) if profile is not None else current.stats,
                    phase=WalletPhase.POPULATED,
                    refreshing=False,
                    last_refreshed_at=utc_now(),
                )
            )
        except Exception:
            logger.exception("Error loading wallet")
        finally:
            if self.state.phase != WalletPhase.POPULATED or self.state.refreshing:
                self._set(replace(self.state, phase=WalletPhase.POPULATED, refreshing=False))
        return self.state

    async def _resolve(self, slice_name: str, call: Awaitable[T]) -> T | None:
        try:
            return await call
        except Exception as exc:
            detail = getattr(exc, "detail", None) or str(exc)
            logger.error("Error fetching %s: %s", slice_name, detail)
            return None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def deposit(self, amount: object) -> OperationResult:
        if self._disposed or self.state.processing:
            return result_from_error(MutationInProgressError())
        try:
            paise = validate_deposit(amount)
        except AppError as exc:
            logger.info("Deposit rejected locally: %s", exc.message)
            return result_from_error(exc)
        return await self._submit(PendingMutation(amount=paise, kind=MutationKind.DEPOSIT))

    async def withdraw(self, amount: object) -> OperationResult:
        if self._disposed or self.state.processing:
            return result_from_error(MutationInProgressError())
        try:
            paise = validate_withdraw(amount, available=self.state.snapshot.balance)
        except AppError as exc:
            logger.info("Withdrawal rejected locally: %s", exc.message)
            return result_from_error(exc)
        return await self._submit(PendingMutation(amount=paise, kind=MutationKind.WITHDRAW))

    async def _submit(self, mutation: PendingMutation) -> OperationResult:
        self._set(replace(self.state, processing=True, pending=mutation))
        try:
            data: dict[str, object] = {"kind": mutation.kind.value, "amount": mutation.amount}
            if mutation.kind == MutationKind.DEPOSIT:
                key = self._id_factory()
                data["idempotency_key"] = key
                response = await self._wallet.topup(mutation.amount, key)
            else:
                response = await self._wallet.withdraw(mutation.amount, {})

            if not response.success:
                message = response.message or _REJECTED_FALLBACK[mutation.kind]
                logger.warning("%s rejected by server: %s", mutation.kind.value, message)
                return error_result(RemoteRejectionError(message).code, message)

            # Optimistic: states the requested amount, not the reconciled balance
            shown = paise_to_short_display(mutation.amount)
            if mutation.kind == MutationKind.DEPOSIT:
                message = f"{shown} added to your wallet successfully"
            else:
                message = f"Withdrawal of {shown} initiated successfully"
            await self.refresh(silent=True)
            return success_result(data, message=message)
        except AppError as exc:
            logger.error(
                "Error processing %s: %s",
                mutation.kind.value,
                getattr(exc, "detail", exc.message),
            )
            return result_from_error(exc)
        finally:
            self._set(replace(self.state, processing=False, pending=None))


# ---------------------------------------------------------------------------
# Payload → domain mapping
# ---------------------------------------------------------------------------


def _snapshot_from(payload: BalancePayload) -> WalletSnapshot:
    return WalletSnapshot(
        balance=payload.balance,
        total_deposited=payload.total_deposited,
        total_withdrawn=payload.total_withdrawn,
        total_winnings=payload.total_winnings,
    )


def _stats_from(payload: ProfilePayload) -> WalletStats:
    t = payload.tournament
    return WalletStats(
        total_winnings=t.earnings,
        tournaments_joined=t.participated_count,
        tournaments_won=t.wins,
    )


def _transactions_from(payload: HistoryPayload) -> tuple[Transaction, ...]:
    """Full replacement in server order; never merged with what was shown before."""
    return tuple(
        Transaction(
            id=item.id,
            type=TransactionType.from_wire(item.type),
            amount=item.amount,
            description=item.description,
            created_at=parse_timestamp(item.created_at),
            status=TransactionStatus.from_wire(item.status),
        )
        for item in payload.transactions
    )
