"""SessionManager — owns the authenticated Session and its persisted mirror.

Consumers read `session` or subscribe for updates; they never mutate it.
Every operation returns an OperationResult instead of raising, except
restore() and logout(), which return nothing useful to fail on and must
never raise.

Write ordering: persist first, then replace the in-memory Session. If the
persisted write fails the in-memory Session is left as it was, so the two
never disagree after an operation reports success.
"""

import json
import logging
from collections.abc import Callable
from typing import Any

from src.sk_api.protocols import AuthServiceProtocol
from src.sk_common.enums import Role
from src.sk_common.errors import AppError, AuthInputError, NotAuthenticatedError
from src.sk_common.observable import Observable
from src.sk_common.response import OperationResult, result_from_error, success_result
from src.sk_session.domain.models import Session, resolve_role
from src.sk_session.domain.repository import SessionStoreProtocol

logger = logging.getLogger("sk.session")

MIN_SECRET_LENGTH = 6


class SessionManager:
    def __init__(self, auth: AuthServiceProtocol, store: SessionStoreProtocol) -> None:
        self._auth = auth
        self._store = store
        self._state: Observable[Session] = Observable(Session.initial())
        self._restored = False

    @property
    def session(self) -> Session:
        return self._state.value

    def subscribe(self, listener: Callable[[Session], None]) -> Callable[[], None]:
        return self._state.subscribe(listener)

    def get_auth_token(self) -> str | None:
        return self._state.value.token

    def is_admin(self) -> bool:
        return self._state.value.is_admin

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    async def restore(self) -> Session:
        """Load the persisted session once per process. Never raises."""
        if self._restored:
            logger.warning("restore() called more than once; ignoring")
            return self.session
        self._restored = True

        restored = Session.signed_out()
        try:
            persisted = await self._store.load()
            if persisted.token and persisted.user_json:
                user = json.loads(persisted.user_json)
                if not isinstance(user, dict) or not user:
                    raise ValueError("persisted user is not a non-empty object")
                restored = Session(
                    user=user,
                    token=persisted.token,
                    role=resolve_role(persisted.role, user),
                )
                logger.info("Session restored (role=%s)", restored.role.value)
            else:
                logger.info("No persisted session found")
        except Exception as exc:
            # Unreadable or malformed storage is treated as signed out
            logger.error("Error restoring session: %s", exc)
            restored = Session.signed_out()

        self._state.publish(restored)
        return restored

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def login(self, identifier: str, secret: str) -> OperationResult:
        if not identifier or not secret:
            return result_from_error(AuthInputError("Please enter email and password"))

        try:
            payload = await self._auth.login(identifier, secret)
        except AppError as exc:
            logger.warning("Login failed: %s", getattr(exc, "detail", exc.message))
            return result_from_error(exc)

        role = resolve_role(None, payload.user)
        try:
            await self._store.save(payload.token, payload.user, role)
        except AppError as exc:
            logger.error("Login succeeded but session could not be persisted: %s", exc.message)
            return result_from_error(exc)

        self._state.publish(Session(user=payload.user, token=payload.token, role=role))
        logger.info("Logged in (role=%s)", role.value)
        return success_result(
            {"user": payload.user, "is_admin": role == Role.ADMIN},
            message="Login successful",
        )

    async def register(
        self, name: str, identifier: str, secret: str, confirm_secret: str
    ) -> OperationResult:
        input_error = _check_registration_input(name, identifier, secret, confirm_secret)
        if input_error is not None:
            return result_from_error(input_error)

        try:
            payload = await self._auth.register(name, identifier, secret, confirm_secret)
        except AppError as exc:
            logger.warning("Registration failed: %s", getattr(exc, "detail", exc.message))
            return result_from_error(exc)

        # Role stays unset until the next login or restore resolves it
        try:
            await self._store.save(payload.token, payload.user, None)
        except AppError as exc:
            logger.error(
                "Registration succeeded but session could not be persisted: %s", exc.message
            )
            return result_from_error(exc)

        self._state.publish(Session(user=payload.user, token=payload.token, role=None))
        logger.info("Registered new account")
        return success_result({"user": payload.user, "is_admin": False}, message="Registered")

    async def update_user(self, partial: dict[str, Any]) -> OperationResult:
        """Shallow-merge `partial` onto the current user; persist, then publish."""
        current = self.session
        if not current.user:
            return result_from_error(NotAuthenticatedError())

        merged = {**current.user, **partial}
        try:
            await self._store.save_user(merged)
        except AppError as exc:
            logger.error("Error updating user: %s", exc.message)
            return result_from_error(exc)

        latest = self.session
        if latest.token != current.token or not latest.user:
            # Logged out (or switched account) while the write was in flight
            return result_from_error(NotAuthenticatedError())

        self._state.publish(latest.with_user(merged))
        return success_result({"user": merged}, message="Profile updated")

    async def logout(self) -> None:
        """Purge persisted keys and clear the Session. Never raises."""
        try:
            await self._store.clear()
        except Exception as exc:
            logger.error("Logout error while clearing storage: %s", exc)
        finally:
            self._state.publish(Session.signed_out())
        logger.info("Logged out")


def _check_registration_input(
    name: str, identifier: str, secret: str, confirm_secret: str
) -> AuthInputError | None:
    if not name or not identifier or not secret or not confirm_secret:
        return AuthInputError("Please fill in all fields")
    if secret != confirm_secret:
        return AuthInputError("Passwords do not match")
    if len(secret) < MIN_SECRET_LENGTH:
        return AuthInputError(f"Password must be at least {MIN_SECRET_LENGTH} characters")
    return None
