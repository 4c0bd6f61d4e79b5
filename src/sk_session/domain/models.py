"""Domain models for sk_session — pure dataclasses, no I/O."""

from dataclasses import dataclass, replace
from typing import Any

from src.sk_common.enums import Role


@dataclass(frozen=True)
class Session:
    """Authenticated identity for the current process lifetime.

    Frozen: every change builds a new Session, so readers never see a
    half-applied update.
    """

    user: dict[str, Any] | None = None
    token: str | None = None
    role: Role | None = None
    is_loading: bool = False

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token) and bool(self.user)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @classmethod
    def initial(cls) -> "Session":
        """State at process start: nothing known yet, restore pending."""
        return cls(is_loading=True)

    @classmethod
    def signed_out(cls) -> "Session":
        return cls()

    def with_user(self, user: dict[str, Any]) -> "Session":
        return replace(self, user=user)


@dataclass(frozen=True)
class PersistedSession:
    """The persisted mirror: raw values of the `token`, `user`, `userRole` keys."""

    token: str | None = None
    user_json: str | None = None
    role: str | None = None


def resolve_role(stored_role: object, user: dict[str, Any]) -> Role:
    """`stored_role ?? user.role ?? "user"`, clamped onto the closed Role set."""
    if stored_role:
        return Role.resolve(stored_role)
    if user.get("role"):
        return Role.resolve(user["role"])
    return Role.USER
