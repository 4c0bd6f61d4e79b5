"""Session store Protocol — unit tests inject a mock conforming to it."""

from typing import Any, Protocol

from src.sk_common.enums import Role
from src.sk_session.domain.models import PersistedSession


class SessionStoreProtocol(Protocol):
    async def load(self) -> PersistedSession: ...

    async def save(self, token: str, user: dict[str, Any], role: Role | None) -> None: ...

    async def save_user(self, user: dict[str, Any]) -> None: ...

    async def clear(self) -> None: ...
