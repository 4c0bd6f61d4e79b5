"""SessionStore — concrete implementation of SessionStoreProtocol.

Keys (unchanged from the mobile app so existing installs restore cleanly):
  token     raw bearer token
  user      JSON-encoded profile object
  userRole  "user" | "admin" | "" (empty = unset)

save() writes all three keys through one KeyValueStore.set_many call, so a
crash between writes cannot leave a token without its user.
"""

import json
from typing import Any

from src.sk_common.enums import Role
from src.sk_common.errors import PersistenceError
from src.sk_common.storage import KeyValueStore
from src.sk_session.domain.models import PersistedSession

KEY_TOKEN = "token"
KEY_USER = "user"
KEY_ROLE = "userRole"

SESSION_KEYS = [KEY_TOKEN, KEY_USER, KEY_ROLE]


class SessionStore:
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    async def load(self) -> PersistedSession:
        return PersistedSession(
            token=await self._store.get(KEY_TOKEN),
            user_json=await self._store.get(KEY_USER),
            role=await self._store.get(KEY_ROLE),
        )

    async def save(self, token: str, user: dict[str, Any], role: Role | None) -> None:
        await self._store.set_many(
            {
                KEY_TOKEN: token,
                KEY_USER: _encode_user(user),
                KEY_ROLE: role.value if role is not None else "",
            }
        )

    async def save_user(self, user: dict[str, Any]) -> None:
        await self._store.set(KEY_USER, _encode_user(user))

    async def clear(self) -> None:
        await self._store.remove_many(SESSION_KEYS)


def _encode_user(user: dict[str, Any]) -> str:
    try:
        return json.dumps(user)
    except (TypeError, ValueError) as exc:
        raise PersistenceError(f"encode user: {exc}") from exc
