"""Client core entry point and composition root.

Usage:
    async with lifespan() as app:
        result = await app.session.login("sam@skwin.com", "secret1")
        wallet = app.wallet_cache()
        await wallet.refresh()

Run a smoke check with: python -m src.main
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import uvloop

from config.settings import Settings, settings
from src.sk_api.client import ApiClient
from src.sk_api.services import HttpAuthService, HttpUserService, HttpWalletService
from src.sk_common.storage import InMemoryKeyValueStore, KeyValueStore, RedisKeyValueStore
from src.sk_session.application.manager import SessionManager
from src.sk_session.infrastructure.persistence import SessionStore
from src.sk_wallet.application.cache import WalletStateCache

logger = logging.getLogger("sk.app")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@dataclass
class AppContainer:
    settings: Settings
    store: KeyValueStore
    api: ApiClient
    session: SessionManager
    wallet_service: HttpWalletService
    user_service: HttpUserService

    def wallet_cache(self) -> WalletStateCache:
        """One cache per wallet-bearing screen; dispose() it when the screen goes away."""
        return WalletStateCache(self.wallet_service, self.user_service)


def _open_store(cfg: Settings) -> KeyValueStore:
    if cfg.STORAGE_BACKEND == "redis":
        return RedisKeyValueStore.from_url(cfg.REDIS_URL, prefix=cfg.STORAGE_KEY_PREFIX)
    if cfg.STORAGE_BACKEND != "memory":
        logger.warning("Unknown STORAGE_BACKEND %r; using memory", cfg.STORAGE_BACKEND)
    return InMemoryKeyValueStore()


@asynccontextmanager
async def lifespan(cfg: Settings = settings) -> AsyncGenerator[AppContainer, None]:
    """Startup: open storage + HTTP client, restore session. Shutdown: close both."""
    configure_logging(cfg.LOG_LEVEL)
    store = _open_store(cfg)
    api = ApiClient(cfg.API_BASE_URL, timeout=cfg.REQUEST_TIMEOUT_SECONDS)
    session = SessionManager(HttpAuthService(api), SessionStore(store))
    api.set_token_provider(session.get_auth_token)

    try:
        await session.restore()
        yield AppContainer(
            settings=cfg,
            store=store,
            api=api,
            session=session,
            wallet_service=HttpWalletService(api),
            user_service=HttpUserService(api),
        )
    finally:
        await api.aclose()
        await store.aclose()


async def _main() -> None:
    async with lifespan() as app:
        s = app.session.session
        logger.info(
            "%s client ready (authenticated=%s, admin=%s)",
            app.settings.APP_NAME,
            s.is_authenticated,
            s.is_admin,
        )


if __name__ == "__main__":
    uvloop.run(_main())
