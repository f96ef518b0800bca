import logging
from typing import Optional

from fastapi import Request

from clickbridge.core.config import Settings
from clickbridge.db.Connection import database
from clickbridge.db.repository import ClickStore
from clickbridge.services.slug_config import SlugConfigMap, load_slug_configs_from_settings

logger = logging.getLogger(__name__)


class BridgeContext:
    """Everything a request handler needs, built once per application.

    Slug configs are loaded and the click store is opened in ``init()``;
    ``shutdown()`` releases the store and the Redis pool.
    """

    def __init__(self, settings: Settings, store: Optional[ClickStore] = None, redis_client=None):
        self.settings = settings
        self.store = store
        self.redis_client = redis_client
        self.slug_configs: SlugConfigMap = {}

    async def init(self) -> None:
        self.slug_configs = load_slug_configs_from_settings(self.settings)

        if self.store is None:
            self.store = database.create_click_store(self.settings)
        await self.store.init()
        logger.info("Click store ready.")

        if self.redis_client is None:
            self.redis_client = database.create_redis_client(self.settings)
        if self.redis_client is not None:
            await database.verify_redis_connection(self.redis_client)

    async def shutdown(self) -> None:
        if self.store is not None:
            await self.store.close()
        if self.redis_client is not None:
            await self.redis_client.aclose()
        logger.info("Context shut down.")


def get_context(request: Request) -> BridgeContext:
    """FastAPI dependency: the context attached by the application factory."""
    return request.app.state.context
