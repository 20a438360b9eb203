"""
Service container - Wires every marketplace service around one context.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from bookswap.config import MarketplaceSettings, get_settings
from bookswap.error_handling import ErrorHandler
from bookswap.fixtures import FixtureStore
from bookswap.remote.client import RemoteDataClient
from bookswap.remote.supabase_client import SupabaseClient
from bookswap.services.fallback import FallbackState, ServiceContext
from bookswap.services.images import ImageService
from bookswap.services.listings import ListingService
from bookswap.services.messaging import MessageService
from bookswap.services.saved_items import SavedItemsService
from bookswap.services.users import UserService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    ctx: ServiceContext
    users: UserService
    listings: ListingService
    saved_items: SavedItemsService
    messages: MessageService
    images: ImageService

    async def close(self) -> None:
        """Release the remote client's network resources."""
        await self.ctx.client.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


def create_services(
    settings: Optional[MarketplaceSettings] = None,
    client: Optional[RemoteDataClient] = None,
    store: Optional[FixtureStore] = None
) -> ServiceContainer:
    """
    Build the services for one process (or one test).

    Args:
        settings: Defaults to the current environment
        client: Defaults to a SupabaseClient for ``settings.backend``
        store: Defaults to a freshly seeded fixture store
    """
    settings = settings or get_settings()
    error_handler = ErrorHandler()
    ctx = ServiceContext(
        client=client or SupabaseClient(settings.backend),
        store=store or FixtureStore.seeded(),
        fallback=FallbackState(force_fixtures=settings.fallback.force_fixtures),
        settings=settings,
        error_handler=error_handler,
    )
    if settings.fallback.force_fixtures:
        logger.info("Fixture data forced for every table group")

    users = UserService(ctx)
    listings = ListingService(ctx)
    return ServiceContainer(
        ctx=ctx,
        users=users,
        listings=listings,
        saved_items=SavedItemsService(ctx, listings),
        messages=MessageService(ctx, users, listings),
        images=ImageService(ctx.client, settings.storage, error_handler),
    )
