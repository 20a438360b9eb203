"""
Saved items service - Favorites and wishlist.

Membership is keyed by (user, book, type). Adds are upserts and removes are
deletes, so repeating either leaves the same state.
"""

import asyncio
import logging
import weakref
from typing import List, MutableMapping, Tuple

from bookswap.models import BookListing, SavedItemType
from bookswap.remote.client import Filter, Order
from bookswap.remote.schema import TableGroup
from bookswap.services.fallback import FallbackService, ServiceContext
from bookswap.services.listings import ListingService
from bookswap.time_utils import utc_now

logger = logging.getLogger(__name__)

SAVED_ITEMS_TABLE = "saved_items"
SAVED_ITEM_KEY = ("user_id", "book_id", "type")


class SavedItemsService(FallbackService):
    """Per-user favorites and wishlist"""

    group = TableGroup.SAVED_ITEMS

    def __init__(self, ctx: ServiceContext, listings: ListingService):
        super().__init__(ctx)
        self.listings = listings
        # Held only while a toggle runs
        self._toggle_locks: MutableMapping[Tuple[str, str, SavedItemType], asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    @staticmethod
    def _key_filters(user_id: str, book_id: str, item_type: SavedItemType) -> List[Filter]:
        return [
            Filter.eq("user_id", user_id),
            Filter.eq("book_id", book_id),
            Filter.eq("type", item_type.value),
        ]

    async def _remote_add(self, user_id: str, book_id: str, item_type: SavedItemType) -> None:
        await self.client.upsert(
            SAVED_ITEMS_TABLE,
            {
                "user_id": user_id,
                "book_id": book_id,
                "type": item_type.value,
                "created_at": utc_now().isoformat(),
            },
            on_conflict=SAVED_ITEM_KEY,
        )

    async def _remote_is_saved(self, user_id: str, book_id: str, item_type: SavedItemType) -> bool:
        rows = await self.client.query(
            SAVED_ITEMS_TABLE,
            filters=self._key_filters(user_id, book_id, item_type),
            limit=1,
        )
        return bool(rows)

    async def add_saved_item(self, book_id: str, item_type: SavedItemType) -> None:
        """Save a book; saving it again is a no-op."""
        user_id = await self.ctx.require_user_id("save items")

        async def remote() -> None:
            await self._remote_add(user_id, book_id, item_type)

        async def fixture() -> None:
            self.store.add_saved(user_id, book_id, item_type)

        await self._dispatch("add_saved_item", remote, fixture)

    async def remove_saved_item(self, book_id: str, item_type: SavedItemType) -> None:
        """Unsave a book; unsaving an unsaved book is a no-op."""
        user_id = await self.ctx.require_user_id("remove saved items")

        async def remote() -> None:
            await self.client.delete(SAVED_ITEMS_TABLE, self._key_filters(user_id, book_id, item_type))

        async def fixture() -> None:
            self.store.remove_saved(user_id, book_id, item_type)

        await self._dispatch("remove_saved_item", remote, fixture)

    async def is_saved_item(self, book_id: str, item_type: SavedItemType) -> bool:
        """Whether the signed-in user saved the book; False when signed out."""
        user_id = await self.ctx.current_user_id()
        if not user_id:
            return False

        async def remote() -> bool:
            return await self._remote_is_saved(user_id, book_id, item_type)

        async def fixture() -> bool:
            return self.store.is_saved(user_id, book_id, item_type)

        return await self._dispatch("is_saved_item", remote, fixture)

    async def toggle_saved_item(self, book_id: str, item_type: SavedItemType) -> bool:
        """
        Flip a book's membership.

        Calls for the same (user, book, type) are serialized, so two
        overlapping toggles always flip twice.

        Returns:
            True if the book is saved after the call
        """
        user_id = await self.ctx.require_user_id("save items")

        async def remote() -> bool:
            if await self._remote_is_saved(user_id, book_id, item_type):
                await self.client.delete(SAVED_ITEMS_TABLE, self._key_filters(user_id, book_id, item_type))
                return False
            await self._remote_add(user_id, book_id, item_type)
            return True

        async def fixture() -> bool:
            return self.store.toggle_saved(user_id, book_id, item_type)

        key = (user_id, book_id, item_type)
        lock = self._toggle_locks.get(key)
        if lock is None:
            lock = self._toggle_locks[key] = asyncio.Lock()
        async with lock:
            return await self._dispatch("toggle_saved_item", remote, fixture)

    async def get_saved_items(self, item_type: SavedItemType) -> List[BookListing]:
        """
        Saved listings of one type, most recently saved first.

        Saved ids that no longer resolve to a listing are dropped.
        """
        user_id = await self.ctx.current_user_id()
        if not user_id:
            return []

        async def remote() -> List[str]:
            rows = await self.client.query(
                SAVED_ITEMS_TABLE,
                filters=[Filter.eq("user_id", user_id), Filter.eq("type", item_type.value)],
                order=Order("created_at", descending=True),
                columns="book_id",
            )
            return [row["book_id"] for row in rows]

        async def fixture() -> List[str]:
            return self.store.saved_book_ids(user_id, item_type)

        book_ids = await self._dispatch("get_saved_items", remote, fixture)
        listings = await self.listings.get_listings_by_ids(book_ids)
        if len(listings) < len(set(book_ids)):
            logger.debug(f"Dropped {len(set(book_ids)) - len(listings)} unresolvable saved {item_type.value} ids")
        return listings

    async def get_favorites(self) -> List[BookListing]:
        return await self.get_saved_items(SavedItemType.FAVORITE)

    async def get_wishlist(self) -> List[BookListing]:
        return await self.get_saved_items(SavedItemType.WISHLIST)
