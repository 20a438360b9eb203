"""
Listing service - Browse, search and manage book listings.

Listings are returned newest first. On the remote path ownership is left to
the table's row-level policies; the fixture path applies the same rule
itself.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from bookswap.error_handling import ForbiddenError, NotFoundError
from bookswap.filtering import ListingFilter
from bookswap.models import (
    BookFilterOptions,
    BookListing,
    BookListingUpdate,
    CreateBookListing,
)
from bookswap.remote.client import Filter, Order
from bookswap.remote.schema import TableGroup
from bookswap.services.fallback import FallbackService, ServiceContext
from bookswap.time_utils import utc_now

logger = logging.getLogger(__name__)

LISTINGS_TABLE = "book_listings"
NEWEST_FIRST = Order("created_at", descending=True)


class ListingService(FallbackService):
    """Book listing reads and seller-side mutations"""

    group = TableGroup.LISTINGS

    def __init__(self, ctx: ServiceContext):
        super().__init__(ctx)
        self.listing_filter = ListingFilter()

    async def _query(
        self,
        operation: str,
        filters: Sequence[Filter] = (),
        any_of: Sequence[Filter] = (),
        fixture_select=None,
        remote_select=None
    ) -> List[BookListing]:
        """Run a listing query on whichever path is active."""

        async def remote() -> List[BookListing]:
            rows = await self.client.query(
                LISTINGS_TABLE,
                filters=filters,
                any_of=any_of,
                order=NEWEST_FIRST,
            )
            listings = [BookListing.model_validate(row) for row in rows]
            return remote_select(listings) if remote_select else listings

        async def fixture() -> List[BookListing]:
            listings = self.store.all_listings()
            return fixture_select(listings) if fixture_select else listings

        return await self._dispatch(operation, remote, fixture)

    async def _require_seller(self, seller_id: str, action: str) -> str:
        user_id = await self.ctx.require_user_id(action)
        if user_id != seller_id:
            raise ForbiddenError(f"Only the seller can {action}")
        return user_id

    async def get_listings(self) -> List[BookListing]:
        return await self._query("get_listings")

    async def search_listings(self, term: str) -> List[BookListing]:
        """Listings whose title, author or description contains the term."""
        if not term:
            return await self.get_listings()

        def exact(listings: List[BookListing]) -> List[BookListing]:
            return self.listing_filter.search(listings, term)

        # The remote pattern over-matches a literal '*'; re-check the rows
        return await self._query(
            "search_listings",
            any_of=self.listing_filter.remote_search(term),
            fixture_select=exact,
            remote_select=exact,
        )

    async def get_listings_by_category(self, category: str) -> List[BookListing]:
        return await self._query(
            "get_listings_by_category",
            filters=[Filter.eq("category", category)],
            fixture_select=lambda listings: [l for l in listings if l.category == category],
        )

    async def get_listings_by_seller(self, seller_id: str) -> List[BookListing]:
        return await self._query(
            "get_listings_by_seller",
            filters=[Filter.eq("seller_id", seller_id)],
            fixture_select=lambda listings: [l for l in listings if l.seller_id == seller_id],
        )

    async def get_filtered_listings(self, filters: BookFilterOptions) -> List[BookListing]:
        """Listings matching every filter option that is set."""
        return await self._query(
            "get_filtered_listings",
            filters=self.listing_filter.remote_filters(filters),
            fixture_select=lambda listings: self.listing_filter.apply(listings, filters),
        )

    async def get_listings_by_ids(self, listing_ids: List[str]) -> List[BookListing]:
        """
        Listings for the given ids, in the order the ids were given.

        Ids that do not resolve to a listing are dropped.
        """
        wanted = list(dict.fromkeys(listing_ids))
        if not wanted:
            return []
        wanted_set = set(wanted)
        listings = await self._query(
            "get_listings_by_ids",
            filters=[Filter.in_("id", wanted)],
            fixture_select=lambda listings: [l for l in listings if l.id in wanted_set],
        )
        by_id = {l.id: l for l in listings}
        return [by_id[lid] for lid in wanted if lid in by_id]

    async def get_listing_by_id(self, listing_id: str) -> Optional[BookListing]:
        async def remote() -> Optional[BookListing]:
            rows = await self.client.query(
                LISTINGS_TABLE,
                filters=[Filter.eq("id", listing_id)],
                limit=1,
            )
            return BookListing.model_validate(rows[0]) if rows else None

        async def fixture() -> Optional[BookListing]:
            return self.store.get_listing(listing_id)

        return await self._dispatch("get_listing_by_id", remote, fixture)

    async def create_listing(self, listing: CreateBookListing) -> BookListing:
        """
        Publish a new listing.

        Args:
            listing: Listing fields, including the seller's id

        Returns:
            The stored listing with its new id and creation time
        """
        row: Dict[str, Any] = listing.model_dump(mode="json")
        row["created_at"] = utc_now().isoformat()

        async def remote() -> BookListing:
            created = await self.client.insert(LISTINGS_TABLE, row)
            return BookListing.model_validate(created)

        async def fixture() -> BookListing:
            await self._require_seller(listing.seller_id, "create a listing")
            return self.store.add_listing(
                BookListing.model_validate({**row, "id": self.store.next_id("book")})
            )

        created = await self._dispatch("create_listing", remote, fixture)
        logger.info(f"Created listing {created.id}: {created.title}")
        return created

    async def update_listing(self, listing_id: str, update: BookListingUpdate) -> BookListing:
        """
        Apply a partial update to a listing.

        Raises:
            NotFoundError: No visible listing with this id
            ForbiddenError: Caller is not the seller (fixture data)
        """
        changes = update.changes()

        async def remote() -> BookListing:
            if not changes:
                rows = await self.client.query(
                    LISTINGS_TABLE, filters=[Filter.eq("id", listing_id)], limit=1
                )
            else:
                rows = await self.client.update(
                    LISTINGS_TABLE, [Filter.eq("id", listing_id)], changes
                )
            if not rows:
                raise NotFoundError(f"Listing not found: {listing_id}")
            return BookListing.model_validate(rows[0])

        async def fixture() -> BookListing:
            current = self.store.get_listing(listing_id)
            if current is None:
                raise NotFoundError(f"Listing not found: {listing_id}")
            await self._require_seller(current.seller_id, "update this listing")
            return self.store.update_listing(listing_id, changes)

        return await self._dispatch("update_listing", remote, fixture)

    async def delete_listing(self, listing_id: str) -> None:
        """Delete a listing; deleting an absent listing is a no-op."""

        async def remote() -> None:
            await self.client.delete(LISTINGS_TABLE, [Filter.eq("id", listing_id)])

        async def fixture() -> None:
            current = self.store.get_listing(listing_id)
            if current is None:
                return
            await self._require_seller(current.seller_id, "delete this listing")
            self.store.remove_listing(listing_id)

        await self._dispatch("delete_listing", remote, fixture)
        logger.info(f"Deleted listing {listing_id}")
