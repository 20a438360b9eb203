"""
Listing filter implementation for book listings.

This module applies search terms and filter options to listings held in
memory, and translates the same options into remote query predicates so both
data paths select the same rows.
"""

from typing import List, Optional

from bookswap.models import BookFilterOptions, BookListing
from bookswap.remote.client import Filter


SEARCH_FIELDS = ("title", "author", "description")


class ListingFilter:
    """Filters book listings by search term and filter options.

    Every option is optional; options that are set combine with AND, while a
    search term matches any of the searchable fields.
    """

    def search(self, listings: List[BookListing], term: str) -> List[BookListing]:
        """Filter listings by case-insensitive substring search.

        Args:
            listings: List of listings to filter
            term: Search term matched against title, author and description

        Returns:
            Listings where at least one searchable field contains the term
        """
        term_lower = term.lower()
        return [
            listing for listing in listings
            if any(term_lower in (getattr(listing, field) or "").lower() for field in SEARCH_FIELDS)
        ]

    def filter_by_price(
        self,
        listings: List[BookListing],
        min_price: Optional[float] = None,
        max_price: Optional[float] = None
    ) -> List[BookListing]:
        """Filter listings by price range.

        Args:
            listings: List of listings to filter
            min_price: Minimum price (inclusive), None for no minimum
            max_price: Maximum price (inclusive), None for no maximum

        Returns:
            List of listings that meet the price criteria
        """
        filtered = []

        for listing in listings:
            if min_price is not None and listing.price < min_price:
                continue
            if max_price is not None and listing.price > max_price:
                continue
            filtered.append(listing)

        return filtered

    def apply(self, listings: List[BookListing], options: BookFilterOptions) -> List[BookListing]:
        """Filter listings by every option that is set.

        Args:
            listings: List of listings to filter
            options: Filter options; empty lists impose no constraint

        Returns:
            Listings satisfying all the set options, order preserved
        """
        filtered = self.filter_by_price(listings, options.min_price, options.max_price)

        if options.categories:
            categories = set(options.categories)
            filtered = [l for l in filtered if l.category in categories]

        if options.conditions:
            conditions = set(options.conditions)
            filtered = [l for l in filtered if l.condition in conditions]

        if options.is_negotiable is not None:
            filtered = [l for l in filtered if l.is_negotiable == options.is_negotiable]

        if options.exchange_option is not None:
            filtered = [l for l in filtered if l.exchange_option == options.exchange_option]

        return filtered

    def remote_filters(self, options: BookFilterOptions) -> List[Filter]:
        """Translate filter options into remote query predicates."""
        filters: List[Filter] = []
        if options.categories:
            filters.append(Filter.in_("category", options.categories))
        if options.conditions:
            filters.append(Filter.in_("condition", [c.value for c in options.conditions]))
        if options.min_price is not None:
            filters.append(Filter.gte("price", options.min_price))
        if options.max_price is not None:
            filters.append(Filter.lte("price", options.max_price))
        if options.is_negotiable is not None:
            filters.append(Filter.eq("is_negotiable", options.is_negotiable))
        if options.exchange_option is not None:
            filters.append(Filter.eq("exchange_option", options.exchange_option))
        return filters

    def remote_search(self, term: str) -> List[Filter]:
        """Search predicates for an OR group over the searchable fields."""
        return [Filter.contains(field, term) for field in SEARCH_FIELDS]
