from .listing_service import LISTINGS_TABLE, ListingService

__all__ = ["LISTINGS_TABLE", "ListingService"]
