"""Filtering module for book listings."""

from .listing_filter import SEARCH_FIELDS, ListingFilter

__all__ = ['ListingFilter', 'SEARCH_FIELDS']
