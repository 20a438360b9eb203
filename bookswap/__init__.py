"""
BookSwap marketplace data-access layer.

Service modules for users, book listings, saved items, messaging and images
backed by a hosted backend, with an in-memory fixture fallback for tables that
do not exist remotely.
"""

__version__ = "0.1.0"
