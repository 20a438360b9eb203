"""In-memory fixture dataset"""

from .fixture_store import FixtureStore
from .seed_data import SEED_CONVERSATIONS, SEED_LISTINGS, SEED_MESSAGES, SEED_USERS

__all__ = [
    "FixtureStore",
    "SEED_CONVERSATIONS",
    "SEED_LISTINGS",
    "SEED_MESSAGES",
    "SEED_USERS",
]
