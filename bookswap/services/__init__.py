"""Marketplace services"""

from .fallback import FallbackService, FallbackState, ServiceContext
from .container import ServiceContainer, create_services
from .images import ImageService
from .listings import ListingService
from .messaging import MessageService
from .saved_items import SavedItemsService
from .users import UserService

__all__ = [
    "FallbackService",
    "FallbackState",
    "ServiceContext",
    "ServiceContainer",
    "create_services",
    "ImageService",
    "ListingService",
    "MessageService",
    "SavedItemsService",
    "UserService",
]
