from .saved_items_service import SAVED_ITEM_KEY, SAVED_ITEMS_TABLE, SavedItemsService

__all__ = ["SAVED_ITEM_KEY", "SAVED_ITEMS_TABLE", "SavedItemsService"]
