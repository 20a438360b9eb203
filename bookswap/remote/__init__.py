"""Remote backend access"""

from .client import FILTER_OPS, Filter, Order, RemoteDataClient
from .schema import GROUP_RELATIONS, REQUIRED_TABLES, SCHEMAS, TableGroup, group_for_relation
from .supabase_client import SupabaseClient

__all__ = [
    "FILTER_OPS",
    "Filter",
    "Order",
    "RemoteDataClient",
    "GROUP_RELATIONS",
    "REQUIRED_TABLES",
    "SCHEMAS",
    "TableGroup",
    "group_for_relation",
    "SupabaseClient",
]
