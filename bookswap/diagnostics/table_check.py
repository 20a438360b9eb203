"""
Table diagnostics - Reports which required tables the backend lacks and how
to create them.
"""

import logging
from typing import Dict, List, Mapping

from bookswap.error_handling.errors import RelationMissingError
from bookswap.remote.client import RemoteDataClient
from bookswap.remote.schema import REQUIRED_TABLES, TableGroup, group_for_relation

logger = logging.getLogger(__name__)

GROUP_DESCRIPTIONS: Dict[TableGroup, str] = {
    TableGroup.USERS: "Create the user_profiles table for user information",
    TableGroup.LISTINGS: "Create the book_listings table for book listings",
    TableGroup.SAVED_ITEMS: "Create the saved_items table for favorites and wishlist functionality",
    TableGroup.MESSAGING: "Create the conversations and messages tables for messaging functionality",
}


async def check_table_exists(client: RemoteDataClient, table: str) -> bool:
    """
    Probe a table with a one-row select.

    Returns:
        False if the backend reports the relation missing, True otherwise

    Raises:
        RemoteError: Any failure other than a missing relation
    """
    try:
        await client.query(table, limit=1)
    except RelationMissingError as e:
        logger.debug(f"Table {table} is missing: {e}")
        return False
    return True


async def check_required_tables(client: RemoteDataClient) -> Dict[str, bool]:
    """Existence of every table the services use, keyed by table name."""
    results = {}
    for table in REQUIRED_TABLES:
        results[table] = await check_table_exists(client, table)
    return results


def missing_table_report(results: Mapping[str, bool]) -> List[Dict[str, object]]:
    """
    Fix instructions for the missing tables, one per table group.

    Args:
        results: Output of check_required_tables

    Returns:
        List of dicts with ``group``, ``tables``, ``description`` and
        ``command`` keys, in the order the tables were checked
    """
    report: Dict[TableGroup, Dict[str, object]] = {}
    for table, exists in results.items():
        if exists:
            continue
        group = group_for_relation(table)
        if group is None:
            logger.warning(f"No schema known for table {table}")
            continue
        entry = report.setdefault(group, {
            "group": group.value,
            "tables": [],
            "description": GROUP_DESCRIPTIONS[group],
            "command": f"bookswap schema {group.value}",
        })
        entry["tables"].append(table)
    return list(report.values())
