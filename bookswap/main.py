"""
Main entry point and CLI for the BookSwap data-access layer.

Provides backend diagnostics, schema printing and read-only browsing of
listings and conversations.
"""

import asyncio
import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from bookswap.config import MarketplaceSettings, get_settings
from bookswap.diagnostics import check_required_tables, missing_table_report
from bookswap.error_handling import MarketplaceError
from bookswap.models import BookListing, ConversationWithDetails, UserCredentials
from bookswap.remote.schema import SCHEMAS, TableGroup
from bookswap.remote.supabase_client import SupabaseClient
from bookswap.services import create_services


logger = logging.getLogger(__name__)


def format_listing(listing: BookListing) -> str:
    """
    Format a listing for console output.

    Args:
        listing: BookListing to format

    Returns:
        Multi-line string representation of the listing
    """
    lines = [f"📚 {listing.title} by {listing.author}"]
    lines.append(f"   ID: {listing.id}")
    lines.append(f"   Price: ${listing.price:.2f} ({listing.condition.value})")
    if listing.category:
        lines.append(f"   Category: {listing.category}")

    extras = []
    if listing.is_negotiable:
        extras.append("negotiable")
    if listing.exchange_option:
        extras.append("open to exchange")
    if extras:
        lines.append(f"   {', '.join(extras).capitalize()}")

    lines.append(f"   Seller: {listing.seller_id}")
    lines.append("")
    return "\n".join(lines)


def format_conversation(conversation: ConversationWithDetails) -> str:
    """Format an inbox entry for console output."""
    unread = f" ({conversation.unread_count} unread)" if conversation.unread_count else ""
    lines = [f"💬 {conversation.other_user.name} about '{conversation.listing.title}'{unread}"]
    lines.append(f"   Last message: {conversation.last_message or '[none]'}")
    lines.append(f"   At: {conversation.last_message_at.isoformat()}")
    lines.append("")
    return "\n".join(lines)


async def run_diagnose(settings: MarketplaceSettings) -> int:
    """
    Check the backend for every required table.

    Returns:
        Exit code (0 when all tables exist, 1 otherwise)
    """
    async with SupabaseClient(settings.backend) as client:
        results = await check_required_tables(client)

    print("\nDatabase table status:")
    for table, exists in results.items():
        print(f"   {'✅' if exists else '❌'} {table}")

    report = missing_table_report(results)
    if not report:
        print("\nAll required tables exist!\n")
        return 0

    missing = [t for t, exists in results.items() if not exists]
    print(f"\nMissing tables: {', '.join(missing)}")
    print("\nFix instructions:")
    for entry in report:
        print(f"\n- {entry['description']} ({', '.join(entry['tables'])})")
        print(f"  1. Print the SQL with: {entry['command']}")
        print("  2. Run it in the SQL editor of your Supabase project")
    print()
    return 1


def run_schema(group: Optional[str]) -> int:
    """Print the DDL for one table group, or for all of them."""
    groups = [TableGroup(group)] if group else list(TableGroup)
    for table_group in groups:
        print(f"-- {table_group.value}")
        print(SCHEMAS[table_group].strip())
        print()
    return 0


async def run_listings(
    settings: MarketplaceSettings,
    search: Optional[str] = None,
    category: Optional[str] = None,
    seller: Optional[str] = None
) -> int:
    """Print listings, optionally searched or narrowed."""
    async with create_services(settings) as services:
        if search:
            listings = await services.listings.search_listings(search)
        elif category:
            listings = await services.listings.get_listings_by_category(category)
        elif seller:
            listings = await services.listings.get_listings_by_seller(seller)
        else:
            listings = await services.listings.get_listings()

    if not listings:
        print("No listings found.\n")
        return 0

    print(f"\n{'='*60}")
    print(f"Found {len(listings)} listing(s)")
    print(f"{'='*60}\n")
    for listing in listings:
        print(format_listing(listing))
    return 0


async def run_inbox(settings: MarketplaceSettings, email: str, password: str) -> int:
    """Sign in and print the user's conversations."""
    async with create_services(settings) as services:
        user = await services.users.sign_in(UserCredentials(email=email, password=password))
        conversations = await services.messages.get_conversations()
        unread = await services.messages.get_unread_count()
        await services.users.sign_out()

    print(f"\n👤 {user.name} <{user.email}>: {unread} unread message(s)\n")
    if not conversations:
        print("No conversations yet.\n")
        return 0
    for conversation in conversations:
        print(format_conversation(conversation))
    return 0


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="bookswap",
        description="BookSwap marketplace data-access tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check which tables exist in the backend
  bookswap diagnose

  # Print the SQL for the messaging tables
  bookswap schema messaging

  # Search listings
  bookswap listings --search "history"

  # Show an inbox
  bookswap inbox --email john.smith@example.com --password secret
        """
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging output"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("diagnose", help="Check the backend for the required tables")

    schema_parser = subparsers.add_parser("schema", help="Print table creation SQL")
    schema_parser.add_argument(
        "group",
        nargs="?",
        choices=[g.value for g in TableGroup],
        help="Table group to print (default: all)"
    )

    listings_parser = subparsers.add_parser("listings", help="Browse book listings")
    narrowing = listings_parser.add_mutually_exclusive_group()
    narrowing.add_argument("--search", help="Search title, author and description")
    narrowing.add_argument("--category", help="Only listings in this category")
    narrowing.add_argument("--seller", help="Only listings by this seller id")

    inbox_parser = subparsers.add_parser("inbox", help="Show a user's conversations")
    inbox_parser.add_argument("--email", required=True, help="Account email")
    inbox_parser.add_argument("--password", required=True, help="Account password")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI application.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    load_dotenv()
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        if args.command == "schema":
            return run_schema(args.group)
        if args.command == "diagnose":
            return asyncio.run(run_diagnose(settings))
        if args.command == "listings":
            return asyncio.run(run_listings(settings, args.search, args.category, args.seller))
        return asyncio.run(run_inbox(settings, args.email, args.password))
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user", file=sys.stderr)
        return 130
    except MarketplaceError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"\n❌ Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
