#!/usr/bin/env python3
"""Book Finder CLI - search the catalog and view book details."""
import argparse
import asyncio
import sys
import json
import logging
from dataclasses import asdict
from tabulate import tabulate
from bookfinder.client import CatalogClient
from bookfinder.async_client import AsyncCatalogClient
from bookfinder.config import Config
from bookfinder.text import sanitize_html
from bookfinder.views import SearchView, DetailView, NOT_FOUND_MESSAGE

logger = logging.getLogger(__name__)


def setup_logging(config: Config, verbose: bool = False):
    """Configure root logging."""
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


def client_kwargs(config: Config) -> dict:
    return {
        "base_url": config.CATALOG_BASE_URL,
        "api_key": config.GOOGLE_BOOKS_API_KEY,
        "timeout": config.DEFAULT_TIMEOUT,
    }


def search_books_sync(args, config: Config) -> SearchView:
    """Search for books using sync client."""
    with CatalogClient(**client_kwargs(config)) as client:
        view = SearchView(client)
        view.search(args.query)
    return view


async def search_books_async(args, config: Config) -> SearchView:
    """Search for books using async client."""
    async with AsyncCatalogClient(**client_kwargs(config)) as client:
        view = SearchView(client)
        await view.search_async(args.query)
    return view


def show_book_sync(args, config: Config) -> DetailView:
    """Load one book using sync client."""
    with CatalogClient(**client_kwargs(config)) as client:
        view = DetailView(client)
        view.load(args.book_id)
    return view


async def show_book_async(args, config: Config) -> DetailView:
    """Load one book using async client."""
    async with AsyncCatalogClient(**client_kwargs(config)) as client:
        view = DetailView(client)
        await view.load_async(args.book_id)
    return view


def display_books(view: SearchView, format_type: str):
    """Display search results in specified format."""
    books = view.results

    if not view.has_searched:
        print("Enter a search term.")
        return

    if view.message:
        print(view.message)
        return

    if format_type == "table":
        headers = ["ID", "Title", "Authors", "ISBN", "Thumbnail"]
        rows = [
            [
                book.id,
                book.title[:50] + "..." if len(book.title) > 50 else book.title,
                book.authors_str[:30] + "..." if len(book.authors_str) > 30 else book.authors_str,
                book.isbn or "",
                book.thumbnail or ""
            ]
            for book in books
        ]
        print("\n" + tabulate(rows, headers=headers, tablefmt="grid"))

    elif format_type == "json":
        print(json.dumps([asdict(book) for book in books], indent=2))

    elif format_type == "compact":
        for i, book in enumerate(books, 1):
            print(f"{i}. {book.title} - {book.authors_str}")


def display_book(view: DetailView, format_type: str):
    """Display one book in specified format."""
    book = view.book

    if book is None:
        print(NOT_FOUND_MESSAGE)
        print("Back to search: explorer.py search \"<query>\"")
        return

    if format_type == "json":
        print(json.dumps(asdict(book), indent=2))
        return

    print("\n" + book.title)
    if book.subtitle:
        print(book.subtitle)

    facts = [["By", book.authors_str]]
    if book.page_count:
        facts.append(["Pages", book.page_count])
    if book.isbn:
        facts.append(["ISBN", book.isbn])
    facts.append(["Published", book.publish_date_str])
    if book.categories:
        facts.append(["Categories", book.categories_str])
    if book.cover_url:
        facts.append(["Cover", book.cover_url])
    print(tabulate(facts, tablefmt="plain"))

    if book.description:
        print("\nDescription")
        # Descriptions are markup; sanitize at every output boundary
        print(sanitize_html(book.description))


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Book Finder - search a public book catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Search with defaults
  %(prog)s search "the lord of the rings"

  # Search with the async client, JSON output
  %(prog)s search "dune" --async --format json

  # Show one book
  %(prog)s show zyTCAlFPjgYC
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Search command
    search_parser = subparsers.add_parser("search", help="Search for books")
    search_parser.add_argument("query", help="Search query")
    search_parser.add_argument("--format", choices=["table", "json", "compact"], default="table", help="Output format")
    search_parser.add_argument("--async", dest="use_async", action="store_true", help="Use async client")

    # Show command
    show_parser = subparsers.add_parser("show", help="Show book details")
    show_parser.add_argument("book_id", help="Catalog volume id")
    show_parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format")
    show_parser.add_argument("--async", dest="use_async", action="store_true", help="Use async client")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = Config()
    setup_logging(config, args.verbose)

    try:
        if args.command == "search":
            if args.use_async:
                view = asyncio.run(search_books_async(args, config))
            else:
                view = search_books_sync(args, config)
            display_books(view, args.format)

        elif args.command == "show":
            if args.use_async:
                view = asyncio.run(show_book_async(args, config))
            else:
                view = show_book_sync(args, config)
            display_book(view, args.format)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
