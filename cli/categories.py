#!/usr/bin/env python3

import sys
from pathlib import Path
from logger import get_logger

logger = get_logger()


def _print_categories(categories):
    if not categories:
        logger.info("No categories found.")
        return

    logger.info(f"{'ID':<20} {'Name':<25} {'Type':<8} {'Color':<8} Keywords")
    logger.info("-" * 80)
    for c in categories:
        keywords = ", ".join(c.keywords)
        logger.info(f"{c.id:<20} {c.name:<25} {c.type:<8} {c.color:<8} {keywords}")
    logger.info(f"\nTotal: {len(categories)} categories")


def cmd_import(args, services):
    """Import categories from a CSV or JSON file.

    Args:
        args: Parsed command-line arguments with file
        services: Services container with imports service
    """
    path = Path(args.file)
    if not path.exists():
        logger.error(f"File not found: {args.file}")
        sys.exit(1)

    skipped = []
    categories = services.imports.import_file("categories", path, skipped)
    _print_categories(categories)
    if skipped:
        logger.info(f"({len(skipped)} field(s) replaced with defaults)")


def cmd_defaults(args, services):
    """Show the default category set (packaged, or from config)."""
    _print_categories(services.imports.load_categories())


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Import and inspect categories",
        description="Import categories or show the default category set",
    )

    # Add subcommands for categories
    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories import
    import_parser = categories_subparsers.add_parser(
        "import", help="Import categories from a CSV or JSON file"
    )
    import_parser.add_argument("file", help="Path to the categories file")
    import_parser.set_defaults(func=cmd_import)

    # categories defaults
    defaults_parser = categories_subparsers.add_parser(
        "defaults", help="Show the default categories"
    )
    defaults_parser.set_defaults(func=cmd_defaults)
