#!/usr/bin/env python3

import sys
from dataclasses import replace
from pathlib import Path
from categorization import auto_categorize
from exporter import export_transactions
from logger import get_logger
from tools.merchants import generate_merchant_name

logger = get_logger()


def _require_file(path_arg):
    path = Path(path_arg)
    if not path.exists():
        logger.error(f"File not found: {path_arg}")
        sys.exit(1)
    return path


def clean_merchant_names(transactions):
    """Replace merchant names that fell back to the raw description."""
    cleaned = []
    for t in transactions:
        if t.merchant_name == t.description:
            t = replace(t, merchant_name=generate_merchant_name(t.description))
        cleaned.append(t)
    return cleaned


def cmd_import(args, services):
    """Import transactions from a CSV or JSON file.

    Args:
        args: Parsed command-line arguments with file and option flags
        services: Services container with imports and exports services
    """
    path = _require_file(args.file)

    skipped = []
    transactions = services.imports.import_file("transactions", path, skipped)

    logger.info(f"Parsed {len(transactions)} transactions from {path.name}")
    if skipped:
        logger.info(f"  ({len(skipped)} row(s) skipped)")

    if not transactions:
        logger.info("No transactions to import.")
        return

    if args.clean_merchants:
        transactions = clean_merchant_names(transactions)

    if args.categorize or args.categories or args.rules:
        categories = services.imports.load_categories(
            Path(args.categories) if args.categories else None
        )
        rule_list = (
            services.imports.import_file("rules", _require_file(args.rules))
            if args.rules
            else []
        )
        logger.info(
            f"Using {len(categories)} categories and {len(rule_list)} rules"
        )
        transactions = auto_categorize(transactions, categories, rule_list)
        auto_count = sum(1 for t in transactions if t.auto_categorized)
        logger.info(f"✓ Auto-categorized {auto_count} transaction(s)")

    logger.info("-" * 80)
    for t in transactions:
        logger.info(
            f"{t.date:<12} {t.description[:40]:<40} {t.amount:>12} "
            f"{t.category:<20} {t.merchant_name[:30]}"
        )
    logger.info("-" * 80)

    if args.export:
        result = export_transactions(transactions, args.export)
        path = services.exports.write(result)
        logger.info(f"✓ Successfully exported transactions to: {path}")


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Import and manage transactions",
        description="Import transactions, categorize them, and export the result",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    # transactions import
    import_parser = transactions_subparsers.add_parser(
        "import", help="Import transactions from a CSV or JSON file"
    )
    import_parser.add_argument(
        "file",
        help="Path to the transactions file",
    )
    import_parser.add_argument(
        "--categories",
        help="Categories file to use instead of the defaults (implies --categorize)",
    )
    import_parser.add_argument(
        "--rules",
        help="Rules file checked before category keywords (implies --categorize)",
    )
    import_parser.add_argument(
        "--categorize",
        action="store_true",
        help="Auto-categorize imported transactions",
    )
    import_parser.add_argument(
        "--clean-merchants",
        action="store_true",
        help="Derive readable merchant names from descriptions",
    )
    import_parser.add_argument(
        "--export",
        choices=["csv", "json"],
        help="Write the imported transactions to the export directory",
    )
    import_parser.set_defaults(func=cmd_import)
