#!/usr/bin/env python3

import sys
from pathlib import Path
from logger import get_logger

logger = get_logger()


def cmd_import(args, services):
    """Import categorization rules and list them in evaluation order."""
    path = Path(args.file)
    if not path.exists():
        logger.error(f"File not found: {args.file}")
        sys.exit(1)

    rules = services.imports.import_file("rules", path)
    if not rules:
        logger.info("No rules found.")
        return

    logger.info(f"{'Priority':<9} {'Match':<11} {'Case':<5} {'Pattern':<30} Category")
    logger.info("-" * 80)
    for r in sorted(rules, key=lambda r: r.priority):
        case = "yes" if r.case_sensitive else "no"
        logger.info(
            f"{r.priority:<9} {r.match_type:<11} {case:<5} {r.pattern[:30]:<30} {r.category}"
        )
    logger.info(f"\nTotal: {len(rules)} rules")


def setup_parser(subparsers):
    """Setup rules subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "rules",
        help="Import categorization rules",
        description="Import custom categorization rules from CSV or JSON",
    )

    rules_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available rule commands",
        dest="subcommand",
        required=True,
    )

    import_parser = rules_subparsers.add_parser(
        "import", help="Import rules from a CSV or JSON file"
    )
    import_parser.add_argument("file", help="Path to the rules file")
    import_parser.set_defaults(func=cmd_import)
