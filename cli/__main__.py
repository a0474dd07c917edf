#!/usr/bin/env python3
"""
Billfold CLI - Command-line interface for importing budget records.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    transactions Import, categorize and export transactions
    categories   Import categories or show the default set
    rules        Import categorization rules
    bills        Import bills and list their monthly occurrences
    income       Import recurring income and list its monthly occurrences

Examples:
    python -m cli transactions import bank.csv --categorize --export json
    python -m cli categories defaults
    python -m cli rules import rules.json
    python -m cli bills occurrences bills.csv --year 2024 --month 3
    python -m cli income occurrences income.json --year 2024 --month 3
"""

import sys
import argparse
from cli import transactions, categories, rules, recurring
from config import load_config
from services.base import Services
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Billfold - Personal budget record import",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Create subparsers for each command
    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    # Register each command's subparser
    transactions.setup_parser(subparsers)
    categories.setup_parser(subparsers)
    rules.setup_parser(subparsers)
    recurring.setup_parser(subparsers)

    # Parse arguments and execute
    args = parser.parse_args()

    # Call the appropriate handler function
    if hasattr(args, "func"):
        try:
            # Load configuration
            config = load_config()

            # Set up logging
            setup_logging(config)

            # Create services container for dependency injection
            services = Services(config)

            args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
