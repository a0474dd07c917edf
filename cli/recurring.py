#!/usr/bin/env python3
"""Commands for recurring bills and income."""

import sys
from pathlib import Path
from logger import get_logger
from tools.occurrences import expand_all
from tools.reconciliation import reconcile_bills

logger = get_logger()

_KINDS = {"bills": "bills", "income": "incomes"}


def _require_file(path_arg):
    path = Path(path_arg)
    if not path.exists():
        logger.error(f"File not found: {path_arg}")
        sys.exit(1)
    return path


def _month_index(month):
    if month < 1 or month > 12:
        logger.error("Month must be between 1 and 12")
        sys.exit(1)
    return month - 1


def cmd_import(args, services):
    """Import bills or income definitions and list them."""
    kind = _KINDS[args.command]
    path = _require_file(args.file)

    skipped = []
    definitions = services.imports.import_file(kind, path, skipped)
    if not definitions:
        logger.info(f"No {args.command} found.")
        return

    logger.info(f"{'Name':<30} {'Amount':>10} {'Frequency':<10} {'Start':<12} Category")
    logger.info("-" * 80)
    for d in definitions:
        logger.info(
            f"{d.name[:30]:<30} {d.amount:>10} {d.frequency:<10} "
            f"{d.start_date.isoformat():<12} {d.category}"
        )
    logger.info(f"\nTotal: {len(definitions)}")
    if skipped:
        logger.info(f"({len(skipped)} entr(ies) adjusted or skipped)")


def cmd_occurrences(args, services):
    """List the occurrences of every definition in one month.

    For bills, an optional transactions file is matched against the month's
    occurrences first so that paid occurrences are marked.
    """
    kind = _KINDS[args.command]
    month = _month_index(args.month)
    definitions = services.imports.import_file(kind, _require_file(args.file))

    if getattr(args, "transactions", None):
        transactions = services.imports.import_file(
            "transactions", _require_file(args.transactions)
        )
        definitions = reconcile_bills(
            definitions,
            transactions,
            args.year,
            month,
            services.config.bill_matching,
        )

    occurrences = expand_all(definitions, args.year, month)
    if not occurrences:
        logger.info(f"No occurrences in {args.year}/{args.month:02d}.")
        return

    logger.info(f"Occurrences for {args.year}/{args.month:02d}")
    logger.info("-" * 80)
    total = 0
    for o in occurrences:
        status = "paid" if o.is_paid else ""
        logger.info(
            f"{o.occurrence_date.isoformat():<12} {o.name[:30]:<30} {o.amount:>10} "
            f"{o.definition.frequency:<10} {status}"
        )
        total += o.amount
    logger.info("-" * 80)
    logger.info(f"Total: {total} across {len(occurrences)} occurrence(s)")


def _add_subcommands(parser, label):
    sub = parser.add_subparsers(
        title="subcommands",
        description=f"Available {label} commands",
        dest="subcommand",
        required=True,
    )

    import_parser = sub.add_parser("import", help=f"Import {label} from CSV or JSON")
    import_parser.add_argument("file", help=f"Path to the {label} file")
    import_parser.set_defaults(func=cmd_import)

    occurrences_parser = sub.add_parser(
        "occurrences", help=f"List {label} occurrences in a month"
    )
    occurrences_parser.add_argument("file", help=f"Path to the {label} file")
    occurrences_parser.add_argument("--year", type=int, required=True, help="Year, e.g. 2024")
    occurrences_parser.add_argument(
        "--month", type=int, required=True, help="Month number (1-12)"
    )
    occurrences_parser.set_defaults(func=cmd_occurrences)
    return occurrences_parser


def setup_parser(subparsers):
    """Setup the bills and income subcommand parsers.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    bills_parser = subparsers.add_parser(
        "bills",
        help="Import bills and list occurrences",
        description="Import recurring bills and expand them into monthly occurrences",
    )
    occurrences_parser = _add_subcommands(bills_parser, "bills")
    occurrences_parser.add_argument(
        "--transactions",
        help="Transactions file used to mark occurrences as paid",
    )

    income_parser = subparsers.add_parser(
        "income",
        help="Import recurring income and list occurrences",
        description="Import recurring income and expand it into monthly occurrences",
    )
    _add_subcommands(income_parser, "income")
