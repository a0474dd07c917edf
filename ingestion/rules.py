import logging
from typing import Dict, List, Optional

from ingestion.coercion import cell, parse_bool, parse_positive_int
from ingestion.errors import FieldCoercionError, FormatError
from ingestion.headers import resolve_strict
from ingestion.ids import IdAllocator, uuid_allocator
from ingestion.structured import detect_format, load_json
from ingestion.tokenizer import parse_delimited
from models.rule import MATCH_TYPES, Rule

logger = logging.getLogger(__name__)

_CSV_HEADERS = ["pattern", "category", "matchType"]

_MATCH_TYPE_NAMES = {name.lower(): name for name in MATCH_TYPES}
# Older exports spelled the prefix/suffix match types differently
_MATCH_TYPE_NAMES.update(starts="startsWith", ends="endsWith")


def _match_type(value) -> str:
    text = str(value or "").strip().lower()
    return _MATCH_TYPE_NAMES.get(text, "contains")


def _recover(
    e: FieldCoercionError, row_index: int, default, skipped: Optional[list]
):
    e.at_row(row_index)
    logger.warning(f"Using {e.field}={default!r} for row {row_index}: {e}")
    if skipped is not None:
        skipped.append(e)
    return default


def item_to_rule(
    item: dict,
    position: int,
    allocate_id: IdAllocator = uuid_allocator,
    skipped: Optional[list] = None,
) -> Rule:
    """Convert a mapping of rule fields to a Rule.

    Args:
        item: Field mapping with camelCase keys (CSV row or JSON object).
        position: 1-based position in the input, used as default priority.
        allocate_id: Allocator for rules without an id.
        skipped: Optional list collecting coercion errors.
    """
    try:
        case_sensitive = parse_bool(item.get("caseSensitive"), "caseSensitive")
    except FieldCoercionError as e:
        case_sensitive = _recover(e, position, False, skipped)

    raw_priority = item.get("priority")
    if raw_priority in (None, ""):
        priority = position
    else:
        try:
            priority = parse_positive_int(raw_priority, "priority")
        except FieldCoercionError as e:
            priority = _recover(e, position, position, skipped)

    return Rule(
        id=str(item.get("id") or "").strip() or allocate_id(),
        pattern=str(item.get("pattern") or ""),
        category=str(item.get("category") or "").strip(),
        match_type=_match_type(item.get("matchType")),
        case_sensitive=case_sensitive,
        priority=priority,
    )


def row_to_rule(
    row: List[str],
    columns: Dict[str, int],
    position: int,
    allocate_id: IdAllocator = uuid_allocator,
    skipped: Optional[list] = None,
) -> Rule:
    """Convert a CSV row to a Rule using strict header positions."""
    item = {header: cell(row, index) for header, index in columns.items()}
    return item_to_rule(item, position, allocate_id, skipped)


def import_csv(
    text: str,
    allocate_id: IdAllocator = uuid_allocator,
    skipped: Optional[list] = None,
) -> List[Rule]:
    """
    Import categorization rules from delimited text.

    Expected format:
    - Header row (line 1): must contain pattern,category,matchType; id,
      caseSensitive and priority are optional
    - Rule rows (line 2+)

    Raises:
        FormatError: If the file is empty or a required header is missing.
    """
    iterator = iter(parse_delimited(text))
    columns = resolve_strict(next(iterator), _CSV_HEADERS)
    logger.info("Validated rules CSV header")

    rules = [
        row_to_rule(row, columns, position, allocate_id, skipped)
        for position, row in enumerate(iterator, start=1)
    ]

    logger.info(f"Successfully imported {len(rules)} rules")
    return rules


def mappings_to_rules(
    mappings: dict, allocate_id: IdAllocator = uuid_allocator
) -> List[Rule]:
    """Convert description -> category mappings into exact, case-sensitive rules."""
    return [
        Rule(
            id=allocate_id(),
            pattern=str(description),
            category=str(category),
            match_type="exact",
            case_sensitive=True,
            priority=position,
        )
        for position, (description, category) in enumerate(mappings.items(), start=1)
    ]


def import_json(
    text: str,
    allocate_id: IdAllocator = uuid_allocator,
    skipped: Optional[list] = None,
) -> List[Rule]:
    """Import rules from a JSON array of objects.

    A root object carrying ``categoryMappings`` (the older export format) is
    also accepted and converted with mappings_to_rules.

    Raises:
        FormatError: If the text is not JSON or the root has another shape.
    """
    data = load_json(text)

    if isinstance(data, dict) and isinstance(data.get("categoryMappings"), dict):
        rules = mappings_to_rules(data["categoryMappings"], allocate_id)
        logger.info(f"Converted {len(rules)} category mappings to rules")
        return rules

    if not isinstance(data, list):
        raise FormatError("Invalid JSON format: expected an array of rules")

    rules = []
    for position, item in enumerate(data, start=1):
        if not isinstance(item, dict):
            logger.warning(f"Skipping element {position}: not an object")
            continue
        rules.append(item_to_rule(item, position, allocate_id, skipped))

    logger.info(f"Successfully imported {len(rules)} rules")
    return rules


def ingest(
    text: str,
    fmt: Optional[str] = None,
    allocate_id: IdAllocator = uuid_allocator,
    skipped: Optional[list] = None,
) -> List[Rule]:
    """Import rules from CSV or JSON text (detected when ``fmt`` is None)."""
    fmt = fmt or detect_format(text)
    if fmt == "json":
        return import_json(text, allocate_id, skipped)
    return import_csv(text, allocate_id, skipped)
