"""JSON (structured-text) input helpers."""

import json
from typing import Any, List

from ingestion.errors import FormatError


def detect_format(text: str) -> str:
    """Guess "json" or "csv" from the first non-blank character."""
    stripped = text.lstrip()
    if stripped[:1] in ("[", "{"):
        return "json"
    return "csv"


def load_json(text: str) -> Any:
    """Decode JSON text, raising FormatError for invalid or empty input."""
    if not text.strip():
        raise FormatError("File is empty")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise FormatError(
            f"Invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}",
            row_index=e.lineno,
        ) from e


def load_json_array(text: str, kind: str) -> List[Any]:
    """Decode JSON text whose root must be an array.

    Raises:
        FormatError: If the text is not JSON or the root is not an array.
    """
    data = load_json(text)
    if not isinstance(data, list):
        raise FormatError(f"Invalid JSON format: expected an array of {kind}")
    return data
