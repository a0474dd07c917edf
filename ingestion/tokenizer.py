"""Delimited-text tokenizer.

Quoted fields may contain the delimiter. There is no escape for a literal quote
character: every quote toggles the in-quotes state and is dropped, so ``""``
inside a field disappears.
"""

from typing import Iterator, List

from ingestion.errors import FormatError

QUOTE = '"'


def tokenize_line(line: str, delimiter: str = ",") -> List[str]:
    """Split one line into trimmed fields, honoring quoted delimiters."""
    values = []
    current = []
    inside_quotes = False

    for char in line:
        if char == QUOTE:
            inside_quotes = not inside_quotes
        elif char == delimiter and not inside_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    values.append("".join(current).strip())

    return values


class DelimitedRows:
    """Lazy, restartable sequence of raw rows.

    Each iteration re-scans the stored lines, so the rows can be walked more
    than once without holding the tokenized result in memory.
    """

    def __init__(self, lines: List[str], delimiter: str = ","):
        self._lines = lines
        self.delimiter = delimiter

    def __iter__(self) -> Iterator[List[str]]:
        for line in self._lines:
            yield tokenize_line(line, self.delimiter)

    def __len__(self) -> int:
        return len(self._lines)


def parse_delimited(text: str, delimiter: str = ",") -> DelimitedRows:
    """Split raw text into rows of fields.

    Args:
        text: Raw delimited text, header row included.
        delimiter: Field separator.

    Returns:
        DelimitedRows over every non-blank line.

    Raises:
        FormatError: If the text is empty after trimming.
    """
    stripped = text.strip()
    if not stripped:
        raise FormatError("File is empty")

    lines = [line for line in stripped.split("\n") if line.strip()]
    return DelimitedRows(lines, delimiter)
