"""Import errors.

``FormatError`` is fatal to the import call that raised it. ``FieldCoercionError``
describes a single bad value and is handled per record by the normalizers.
"""

from typing import Any, Optional


class FormatError(ValueError):
    """The input is structurally invalid (empty, missing columns, wrong JSON root)."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        row_index: Optional[int] = None,
    ):
        super().__init__(message)
        self.field = field
        self.row_index = row_index


class FieldCoercionError(ValueError):
    """A single field of a single record could not be converted."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        row_index: Optional[int] = None,
    ):
        super().__init__(message)
        self.field = field
        self.value = value
        self.row_index = row_index

    def at_row(self, row_index: int) -> "FieldCoercionError":
        """Attach the source row index and return self."""
        self.row_index = row_index
        return self

    def __str__(self) -> str:
        message = super().__str__()
        if self.row_index is not None:
            return f"row {self.row_index}: {message}"
        return message
