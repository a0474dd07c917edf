"""Import service: reads source files and hands their text to the ingestion modules."""

import asyncio
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional

from config import Config
from defaults.loader import load_default_categories
from ingestion import DATED_KINDS, get_ingestion_module
from ingestion.ids import IdAllocator
from logger import get_logger
from models.category import Category

logger = get_logger()

_FORMATS_BY_SUFFIX = {".csv": "csv", ".json": "json"}


def format_for_path(path: Path) -> Optional[str]:
    """Format implied by a file extension, or None to detect from content."""
    return _FORMATS_BY_SUFFIX.get(path.suffix.lower())


class ImportService:
    """Service for importing records from files.

    Args:
        config: Application configuration.
        allocate_id: Id allocator shared by every import.
        clock: Callable returning the current date, used for recurring
            entries whose anchor date is missing or a bare day of month.
    """

    def __init__(
        self,
        config: Config,
        allocate_id: IdAllocator,
        clock: Callable[[], date] = date.today,
    ):
        self.config = config
        self.allocate_id = allocate_id
        self.clock = clock

    def parse(
        self,
        kind: str,
        text: str,
        fmt: Optional[str] = None,
        skipped: Optional[list] = None,
    ) -> List:
        """Normalize already-read text into records of ``kind``.

        Raises:
            ValueError: If ``kind`` is unknown.
            FormatError: If the text is structurally invalid.
        """
        module = get_ingestion_module(kind)
        if kind in DATED_KINDS:
            return module.ingest(text, fmt, self.allocate_id, skipped, today=self.clock())
        return module.ingest(text, fmt, self.allocate_id, skipped)

    def read_text_sync(self, path: Path) -> str:
        logger.info(f"Reading {path}")
        return Path(path).read_text(encoding="utf-8")

    async def read_text(self, path: Path) -> str:
        """Read a source file without blocking the event loop."""
        return await asyncio.to_thread(self.read_text_sync, path)

    def import_file(
        self, kind: str, path: Path, skipped: Optional[list] = None
    ) -> List:
        """Read ``path`` and import its records of ``kind``."""
        path = Path(path)
        text = self.read_text_sync(path)
        return self.parse(kind, text, format_for_path(path), skipped)

    async def aimport_file(
        self, kind: str, path: Path, skipped: Optional[list] = None
    ) -> List:
        """Async variant of import_file; parsing starts once the whole file is read."""
        path = Path(path)
        text = await self.read_text(path)
        return self.parse(kind, text, format_for_path(path), skipped)

    def load_categories(self, path: Optional[Path] = None) -> List[Category]:
        """Categories from ``path`` if given, else the configured default set."""
        if path is not None:
            return self.import_file("categories", path)
        return load_default_categories(self.config.categories_file)
