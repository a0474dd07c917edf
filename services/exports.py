"""Export service for writing generated export content to disk."""

from pathlib import Path
from typing import Optional

from config import Config
from exporter import ExportResult
from logger import get_logger

logger = get_logger()


class ExportService:
    """Service for saving export results under the configured export directory."""

    def __init__(self, config: Config):
        self.config = config

    def write(self, result: ExportResult, directory: Optional[Path] = None) -> Path:
        """Write an export result as UTF-8 text.

        Args:
            result: Content and suggested filename.
            directory: Target directory. Defaults to config.export_dir.

        Returns:
            Path of the written file.
        """
        directory = directory or self.config.export_dir
        directory.mkdir(parents=True, exist_ok=True)

        path = directory / result.filename
        path.write_text(result.content, encoding="utf-8")
        logger.info(f"Wrote {result.mime_type} export to {path}")
        return path
