"""Base services container for dependency injection."""

from datetime import date
from typing import Callable, Optional

from config import Config
from ingestion.ids import IdAllocator, get_allocator


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject a fixed clock or id allocator for testing.

    Args:
        config: Application configuration object.
        allocate_id: Optional id allocator. If None, built from config.id_scheme.
        clock: Callable returning the current date. Defaults to date.today.
    """

    def __init__(
        self,
        config: Config,
        allocate_id: Optional[IdAllocator] = None,
        clock: Callable[[], date] = date.today,
    ):
        self.config = config
        self.allocate_id = allocate_id or get_allocator(config.id_scheme)
        self.clock = clock

        # Lazy import to avoid circular dependencies
        from services.imports import ImportService
        from services.exports import ExportService

        self.imports = ImportService(config, self.allocate_id, clock)
        self.exports = ExportService(config)
