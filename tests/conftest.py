"""Shared pytest fixtures for all tests."""

import pytest
from datetime import date

from config import Config
from ingestion.ids import CounterAllocator
from services.base import Services

TODAY = date(2024, 3, 15)


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration rooted in a temporary directory.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "billfold",
        log_level="DEBUG",
        log_dir=tmp_path / "billfold" / "logs",
        export_dir=tmp_path / "billfold" / "exports",
        id_scheme="counter",
    )


@pytest.fixture
def allocate_id():
    """Deterministic id allocator yielding "id-1", "id-2", ..."""
    return CounterAllocator(prefix="id-")


@pytest.fixture
def services(test_config, allocate_id):
    """Create a Services container with a fixed clock and counter ids.

    Args:
        test_config: Test configuration fixture.
        allocate_id: Counter allocator fixture.

    Returns:
        Services: Services container for testing.
    """
    return Services(test_config, allocate_id=allocate_id, clock=lambda: TODAY)
