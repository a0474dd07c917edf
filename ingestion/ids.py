"""Identifier allocators for imported records.

An allocator is any zero-argument callable returning a new string id. Ids only
need to be unique within one import call.
"""

import itertools
import re
import uuid
from typing import Callable, Set

IdAllocator = Callable[[], str]


def uuid_allocator() -> str:
    """Allocate a random UUID4 hex id."""
    return uuid.uuid4().hex


class CounterAllocator:
    """Monotonic allocator producing ``<prefix>1``, ``<prefix>2``, ..."""

    def __init__(self, prefix: str = "", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}{next(self._counter)}"


def get_allocator(scheme: str) -> IdAllocator:
    """Build an allocator for a configured id scheme ("uuid" or "counter")."""
    if scheme == "uuid":
        return uuid_allocator
    if scheme == "counter":
        return CounterAllocator()
    raise ValueError(f"Unknown id scheme: {scheme}")


_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Lowercase ``name`` and join its alphanumeric runs with dashes."""
    return _SLUG_STRIP.sub("-", name.lower()).strip("-")


def unique_slug(name: str, used: Set[str], fallback: IdAllocator) -> str:
    """Slugify ``name`` and suffix it until it is not in ``used``.

    Names with no alphanumeric characters get an id from ``fallback``.
    The returned slug is added to ``used``.
    """
    base = slugify(name) or fallback()
    slug = base
    suffix = 2
    while slug in used:
        slug = f"{base}-{suffix}"
        suffix += 1
    used.add(slug)
    return slug
