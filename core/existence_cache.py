"""
Existence cache: in-memory membership check over known content hashes.

Only used to skip redundant work, never as the source of truth. It is
loaded from the content store at startup and may trail the store until
the next upload runs.
"""

import threading
from typing import Iterable, Tuple


class ExistenceCache:
    """Ordered, duplicate-free collection of content identifiers."""

    def __init__(self, ids: Iterable[str] = ()):
        self._lock = threading.RLock()
        self._order = []
        self._members = set()
        self.load(ids)

    def load(self, ids: Iterable[str]) -> int:
        """Replace the cache contents with ids. Returns the resulting size."""
        with self._lock:
            self._order.clear()
            self._members.clear()
            for content_id in ids:
                self._insert(content_id)
            return len(self._order)

    def contains(self, content_id: str) -> bool:
        with self._lock:
            return content_id in self._members

    def add(self, content_id: str) -> bool:
        """
        Insert content_id if missing.

        Returns:
            True if the id was inserted, False if it was already known.
        """
        if not content_id:
            raise ValueError("Content identifier cannot be empty")
        with self._lock:
            return self._insert(content_id)

    def snapshot(self) -> Tuple[str, ...]:
        """Copy of the ids in insertion order."""
        with self._lock:
            return tuple(self._order)

    def _insert(self, content_id: str) -> bool:
        # Caller holds the lock
        if content_id in self._members:
            return False
        self._members.add(content_id)
        self._order.append(content_id)
        return True

    def __contains__(self, content_id) -> bool:
        return self.contains(content_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._order)
