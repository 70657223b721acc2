"""
Gallery Cache Module

Read-optimized snapshot of the browsable images.

Architecture:
  - rebuild() reads the full listing from the authoritative source (the
    content store, never the existence cache) and builds a new immutable
    GalleryView.
  - The new view replaces the previous one with a single reference swap,
    so readers get either the old or the new snapshot, never a half-built one.
  - current() is a plain attribute read and takes no lock.
  - Rebuilds are serialized and read the source while holding the lock, so
    the last rebuild to finish always reflects the latest durable state.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Tuple, Any

from utils.logging_config import get_logger

logger = get_logger('GalleryCache')


@dataclass(frozen=True)
class GalleryView:
    """Immutable listing of stored images, newest first."""
    entries: Tuple[Any, ...] = ()
    built_at: float = field(default_factory=time.time)
    generation: int = 0

    @property
    def total(self) -> int:
        return len(self.entries)

    def ids(self) -> Tuple[str, ...]:
        return tuple(entry.content_id for entry in self.entries)

    def __contains__(self, content_id) -> bool:
        return any(entry.content_id == content_id for entry in self.entries)


class GalleryCache:
    """Holds the latest GalleryView and rebuilds it from a listing source."""

    def __init__(self, source: Callable[[], Iterable[Any]]):
        self._source = source
        self._rebuild_lock = threading.Lock()
        self._generation = 0
        self._view = GalleryView()

    def rebuild(self) -> GalleryView:
        """Build a fresh snapshot from the source and swap it in."""
        with self._rebuild_lock:
            started = time.perf_counter()
            entries = tuple(self._source())
            self._generation += 1
            view = GalleryView(entries=entries, generation=self._generation)
            self._view = view
            logger.debug(
                f"Rebuilt gallery generation {view.generation}: {view.total} images "
                f"in {(time.perf_counter() - started) * 1000:.1f}ms"
            )
            return view

    def current(self) -> GalleryView:
        return self._view

    def page(self, number: int = 1, per_page: int = 100) -> dict:
        """
        Slice the current snapshot for a browse request.

        Args:
            number: 1-based page number
            per_page: Page size

        Returns:
            Dict with images, page, total_pages, total_results and has_more
        """
        if per_page < 1:
            raise ValueError("per_page must be positive")
        if number < 1:
            raise ValueError("page must be positive")

        view = self._view
        total_results = view.total
        total_pages = (total_results + per_page - 1) // per_page
        start_idx = (number - 1) * per_page
        end_idx = start_idx + per_page

        return {
            "images": [entry.to_dict() for entry in view.entries[start_idx:end_idx]],
            "page": number,
            "total_pages": total_pages,
            "total_results": total_results,
            "has_more": number < total_pages,
            "generation": view.generation,
        }
