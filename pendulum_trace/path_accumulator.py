from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from pendulum_trace import config
from pendulum_trace.geometry import Polygon, Primitive, primitive_outline

logger = logging.getLogger(__name__)

Outline = Tuple[Polygon, ...]


@dataclass(frozen=True)
class IdentifiablePath:
    """A finalized trace batch. Renderers may cache it by ``id``."""

    outline: Outline
    id: str = field(default_factory=lambda: uuid.uuid4().hex)


@dataclass
class PathAccumulator:
    """Growing trace geometry: active path, flushed history, pending flush."""

    flush_threshold: int = config.FLUSH_THRESHOLD
    active_path: List[Polygon] = field(default_factory=list)
    point_count: int = 0
    _history: List[IdentifiablePath] = field(default_factory=list, repr=False)
    _pending_flush: Optional[IdentifiablePath] = field(default=None, repr=False)

    @property
    def history(self) -> Tuple[IdentifiablePath, ...]:
        return tuple(self._history)

    def append(self, primitive: Primitive, canvas_size: Optional[Tuple[float, float]] = None) -> None:
        """Add the outline of ``primitive`` to the active path."""
        if canvas_size is None:
            # unbounded: a canvas large enough that clipping never applies
            canvas_size = (float("inf"), float("inf"))
        self.active_path.append(primitive_outline(primitive, canvas_size))
        self.point_count += 1

    def maybe_flush(self) -> Optional[IdentifiablePath]:
        """Freeze the active path into history once it exceeds the threshold.

        Called once per frame. Creates at most one history entry per call and
        returns it, or None when nothing was flushed.
        """
        if self.point_count <= self.flush_threshold:
            return None
        entry = IdentifiablePath(outline=tuple(self.active_path))
        self._history.append(entry)
        self._pending_flush = entry
        logger.debug("Flushed %d primitives into path %s (history=%d)", self.point_count, entry.id, len(self._history))
        self.active_path = []
        self.point_count = 0
        return entry

    def clear(self) -> None:
        self._history.clear()
        self.active_path = []
        self.point_count = 0
        self._pending_flush = None

    def take_old_paths(self) -> Tuple[Tuple[str, Outline], ...]:
        """Snapshot of history as (id, outline) pairs in insertion order."""
        return tuple((p.id, p.outline) for p in self._history)

    def take_pending_flush(self) -> Optional[IdentifiablePath]:
        """Return the most recent flush once; None until the next flush."""
        entry, self._pending_flush = self._pending_flush, None
        return entry

    def active_outline(self) -> Outline:
        return tuple(self.active_path)
