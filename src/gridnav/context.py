"""Navigation contexts and the manager that tracks the active one.

A context is an independent cursor over the shared registry: its own current
position and its own per-row column memory.  Contexts are created on first
use and live as long as their manager.
"""

from __future__ import annotations

import logging
from typing import Hashable, Iterator

from gridnav.types import ORIGIN, Position

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_ID = 0


class NavigationContext:
    """Cursor position plus row -> column memory."""

    def __init__(self, position: Position = ORIGIN) -> None:
        self._position = position
        self._cached_columns: dict[int, int] = {}

    def __repr__(self) -> str:
        return (
            f"NavigationContext(position={tuple(self._position)}, "
            f"cached_columns={self._cached_columns})"
        )

    @property
    def position(self) -> Position:
        return self._position

    def get_position(self) -> Position:
        return self._position

    def set_position(self, position: Position) -> None:
        self._position = Position(*position)

    def cache_column(self, row: int, column: int) -> None:
        self._cached_columns[row] = column

    def get_cached_column(self, row: int) -> int | None:
        return self._cached_columns.get(row)

    def forget_column(self, row: int) -> None:
        self._cached_columns.pop(row, None)

    @property
    def cached_columns(self) -> dict[int, int]:
        """A copy of the recorded row -> column memory."""
        return dict(self._cached_columns)

    def clear_cache(self) -> None:
        self._cached_columns.clear()


class ContextManager:
    """Owns every context and remembers which one is active."""

    def __init__(self, initial_id: Hashable = DEFAULT_CONTEXT_ID) -> None:
        self._contexts: dict[Hashable, NavigationContext] = {}
        self._active_id: Hashable = initial_id
        self.set_active(initial_id)

    def __contains__(self, context_id: object) -> bool:
        return context_id in self._contexts

    def __len__(self) -> int:
        return len(self._contexts)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(list(self._contexts))

    @property
    def active_id(self) -> Hashable:
        return self._active_id

    @property
    def active(self) -> NavigationContext:
        return self._contexts[self._active_id]

    def get_active(self) -> NavigationContext:
        return self.active

    def get(self, context_id: Hashable) -> NavigationContext | None:
        return self._contexts.get(context_id)

    def ids(self) -> list[Hashable]:
        return list(self._contexts)

    def set_active(self, context_id: Hashable) -> NavigationContext:
        """Make *context_id* active, creating it at the origin if unseen."""
        context = self._contexts.get(context_id)
        if context is None:
            context = NavigationContext()
            self._contexts[context_id] = context
            logger.debug("Created navigation context %r", context_id)
        self._active_id = context_id
        return context
