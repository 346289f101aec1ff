"""Position registry: the set of addressable elements keyed by grid position.

Entries are appended in registration order.  Several handles may share a
position under the ``"first-wins"`` policy, in which case only the earliest
one is ever returned by ``lookup``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Literal

from gridnav.hooks import ElementHooks, resolve_hooks
from gridnav.types import Axis, Position, PositionLike

logger = logging.getLogger(__name__)

DuplicatePolicy = Literal["first-wins", "reject"]

DUPLICATE_POLICIES: tuple[DuplicatePolicy, ...] = ("first-wins", "reject")

# Extent of an empty axis: no coordinate c >= 0 satisfies c + 1 <= EMPTY_EXTENT.
EMPTY_EXTENT = -1


class PositionOccupiedError(ValueError):
    """Raised by ``register`` under the ``"reject"`` policy."""

    def __init__(self, position: Position, existing: object) -> None:
        super().__init__(f"position {tuple(position)} is already occupied")
        self.position = position
        self.existing = existing


@dataclass(frozen=True)
class RegistrationEntry:
    position: Position
    handle: object
    hooks: ElementHooks


class PositionRegistry:
    """Ordered collection of ``(position, handle)`` registrations."""

    def __init__(self, duplicate_policy: DuplicatePolicy = "first-wins") -> None:
        if duplicate_policy not in DUPLICATE_POLICIES:
            raise ValueError(
                f"unknown duplicate policy {duplicate_policy!r}, "
                f"expected one of {DUPLICATE_POLICIES}"
            )
        self._duplicate_policy: DuplicatePolicy = duplicate_policy
        self._entries: list[RegistrationEntry] = []

    @property
    def duplicate_policy(self) -> DuplicatePolicy:
        return self._duplicate_policy

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RegistrationEntry]:
        return iter(list(self._entries))

    def __contains__(self, position: object) -> bool:
        try:
            return self.exists(position)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return False

    # -- mutation -----------------------------------------------------------

    def register(self, position: PositionLike, handle: object) -> RegistrationEntry:
        """Add *handle* at *position* and return the new entry."""
        pos = Position.of(position)
        existing = self._find(pos)
        if existing is not None:
            if self._duplicate_policy == "reject":
                raise PositionOccupiedError(pos, existing.handle)
            logger.debug(
                "Position %s already occupied; new registration is unreachable",
                tuple(pos),
            )

        entry = RegistrationEntry(position=pos, handle=handle, hooks=resolve_hooks(handle))
        self._entries.append(entry)
        return entry

    def unregister(self, handle: object) -> int:
        """Remove every entry whose handle *is* ``handle``.

        Returns the number of entries removed (0 for an unknown handle).
        """
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.handle is not handle]
        removed = before - len(self._entries)
        if removed == 0:
            logger.debug("unregister: handle %r was not registered", handle)
        return removed

    def clear(self) -> None:
        self._entries.clear()

    # -- queries ------------------------------------------------------------

    def _find(self, position: Position) -> RegistrationEntry | None:
        for entry in self._entries:
            if entry.position == position:
                return entry
        return None

    def entry_at(self, position: PositionLike) -> RegistrationEntry | None:
        x, y = position
        return self._find(Position(x, y))

    def lookup(self, position: PositionLike) -> object | None:
        """Return the first handle registered at *position*, or ``None``."""
        entry = self.entry_at(position)
        return entry.handle if entry is not None else None

    def hooks_at(self, position: PositionLike) -> ElementHooks | None:
        entry = self.entry_at(position)
        return entry.hooks if entry is not None else None

    def exists(self, position: PositionLike) -> bool:
        return self.entry_at(position) is not None

    def positions_of(self, handle: object) -> list[Position]:
        return [e.position for e in self._entries if e.handle is handle]

    def axis_extent(self, axis: Axis) -> int:
        """Highest registered coordinate along *axis*.

        Returns ``EMPTY_EXTENT`` when nothing is registered.
        """
        if axis == "x":
            return max((e.position.x for e in self._entries), default=EMPTY_EXTENT)
        if axis == "y":
            return max((e.position.y for e in self._entries), default=EMPTY_EXTENT)
        raise ValueError(f"unknown axis {axis!r}, expected 'x' or 'y'")
