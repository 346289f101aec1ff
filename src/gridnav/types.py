"""Shared value types: grid positions and navigation action tokens."""

from __future__ import annotations

from typing import Literal, NamedTuple, Sequence, Union

# ---------------------------------------------------------------------------
# Positions
# ---------------------------------------------------------------------------

Axis = Literal["x", "y"]


class Position(NamedTuple):
    """A caller-assigned grid address. ``x`` is the column, ``y`` the row."""

    x: int
    y: int

    @classmethod
    def of(cls, value: PositionLike) -> Position:
        """Coerce a ``Position`` or a two-item sequence into a ``Position``.

        Raises ``ValueError`` for anything that is not a pair of
        non-negative integers.
        """
        if isinstance(value, Position):
            pos = value
        else:
            try:
                x, y = value
            except (TypeError, ValueError):
                raise ValueError(
                    f"position must be an (x, y) pair, got {value!r}"
                ) from None
            pos = cls(x, y)

        for coord in pos:
            # bool is an int subclass but never a meaningful coordinate
            if isinstance(coord, bool) or not isinstance(coord, int):
                raise ValueError(f"coordinates must be integers, got {pos!r}")
            if coord < 0:
                raise ValueError(f"coordinates must be >= 0, got {pos!r}")
        return pos


PositionLike = Union[Position, Sequence[int]]

ORIGIN = Position(0, 0)

# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

Action = Literal["up", "down", "left", "right", "enter", "back", "esc"]


class Actions:
    """Named action token constants."""

    up: Action = "up"
    down: Action = "down"
    left: Action = "left"
    right: Action = "right"
    enter: Action = "enter"
    back: Action = "back"
    esc: Action = "esc"


ACTIONS: tuple[Action, ...] = (
    "up",
    "down",
    "left",
    "right",
    "enter",
    "back",
    "esc",
)


def normalize_action(value: object) -> Action | None:
    """Return the canonical action token for *value*, or ``None``.

    Matching is case-insensitive so ``"Up"`` and ``"UP"`` both resolve.
    """
    if not isinstance(value, str):
        return None
    lowered = value.strip().lower()
    for action in ACTIONS:
        if action == lowered:
            return action
    return None
