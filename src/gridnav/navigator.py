"""Spatial navigator: movement engine, action handlers and dispatch.

A ``Navigator`` owns one position registry, any number of navigation
contexts, and an immutable ``NavigatorConfig``.  Directional actions move the
active context's cursor between registered cells; Enter/Back/Esc notify the
element under the cursor.

Movement follows two policies applied on every row change:

* **axis reset** -- the column is forced to 0;
* **axis memory** (``cache``) -- the column last used on the target row, if
  any, is restored.  It runs after axis reset and therefore wins.

A move only commits when an element is registered at the final target.
State is committed before any hook runs, so hooks that call back into the
navigator always observe the new position.
"""

from __future__ import annotations

import logging
from typing import Callable, Hashable

from gridnav.config import NavigatorConfig
from gridnav.context import DEFAULT_CONTEXT_ID, ContextManager, NavigationContext
from gridnav.hooks import call_hook
from gridnav.registry import PositionRegistry, RegistrationEntry
from gridnav.types import Action, Position, PositionLike, normalize_action

logger = logging.getLogger(__name__)


class Navigator:
    """Keyboard navigator over a sparse grid of registered elements."""

    def __init__(self, config: NavigatorConfig | None = None) -> None:
        self._config = config or NavigatorConfig()
        self._registry = PositionRegistry(self._config.duplicate_policy)
        self._contexts = ContextManager(DEFAULT_CONTEXT_ID)
        self._handlers: dict[Action, Callable[[], None]] = {
            "up": self.handle_up,
            "down": self.handle_down,
            "left": self.handle_left,
            "right": self.handle_right,
            "enter": self.handle_enter,
            "back": self.handle_back,
            "esc": self.handle_esc,
        }

    def __repr__(self) -> str:
        return (
            f"Navigator(position={tuple(self.get_current_position())}, "
            f"context={self.active_context_id!r}, elements={len(self._registry)})"
        )

    # -- configuration / collaborators -------------------------------------

    @property
    def config(self) -> NavigatorConfig:
        return self._config

    @property
    def registry(self) -> PositionRegistry:
        return self._registry

    @property
    def contexts(self) -> ContextManager:
        return self._contexts

    @property
    def cache_enabled(self) -> bool:
        return self._config.cache

    @property
    def reset_axis_enabled(self) -> bool:
        return self._config.reset_axis

    # -- registration -------------------------------------------------------

    def register(self, position: PositionLike, handle: object) -> RegistrationEntry:
        """Make *handle* addressable at *position*."""
        return self._registry.register(position, handle)

    def unregister(self, handle: object) -> int:
        """Remove every registration of *handle*."""
        return self._registry.unregister(handle)

    # -- contexts -----------------------------------------------------------

    @property
    def active_context_id(self) -> Hashable:
        return self._contexts.active_id

    @property
    def active_context(self) -> NavigationContext:
        return self._contexts.active

    def set_active_context(self, context_id: Hashable = DEFAULT_CONTEXT_ID) -> None:
        """Switch to *context_id*, creating it at ``(0, 0)`` if unseen."""
        if context_id != self._contexts.active_id:
            logger.debug(
                "Switching context %r -> %r", self._contexts.active_id, context_id
            )
        self._contexts.set_active(context_id)

    # -- queries ------------------------------------------------------------

    def get_current_position(self) -> Position:
        return self._contexts.active.position

    def get_element_at(self, position: PositionLike) -> object | None:
        return self._registry.lookup(position)

    def element_exists(self, position: PositionLike) -> bool:
        return self._registry.exists(position)

    def get_current_element(self) -> object | None:
        return self._registry.lookup(self.get_current_position())

    # -- movement engine ----------------------------------------------------

    def attempt_move(self, target_x: int, target_y: int, restoring: bool = False) -> bool:
        """Move the active cursor to ``(target_x, target_y)`` if occupied.

        ``restoring`` marks a programmatic reposition: the column being left
        is not recorded in the row memory.  Returns ``True`` when the move
        was committed.
        """
        context = self._contexts.active
        current = context.position
        recorded_row: int | None = None
        previous_memory: int | None = None

        if target_y != current.y:
            if not restoring and self._config.cache:
                recorded_row = current.y
                previous_memory = context.get_cached_column(current.y)
                context.cache_column(current.y, current.x)

            if self._config.reset_axis:
                target_x = 0

            if self._config.cache:
                cached = context.get_cached_column(target_y)
                if cached is not None:
                    target_x = cached

        target = Position(target_x, target_y)
        new_hooks = self._registry.hooks_at(target)
        if new_hooks is None:
            if recorded_row is not None and not self._config.cache_rejected_moves:
                if previous_memory is None:
                    context.forget_column(recorded_row)
                else:
                    context.cache_column(recorded_row, previous_memory)
            logger.debug(
                "Rejected move %s -> %s: no element", tuple(current), tuple(target)
            )
            return False

        old_hooks = self._registry.hooks_at(current)
        context.set_position(target)
        logger.debug("Moved %s -> %s", tuple(current), tuple(target))

        call_hook(old_hooks, "on_deactivate")
        call_hook(new_hooks, "on_activate")
        return True

    def update_position(self, x: int, y: int) -> bool:
        """Jump directly to ``(x, y)`` without recording row memory."""
        return self.attempt_move(x, y, restoring=True)

    def restore_context_position(self) -> bool:
        """Re-apply the active context's stored position.

        Useful after ``set_active_context`` so the element under the
        restored cursor is activated again.
        """
        x, y = self.get_current_position()
        return self.attempt_move(x, y, restoring=True)

    def clear_cache(self) -> bool:
        """Forget the active context's row memory and re-evaluate the row."""
        context = self._contexts.active
        context.clear_cache()
        return self.attempt_move(0, context.position.y, restoring=True)

    # -- directional handlers -----------------------------------------------

    def handle_up(self) -> None:
        x, y = self.get_current_position()
        if y > 0:
            self.attempt_move(x, y - 1)

    def handle_down(self) -> None:
        x, y = self.get_current_position()
        if y + 1 <= self._registry.axis_extent("y"):
            self.attempt_move(x, y + 1)

    def handle_left(self) -> None:
        x, y = self.get_current_position()
        if x > 0:
            self.attempt_move(x - 1, y)

    def handle_right(self) -> None:
        x, y = self.get_current_position()
        if x + 1 <= self._registry.axis_extent("x"):
            self.attempt_move(x + 1, y)

    # -- selection handlers -------------------------------------------------

    def handle_enter(self) -> None:
        call_hook(self._registry.hooks_at(self.get_current_position()), "on_enter")

    def handle_back(self) -> None:
        call_hook(self._registry.hooks_at(self.get_current_position()), "on_leave")

    # Esc and Back are synonyms at this layer.
    handle_esc = handle_back

    # -- dispatch -----------------------------------------------------------

    def dispatch(self, action: object) -> bool:
        """Run the handler for *action*.

        Returns ``False`` (and changes nothing) for unrecognised tokens.
        """
        token = normalize_action(action)
        if token is None:
            logger.debug("Ignoring unknown action %r", action)
            return False
        self._handlers[token]()
        return True


def create_navigator(
    *,
    cache: bool = False,
    reset_axis: bool = True,
    duplicate_policy: str = "first-wins",
    cache_rejected_moves: bool = True,
) -> Navigator:
    """Construct a ``Navigator`` from keyword options."""
    return Navigator(
        NavigatorConfig(
            cache=cache,
            reset_axis=reset_axis,
            duplicate_policy=duplicate_policy,  # type: ignore[arg-type]
            cache_rejected_moves=cache_rejected_moves,
        )
    )
