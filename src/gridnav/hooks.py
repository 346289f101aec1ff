"""Element capability interface and hook dispatch.

Elements opt into lifecycle notifications by exposing any subset of four
zero-argument callables.  The set an element supports is resolved once, when
it is registered, into an ``ElementHooks`` record; dispatch then only looks
at that record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal, Protocol

logger = logging.getLogger(__name__)

HookName = Literal["on_activate", "on_deactivate", "on_enter", "on_leave"]

HOOK_NAMES: tuple[HookName, ...] = (
    "on_activate",
    "on_deactivate",
    "on_enter",
    "on_leave",
)


class NavigableElement(Protocol):
    """An element that can be addressed by the navigator.

    All four hooks are optional; the protocol only documents their names
    and signatures.  An element with none of them is still navigable.

    * ``on_activate()`` -- the cursor moved onto the element.
    * ``on_deactivate()`` -- the cursor moved off the element.
    * ``on_enter()`` -- the element was selected (Enter).
    * ``on_leave()`` -- the element was deselected (Back / Esc).
    """


@dataclass(frozen=True)
class ElementHooks:
    """The hooks an element actually provides, ``None`` where absent."""

    on_activate: Callable[[], object] | None = None
    on_deactivate: Callable[[], object] | None = None
    on_enter: Callable[[], object] | None = None
    on_leave: Callable[[], object] | None = None

    def get(self, name: HookName) -> Callable[[], object] | None:
        return getattr(self, name)

    @property
    def names(self) -> tuple[HookName, ...]:
        """Names of the hooks that are present."""
        return tuple(name for name in HOOK_NAMES if self.get(name) is not None)


NO_HOOKS = ElementHooks()


def resolve_hooks(handle: object) -> ElementHooks:
    """Probe *handle* for callable hook attributes.

    Non-callable attributes with a hook name are ignored, matching the
    "absent hooks are skipped" contract.
    """
    found: dict[str, Callable[[], object]] = {}
    for name in HOOK_NAMES:
        candidate = getattr(handle, name, None)
        if callable(candidate):
            found[name] = candidate
    if not found:
        return NO_HOOKS
    return ElementHooks(**found)


def call_hook(hooks: ElementHooks | None, name: HookName) -> object:
    """Invoke hook *name* from *hooks* if present and return its result.

    Returns ``None`` when there is no element (``hooks is None``) or the
    element does not provide the hook.  Exceptions raised by the hook
    propagate to the caller.
    """
    if hooks is None:
        return None
    hook = hooks.get(name)
    if hook is None:
        return None
    logger.debug("Calling %s", name)
    return hook()
