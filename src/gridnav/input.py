"""Wire a keyboard input source to a navigator."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Protocol

from gridnav.keymap import NavigationKeybindingsManager, action_for_key_code
from gridnav.keys import is_key_release
from gridnav.types import Action

if TYPE_CHECKING:
    from gridnav.navigator import Navigator

logger = logging.getLogger(__name__)


class InputSource(Protocol):
    """Anything that delivers raw key input through a ``start`` callback."""

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None: ...


class KeyboardWatcher:
    """Translates raw key input into actions and dispatches them.

    Input with no binding is passed to ``on_unhandled`` when set, so an
    application can layer its own keys (quit, context switching) on top.
    """

    def __init__(
        self,
        navigator: Navigator,
        keybindings: NavigationKeybindingsManager | None = None,
    ) -> None:
        self.navigator = navigator
        self.keybindings = keybindings or NavigationKeybindingsManager()
        self.on_unhandled: Callable[[str], None] | None = None

    def handle_input(self, data: str) -> Action | None:
        """Dispatch the action bound to *data*; returns that action."""
        if is_key_release(data):
            return None
        action = self.keybindings.action_for(data)
        if action is None:
            logger.debug("No action bound to input %r", data)
            if self.on_unhandled is not None:
                self.on_unhandled(data)
            return None
        self.navigator.dispatch(action)
        return action

    def handle_key_code(self, key_code: int) -> Action | None:
        """Dispatch the action for a DOM-style key code."""
        action = action_for_key_code(key_code)
        if action is None:
            return None
        self.navigator.dispatch(action)
        return action


def watch_keyboard(
    source: object,
    navigator: Navigator | None,
    keybindings: NavigationKeybindingsManager | None = None,
    on_resize: Callable[[], None] | None = None,
) -> KeyboardWatcher | None:
    """Subscribe *navigator* to key input from *source*.

    Does nothing and returns ``None`` unless *source* exposes a callable
    ``start(on_input, on_resize)`` and a navigator is given.
    """
    if source is None or navigator is None:
        return None
    start = getattr(source, "start", None)
    if not callable(start):
        return None

    watcher = KeyboardWatcher(navigator, keybindings)
    start(watcher.handle_input, on_resize or (lambda: None))
    return watcher
