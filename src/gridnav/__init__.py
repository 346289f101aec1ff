"""gridnav: keyboard-driven spatial navigation over a sparse grid."""

# Configuration
from gridnav.config import (
    NavigatorConfig,
    Settings,
    load_settings,
)

# Contexts
from gridnav.context import ContextManager, NavigationContext

# Hooks
from gridnav.hooks import ElementHooks, NavigableElement, resolve_hooks

# Keyboard input
from gridnav.input import KeyboardWatcher, watch_keyboard
from gridnav.keymap import (
    DEFAULT_NAVIGATION_KEYBINDINGS,
    KEY_CODE_ACTIONS,
    NavigationKeybindingsManager,
    action_for_key_code,
)
from gridnav.keys import Key, KeyId, parse_key

# Navigator
from gridnav.navigator import Navigator, create_navigator

# Registry
from gridnav.registry import (
    DuplicatePolicy,
    PositionOccupiedError,
    PositionRegistry,
    RegistrationEntry,
)

# Types
from gridnav.types import ACTIONS, Action, Actions, Position

__all__ = [
    # Configuration
    "NavigatorConfig",
    "Settings",
    "load_settings",
    # Contexts
    "ContextManager",
    "NavigationContext",
    # Hooks
    "ElementHooks",
    "NavigableElement",
    "resolve_hooks",
    # Keyboard input
    "DEFAULT_NAVIGATION_KEYBINDINGS",
    "KEY_CODE_ACTIONS",
    "Key",
    "KeyId",
    "KeyboardWatcher",
    "NavigationKeybindingsManager",
    "action_for_key_code",
    "parse_key",
    "watch_keyboard",
    # Navigator
    "Navigator",
    "create_navigator",
    # Registry
    "DuplicatePolicy",
    "PositionOccupiedError",
    "PositionRegistry",
    "RegistrationEntry",
    # Types
    "ACTIONS",
    "Action",
    "Actions",
    "Position",
]
