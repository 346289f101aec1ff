"""Key bindings: translate key input into navigation actions."""

from __future__ import annotations

from gridnav.keys import KeyId, parse_key
from gridnav.types import ACTIONS, Action, normalize_action

NavigationKeybindingsConfig = dict[Action, KeyId | list[KeyId]]

DEFAULT_NAVIGATION_KEYBINDINGS: dict[Action, KeyId | list[KeyId]] = {
    "up": "up",
    "down": "down",
    "left": "left",
    "right": "right",
    "enter": "enter",
    "back": "backspace",
    "esc": "escape",
}

# DOM-style ``keyCode`` values.
KEY_CODE_ACTIONS: dict[int, Action] = {
    8: "back",  # Backspace
    13: "enter",
    27: "esc",  # Escape
    37: "left",
    38: "up",
    39: "right",
    40: "down",
}

_KEY_ALIASES: dict[str, KeyId] = {
    "esc": "escape",
    "return": "enter",
    "arrowup": "up",
    "arrowdown": "down",
    "arrowleft": "left",
    "arrowright": "right",
}


def action_for_key_code(key_code: int) -> Action | None:
    """Map a DOM-style key code to an action; unmapped codes give ``None``."""
    return KEY_CODE_ACTIONS.get(key_code)


# Key ids whose canonical form is not all lowercase.
_MIXED_CASE_KEYS: dict[str, KeyId] = {
    "pageup": "pageUp",
    "pagedown": "pageDown",
}


def _normalize_key(key: KeyId) -> KeyId:
    """Canonical id for *key*: ``"Enter"`` -> ``"enter"``, ``"Ctrl+PageUp"`` -> ``"ctrl+pageUp"``.

    Letters fold to lowercase, so a binding of ``"k"`` also fires on ``"K"``.
    """
    modifiers, plus, name = key.lower().rpartition("+")
    if not name:
        return key.lower()
    name = _KEY_ALIASES.get(name, name)
    return modifiers + plus + _MIXED_CASE_KEYS.get(name, name)


class NavigationKeybindingsManager:
    """Manages the keys bound to each navigation action.

    Overrides replace the default keys of an action entirely.  When a key is
    bound to several actions the first in ``ACTIONS`` order wins.
    """

    def __init__(
        self, config: NavigationKeybindingsConfig | dict[str, KeyId | list[KeyId]] | None = None
    ) -> None:
        self._action_to_keys: dict[Action, list[KeyId]] = {}
        self._key_to_action: dict[KeyId, Action] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: dict[str, KeyId | list[KeyId]]) -> None:
        self._action_to_keys.clear()
        self._key_to_action.clear()

        # Start with defaults
        for action, keys in DEFAULT_NAVIGATION_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = [_normalize_key(k) for k in key_array]

        # Override with user config
        for name, keys in config.items():
            action = normalize_action(name)
            if action is None:
                raise ValueError(f"unknown navigation action {name!r} in keybindings")
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = [_normalize_key(k) for k in key_array]

        for action in ACTIONS:
            for key in self._action_to_keys.get(action, []):
                self._key_to_action.setdefault(key, action)

    def action_for_key(self, key: KeyId) -> Action | None:
        """Return the action bound to a parsed key id."""
        return self._key_to_action.get(_normalize_key(key))

    def action_for(self, data: str) -> Action | None:
        """Return the action bound to raw terminal input *data*."""
        key = parse_key(data)
        if key is None:
            return None
        return self._key_to_action.get(_normalize_key(key))

    def matches(self, data: str, action: Action) -> bool:
        """Check if input matches a specific action."""
        key = parse_key(data)
        if key is None:
            return False
        return _normalize_key(key) in self._action_to_keys.get(action, [])

    def get_keys(self, action: Action) -> list[KeyId]:
        """Get keys bound to an action."""
        return list(self._action_to_keys.get(action, []))

    def set_config(self, config: NavigationKeybindingsConfig) -> None:
        """Update configuration."""
        self._build_maps(config)
