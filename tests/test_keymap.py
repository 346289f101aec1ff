"""Tests for gridnav.keymap -- key to navigation action bindings."""

from __future__ import annotations

import pytest

from gridnav.keymap import (
    DEFAULT_NAVIGATION_KEYBINDINGS,
    KEY_CODE_ACTIONS,
    NavigationKeybindingsManager,
    action_for_key_code,
)
from gridnav.types import ACTIONS


class TestKeyCodes:
    @pytest.mark.parametrize(
        "code,action",
        [(8, "back"), (13, "enter"), (27, "esc"), (37, "left"), (38, "up"), (39, "right"), (40, "down")],
    )
    def test_mapped_codes(self, code, action):
        assert action_for_key_code(code) == action

    def test_unmapped_code(self):
        assert action_for_key_code(65) is None
        assert action_for_key_code(0) is None

    def test_table_covers_every_action(self):
        assert set(KEY_CODE_ACTIONS.values()) == set(ACTIONS)


class TestDefaults:
    def test_every_action_has_a_default(self):
        assert set(DEFAULT_NAVIGATION_KEYBINDINGS) == set(ACTIONS)

    @pytest.mark.parametrize(
        "data,action",
        [
            ("\x1b[A", "up"),
            ("\x1b[B", "down"),
            ("\x1b[D", "left"),
            ("\x1b[C", "right"),
            ("\r", "enter"),
            ("\x7f", "back"),
            ("\x1b", "esc"),
        ],
    )
    def test_raw_input(self, data, action):
        assert NavigationKeybindingsManager().action_for(data) == action

    def test_unbound_input(self):
        mgr = NavigationKeybindingsManager()
        assert mgr.action_for("q") is None
        assert mgr.action_for("") is None

    def test_matches(self):
        mgr = NavigationKeybindingsManager()
        assert mgr.matches("\x7f", "back")
        assert not mgr.matches("\x7f", "esc")
        assert not mgr.matches("", "up")


class TestOverrides:
    def test_override_replaces_defaults(self):
        mgr = NavigationKeybindingsManager({"up": "k"})
        assert mgr.get_keys("up") == ["k"]
        assert mgr.action_for("k") == "up"
        assert mgr.action_for("\x1b[A") is None

    def test_multiple_keys(self):
        mgr = NavigationKeybindingsManager({"back": ["backspace", "h"]})
        assert mgr.action_for("h") == "back"
        assert mgr.action_for("\x7f") == "back"

    def test_action_names_are_case_insensitive(self):
        mgr = NavigationKeybindingsManager({"Down": "j"})
        assert mgr.action_for("j") == "down"

    def test_key_aliases(self):
        mgr = NavigationKeybindingsManager({"esc": "esc", "up": "ArrowUp"})
        assert mgr.get_keys("esc") == ["escape"]
        assert mgr.action_for("\x1b") == "esc"
        assert mgr.action_for("\x1b[A") == "up"

    def test_key_names_are_case_insensitive(self):
        mgr = NavigationKeybindingsManager(
            {"enter": "Enter", "back": ["Backspace", "Escape"], "up": "Up", "down": "PAGEDOWN"}
        )
        assert mgr.action_for("\r") == "enter"
        assert mgr.action_for("\x7f") == "back"
        assert mgr.action_for("\x1b") == "back"
        assert mgr.action_for("\x1b[A") == "up"
        assert mgr.action_for("\x1b[6~") == "down"
        assert mgr.get_keys("down") == ["pageDown"]
        assert mgr.matches("\r", "enter")

    def test_modified_key_names(self):
        mgr = NavigationKeybindingsManager({"up": "Ctrl+PageUp"})
        assert mgr.get_keys("up") == ["ctrl+pageUp"]
        assert mgr.action_for("\x1b[5;5~") == "up"

    def test_letter_bindings_ignore_shift_case(self):
        mgr = NavigationKeybindingsManager({"down": "J"})
        assert mgr.action_for("j") == "down"
        assert mgr.action_for("J") == "down"

    def test_unknown_action_raises(self):
        with pytest.raises(ValueError):
            NavigationKeybindingsManager({"jump": "j"})

    def test_conflict_first_action_wins(self):
        mgr = NavigationKeybindingsManager({"back": "enter"})
        assert mgr.action_for("\r") == "enter"

    def test_action_for_key(self):
        mgr = NavigationKeybindingsManager()
        assert mgr.action_for_key("up") == "up"
        assert mgr.action_for_key("arrowleft") == "left"
        assert mgr.action_for_key("x") is None

    def test_set_config_rebuilds(self):
        mgr = NavigationKeybindingsManager({"up": "k"})
        mgr.set_config({"left": "h"})
        assert mgr.get_keys("up") == ["up"]
        assert mgr.get_keys("left") == ["h"]

    def test_get_keys_returns_copy(self):
        mgr = NavigationKeybindingsManager()
        mgr.get_keys("up").append("w")
        assert mgr.get_keys("up") == ["up"]
