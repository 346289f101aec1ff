"""Decode raw terminal input into key ids.

A key id is a plain string such as ``"up"``, ``"enter"`` or ``"ctrl+c"``;
modifiers are prefixed in ``ctrl+shift+alt+`` order.  Three encodings are
understood:

* legacy CSI and SS3 sequences (``ESC [ A``, ``ESC O A``, ``ESC [ 3 ~``),
  optionally carrying a ``;<modifier>`` parameter,
* kitty keyboard protocol ``CSI <codepoint> ; <modifier>:<event> u``,
  which also reports key repeat and release,
* single bytes: control characters, printable text and ``ESC``-prefixed
  alt combinations.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

KeyId = str

KeyEvent = Literal["press", "repeat", "release"]

ESC = "\x1b"


class Key:
    """Named key constants and modifier combinators."""

    up = "up"
    down = "down"
    left = "left"
    right = "right"
    enter = "enter"
    escape = "escape"
    backspace = "backspace"
    tab = "tab"
    space = "space"

    @staticmethod
    def ctrl(key: KeyId) -> KeyId:
        return f"ctrl+{key}"

    @staticmethod
    def shift(key: KeyId) -> KeyId:
        return f"shift+{key}"

    @staticmethod
    def alt(key: KeyId) -> KeyId:
        return f"alt+{key}"


# Modifier bits, after subtracting 1 from the encoded parameter.
MOD_SHIFT = 1
MOD_ALT = 2
MOD_CTRL = 4
# caps lock and num lock never change the key id
_LOCK_BITS = 64 | 128

_EVENTS: dict[int, KeyEvent] = {1: "press", 2: "repeat", 3: "release"}

# Final byte of ``CSI [1;mod] X`` and ``SS3 X`` sequences.
_LETTER_KEYS: dict[str, KeyId] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

# Number of ``CSI <n> [;mod] ~`` sequences.
_TILDE_KEYS: dict[int, KeyId] = {
    1: "home",
    3: "delete",
    4: "end",
    5: "pageUp",
    6: "pageDown",
}

# kitty codepoints with names; everything else printable maps to itself.
_CODEPOINT_KEYS: dict[int, KeyId] = {
    9: "tab",
    13: "enter",
    27: "escape",
    32: "space",
    127: "backspace",
    57414: "enter",  # keypad enter
}

_BYTE_KEYS: dict[str, KeyId] = {
    ESC: "escape",
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    " ": "space",
    "\x7f": "backspace",
    "\x08": "backspace",
}

_CSI_RE = re.compile(r"\x1b\[(?P<params>[0-9;:]*)(?P<final>[A-Za-z~])")
_SS3_RE = re.compile(r"\x1bO(?P<final>[ABCDHF])")


@dataclass(frozen=True)
class KeyPress:
    """A decoded key: its id (modifiers included) and event type."""

    key: KeyId
    event: KeyEvent = "press"


def _modifier_prefix(modifier: int) -> str:
    bits = (modifier - 1) & ~_LOCK_BITS
    prefix = ""
    if bits & MOD_CTRL:
        prefix += "ctrl+"
    if bits & MOD_SHIFT:
        prefix += "shift+"
    if bits & MOD_ALT:
        prefix += "alt+"
    return prefix


def _split_modifier(field: str) -> tuple[int, KeyEvent]:
    """Parse a ``<modifier>[:<event>]`` parameter."""
    if not field:
        return 1, "press"
    modifier, _, event = field.partition(":")
    return int(modifier or 1), _EVENTS.get(int(event) if event else 1, "press")


def _decode_csi(params: str, final: str) -> KeyPress | None:
    fields = params.split(";") if params else []
    modifier, event = _split_modifier(fields[1] if len(fields) > 1 else "")

    if final == "u":
        if not fields or not fields[0]:
            return None
        # ``<codepoint>:<shifted>:<base layout>``; only the first matters
        codepoint = int(fields[0].split(":")[0])
        name = _CODEPOINT_KEYS.get(codepoint)
        if name is None:
            if codepoint > 0x10FFFF or not chr(codepoint).isprintable():
                return None
            name = chr(codepoint).lower()
    elif final == "~":
        name = _TILDE_KEYS.get(int(fields[0])) if fields and fields[0] else None
    else:
        name = _LETTER_KEYS.get(final)

    if name is None:
        return None
    return KeyPress(_modifier_prefix(modifier) + name, event)


def decode_key(data: str) -> KeyPress | None:
    """Decode one complete key sequence, or return ``None``."""
    if not data:
        return None

    m = _CSI_RE.fullmatch(data)
    if m:
        try:
            return _decode_csi(m["params"], m["final"])
        except ValueError:
            return None

    m = _SS3_RE.fullmatch(data)
    if m:
        return KeyPress(_LETTER_KEYS[m["final"]])

    if data in _BYTE_KEYS:
        return KeyPress(_BYTE_KEYS[data])

    if len(data) == 1:
        code = ord(data)
        if 1 <= code <= 26:
            return KeyPress("ctrl+" + chr(code + ord("a") - 1))
        return KeyPress(data) if data.isprintable() else None

    if len(data) == 2 and data[0] == ESC:
        inner = decode_key(data[1])
        if inner is None or "+" in inner.key or inner.key == "escape":
            return None
        return KeyPress("alt+" + inner.key.lower())

    return None


def parse_key(data: str) -> KeyId | None:
    """Return the key id for raw input *data*, or ``None``.

    ``"\\x1b[A"`` -> ``"up"``, ``"\\r"`` -> ``"enter"``, ``"\\x03"`` ->
    ``"ctrl+c"``, ``"\\x1b[13;5u"`` -> ``"ctrl+enter"``.
    """
    press = decode_key(data)
    return press.key if press is not None else None


def is_key_release(data: str) -> bool:
    """True for kitty key release events, which carry no action."""
    press = decode_key(data)
    return press is not None and press.event == "release"


def matches_key(data: str, key_id: KeyId) -> bool:
    return parse_key(data) == key_id
