"""Shared fixtures: a recording element, grid builders and a virtual terminal."""

from __future__ import annotations

from typing import Callable

import pytest

from gridnav.navigator import Navigator


class RecordingElement:
    """Element that records every hook call in a shared event log."""

    def __init__(self, name: str, log: list[tuple[str, str]] | None = None) -> None:
        self.name = name
        self.log = log if log is not None else []
        self.active = False
        self.selected = False

    def __repr__(self) -> str:
        return f"RecordingElement({self.name!r})"

    def on_activate(self) -> None:
        self.active = True
        self.log.append(("on_activate", self.name))

    def on_deactivate(self) -> None:
        self.active = False
        self.log.append(("on_deactivate", self.name))

    def on_enter(self) -> None:
        self.selected = True
        self.log.append(("on_enter", self.name))

    def on_leave(self) -> None:
        self.selected = False
        self.log.append(("on_leave", self.name))


class VirtualTerminal:
    """In-memory terminal that records all writes for test inspection."""

    def __init__(self, rows: int = 24, columns: int = 80) -> None:
        self.rows = rows
        self.columns = columns
        self.buffer: list[str] = []
        self.started = False
        self.cursor_visible = True
        self._input_handler: Callable[[str], None] | None = None
        self._resize_handler: Callable[[], None] | None = None

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None:
        self._input_handler = on_input
        self._resize_handler = on_resize
        self.started = True

    def stop(self) -> None:
        self.started = False
        self._input_handler = None
        self._resize_handler = None

    def write(self, data: str) -> None:
        self.buffer.append(data)

    def hide_cursor(self) -> None:
        self.cursor_visible = False

    def show_cursor(self) -> None:
        self.cursor_visible = True

    def clear_screen(self) -> None:
        self.buffer.append("\x1b[2J\x1b[H")

    # -- test helpers -------------------------------------------------------

    def send_input(self, data: str) -> None:
        """Simulate keyboard input arriving from the terminal."""
        if self._input_handler is not None:
            self._input_handler(data)

    def resize(self, columns: int, rows: int) -> None:
        self.columns = columns
        self.rows = rows
        if self._resize_handler is not None:
            self._resize_handler()

    def get_output(self) -> str:
        return "".join(self.buffer)


@pytest.fixture
def hook_log() -> list[tuple[str, str]]:
    return []


@pytest.fixture
def make_element(hook_log) -> Callable[[str], RecordingElement]:
    def _make(name: str) -> RecordingElement:
        return RecordingElement(name, hook_log)

    return _make


@pytest.fixture
def fill_grid(hook_log) -> Callable[..., dict[tuple[int, int], RecordingElement]]:
    """Register a fully occupied ``cols x rows`` grid into a navigator."""

    def _fill(navigator: Navigator, cols: int, rows: int) -> dict[tuple[int, int], RecordingElement]:
        elements: dict[tuple[int, int], RecordingElement] = {}
        for y in range(rows):
            for x in range(cols):
                element = RecordingElement(f"{x},{y}", hook_log)
                navigator.register((x, y), element)
                elements[(x, y)] = element
        return elements

    return _fill


@pytest.fixture
def terminal() -> VirtualTerminal:
    return VirtualTerminal()
