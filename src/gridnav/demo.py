"""Terminal demo: grids of cells driven by the keyboard navigator.

Each grid is a block of ``rows x cols`` cells stacked below the previous
one, so all grids share a single coordinate space.  Cells track their own
active/selected state through the navigator hooks and render from it.

Keys beyond the navigation bindings:

* ``1``-``9`` switch navigation context,
* ``c`` clears the active context's row memory,
* ``q`` or ``ctrl+c`` quits.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Hashable

from gridnav.hooks import call_hook
from gridnav.input import KeyboardWatcher
from gridnav.keymap import NavigationKeybindingsManager
from gridnav.keys import parse_key
from gridnav.navigator import Navigator
from gridnav.terminal import Terminal
from gridnav.types import Position
from gridnav.utils import fit_to_width

logger = logging.getLogger(__name__)

_BOLD = "\x1b[1m"
_REVERSE = "\x1b[7m"
_DIM = "\x1b[2m"
_RESET = "\x1b[0m"

QUIT_KEYS = frozenset({"q", "ctrl+c"})
CLEAR_CACHE_KEY = "c"


class GridCell:
    """A navigable cell whose state is maintained by the hooks."""

    def __init__(self, label: str) -> None:
        self.label = label
        self.active = False
        self.selected = False

    def __repr__(self) -> str:
        return f"GridCell({self.label!r}, active={self.active}, selected={self.selected})"

    def on_activate(self) -> None:
        self.active = True

    def on_deactivate(self) -> None:
        self.active = False

    def on_enter(self) -> None:
        self.selected = True

    def on_leave(self) -> None:
        self.selected = False

    def render(self, width: int) -> str:
        text = fit_to_width(self.label, width - 2, align="center")
        if self.selected:
            return f"{_REVERSE}[{text}]{_RESET}"
        if self.active:
            return f"{_BOLD}[{text}]{_RESET}"
        return f" {text} "


@dataclass(frozen=True)
class GridSpec:
    rows: int
    cols: int

    @classmethod
    def parse(cls, text: str) -> GridSpec:
        """Parse ``"ROWSxCOLS"`` (e.g. ``"2x3"``)."""
        try:
            rows_text, cols_text = text.lower().split("x")
            rows, cols = int(rows_text), int(cols_text)
        except ValueError:
            raise ValueError(f"grid must look like ROWSxCOLS, got {text!r}") from None
        if rows <= 0 or cols <= 0:
            raise ValueError(f"grid dimensions must be positive, got {text!r}")
        return cls(rows, cols)


DEFAULT_GRIDS: tuple[GridSpec, ...] = (GridSpec(2, 3), GridSpec(5, 5))


class GridDemo:
    """Mounts grids of ``GridCell`` into a navigator and renders them."""

    def __init__(
        self,
        terminal: Terminal,
        navigator: Navigator,
        grids: tuple[GridSpec, ...] | list[GridSpec] = DEFAULT_GRIDS,
        keybindings: NavigationKeybindingsManager | None = None,
        cell_width: int = 9,
    ) -> None:
        self._terminal = terminal
        self._navigator = navigator
        self._grids = tuple(grids)
        self._cell_width = cell_width
        self._watcher = KeyboardWatcher(navigator, keybindings)
        self._watcher.on_unhandled = self._handle_app_key
        self._cells: dict[Position, GridCell] = {}
        self._layout: list[tuple[int, GridSpec]] = []
        self._done = asyncio.Event()

    @property
    def cells(self) -> dict[Position, GridCell]:
        return self._cells

    @property
    def done(self) -> bool:
        return self._done.is_set()

    # -- mount / unmount ----------------------------------------------------

    def mount(self) -> None:
        row_offset = 0
        for spec in self._grids:
            self._layout.append((row_offset, spec))
            for row in range(spec.rows):
                for col in range(spec.cols):
                    pos = Position(col, row_offset + row)
                    cell = GridCell(f"{row}x{col}")
                    self._cells[pos] = cell
                    self._navigator.register(pos, cell)
            row_offset += spec.rows
        logger.info("Mounted %d cells in %d grids", len(self._cells), len(self._grids))

    def unmount(self) -> None:
        for cell in self._cells.values():
            self._navigator.unregister(cell)
        self._cells.clear()
        self._layout.clear()

    # -- lifecycle ----------------------------------------------------------

    def start(self) -> None:
        self.mount()
        self._terminal.start(self.handle_input, self.request_render)
        self._terminal.hide_cursor()
        self._navigator.restore_context_position()
        self.request_render()

    def stop(self) -> None:
        self._terminal.show_cursor()
        self._terminal.clear_screen()
        self._terminal.stop()
        self.unmount()

    async def run(self) -> None:
        self.start()
        try:
            await self._done.wait()
        finally:
            self.stop()

    def quit(self) -> None:
        self._done.set()

    # -- input --------------------------------------------------------------

    def handle_input(self, data: str) -> None:
        self._watcher.handle_input(data)
        if not self.done:
            self.request_render()

    def _handle_app_key(self, data: str) -> None:
        key = parse_key(data)
        if key in QUIT_KEYS:
            self.quit()
        elif key == CLEAR_CACHE_KEY:
            self._navigator.clear_cache()
        elif key is not None and len(key) == 1 and key in "123456789":
            self.switch_context(int(key) - 1)

    def switch_context(self, context_id: Hashable) -> None:
        """Deactivate the current cell, then restore *context_id*'s cursor."""
        call_hook(
            self._navigator.registry.hooks_at(self._navigator.get_current_position()),
            "on_deactivate",
        )
        self._navigator.set_active_context(context_id)
        self._navigator.restore_context_position()

    # -- rendering ----------------------------------------------------------

    def render(self) -> list[str]:
        lines: list[str] = []
        for index, (row_offset, spec) in enumerate(self._layout):
            lines.append(f"{_DIM}grid {index + 1} ({spec.rows}x{spec.cols}){_RESET}")
            for row in range(spec.rows):
                y = row_offset + row
                lines.append(
                    "".join(
                        self._cells[Position(x, y)].render(self._cell_width)
                        for x in range(spec.cols)
                    )
                )
            lines.append("")

        x, y = self._navigator.get_current_position()
        config = self._navigator.config
        lines.append(
            f"context {self._navigator.active_context_id}  position ({x}, {y})  "
            f"cache {'on' if config.cache else 'off'}  "
            f"reset axis {'on' if config.reset_axis else 'off'}"
        )
        lines.append(
            f"{_DIM}arrows move  enter select  backspace/esc deselect  "
            f"1-9 context  c clear cache  q quit{_RESET}"
        )
        return lines

    def request_render(self) -> None:
        self._terminal.clear_screen()
        self._terminal.write("\r\n".join(self.render()))
