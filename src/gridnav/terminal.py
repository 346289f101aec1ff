"""Terminal I/O for the demo.

``Terminal`` is the interface the demo draws on; ``ProcessTerminal`` backs it
with the process's own tty.  While started, the tty is in raw mode, stdin is
read through the running event loop, input is reassembled into key sequences
by ``StdinBuffer``, and SIGWINCH is reported as a resize.  If the terminal
answers the kitty keyboard protocol query, disambiguated key reporting is
switched on for the session.
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
import shutil
import signal
import sys
import termios
import tty
from typing import Callable, Protocol, TextIO

from gridnav.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

KITTY_QUERY = "\x1b[?u"
KITTY_PUSH = "\x1b[>1u"
KITTY_POP = "\x1b[<u"

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CLEAR_SCREEN = "\x1b[2J\x1b[H"

_KITTY_REPLY_RE = re.compile(r"\x1b\[\?\d+u")


class Terminal(Protocol):
    """What the demo needs from a terminal."""

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None: ...

    def stop(self) -> None: ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def clear_screen(self) -> None: ...


class ProcessTerminal:
    """A ``Terminal`` on the process's stdin/stdout.

    ``start`` must run inside an event loop for input to be read.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._on_input: Callable[[str], None] | None = None
        self._on_resize: Callable[[], None] | None = None
        self._buffer = StdinBuffer(self._on_sequence)
        self._saved_attrs: list | None = None
        self._saved_sigwinch: object = None
        self._reader_fd: int | None = None
        self._kitty = False

    @property
    def kitty_protocol_active(self) -> bool:
        return self._kitty

    @property
    def columns(self) -> int:
        return shutil.get_terminal_size((80, 24)).columns

    @property
    def rows(self) -> int:
        return shutil.get_terminal_size((80, 24)).lines

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None:
        self._on_input = on_input
        self._on_resize = on_resize
        self._enter_raw_mode()
        previous = signal.signal(signal.SIGWINCH, self._handle_sigwinch)
        self._saved_sigwinch = previous or signal.SIG_DFL
        self._attach_reader()
        self.write(KITTY_QUERY)

    def stop(self) -> None:
        if self._kitty:
            self.write(KITTY_POP)
            self._kitty = False
        self._buffer.close()
        self._detach_reader()
        if self._saved_sigwinch is not None:
            signal.signal(signal.SIGWINCH, self._saved_sigwinch)
            self._saved_sigwinch = None
        self._leave_raw_mode()
        self._on_input = None
        self._on_resize = None

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        try:
            self._stdout.write(data)
            self._stdout.flush()
        except OSError as e:
            logger.debug("Terminal write failed: %s", e)

    def hide_cursor(self) -> None:
        self.write(HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(SHOW_CURSOR)

    def clear_screen(self) -> None:
        self.write(CLEAR_SCREEN)

    # -- input --------------------------------------------------------------

    def feed(self, data: str) -> None:
        """Process raw input as if it had been read from stdin."""
        self._buffer.feed(data)

    def _on_sequence(self, sequence: str) -> None:
        if _KITTY_REPLY_RE.fullmatch(sequence):
            logger.debug("Terminal supports the kitty keyboard protocol")
            self._kitty = True
            self.write(KITTY_PUSH)
            return
        if self._on_input is not None:
            self._on_input(sequence)

    def _read_stdin(self) -> None:
        try:
            raw = os.read(self._stdin.fileno(), 4096)
        except OSError as e:
            logger.debug("stdin read failed: %s", e)
            return
        if raw:
            self.feed(raw.decode("utf-8", errors="replace"))

    def _handle_sigwinch(self, signum: int, frame: object) -> None:
        if self._on_resize is not None:
            self._on_resize()

    # -- tty state ----------------------------------------------------------

    def _enter_raw_mode(self) -> None:
        fd = self._stdin.fileno()
        self._saved_attrs = termios.tcgetattr(fd)
        tty.setraw(fd)

    def _leave_raw_mode(self) -> None:
        if self._saved_attrs is not None:
            termios.tcsetattr(self._stdin.fileno(), termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None

    def _attach_reader(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; terminal input is disabled")
            return
        fd = self._stdin.fileno()
        loop.add_reader(fd, self._read_stdin)
        self._reader_fd = fd

    def _detach_reader(self) -> None:
        if self._reader_fd is None:
            return
        try:
            asyncio.get_running_loop().remove_reader(self._reader_fd)
        except RuntimeError:
            logger.debug("Event loop gone; stdin reader already detached")
        self._reader_fd = None
