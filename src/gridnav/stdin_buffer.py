"""Reassemble key sequences from raw stdin reads.

One read may hold several keys (a held arrow key repeats faster than the
loop drains stdin) or only the first half of an escape sequence.  The
buffer emits one complete sequence at a time and holds back a trailing
partial one; if nothing completes it within ``timeout`` seconds it is
emitted as-is, which is how a lone ``ESC`` becomes the escape key.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Callable

logger = logging.getLogger(__name__)

# One complete key: CSI with its final byte, SS3 plus one char, ESC plus one
# non-ESC char, an ESC directly followed by another ESC, or any single non-ESC
# char.
_SEQUENCE_RE = re.compile(
    r"\x1b\[[\x20-\x3f]*[\x40-\x7e]|\x1bO.|\x1b[^\[O\x1b]|\x1b(?=\x1b)|[^\x1b]",
    re.DOTALL,
)


def split_sequences(text: str) -> tuple[list[str], str]:
    """Split *text* into complete sequences and an incomplete remainder."""
    sequences: list[str] = []
    pos = 0
    while pos < len(text):
        m = _SEQUENCE_RE.match(text, pos)
        if m is None:
            break
        sequences.append(m.group())
        pos = m.end()
    return sequences, text[pos:]


class StdinBuffer:
    """Feeds complete sequences to ``on_sequence``.

    Partial sequences are timed out through the running event loop.  Outside
    a loop there is no way to wait for the rest, so they are emitted at once.
    """

    def __init__(
        self,
        on_sequence: Callable[[str], None] | None = None,
        *,
        timeout: float = 0.01,
    ) -> None:
        self.on_sequence = on_sequence
        self.timeout = timeout
        self._pending = ""
        self._timer: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> str:
        return self._pending

    def feed(self, data: str) -> None:
        self._cancel_timer()
        sequences, self._pending = split_sequences(self._pending + data)
        for sequence in sequences:
            self._emit(sequence)
        if not self._pending:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.flush()
            return
        self._timer = loop.call_later(self.timeout, self.flush)

    def flush(self) -> None:
        """Emit any partial sequence immediately."""
        self._cancel_timer()
        if self._pending:
            pending, self._pending = self._pending, ""
            logger.debug("Flushing partial sequence %r", pending)
            self._emit(pending)

    def close(self) -> None:
        """Drop buffered input and cancel the pending flush."""
        self._cancel_timer()
        self._pending = ""

    def _emit(self, sequence: str) -> None:
        if self.on_sequence is not None:
            self.on_sequence(sequence)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
