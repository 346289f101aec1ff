"""Column-width helpers for drawing cell labels.

Labels may hold wide characters (CJK, emoji) and ANSI styling, so widths are
summed over grapheme clusters of the unstyled text rather than code points.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Literal

import grapheme
import wcwidth

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")

Align = Literal["left", "center", "right"]


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def _is_emoji_cluster(cluster: str) -> bool:
    # VS16, ZWJ, skin tones and regional indicators only occur in emoji
    return any(
        ch in "\ufe0f\u200d" or "\U0001f3fb" <= ch <= "\U0001f3ff" or "\U0001f1e6" <= ch <= "\U0001f1ff"
        for ch in cluster
    )


def cluster_width(cluster: str) -> int:
    """Columns taken by one grapheme cluster."""
    if not cluster:
        return 0
    if len(cluster) > 1 and _is_emoji_cluster(cluster):
        return 2
    base = cluster[0]
    if unicodedata.category(base) in ("Cc", "Mn", "Me"):
        return 0
    return max(wcwidth.wcwidth(base), 0)


def visible_width(text: str) -> int:
    """Columns *text* occupies on screen, ignoring ANSI codes."""
    plain = strip_ansi(text)
    if plain.isascii() and plain.isprintable():
        return len(plain)
    return sum(cluster_width(c) for c in grapheme.graphemes(plain))


def _take(text: str, columns: int) -> str:
    """Longest prefix of *text* that fits in *columns*, cut between clusters."""
    used = 0
    end = 0
    for cluster in grapheme.graphemes(text):
        w = cluster_width(cluster)
        if used + w > columns:
            break
        used += w
        end += len(cluster)
    return text[:end]


def fit_to_width(text: str, width: int, align: Align = "left", ellipsis: str = "…") -> str:
    """Return plain *text* occupying exactly *width* columns.

    Text that is too wide is cut and ends in *ellipsis*; text that is too
    narrow is padded with spaces according to *align*.
    """
    if width <= 0:
        return ""
    if visible_width(text) > width:
        room = width - visible_width(ellipsis)
        text = _take(text, room) + ellipsis if room > 0 else _take(ellipsis, width)

    gap = width - visible_width(text)
    if align == "right":
        return " " * gap + text
    if align == "center":
        left = gap // 2
        return " " * left + text + " " * (gap - left)
    return text + " " * gap
