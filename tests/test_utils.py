"""Tests for gridnav.utils -- widths and fitting of cell labels."""

from __future__ import annotations

from gridnav.utils import cluster_width, fit_to_width, strip_ansi, visible_width


class TestVisibleWidth:
    def test_ascii(self):
        assert visible_width("hello") == 5
        assert visible_width("") == 0

    def test_ansi_is_ignored(self):
        assert visible_width("\x1b[31mred\x1b[0m") == 3
        assert strip_ansi("\x1b[1m[x]\x1b[0m") == "[x]"

    def test_wide_characters(self):
        assert visible_width("日本") == 4

    def test_combining_mark(self):
        assert visible_width("e\u0301") == 1

    def test_cluster_width(self):
        assert cluster_width("a") == 1
        assert cluster_width("日") == 2
        assert cluster_width("\u0301") == 0
        assert cluster_width("") == 0


class TestFitToWidth:
    def test_pads_left_aligned(self):
        assert fit_to_width("ab", 5) == "ab   "

    def test_right_aligned(self):
        assert fit_to_width("ab", 5, align="right") == "   ab"

    def test_centred(self):
        assert fit_to_width("ab", 6, align="center") == "  ab  "
        assert fit_to_width("abc", 6, align="center") == " abc  "

    def test_exact_fit(self):
        assert fit_to_width("abc", 3) == "abc"

    def test_truncates_with_ellipsis(self):
        assert fit_to_width("hello world", 6) == "hello…"
        assert fit_to_width("hello world", 8, ellipsis="...") == "hello..."

    def test_wide_characters_cut_between_clusters(self):
        result = fit_to_width("日本語", 5)
        assert result == "日本…"
        assert visible_width(result) == 5

    def test_wide_character_that_does_not_fit_is_padded(self):
        result = fit_to_width("日本語", 4)
        assert result == "日… "
        assert visible_width(result) == 4

    def test_zero_width(self):
        assert fit_to_width("abc", 0) == ""

    def test_ellipsis_wider_than_room(self):
        assert fit_to_width("abcdef", 2, ellipsis="...") == ".."
