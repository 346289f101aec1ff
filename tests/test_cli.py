"""Tests for the gridnav command line entry point."""

from __future__ import annotations

import io
import json
import sys

import pytest

from gridnav.cli import build_parser, main
from gridnav.demo import GridSpec


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.grid is None
        assert args.cache is None
        assert args.reset_axis is None
        assert args.duplicate_policy is None
        assert args.cell_width == 9
        assert args.log_level == "warning"

    def test_grids_and_flags(self):
        args = build_parser().parse_args(
            ["--grid", "3x4", "--grid", "1x1", "--cache", "--no-reset-axis", "--duplicate-policy", "reject"]
        )
        assert args.grid == [GridSpec(3, 4), GridSpec(1, 1)]
        assert args.cache is True
        assert args.reset_axis is False
        assert args.duplicate_policy == "reject"

    def test_bad_grid_exits(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--grid", "3by4"])

    def test_bad_policy_exits(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--duplicate-policy", "merge"])


class TestMain:
    def test_requires_tty(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(sys, "stdin", io.StringIO())
        assert main(["--config", str(tmp_path / "missing.json")]) == 1
        assert "interactive terminal" in capsys.readouterr().err

    def test_invalid_keybindings(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"keybindings": {"jump": "j"}}))
        monkeypatch.setattr(sys, "stdin", io.StringIO())
        assert main(["--config", str(path)]) == 2
        assert "Invalid keybindings" in capsys.readouterr().err
