"""Tests for the command-line interface."""

import pytest

from cavegen.cli import build_parser, main


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        """Width defaults to 80; overrides default to None."""
        args = build_parser().parse_args([])
        assert args.width == 80
        assert args.height is None
        assert args.seed is None
        assert not args.ascii


class TestMain:
    """Tests for main()."""

    def test_prints_stats(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A run prints the header and statistics."""
        main(["--width", "40", "--height", "30", "--seed", "4"])
        out = capsys.readouterr().out

        assert "Generating 40x30 cave" in out
        assert "cells: 1200" in out
        assert "rooms:" in out

    def test_ascii_preview(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--ascii prints one line per grid row."""
        main(["--width", "30", "--height", "20", "--seed", "2", "--ascii"])
        lines = capsys.readouterr().out.splitlines()

        preview = [line for line in lines if len(line) == 30 and set(line) <= set(".+#")]
        assert len(preview) == 20
        assert preview[0] == "." * 30

    def test_named_config_with_override(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Bundled configs load by name and accept overrides."""
        main(["--config", "caverns", "--width", "50", "--seed", "8", "--steps", "2"])
        assert "Generating 50x50 cave" in capsys.readouterr().out

    def test_heightmap_bands(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--heightmap prints every default band."""
        main(["--width", "32", "--seed", "1", "--heightmap"])
        out = capsys.readouterr().out

        assert "Terrain bands:" in out
        assert "deep_water:" in out
        assert "deep_rock:" in out
