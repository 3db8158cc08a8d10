"""Smoke tests for theme_cli.py."""
import json

import numpy as np
import pytest

from theme_cli import load_pixels, main, parse_weighted_color


# ─────────────────────────────────────────────────────────────────────────────
# Tests: argument parsing helpers
# ─────────────────────────────────────────────────────────────────────────────

class TestParsing:
    def test_weighted_color(self):
        assert parse_weighted_color("ff0000:12") == (0xFFFF0000, 12)

    def test_default_weight(self):
        assert parse_weighted_color("#4285f4") == (0xFF4285F4, 1)

    def test_negative_weight_raises(self):
        with pytest.raises(ValueError):
            parse_weighted_color("ff0000:-1")

    def test_load_text(self, tmp_path):
        path = tmp_path / "pixels.txt"
        path.write_text("# swatch\nff0000\n\n#00ff00\nff0000ff\n")
        assert load_pixels(path) == [0xFFFF0000, 0xFF00FF00, 0xFF0000FF]

    def test_load_npy(self, tmp_path):
        path = tmp_path / "pixels.npy"
        np.save(path, np.array([[0xFFFF0000, 0xFF0000FF]], dtype=np.int64))
        assert load_pixels(path) == [0xFFFF0000, 0xFF0000FF]

    def test_load_npy_rejects_floats(self, tmp_path):
        path = tmp_path / "pixels.npy"
        np.save(path, np.array([0.5, 1.5]))
        with pytest.raises(ValueError):
            load_pixels(path)


# ─────────────────────────────────────────────────────────────────────────────
# Tests: subcommands
# ─────────────────────────────────────────────────────────────────────────────

class TestCommands:
    def test_score(self, capsys):
        main(["score", "ff0000", "00ff00", "0000ff"])
        lines = capsys.readouterr().out.split()
        assert lines == ["#ff0000", "#00ff00", "#0000ff"]

    def test_score_fallback(self, capsys):
        main(["score", "000000:5"])
        assert capsys.readouterr().out.split() == ["#4285f4"]

    def test_score_no_filter(self, capsys):
        main(["score", "000000:5", "--no-filter"])
        assert capsys.readouterr().out.split() == ["#000000"]

    def test_quantize(self, tmp_path, capsys):
        path = tmp_path / "pixels.txt"
        path.write_text("ff0000\nff0000\n00ff00\n00ff00\n00ff00\n")
        main(["quantize", str(path), "--max-colors", "8"])
        lines = capsys.readouterr().out.strip().splitlines()
        assert lines == ["#00ff00  3", "#ff0000  2"]

    def test_scheme_json(self, capsys):
        main(["scheme", "6750a4", "--json"])
        roles = json.loads(capsys.readouterr().out)
        assert len(roles) == 29
        assert roles["on_primary"] == "#ffffff"
        assert roles["shadow"] == "#000000"

    def test_scheme_dark_content_text(self, capsys):
        main(["scheme", "fa2bec", "--dark", "--content"])
        out = capsys.readouterr().out
        assert out.splitlines()[0].startswith("primary")
        assert "#" in out


# ─────────────────────────────────────────────────────────────────────────────
# Tests: errors
# ─────────────────────────────────────────────────────────────────────────────

class TestErrors:
    def test_bad_hex_exits_2(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["score", "nothex"])
        assert excinfo.value.code == 2
        assert "Error:" in capsys.readouterr().err

    def test_missing_file_exits_2(self, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            main(["quantize", str(tmp_path / "missing.txt")])
        assert excinfo.value.code == 2

    def test_empty_file_exits_2(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("")
        with pytest.raises(SystemExit) as excinfo:
            main(["quantize", str(path)])
        assert excinfo.value.code == 2

    def test_no_command_exits_2(self):
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 2
