"""Unit tests for blend.py: harmonizing and blending colors."""
import pytest

from blend import cam16_ucs, harmonize, hct_hue
from color_math import difference_degrees, lstar_from_argb
from hct import Hct

RED = 0xFFFF0000
BLUE = 0xFF0000FF
GREEN = 0xFF00FF00
YELLOW = 0xFFFFFF00


# ─────────────────────────────────────────────────────────────────────────────
# Tests: harmonize
# ─────────────────────────────────────────────────────────────────────────────

class TestHarmonize:
    @pytest.mark.parametrize("design,source", [
        (RED, BLUE), (RED, GREEN), (BLUE, GREEN), (BLUE, RED), (GREEN, YELLOW), (YELLOW, BLUE),
    ])
    def test_moves_toward_source_hue(self, design, source):
        design_hct = Hct.from_int(design)
        source_hct = Hct.from_int(source)
        result_hct = Hct.from_int(harmonize(design, source))

        before = difference_degrees(design_hct.hue, source_hct.hue)
        after = difference_degrees(result_hct.hue, source_hct.hue)
        assert after < before
        assert difference_degrees(result_hct.hue, design_hct.hue) <= 15.0 + 4.0

    @pytest.mark.parametrize("design,source", [(RED, BLUE), (BLUE, GREEN), (GREEN, RED)])
    def test_keeps_tone(self, design, source):
        result = harmonize(design, source)
        assert lstar_from_argb(result) == pytest.approx(lstar_from_argb(design), abs=0.5)

    def test_rotation_is_half_the_difference_when_close(self):
        design = Hct.from_hct(100.0, 40.0, 60.0)
        source = Hct.from_hct(110.0, 40.0, 60.0)
        result = Hct.from_int(harmonize(design.argb, source.argb))
        expected = design.hue + difference_degrees(design.hue, source.hue) / 2.0
        assert result.hue == pytest.approx(expected, abs=3.0)


# ─────────────────────────────────────────────────────────────────────────────
# Tests: blending
# ─────────────────────────────────────────────────────────────────────────────

class TestCam16Ucs:
    def test_endpoints(self):
        assert cam16_ucs(RED, BLUE, 0.0) == RED
        assert cam16_ucs(RED, BLUE, 1.0) == BLUE

    def test_midpoint_is_new_color(self):
        mid = cam16_ucs(RED, BLUE, 0.5)
        assert mid not in (RED, BLUE)
        assert mid >> 24 == 0xFF


class TestHctHue:
    def test_keeps_tone(self):
        result = hct_hue(RED, BLUE, 0.5)
        assert lstar_from_argb(result) == pytest.approx(lstar_from_argb(RED), abs=0.5)

    def test_hue_moves(self):
        result = Hct.from_int(hct_hue(RED, BLUE, 0.8))
        assert difference_degrees(result.hue, Hct.from_int(RED).hue) > 5.0
