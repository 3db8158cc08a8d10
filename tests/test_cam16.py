"""Unit tests for cam16.py and viewing_conditions.py."""
import math

import pytest

from cam16 import Cam16, cam16_from_argb, cam16_to_argb
from color_math import WHITE_POINT_D65, y_from_lstar
from viewing_conditions import DEFAULT, ViewingConditions, default_adapting_luminance

RED = 0xFFFF0000
GREEN = 0xFF00FF00
BLUE = 0xFF0000FF
WHITE = 0xFFFFFFFF
BLACK = 0xFF000000


# ─────────────────────────────────────────────────────────────────────────────
# Tests: viewing conditions
# ─────────────────────────────────────────────────────────────────────────────

class TestViewingConditions:
    def test_default_uses_d65_and_mid_gray(self):
        assert DEFAULT.white_point == WHITE_POINT_D65
        assert DEFAULT.background_lstar == 50.0
        assert DEFAULT.surround == 2.0
        assert DEFAULT.adapting_luminance == pytest.approx(default_adapting_luminance())

    def test_mid_gray_y(self):
        assert y_from_lstar(50.0) == pytest.approx(18.418, abs=0.001)
        assert DEFAULT.n == pytest.approx(0.18418, abs=1e-4)

    def test_average_surround_coefficients(self):
        assert DEFAULT.c == pytest.approx(0.69)
        assert DEFAULT.nc == pytest.approx(1.0)
        assert DEFAULT.nbb == DEFAULT.ncb

    def test_background_lstar_floored_at_30(self):
        vc = ViewingConditions.make(background_lstar=10.0)
        assert vc.background_lstar == 30.0

    def test_surround_out_of_range_raises(self):
        with pytest.raises(ValueError):
            ViewingConditions.make(surround=2.5)
        with pytest.raises(ValueError):
            ViewingConditions.make(surround=-0.1)

    def test_discounting_illuminant_removes_white_point_cast(self):
        vc = ViewingConditions.make(discounting_illuminant=True)
        cam = Cam16.from_int(WHITE, vc)
        assert cam.chroma < Cam16.from_int(WHITE).chroma

    def test_is_immutable(self):
        with pytest.raises(AttributeError):
            DEFAULT.n = 1.0


# ─────────────────────────────────────────────────────────────────────────────
# Tests: reference values
# ─────────────────────────────────────────────────────────────────────────────

class TestReferenceValues:
    @pytest.mark.parametrize("argb,j,chroma,hue,m,s,q", [
        (RED, 46.445, 113.357, 27.408, 89.494, 91.890, 105.980),
        (GREEN, 79.332, 108.410, 142.140, 85.588, 78.605, 138.520),
        (BLUE, 25.466, 87.231, 282.788, 68.867, 93.675, 78.481),
        (WHITE, 100.0, 2.869, 209.492, 2.265, 12.068, 155.521),
    ])
    def test_primaries(self, argb, j, chroma, hue, m, s, q):
        cam = Cam16.from_int(argb)
        assert cam.j == pytest.approx(j, abs=3.0)
        assert cam.chroma == pytest.approx(chroma, abs=3.0)
        assert cam.hue == pytest.approx(hue, abs=3.0)
        assert cam.m == pytest.approx(m, abs=3.0)
        assert cam.s == pytest.approx(s, abs=3.0)
        assert cam.q == pytest.approx(q, abs=3.0)

    def test_black(self):
        cam = Cam16.from_int(BLACK)
        assert cam.j == pytest.approx(0.0, abs=1e-9)
        assert cam.chroma == pytest.approx(0.0, abs=1e-9)
        assert cam.hue == pytest.approx(0.0, abs=1e-9)
        assert cam.m == pytest.approx(0.0, abs=1e-9)
        assert cam.s == pytest.approx(0.0, abs=1e-9)
        assert cam.q == pytest.approx(0.0, abs=1e-9)

    def test_hue_in_range(self):
        for argb in (RED, GREEN, BLUE, WHITE, BLACK, 0xFF123456, 0xFFFF00FF):
            assert 0.0 <= Cam16.from_int(argb).hue < 360.0


# ─────────────────────────────────────────────────────────────────────────────
# Tests: inverse model
# ─────────────────────────────────────────────────────────────────────────────

class TestInverse:
    @pytest.mark.parametrize("argb", [RED, GREEN, BLUE, WHITE, BLACK, 0xFF808080, 0xFF6750A4])
    def test_conversions_are_reflexive(self, argb):
        cam = Cam16.from_int(argb)
        assert Cam16.from_jch(cam.j, cam.chroma, cam.hue).to_int() == argb

    def test_module_functions(self):
        cam = cam16_from_argb(RED)
        assert cam16_to_argb(cam) == RED
        assert cam16_to_argb(cam, DEFAULT) == RED

    def test_ucs_round_trip(self):
        cam = Cam16.from_int(0xFF6750A4)
        ucs = Cam16.from_ucs(cam.jstar, cam.astar, cam.bstar)
        assert ucs.j == pytest.approx(cam.j, abs=1e-6)
        assert ucs.chroma == pytest.approx(cam.chroma, abs=1e-6)
        assert ucs.to_int() == 0xFF6750A4

    def test_zero_lightness_is_black(self):
        assert Cam16.from_jch(0.0, 50.0, 120.0).to_int() == BLACK

    def test_out_of_gamut_request_clips(self):
        argb = Cam16.from_jch(50.0, 200.0, 140.0).to_int()
        assert argb >> 24 == 0xFF


# ─────────────────────────────────────────────────────────────────────────────
# Tests: distance
# ─────────────────────────────────────────────────────────────────────────────

class TestDistance:
    def test_same_color_zero(self):
        cam = Cam16.from_int(RED)
        assert cam.distance(cam) == pytest.approx(0.0)

    def test_symmetric(self):
        a = Cam16.from_int(RED)
        b = Cam16.from_int(BLUE)
        assert a.distance(b) == pytest.approx(b.distance(a))

    def test_compressed_euclidean(self):
        a = Cam16.from_int(RED)
        b = Cam16.from_int(GREEN)
        de = math.sqrt(
            (a.jstar - b.jstar) ** 2 + (a.astar - b.astar) ** 2 + (a.bstar - b.bstar) ** 2
        )
        assert a.distance(b) == pytest.approx(1.41 * de ** 0.63)
