"""Unit tests for score.py: theme suitability ranking."""
import pytest

from cam16 import Cam16
from color_math import difference_degrees
from score import GOOGLE_BLUE, ranked_suggestions, score, score_colors

RED = 0xFFFF0000
GREEN = 0xFF00FF00
BLUE = 0xFF0000FF
BLACK = 0xFF000000


# ─────────────────────────────────────────────────────────────────────────────
# Tests: ranking
# ─────────────────────────────────────────────────────────────────────────────

class TestScore:
    def test_prioritizes_chroma(self):
        ranked = score({BLACK: 1, RED: 1, BLUE: 1})
        assert ranked == [RED, BLUE]

    def test_prioritizes_chroma_when_proportions_equal(self):
        ranked = score({RED: 1, GREEN: 1, BLUE: 1})
        assert ranked == [RED, GREEN, BLUE]

    def test_prioritizes_proportion(self):
        ranked = score({RED: 1, BLUE: 10})
        assert ranked[0] == BLUE

    def test_similar_hues_are_deduplicated(self):
        ranked = score({0xFF008772: 1, 0xFF318477: 1})
        assert ranked == [0xFF008772]

    def test_generates_gblue_when_no_colors_available(self):
        assert score({BLACK: 1}) == [GOOGLE_BLUE]

    def test_empty_input_uses_fallback(self):
        assert score({}) == [GOOGLE_BLUE]

    def test_custom_fallback(self):
        assert score({BLACK: 1}, fallback_color_argb=0xFF123456) == [0xFF123456]

    def test_desired_limits_results(self):
        ranked = score({RED: 1, GREEN: 1, BLUE: 1}, desired=2)
        assert ranked == [RED, GREEN]

    def test_without_filter_keeps_dark_colors(self):
        ranked = score({BLACK: 1}, filter=False)
        assert ranked == [BLACK]

    def test_rare_hue_is_filtered(self):
        ranked = score({RED: 1, BLUE: 999})
        assert RED not in ranked
        assert ranked == [BLUE]

    def test_cutoff_is_configurable(self):
        ranked = score({RED: 1, BLUE: 999}, cutoff_excited_proportion=0.0)
        assert RED in ranked

    def test_results_are_hue_separated(self):
        colors = {0xFF000000 | (r << 16) | (g << 8) | 0x40: 1
                  for r in range(0, 256, 32) for g in range(0, 256, 32)}
        ranked = score(colors)
        hues = [Cam16.from_int(argb).hue for argb in ranked]
        for i in range(len(hues)):
            for j in range(i + 1, len(hues)):
                assert difference_degrees(hues[i], hues[j]) >= 15.0

    def test_alias(self):
        assert ranked_suggestions({RED: 1}) == score({RED: 1})


# ─────────────────────────────────────────────────────────────────────────────
# Tests: scores
# ─────────────────────────────────────────────────────────────────────────────

class TestScoreColors:
    def test_excited_proportion_sums_neighboring_hues(self):
        scored = score_colors({RED: 3, BLUE: 1})
        by_color = {candidate.argb: candidate for candidate in scored}
        assert by_color[RED].excited_proportion == pytest.approx(0.75)
        assert by_color[BLUE].excited_proportion == pytest.approx(0.25)

    def test_score_formula(self):
        scored = score_colors({RED: 1})
        candidate = scored[0]
        chroma = candidate.cam.chroma
        expected = 1.0 * 100.0 * 0.7 + (chroma - 48.0) * 0.3
        assert candidate.score == pytest.approx(expected)

    def test_low_chroma_weight(self):
        gray_blue = 0xFF6F7785
        candidate = score_colors({gray_blue: 1})[0]
        assert candidate.cam.chroma < 48.0
        expected = 100.0 * 0.7 + (candidate.cam.chroma - 48.0) * 0.1
        assert candidate.score == pytest.approx(expected)

    def test_zero_population(self):
        assert score_colors({RED: 0}) == []
