"""
Rank quantized colors by their suitability as a UI theme source color.

Lets image quantization use a high cluster count, so colors are not muddied,
while curating the clusters down to a few good choices: unsuitable colors
(too gray, too dark, too rare) are removed and hues too close to an already
chosen color are skipped.
"""

import logging
from dataclasses import dataclass

from cam16 import Cam16
from color_math import difference_degrees, lstar_from_argb, sanitize_degrees_int

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

TARGET_CHROMA = 48.0
WEIGHT_PROPORTION = 0.7
WEIGHT_CHROMA_ABOVE = 0.3
WEIGHT_CHROMA_BELOW = 0.1
CUTOFF_CHROMA = 5.0
CUTOFF_TONE = 10.0
CUTOFF_EXCITED_PROPORTION = 0.01
HUE_WINDOW = 15  # Neighboring hues summed on each side of a color's hue
MAX_HUE_SEPARATION = 90  # Widest spread, for 4 colors around the wheel
MIN_HUE_SEPARATION = 15
GOOGLE_BLUE = 0xFF4285F4
DEFAULT_DESIRED = 4  # Colors shown in Android 12's wallpaper picker


@dataclass
class ScoredColor:
    """A candidate color with the values used to rank it."""
    argb: int
    cam: Cam16
    excited_proportion: float
    score: float


def _hue_bucket(hue: float) -> int:
    return sanitize_degrees_int(int(round(hue)))


def score_colors(colors_to_population: dict) -> list:
    """
    Score every color by its hue's share of the population and its chroma.

    Returns:
        list of ScoredColor in input order
    """
    population_sum = float(sum(colors_to_population.values()))
    if population_sum <= 0:
        return []

    # Proportion of the population at each whole-degree CAM16 hue
    colors_to_cam = {}
    hue_proportions = [0.0] * 360
    for color, population in colors_to_population.items():
        cam = Cam16.from_int(color)
        colors_to_cam[color] = cam
        hue_proportions[_hue_bucket(cam.hue)] += population / population_sum

    scored = []
    for color, cam in colors_to_cam.items():
        hue = _hue_bucket(cam.hue)
        excited_proportion = sum(
            hue_proportions[sanitize_degrees_int(i)]
            for i in range(hue - HUE_WINDOW, hue + HUE_WINDOW)
        )

        proportion_score = excited_proportion * 100.0 * WEIGHT_PROPORTION
        chroma_weight = WEIGHT_CHROMA_ABOVE if cam.chroma > TARGET_CHROMA else WEIGHT_CHROMA_BELOW
        chroma_score = (cam.chroma - TARGET_CHROMA) * chroma_weight

        scored.append(ScoredColor(
            argb=color,
            cam=cam,
            excited_proportion=excited_proportion,
            score=proportion_score + chroma_score,
        ))
    return scored


def is_suitable(
    candidate: ScoredColor,
    cutoff_excited_proportion: float = CUTOFF_EXCITED_PROPORTION,
) -> bool:
    """Reject grayish, very dark, or rarely used colors."""
    if candidate.cam.chroma < CUTOFF_CHROMA:
        return False
    if lstar_from_argb(candidate.argb) < CUTOFF_TONE:
        return False
    return candidate.excited_proportion >= cutoff_excited_proportion


def score(
    colors_to_population: dict,
    desired: int = DEFAULT_DESIRED,
    filter: bool = True,
    fallback_color_argb: int = GOOGLE_BLUE,
    cutoff_excited_proportion: float = CUTOFF_EXCITED_PROPORTION,
) -> list:
    """
    Rank colors by suitability for a UI theme.

    Args:
        colors_to_population: ARGB colors mapped to how often they appear,
            usually the output of quantize()
        desired: Maximum number of colors returned
        filter: Drop colors that are too gray, too dark, or too rare
        fallback_color_argb: Returned alone when nothing qualifies
        cutoff_excited_proportion: Smallest share of the population near a
            color's hue for the color to qualify

    Returns:
        list of at most `desired` ARGB colors, most suitable first; never
        empty
    """
    scored = score_colors(colors_to_population)
    if filter:
        kept = []
        for candidate in scored:
            if is_suitable(candidate, cutoff_excited_proportion):
                kept.append(candidate)
            else:
                logger.debug("rejecting color %08x", candidate.argb)
        scored = kept

    # Stable sort keeps input order among equal scores
    ranked = sorted(scored, key=lambda c: c.score, reverse=True)

    # Widest hue spread first, relaxing until enough colors are found
    chosen = []
    for separation in range(MAX_HUE_SEPARATION, MIN_HUE_SEPARATION - 1, -1):
        chosen = []
        for candidate in ranked:
            if any(
                difference_degrees(candidate.cam.hue, other.cam.hue) < separation
                for other in chosen
            ):
                continue
            chosen.append(candidate)
            if len(chosen) >= desired:
                break
        if len(chosen) >= desired:
            break

    if not chosen:
        return [fallback_color_argb]
    return [candidate.argb for candidate in chosen]


# Name used by the theme pipeline
ranked_suggestions = score
