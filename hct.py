"""
HCT: hue, chroma, tone.

Hue and chroma come from CAM16; tone is L* from L*a*b*. Building a color from
a requested (hue, chroma, tone) triple searches for the in-gamut sRGB color
that best matches it: an outer binary search over chroma wrapped around an
inner binary search over CAM16 lightness J.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from cam16 import Cam16
from color_math import (
    argb_from_lstar,
    clamp_double,
    lstar_from_argb,
    sanitize_degrees_double,
)
from viewing_conditions import DEFAULT, ViewingConditions

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

CHROMA_SEARCH_ENDPOINT = 0.4  # Stop narrowing chroma below this interval width
DE_MAX = 1.0  # Largest CAM16-UCS hue drift accepted for a candidate
DL_MAX = 0.2  # Largest L* miss accepted for a candidate
DE_MAX_ERROR = 1e-9  # Candidate is exact; stop searching J
LIGHTNESS_SEARCH_ENDPOINT = 0.01  # Stop narrowing J below this interval width


# =============================================================================
# Solver
# =============================================================================

def find_cam_by_j(
    hue: float,
    chroma: float,
    tone: float,
    viewing_conditions: ViewingConditions = DEFAULT,
) -> Optional[Cam16]:
    """
    Binary search over J for a fixed hue and chroma.

    Each trial color is built from (J, chroma, hue), clipped to sRGB by
    converting it to ARGB, and judged by the L* of the clipped result.

    Returns:
        The clipped Cam16 closest in hue and chroma to the request among
        those within DL_MAX of the requested tone, or None if no J works.
    """
    low = 0.0
    high = 100.0
    best_de = 1000.0
    best_cam = None

    while abs(low - high) > LIGHTNESS_SEARCH_ENDPOINT:
        mid = low + (high - low) / 2.0
        cam_before_clip = Cam16.from_jch(mid, chroma, hue, viewing_conditions)
        clipped = cam_before_clip.viewed(viewing_conditions)
        clipped_lstar = lstar_from_argb(clipped)
        d_l = abs(tone - clipped_lstar)

        if d_l < DL_MAX:
            cam_clipped = Cam16.from_int(clipped, viewing_conditions)
            d_e = cam_clipped.distance(
                Cam16.from_jch(cam_clipped.j, cam_clipped.chroma, hue, viewing_conditions)
            )
            if d_e <= DE_MAX and d_e <= best_de:
                best_de = d_e
                best_cam = cam_clipped

        if best_cam is not None and best_de < DE_MAX_ERROR:
            break

        if clipped_lstar < tone:
            low = mid
        else:
            high = mid

    return best_cam


def solve_to_int(
    hue: float,
    chroma: float,
    tone: float,
    viewing_conditions: ViewingConditions = DEFAULT,
) -> int:
    """
    Find the ARGB color matching a requested hue, chroma and tone.

    Hue is wrapped into [0, 360) and tone clamped to [0, 100]. Chroma is
    reduced until some J reaches the requested tone; when no chroma does,
    the gray of that tone is returned, so every request yields a color.
    """
    hue = sanitize_degrees_double(hue)
    tone = clamp_double(0.0, 100.0, tone)

    if chroma < 1.0 or tone <= 0.0 or tone >= 100.0:
        return argb_from_lstar(tone)

    # Requested chroma is often already in gamut
    answer = find_cam_by_j(hue, chroma, tone, viewing_conditions)
    if answer is not None:
        return answer.viewed(viewing_conditions)

    low = 0.0
    high = chroma
    mid = low + (high - low) / 2.0
    while abs(low - high) >= CHROMA_SEARCH_ENDPOINT:
        possible_answer = find_cam_by_j(hue, mid, tone, viewing_conditions)
        if possible_answer is None:
            high = mid
        else:
            answer = possible_answer
            low = mid
        mid = low + (high - low) / 2.0

    if answer is None:
        logger.debug("no chroma reaches tone %.2f at hue %.2f; using gray", tone, hue)
        return argb_from_lstar(tone)
    return answer.viewed(viewing_conditions)


# =============================================================================
# HCT Color
# =============================================================================

@dataclass(frozen=True)
class Hct:
    """
    A color in hue, chroma, tone.

    hue: 0 <= hue < 360
    chroma: 0 <= chroma <= ?; the maximum depends on hue and tone
    tone: 0 <= tone <= 100; L*

    Fields hold the values actually achieved by `argb`, which may have
    less chroma than was requested.
    """
    hue: float
    chroma: float
    tone: float
    argb: int

    @classmethod
    def from_int(cls, argb: int) -> 'Hct':
        cam = Cam16.from_int(argb)
        return cls(hue=cam.hue, chroma=cam.chroma, tone=lstar_from_argb(argb), argb=argb)

    @classmethod
    def from_hct(cls, hue: float, chroma: float, tone: float) -> 'Hct':
        """Closest in-gamut color to the requested hue, chroma and tone."""
        return cls.from_int(solve_to_int(hue, chroma, tone))

    def to_int(self) -> int:
        return self.argb

    def with_hue(self, hue: float) -> 'Hct':
        return Hct.from_hct(hue, self.chroma, self.tone)

    def with_chroma(self, chroma: float) -> 'Hct':
        return Hct.from_hct(self.hue, chroma, self.tone)

    def with_tone(self, tone: float) -> 'Hct':
        return Hct.from_hct(self.hue, self.chroma, tone)


def hct_from_argb(argb: int) -> Hct:
    return Hct.from_int(argb)
