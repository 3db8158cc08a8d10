"""
Blend colors by moving them toward each other in hue.

Used to keep fixed design colors (brand colors, warning red) from clashing
with a theme derived from the user's wallpaper.
"""

from cam16 import Cam16
from color_math import difference_degrees, lstar_from_argb, rotation_direction, sanitize_degrees_double
from hct import Hct


MAX_HARMONIZE_ROTATION = 15.0  # degrees


def harmonize(design_color: int, source_color: int) -> int:
    """
    Shift a design color's hue toward a source color's hue.

    The hue moves halfway to the source hue, but never more than 15 degrees,
    so the design color keeps its identity. Chroma and tone are preserved.
    """
    from_hct = Hct.from_int(design_color)
    to_hct = Hct.from_int(source_color)
    rotation = min(difference_degrees(from_hct.hue, to_hct.hue) * 0.5, MAX_HARMONIZE_ROTATION)
    output_hue = sanitize_degrees_double(
        from_hct.hue + rotation * rotation_direction(from_hct.hue, to_hct.hue)
    )
    return Hct.from_hct(output_hue, from_hct.chroma, from_hct.tone).to_int()


def hct_hue(from_color: int, to_color: int, amount: float) -> int:
    """Blend hue only: the result keeps from_color's chroma and tone."""
    ucs = cam16_ucs(from_color, to_color, amount)
    ucs_cam = Cam16.from_int(ucs)
    from_cam = Cam16.from_int(from_color)
    return Hct.from_hct(ucs_cam.hue, from_cam.chroma, lstar_from_argb(from_color)).to_int()


def cam16_ucs(from_color: int, to_color: int, amount: float) -> int:
    """Linear interpolation in CAM16-UCS; amount 0 is from_color, 1 is to_color."""
    from_cam = Cam16.from_int(from_color)
    to_cam = Cam16.from_int(to_color)

    jstar = from_cam.jstar + (to_cam.jstar - from_cam.jstar) * amount
    astar = from_cam.astar + (to_cam.astar - from_cam.astar) * amount
    bstar = from_cam.bstar + (to_cam.bstar - from_cam.bstar) * amount

    return Cam16.from_ucs(jstar, astar, bstar).to_int()
