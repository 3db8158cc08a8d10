"""
CAM16 color appearance model.

Converts ARGB colors to perceptual correlates (hue, chroma, lightness J,
brightness Q, colorfulness M, saturation s) and CAM16-UCS coordinates, and
back again under a given set of viewing conditions.
"""

import math
from dataclasses import dataclass
from typing import Optional

from color_math import argb_from_xyz, signum, xyz_from_argb
from viewing_conditions import DEFAULT, ViewingConditions


def _sanitize_hue(degrees: float) -> float:
    """Keep a hue computed from atan2 inside [0, 360) despite rounding."""
    if degrees < 0.0:
        degrees += 360.0
    if degrees >= 360.0:
        degrees -= 360.0
    if degrees < 0.0:
        degrees = 0.0
    return degrees


def _adapted(component: float, fl: float) -> float:
    """Post-adaptation nonlinearity for one discounted cone response."""
    af = (fl * abs(component) / 100.0) ** 0.42
    return signum(component) * 400.0 * af / (af + 27.13)


def _unadapted(component: float, fl: float) -> float:
    """Inverse of _adapted; responses at or beyond the 400 asymptote map to 0."""
    magnitude = abs(component)
    denominator = 400.0 - magnitude
    if denominator <= 0.0:
        return 0.0
    base = max(0.0, (27.13 * magnitude) / denominator)
    return signum(component) * (100.0 / fl) * base ** (1.0 / 0.42)


@dataclass(frozen=True)
class Cam16:
    """A color as perceived by CAM16, with its CAM16-UCS coordinates."""
    hue: float  # like red, orange, yellow, green, etc.
    chroma: float  # colorfulness relative to a white of the same brightness
    j: float  # lightness
    q: float  # brightness
    m: float  # colorfulness
    s: float  # saturation
    jstar: float  # CAM16-UCS J*
    astar: float  # CAM16-UCS a*
    bstar: float  # CAM16-UCS b*

    def distance(self, other: 'Cam16') -> float:
        """
        Perceptual distance between two colors in CAM16-UCS.

        The Euclidean distance is compressed as 1.41 * dE^0.63 so that large
        differences rank the way people judge them.
        """
        dj = self.jstar - other.jstar
        da = self.astar - other.astar
        db = self.bstar - other.bstar
        de_prime = math.sqrt(dj * dj + da * da + db * db)
        return 1.41 * de_prime ** 0.63

    @classmethod
    def from_int(
        cls,
        argb: int,
        viewing_conditions: ViewingConditions = DEFAULT,
    ) -> 'Cam16':
        """Measure an ARGB color under the given viewing conditions."""
        vc = viewing_conditions
        x, y, z = xyz_from_argb(argb)

        # XYZ to cone responses
        r_c = 0.401288 * x + 0.650173 * y - 0.051461 * z
        g_c = -0.250268 * x + 1.204414 * y + 0.045854 * z
        b_c = -0.002079 * x + 0.048952 * y + 0.953127 * z

        # Discount illuminant
        r_d = vc.rgb_d[0] * r_c
        g_d = vc.rgb_d[1] * g_c
        b_d = vc.rgb_d[2] * b_c

        # Chromatic adaptation
        r_a = _adapted(r_d, vc.fl)
        g_a = _adapted(g_d, vc.fl)
        b_a = _adapted(b_d, vc.fl)

        # Redness-greenness and yellowness-blueness
        a = (11.0 * r_a + -12.0 * g_a + b_a) / 11.0
        b = (r_a + g_a - 2.0 * b_a) / 9.0

        # Auxiliary components
        u = (20.0 * r_a + 20.0 * g_a + 21.0 * b_a) / 20.0
        p2 = (40.0 * r_a + 20.0 * g_a + b_a) / 20.0

        atan_degrees = math.atan2(b, a) * 180.0 / math.pi
        hue = _sanitize_hue(atan_degrees)
        hue_radians = hue * math.pi / 180.0

        # Achromatic response
        ac = p2 * vc.nbb

        j = 100.0 * (ac / vc.aw) ** (vc.c * vc.z)
        q = (4.0 / vc.c) * math.sqrt(j / 100.0) * (vc.aw + 4.0) * vc.fl_root

        hue_prime = hue + 360.0 if hue < 20.14 else hue
        e_hue = 0.25 * (math.cos(hue_prime * math.pi / 180.0 + 2.0) + 3.8)
        p1 = 50000.0 / 13.0 * e_hue * vc.nc * vc.ncb
        t = p1 * math.sqrt(a * a + b * b) / (u + 0.305)
        alpha = t ** 0.9 * (1.64 - 0.29 ** vc.n) ** 0.73

        chroma = alpha * math.sqrt(j / 100.0)
        m = chroma * vc.fl_root
        s = 50.0 * math.sqrt((alpha * vc.c) / (vc.aw + 4.0))

        jstar = (1.0 + 100.0 * 0.007) * j / (1.0 + 0.007 * j)
        mstar = 1.0 / 0.0228 * math.log(1.0 + 0.0228 * m)
        astar = mstar * math.cos(hue_radians)
        bstar = mstar * math.sin(hue_radians)

        return cls(
            hue=hue,
            chroma=chroma,
            j=j,
            q=q,
            m=m,
            s=s,
            jstar=jstar,
            astar=astar,
            bstar=bstar,
        )

    @classmethod
    def from_jch(
        cls,
        j: float,
        c: float,
        h: float,
        viewing_conditions: ViewingConditions = DEFAULT,
    ) -> 'Cam16':
        """Build a color from lightness J, chroma C and hue h (degrees)."""
        vc = viewing_conditions
        q = (4.0 / vc.c) * math.sqrt(j / 100.0) * (vc.aw + 4.0) * vc.fl_root
        m = c * vc.fl_root
        alpha = c / math.sqrt(j / 100.0) if j > 0.0 else 0.0
        s = 50.0 * math.sqrt((alpha * vc.c) / (vc.aw + 4.0))

        hue_radians = h * math.pi / 180.0
        jstar = (1.0 + 100.0 * 0.007) * j / (1.0 + 0.007 * j)
        mstar = 1.0 / 0.0228 * math.log(1.0 + 0.0228 * m)
        astar = mstar * math.cos(hue_radians)
        bstar = mstar * math.sin(hue_radians)

        return cls(
            hue=h,
            chroma=c,
            j=j,
            q=q,
            m=m,
            s=s,
            jstar=jstar,
            astar=astar,
            bstar=bstar,
        )

    @classmethod
    def from_ucs(
        cls,
        jstar: float,
        astar: float,
        bstar: float,
        viewing_conditions: ViewingConditions = DEFAULT,
    ) -> 'Cam16':
        """Build a color from CAM16-UCS coordinates J*, a*, b*."""
        m_star = math.sqrt(astar * astar + bstar * bstar)
        m = (math.exp(m_star * 0.0228) - 1.0) / 0.0228
        c = m / viewing_conditions.fl_root
        h = _sanitize_hue(math.atan2(bstar, astar) * (180.0 / math.pi))
        j = jstar / (1.0 - (jstar - 100.0) * 0.007)
        return cls.from_jch(j, c, h, viewing_conditions)

    def viewed(self, viewing_conditions: ViewingConditions = DEFAULT) -> int:
        """ARGB representation of this color under the given conditions."""
        vc = viewing_conditions
        if self.chroma == 0.0 or self.j == 0.0:
            alpha = 0.0
        else:
            alpha = self.chroma / math.sqrt(self.j / 100.0)

        t = (alpha / (1.64 - 0.29 ** vc.n) ** 0.73) ** (1.0 / 0.9)
        h_rad = self.hue * math.pi / 180.0

        e_hue = 0.25 * (math.cos(h_rad + 2.0) + 3.8)
        ac = vc.aw * (self.j / 100.0) ** (1.0 / vc.c / vc.z)
        p1 = e_hue * (50000.0 / 13.0) * vc.nc * vc.ncb
        p2 = ac / vc.nbb

        h_sin = math.sin(h_rad)
        h_cos = math.cos(h_rad)

        gamma = 23.0 * (p2 + 0.305) * t / (23.0 * p1 + 11.0 * t * h_cos + 108.0 * t * h_sin)
        a = gamma * h_cos
        b = gamma * h_sin
        r_a = (460.0 * p2 + 451.0 * a + 288.0 * b) / 1403.0
        g_a = (460.0 * p2 - 891.0 * a - 261.0 * b) / 1403.0
        b_a = (460.0 * p2 - 220.0 * a - 6300.0 * b) / 1403.0

        r_f = _unadapted(r_a, vc.fl) / vc.rgb_d[0]
        g_f = _unadapted(g_a, vc.fl) / vc.rgb_d[1]
        b_f = _unadapted(b_a, vc.fl) / vc.rgb_d[2]

        x = 1.86206786 * r_f - 1.01125463 * g_f + 0.14918677 * b_f
        y = 0.38752654 * r_f + 0.62144744 * g_f - 0.00897398 * b_f
        z = -0.01584150 * r_f - 0.03412294 * g_f + 1.04996444 * b_f

        return argb_from_xyz(x, y, z)

    def to_int(self) -> int:
        """ARGB representation under default (sRGB) viewing conditions."""
        return self.viewed(DEFAULT)


def cam16_from_argb(argb: int, viewing_conditions: Optional[ViewingConditions] = None) -> Cam16:
    return Cam16.from_int(argb, viewing_conditions or DEFAULT)


def cam16_to_argb(cam: Cam16, viewing_conditions: Optional[ViewingConditions] = None) -> int:
    return cam.viewed(viewing_conditions or DEFAULT)
