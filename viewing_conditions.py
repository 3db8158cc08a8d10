"""
Viewing conditions for the CAM16 color appearance model.

In traditional color spaces a color is identified solely by the observer's
measurement of it. Color appearance models such as CAM16 also use the
environment the color was observed in. For example, white under a midday
sun white point is measured by CAM16 as a slightly chromatic blue (roughly
hue 203, chroma 3, lightness 100).

ViewingConditions caches every intermediate CAM16 value that depends only on
the environment, so that per-color conversions stay cheap.
"""

import math
from dataclasses import dataclass

from color_math import WHITE_POINT_D65, lerp, y_from_lstar


def default_adapting_luminance() -> float:
    """Adapting luminance for a mid-gray (L* 50) background."""
    return 200.0 / math.pi * y_from_lstar(50.0) / 100.0


@dataclass(frozen=True)
class ViewingConditions:
    """Immutable environment plus the derived CAM16 coefficients."""
    white_point: tuple  # XYZ of the white point
    adapting_luminance: float
    background_lstar: float
    surround: float  # 0 = dark, 1 = dim, 2 = average
    discounting_illuminant: bool

    n: float  # background Y relative to white point Y
    aw: float  # achromatic response of the white point
    nbb: float
    ncb: float
    c: float
    nc: float
    rgb_d: tuple  # discount factors per cone response
    fl: float  # luminance-level adaptation factor
    fl_root: float
    z: float  # base exponential nonlinearity

    @classmethod
    def make(
        cls,
        white_point: tuple = WHITE_POINT_D65,
        adapting_luminance: float = -1.0,
        background_lstar: float = 50.0,
        surround: float = 2.0,
        discounting_illuminant: bool = False,
    ) -> 'ViewingConditions':
        """
        Build viewing conditions and precompute the adaptation factors.

        Args:
            white_point: XYZ coordinates of white, Y scaled to 100
            adapting_luminance: cd/m^2 of the adapting field; values <= 0 use
                the L* 50 default
            background_lstar: L* of the background, floored at 30
            surround: 0.0 (dark) to 2.0 (average)
            discounting_illuminant: whether the eye fully adapts to the
                illuminant

        Raises:
            ValueError: If surround is outside [0, 2]
        """
        if not 0.0 <= surround <= 2.0:
            raise ValueError(f"surround must be within [0, 2], got {surround}")

        if adapting_luminance <= 0.0:
            adapting_luminance = default_adapting_luminance()
        background_lstar = max(30.0, background_lstar)

        x_w, y_w, z_w = white_point
        r_w = x_w * 0.401288 + y_w * 0.650173 + z_w * -0.051461
        g_w = x_w * -0.250268 + y_w * 1.204414 + z_w * 0.045854
        b_w = x_w * -0.002079 + y_w * 0.048952 + z_w * 0.953127

        # Scale input surround, domain (0, 2), to CAM16 surround, domain (0.8, 1.0)
        f = 0.8 + (surround / 10.0)

        if f >= 0.9:
            c = lerp(0.59, 0.69, (f - 0.9) * 10.0)
        else:
            c = lerp(0.525, 0.59, (f - 0.8) * 10.0)

        if discounting_illuminant:
            d = 1.0
        else:
            d = f * (1.0 - ((1.0 / 3.6) * math.exp((-adapting_luminance - 42.0) / 92.0)))
        d = min(1.0, max(0.0, d))
        nc = f

        rgb_d = (
            d * (100.0 / r_w) + 1.0 - d,
            d * (100.0 / g_w) + 1.0 - d,
            d * (100.0 / b_w) + 1.0 - d,
        )

        k = 1.0 / (5.0 * adapting_luminance + 1.0)
        k4 = k * k * k * k
        k4_f = 1.0 - k4
        fl = (k4 * adapting_luminance) + (
            0.1 * k4_f * k4_f * (5.0 * adapting_luminance) ** (1.0 / 3.0)
        )

        n = y_from_lstar(background_lstar) / white_point[1]

        # Schlomer 2018 uses 1.58 here; the correct factor is 1.48
        z = 1.48 + math.sqrt(n)

        nbb = 0.725 / n ** 0.2
        ncb = nbb

        # Discounted cone responses to the white point, after the
        # post-adaptation nonlinearity
        rgb_a_factors = (
            (fl * rgb_d[0] * r_w / 100.0) ** 0.42,
            (fl * rgb_d[1] * g_w / 100.0) ** 0.42,
            (fl * rgb_d[2] * b_w / 100.0) ** 0.42,
        )
        rgb_a = [400.0 * factor / (factor + 27.13) for factor in rgb_a_factors]

        aw = (40.0 * rgb_a[0] + 20.0 * rgb_a[1] + rgb_a[2]) / 20.0 * nbb

        return cls(
            white_point=tuple(white_point),
            adapting_luminance=adapting_luminance,
            background_lstar=background_lstar,
            surround=surround,
            discounting_illuminant=discounting_illuminant,
            n=n,
            aw=aw,
            nbb=nbb,
            ncb=ncb,
            c=c,
            nc=nc,
            rgb_d=rgb_d,
            fl=fl,
            fl_root=fl ** 0.25,
            z=z,
        )


# Standard sRGB viewing: D65 white, mid-gray background, average surround.
DEFAULT = ViewingConditions.make()
