"""
Color space math shared by every stage of the theme pipeline.

ARGB packing, sRGB transfer functions, XYZ and L*a*b* conversions, plus the
small numeric helpers (clamping, degree arithmetic) used by CAM16 and HCT.
Colors are 32-bit ARGB ints: [alpha:8][red:8][green:8][blue:8].
"""

import math

import numpy as np


# =============================================================================
# Constants
# =============================================================================

SRGB_TO_XYZ = (
    (0.41233895, 0.35762064, 0.18051042),
    (0.2126, 0.7152, 0.0722),
    (0.01932141, 0.11916382, 0.95034478),
)

XYZ_TO_SRGB = (
    (3.2413774792388685, -1.5376652402851851, -0.49885366846268053),
    (-0.9691452513005321, 1.8758853451067872, 0.04156585616912061),
    (0.05562093689691305, -0.20395524564742123, 1.0571799111220335),
)

# Standard white point; white on a sunny day.
WHITE_POINT_D65 = (95.047, 100.0, 108.883)

LAB_EPSILON = 216.0 / 24389.0
LAB_KAPPA = 24389.0 / 27.0


# =============================================================================
# Math Utilities
# =============================================================================

def signum(num: float) -> int:
    """Returns 1 if num > 0, -1 if num < 0, and 0 if num = 0."""
    if num < 0:
        return -1
    if num == 0:
        return 0
    return 1


def lerp(start: float, stop: float, amount: float) -> float:
    """Linear interpolation; start at amount 0, stop at amount 1."""
    return (1.0 - amount) * start + amount * stop


def clamp_int(low: int, high: int, value: int) -> int:
    if value < low:
        return low
    if value > high:
        return high
    return value


def clamp_double(low: float, high: float, value: float) -> float:
    if value < low:
        return low
    if value > high:
        return high
    return value


def sanitize_degrees_int(degrees: int) -> int:
    """Wrap an integer degree measure into [0, 360)."""
    return degrees % 360


def sanitize_degrees_double(degrees: float) -> float:
    """Wrap a degree measure into [0.0, 360.0)."""
    degrees = math.fmod(degrees, 360.0)
    if degrees < 0:
        degrees += 360.0
    # fmod of a tiny negative value can round back up to exactly 360
    if degrees >= 360.0:
        degrees -= 360.0
    return degrees


def difference_degrees(a: float, b: float) -> float:
    """Distance of two points on a circle, in degrees (0-180)."""
    return 180.0 - abs(abs(a - b) - 180.0)


def rotation_direction(start: float, end: float) -> float:
    """Sign of the shortest rotation from start to end: 1.0 or -1.0."""
    increasing_difference = sanitize_degrees_double(end - start)
    return 1.0 if increasing_difference <= 180.0 else -1.0


def matrix_multiply(row, matrix) -> tuple:
    """Multiply a 3x3 matrix by a 3-vector."""
    return (
        row[0] * matrix[0][0] + row[1] * matrix[0][1] + row[2] * matrix[0][2],
        row[0] * matrix[1][0] + row[1] * matrix[1][1] + row[2] * matrix[1][2],
        row[0] * matrix[2][0] + row[1] * matrix[2][1] + row[2] * matrix[2][2],
    )


# =============================================================================
# ARGB Packing
# =============================================================================

def alpha_from_argb(argb: int) -> int:
    return (argb >> 24) & 255


def red_from_argb(argb: int) -> int:
    return (argb >> 16) & 255


def green_from_argb(argb: int) -> int:
    return (argb >> 8) & 255


def blue_from_argb(argb: int) -> int:
    return argb & 255


def argb_from_rgb(red: int, green: int, blue: int) -> int:
    """Pack opaque RGB components (0-255) into ARGB."""
    return (255 << 24) | ((red & 255) << 16) | ((green & 255) << 8) | (blue & 255)


def hex_from_argb(argb: int) -> str:
    """Format the RGB part of a color as #rrggbb."""
    return f"#{red_from_argb(argb):02x}{green_from_argb(argb):02x}{blue_from_argb(argb):02x}"


def argb_from_hex(hex_color: str) -> int:
    """Parse #rgb, #rrggbb or #aarrggbb (hash optional) into ARGB."""
    h = hex_color.strip().lstrip("#")
    if h.lower().startswith("0x"):
        h = h[2:]
    if len(h) == 3:
        h = h[0] * 2 + h[1] * 2 + h[2] * 2
    if len(h) == 6:
        h = "ff" + h
    if len(h) != 8:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    try:
        return int(h, 16)
    except ValueError:
        raise ValueError(f"Invalid hex color: {hex_color!r}")


# =============================================================================
# Transfer Functions
# =============================================================================

def linearized(rgb_component: int) -> float:
    """sRGB component (0-255) to linear RGB (0.0-100.0)."""
    normalized = rgb_component / 255.0
    if normalized <= 0.040449936:
        return normalized / 12.92 * 100.0
    return ((normalized + 0.055) / 1.055) ** 2.4 * 100.0


def delinearized(rgb_component: float) -> int:
    """Linear RGB (0.0-100.0) to sRGB component (0-255), rounded and clamped."""
    normalized = rgb_component / 100.0
    if normalized <= 0.0031308:
        delinearized_value = normalized * 12.92
    else:
        delinearized_value = 1.055 * normalized ** (1.0 / 2.4) - 0.055
    # Round half up, then clamp into the byte range
    return clamp_int(0, 255, math.floor(delinearized_value * 255.0 + 0.5))


def argb_from_linrgb(linrgb) -> int:
    return argb_from_rgb(
        delinearized(linrgb[0]),
        delinearized(linrgb[1]),
        delinearized(linrgb[2]),
    )


# =============================================================================
# XYZ and L*a*b*
# =============================================================================

def _lab_f(t: float) -> float:
    if t > LAB_EPSILON:
        return t ** (1.0 / 3.0)
    return (LAB_KAPPA * t + 16.0) / 116.0


def _lab_inv_f(ft: float) -> float:
    ft3 = ft * ft * ft
    if ft3 > LAB_EPSILON:
        return ft3
    return (116.0 * ft - 16.0) / LAB_KAPPA


def xyz_from_argb(argb: int) -> tuple:
    r = linearized(red_from_argb(argb))
    g = linearized(green_from_argb(argb))
    b = linearized(blue_from_argb(argb))
    return matrix_multiply((r, g, b), SRGB_TO_XYZ)


def argb_from_xyz(x: float, y: float, z: float) -> int:
    linear = matrix_multiply((x, y, z), XYZ_TO_SRGB)
    return argb_from_linrgb(linear)


def lab_from_argb(argb: int) -> tuple:
    """Convert an ARGB color to (L*, a*, b*)."""
    x, y, z = xyz_from_argb(argb)
    fx = _lab_f(x / WHITE_POINT_D65[0])
    fy = _lab_f(y / WHITE_POINT_D65[1])
    fz = _lab_f(z / WHITE_POINT_D65[2])
    return (116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz))


def argb_from_lab(l: float, a: float, b: float) -> int:
    """Convert (L*, a*, b*) to the nearest ARGB color."""
    fy = (l + 16.0) / 116.0
    fx = a / 500.0 + fy
    fz = fy - b / 200.0
    x = _lab_inv_f(fx) * WHITE_POINT_D65[0]
    y = _lab_inv_f(fy) * WHITE_POINT_D65[1]
    z = _lab_inv_f(fz) * WHITE_POINT_D65[2]
    return argb_from_xyz(x, y, z)


def y_from_lstar(lstar: float) -> float:
    """
    Converts an L* value to a Y value.

    L* in L*a*b* and Y in XYZ measure the same quantity, luminance. L*
    measures perceptual luminance, a linear scale; Y measures relative
    luminance, a logarithmic scale.
    """
    return 100.0 * _lab_inv_f((lstar + 16.0) / 116.0)


def lstar_from_y(y: float) -> float:
    """Converts a Y value (0-100) to an L* value (0-100)."""
    return 116.0 * _lab_f(y / 100.0) - 16.0


def lstar_from_argb(argb: int) -> float:
    y = xyz_from_argb(argb)[1]
    return 116.0 * _lab_f(y / 100.0) - 16.0


def argb_from_lstar(lstar: float) -> int:
    """Grayscale ARGB color whose lightness matches L*."""
    component = delinearized(y_from_lstar(lstar))
    return argb_from_rgb(component, component, component)


# =============================================================================
# Vectorized Conversion
# =============================================================================

def rgb_from_argb_array(argbs: np.ndarray) -> np.ndarray:
    """Unpack an array of ARGB ints into an (n, 3) uint8 RGB array."""
    argbs = np.asarray(argbs, dtype=np.int64)
    return np.column_stack([
        (argbs >> 16) & 255,
        (argbs >> 8) & 255,
        argbs & 255,
    ]).astype(np.uint8)


def lab_from_argb_array(argbs: np.ndarray) -> np.ndarray:
    """Convert an array of ARGB ints to an (n, 3) array of L*a*b* values."""
    rgb_norm = rgb_from_argb_array(argbs).astype(np.float64) / 255.0
    if rgb_norm.shape[0] == 0:
        return np.zeros((0, 3))

    # Same transfer function and matrix as the scalar path
    mask = rgb_norm <= 0.040449936
    rgb_linear = np.where(
        mask,
        rgb_norm / 12.92 * 100.0,
        ((rgb_norm + 0.055) / 1.055) ** 2.4 * 100.0,
    )

    r, g, b = rgb_linear[:, 0], rgb_linear[:, 1], rgb_linear[:, 2]
    m = SRGB_TO_XYZ
    x = r * m[0][0] + g * m[0][1] + b * m[0][2]
    y = r * m[1][0] + g * m[1][1] + b * m[1][2]
    z = r * m[2][0] + g * m[2][1] + b * m[2][2]

    x, y, z = x / WHITE_POINT_D65[0], y / WHITE_POINT_D65[1], z / WHITE_POINT_D65[2]

    fx = np.where(x > LAB_EPSILON, x ** (1.0 / 3.0), (LAB_KAPPA * x + 16) / 116)
    fy = np.where(y > LAB_EPSILON, y ** (1.0 / 3.0), (LAB_KAPPA * y + 16) / 116)
    fz = np.where(z > LAB_EPSILON, z ** (1.0 / 3.0), (LAB_KAPPA * z + 16) / 116)

    L = 116 * fy - 16
    a = 500 * (fx - fy)
    b_val = 200 * (fy - fz)

    return np.column_stack([L, a, b_val])
