"""
Wu's statistical color quantizer.

Builds a 3D histogram of the opaque input colors at 5 bits per channel,
integrates it into a summed-volume table of moments, and recursively cuts
the color cube where the cut removes the most variance. The mean color of
each resulting box is a representative color for the pixels inside it.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from color_math import argb_from_rgb

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# 5 of the 8 bits per channel keep the histogram at ~32k cells instead of 16M
INDEX_BITS = 5
MAX_INDEX = 32
SIDE_LENGTH = 33  # one extra index on each axis for inclusive prefix sums
TOTAL_SIZE = SIDE_LENGTH ** 3

RED, GREEN, BLUE = 0, 1, 2


# =============================================================================
# Histogram
# =============================================================================

@dataclass
class Moments:
    """Summed-volume tables over the (33, 33, 33) reduced color cube."""
    weights: np.ndarray  # pixel counts
    moments_r: np.ndarray  # sum of red values
    moments_g: np.ndarray
    moments_b: np.ndarray
    moments: np.ndarray  # sum of r^2 + g^2 + b^2

    def tables(self) -> tuple:
        return (self.moments_r, self.moments_g, self.moments_b, self.weights)


def construct_histogram(color_to_count: dict) -> Moments:
    """Accumulate weight and raw moments for each color's histogram cell."""
    shape = (SIDE_LENGTH, SIDE_LENGTH, SIDE_LENGTH)
    weights = np.zeros(shape, dtype=np.int64)
    moments_r = np.zeros(shape, dtype=np.int64)
    moments_g = np.zeros(shape, dtype=np.int64)
    moments_b = np.zeros(shape, dtype=np.int64)
    moments = np.zeros(shape, dtype=np.float64)

    if color_to_count:
        argbs = np.fromiter(color_to_count.keys(), dtype=np.int64, count=len(color_to_count))
        counts = np.fromiter(color_to_count.values(), dtype=np.int64, count=len(color_to_count))

        red = (argbs >> 16) & 255
        green = (argbs >> 8) & 255
        blue = argbs & 255

        bits_to_remove = 8 - INDEX_BITS
        index = (
            (red >> bits_to_remove) + 1,
            (green >> bits_to_remove) + 1,
            (blue >> bits_to_remove) + 1,
        )

        np.add.at(weights, index, counts)
        np.add.at(moments_r, index, red * counts)
        np.add.at(moments_g, index, green * counts)
        np.add.at(moments_b, index, blue * counts)
        np.add.at(moments, index, (counts * (red * red + green * green + blue * blue)).astype(np.float64))

    return Moments(weights, moments_r, moments_g, moments_b, moments)


def compute_moments(histogram: Moments) -> Moments:
    """
    Integrate the histogram into summed-volume tables.

    Cell (r, g, b) of each table holds the sum over all cells with indices
    <= (r, g, b), so any box sum needs only 8 lookups.
    """
    def integrate(table: np.ndarray) -> np.ndarray:
        return table.cumsum(axis=2).cumsum(axis=1).cumsum(axis=0)

    return Moments(
        weights=integrate(histogram.weights),
        moments_r=integrate(histogram.moments_r),
        moments_g=integrate(histogram.moments_g),
        moments_b=integrate(histogram.moments_b),
        moments=integrate(histogram.moments),
    )


# =============================================================================
# Boxes
# =============================================================================

@dataclass(frozen=True)
class Box:
    """Axis-aligned box (r0, r1] x (g0, g1] x (b0, b1] in the reduced cube."""
    r0: int = 0
    r1: int = 0
    g0: int = 0
    g1: int = 0
    b0: int = 0
    b1: int = 0

    @property
    def vol(self) -> int:
        return (self.r1 - self.r0) * (self.g1 - self.g0) * (self.b1 - self.b0)


def volume(box: Box, moment: np.ndarray):
    """Sum of a moment table over the box, by inclusion-exclusion."""
    return (
        moment[box.r1, box.g1, box.b1]
        - moment[box.r1, box.g1, box.b0]
        - moment[box.r1, box.g0, box.b1]
        + moment[box.r1, box.g0, box.b0]
        - moment[box.r0, box.g1, box.b1]
        + moment[box.r0, box.g1, box.b0]
        + moment[box.r0, box.g0, box.b1]
        - moment[box.r0, box.g0, box.b0]
    )


def bottom(box: Box, direction: int, moment: np.ndarray):
    """Part of a box sum that does not depend on the cut position."""
    if direction == RED:
        return (
            -moment[box.r0, box.g1, box.b1]
            + moment[box.r0, box.g1, box.b0]
            + moment[box.r0, box.g0, box.b1]
            - moment[box.r0, box.g0, box.b0]
        )
    if direction == GREEN:
        return (
            -moment[box.r1, box.g0, box.b1]
            + moment[box.r1, box.g0, box.b0]
            + moment[box.r0, box.g0, box.b1]
            - moment[box.r0, box.g0, box.b0]
        )
    return (
        -moment[box.r1, box.g1, box.b0]
        + moment[box.r1, box.g0, box.b0]
        + moment[box.r0, box.g1, box.b0]
        - moment[box.r0, box.g0, box.b0]
    )


def top(box: Box, direction: int, positions: np.ndarray, moment: np.ndarray) -> np.ndarray:
    """Position-dependent part of the box sum, for every cut position at once."""
    if direction == RED:
        return (
            moment[positions, box.g1, box.b1]
            - moment[positions, box.g1, box.b0]
            - moment[positions, box.g0, box.b1]
            + moment[positions, box.g0, box.b0]
        )
    if direction == GREEN:
        return (
            moment[box.r1, positions, box.b1]
            - moment[box.r1, positions, box.b0]
            - moment[box.r0, positions, box.b1]
            + moment[box.r0, positions, box.b0]
        )
    return (
        moment[box.r1, box.g1, positions]
        - moment[box.r1, box.g0, positions]
        - moment[box.r0, box.g1, positions]
        + moment[box.r0, box.g0, positions]
    )


def variance(box: Box, m: Moments) -> float:
    """Sum of squared deviations from the mean color inside the box."""
    dr = float(volume(box, m.moments_r))
    dg = float(volume(box, m.moments_g))
    db = float(volume(box, m.moments_b))
    xx = float(volume(box, m.moments))
    hypotenuse = dr * dr + dg * dg + db * db
    weight = float(volume(box, m.weights))
    if weight == 0:
        return 0.0
    return xx - hypotenuse / weight


def maximize(box: Box, direction: int, first: int, last: int, whole: tuple, m: Moments) -> tuple:
    """
    Find the cut plane in [first, last) maximizing the between-halves variance.

    Returns:
        (cut_location, maximum); cut_location is -1 when no plane leaves
        pixels on both sides.
    """
    if last <= first:
        return -1, 0.0

    positions = np.arange(first, last)
    halves = [
        float(bottom(box, direction, table)) + top(box, direction, positions, table).astype(np.float64)
        for table in m.tables()
    ]
    half_r, half_g, half_b, half_w = halves
    whole_r, whole_g, whole_b, whole_w = (float(w) for w in whole)

    other_r = whole_r - half_r
    other_g = whole_g - half_g
    other_b = whole_b - half_b
    other_w = whole_w - half_w

    valid = (half_w != 0) & (other_w != 0)
    if not valid.any():
        return -1, 0.0

    with np.errstate(divide='ignore', invalid='ignore'):
        temp = (half_r * half_r + half_g * half_g + half_b * half_b) / half_w
        temp += (other_r * other_r + other_g * other_g + other_b * other_b) / other_w
    temp = np.where(valid, temp, 0.0)

    # First strictly-greater maximum wins, like a left-to-right scan
    best = int(np.argmax(temp))
    maximum = float(temp[best])
    if maximum <= 0.0:
        return -1, 0.0
    return int(positions[best]), maximum


def cut(box: Box, m: Moments) -> Optional[tuple]:
    """
    Split a box along the axis whose best cut removes the most variance.

    Ties prefer red, then green, then blue.

    Returns:
        (lower, upper) boxes, or None if the box cannot be split.
    """
    whole = (
        volume(box, m.moments_r),
        volume(box, m.moments_g),
        volume(box, m.moments_b),
        volume(box, m.weights),
    )

    cut_r, max_r = maximize(box, RED, box.r0 + 1, box.r1, whole, m)
    cut_g, max_g = maximize(box, GREEN, box.g0 + 1, box.g1, whole, m)
    cut_b, max_b = maximize(box, BLUE, box.b0 + 1, box.b1, whole, m)

    if max_r >= max_g and max_r >= max_b:
        if cut_r < 0:
            return None
        lower = Box(box.r0, cut_r, box.g0, box.g1, box.b0, box.b1)
        upper = Box(cut_r, box.r1, box.g0, box.g1, box.b0, box.b1)
    elif max_g >= max_r and max_g >= max_b:
        lower = Box(box.r0, box.r1, box.g0, cut_g, box.b0, box.b1)
        upper = Box(box.r0, box.r1, cut_g, box.g1, box.b0, box.b1)
    else:
        lower = Box(box.r0, box.r1, box.g0, box.g1, box.b0, cut_b)
        upper = Box(box.r0, box.r1, box.g0, box.g1, cut_b, box.b1)
    return lower, upper


def create_boxes(m: Moments, max_color_count: int) -> list:
    """
    Repeatedly cut the box with the highest variance.

    Boxes live in an arena indexed by position: a cut replaces the box at
    `next_index` with its lower half and stores the upper half at the first
    unused slot. Stops at max_color_count boxes or when no box has variance
    left to reduce.
    """
    boxes = [Box(r1=MAX_INDEX, g1=MAX_INDEX, b1=MAX_INDEX)]
    volume_variance = [0.0]
    next_index = 0

    while len(boxes) < max_color_count:
        halves = cut(boxes[next_index], m)
        if halves is not None:
            lower, upper = halves
            boxes[next_index] = lower
            boxes.append(upper)
            volume_variance[next_index] = variance(lower, m) if lower.vol > 1 else 0.0
            volume_variance.append(variance(upper, m) if upper.vol > 1 else 0.0)
        else:
            volume_variance[next_index] = 0.0

        next_index = 0
        highest = volume_variance[0]
        for j in range(1, len(boxes)):
            if volume_variance[j] > highest:
                highest = volume_variance[j]
                next_index = j
        if highest <= 0.0:
            break

    logger.debug("wu: %d boxes generated, %d requested", len(boxes), max_color_count)
    return boxes


# =============================================================================
# Quantizer
# =============================================================================

def quantize_wu(color_to_count: dict, max_colors: int) -> dict:
    """
    Quantize a color histogram with Wu's algorithm.

    Args:
        color_to_count: Opaque ARGB colors mapped to pixel counts
        max_colors: Upper bound on the number of colors returned

    Returns:
        dict of mean ARGB color -> pixel weight, one entry per non-empty
        box, in box order. Boxes sharing a mean color are combined.
    """
    histogram = construct_histogram(color_to_count)
    m = compute_moments(histogram)
    boxes = create_boxes(m, max_colors)

    results = {}
    for box in boxes:
        weight = int(volume(box, m.weights))
        if weight <= 0:
            continue
        r = int(volume(box, m.moments_r)) // weight
        g = int(volume(box, m.moments_g)) // weight
        b = int(volume(box, m.moments_b)) // weight
        color = argb_from_rgb(r, g, b)
        results[color] = results.get(color, 0) + weight
    return results
