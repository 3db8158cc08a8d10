"""
Quantizer entry points.

quantize() runs the Celebi composite: Wu's quantizer produces starting
colors, WSMeans refines them into the final clusters and populations.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable

import numpy as np

from wsmeans import MAX_ITERATIONS, as_pixel_array, count_distinct, quantize_wsmeans as _refine
from wu_quantizer import quantize_wu as _wu

logger = logging.getLogger(__name__)


@dataclass
class QuantizerResult:
    """Colors chosen by a quantizer, with how many pixels each represents."""
    color_to_count: dict  # ARGB -> pixel count, in quantizer order
    input_pixel_to_cluster_pixel: dict = field(default_factory=dict)

    @property
    def colors(self) -> list:
        return list(self.color_to_count.keys())


def _validate(pixels: np.ndarray, max_colors: int) -> None:
    if pixels.size == 0:
        raise ValueError("Cannot quantize an empty set of pixels")
    if max_colors < 1:
        raise ValueError(f"max_colors must be at least 1, got {max_colors}")


def opaque_pixels(pixels) -> np.ndarray:
    """Pixels with full alpha; anything with transparency is dropped."""
    pixels = as_pixel_array(pixels)
    return pixels[((pixels >> 24) & 255) == 255]


def quantize_map(pixels: Iterable[int]) -> QuantizerResult:
    """Count each opaque pixel color; pixels with any transparency are skipped."""
    colors, counts = count_distinct(opaque_pixels(pixels))
    return QuantizerResult(color_to_count=dict(zip(colors.tolist(), counts.tolist())))


def quantize_wu(pixels: Iterable[int], max_colors: int) -> QuantizerResult:
    """Quantize with Wu's algorithm alone."""
    pixels = as_pixel_array(pixels)
    _validate(pixels, max_colors)
    histogram = quantize_map(pixels).color_to_count
    return QuantizerResult(color_to_count=_wu(histogram, max_colors))


def quantize_wsmeans(
    pixels: Iterable[int],
    max_colors: int,
    starting_clusters: Iterable[int] = (),
    max_iterations: int = MAX_ITERATIONS,
    return_input_pixel_to_cluster_pixel: bool = False,
) -> QuantizerResult:
    """Quantize with weighted k-means alone, from the given starting colors."""
    pixels = as_pixel_array(pixels)
    _validate(pixels, max_colors)
    result = _refine(
        pixels,
        list(starting_clusters),
        max_colors,
        max_iterations=max_iterations,
        return_input_pixel_to_cluster_pixel=return_input_pixel_to_cluster_pixel,
    )
    return QuantizerResult(
        color_to_count=result.color_to_count,
        input_pixel_to_cluster_pixel=result.input_pixel_to_cluster_pixel,
    )


def quantize(
    pixels: Iterable[int],
    max_colors: int,
    return_input_pixel_to_cluster_pixel: bool = False,
) -> QuantizerResult:
    """
    Reduce a pixel population to at most max_colors representative colors.

    Only fully opaque pixels take part in either stage, so the populations
    count opaque pixels and the optional pixel map covers opaque pixels only.

    Args:
        pixels: ARGB pixels, as ints or a numpy integer array
        max_colors: Upper bound on the number of colors returned
        return_input_pixel_to_cluster_pixel: Also map each distinct input
            pixel to the color it was quantized to

    Returns:
        QuantizerResult mapping each color to its pixel count

    Raises:
        ValueError: If pixels is empty, holds no opaque pixel, or
            max_colors < 1
    """
    pixels = as_pixel_array(pixels)
    _validate(pixels, max_colors)

    opaque = opaque_pixels(pixels)
    if opaque.size == 0:
        raise ValueError("Cannot quantize: every pixel is transparent")

    wu_result = quantize_wu(opaque, max_colors)
    logger.debug("wu produced %d starting clusters", len(wu_result.color_to_count))

    return quantize_wsmeans(
        opaque,
        max_colors,
        starting_clusters=wu_result.colors,
        return_input_pixel_to_cluster_pixel=return_input_pixel_to_cluster_pixel,
    )
