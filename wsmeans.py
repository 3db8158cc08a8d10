"""
Weighted k-means ("WSMeans") refinement of quantized colors in L*a*b*.

Starting centroids usually come from the Wu quantizer. Each distinct input
color is a point weighted by its pixel count; points are reassigned to their
nearest centroid using the triangle inequality to skip centroids that cannot
be closer, then centroids are recomputed as weighted means.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable

import numpy as np
from scipy.spatial.distance import cdist

from color_math import argb_from_lab, lab_from_argb_array

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

MAX_ITERATIONS = 5
RANDOM_SEED = 0x42688  # Fixed so supplemental centroids are reproducible
PRUNE_FACTOR = 4.0  # Squared distances: 4x is twice the Euclidean distance
ASSIGN_CHUNK_SIZE = 8192  # Points per point-to-centroid distance block


@dataclass
class WSMeansResult:
    """Output of a WSMeans run."""
    color_to_count: dict  # ARGB -> population, in cluster order
    input_pixel_to_cluster_pixel: dict = field(default_factory=dict)
    iterations: int = 0


def as_pixel_array(pixels) -> np.ndarray:
    """Flat int64 array of ARGB pixels from any iterable or numpy array."""
    if isinstance(pixels, np.ndarray):
        return pixels.ravel().astype(np.int64)
    return np.array(list(pixels), dtype=np.int64).ravel()


def count_distinct(pixels: np.ndarray) -> tuple:
    """
    Distinct pixels in first-seen order, with their counts.

    Returns:
        (pixels, counts) as int64 arrays of equal length
    """
    if pixels.size == 0:
        return np.zeros(0, dtype=np.int64), np.zeros(0, dtype=np.int64)
    unique, first_index, counts = np.unique(pixels, return_index=True, return_counts=True)
    order = np.argsort(first_index, kind='stable')
    return unique[order], counts[order].astype(np.int64)


def _starting_clusters(
    starting_argbs: list,
    points: np.ndarray,
    cluster_count: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Lab centroids for the caller's starting colors, topped up with observed points.

    K-means is very sensitive to its initial clusters. Random synthetic
    centroids tend to land far from any pixel and end up empty, so extra
    centroids are distinct points drawn from the input itself.
    """
    clusters = lab_from_argb_array(np.array(starting_argbs[:cluster_count], dtype=np.int64))
    additional = cluster_count - len(clusters)
    if additional > 0:
        indices = rng.choice(len(points), size=additional, replace=False)
        clusters = np.vstack([clusters, points[indices]])
    return clusters


def reassign(
    points: np.ndarray,
    clusters: np.ndarray,
    cluster_indices: np.ndarray,
    chunk_size: int = ASSIGN_CHUNK_SIZE,
) -> tuple:
    """
    Move every point to its nearest centroid, reading one centroid snapshot.

    A centroid at least twice as far from the point's current centroid as
    the point is cannot be closer to the point, so it is skipped. A point
    moves only when the best remaining centroid is strictly closer; ties go
    to the lowest cluster index.

    Returns:
        (new_cluster_indices, points_moved)
    """
    cluster_distances = cdist(clusters, clusters, 'sqeuclidean')
    new_indices = cluster_indices.copy()
    points_moved = 0

    for start in range(0, len(points), chunk_size):
        stop = min(start + chunk_size, len(points))
        rows = np.arange(stop - start)
        previous = cluster_indices[start:stop]

        distances = cdist(points[start:stop], clusters, 'sqeuclidean')
        previous_distance = distances[rows, previous]

        candidates = cluster_distances[previous] < PRUNE_FACTOR * previous_distance[:, None]
        pruned = np.where(candidates, distances, np.inf)
        best = np.argmin(pruned, axis=1)
        moved = pruned[rows, best] < previous_distance

        new_indices[start:stop][moved] = best[moved]
        points_moved += int(moved.sum())

    return new_indices, points_moved


def quantize_wsmeans(
    input_pixels: Iterable[int],
    starting_clusters: Iterable[int],
    max_colors: int,
    max_iterations: int = MAX_ITERATIONS,
    return_input_pixel_to_cluster_pixel: bool = False,
    seed: int = RANDOM_SEED,
) -> WSMeansResult:
    """
    Refine starting colors with weighted k-means in L*a*b*.

    Args:
        input_pixels: ARGB pixels as ints or a numpy integer array;
            repeated pixels add weight
        starting_clusters: ARGB colors used as the first centroids
        max_colors: Upper bound on the number of clusters
        max_iterations: Upper bound on assignment/update rounds
        return_input_pixel_to_cluster_pixel: Also map each distinct input
            pixel to its cluster's color
        seed: Seed for choosing supplemental centroids

    Returns:
        WSMeansResult with cluster colors mapped to their populations.
        Empty clusters are dropped; clusters rounding to the same ARGB are
        merged and their populations summed.

    Raises:
        ValueError: If there are no input pixels or max_colors < 1
    """
    if max_colors < 1:
        raise ValueError(f"max_colors must be at least 1, got {max_colors}")

    pixels, counts = count_distinct(as_pixel_array(input_pixels))
    point_count = len(pixels)
    if point_count == 0:
        raise ValueError("Cannot quantize an empty set of pixels")

    points = lab_from_argb_array(pixels)
    cluster_count = min(max_colors, point_count)

    rng = np.random.default_rng(seed)
    clusters = _starting_clusters(list(starting_clusters), points, cluster_count, rng)
    logger.debug("have %d starting clusters, %d points", len(clusters), point_count)

    cluster_indices = np.arange(point_count) % cluster_count
    iterations = 0

    for iteration in range(max_iterations):
        iterations = iteration + 1
        cluster_indices, points_moved = reassign(points, clusters, cluster_indices)

        if points_moved == 0 and iteration > 0:
            logger.debug("terminated after %d k-means iterations", iteration)
            break

        logger.debug("iteration %d moved %d", iteration + 1, points_moved)

        pixel_count_sums = np.bincount(cluster_indices, weights=counts, minlength=cluster_count)
        component_sums = np.column_stack([
            np.bincount(cluster_indices, weights=points[:, axis] * counts, minlength=cluster_count)
            for axis in range(3)
        ])
        nonempty = pixel_count_sums > 0
        new_clusters = np.zeros_like(clusters)
        new_clusters[nonempty] = component_sums[nonempty] / pixel_count_sums[nonempty, None]
        clusters = new_clusters

        empty = int(cluster_count - nonempty.sum())
        if empty:
            logger.debug("%d of %d clusters are empty", empty, cluster_count)

    populations = np.bincount(cluster_indices, weights=counts, minlength=cluster_count).astype(np.int64)

    color_to_count = {}
    cluster_argbs = [None] * cluster_count
    for i in range(cluster_count):
        count = int(populations[i])
        if count == 0:
            continue
        argb = argb_from_lab(*clusters[i].tolist())
        cluster_argbs[i] = argb
        color_to_count[argb] = color_to_count.get(argb, 0) + count

    logger.debug(
        "kmeans finished and generated %d clusters; %d were requested",
        len(color_to_count), cluster_count,
    )

    input_pixel_to_cluster_pixel = {}
    if return_input_pixel_to_cluster_pixel:
        for pixel, cluster_index in zip(pixels.tolist(), cluster_indices.tolist()):
            input_pixel_to_cluster_pixel[pixel] = cluster_argbs[cluster_index]

    return WSMeansResult(
        color_to_count=color_to_count,
        input_pixel_to_cluster_pixel=input_pixel_to_cluster_pixel,
        iterations=iterations,
    )
