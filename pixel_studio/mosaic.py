"""Voronoi mosaic: every pixel takes the colour of its nearest random seed."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from pixel_studio.errors import InvalidArgument
from pixel_studio.grid import Color, PixelGrid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Seed:
    """A sampled pixel: its ``(row, col)`` position and original colour."""

    row: int
    col: int
    color: Color


def _make_rng(rng: np.random.Generator | int | None) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def sample_seeds(
    grid: PixelGrid,
    seed_count: int,
    rng: np.random.Generator | int | None = None,
) -> list[Seed]:
    """Pick *seed_count* distinct pixels uniformly without replacement.

    Args:
        grid:       Source image.
        seed_count: Number of seeds; clamped to the pixel count.
        rng:        Generator or integer seed (``None`` = non-deterministic).

    Returns:
        Seeds in sampling order.

    Raises:
        InvalidArgument: if *seed_count* is negative.
    """
    if seed_count < 0:
        msg = f"Number of seeds must be non-negative, got {seed_count}"
        raise InvalidArgument(msg)
    count = min(seed_count, grid.pixel_count)

    flat = _make_rng(rng).choice(grid.pixel_count, size=count, replace=False)
    pixels = grid.to_array()
    seeds = []
    for idx in flat:
        row, col = divmod(int(idx), grid.width)
        r, g, b = pixels[row, col]
        seeds.append(Seed(row, col, (int(r), int(g), int(b))))
    return seeds


def nearest_seed_index(
    height: int,
    width: int,
    seeds: list[Seed],
    chunk_size: int = 512,
) -> np.ndarray:
    """For every pixel, the index of the closest seed (row-major, flat).

    Distances are compared squared so ties are detected exactly; a tie goes
    to the seed that comes first in *seeds*.

    Args:
        height, width: Grid dimensions.
        seeds:         Non-empty seed list.
        chunk_size:    Pixels processed per batch (controls peak RAM).

    Returns:
        (height * width,) int array of seed indices.
    """
    seed_pos = np.array([(s.row, s.col) for s in seeds], dtype=np.int64)
    rows, cols = np.divmod(np.arange(height * width, dtype=np.int64), width)

    n = height * width
    nearest = np.empty(n, dtype=np.int64)
    for i in range(0, n, chunk_size):
        j = min(i + chunk_size, n)
        dr = rows[i:j, np.newaxis] - seed_pos[np.newaxis, :, 0]
        dc = cols[i:j, np.newaxis] - seed_pos[np.newaxis, :, 1]
        # argmin returns the first minimum, i.e. the earliest sampled seed.
        nearest[i:j] = np.argmin(dr * dr + dc * dc, axis=1)
    return nearest


def mosaic(
    grid: PixelGrid,
    seed_count: int,
    rng: np.random.Generator | int | None = None,
) -> PixelGrid:
    """Quantise *grid* into Voronoi cells around randomly sampled seeds.

    With ``seed_count == 0`` there is nothing to spread, so the grid is
    returned unchanged.  With ``seed_count >= pixel_count`` every pixel is
    its own seed and the output equals the input.

    Raises:
        InvalidArgument: if *seed_count* is negative.
    """
    seeds = sample_seeds(grid, seed_count, rng)
    if not seeds:
        logger.debug("Mosaic with no seeds, returning input unchanged")
        return PixelGrid._from_trusted(grid.to_array())

    h, w = grid.shape
    logger.debug("Mosaic: %d seeds over %dx%d grid", len(seeds), w, h)
    t0 = time.perf_counter()
    nearest = nearest_seed_index(h, w, seeds)
    colors = np.array([s.color for s in seeds], dtype=np.uint8)
    out = colors[nearest].reshape(h, w, 3)
    logger.debug("Mosaic assigned (%.2f s)", time.perf_counter() - t0)
    return PixelGrid._from_trusted(out)
