"""Spatial convolution filters (blur, sharpen and custom kernels)."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from scipy.ndimage import correlate

from pixel_studio.color_utils import to_channels
from pixel_studio.errors import InvalidArgument
from pixel_studio.grid import PixelGrid

logger = logging.getLogger(__name__)


class Kernel:
    """An immutable square matrix of weights with an odd side length."""

    __slots__ = ("_weights",)

    def __init__(self, weights: np.ndarray | Sequence[Sequence[float]]) -> None:
        try:
            arr = np.array(weights, dtype=np.float64)
        except ValueError as exc:
            raise InvalidArgument("Kernel must be a square matrix") from exc

        if arr.size == 0:
            raise InvalidArgument("Kernel must not be empty")
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            msg = f"Kernel must be a square matrix, got shape {arr.shape}"
            raise InvalidArgument(msg)
        if arr.shape[0] % 2 != 1:
            msg = f"Kernel side length must be odd, got {arr.shape[0]}"
            raise InvalidArgument(msg)

        arr.flags.writeable = False
        self._weights = arr

    @property
    def size(self) -> int:
        return self._weights.shape[0]

    @property
    def weights(self) -> np.ndarray:
        """Copy of the (size, size) float64 weight matrix."""
        return self._weights.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Kernel):
            return NotImplemented
        return bool(np.array_equal(self._weights, other._weights))

    def __hash__(self) -> int:
        return hash(self._weights.tobytes())

    def __repr__(self) -> str:
        return f"Kernel(size={self.size})"


BLUR = Kernel([
    [1 / 16, 1 / 8, 1 / 16],
    [1 / 8, 1 / 4, 1 / 8],
    [1 / 16, 1 / 8, 1 / 16],
])

SHARPEN = Kernel([
    [-1 / 8, -1 / 8, -1 / 8, -1 / 8, -1 / 8],
    [-1 / 8, 1 / 4, 1 / 4, 1 / 4, -1 / 8],
    [-1 / 8, 1 / 4, 1.0, 1 / 4, -1 / 8],
    [-1 / 8, 1 / 4, 1 / 4, 1 / 4, -1 / 8],
    [-1 / 8, -1 / 8, -1 / 8, -1 / 8, -1 / 8],
])


def apply_filter(grid: PixelGrid, kernel: Kernel) -> PixelGrid:
    """Convolve every channel of *grid* with *kernel*.

    Output pixel ``(r, c)`` is the weighted sum of
    ``kernel[i, j] * src[r - half + i, c - half + j]``.  Taps that fall
    outside the grid are simply left out of the sum: there is no edge
    clamping and no renormalisation, so borders come out darker under a
    normalised kernel.

    Args:
        grid:   Source image.
        kernel: Odd-sized square kernel.

    Returns:
        A new grid of the same dimensions.
    """
    logger.debug("Applying %dx%d kernel to %dx%d grid",
                 kernel.size, kernel.size, grid.width, grid.height)
    src = grid.to_array().astype(np.float64)
    # The channel axis gets a unit-length kernel so channels stay independent.
    weights = kernel.weights[:, :, np.newaxis]
    acc = correlate(src, weights, mode="constant", cval=0.0)
    return PixelGrid._from_trusted(to_channels(acc))


def blur(grid: PixelGrid) -> PixelGrid:
    """Smooth with the normalised 3x3 :data:`BLUR` kernel."""
    return apply_filter(grid, BLUR)


def sharpen(grid: PixelGrid) -> PixelGrid:
    """Sharpen with the 5x5 :data:`SHARPEN` kernel."""
    return apply_filter(grid, SHARPEN)
