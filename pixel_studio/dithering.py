"""Floyd-Steinberg error-diffusion dithering to pure black and white.

The image is first reduced to luma greyscale, then scanned in row-major
order.  Each channel value is snapped to 0 or 255 and the quantisation
error is pushed onto the four not-yet-visited neighbours:

             x     7/16
    3/16   5/16    1/16

Every share is rounded to an integer on its own when it is added, so the
working buffer stays integral.  Later pixels depend on the errors of earlier
ones, which makes the scan inherently sequential.
"""

from __future__ import annotations

import logging

import numpy as np

from pixel_studio.color_utils import greyscale
from pixel_studio.grid import PixelGrid

logger = logging.getLogger(__name__)

# (row offset, column offset, numerator over 16)
_DIFFUSION = ((0, 1, 7), (1, -1, 3), (1, 0, 5), (1, 1, 1))


def quantize(values: np.ndarray) -> np.ndarray:
    """Snap each value to 0 or 255, whichever is nearer (ties go to 0)."""
    return np.where(np.abs(values) <= np.abs(values - 255), 0, 255)


def _share(error: np.ndarray, weight: int) -> np.ndarray:
    # Nearest integer with halves rounded up, as in java.lang.Math.round.
    return np.floor(error * weight / 16.0 + 0.5).astype(np.int64)


def dither(grid: PixelGrid) -> PixelGrid:
    """Reduce *grid* to black and white with error diffusion.

    Args:
        grid: Source image (any colours).

    Returns:
        A new grid of the same size whose channels are all 0 or 255.
    """
    h, w = grid.shape
    logger.debug("Dithering %dx%d grid", w, h)
    result = greyscale(grid).to_array().astype(np.int64)

    for y in range(h):
        for x in range(w):
            old = result[y, x].copy()
            new = quantize(old)
            error = old - new
            result[y, x] = new

            for dy, dx, weight in _DIFFUSION:
                ny, nx = y + dy, x + dx
                if ny >= h or nx < 0 or nx >= w:
                    continue
                result[ny, nx] += _share(error, weight)

    return PixelGrid._from_trusted(result)
