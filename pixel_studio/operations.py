"""Named image operations shared by the script runner, the CLI and the UI."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np

from pixel_studio.color_utils import greyscale, sepia
from pixel_studio.dithering import dither
from pixel_studio.errors import InvalidArgument
from pixel_studio.filters import blur, sharpen
from pixel_studio.grid import PixelGrid
from pixel_studio.mosaic import mosaic

# Operations that take no argument and map a grid to a new one.
TRANSFORMS: dict[str, Callable[[PixelGrid], PixelGrid]] = {
    "blur": blur,
    "sharpen": sharpen,
    "greyscale": greyscale,
    "sepia": sepia,
    "dithering": dither,
}

# Short names accepted on the command line and in the UI.
ALIASES: dict[str, str] = {"dither": "dithering"}

OPERATIONS = ("blur", "sharpen", "greyscale", "sepia", "dither", "mosaic")


def apply_operation(
    grid: PixelGrid,
    operation: str,
    seeds: int,
    rng: np.random.Generator,
) -> PixelGrid:
    """Dispatch a named operation (see :data:`OPERATIONS`).

    ``seeds`` is only used by ``mosaic``.
    """
    if operation == "mosaic":
        return mosaic(grid, seeds, rng)
    fn = TRANSFORMS.get(ALIASES.get(operation, operation))
    if fn is None:
        available = ", ".join(OPERATIONS)
        msg = f"Unknown operation '{operation}'. Available: {available}"
        raise InvalidArgument(msg)
    return fn(grid)
