"""Linear colour transforms (greyscale, sepia) and channel rounding helpers."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from pixel_studio.errors import InvalidArgument
from pixel_studio.grid import PixelGrid


def round_half_away(values: np.ndarray) -> np.ndarray:
    """Round to the nearest integer, ties away from zero.

    ``np.round`` rounds half to even, which would turn 0.5 into 0.
    """
    return np.sign(values) * np.floor(np.abs(values) + 0.5)


def to_channels(values: np.ndarray) -> np.ndarray:
    """Round float channel values and clamp them into uint8 [0, 255]."""
    return np.clip(round_half_away(values), 0, 255).astype(np.uint8)


class ColorMatrix:
    """An immutable 3x3 matrix mapping an (r, g, b) vector to a new one."""

    __slots__ = ("_weights",)

    def __init__(self, weights: np.ndarray | Sequence[Sequence[float]]) -> None:
        try:
            arr = np.array(weights, dtype=np.float64)
        except ValueError as exc:
            raise InvalidArgument("Colour matrix must be 3x3") from exc
        if arr.shape != (3, 3):
            msg = f"Colour matrix must be 3x3, got shape {arr.shape}"
            raise InvalidArgument(msg)
        arr.flags.writeable = False
        self._weights = arr

    @property
    def weights(self) -> np.ndarray:
        """Copy of the 3x3 float64 matrix."""
        return self._weights.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorMatrix):
            return NotImplemented
        return bool(np.array_equal(self._weights, other._weights))

    def __hash__(self) -> int:
        return hash(self._weights.tobytes())

    def __repr__(self) -> str:
        return f"ColorMatrix({self._weights.tolist()})"


# Rec. 709 luma weights on every output channel.
GREYSCALE = ColorMatrix([
    [0.2126, 0.7152, 0.0722],
    [0.2126, 0.7152, 0.0722],
    [0.2126, 0.7152, 0.0722],
])

SEPIA = ColorMatrix([
    [0.393, 0.769, 0.189],
    [0.349, 0.686, 0.168],
    [0.272, 0.534, 0.131],
])


def apply_color_matrix(grid: PixelGrid, matrix: ColorMatrix) -> PixelGrid:
    """Multiply every pixel's channel vector by *matrix*.

    ``out[i] = round(sum_j matrix[i, j] * src[j])``, clamped to [0, 255].
    """
    src = grid.to_array().astype(np.float64)
    m = matrix.weights
    r, g, b = src[..., 0], src[..., 1], src[..., 2]
    out = np.empty_like(src)
    # Summed term by term (not via matmul) to keep the evaluation order fixed.
    for i in range(3):
        out[..., i] = m[i, 0] * r + m[i, 1] * g + m[i, 2] * b
    return PixelGrid._from_trusted(to_channels(out))


def greyscale(grid: PixelGrid) -> PixelGrid:
    """Luma greyscale via :data:`GREYSCALE`."""
    return apply_color_matrix(grid, GREYSCALE)


def sepia(grid: PixelGrid) -> PixelGrid:
    return apply_color_matrix(grid, SEPIA)
