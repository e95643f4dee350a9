"""The immutable RGB pixel grid every operation consumes and produces."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from PIL import Image

from pixel_studio.errors import InvalidArgument

Color = tuple[int, int, int]


class PixelGrid:
    """A rectangular ``H x W`` grid of ``(r, g, b)`` triples in [0, 255].

    The pixels are stored as a read-only ``(H, W, 3)`` uint8 array.  Every
    accessor that hands the pixels out returns an independent copy, so a
    grid can be shared freely between callers (e.g. an undo history).
    """

    __slots__ = ("_data",)

    def __init__(self, data: np.ndarray | Sequence) -> None:
        try:
            arr = np.asarray(data)
        except ValueError as exc:
            msg = "Pixel data must be a rectangular grid of (r, g, b) triples"
            raise InvalidArgument(msg) from exc

        if arr.ndim != 3 or arr.shape[2] != 3:
            msg = f"Pixel data must have shape (H, W, 3), got {arr.shape}"
            raise InvalidArgument(msg)
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise InvalidArgument("Pixel grid must contain at least one pixel")
        if arr.dtype.kind == "f":
            if not np.all(np.isfinite(arr)) or not np.array_equal(arr, np.round(arr)):
                raise InvalidArgument("Channel values must be integers")
        elif arr.dtype.kind not in "biu":
            msg = f"Channel values must be integers, got dtype {arr.dtype}"
            raise InvalidArgument(msg)
        if arr.min() < 0 or arr.max() > 255:
            raise InvalidArgument("Channel values must lie in [0, 255]")

        self._data = _freeze(arr.astype(np.uint8))

    @classmethod
    def _from_trusted(cls, arr: np.ndarray) -> PixelGrid:
        """Wrap an engine-produced (H, W, 3) array already in [0, 255]."""
        grid = cls.__new__(cls)
        grid._data = _freeze(np.ascontiguousarray(arr, dtype=np.uint8))
        return grid

    @classmethod
    def filled(cls, height: int, width: int, color: Color) -> PixelGrid:
        """A grid of the given size painted in a single colour."""
        if height < 1 or width < 1:
            raise InvalidArgument("Height and width must be positive")
        arr = np.empty((height, width, 3), dtype=np.uint8)
        arr[:] = color
        return cls._from_trusted(arr)

    @classmethod
    def from_image(cls, image: Image.Image) -> PixelGrid:
        """Build a grid from a Pillow image (converted to RGB)."""
        return cls._from_trusted(np.array(image.convert("RGB"), dtype=np.uint8))

    # -- Accessors -----------------------------------------------------

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        """``(height, width)``."""
        return self._data.shape[0], self._data.shape[1]

    @property
    def pixel_count(self) -> int:
        return self.height * self.width

    def pixel(self, row: int, col: int) -> Color:
        """Return the ``(r, g, b)`` triple at ``(row, col)``."""
        if not (0 <= row < self.height and 0 <= col < self.width):
            msg = f"Pixel ({row}, {col}) outside {self.height}x{self.width} grid"
            raise IndexError(msg)
        r, g, b = self._data[row, col]
        return int(r), int(g), int(b)

    def to_array(self) -> np.ndarray:
        """Independent, writable (H, W, 3) uint8 copy of the pixels."""
        return self._data.copy()

    def to_list(self) -> list[list[list[int]]]:
        """Independent nested-list copy: ``rows[r][c] == [r, g, b]``."""
        return self._data.tolist()

    def to_image(self) -> Image.Image:
        """Render as a Pillow RGB image."""
        return Image.fromarray(self._data.copy())

    # -- Value semantics -----------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    def __hash__(self) -> int:
        return hash((self._data.shape, self._data.tobytes()))

    def __repr__(self) -> str:
        return f"PixelGrid(height={self.height}, width={self.width})"


def _freeze(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr
