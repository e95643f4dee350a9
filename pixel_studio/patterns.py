"""Procedural pattern generators: flags and a checkerboard.

Each generator validates its size up front and raises
:class:`~pixel_studio.errors.InvalidArgument` before allocating anything.
Stripe thickness is ``size // stripes``; any leftover rows or columns at the
far edge belong to the last stripe.
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np

from pixel_studio.errors import InvalidArgument
from pixel_studio.grid import Color, PixelGrid

BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)
RED: Color = (255, 0, 0)
ORANGE: Color = (255, 200, 0)
YELLOW: Color = (255, 255, 0)
GREEN: Color = (0, 255, 0)
CYAN: Color = (0, 255, 255)
BLUE: Color = (0, 0, 255)
PURPLE: Color = (104, 49, 255)

RAINBOW: tuple[Color, ...] = (RED, ORANGE, YELLOW, GREEN, CYAN, BLUE, PURPLE)
FRENCH: tuple[Color, ...] = (BLUE, WHITE, RED)
GREEK: tuple[Color, ...] = tuple(BLUE if i % 2 == 0 else WHITE for i in range(9))

DIRECTIONS = ("h", "v")


def _stripe_index(length: int, stripes: int) -> np.ndarray:
    """Stripe number for each of *length* positions."""
    thickness = length // stripes
    return np.minimum(np.arange(length) // thickness, stripes - 1)


def _palette(colors: tuple[Color, ...]) -> np.ndarray:
    return np.array(colors, dtype=np.uint8)


def rainbow_flag(height: int, width: int, direction: str = "h") -> PixelGrid:
    """Seven-stripe rainbow flag.

    Args:
        height:    Image height; at least 7 for horizontal stripes.
        width:     Image width; at least 7 for vertical stripes.
        direction: ``"h"`` (stripes stacked top to bottom) or ``"v"``
            (stripes left to right).
    """
    if direction not in DIRECTIONS:
        msg = f"Direction can only be 'h' or 'v', got {direction!r}"
        raise InvalidArgument(msg)
    if direction == "h" and (height < 7 or width < 1):
        msg = f"Horizontal rainbow flag needs height >= 7, got {height}x{width}"
        raise InvalidArgument(msg)
    if direction == "v" and (width < 7 or height < 1):
        msg = f"Vertical rainbow flag needs width >= 7, got {height}x{width}"
        raise InvalidArgument(msg)

    colors = _palette(RAINBOW)
    if direction == "h":
        bands = colors[_stripe_index(height, 7)][:, np.newaxis, :]
    else:
        bands = colors[_stripe_index(width, 7)][np.newaxis, :, :]
    return PixelGrid._from_trusted(np.broadcast_to(bands, (height, width, 3)))


def checkerboard(square_size: int) -> PixelGrid:
    """8x8 board of ``square_size`` squares, white in the top-left corner."""
    if square_size < 1:
        msg = f"Square size must be positive, got {square_size}"
        raise InvalidArgument(msg)

    side = 8 * square_size
    band = np.arange(side) // square_size
    black = ((band[:, np.newaxis] + band[np.newaxis, :]) % 2).astype(bool)
    out = np.where(black[..., np.newaxis], _palette((BLACK,)), _palette((WHITE,)))
    return PixelGrid._from_trusted(out)


def french_flag(height: int, width: int) -> PixelGrid:
    """Blue, white and red vertical stripes."""
    if height < 1 or width < 3:
        msg = f"Too small for the French flag: {height}x{width} (need >= 1x3)"
        raise InvalidArgument(msg)

    bands = _palette(FRENCH)[_stripe_index(width, 3)][np.newaxis, :, :]
    return PixelGrid._from_trusted(np.broadcast_to(bands, (height, width, 3)))


def swiss_flag(height: int, width: int) -> PixelGrid:
    """Red field with a centred white cross.

    The cross is the union of a horizontal bar (rows 2/5-3/5, columns
    1/5-4/5) and a vertical bar (rows 1/5-4/5, columns 2/5-3/5); all bounds
    are exclusive.
    """
    if height < 5 or width < 5:
        msg = f"Too small for the Swiss flag: {height}x{width} (need >= 5x5)"
        raise InvalidArgument(msg)

    rows = np.arange(height)[:, np.newaxis]
    cols = np.arange(width)[np.newaxis, :]

    def between(pos: np.ndarray, lo: float, hi: float, size: int) -> np.ndarray:
        return (pos > lo * size) & (pos < hi * size)

    cross = (
        between(rows, 2 / 5, 3 / 5, height) & between(cols, 1 / 5, 4 / 5, width)
    ) | (
        between(rows, 1 / 5, 4 / 5, height) & between(cols, 2 / 5, 3 / 5, width)
    )
    out = np.where(cross[..., np.newaxis], _palette((WHITE,)), _palette((RED,)))
    return PixelGrid._from_trusted(out)


# Canton and cross proportions of the Greek flag (18.1 x 27 reference frame).
_CANTON_HEIGHT = 10.0 / 18.1
_CANTON_WIDTH = 10.0 / 27.0
_CROSS_ROWS = (4.0 / 18.1, 6.0 / 18.1)
_CROSS_COLS = (4.0 / 27.0, 6.0 / 27.0)


def greek_flag(height: int, width: int) -> PixelGrid:
    """Nine blue/white stripes with a white cross on a blue canton."""
    if height < 9 or width < 4:
        msg = f"Too small for the Greek flag: {height}x{width} (need >= 9x4)"
        raise InvalidArgument(msg)

    stripes = _palette(GREEK)[_stripe_index(height, 9)][:, np.newaxis, :]
    out = np.array(np.broadcast_to(stripes, (height, width, 3)))

    canton_h = int(np.floor(_CANTON_HEIGHT * height)) + 1
    canton_w = int(np.floor(_CANTON_WIDTH * width)) + 1
    rows = np.arange(canton_h)[:, np.newaxis]
    cols = np.arange(canton_w)[np.newaxis, :]
    cross = (
        (rows > height * _CROSS_ROWS[0]) & (rows < height * _CROSS_ROWS[1])
    ) | (
        (cols > width * _CROSS_COLS[0]) & (cols < width * _CROSS_COLS[1])
    )
    out[:canton_h, :canton_w] = np.where(
        cross[..., np.newaxis], _palette((WHITE,)), _palette((BLUE,)),
    )
    return PixelGrid._from_trusted(out)


# Names used by batch scripts and the CLI.
PATTERNS: dict[str, Callable[..., PixelGrid]] = {
    "rainbowFlag": rainbow_flag,
    "checkerboard": checkerboard,
    "frenchFlag": french_flag,
    "swissFlag": swiss_flag,
    "greeceFlag": greek_flag,
}
