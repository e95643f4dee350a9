"""Image loading, saving, and before/after comparison panels."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from pixel_studio.grid import PixelGrid

logger = logging.getLogger(__name__)


def load_grid(path: str | Path) -> PixelGrid:
    """Load any Pillow-readable image as an RGB :class:`PixelGrid`."""
    with Image.open(path) as img:
        grid = PixelGrid.from_image(img)
    logger.debug("Loaded %s (%dx%d)", path, grid.width, grid.height)
    return grid


def upscale_image(grid: PixelGrid, pixel_upscale: int = 1) -> Image.Image:
    """Render *grid* with every pixel as an n x n block."""
    img = grid.to_image()
    if pixel_upscale > 1:
        img = img.resize(
            (grid.width * pixel_upscale, grid.height * pixel_upscale),
            Image.NEAREST,
        )
    return img


def save_grid(
    grid: PixelGrid,
    path: str | Path,
    pixel_upscale: int = 1,
) -> None:
    """Save *grid*, optionally nearest-neighbour upscaled.

    The file format follows the extension of *path*.
    """
    upscale_image(grid, pixel_upscale).save(path)
    logger.debug("Saved %s", path)


def make_comparison_grid(
    before: PixelGrid,
    after: PixelGrid,
    output_path: str | Path,
    pixel_upscale: int = 1,
    labels: tuple[str, str] = ("Before", "After"),
) -> None:
    """Create a 2-panel comparison: Before | After.

    Both panels are scaled to the larger of the two grids so that, for
    example, a generated pattern can sit next to a loaded photo.
    """
    panel_w = max(before.width, after.width) * pixel_upscale
    panel_h = max(before.height, after.height) * pixel_upscale
    label_height = 36

    panels = [
        g.to_image().resize((panel_w, panel_h), Image.NEAREST)
        for g in (before, after)
    ]

    gap = 8
    total_w = len(panels) * panel_w + (len(panels) - 1) * gap
    total_h = panel_h + label_height

    canvas = Image.new("RGB", (total_w, total_h), (30, 30, 30))
    draw = ImageDraw.Draw(canvas)

    try:
        font = ImageFont.truetype(
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", 18,
        )
    except OSError:
        font = ImageFont.load_default()

    for i, (panel, label) in enumerate(zip(panels, labels, strict=False)):
        x = i * (panel_w + gap)
        canvas.paste(panel, (x, label_height))

        bbox = draw.textbbox((0, 0), label, font=font)
        text_w = bbox[2] - bbox[0]
        tx = x + (panel_w - text_w) // 2
        draw.text((tx, 6), label, fill=(220, 220, 220), font=font)

    canvas.save(output_path)
