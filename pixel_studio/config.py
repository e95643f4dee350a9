"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class StudioConfig:
    """All tuneable parameters for a processing run.

    Attributes:
        seed:            Random seed for mosaic sampling (None = non-deterministic).
        mosaic_seeds:    Default number of mosaic seeds.
        pixel_upscale:   Each pixel becomes n x n in saved images.
        output_format:   Image format for saved files.
        save_comparison: Generate a before/after comparison panel.
        input_dir:       Folder to scan for source images.
        output_dir:      Folder for results.
    """

    # Mosaic
    seed: int | None = None
    mosaic_seeds: int = 1000

    # Output
    pixel_upscale: int = 1
    output_format: str = "png"
    save_comparison: bool = False

    # Paths
    input_dir: Path = field(default_factory=lambda: Path("images"))
    output_dir: Path = field(default_factory=lambda: Path("output"))

    SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
        {".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".tif", ".webp", ".ppm", ".jfif"}
    )
