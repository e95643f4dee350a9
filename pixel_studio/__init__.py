"""
Pixel Studio
============

Pure, immutable-value image transforms over dense RGB pixel grids:

- **Filters**: blur, sharpen or any odd-sized convolution kernel
- **Colour matrices**: greyscale, sepia or any 3x3 transform
- **Dithering**: Floyd-Steinberg error diffusion to black and white
- **Mosaic**: Voronoi quantisation around random seed pixels
- **Patterns**: rainbow, French, Swiss and Greek flags, checkerboards

plus a batch-script interpreter, an undo history and a Pillow file codec.
"""

__version__ = "1.0.0"

from pixel_studio.color_utils import (
    GREYSCALE,
    SEPIA,
    ColorMatrix,
    apply_color_matrix,
    greyscale,
    sepia,
)
from pixel_studio.config import StudioConfig
from pixel_studio.dithering import dither
from pixel_studio.errors import InvalidArgument, ScriptError
from pixel_studio.filters import BLUR, SHARPEN, Kernel, apply_filter, blur, sharpen
from pixel_studio.grid import PixelGrid
from pixel_studio.history import History
from pixel_studio.image_io import load_grid, make_comparison_grid, save_grid
from pixel_studio.mosaic import Seed, mosaic, sample_seeds
from pixel_studio.operations import OPERATIONS, apply_operation
from pixel_studio.patterns import (
    PATTERNS,
    checkerboard,
    french_flag,
    greek_flag,
    rainbow_flag,
    swiss_flag,
)
from pixel_studio.script import Command, ScriptRunner, dump_script, parse_script

__all__ = [
    "BLUR",
    "GREYSCALE",
    "OPERATIONS",
    "PATTERNS",
    "SEPIA",
    "SHARPEN",
    "ColorMatrix",
    "Command",
    "History",
    "InvalidArgument",
    "Kernel",
    "PixelGrid",
    "ScriptError",
    "ScriptRunner",
    "Seed",
    "StudioConfig",
    "apply_color_matrix",
    "apply_filter",
    "apply_operation",
    "blur",
    "checkerboard",
    "dither",
    "dump_script",
    "french_flag",
    "greek_flag",
    "greyscale",
    "load_grid",
    "make_comparison_grid",
    "mosaic",
    "parse_script",
    "rainbow_flag",
    "sample_seeds",
    "save_grid",
    "sepia",
    "sharpen",
    "swiss_flag",
]
