"""
Image file loading and saving.
"""

import numpy as np
from PIL import Image

from .errors import DegenerateGeometryError
from .grid import PixelGrid, require_grid

# Pillow writes binary PPM for both of these
_PNM_SUFFIXES = ('.pnm', '.ppm')


def load_image(path: str) -> PixelGrid:
    """Load any Pillow-readable image as an RGB PixelGrid."""
    with Image.open(path) as img:
        img_array = np.array(img.convert('RGB'), dtype=np.uint8)
    return PixelGrid.from_array(img_array)


def save_image(grid: PixelGrid, path: str):
    """Save a PixelGrid; the format follows the file extension."""
    grid = require_grid(grid)
    if grid.width == 0:
        raise DegenerateGeometryError("Cannot save a zero-width image")

    img = Image.fromarray(grid.to_array())
    if str(path).lower().endswith(_PNM_SUFFIXES):
        img.save(path, format='PPM')
    else:
        img.save(path)
