"""
High-level width reduction that drives the groove pipeline.
"""

import logging

from typing import Iterator, List, Tuple

from .cost import build_cost_table, update_cost_table
from .errors import DegenerateGeometryError
from .grid import PixelGrid, require_grid
from .seam import Seam, find_seam, remove_seam

logger = logging.getLogger(__name__)


def _working_copy(image: PixelGrid, k: int) -> PixelGrid:
    image = require_grid(image)
    if isinstance(k, bool) or not isinstance(k, int):
        raise ValueError(f"k must be an integer, got {k!r}")
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")
    if k >= image.width:
        raise DegenerateGeometryError(
            f"Cannot remove {k} grooves from a grid of width {image.width}")
    return image.copy()


def _carve(grid: PixelGrid, k: int) -> Iterator[Seam]:
    """Remove k grooves from grid in place, yielding each one after removal."""
    if k == 0:
        return

    table = build_cost_table(grid)
    for n in range(k):
        seam = find_seam(table)
        remove_seam(grid, seam)
        update_cost_table(grid, table, seam)
        logger.debug("Groove %d/%d: cost %.1f, top column %d",
                     n + 1, k, seam.cost, int(seam.columns[0]))
        yield seam


def reduce_width(image: PixelGrid, k: int) -> PixelGrid:
    """
    Narrow an image by k columns, one least-energy groove at a time.

    The cost table is built once and repaired after every removal.

    Args:
        image: Source grid, left untouched
        k: Number of columns to remove, 0 <= k < image.width

    Returns:
        New grid of width image.width - k and the same height
    """
    carved = _working_copy(image, k)
    for _ in _carve(carved, k):
        pass
    return carved


def find_seams(image: PixelGrid, k: int) -> Tuple[PixelGrid, List[Seam]]:
    """
    Same as reduce_width, but also return the removed grooves.

    Each groove is expressed in the columns of the grid as it was when that
    groove was removed.

    Returns:
        (carved grid, grooves in removal order)
    """
    carved = _working_copy(image, k)
    seams = list(_carve(carved, k))
    return carved, seams
