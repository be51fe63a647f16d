"""
Groove extraction and removal.

A groove (vertical seam) holds one pixel per row, from row 0 to row H-1, with
adjacent rows at most one column apart. It is traced backwards through a
CostTable starting from the cheapest cell of the last row.
"""

import torch
from typing import List, Tuple

from .cost import CostTable, require_table
from .errors import DegenerateGeometryError, InvalidGridError
from .grid import PixelGrid, require_grid


class Seam:
    """
    Vertical groove through a grid.

    Args:
        columns: Column index per row (H,)
        cost: Cumulative cost of the groove, the last-row minimum
    """

    def __init__(self, columns: torch.Tensor, cost: float):
        self.columns = torch.as_tensor(columns, dtype=torch.long)
        self.cost = cost

    @property
    def path(self) -> List[Tuple[int, int]]:
        """(row, column) pairs from the top row down."""
        return list(enumerate(self.columns.tolist()))

    def __len__(self):
        return self.columns.shape[0]

    def __repr__(self):
        return f"Seam(height={len(self)}, cost={self.cost})"


def _trace_step(above: List[float], c: int) -> int:
    """
    Column in the row above that the groove came from.

    Interior cells prefer above-left, then above, then above-right. The order
    is fixed so that equal-cost grooves are always traced the same way.
    """
    W = len(above)
    if W == 1:
        return 0

    if c == 0:
        return c + 1 if above[c + 1] < above[c] else c
    if c == W - 1:
        return c - 1 if above[c - 1] < above[c] else c

    left, center, right = above[c - 1], above[c], above[c + 1]
    if left < center and center < right:
        return c - 1
    if center < right:
        return c
    return c + 1


def find_seam(table: CostTable) -> Seam:
    """
    Minimum-cost groove by a single backward trace.

    The last row is scanned left to right keeping the first strict minimum,
    so ties go to the leftmost column.

    Args:
        table: Cost table of the current grid

    Returns:
        Seam with one column per row
    """
    table = require_table(table)
    H, W = table.height, table.width
    if W == 0:
        raise DegenerateGeometryError("Cannot find a groove in a zero-width table")

    costs = table.costs.tolist()

    last = costs[H - 1]
    best = 0
    for j in range(1, W):
        if last[j] < last[best]:
            best = j

    columns = [0] * H
    columns[H - 1] = best
    for r in range(H - 1, 0, -1):
        columns[r - 1] = _trace_step(costs[r - 1], columns[r])

    return Seam(torch.tensor(columns, dtype=torch.long), last[best])


def remove_seam(grid: PixelGrid, seam: Seam) -> PixelGrid:
    """
    Remove a groove from a grid in place.

    Args:
        grid: Grid to narrow
        seam: Groove with one column per grid row

    Returns:
        The same grid, one column narrower
    """
    grid = require_grid(grid)
    if seam is None:
        raise InvalidGridError("Seam is missing")
    if seam.columns is None:
        raise InvalidGridError("Seam has no columns")

    return grid.remove_seam(seam.columns)
