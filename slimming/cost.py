"""
Cumulative cost table for vertical grooves.

cost[i, j] is the minimum total energy of any groove running from row 0 to
pixel (i, j). The table is built once by a forward dynamic program and then
repaired after each groove removal instead of being rebuilt.
"""

import logging

import torch
from typing import Tuple

from .energy import energy_band, energy_map
from .errors import DegenerateGeometryError, InvalidGridError
from .grid import ColumnsLike, PixelGrid, require_grid, seam_mask

logger = logging.getLogger(__name__)


class CostTable:
    """(H, W) float64 matrix of cumulative groove costs."""

    def __init__(self, costs: torch.Tensor):
        if costs is None:
            raise InvalidGridError("Cost table has no storage")
        if not isinstance(costs, torch.Tensor) or costs.dim() != 2:
            raise InvalidGridError("Expected a 2-D cost tensor")
        self._costs = costs.to(torch.float64).contiguous()

    @property
    def costs(self) -> torch.Tensor:
        return self._costs

    @property
    def height(self) -> int:
        return self._costs.shape[0]

    @property
    def width(self) -> int:
        return self._costs.shape[1]

    def __getitem__(self, key: Tuple[int, int]) -> float:
        i, j = key
        if not (0 <= i < self.height and 0 <= j < self.width):
            raise IndexError(f"Cell ({i}, {j}) outside {self.height}x{self.width} table")
        return self._costs[i, j].item()

    def row(self, i: int) -> torch.Tensor:
        return self._costs[i]

    def copy(self) -> 'CostTable':
        return CostTable(self._costs.clone())

    def remove_seam(self, columns: ColumnsLike) -> 'CostTable':
        """Drop one cell per row, shifting the rest of each row left."""
        H, W = self._costs.shape
        keep = seam_mask(columns, H, W)
        self._costs = self._costs[keep].reshape(H, W - 1).contiguous()
        return self

    def __repr__(self):
        return f"CostTable(height={self.height}, width={self.width})"


def require_table(table) -> CostTable:
    if table is None:
        raise InvalidGridError("Cost table is missing")
    if not isinstance(table, CostTable):
        raise InvalidGridError(f"Expected a CostTable, got {type(table).__name__}")
    return table


def _relax(prev: torch.Tensor, energies: torch.Tensor,
           start: int, stop: int) -> torch.Tensor:
    """
    Apply the groove recurrence to columns [start, stop) of one row.

    Each cell adds its energy to the cheapest of the up-to-three cells above
    it. Edge columns only see the two cells that exist.

    Args:
        prev: Full cost row above (W,)
        energies: Energies of the cells being computed (stop - start,)
        start: First column (inclusive)
        stop: Last column (exclusive)

    Returns:
        Costs for columns [start, stop)
    """
    inf = torch.full((1,), float('inf'), dtype=prev.dtype)
    padded = torch.cat([inf, prev, inf])

    above_left = padded[start:stop]
    above = padded[start + 1:stop + 1]
    above_right = padded[start + 2:stop + 2]

    return energies + torch.minimum(torch.minimum(above_left, above), above_right)


def build_cost_table(grid: PixelGrid) -> CostTable:
    """
    Full forward pass of the groove dynamic program.

    Args:
        grid: Source grid

    Returns:
        CostTable with the grid's shape
    """
    grid = require_grid(grid)
    H, W = grid.height, grid.width
    if W == 0:
        raise DegenerateGeometryError("Cannot build a cost table for a zero-width grid")

    energy = energy_map(grid)
    costs = torch.empty(H, W, dtype=torch.float64)
    costs[0] = energy[0]

    for i in range(1, H):
        costs[i] = _relax(costs[i - 1], energy[i], 0, W)

    logger.debug("Built %dx%d cost table", H, W)
    return CostTable(costs)


def update_cost_table(grid: PixelGrid, table: CostTable, seam) -> CostTable:
    """
    Repair a cost table after a groove has been removed from its grid.

    The table is first narrowed by deleting the groove's cell in every row.
    Only cells whose value can differ from a full rebuild are then recomputed.
    Those lie in a cone rooted at the groove's top column c0: the two pixels
    beside the removed one change energy, and the change spreads by at most one
    column per row, so row i recomputes columns [c0 - 1 - i, c0 + i].

    Args:
        grid: Grid after the groove was removed
        table: Cost table of the grid before removal, modified in place
        seam: The removed groove (anything with a ``columns`` sequence)

    Returns:
        The repaired table, equal to build_cost_table(grid)
    """
    grid = require_grid(grid)
    table = require_table(table)
    if seam is None:
        raise InvalidGridError("Seam is missing")
    columns = getattr(seam, 'columns', None)
    if columns is None:
        raise InvalidGridError("Seam has no columns")

    H, W = grid.height, grid.width
    if table.height != H:
        raise InvalidGridError(
            f"Cost table has {table.height} rows, grid has {H}")
    if table.width != W + 1:
        raise InvalidGridError(
            f"Cost table width {table.width} does not match grid width {W} + 1")

    table.remove_seam(columns)
    if W == 0:
        return table

    c0 = int(columns[0])
    costs = table.costs
    recomputed = 0

    for i in range(H):
        start = max(c0 - 1 - i, 0)
        stop = min(c0 + i, W - 1) + 1
        if start >= stop:
            continue

        energies = energy_band(grid, i, start, stop)
        if i == 0:
            costs[0, start:stop] = energies
        else:
            costs[i, start:stop] = _relax(costs[i - 1], energies, start, stop)
        recomputed += stop - start

    logger.debug("Recomputed %d of %d cost cells from column %d", recomputed, H * W, c0)
    return table
