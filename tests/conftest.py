"""Shared test fixtures for the slimming test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from slimming.grid import PixelGrid
from slimming.energy import energy


@pytest.fixture
def bright_center_grid():
    """3 columns x 2 rows, black edges around a grey center column."""
    row = [(0, 0, 0), (50, 50, 50), (0, 0, 0)]
    return PixelGrid.from_rows([row, list(row)])


@pytest.fixture
def uniform_grid():
    """12x9 solid colour grid."""
    return make_uniform_grid(12, 9, (40, 120, 200))


def make_uniform_grid(H, W, color):
    pixels = torch.tensor(color, dtype=torch.uint8).view(3, 1, 1).expand(3, H, W)
    return PixelGrid(pixels.clone())


def make_random_grid(H, W, seed=0):
    """Random RGB noise with a fixed seed."""
    gen = torch.Generator().manual_seed(seed)
    return PixelGrid(torch.randint(0, 256, (3, H, W), dtype=torch.uint8, generator=gen))


def make_column_index_grid(H, W):
    """Every pixel's red channel holds its column, green its row."""
    pixels = torch.zeros(3, H, W, dtype=torch.uint8)
    pixels[0] = torch.arange(W).to(torch.uint8).unsqueeze(0).expand(H, W)
    pixels[1] = torch.arange(H).to(torch.uint8).unsqueeze(1).expand(H, W)
    return PixelGrid(pixels)


def exhaustive_seam_cost(grid):
    """Minimum groove cost by trying every path from the top row.

    Exponential in the height; only for tiny grids.
    """
    H, W = grid.height, grid.width
    e = [[energy(grid, i, j) for j in range(W)] for i in range(H)]

    def cheapest_from(i, j):
        if i == H - 1:
            return e[i][j]
        below = [cheapest_from(i + 1, c) for c in (j - 1, j, j + 1) if 0 <= c < W]
        return e[i][j] + min(below)

    return min(cheapest_from(0, j) for j in range(W))
