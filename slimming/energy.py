"""
Energy function for groove carving.

The energy of a pixel measures local colour variation and stands in for its
visual importance. Low-energy grooves are removed first.

For each channel the energy is the L1 gradient magnitude built from central
differences, averaged by halving each term:

    E_c(i,j) = |v(i-1,j) - v(i+1,j)| / 2 + |v(i,j-1) - v(i,j+1)| / 2

On borders the missing neighbour is replaced by the pixel itself, which turns
the term into a one-sided difference. The pixel energy sums the three channels.
"""

import enum

import torch

from .errors import InvalidChannelError, InvalidGridError
from .grid import PixelGrid, require_grid


class Channel(enum.IntEnum):
    RED = 0
    GREEN = 1
    BLUE = 2


def _as_channel(channel) -> Channel:
    if isinstance(channel, str):
        try:
            return Channel[channel.upper()]
        except KeyError:
            raise InvalidChannelError(f"Unknown channel: {channel!r}") from None
    if isinstance(channel, bool):
        raise InvalidChannelError(f"Unknown channel: {channel!r}")
    try:
        return Channel(channel)
    except ValueError:
        raise InvalidChannelError(f"Unknown channel: {channel!r}") from None


def _channel_gradients(pixels: torch.Tensor, rows: torch.Tensor,
                       cols: torch.Tensor) -> torch.Tensor:
    """
    Per-channel gradient energy on the grid rows x cols.

    Args:
        pixels: (3, H, W) pixel tensor
        rows: Row indices (R,)
        cols: Column indices (K,)

    Returns:
        (3, R, K) float64 energies
    """
    _, H, W = pixels.shape

    up = (rows - 1).clamp(min=0)
    down = (rows + 1).clamp(max=H - 1)
    left = (cols - 1).clamp(min=0)
    right = (cols + 1).clamp(max=W - 1)

    def take(r, c):
        return pixels[:, r][:, :, c].to(torch.float64)

    vertical = torch.abs(take(up, cols) - take(down, cols)) / 2
    horizontal = torch.abs(take(rows, left) - take(rows, right)) / 2
    return vertical + horizontal


def _sum_channels(per_channel: torch.Tensor) -> torch.Tensor:
    return per_channel[0] + per_channel[1] + per_channel[2]


def _pixel_gradients(grid: PixelGrid, i: int, j: int) -> torch.Tensor:
    grid.check_bounds(i, j)
    rows = torch.tensor([i], dtype=torch.long)
    cols = torch.tensor([j], dtype=torch.long)
    return _channel_gradients(grid.pixels, rows, cols)[:, 0, 0]


def channel_energy(grid: PixelGrid, i: int, j: int, channel) -> float:
    """
    Gradient energy of a single colour channel at pixel (i, j).

    Args:
        grid: Source grid
        i: Row index
        j: Column index
        channel: Channel member, its integer value, or its name

    Returns:
        Non-negative channel energy
    """
    grid = require_grid(grid)
    channel = _as_channel(channel)
    return _pixel_gradients(grid, i, j)[int(channel)].item()


def energy(grid: PixelGrid, i: int, j: int) -> float:
    """Energy of pixel (i, j): the sum of its three channel energies."""
    grid = require_grid(grid)
    return _sum_channels(_pixel_gradients(grid, i, j)).item()


def energy_band(grid: PixelGrid, row: int, start: int, stop: int) -> torch.Tensor:
    """
    Energies of columns [start, stop) of one row.

    Args:
        grid: Source grid
        row: Row index
        start: First column (inclusive)
        stop: Last column (exclusive)

    Returns:
        (stop - start,) float64 tensor
    """
    grid = require_grid(grid)
    if not 0 <= row < grid.height:
        raise InvalidGridError(f"Row {row} outside [0, {grid.height - 1}]")
    if not 0 <= start <= stop <= grid.width:
        raise InvalidGridError(
            f"Column range [{start}, {stop}) outside [0, {grid.width}]")

    rows = torch.tensor([row], dtype=torch.long)
    cols = torch.arange(start, stop, dtype=torch.long)
    return _sum_channels(_channel_gradients(grid.pixels, rows, cols))[0]


def energy_map(grid: PixelGrid) -> torch.Tensor:
    """
    Energy of every pixel.

    Args:
        grid: Source grid

    Returns:
        Energy map (H, W), float64
    """
    grid = require_grid(grid)
    rows = torch.arange(grid.height, dtype=torch.long)
    cols = torch.arange(grid.width, dtype=torch.long)
    return _sum_channels(_channel_gradients(grid.pixels, rows, cols))
