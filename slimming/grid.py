"""
Pixel storage for width reduction.

A PixelGrid owns a (3, H, W) uint8 tensor of RGB values. Its width shrinks by
one every time a seam is removed; its height never changes.
"""

import numpy as np
import torch
from typing import Sequence, Tuple, Union

from .errors import DegenerateGeometryError, InvalidGridError, PixelOutOfBoundsError

ColumnsLike = Union[torch.Tensor, Sequence[int]]


def seam_mask(columns: ColumnsLike, height: int, width: int) -> torch.Tensor:
    """
    Boolean (H, W) mask that is False exactly at one column per row.

    Args:
        columns: Column to drop for each row, length H
        height: Number of rows
        width: Current number of columns

    Returns:
        Mask selecting the pixels that survive the removal
    """
    if columns is None:
        raise InvalidGridError("Seam has no columns")
    if width == 0:
        raise DegenerateGeometryError("Cannot remove a seam from a zero-width grid")

    cols = torch.as_tensor(columns, dtype=torch.long).flatten()
    if cols.shape[0] != height:
        raise InvalidGridError(
            f"Seam has {cols.shape[0]} entries, grid has {height} rows")
    if (cols < 0).any() or (cols >= width).any():
        raise InvalidGridError(f"Seam column outside [0, {width - 1}]")

    keep = torch.ones(height, width, dtype=torch.bool)
    keep[torch.arange(height), cols] = False
    return keep


class PixelGrid:
    """
    Row-major RGB image with a resizable width.

    Pixels are addressed as (row, column). The backing tensor has shape
    (3, height, width) and dtype uint8, so its element count is always
    3 * width * height.
    """

    def __init__(self, pixels: torch.Tensor):
        if pixels is None:
            raise InvalidGridError("Grid has no pixel storage")
        if not isinstance(pixels, torch.Tensor):
            raise InvalidGridError(f"Expected a tensor, got {type(pixels).__name__}")
        if pixels.dim() != 3 or pixels.shape[0] != 3:
            raise InvalidGridError(
                f"Expected pixels of shape (3, H, W), got {tuple(pixels.shape)}")
        if pixels.dtype.is_floating_point or pixels.dtype == torch.bool:
            raise InvalidGridError(f"Expected integer channels, got {pixels.dtype}")
        if pixels.shape[1] == 0:
            raise InvalidGridError("Grid must have at least one row")

        if pixels.dtype != torch.uint8:
            if pixels.numel() and (pixels.min() < 0 or pixels.max() > 255):
                raise InvalidGridError("Channel values must lie in [0, 255]")
            pixels = pixels.to(torch.uint8)

        self._pixels = pixels.contiguous()

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Tuple[int, int, int]]]):
        """
        Build a grid from nested rows of (r, g, b) triples.

        Args:
            rows: H rows of W triples each

        Returns:
            PixelGrid of shape (3, H, W)
        """
        if not rows:
            raise InvalidGridError("Grid must have at least one row")
        try:
            values = torch.tensor(rows, dtype=torch.int64)
        except (TypeError, ValueError) as exc:
            raise InvalidGridError(f"Rows are not a rectangular RGB grid: {exc}") from exc
        if values.dim() != 3 or values.shape[2] != 3:
            raise InvalidGridError(
                f"Expected rows of RGB triples, got shape {tuple(values.shape)}")
        return cls(values.permute(2, 0, 1))

    @classmethod
    def from_array(cls, array: np.ndarray):
        """Build a grid from an (H, W, 3) integer array."""
        if array is None:
            raise InvalidGridError("Grid has no pixel storage")
        arr = np.asarray(array)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise InvalidGridError(f"Expected an (H, W, 3) array, got {arr.shape}")
        if not np.issubdtype(arr.dtype, np.integer):
            raise InvalidGridError(f"Expected integer channels, got {arr.dtype}")
        if arr.size and (arr.min() < 0 or arr.max() > 255):
            raise InvalidGridError("Channel values must lie in [0, 255]")
        tensor = torch.from_numpy(np.ascontiguousarray(arr, dtype=np.uint8))
        return cls(tensor.permute(2, 0, 1))

    def to_array(self) -> np.ndarray:
        """Return an (H, W, 3) uint8 numpy copy of the pixels."""
        return self._pixels.permute(1, 2, 0).contiguous().numpy().copy()

    @property
    def pixels(self) -> torch.Tensor:
        return self._pixels

    @property
    def height(self) -> int:
        return self._pixels.shape[1]

    @property
    def width(self) -> int:
        return self._pixels.shape[2]

    def check_bounds(self, i: int, j: int):
        if not (0 <= i < self.height and 0 <= j < self.width):
            raise PixelOutOfBoundsError(i, j, self.height, self.width)

    def __getitem__(self, key: Tuple[int, int]) -> Tuple[int, int, int]:
        i, j = key
        self.check_bounds(i, j)
        r, g, b = self._pixels[:, i, j].tolist()
        return r, g, b

    def copy(self) -> 'PixelGrid':
        return PixelGrid(self._pixels.clone())

    def remove_seam(self, columns: ColumnsLike) -> 'PixelGrid':
        """
        Delete one pixel per row in place and shrink the width by one.

        Surviving pixels keep their left-to-right order, so every pixel right
        of the removed one moves one column to the left.

        Args:
            columns: Column to delete in each row, length H

        Returns:
            self, narrower by one column
        """
        C, H, W = self._pixels.shape
        keep = seam_mask(columns, H, W)
        self._pixels = self._pixels[:, keep].reshape(C, H, W - 1).contiguous()
        return self

    def __eq__(self, other):
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return (self._pixels.shape == other._pixels.shape
                and torch.equal(self._pixels, other._pixels))

    __hash__ = None

    def __repr__(self):
        return f"PixelGrid(height={self.height}, width={self.width})"


def require_grid(grid) -> PixelGrid:
    if grid is None:
        raise InvalidGridError("Grid is missing")
    if not isinstance(grid, PixelGrid):
        raise InvalidGridError(f"Expected a PixelGrid, got {type(grid).__name__}")
    return grid
