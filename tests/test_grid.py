"""Tests for PixelGrid storage and column removal."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import torch
import pytest
from slimming.grid import PixelGrid
from slimming.errors import (DegenerateGeometryError, InvalidGridError,
                             PixelOutOfBoundsError)

from conftest import make_column_index_grid, make_random_grid


class TestConstruction:
    def test_from_rows_shape_and_access(self):
        grid = PixelGrid.from_rows([[(1, 2, 3), (4, 5, 6)],
                                    [(7, 8, 9), (10, 11, 12)],
                                    [(13, 14, 15), (16, 17, 18)]])
        assert grid.height == 3
        assert grid.width == 2
        assert grid[0, 1] == (4, 5, 6)
        assert grid[2, 0] == (13, 14, 15)

    def test_array_round_trip(self):
        arr = np.random.default_rng(0).integers(0, 256, size=(4, 5, 3), dtype=np.uint8)
        grid = PixelGrid.from_array(arr)
        assert grid.width == 5 and grid.height == 4
        assert np.array_equal(grid.to_array(), arr)

    def test_wider_integer_tensor_is_accepted(self):
        grid = PixelGrid(torch.full((3, 2, 2), 255, dtype=torch.int64))
        assert grid.pixels.dtype == torch.uint8
        assert grid[1, 1] == (255, 255, 255)

    def test_missing_storage_rejected(self):
        with pytest.raises(InvalidGridError):
            PixelGrid(None)

    def test_wrong_channel_count_rejected(self):
        with pytest.raises(InvalidGridError):
            PixelGrid(torch.zeros(4, 2, 2, dtype=torch.uint8))

    def test_float_pixels_rejected(self):
        with pytest.raises(InvalidGridError):
            PixelGrid(torch.rand(3, 2, 2))

    def test_out_of_range_values_rejected(self):
        with pytest.raises(InvalidGridError):
            PixelGrid.from_rows([[(0, 0, 256)]])
        with pytest.raises(InvalidGridError):
            PixelGrid.from_rows([[(-1, 0, 0)]])

    def test_ragged_rows_rejected(self):
        with pytest.raises(InvalidGridError):
            PixelGrid.from_rows([[(0, 0, 0), (1, 1, 1)], [(2, 2, 2)]])

    def test_empty_rows_rejected(self):
        with pytest.raises(InvalidGridError):
            PixelGrid.from_rows([])


class TestAccess:
    def test_out_of_bounds_raises(self):
        grid = make_random_grid(3, 4)
        for i, j in [(-1, 0), (3, 0), (0, -1), (0, 4)]:
            with pytest.raises(PixelOutOfBoundsError):
                grid[i, j]

    def test_out_of_bounds_is_index_error(self):
        grid = make_random_grid(2, 2)
        with pytest.raises(IndexError):
            grid[5, 5]

    def test_copy_is_independent(self):
        grid = make_random_grid(4, 6)
        dup = grid.copy()
        assert dup == grid
        dup.remove_seam([0, 0, 0, 0])
        assert grid.width == 6
        assert dup.width == 5

    def test_equality_compares_pixels(self):
        a = make_random_grid(4, 6, seed=1)
        b = make_random_grid(4, 6, seed=2)
        assert a == a.copy()
        assert a != b


class TestRemoveSeam:
    def test_preserves_non_seam_pixels(self):
        """After removing a seam, remaining pixels should be the original values."""
        H, W = 4, 10
        grid = make_column_index_grid(H, W)
        grid.remove_seam([5] * H)

        assert grid.width == W - 1
        assert grid.pixels[0, 0].tolist() == [0, 1, 2, 3, 4, 6, 7, 8, 9]

    def test_with_varying_positions(self):
        """Seam that zigzags removes correct pixel from each row."""
        grid = make_column_index_grid(3, 6)
        grid.remove_seam(torch.tensor([2, 3, 2]))

        assert grid.pixels[0, 0].tolist() == [0, 1, 3, 4, 5]
        assert grid.pixels[0, 1].tolist() == [0, 1, 2, 4, 5]
        assert grid.pixels[0, 2].tolist() == [0, 1, 3, 4, 5]

    def test_rows_stay_in_place(self):
        grid = make_column_index_grid(5, 7)
        grid.remove_seam([6, 5, 4, 5, 6])
        for i in range(5):
            assert (grid.pixels[1, i] == i).all()

    def test_buffer_length_tracks_width(self):
        grid = make_random_grid(6, 8)
        for expected in range(7, 0, -1):
            grid.remove_seam([0] * 6)
            assert grid.width == expected
            assert grid.height == 6
            assert grid.pixels.numel() == 3 * grid.width * grid.height

    def test_last_column_can_be_removed(self):
        grid = make_column_index_grid(2, 1)
        grid.remove_seam([0, 0])
        assert grid.width == 0

    def test_zero_width_rejected(self):
        grid = PixelGrid(torch.zeros(3, 2, 0, dtype=torch.uint8))
        with pytest.raises(DegenerateGeometryError):
            grid.remove_seam([0, 0])

    def test_wrong_length_rejected(self):
        grid = make_random_grid(3, 4)
        with pytest.raises(InvalidGridError):
            grid.remove_seam([0, 0])

    def test_column_out_of_range_rejected(self):
        grid = make_random_grid(3, 4)
        with pytest.raises(InvalidGridError):
            grid.remove_seam([0, 4, 0])
        assert grid.width == 4

    def test_missing_columns_rejected(self):
        grid = make_random_grid(3, 4)
        with pytest.raises(InvalidGridError):
            grid.remove_seam(None)
