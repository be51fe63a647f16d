"""
Exceptions raised by the slimming pipeline.

Every stage fails fast with one of these instead of returning partial state.
"""


class CarvingError(Exception):
    """Base class for all width-reduction failures."""


class InvalidGridError(CarvingError):
    """A grid, cost table or seam is missing or malformed."""


class PixelOutOfBoundsError(CarvingError, IndexError):
    """A (row, column) coordinate lies outside the grid."""

    def __init__(self, i: int, j: int, height: int, width: int):
        super().__init__(f"Pixel ({i}, {j}) outside {height}x{width} grid")
        self.i = i
        self.j = j


class InvalidChannelError(CarvingError, ValueError):
    """A colour channel identifier other than red, green or blue."""


class DegenerateGeometryError(CarvingError):
    """The operation would need or produce a zero-width grid."""
