"""
Content-aware width reduction by groove (seam) carving.

The cost table of minimum groove costs is built once and then repaired
incrementally after every removal.
"""

__version__ = "0.1.0"

from .errors import (CarvingError, InvalidGridError, PixelOutOfBoundsError,
                     InvalidChannelError, DegenerateGeometryError)
from .grid import PixelGrid
from .energy import Channel, channel_energy, energy, energy_map, energy_band
from .cost import CostTable, build_cost_table, update_cost_table
from .seam import Seam, find_seam, remove_seam
from .carving import reduce_width, find_seams
from .io import load_image, save_image

__all__ = [
    'CarvingError',
    'InvalidGridError',
    'PixelOutOfBoundsError',
    'InvalidChannelError',
    'DegenerateGeometryError',
    'PixelGrid',
    'Channel',
    'channel_energy',
    'energy',
    'energy_map',
    'energy_band',
    'CostTable',
    'build_cost_table',
    'update_cost_table',
    'Seam',
    'find_seam',
    'remove_seam',
    'reduce_width',
    'find_seams',
    'load_image',
    'save_image',
]
