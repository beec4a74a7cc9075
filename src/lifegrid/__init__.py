"""Conway's Game of Life on dense, optionally toroidal grids."""

__version__ = "0.1.0"

from .core.errors import GridError, OutOfBoundsError, InvalidDimensionError, FormatError
from .core.grid import Cell, Grid
from .core.world import World
from .core.patterns import Pattern, PatternLibrary

__all__ = [
    "Cell",
    "Grid",
    "World",
    "Pattern",
    "PatternLibrary",
    "GridError",
    "OutOfBoundsError",
    "InvalidDimensionError",
    "FormatError",
]
