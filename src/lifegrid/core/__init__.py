"""Core grid storage and simulation logic."""

from .errors import GridError, OutOfBoundsError, InvalidDimensionError, FormatError
from .grid import Cell, Grid
from .world import World
from .patterns import Pattern, PatternLibrary
from . import storage

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
    "storage",
]
