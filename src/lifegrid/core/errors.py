"""Exception types raised by the grid engine and its collaborators."""


class GridError(Exception):
    """Base class for all lifegrid errors."""


class OutOfBoundsError(GridError, IndexError):
    """A coordinate or window lies outside the grid."""


class InvalidDimensionError(GridError, ValueError):
    """A width or height is negative."""


class FormatError(GridError, ValueError):
    """Persisted grid data is malformed."""
