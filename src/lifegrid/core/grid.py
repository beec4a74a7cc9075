"""Dense grid data structure for cellular automata."""

from enum import IntEnum
import operator
from typing import Any, Optional, Tuple
import numpy as np

from .errors import FormatError, InvalidDimensionError, OutOfBoundsError


class Cell(IntEnum):
    """State of a single grid cell."""

    DEAD = 0
    ALIVE = 1

    @property
    def symbol(self) -> str:
        """Character used for this state in text output."""
        return "#" if self is Cell.ALIVE else " "

    @classmethod
    def from_symbol(cls, symbol: str) -> "Cell":
        """Parse a text character back into a cell state.

        Raises:
            FormatError: If the character is neither '#' nor ' '
        """
        if symbol == "#":
            return cls.ALIVE
        if symbol == " ":
            return cls.DEAD
        raise FormatError(f"Invalid cell character {symbol!r}")

    @classmethod
    def coerce(cls, value: Any) -> "Cell":
        """Convert a Cell, bool or 0/1 integer to a Cell.

        Raises:
            ValueError: For any other value
        """
        if isinstance(value, (bool, int, np.integer, np.bool_)) and value in (0, 1):
            return cls(int(value))
        raise ValueError(f"Invalid cell value {value!r}, expected Cell.ALIVE or Cell.DEAD")


# Text rendering lookup, indexed by cell value
_SYMBOLS = np.array([Cell.DEAD.symbol, Cell.ALIVE.symbol])


def _check_dimension(name: str, value: int) -> int:
    try:
        size = operator.index(value)
    except TypeError:
        raise TypeError(f"Grid {name} must be an integer, got {value!r}") from None
    if size < 0:
        raise InvalidDimensionError(f"Grid {name} must be non-negative, got {size}")
    return size


class Grid:
    """Represents a dense 2D grid of cells.

    Cells are held in a numpy array of shape (height, width), so the flat
    row-major index of (x, y) is x + width * y. Every mutating operation
    validates its arguments before touching the array, so a failed call
    leaves the grid exactly as it was.
    """

    def __init__(self, width: int = 0, height: Optional[int] = None) -> None:
        """Initialize a new grid with all cells dead.

        Args:
            width: Number of columns
            height: Number of rows (defaults to width for a square grid)

        Raises:
            InvalidDimensionError: If either dimension is negative
            TypeError: If either dimension is not an integer
        """
        if height is None:
            height = width
        width = _check_dimension("width", width)
        height = _check_dimension("height", height)
        self._cells = np.zeros((height, width), dtype=np.int8)

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._cells.shape[1]

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._cells.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (width, height)."""
        return (self.width, self.height)

    @property
    def cells(self) -> np.ndarray:
        """Get the underlying (height, width) cell array."""
        return self._cells

    @property
    def total_cells(self) -> int:
        return self._cells.size

    @property
    def alive_count(self) -> int:
        """Number of living cells."""
        return int(np.count_nonzero(self._cells))

    @property
    def dead_count(self) -> int:
        """Number of dead cells."""
        return self.total_cells - self.alive_count

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBoundsError(f"Coordinates ({x}, {y}) out of bounds for {self.width}x{self.height} grid")

    def __getitem__(self, key: Tuple[int, int]) -> Cell:
        x, y = key
        self._check_bounds(x, y)
        return Cell(int(self._cells[y, x]))

    def __setitem__(self, key: Tuple[int, int], value: Any) -> None:
        x, y = key
        self._check_bounds(x, y)
        self._cells[y, x] = Cell.coerce(value)

    def get(self, x: int, y: int) -> Cell:
        """Get the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            Cell.ALIVE or Cell.DEAD

        Raises:
            OutOfBoundsError: If coordinates are outside the grid
        """
        return self[x, y]

    def set(self, x: int, y: int, value: Any) -> None:
        """Set the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate
            value: Cell.ALIVE / Cell.DEAD (or True / False)

        Raises:
            OutOfBoundsError: If coordinates are outside the grid
            ValueError: If value is not a valid cell state
        """
        self[x, y] = value

    def clear(self) -> None:
        """Clear all cells (set all to dead)."""
        self._cells.fill(Cell.DEAD)

    def randomize(self, probability: float = 0.1, seed: Optional[int] = None) -> None:
        """Randomly populate the grid.

        Args:
            probability: Chance each cell will be alive (0.0 to 1.0)
            seed: Optional seed for reproducible fills
        """
        rng = np.random.default_rng(seed)
        self._cells[:] = rng.random(self._cells.shape) < probability

    def copy(self) -> "Grid":
        """Return an independent copy of this grid."""
        duplicate = Grid(self.width, self.height)
        duplicate._cells[:] = self._cells
        return duplicate

    def resize(self, width: int, height: Optional[int] = None) -> None:
        """Resize the grid, keeping the contents of the overlapping region.

        Cells outside the new bounds are discarded and newly exposed cells
        are dead.

        Args:
            width: New number of columns
            height: New number of rows (defaults to width)

        Raises:
            InvalidDimensionError: If either dimension is negative
            TypeError: If either dimension is not an integer
        """
        if height is None:
            height = width
        width = _check_dimension("width", width)
        height = _check_dimension("height", height)

        if (width, height) == self.shape:
            return

        resized = np.zeros((height, width), dtype=np.int8)
        keep_w = min(width, self.width)
        keep_h = min(height, self.height)
        resized[:keep_h, :keep_w] = self._cells[:keep_h, :keep_w]
        self._cells = resized

    def crop(self, x0: int, y0: int, x1: int, y1: int) -> "Grid":
        """Extract the sub-grid spanning [x0, x1) by [y0, y1).

        Returns:
            New grid of size (x1 - x0) x (y1 - y0)

        Raises:
            OutOfBoundsError: If a corner lies outside the grid or the window is inverted
        """
        if not (0 <= x0 <= x1 <= self.width and 0 <= y0 <= y1 <= self.height):
            raise OutOfBoundsError(
                f"Crop window ({x0}, {y0})-({x1}, {y1}) invalid for {self.width}x{self.height} grid"
            )

        cropped = Grid(x1 - x0, y1 - y0)
        cropped._cells[:] = self._cells[y0:y1, x0:x1]
        return cropped

    def merge(self, other: "Grid", x0: int, y0: int, alive_only: bool = False) -> None:
        """Overlay another grid onto this one with its top-left corner at (x0, y0).

        Args:
            other: Grid to copy cells from
            x0: Column of the placement corner
            y0: Row of the placement corner
            alive_only: Only copy living cells, leaving the rest untouched

        Raises:
            OutOfBoundsError: If the other grid does not fit at that position
        """
        if x0 < 0 or y0 < 0 or x0 + other.width > self.width or y0 + other.height > self.height:
            raise OutOfBoundsError(
                f"{other.width}x{other.height} grid at ({x0}, {y0}) "
                f"does not fit in {self.width}x{self.height} grid"
            )

        region = self._cells[y0 : y0 + other.height, x0 : x0 + other.width]
        if alive_only:
            np.bitwise_or(region, other._cells, out=region)
        else:
            region[:] = other._cells

    def rotate(self, rotation: int) -> "Grid":
        """Return a copy rotated clockwise by rotation * 90 degrees.

        The rotation may be any integer; it is reduced modulo 4 first, so the
        cost does not depend on its magnitude.
        """
        quarter_turns = rotation % 4
        if quarter_turns % 2:
            rotated = Grid(self.height, self.width)
        else:
            rotated = Grid(self.width, self.height)

        # rot90 turns counter-clockwise for positive k
        rotated._cells[:] = np.rot90(self._cells, k=-quarter_turns)
        return rotated

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        ys, xs = np.nonzero(self._cells)
        if len(xs) == 0:
            return None

        return (int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max()))

    def to_text(self) -> str:
        """Render the grid inside a +, - and | border, living cells as '#'.

        Each line, including the last border, ends with a newline.
        """
        border = "+" + "-" * self.width + "+"
        lines = [border]
        for row in self._cells:
            lines.append("|" + "".join(_SYMBOLS[row]) + "|")
        lines.append(border)
        return "\n".join(lines) + "\n"

    def __eq__(self, other: object) -> bool:
        """Check if two grids are equal."""
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self._cells, other._cells)

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height}, alive={self.alive_count})"

    def __str__(self) -> str:
        return self.to_text()
