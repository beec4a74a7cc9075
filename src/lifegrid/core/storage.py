"""Loading and saving grids in ascii and packed binary formats.

Ascii files start with a ``"<width> <height>"`` line followed by exactly
``height`` lines of ``width`` characters, ``'#'`` for living cells and
``' '`` for dead ones.

Binary files hold two little-endian int32 values (width, height) followed
by ``ceil(width * height / 8)`` bytes. Cell ``i = x + width * y`` is bit
``i % 8`` of byte ``i // 8``, least significant bit first; unused bits of
the last byte are zero.
"""

from pathlib import Path
from typing import Optional, Union
import numpy as np

from .errors import FormatError
from .grid import Cell, Grid

PathLike = Union[str, Path]

FORMATS = ("ascii", "binary")
BINARY_SUFFIXES = (".bin",)

_HEADER_DTYPE = np.dtype("<i4")
_HEADER_SIZE = 2 * _HEADER_DTYPE.itemsize


def _check_saveable(grid: Grid) -> None:
    if grid.width < 1 or grid.height < 1:
        raise FormatError(f"Cannot save a {grid.width}x{grid.height} grid, both dimensions must be positive")


def format_ascii(grid: Grid) -> str:
    """Serialize a grid to the ascii file format."""
    _check_saveable(grid)
    lines = [f"{grid.width} {grid.height}"]
    for row in grid.cells:
        lines.append("".join(Cell(int(value)).symbol for value in row))
    return "\n".join(lines) + "\n"


def parse_ascii(text: str) -> Grid:
    """Parse the ascii file format.

    Raises:
        FormatError: If the header, row count, row length, any character or the
            final newline is invalid
    """
    if not text:
        raise FormatError("Missing '<width> <height>' header")
    if not text.endswith("\n"):
        raise FormatError("Ascii grid must end with a newline")

    # Only "\n" ends a line, any other control character is an invalid cell
    lines = text[:-1].split("\n")

    header = lines[0].split()
    if len(header) != 2:
        raise FormatError(f"Invalid header {lines[0]!r}, expected '<width> <height>'")
    try:
        width, height = int(header[0]), int(header[1])
    except ValueError as e:
        raise FormatError(f"Invalid header {lines[0]!r}: {e}") from e

    if width < 1 or height < 1:
        raise FormatError(f"Grid dimensions must be positive, got {width}x{height}")

    rows = lines[1:]
    if len(rows) != height:
        raise FormatError(f"Expected {height} rows, found {len(rows)}")

    grid = Grid(width, height)
    for y, row in enumerate(rows):
        if len(row) != width:
            raise FormatError(f"Row {y} has {len(row)} characters, expected {width}")
        for x, symbol in enumerate(row):
            grid.set(x, y, Cell.from_symbol(symbol))

    return grid


def encode_binary(grid: Grid) -> bytes:
    """Serialize a grid to the packed binary format."""
    _check_saveable(grid)
    header = np.array([grid.width, grid.height], dtype=_HEADER_DTYPE).tobytes()
    payload = np.packbits(grid.cells.ravel(), bitorder="little").tobytes()
    return header + payload


def decode_binary(data: bytes) -> Grid:
    """Parse the packed binary format.

    Raises:
        FormatError: If the header is truncated, a dimension is not positive,
            or the payload length does not match the dimensions
    """
    if len(data) < _HEADER_SIZE:
        raise FormatError(f"Binary grid needs an {_HEADER_SIZE}-byte header, got {len(data)} bytes")

    width, height = (int(value) for value in np.frombuffer(data[:_HEADER_SIZE], dtype=_HEADER_DTYPE))
    if width < 1 or height < 1:
        raise FormatError(f"Grid dimensions must be positive, got {width}x{height}")

    total = width * height
    expected = (total + 7) // 8
    payload = data[_HEADER_SIZE:]
    if len(payload) != expected:
        raise FormatError(f"Expected {expected} bytes of cell data for {width}x{height}, got {len(payload)}")

    bits = np.unpackbits(np.frombuffer(payload, dtype=np.uint8), count=total, bitorder="little")
    grid = Grid(width, height)
    grid.cells[:] = bits.reshape(height, width)
    return grid


def save_ascii(path: PathLike, grid: Grid) -> None:
    text = format_ascii(grid)
    with open(path, "w", newline="\n") as f:
        f.write(text)


def load_ascii(path: PathLike) -> Grid:
    with open(path, "r", newline="") as f:
        return parse_ascii(f.read())


def save_binary(path: PathLike, grid: Grid) -> None:
    data = encode_binary(grid)
    with open(path, "wb") as f:
        f.write(data)


def load_binary(path: PathLike) -> Grid:
    with open(path, "rb") as f:
        return decode_binary(f.read())


def detect_format(path: PathLike, fmt: Optional[str] = None) -> str:
    """Pick the file format, from fmt if given, otherwise from the suffix.

    Raises:
        ValueError: If fmt is not a known format name
    """
    if fmt is not None:
        if fmt not in FORMATS:
            raise ValueError(f"Unknown grid format {fmt!r}, expected one of {', '.join(FORMATS)}")
        return fmt
    return "binary" if Path(path).suffix.lower() in BINARY_SUFFIXES else "ascii"


def load(path: PathLike, fmt: Optional[str] = None) -> Grid:
    """Load a grid, choosing the format from fmt or the file suffix."""
    if detect_format(path, fmt) == "binary":
        return load_binary(path)
    return load_ascii(path)


def save(path: PathLike, grid: Grid, fmt: Optional[str] = None) -> None:
    """Save a grid, choosing the format from fmt or the file suffix."""
    if detect_format(path, fmt) == "binary":
        save_binary(path, grid)
    else:
        save_ascii(path, grid)
