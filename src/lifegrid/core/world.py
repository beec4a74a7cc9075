"""Conway's Game of Life simulation engine."""

from typing import Optional, Union
import numpy as np
import torch
import torch.nn.functional as F

from .grid import Cell, Grid


class World:
    """Double-buffered Game of Life simulation.

    Holds two same-sized grids: ``current`` is the visible state and ``next``
    is scratch space that each step writes into before the two swap roles.

    Implements the classic rules:
    - Live cell with 2-3 neighbors survives
    - Dead cell with exactly 3 neighbors becomes alive
    - All other cells die or stay dead
    """

    def __init__(self, width: Union[int, Grid] = 0, height: Optional[int] = None) -> None:
        """Initialize the world.

        Args:
            width: Number of columns, or a Grid to copy as the initial state
            height: Number of rows (defaults to width; not allowed with a Grid)

        Raises:
            InvalidDimensionError: If either dimension is negative
            TypeError: If a Grid is given together with a height
        """
        if isinstance(width, Grid):
            if height is not None:
                raise TypeError("World takes either a Grid or dimensions, not both")
            self._current = width.copy()
        else:
            self._current = Grid(width, height)
        self._next = Grid(self._current.width, self._current.height)
        self._generation = 0

        # Set single-threaded, the engine runs in one execution context
        torch.set_num_threads(1)
        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )
        self._allocate_buffers()

    def _allocate_buffers(self) -> None:
        # Convolution input reused by every step, sized to the current grid
        self._torch_input = torch.zeros(1, 1, self.height, self.width, dtype=torch.float32)

    @property
    def width(self) -> int:
        return self._current.width

    @property
    def height(self) -> int:
        return self._current.height

    @property
    def total_cells(self) -> int:
        return self._current.total_cells

    @property
    def alive_count(self) -> int:
        """Current number of living cells."""
        return self._current.alive_count

    @property
    def dead_count(self) -> int:
        """Current number of dead cells."""
        return self._current.dead_count

    @property
    def state(self) -> Grid:
        """The current generation's grid (not a copy)."""
        return self._current

    @property
    def generation(self) -> int:
        """Number of steps taken since the world was created."""
        return self._generation

    def resize(self, width: int, height: Optional[int] = None) -> None:
        """Resize the world, keeping the overlapping region of the current state.

        Args:
            width: New number of columns
            height: New number of rows (defaults to width)

        Raises:
            InvalidDimensionError: If either dimension is negative
        """
        self._current.resize(width, height)
        self._next = Grid(self._current.width, self._current.height)
        self._allocate_buffers()

    def _count_neighbours(self, x: int, y: int, toroidal: bool) -> int:
        """Count living neighbors of a single cell.

        Args:
            x: Column coordinate
            y: Row coordinate
            toroidal: Whether edges wrap around

        Returns:
            Number of living neighbors (0-8)
        """
        count = 0
        for ny in (y - 1, y, y + 1):
            for nx in (x - 1, x, x + 1):
                if nx == x and ny == y:
                    continue

                if toroidal:
                    # Offsets are at most one cell, so a single wrap is enough
                    if nx < 0:
                        nx += self.width
                    elif nx >= self.width:
                        nx -= self.width
                    if ny < 0:
                        ny += self.height
                    elif ny >= self.height:
                        ny -= self.height
                elif not (0 <= nx < self.width and 0 <= ny < self.height):
                    continue

                if self._current[nx, ny] == Cell.ALIVE:
                    count += 1

        return count

    def neighbour_counts(self, toroidal: bool = False) -> np.ndarray:
        """Count neighbors for all cells using a PyTorch convolution.

        Args:
            toroidal: Whether edges wrap around

        Returns:
            (height, width) array with the living-neighbor count of each cell
        """
        if self.total_cells == 0:
            return np.zeros((self.height, self.width), dtype=np.int8)

        self._torch_input[0, 0] = torch.from_numpy(self._current.cells.astype(np.float32))

        if toroidal:
            # For toroidal topology, use circular padding
            padded = F.pad(self._torch_input, (1, 1, 1, 1), mode="circular")
            neighbours = F.conv2d(padded, self._torch_kernel)
        else:
            # For bounded topology, use zero padding
            neighbours = F.conv2d(self._torch_input, self._torch_kernel, padding=1)

        return neighbours[0, 0].numpy().astype(np.int8)

    def step(self, toroidal: bool = False) -> None:
        """Advance the simulation by one generation.

        Args:
            toroidal: Whether edges wrap around
        """
        counts = self.neighbour_counts(toroidal)
        alive = self._current.cells == Cell.ALIVE

        # Three neighbours always give life, two keep the current state
        np.copyto(self._next.cells, (counts == 3) | ((counts == 2) & alive))

        self._current, self._next = self._next, self._current
        self._generation += 1

    def advance(self, steps: int, toroidal: bool = False) -> None:
        """Run several generations in sequence.

        Args:
            steps: Number of generations to advance
            toroidal: Whether edges wrap around

        Raises:
            ValueError: If steps is negative
        """
        if steps < 0:
            raise ValueError(f"Cannot advance a negative number of steps: {steps}")

        for _ in range(steps):
            self.step(toroidal)

    def __repr__(self) -> str:
        return f"World(width={self.width}, height={self.height}, generation={self._generation})"

    def __str__(self) -> str:
        return self._current.to_text()
