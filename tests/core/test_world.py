"""Tests for the World class."""

import numpy as np
import pytest
from lifegrid.core.errors import InvalidDimensionError
from lifegrid.core.grid import Cell, Grid
from lifegrid.core.world import World


def make_grid(width, height, alive):
    grid = Grid(width, height)
    for x, y in alive:
        grid.set(x, y, Cell.ALIVE)
    return grid


def alive_cells(grid):
    return {(x, y) for y in range(grid.height) for x in range(grid.width) if grid.get(x, y) is Cell.ALIVE}


class TestWorldConstruction:
    """Test cases for building worlds."""

    def test_empty(self):
        world = World()
        assert world.width == 0
        assert world.height == 0
        assert world.total_cells == 0

    def test_square(self):
        world = World(6)
        assert (world.width, world.height) == (6, 6)
        assert world.dead_count == 36

    def test_width_height(self):
        world = World(5, 3)
        assert (world.width, world.height) == (5, 3)
        assert world.state.shape == (5, 3)
        assert world._next.shape == (5, 3)
        assert world.generation == 0

    def test_from_grid_copies(self):
        grid = make_grid(4, 3, [(1, 1), (2, 2)])
        world = World(grid)

        assert world.state == grid
        assert world.state is not grid
        assert world._next.shape == grid.shape
        assert world._next.alive_count == 0

        grid.set(0, 0, Cell.ALIVE)
        assert world.state.get(0, 0) is Cell.DEAD

    def test_negative_dimensions(self):
        with pytest.raises(InvalidDimensionError):
            World(-1, 5)

    def test_fractional_dimensions(self):
        with pytest.raises(TypeError):
            World(2.7, 3)

    def test_grid_with_height_rejected(self):
        with pytest.raises(TypeError):
            World(Grid(3, 3), 7)

    def test_counts_delegate_to_state(self):
        world = World(make_grid(3, 3, [(0, 0), (1, 1)]))
        assert world.alive_count == 2
        assert world.dead_count == 7
        assert world.total_cells == 9


class TestWorldResize:
    """Test cases for World.resize."""

    def test_resize_keeps_state_and_reallocates_next(self):
        world = World(make_grid(4, 4, [(1, 1), (3, 3)]))
        world.resize(6, 2)

        assert (world.width, world.height) == (6, 2)
        assert world.state.shape == (6, 2)
        assert world._next.shape == (6, 2)
        assert alive_cells(world.state) == {(1, 1)}

    def test_square_resize_then_step(self):
        world = World(make_grid(3, 3, [(0, 0), (1, 0), (0, 1), (1, 1)]))
        world.resize(8)
        world.step()
        assert alive_cells(world.state) == {(0, 0), (1, 0), (0, 1), (1, 1)}

    def test_failed_resize_leaves_world_unchanged(self):
        world = World(make_grid(3, 3, [(1, 1)]))
        before = world.state.copy()

        with pytest.raises(InvalidDimensionError):
            world.resize(3, -2)

        assert world.state == before
        assert world._next.shape == (3, 3)


class TestNeighbourCounting:
    """Test cases for neighbor counting."""

    def test_count_neighbours(self):
        world = World(make_grid(5, 5, [(1, 1), (1, 2), (2, 1)]))

        assert world._count_neighbours(2, 2, False) == 3
        assert world._count_neighbours(1, 1, False) == 2  # cell itself doesn't count
        assert world._count_neighbours(0, 0, False) == 1
        assert world._count_neighbours(4, 4, False) == 0

    def test_toroidal_corner(self):
        n = 5
        world = World(make_grid(n, n, [(n - 1, n - 1), (n - 1, 0), (0, n - 1)]))

        assert world._count_neighbours(0, 0, True) == 3
        assert world._count_neighbours(0, 0, False) == 0

        counts = world.neighbour_counts(toroidal=True)
        assert counts[0, 0] == 3
        assert world.neighbour_counts(toroidal=False)[0, 0] == 0

    @pytest.mark.parametrize("toroidal", [False, True])
    @pytest.mark.parametrize("width,height", [(7, 5), (1, 4), (2, 2), (3, 1)])
    def test_vectorized_matches_per_cell(self, width, height, toroidal):
        grid = Grid(width, height)
        grid.randomize(0.5, seed=width * 10 + height)
        world = World(grid)

        counts = world.neighbour_counts(toroidal)
        assert counts.shape == (height, width)
        for y in range(height):
            for x in range(width):
                assert counts[y, x] == world._count_neighbours(x, y, toroidal)


class TestStep:
    """Test cases for stepping the simulation."""

    def test_glider_generation(self):
        world = World(make_grid(5, 5, [(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)]))
        world.step(toroidal=False)

        assert alive_cells(world.state) == {(0, 1), (2, 1), (1, 2), (2, 2), (1, 3)}
        assert world.generation == 1

    @pytest.mark.parametrize("toroidal", [False, True])
    def test_isolated_cell_dies(self, toroidal):
        world = World(make_grid(5, 5, [(2, 2)]))
        world.step(toroidal)
        assert world.alive_count == 0

    def test_isolated_corner_cell_dies_on_torus(self):
        world = World(make_grid(4, 4, [(0, 0)]))
        world.step(toroidal=True)
        assert world.alive_count == 0

    def test_block_is_stable(self):
        block = {(1, 1), (2, 1), (1, 2), (2, 2)}
        world = World(make_grid(4, 4, block))

        for _ in range(6):
            world.step()
            assert alive_cells(world.state) == block

    def test_blinker_oscillates(self):
        world = World(make_grid(5, 5, [(2, 1), (2, 2), (2, 3)]))

        world.step()
        assert alive_cells(world.state) == {(1, 2), (2, 2), (3, 2)}

        world.step()
        assert alive_cells(world.state) == {(2, 1), (2, 2), (2, 3)}

    def test_birth_needs_exactly_three(self):
        world = World(make_grid(3, 3, [(0, 0), (2, 0), (0, 2)]))
        world.step()
        assert world.state.get(1, 1) is Cell.ALIVE

    def test_overcrowding(self):
        # Centre has four neighbours and dies
        world = World(make_grid(3, 3, [(1, 1), (0, 0), (2, 0), (0, 2), (2, 2)]))
        world.step()
        assert world.state.get(1, 1) is Cell.DEAD

    def test_toroidal_wraps_blinker(self):
        # Horizontal blinker split across the left and right edges
        world = World(make_grid(5, 5, [(4, 2), (0, 2), (1, 2)]))

        world.step(toroidal=True)
        assert alive_cells(world.state) == {(0, 1), (0, 2), (0, 3)}

        bounded = World(make_grid(5, 5, [(4, 2), (0, 2), (1, 2)]))
        bounded.step(toroidal=False)
        assert alive_cells(bounded.state) == set()

    def test_glider_wraps_around_torus(self):
        glider = make_grid(5, 5, [(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)])
        world = World(glider)

        # A glider moves one cell diagonally every four generations
        world.advance(20, toroidal=True)
        assert world.state == glider

    def test_step_swaps_buffers_without_copying(self):
        world = World(make_grid(4, 4, [(1, 1), (2, 1), (1, 2), (2, 2)]))
        current = world.state
        scratch = world._next
        current_cells = current.cells
        scratch_cells = scratch.cells

        world.step()

        assert world.state is scratch
        assert world._next is current
        assert world.state.cells is scratch_cells
        assert world._next.cells is current_cells

    def test_step_empty_world(self):
        world = World()
        world.step(toroidal=True)
        assert world.generation == 1
        assert world.total_cells == 0


class TestAdvance:
    """Test cases for World.advance."""

    @pytest.mark.parametrize("toroidal", [False, True])
    def test_advance_equals_repeated_steps(self, toroidal):
        grid = Grid(12, 9)
        grid.randomize(0.35, seed=21)

        stepped = World(grid)
        for _ in range(15):
            stepped.step(toroidal)

        advanced = World(grid)
        advanced.advance(15, toroidal)

        assert np.array_equal(advanced.state.cells, stepped.state.cells)
        assert advanced.generation == stepped.generation == 15

    def test_advance_zero_is_noop(self):
        grid = make_grid(4, 4, [(0, 0)])
        world = World(grid)
        world.advance(0)
        assert world.state == grid
        assert world.generation == 0

    def test_advance_negative_rejected(self):
        world = World(make_grid(4, 4, [(0, 0)]))
        with pytest.raises(ValueError):
            world.advance(-1)
        assert world.alive_count == 1
        assert world.generation == 0

    def test_str_renders_state(self):
        world = World(make_grid(2, 1, [(1, 0)]))
        assert str(world) == "+--+\n| #|\n+--+\n"
