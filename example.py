#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

from lifegrid import World, PatternLibrary
from lifegrid.core.grid import Grid


def main():
    """Demonstrate programmatic usage of the lifegrid package."""
    grid = Grid(20, 20)

    # Place a pattern
    library = PatternLibrary()
    glider = library.get_pattern("Glider")

    if glider:
        glider.place(grid, offset_x=8, offset_y=8)

        world = World(grid)
        print("Initial state:")
        print(world.state, end="")
        print(f"Population: {world.alive_count}")
        print()

        # Run simulation for 10 generations on a torus
        for _ in range(10):
            world.step(toroidal=True)

        print(f"After {world.generation} generations:")
        print(world.state, end="")
        print(f"Population: {world.alive_count}")


if __name__ == "__main__":
    main()
