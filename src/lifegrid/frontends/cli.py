"""Command-line interface for Conway's Game of Life."""

import argparse
import sys
import time
from typing import Optional, Tuple

from ..core.grid import Grid
from ..core.world import World
from ..core.patterns import PatternLibrary
from ..core import storage


class CLIWorld:
    """Command-line interface for running Game of Life simulations."""

    def __init__(self):
        """Initialize CLI interface."""
        self.pattern_library = PatternLibrary()

    def build_initial_grid(
        self,
        width: int,
        height: int,
        population_rate: float,
        pattern: Optional[str] = None,
        pattern_x: Optional[int] = None,
        pattern_y: Optional[int] = None,
        rotate: int = 0,
        load_path: Optional[str] = None,
        file_format: Optional[str] = None,
        seed: Optional[int] = None,
        verbose: bool = False,
    ) -> Grid:
        """Create the starting grid from a file, a named pattern or random fill.

        Returns:
            The initial grid

        Raises:
            ValueError: If the pattern name is unknown
            OutOfBoundsError: If the pattern does not fit at the requested offset
        """
        if load_path:
            if verbose:
                print(f"Loading grid from {load_path}")
            grid = storage.load(load_path, file_format)
        else:
            grid = Grid(width, height)

        if pattern:
            loaded_pattern = self.pattern_library.get_pattern(pattern)
            if loaded_pattern is None:
                raise ValueError(f"Pattern '{pattern}' not found")

            seed_grid = loaded_pattern.to_grid().rotate(rotate)

            # Auto-center pattern if no offset specified
            if pattern_x is None:
                pattern_x = max(0, (grid.width - seed_grid.width) // 2)
            if pattern_y is None:
                pattern_y = max(0, (grid.height - seed_grid.height) // 2)

            if verbose:
                print(f"Placing pattern '{loaded_pattern.name}' at ({pattern_x}, {pattern_y})")
            grid.merge(seed_grid, pattern_x, pattern_y, alive_only=True)
        elif not load_path:
            if verbose:
                print(f"Generating random population (rate: {population_rate:.2%})")
            grid.randomize(population_rate, seed)

        return grid

    def run_simulation(
        self,
        width: int,
        height: int,
        population_rate: float,
        toroidal: bool,
        steps: int,
        pattern: Optional[str] = None,
        pattern_x: Optional[int] = None,
        pattern_y: Optional[int] = None,
        rotate: int = 0,
        load_path: Optional[str] = None,
        save_path: Optional[str] = None,
        file_format: Optional[str] = None,
        seed: Optional[int] = None,
        verbose: bool = False,
        show_grid: bool = False,
    ) -> Tuple[World, dict]:
        """Run a Game of Life simulation.

        Args:
            width: Grid width (ignored when loading from a file)
            height: Grid height (ignored when loading from a file)
            population_rate: Initial random population rate (0.0-1.0)
            toroidal: Whether grid edges wrap around
            steps: Number of generations to run
            pattern: Optional pattern name to place
            pattern_x: X offset for pattern placement (None to center)
            pattern_y: Y offset for pattern placement (None to center)
            rotate: Quarter turns clockwise applied to the pattern
            load_path: Optional grid file to start from
            save_path: Optional file to write the final grid to
            file_format: 'ascii' or 'binary' (default: from file suffix)
            seed: Random seed for reproducible fills
            verbose: Print progress updates
            show_grid: Show initial and final grid states

        Returns:
            Tuple of (world, statistics)
        """
        grid = self.build_initial_grid(
            width,
            height,
            population_rate,
            pattern=pattern,
            pattern_x=pattern_x,
            pattern_y=pattern_y,
            rotate=rotate,
            load_path=load_path,
            file_format=file_format,
            seed=seed,
            verbose=verbose,
        )
        world = World(grid)
        initial_population = world.alive_count

        if verbose:
            print(f"Initialized {world.width}x{world.height} world (toroidal: {toroidal})")
            print(f"Initial population: {initial_population} cells")

        if show_grid:
            print("\nInitial grid:")
            print(self._format_grid(world.state), end="")

        start_time = time.time()
        world.advance(steps, toroidal)
        duration = time.time() - start_time

        if show_grid:
            print(f"\nFinal grid (generation {world.generation}):")
            print(self._format_grid(world.state), end="")

        if save_path:
            storage.save(save_path, world.state, file_format)
            if verbose:
                print(f"Saved final grid to {save_path}")

        stats = {
            "generation": world.generation,
            "grid_size": (world.width, world.height),
            "initial_population": initial_population,
            "population": world.alive_count,
            "population_density": world.alive_count / world.total_cells if world.total_cells else 0.0,
            "bounding_box": world.state.get_bounding_box(),
            "duration_seconds": duration,
            "generations_per_second": world.generation / duration if duration > 0 else 0,
        }
        return world, stats

    def _format_grid(self, grid: Grid, max_size: int = 50) -> str:
        """Format grid for display, truncating if too large.

        Args:
            grid: Grid to format
            max_size: Maximum dimension to display

        Returns:
            Formatted grid string
        """
        if grid.width > max_size or grid.height > max_size:
            return f"Grid too large to display ({grid.width}x{grid.height})\n"

        return grid.to_text()

    def list_patterns(self) -> None:
        """List available patterns by category."""
        categories = self.pattern_library.get_patterns_by_category()

        print("Available patterns:")
        for category, patterns in categories.items():
            print(f"\n{category}:")
            for pattern_name in patterns:
                pattern = self.pattern_library.get_pattern(pattern_name)
                if pattern:
                    size = pattern.get_size()
                    print(f"  {pattern_name}: {size[0]}x{size[1]}, {len(pattern.cells)} cells")
                    if pattern.description:
                        print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run Conway's Game of Life simulations from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run random 50x50 simulation with 10% population for 200 steps
  lifegrid --width 50 --height 50 --population 0.1 --steps 200

  # Run glider on 20x20 toroidal grid
  lifegrid -W 20 -H 20 --pattern Glider --toroidal --show-grid

  # Rotate a lightweight spaceship a quarter turn and save the result
  lifegrid --pattern "Lightweight Spaceship" --rotate 1 --save lwss.txt

  # Continue a saved binary grid
  lifegrid --load state.bin --steps 1000 --save state.bin

  # List available patterns
  lifegrid --list-patterns
        """,
    )

    # Grid configuration
    parser.add_argument("-W", "--width", type=int, default=50, help="Grid width (default: 50)")

    parser.add_argument("-H", "--height", type=int, default=50, help="Grid height (default: 50)")

    parser.add_argument(
        "-p",
        "--population",
        type=float,
        default=0.1,
        help="Initial random population rate 0.0-1.0 (default: 0.1)",
    )

    parser.add_argument(
        "-t",
        "--toroidal",
        action="store_true",
        help="Enable toroidal (wraparound) edges",
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible random population",
    )

    # Pattern configuration
    parser.add_argument(
        "--pattern",
        type=str,
        help="Place a specific pattern instead of random population",
    )

    parser.add_argument(
        "--pattern-x",
        type=int,
        help="X offset for pattern placement (default: centered)",
    )

    parser.add_argument(
        "--pattern-y",
        type=int,
        help="Y offset for pattern placement (default: centered)",
    )

    parser.add_argument(
        "-r",
        "--rotate",
        type=int,
        default=0,
        help="Rotate the pattern by this many quarter turns clockwise (default: 0)",
    )

    # Simulation configuration
    parser.add_argument(
        "-s",
        "--steps",
        type=int,
        default=100,
        help="Number of generations to simulate (default: 100)",
    )

    # Persistence
    parser.add_argument("--load", type=str, help="Start from a saved grid file")

    parser.add_argument("--save", type=str, help="Save the final grid to a file")

    parser.add_argument(
        "--format",
        type=str,
        choices=list(storage.FORMATS),
        help="Grid file format (default: binary for .bin files, ascii otherwise)",
    )

    # Output configuration
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    parser.add_argument(
        "-g",
        "--show-grid",
        action="store_true",
        help="Display initial and final grid states (small grids only)",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    return parser


def print_results(stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        stats: Statistics dictionary from CLIWorld.run_simulation
        verbose: Whether to show detailed statistics
    """
    print(f"\nSimulation completed after {stats['generation']} generations")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Grid size: {stats['grid_size'][0]}x{stats['grid_size'][1]}")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
        print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")

        if stats["bounding_box"]:
            bbox = stats["bounding_box"]
            print(f"  Bounding box: ({bbox[0]}, {bbox[1]}) to ({bbox[2]}, {bbox[3]})")
    else:
        print(
            "Population: {} -> {}, "
            "Duration: {:.3f}s, "
            "Speed: {:.0f} gen/s".format(
                stats["initial_population"],
                stats["population"],
                stats["duration_seconds"],
                stats["generations_per_second"],
            )
        )


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if not args.load:
        if args.width <= 0:
            errors.append("Width must be positive")

        if args.height <= 0:
            errors.append("Height must be positive")

    if not 0.0 <= args.population <= 1.0:
        errors.append("Population rate must be between 0.0 and 1.0")

    if args.steps < 0:
        errors.append("Steps must be non-negative")

    if args.pattern_x is not None and args.pattern_x < 0:
        errors.append("Pattern X offset must be non-negative")

    if args.pattern_y is not None and args.pattern_y < 0:
        errors.append("Pattern Y offset must be non-negative")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main() -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args()

    cli = CLIWorld()

    # Handle special commands
    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    if args.pattern and not cli.pattern_library.get_pattern(args.pattern):
        available = cli.pattern_library.list_patterns()
        print(f"Error: Pattern '{args.pattern}' not found")
        print(f"Available patterns: {', '.join(available)}")
        print("Use --list-patterns to see detailed information")
        return 1

    try:
        _, stats = cli.run_simulation(
            width=args.width,
            height=args.height,
            population_rate=args.population,
            toroidal=args.toroidal,
            steps=args.steps,
            pattern=args.pattern,
            pattern_x=args.pattern_x,
            pattern_y=args.pattern_y,
            rotate=args.rotate,
            load_path=args.load,
            save_path=args.save,
            file_format=args.format,
            seed=args.seed,
            verbose=args.verbose,
            show_grid=args.show_grid,
        )

        print_results(stats, args.verbose)
        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
