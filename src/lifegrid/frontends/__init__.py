"""Frontend interfaces for the Game of Life."""

from .cli import CLIWorld

__all__ = ["CLIWorld"]
