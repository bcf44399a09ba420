"""Arc-consistency solving for constraint satisfaction problems, with generic and minesweeper constraints."""

__version__ = "0.1.0"
__all__ = ["constraint", "heuristics", "mines", "generic", "system"]