"""Grid shortest-path engines."""
from .astar import Astar

__all__ = ['Astar']
