"""Routing algorithms."""
from .base import Lattice2D, UndirectedCsrGraph, DirectedCsrGraph
from .manhattan import Astar

__all__ = ['Lattice2D', 'UndirectedCsrGraph', 'DirectedCsrGraph', 'Astar']
