"""
latticeroute - lattice routing substrate for placement-and-routing tools
"""
from .algorithms.base import (
    Lattice2D, UndirectedCsrGraph, DirectedCsrGraph, to_undirected_csr, to_directed_csr
)
from .algorithms.manhattan import Astar
from .domain.models import NodeKind, NodeType, TapeAdd, TapeRemove, TapeMove, advance, rewind
from .domain.services import (
    PathfindingAlgorithm, PathHeuristic, Orientation, PathNode,
    ShortestPathConfig, ShortestPath, create_shortest_path
)
from .shared.configuration import ConfigManager, initialize_config
from .shared.exceptions import LatticeRouteException
from .shared.utils import setup_logging

__version__ = "0.1.0"
__license__ = "MIT"
__description__ = "Lattice grid graphs and turn-aware A* routing"

__all__ = [
    '__version__',
    # Lattice and graphs
    'Lattice2D', 'UndirectedCsrGraph', 'DirectedCsrGraph',
    'to_undirected_csr', 'to_directed_csr',
    # Search
    'Astar', 'PathfindingAlgorithm', 'PathHeuristic', 'Orientation', 'PathNode',
    'ShortestPathConfig', 'ShortestPath', 'create_shortest_path',
    # Edit records
    'NodeKind', 'NodeType', 'TapeAdd', 'TapeRemove', 'TapeMove', 'advance', 'rewind',
    'LatticeRouteException',
    # Start-up
    'setup_environment',
]


def setup_environment(config_path=None) -> ConfigManager:
    """Load configuration and attach the configured log handlers."""
    config = initialize_config(config_path)
    setup_logging(config.get_settings().logging)
    return config
