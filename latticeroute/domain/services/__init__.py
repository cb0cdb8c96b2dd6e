"""Domain services package."""
from .pathfinder import (
    PathfindingAlgorithm, PathHeuristic, Orientation, PathNode,
    ShortestPathConfig, ShortestPath, create_shortest_path
)

__all__ = [
    'PathfindingAlgorithm', 'PathHeuristic', 'Orientation', 'PathNode',
    'ShortestPathConfig', 'ShortestPath', 'create_shortest_path'
]
