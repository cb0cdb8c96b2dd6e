"""Domain service for pathfinding: cost model, search nodes and the engine interface."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple

from ...shared.exceptions import AlgorithmError, ValidationError
from ...shared.utils.validation_utils import validate_boundary, validate_net_id
from ..models.routing import TapeItem

Position = Tuple[int, int]


class PathfindingAlgorithm(Enum):
    """Available pathfinding algorithms."""
    ASTAR = "a_star"
    DIJKSTRA = "dijkstra"


class PathHeuristic(Enum):
    """Distance estimates between two lattice cells."""
    MANHATTAN = "manhattan"
    EUCLIDEAN = "euclidean"
    OCTILE = "octile"
    CHEBYSHEV = "chebyshev"
    ZERO = "zero"

    @classmethod
    def from_name(cls, name: str) -> 'PathHeuristic':
        try:
            return cls(name.lower())
        except (AttributeError, ValueError):
            raise ValidationError(f"Unknown heuristic: {name!r}", field="heuristic", value=name)

    def cost_estimate(self, start: Position, end: Position) -> int:
        dx = abs(start[0] - end[0])
        dy = abs(start[1] - end[1])

        if self is PathHeuristic.MANHATTAN:
            return dx + dy
        if self is PathHeuristic.EUCLIDEAN:
            # Squared distance: monotone in the true distance but not admissible
            return dx * dx + dy * dy
        if self in (PathHeuristic.OCTILE, PathHeuristic.CHEBYSHEV):
            # NOTE: octile currently matches chebyshev (no sqrt(2) diagonal term)
            return max(dx, dy)
        return 0


class Orientation(Enum):
    """Axis of a single lattice step."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    DIAG45 = "diag45"
    DIAG135 = "diag135"

    @classmethod
    def get_direction(cls, start: Position, end: Position) -> 'Orientation':
        dx = end[0] - start[0]
        dy = end[1] - start[1]
        if dy == 0:
            return cls.HORIZONTAL
        if dx == 0:
            return cls.VERTICAL
        # Rows grow downwards, so a step down-right draws as "\"
        if (dx > 0) == (dy > 0):
            return cls.DIAG135
        return cls.DIAG45


@dataclass(eq=False)
class PathNode:
    """Search node identified by its lattice position.

    Ordered by total cost, then by the number of direction changes so that
    straighter routes win among equal-cost candidates.
    """
    position: Position
    cost_from_start: int = 0
    cost_to_target: Optional[int] = None
    cost_total: int = 0
    orientation_cost: int = 0

    @classmethod
    def new(cls, start: Position, cost_from_start: int, end: Position,
            heuristic: PathHeuristic, orientation_cost: int) -> 'PathNode':
        cost_to_target = heuristic.cost_estimate(start, end)
        return cls(
            position=start,
            cost_from_start=cost_from_start,
            cost_to_target=cost_to_target,
            cost_total=cost_from_start + cost_to_target,
            orientation_cost=orientation_cost,
        )

    @classmethod
    def base(cls, position: Position) -> 'PathNode':
        """Seed node without a cost estimate."""
        return cls(position=position)

    def with_start_cost(self, cost_from_start: int) -> 'PathNode':
        estimate = self.cost_to_target or 0
        return replace(self, cost_from_start=cost_from_start,
                       cost_total=cost_from_start + estimate)

    def with_cost_estimation(self, end: Position, heuristic: PathHeuristic) -> 'PathNode':
        estimate = heuristic.cost_estimate(self.position, end)
        return replace(self, cost_to_target=estimate,
                       cost_total=self.cost_from_start + estimate)

    def with_orientation_cost(self, orientation_cost: int) -> 'PathNode':
        return replace(self, orientation_cost=orientation_cost)

    @property
    def sort_key(self) -> Tuple[int, int]:
        return self.cost_total, self.orientation_cost

    def __eq__(self, other):
        if not isinstance(other, PathNode):
            return NotImplemented
        return self.position == other.position

    def __hash__(self):
        return hash(self.position)

    def __lt__(self, other):
        if not isinstance(other, PathNode):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __le__(self, other):
        if not isinstance(other, PathNode):
            return NotImplemented
        return self.sort_key <= other.sort_key

    def __gt__(self, other):
        if not isinstance(other, PathNode):
            return NotImplemented
        return self.sort_key > other.sort_key

    def __ge__(self, other):
        if not isinstance(other, PathNode):
            return NotImplemented
        return self.sort_key >= other.sort_key


@dataclass
class ShortestPathConfig:
    """Inputs for one shortest-path computation.

    Args:
        graph: CSR graph snapshot with one node per lattice cell
        goal: Target node index, or None
        boundary: Lattice extent ``(columns, rows)`` the graph was built from
        net: Net the route is tagged with
        heuristic: Distance estimate used to order the search
    """
    graph: object
    goal: Optional[int]
    boundary: Tuple[int, int]
    net: int = 0
    heuristic: PathHeuristic = field(default=PathHeuristic.MANHATTAN)

    def __post_init__(self):
        self.boundary = validate_boundary(self.boundary)
        columns, rows = self.boundary
        validate_net_id(self.net)
        if not isinstance(self.heuristic, PathHeuristic):
            self.heuristic = PathHeuristic.from_name(self.heuristic)
        node_count = self.graph.node_count()
        if node_count != columns * rows:
            raise ValidationError(
                f"Graph has {node_count} nodes but boundary {columns}x{rows} "
                f"has {columns * rows} cells",
                field="graph", value=node_count
            )

    @property
    def node_count(self) -> int:
        return self.boundary[0] * self.boundary[1]


class ShortestPath(ABC):
    """Interface of single-net shortest-path engines."""

    @abstractmethod
    def compute(self, config: ShortestPathConfig, source: int) -> List[TapeItem]:
        """Route from ``source`` to ``config.goal``; empty list when no route exists."""

    @abstractmethod
    def reconstruct_path(self) -> List[TapeItem]:
        """Edit records for the most recently discovered route."""

    @abstractmethod
    def get_next_unresolved(self) -> Optional[PathNode]:
        """Pop the lowest-ordered node of the open set."""

    @abstractmethod
    def get_next_path_node(self) -> Optional[PathNode]:
        """Step through the discovered route from source to target."""


def create_shortest_path(algorithm=PathfindingAlgorithm.ASTAR) -> ShortestPath:
    """Instantiate the engine for a pathfinding algorithm (enum or name)."""
    from ...algorithms.manhattan.astar import Astar

    if not isinstance(algorithm, PathfindingAlgorithm):
        try:
            algorithm = PathfindingAlgorithm(str(algorithm).lower())
        except ValueError:
            raise AlgorithmError(f"Unknown pathfinding algorithm: {algorithm}",
                                 algorithm_name=str(algorithm))

    if algorithm == PathfindingAlgorithm.ASTAR:
        return Astar()
    if algorithm == PathfindingAlgorithm.DIJKSTRA:
        return Astar(heuristic=PathHeuristic.ZERO)
    raise AlgorithmError(f"Unknown pathfinding algorithm: {algorithm}",
                         algorithm_name=str(algorithm))
