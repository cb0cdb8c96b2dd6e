"""A* pathfinding over lattice CSR graphs with a turn-count tie-break."""
import heapq
import itertools
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from ...domain.models.routing import NodeType, TapeAdd, TapeItem
from ...domain.services.pathfinder import (
    Orientation, PathHeuristic, PathNode, ShortestPath, ShortestPathConfig
)
from ...shared.utils.logging_utils import get_context_logger
from ...shared.utils.performance_utils import timing_context
from ..base.grid import Lattice2D

Position = Tuple[int, int]
# A search state is a cell plus the axis of the step that reached it, so that
# routes arriving along different axes keep separate turn counts.
SearchState = Tuple[Position, Optional[Orientation]]


@dataclass
class _SearchState:
    """Scratch data owned by a single ``compute`` call."""
    lattice: Lattice2D
    target: Position
    heuristic: PathHeuristic
    net: int
    open_heap: list = field(default_factory=list)
    closed: Set[SearchState] = field(default_factory=set)
    best: Dict[SearchState, PathNode] = field(default_factory=dict)
    came_from: Dict[SearchState, Optional[SearchState]] = field(default_factory=dict)
    path_nodes: Set[PathNode] = field(default_factory=set)
    route: List[PathNode] = field(default_factory=list)
    goal_state: Optional[SearchState] = None
    sequence: itertools.count = field(default_factory=itertools.count)

    def open(self, state: SearchState, node: PathNode, parent: Optional[SearchState]):
        self.closed.discard(state)
        self.best[state] = node
        self.came_from[state] = parent
        # The sequence number keeps equal-cost entries in discovery order
        heapq.heappush(self.open_heap, (node.cost_total, node.orientation_cost,
                                        next(self.sequence), state, node))


class Astar(ShortestPath):
    """A* search on unit-cost lattice graphs.

    Nodes are expanded by lowest total cost, ties going to the node with
    fewer direction changes. A node is re-opened only when a strictly
    better candidate reaches it.
    """

    def __init__(self, heuristic: Optional[PathHeuristic] = None):
        """Initialize A* engine.

        Args:
            heuristic: Fixed distance estimate; when None the heuristic of
                each ``ShortestPathConfig`` is used
        """
        self.heuristic = heuristic
        self.last_route: List[Position] = []
        self.expanded_count = 0
        self._search: Optional[_SearchState] = None
        self._path_cursor = 0

    def compute(self, config: ShortestPathConfig, source: int) -> List[TapeItem]:
        """Route ``config.net`` from node ``source`` to ``config.goal``.

        Returns:
            One ``TapeAdd`` per route cell from source to target, or an
            empty list if no target is configured, an endpoint is absent
            or the target is unreachable
        """
        self._search = None
        self._path_cursor = 0
        self.last_route = []
        self.expanded_count = 0
        log = get_context_logger(__name__, net=config.net)

        if config.goal is None:
            log.debug("No target configured")
            return []

        node_count = config.node_count
        if not 0 <= source < node_count or not 0 <= config.goal < node_count:
            log.warning(f"Source {source} or target {config.goal} outside "
                        f"{config.boundary[0]}x{config.boundary[1]} lattice")
            return []

        lattice = Lattice2D(*config.boundary)
        heuristic = self.heuristic or config.heuristic
        start = lattice.to_vertex_coords(source)
        target = lattice.to_vertex_coords(config.goal)
        log = log.bind(source=start, target=target)

        # Absent endpoints carry no route, including the one-cell route when source == goal
        if not config.graph.has_node(source) or not config.graph.has_node(config.goal):
            log.debug("Source or target cell is absent")
            return []

        search = _SearchState(lattice=lattice, target=target,
                              heuristic=heuristic, net=config.net)
        self._search = search
        search.open((start, None), PathNode.new(start, 0, target, heuristic, 0), None)

        with timing_context("A* search", log):
            while True:
                entry = self._pop_unresolved()
                if entry is None:
                    break
                state, node = entry
                if node.position == target:
                    search.goal_state = state
                    break
                self._expand(config.graph, state, node)

        if search.goal_state is None:
            log.debug(f"No route after {self.expanded_count} expansions")
            return []

        tape = self.reconstruct_path()
        log.debug(f"Routed {len(tape) - 1} steps, "
                  f"{search.best[search.goal_state].orientation_cost} turns, "
                  f"{self.expanded_count} expansions")
        return tape

    def _pop_unresolved(self) -> Optional[Tuple[SearchState, PathNode]]:
        search = self._search
        if search is None:
            return None

        while search.open_heap:
            _, _, _, state, node = heapq.heappop(search.open_heap)
            # Skip entries superseded by a better candidate or already closed
            if state in search.closed or search.best.get(state) is not node:
                continue
            search.closed.add(state)
            self.expanded_count += 1
            return state, node
        return None

    def _expand(self, graph, state: SearchState, node: PathNode):
        search = self._search
        position, orientation = state
        index = search.lattice.to_vertex_index(*position)

        for neighbour in graph.neighbors_with_values(index):
            neighbour_position = search.lattice.to_vertex_coords(neighbour.target)
            direction = Orientation.get_direction(position, neighbour_position)

            orientation_cost = node.orientation_cost
            if orientation is not None and direction != orientation:
                orientation_cost += 1

            candidate = PathNode.new(neighbour_position,
                                     node.cost_from_start + neighbour.value,
                                     search.target, search.heuristic, orientation_cost)
            neighbour_state = (neighbour_position, direction)

            known = search.best.get(neighbour_state)
            if known is not None and known.sort_key <= candidate.sort_key:
                continue
            search.open(neighbour_state, candidate, state)

    def reconstruct_path(self) -> List[TapeItem]:
        """Walk parent links from the reached target back to the source."""
        search = self._search
        if search is None or search.goal_state is None:
            return []

        nodes = []
        state = search.goal_state
        while state is not None:
            nodes.append(search.best[state])
            state = search.came_from[state]
        nodes.reverse()

        search.route = nodes
        search.path_nodes = set(nodes)
        self._path_cursor = 0
        self.last_route = [node.position for node in nodes]

        return [
            TapeAdd(node.position, NodeType.route(search.net, node.cost_from_start), None)
            for node in nodes
        ]

    def get_next_unresolved(self) -> Optional[PathNode]:
        entry = self._pop_unresolved()
        return entry[1] if entry else None

    def get_next_path_node(self) -> Optional[PathNode]:
        search = self._search
        if search is None or self._path_cursor >= len(search.route):
            return None
        node = search.route[self._path_cursor]
        self._path_cursor += 1
        return node

    @property
    def path_nodes(self) -> Set[PathNode]:
        """Nodes of the most recently discovered route."""
        return set(self._search.path_nodes) if self._search else set()
