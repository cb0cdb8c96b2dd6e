"""Compressed sparse row (CSR) graphs built from lattice snapshots."""
from typing import TYPE_CHECKING, Iterable, List, NamedTuple, Optional, Sequence, Set, Tuple

import numpy as np

from ...shared.exceptions import ValidationError
from ...shared.utils.logging_utils import lattice_logger
from ...shared.utils.performance_utils import memory_profiler

if TYPE_CHECKING:
    from .grid import Lattice2D


class Target(NamedTuple):
    """Neighbour entry carrying the edge value."""
    target: int
    value: int


class CsrGraph:
    """Immutable adjacency in CSR layout.

    ``indptr[n]:indptr[n + 1]`` slices ``indices``/``weights`` to give the
    sorted neighbours of node ``n``. Every lattice cell owns a node; absent
    cells have no edges and are marked in the optional ``present`` mask.
    """

    directed = False

    def __init__(self, node_count: int, edges: Iterable[Tuple[int, int]],
                 weights: Optional[Iterable[int]] = None, present: Optional[Sequence] = None):
        self._node_count = int(node_count)
        edge_array = np.asarray(list(edges), dtype=np.int64).reshape(-1, 2)

        if weights is None:
            weight_array = np.ones(len(edge_array), dtype=np.int64)
        else:
            weight_array = np.asarray(list(weights), dtype=np.int64)
            if weight_array.shape != (len(edge_array),):
                raise ValidationError(
                    f"Expected {len(edge_array)} edge weights, got {weight_array.shape}",
                    field="weights", value=weight_array.shape
                )

        if len(edge_array) and (edge_array.min() < 0 or edge_array.max() >= self._node_count):
            raise ValidationError("Edge endpoint outside node range",
                                  field="edges", value=self._node_count)

        order = np.lexsort((edge_array[:, 1], edge_array[:, 0]))
        self._edges = edge_array[order]
        self._edge_weights = weight_array[order]
        if present is None:
            self._present = np.ones(self._node_count, dtype=bool)
        else:
            self._present = np.array(present, dtype=bool)
            if self._present.shape != (self._node_count,):
                raise ValidationError(
                    f"Expected {self._node_count} presence flags, got {self._present.shape}",
                    field="present", value=self._present.shape
                )

        self._node_values = np.arange(self._node_count, dtype=np.int64)
        self._build_adjacency()

    def _adjacency_pairs(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        raise NotImplementedError

    def _build_adjacency(self):
        sources, targets, weights = self._adjacency_pairs()
        order = np.lexsort((targets, sources))
        self.indices = targets[order]
        self.weights = weights[order]
        counts = np.bincount(sources, minlength=self._node_count)
        self.indptr = np.zeros(self._node_count + 1, dtype=np.int64)
        np.cumsum(counts, out=self.indptr[1:])

    def node_count(self) -> int:
        return self._node_count

    def edge_count(self) -> int:
        return len(self._edges)

    @property
    def edges(self) -> List[Tuple[int, int]]:
        """Sorted edge list."""
        return [(int(u), int(v)) for u, v in self._edges]

    def has_node(self, node: int) -> bool:
        """True if ``node`` stands for a present lattice cell."""
        return 0 <= node < self._node_count and bool(self._present[node])

    def node_value(self, node: int) -> int:
        return int(self._node_values[node])

    def degree(self, node: int) -> int:
        return int(self.indptr[node + 1] - self.indptr[node])

    def neighbors(self, node: int) -> List[int]:
        start, end = self.indptr[node], self.indptr[node + 1]
        return [int(target) for target in self.indices[start:end]]

    def neighbors_with_values(self, node: int) -> List[Target]:
        start, end = self.indptr[node], self.indptr[node + 1]
        return [Target(int(t), int(w))
                for t, w in zip(self.indices[start:end], self.weights[start:end])]

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(node_count={self._node_count}, "
                f"edge_count={self.edge_count()})")


class UndirectedCsrGraph(CsrGraph):
    """Each edge is stored once as ``(low, high)`` and visible from both ends."""

    def __init__(self, node_count: int, edges: Iterable[Tuple[int, int]],
                 weights: Optional[Iterable[int]] = None, present: Optional[Sequence] = None):
        edges = [(min(u, v), max(u, v)) for u, v in edges]
        super().__init__(node_count, edges, weights, present)

    def _adjacency_pairs(self):
        low, high = self._edges[:, 0], self._edges[:, 1]
        return (np.concatenate([low, high]),
                np.concatenate([high, low]),
                np.concatenate([self._edge_weights, self._edge_weights]))


class DirectedCsrGraph(CsrGraph):
    """Edges are stored as given; ``neighbors`` returns out-neighbours."""

    directed = True

    def _adjacency_pairs(self):
        return self._edges[:, 0], self._edges[:, 1], self._edge_weights


def _lattice_edges(lattice: 'Lattice2D', directed: bool) -> Set[Tuple[int, int]]:
    edges = set()
    for vertex in lattice:
        self_index = lattice.to_vertex_index(*vertex)
        for neighbour in lattice.neighbours(vertex):
            neighbour_index = lattice.to_vertex_index(*neighbour)
            if directed:
                edges.add((self_index, neighbour_index))
            else:
                edges.add((min(self_index, neighbour_index), max(self_index, neighbour_index)))
    return edges


def to_undirected_csr(lattice: 'Lattice2D') -> UndirectedCsrGraph:
    """Snapshot a lattice as an undirected graph with one node per cell."""
    log = lattice_logger(__name__, lattice.columns, lattice.rows, directed=False)
    with memory_profiler("CSR build", log):
        graph = UndirectedCsrGraph(lattice.size, _lattice_edges(lattice, directed=False),
                                   present=lattice.as_bitvec())
    log.debug(f"Built {graph!r} from {lattice.vertices_len()} present cells")
    return graph


def to_directed_csr(lattice: 'Lattice2D') -> DirectedCsrGraph:
    """Snapshot a lattice as a directed graph holding both directions of every edge."""
    log = lattice_logger(__name__, lattice.columns, lattice.rows, directed=True)
    with memory_profiler("CSR build", log):
        graph = DirectedCsrGraph(lattice.size, _lattice_edges(lattice, directed=True),
                                 present=lattice.as_bitvec())
    log.debug(f"Built {graph!r} from {lattice.vertices_len()} present cells")
    return graph
