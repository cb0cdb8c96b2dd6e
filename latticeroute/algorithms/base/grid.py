"""Lattice grid graph with dense/sparse membership tracking."""
import operator
from typing import Dict, Iterable, Iterator, List, Sequence, Set, Tuple

import numpy as np

from ...shared.exceptions import GridError, ValidationError
from ...shared.utils.logging_utils import ContextLogger, lattice_logger
from ...shared.utils.validation_utils import validate_extent

Vertex = Tuple[int, int]


class Lattice2D:
    """Rectangular lattice of routable cells addressed as ``(column, row)``.

    Membership is stored as a single coordinate set whose meaning depends on
    ``dense``: when ``dense`` is False the set lists the present vertices,
    when True it lists the absent ones. After every edit the representation
    is rebalanced so the stored set never holds more than half of the grid.

    Connectivity is 4-neighbour (rectilinear) unless ``diagonal_mode`` is
    enabled, in which case diagonal neighbours are adjacent too (octilinear).
    """

    def __init__(self, columns: int, rows: int, diagonal_mode: bool = False):
        """Create an empty lattice (no vertex present)."""
        try:
            columns, rows = validate_extent(columns, rows)
        except ValidationError as e:
            raise GridError(f"Invalid lattice extent {columns}x{rows}: {e}",
                            grid_bounds=(columns, rows)) from e

        self.columns = columns
        self.rows = rows
        self._diagonal_mode = bool(diagonal_mode)
        self._dense = False
        self._exclusions: Set[Vertex] = set()

    @classmethod
    def from_bitvec(cls, columns: int, rows: int, bits: Sequence,
                    diagonal_mode: bool = False) -> 'Lattice2D':
        """Build a lattice whose present vertices are the set bits of a row-major bitmap."""
        lattice = cls(columns, rows, diagonal_mode=diagonal_mode)
        lattice.add_vertex_vector(bits)
        return lattice

    # Builders

    def with_diagonal(self) -> 'Lattice2D':
        """Enable octilinear connectivity and return the lattice for chaining."""
        self._diagonal_mode = True
        return self

    # Setters

    def invert(self):
        """Swap present and absent vertices."""
        self._dense = not self._dense

    def enable_diagonal(self):
        self._diagonal_mode = True

    def disable_diagonal(self):
        self._diagonal_mode = False

    # Queries

    @property
    def diagonal_mode(self) -> bool:
        return self._diagonal_mode

    @property
    def dense(self) -> bool:
        return self._dense

    @property
    def exclusions(self) -> frozenset:
        """Read-only view of the stored coordinate set."""
        return frozenset(self._exclusions)

    @property
    def size(self) -> int:
        return self.columns * self.rows

    def vertices_len(self) -> int:
        """Number of present vertices."""
        if self._dense:
            return self.size - len(self._exclusions)
        return len(self._exclusions)

    def is_empty(self) -> bool:
        return self.vertices_len() == 0

    def is_full(self) -> bool:
        return self.vertices_len() == self.size

    def is_inside(self, vertex: Vertex) -> bool:
        column, row = vertex
        return 0 <= column < self.columns and 0 <= row < self.rows

    def has_vertex(self, vertex: Vertex) -> bool:
        return self.is_inside(vertex) and ((tuple(vertex) in self._exclusions) != self._dense)

    def has_edge(self, v1: Vertex, v2: Vertex) -> bool:
        """True if both vertices are present and adjacent under the active connectivity."""
        if not self.has_vertex(v1) or not self.has_vertex(v2):
            return False
        dx = abs(v1[0] - v2[0])
        dy = abs(v1[1] - v2[1])
        return dx + dy == 1 or (dx == 1 and dy == 1 and self._diagonal_mode)

    def is_area_obstructed(self, from_vertex: Vertex, to_vertex: Vertex) -> bool:
        """True if any vertex inside the inclusive rectangle is present."""
        return any(self.has_vertex(vertex) for vertex in self.area(from_vertex, to_vertex))

    def to_vertex_index(self, column: int, row: int) -> int:
        """Row-major linear index of ``(column, row)``."""
        return column + row * self.columns

    def to_vertex_coords(self, index: int) -> Vertex:
        """Inverse of :meth:`to_vertex_index`."""
        row, column = divmod(index, self.columns)
        return column, row

    def neighbours(self, vertex: Vertex) -> List[Vertex]:
        """Present neighbours of a present vertex.

        Order: left, top-left, bottom-left, right, top-right, bottom-right,
        top, bottom (diagonals only in octilinear mode). The A* engine relies
        on this order for deterministic tie-breaking.
        """
        if not self.has_vertex(vertex):
            return []

        x, y = vertex
        candidates = []
        if x > 0:
            candidates.append((x - 1, y))
            if self._diagonal_mode:
                if y > 0:
                    candidates.append((x - 1, y - 1))
                if y + 1 < self.rows:
                    candidates.append((x - 1, y + 1))

        if x + 1 < self.columns:
            candidates.append((x + 1, y))
            if self._diagonal_mode:
                if y > 0:
                    candidates.append((x + 1, y - 1))
                if y + 1 < self.rows:
                    candidates.append((x + 1, y + 1))

        if y > 0:
            candidates.append((x, y - 1))

        if y + 1 < self.rows:
            candidates.append((x, y + 1))

        return [candidate for candidate in candidates if self.has_vertex(candidate)]

    # Utils

    def area(self, from_vertex: Vertex, to_vertex: Vertex) -> Iterator[Vertex]:
        """Cells of the inclusive rectangle spanned by two corners, column by column."""
        from_column, from_row = self._as_vertex(from_vertex)
        to_column, to_row = self._as_vertex(to_vertex)
        for column in range(from_column, to_column + 1):
            for row in range(from_row, to_row + 1):
                yield column, row

    def perimeter(self, from_vertex: Vertex, to_vertex: Vertex) -> Iterator[Vertex]:
        """Boundary cells of the inclusive rectangle spanned by two corners.

        Top and bottom rows first, then the left and right columns strictly
        between them. Each cell is yielded once.
        """
        from_column, from_row = self._as_vertex(from_vertex)
        to_column, to_row = self._as_vertex(to_vertex)
        for column in range(from_column, to_column + 1):
            yield column, from_row
            if to_row != from_row:
                yield column, to_row
        for row in range(from_row + 1, to_row):
            yield from_column, row
            if to_column != from_column:
                yield to_column, row

    def rebalance(self) -> bool:
        """Flip the representation if the stored set exceeds half the grid.

        Returns:
            True if the representation was flipped
        """
        size = self.size
        if len(self._exclusions) <= size // 2:
            return False

        self._exclusions = {
            (column, row)
            for row in range(self.rows)
            for column in range(self.columns)
            if (column, row) not in self._exclusions
        }
        self.invert()
        self._log().debug(f"Rebalanced: dense={self._dense}, stored={len(self._exclusions)}")
        return True

    def resize(self, columns: int, rows: int) -> bool:
        """Change the lattice extent.

        Vertices outside the new extent are dropped and newly exposed cells
        start absent.

        Returns:
            True if any present vertex was truncated
        """
        try:
            columns, rows = validate_extent(columns, rows)
        except ValidationError as e:
            raise GridError(f"Invalid lattice extent {columns}x{rows}: {e}",
                            grid_bounds=(columns, rows)) from e

        outside = [(c, r) for (c, r) in self._exclusions if c >= columns or r >= rows]
        if self._dense:
            kept_cells = min(self.columns, columns) * min(self.rows, rows)
            truncated = self.size - kept_cells > len(outside)
        else:
            truncated = bool(outside)

        self._exclusions.difference_update(outside)
        if self._dense:
            for c in range(self.columns, columns):
                for r in range(rows):
                    self._exclusions.add((c, r))
            for c in range(min(self.columns, columns)):
                for r in range(self.rows, rows):
                    self._exclusions.add((c, r))

        old_extent = (self.columns, self.rows)
        self.columns = columns
        self.rows = rows
        self.rebalance()

        if truncated:
            lattice_logger(__name__, *old_extent).warning(
                f"Resize to {columns}x{rows} truncated present vertices")
        return truncated

    # Manipulators

    def _log(self) -> ContextLogger:
        return lattice_logger(__name__, self.columns, self.rows)

    @staticmethod
    def _as_vertex(vertex) -> Vertex:
        # Accepts numpy integers; stored coordinates are always plain ints
        column, row = vertex
        return operator.index(column), operator.index(row)

    def _set_presence(self, vertex: Vertex, present: bool) -> bool:
        """Record a vertex as present or absent without rebalancing.

        Returns:
            True if the stored set changed
        """
        stored = present != self._dense
        if stored:
            if vertex in self._exclusions:
                return False
            self._exclusions.add(vertex)
            return True
        if vertex in self._exclusions:
            self._exclusions.remove(vertex)
            return True
        return False

    def _edit_vertices(self, vertices: Iterable[Vertex], present: bool) -> int:
        count = sum(1 for vertex in vertices if self._set_presence(vertex, present))
        self.rebalance()
        return count

    def _is_valid_rectangle(self, from_vertex: Vertex, to_vertex: Vertex) -> bool:
        return (self.columns > 0 and self.rows > 0
                and self.is_inside(from_vertex) and self.is_inside(to_vertex))

    def add_vertex(self, vertex: Vertex) -> bool:
        """Make a vertex present; returns whether the stored set changed."""
        vertex = self._as_vertex(vertex)
        if not self.is_inside(vertex):
            return False
        return self._edit_vertices([vertex], True) == 1

    def remove_vertex(self, vertex: Vertex) -> bool:
        """Make a vertex absent; returns whether the stored set changed."""
        vertex = self._as_vertex(vertex)
        if not self.is_inside(vertex):
            return False
        return self._edit_vertices([vertex], False) == 1

    def add_vertex_area(self, from_vertex: Vertex, to_vertex: Vertex) -> int:
        if not self._is_valid_rectangle(from_vertex, to_vertex):
            return 0
        return self._edit_vertices(self.area(from_vertex, to_vertex), True)

    def remove_vertex_area(self, from_vertex: Vertex, to_vertex: Vertex) -> int:
        if not self._is_valid_rectangle(from_vertex, to_vertex):
            return 0
        return self._edit_vertices(self.area(from_vertex, to_vertex), False)

    def add_vertex_perimeter(self, from_vertex: Vertex, to_vertex: Vertex) -> int:
        if not self._is_valid_rectangle(from_vertex, to_vertex):
            return 0
        return self._edit_vertices(self.perimeter(from_vertex, to_vertex), True)

    def remove_vertex_perimeter(self, from_vertex: Vertex, to_vertex: Vertex) -> int:
        if not self._is_valid_rectangle(from_vertex, to_vertex):
            return 0
        return self._edit_vertices(self.perimeter(from_vertex, to_vertex), False)

    def add_border(self) -> int:
        if self.columns == 0 or self.rows == 0:
            return 0
        return self.add_vertex_perimeter((0, 0), (self.columns - 1, self.rows - 1))

    def remove_border(self) -> int:
        if self.columns == 0 or self.rows == 0:
            return 0
        return self.remove_vertex_perimeter((0, 0), (self.columns - 1, self.rows - 1))

    def _vector_vertices(self, vector: Sequence) -> List[Vertex]:
        bits = np.asarray(vector, dtype=bool)
        if bits.ndim != 1 or bits.size != self.size:
            self._log().debug(f"Ignoring bit vector of shape {bits.shape}")
            return []
        return [self.to_vertex_coords(int(index)) for index in np.flatnonzero(bits)]

    def add_vertex_vector(self, vector: Sequence) -> int:
        """Make every vertex whose row-major bit is set present.

        Vectors whose length differs from ``columns * rows`` are ignored.
        """
        return self._edit_vertices(self._vector_vertices(vector), True)

    def remove_vertex_vector(self, vector: Sequence) -> int:
        """Make every vertex whose row-major bit is set absent."""
        return self._edit_vertices(self._vector_vertices(vector), False)

    def clear(self) -> bool:
        result = not self.is_empty()
        self._dense = False
        self._exclusions.clear()
        return result

    def fill(self) -> bool:
        result = not self.is_full()
        self._dense = True
        self._exclusions.clear()
        return result

    def as_bitvec(self) -> np.ndarray:
        """Row-major presence bitmap of length ``columns * rows``."""
        bits = np.zeros(self.size, dtype=bool)
        for column, row in self._exclusions:
            bits[self.to_vertex_index(column, row)] = True
        if self._dense:
            np.logical_not(bits, out=bits)
        return bits

    # Conversion

    def to_undirected_csr(self):
        from .csr import to_undirected_csr
        return to_undirected_csr(self)

    def to_directed_csr(self):
        from .csr import to_directed_csr
        return to_directed_csr(self)

    def copy(self) -> 'Lattice2D':
        lattice = Lattice2D(self.columns, self.rows, diagonal_mode=self._diagonal_mode)
        lattice._dense = self._dense
        lattice._exclusions = set(self._exclusions)
        return lattice

    def get_statistics(self) -> Dict[str, object]:
        present = self.vertices_len()
        return {
            'dimensions': f"{self.columns}x{self.rows}",
            'connectivity': 'octilinear' if self._diagonal_mode else 'rectilinear',
            'total_cells': self.size,
            'present_cells': present,
            'absent_cells': self.size - present,
            'dense': self._dense,
            'stored_cells': len(self._exclusions),
        }

    def __iter__(self) -> Iterator[Vertex]:
        """Present vertices in row-major order."""
        if self._dense:
            for row in range(self.rows):
                for column in range(self.columns):
                    if (column, row) not in self._exclusions:
                        yield column, row
        else:
            yield from sorted(self._exclusions, key=lambda vertex: (vertex[1], vertex[0]))

    def __contains__(self, vertex) -> bool:
        return self.has_vertex(vertex)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Lattice2D):
            return NotImplemented
        return (self.vertices_len() == other.vertices_len()
                and all(a == b for a, b in zip(self, other)))

    __hash__ = None

    def __repr__(self) -> str:
        return (f"Lattice2D(columns={self.columns}, rows={self.rows}, "
                f"diagonal_mode={self._diagonal_mode}, present={self.vertices_len()})")

    def __str__(self) -> str:
        from ...visualization import render_lattice
        return render_lattice(self)
