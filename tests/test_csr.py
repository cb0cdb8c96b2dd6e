"""
CSR Graph Tests for LatticeRoute
Unit tests for lattice snapshots in compressed sparse row layout

Expected edge lists describe 5x5 lattices after the same edits the lattice
tests perform, so the graph builder and the lattice are checked together.
"""

import numpy as np
import pytest

from latticeroute.algorithms.base import (
    CsrGraph, DirectedCsrGraph, Lattice2D, UndirectedCsrGraph, to_directed_csr,
    to_undirected_csr
)
from latticeroute.shared.exceptions import ValidationError


BITS_5X5 = [1, 1, 1, 1, 1,
            1, 1, 1, 1, 0,
            1, 1, 1, 0, 0,
            1, 1, 0, 0, 0,
            1, 0, 0, 0, 0]

BLOCK_EDGES = [
    (6, 7), (6, 11), (7, 8), (7, 12), (8, 13), (11, 12),
    (11, 16), (12, 13), (12, 17), (13, 18), (16, 17), (17, 18),
]

BLOCK_OCTILINEAR_EDGES = [
    (6, 7), (6, 11), (6, 12), (7, 8), (7, 11), (7, 12), (7, 13),
    (8, 12), (8, 13), (11, 12), (11, 16), (11, 17), (12, 13), (12, 16),
    (12, 17), (12, 18), (13, 17), (13, 18), (16, 17), (17, 18),
]

BORDER_EDGES = [
    (0, 1), (0, 5), (1, 2), (2, 3), (3, 4), (4, 9), (5, 10), (9, 14),
    (10, 15), (14, 19), (15, 20), (19, 24), (20, 21), (21, 22), (22, 23), (23, 24),
]


def full_grid_edges(columns, rows):
    edges = []
    for index in range(columns * rows):
        column, row = index % columns, index // columns
        if column + 1 < columns:
            edges.append((index, index + 1))
        if row + 1 < rows:
            edges.append((index, index + columns))
    return sorted(edges)


def assert_graph(graph, expected_edges, node_count=25):
    """Compare a graph with an undirected edge list node by node."""
    assert graph.node_count() == node_count
    assert graph.edge_count() == len(expected_edges)
    assert graph.edges == sorted(expected_edges)
    for node in range(node_count):
        expected = sorted([v for u, v in expected_edges if u == node]
                          + [u for u, v in expected_edges if v == node])
        assert graph.neighbors(node) == expected, f"node {node}\n{graph}"


class TestLatticeSnapshots:
    """Test CSR graphs built from edited lattices"""

    def test_block_rectilinear(self, empty_lattice):
        """Test a 3x3 block added vertex by vertex"""
        for column in range(1, 4):
            for row in range(1, 4):
                empty_lattice.add_vertex((column, row))
        assert_graph(empty_lattice.to_undirected_csr(), BLOCK_EDGES)

    def test_block_octilinear(self):
        """Test a 3x3 block with diagonal neighbours"""
        lattice = Lattice2D(5, 5).with_diagonal()
        lattice.add_vertex_area((1, 1), (3, 3))
        assert_graph(lattice.to_undirected_csr(), BLOCK_OCTILINEAR_EDGES)

    def test_fill(self, full_lattice):
        """Test a full lattice"""
        graph = full_lattice.to_undirected_csr()
        assert graph.edge_count() == 40
        assert_graph(graph, full_grid_edges(5, 5))

    def test_fill_octilinear(self, full_lattice):
        """Test a full lattice with diagonal neighbours"""
        full_lattice.enable_diagonal()
        assert full_lattice.to_undirected_csr().edge_count() == 72

    @pytest.mark.parametrize("diagonal_mode,edge_count", [(False, 12), (True, 20)])
    def test_small_full_lattice(self, diagonal_mode, edge_count):
        """Test edge counts of a full 3x3 lattice"""
        lattice = Lattice2D(3, 3, diagonal_mode=diagonal_mode)
        lattice.fill()
        assert to_undirected_csr(lattice).edge_count() == edge_count

    def test_empty(self, empty_lattice):
        """Test an empty lattice still owns one node per cell"""
        graph = empty_lattice.to_undirected_csr()
        assert graph.node_count() == 25
        assert graph.edge_count() == 0
        assert graph.neighbors(12) == []

    def test_single_vertex(self, empty_lattice):
        """Test an isolated vertex has no edges"""
        empty_lattice.add_vertex((2, 2))
        assert_graph(empty_lattice.to_undirected_csr(), [])

    def test_remove_single_vertex(self, full_lattice):
        """Test removing the centre of a full lattice"""
        full_lattice.remove_vertex((2, 2))
        expected = [edge for edge in full_grid_edges(5, 5) if 12 not in edge]
        assert len(expected) == 36
        assert_graph(full_lattice.to_undirected_csr(), expected)

    def test_add_vertex_area(self, empty_lattice):
        """Test an area add"""
        empty_lattice.add_vertex_area((1, 1), (3, 3))
        assert_graph(empty_lattice.to_undirected_csr(), BLOCK_EDGES)

    def test_remove_vertex_area(self, full_lattice):
        """Test an area removal leaves the border ring"""
        full_lattice.remove_vertex_area((1, 1), (3, 3))
        assert_graph(full_lattice.to_undirected_csr(), BORDER_EDGES)

    def test_add_vertex_vector(self, empty_lattice):
        """Test a triangular vector add"""
        empty_lattice.add_vertex_vector(BITS_5X5)
        expected = [
            (0, 1), (0, 5), (1, 2), (1, 6), (2, 3), (2, 7), (3, 4), (3, 8),
            (5, 6), (5, 10), (6, 7), (6, 11), (7, 8), (7, 12), (10, 11),
            (10, 15), (11, 12), (11, 16), (15, 16), (15, 20),
        ]
        assert_graph(empty_lattice.to_undirected_csr(), expected)

    def test_remove_vertex_vector(self, full_lattice):
        """Test a triangular vector removal"""
        full_lattice.remove_vertex_vector(BITS_5X5)
        expected = [
            (9, 14), (13, 14), (13, 18), (14, 19), (17, 18), (17, 22),
            (18, 19), (18, 23), (19, 24), (21, 22), (22, 23), (23, 24),
        ]
        assert_graph(full_lattice.to_undirected_csr(), expected)

    def test_add_border(self, empty_lattice):
        """Test a border ring"""
        empty_lattice.add_border()
        assert_graph(empty_lattice.to_undirected_csr(), BORDER_EDGES)

    def test_remove_border(self, full_lattice):
        """Test removing the border ring"""
        full_lattice.remove_border()
        assert_graph(full_lattice.to_undirected_csr(), BLOCK_EDGES)

    def test_snapshot_does_not_track_lattice(self, full_lattice):
        """Test later lattice edits leave a built graph unchanged"""
        graph = full_lattice.to_undirected_csr()
        full_lattice.clear()
        assert graph.edge_count() == 40
        assert full_lattice.to_undirected_csr().edge_count() == 0

    def test_edges_match_lattice(self, rng):
        """Test every graph edge is a lattice edge and vice versa"""
        lattice = Lattice2D.from_bitvec(6, 4, rng.random(24) < 0.7, diagonal_mode=True)
        graph = lattice.to_undirected_csr()
        for u in range(lattice.size):
            for v in range(lattice.size):
                in_graph = v in graph.neighbors(u)
                assert in_graph == lattice.has_edge(lattice.to_vertex_coords(u),
                                                    lattice.to_vertex_coords(v))


class TestDirectedSnapshots:
    """Test directed CSR graphs"""

    def test_both_directions_stored(self):
        """Test a directed snapshot holds every edge twice"""
        lattice = Lattice2D(3, 3)
        lattice.fill()
        graph = to_directed_csr(lattice)
        assert graph.directed
        assert graph.edge_count() == 24
        assert graph.neighbors(4) == [1, 3, 5, 7]
        assert (5, 4) in graph.edges and (4, 5) in graph.edges

    def test_method_matches_function(self, full_lattice):
        """Test the lattice conversion helper"""
        assert full_lattice.to_directed_csr().edges == to_directed_csr(full_lattice).edges


class TestCsrGraph:
    """Test the CSR containers directly"""

    def test_layout(self, full_lattice):
        """Test indptr and indices arrays"""
        graph = full_lattice.to_undirected_csr()
        assert len(graph.indptr) == 26
        assert graph.indptr[-1] == 2 * graph.edge_count()
        assert graph.degree(0) == 2
        assert graph.degree(12) == 4
        np.testing.assert_array_equal(graph.indices[graph.indptr[12]:graph.indptr[13]],
                                      [7, 11, 13, 17])

    def test_undirected_normalizes_edges(self):
        """Test edges are stored low to high"""
        graph = UndirectedCsrGraph(4, [(3, 1), (2, 0)])
        assert graph.edges == [(0, 2), (1, 3)]
        assert graph.neighbors(3) == [1]

    def test_default_weights(self, full_lattice):
        """Test every lattice edge weighs one"""
        graph = full_lattice.to_undirected_csr()
        assert all(entry.value == 1 for entry in graph.neighbors_with_values(12))

    def test_custom_weights(self):
        """Test weights follow their edges through sorting"""
        graph = UndirectedCsrGraph(3, [(1, 2), (0, 1)], weights=[7, 3])
        assert graph.neighbors_with_values(1) == [(0, 3), (2, 7)]
        assert graph.neighbors_with_values(1)[1].target == 2

    def test_weight_count_mismatch(self):
        """Test weight arrays must match the edge list"""
        with pytest.raises(ValidationError):
            DirectedCsrGraph(3, [(0, 1)], weights=[1, 2])

    def test_endpoint_out_of_range(self):
        """Test edges must reference existing nodes"""
        with pytest.raises(ValidationError):
            UndirectedCsrGraph(2, [(0, 2)])

    def test_node_values(self):
        """Test node values are the node indices"""
        graph = DirectedCsrGraph(3, [])
        assert [graph.node_value(node) for node in range(3)] == [0, 1, 2]
        assert isinstance(graph, CsrGraph)
        assert repr(graph) == "DirectedCsrGraph(node_count=3, edge_count=0)"

    def test_present_nodes(self, empty_lattice):
        """Test snapshots mark which nodes are present cells"""
        empty_lattice.add_vertex((1, 1))
        graph = empty_lattice.to_undirected_csr()
        assert graph.has_node(empty_lattice.to_vertex_index(1, 1))
        assert not graph.has_node(empty_lattice.to_vertex_index(2, 2))
        assert not graph.has_node(-1)
        assert not graph.has_node(graph.node_count())

    def test_present_by_default(self):
        """Test graphs built without a presence mask treat every node as present"""
        graph = UndirectedCsrGraph(3, [(0, 1)])
        assert [graph.has_node(node) for node in range(3)] == [True, True, True]

    def test_present_length_mismatch(self):
        """Test the presence mask must cover every node"""
        with pytest.raises(ValidationError):
            DirectedCsrGraph(3, [], present=[True, False])
