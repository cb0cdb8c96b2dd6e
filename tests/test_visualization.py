"""
Rendering Tests for LatticeRoute
Unit tests for the ASCII lattice renderer
"""

import pytest

from latticeroute.algorithms.base import Lattice2D
from latticeroute.visualization import render_lattice


def notched(columns, rows):
    """Full octilinear lattice with one vertex removed from the middle row."""
    lattice = Lattice2D(columns, rows, diagonal_mode=True)
    lattice.fill()
    lattice.remove_vertex((1, 2))
    return lattice


class TestRenderLattice:
    """Test lattice display strings"""

    def test_square(self):
        """Test a 3x3 lattice with every connector glyph"""
        expected = (
            "\r\n"
            "   0   1   2 \n"
            "0 (0)-(1)-(2)\n"
            "   | x | x | \n"
            "1 (3)-(4)-(5)\n"
            "   | /   \\ | \n"
            "2 (6) (7) (8)\n"
        )
        assert str(notched(3, 3)) == expected

    def test_wide(self):
        """Test a 4x3 lattice with two digit indices"""
        expected = (
            "\r\n"
            "   0    1    2    3  \n"
            "0 (0 )-(1 )-(2 )-(3 )\n"
            "   |  x |  x |  x |  \n"
            "1 (4 )-(5 )-(6 )-(7 )\n"
            "   |  /    \\ |  x |  \n"
            "2 (8 ) (9 ) (10)-(11)\n"
        )
        assert str(notched(4, 3)) == expected

    def test_tall(self):
        """Test a 3x4 lattice where the gap sits between two rows"""
        expected = (
            "\r\n"
            "   0    1    2  \n"
            "0 (0 )-(1 )-(2 )\n"
            "   |  x |  x |  \n"
            "1 (3 )-(4 )-(5 )\n"
            "   |  /    \\ |  \n"
            "2 (6 ) (7 ) (8 )\n"
            "   |  \\    / |  \n"
            "3 (9 )-(10)-(11)\n"
        )
        assert str(notched(3, 4)) == expected

    def test_rectilinear(self):
        """Test a full 2x2 lattice without diagonals"""
        lattice = Lattice2D(2, 2)
        lattice.fill()
        assert render_lattice(lattice) == "\r\n   0   1 \n0 (0)-(1)\n   |   | \n1 (2)-(3)\n"

    def test_empty_lattice_has_no_connectors(self):
        """Test absent vertices still show their index"""
        rendered = render_lattice(Lattice2D(2, 2))
        assert "(3)" in rendered
        for glyph in "-|/\\x":
            assert glyph not in rendered

    @pytest.mark.parametrize("columns,rows", [(0, 0), (0, 3), (3, 0)])
    def test_zero_extent(self, columns, rows):
        """Test lattices without cells render as a bare line break"""
        assert render_lattice(Lattice2D(columns, rows)) == "\r\n"

    def test_three_digit_indices(self):
        """Test every cell is enclosed in parentheses for large lattices"""
        lattice = Lattice2D(10, 10)
        lattice.fill()
        rendered = str(lattice)
        assert "( 5 )" in rendered
        assert "(99 )" in rendered
        lines = rendered.split("\n")
        assert len({len(line) for line in lines[1:-1]}) == 1
