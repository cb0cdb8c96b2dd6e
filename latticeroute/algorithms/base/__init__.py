"""Base routing substrate: lattice membership and CSR snapshots."""
from .grid import Lattice2D
from .csr import (
    CsrGraph, UndirectedCsrGraph, DirectedCsrGraph, to_undirected_csr, to_directed_csr
)

__all__ = [
    'Lattice2D', 'CsrGraph', 'UndirectedCsrGraph', 'DirectedCsrGraph',
    'to_undirected_csr', 'to_directed_csr'
]
