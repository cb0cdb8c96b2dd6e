"""Test configuration and fixtures for LatticeRoute."""
import logging

import numpy as np
import pytest

from latticeroute.algorithms.base import Lattice2D
from latticeroute.domain.services import ShortestPathConfig


@pytest.fixture
def full_lattice():
    """5x5 rectilinear lattice with every vertex present."""
    lattice = Lattice2D(5, 5)
    lattice.fill()
    return lattice


@pytest.fixture
def empty_lattice():
    """5x5 rectilinear lattice with no vertex present."""
    return Lattice2D(5, 5)


@pytest.fixture
def rng():
    """Seeded generator for reproducible random lattices."""
    return np.random.default_rng(42)


@pytest.fixture
def make_config():
    """Build a ShortestPathConfig from a lattice and a target cell."""
    def _make_config(lattice, target, **kwargs):
        goal = None if target is None else lattice.to_vertex_index(*target)
        return ShortestPathConfig(
            graph=lattice.to_undirected_csr(),
            goal=goal,
            boundary=(lattice.columns, lattice.rows),
            **kwargs
        )
    return _make_config


@pytest.fixture
def restore_package_logger():
    """Undo handlers and levels installed on the latticeroute loggers."""
    package_logger = logging.getLogger("latticeroute")
    level = package_logger.level
    yield package_logger
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(level)
    for name, component_logger in logging.root.manager.loggerDict.items():
        if name.startswith("latticeroute.") and isinstance(component_logger, logging.Logger):
            component_logger.setLevel(logging.NOTSET)
