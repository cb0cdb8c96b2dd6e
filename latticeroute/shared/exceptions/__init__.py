"""Shared exceptions for LatticeRoute."""
from .base_exceptions import (
    LatticeRouteException, ConfigurationError, ValidationError, RoutingError
)
from .domain_exceptions import GridError, AlgorithmError

__all__ = [
    'LatticeRouteException', 'ConfigurationError', 'ValidationError',
    'RoutingError', 'GridError', 'AlgorithmError'
]
