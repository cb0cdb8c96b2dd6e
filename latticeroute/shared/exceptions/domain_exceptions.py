"""Domain-specific exceptions."""
from .base_exceptions import LatticeRouteException, RoutingError


class GridError(LatticeRouteException):
    """Exception raised for lattice extent errors."""
    
    def __init__(self, message: str, grid_bounds: tuple = None, **kwargs):
        """Initialize grid error.
        
        Args:
            message: Error message
            grid_bounds: Lattice extent (columns, rows) that caused the error
        """
        super().__init__(message, **kwargs)
        self.grid_bounds = grid_bounds


class AlgorithmError(RoutingError):
    """Exception raised for routing algorithm errors."""
    
    def __init__(self, message: str, algorithm_name: str = None, **kwargs):
        """Initialize algorithm error.
        
        Args:
            message: Error message
            algorithm_name: Name of algorithm that failed
        """
        super().__init__(message, **kwargs)
        self.algorithm_name = algorithm_name
