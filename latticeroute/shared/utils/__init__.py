"""Shared utilities."""
from .logging_utils import (
    setup_logging, get_logger, get_context_logger, lattice_logger, ContextLogger
)
from .validation_utils import (
    validate_extent, validate_boundary, validate_net_id, validate_non_negative_integer
)
from .performance_utils import timing_context, memory_profiler

__all__ = [
    'setup_logging', 'get_logger', 'get_context_logger', 'lattice_logger', 'ContextLogger',
    'validate_extent', 'validate_boundary', 'validate_net_id',
    'validate_non_negative_integer',
    'timing_context', 'memory_profiler'
]
