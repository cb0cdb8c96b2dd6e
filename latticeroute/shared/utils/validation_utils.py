"""Validation utilities for LatticeRoute."""
import numbers
from typing import Any, Tuple

from ..exceptions import ValidationError


def validate_extent(columns: Any, rows: Any) -> Tuple[int, int]:
    """Validate a lattice extent.
    
    Args:
        columns: Number of lattice columns
        rows: Number of lattice rows
        
    Returns:
        The extent as plain ints
        
    Raises:
        ValidationError: If either dimension is not a non-negative integer
    """
    validate_non_negative_integer(columns, "columns")
    validate_non_negative_integer(rows, "rows")
    return int(columns), int(rows)


def validate_boundary(boundary: Any, field_name: str = "boundary") -> Tuple[int, int]:
    """Validate a ``(columns, rows)`` boundary and return it as a tuple of ints.
    
    Raises:
        ValidationError: If the value is not a pair of non-negative integers
    """
    try:
        columns, rows = boundary
    except (TypeError, ValueError):
        raise ValidationError(
            f"{field_name} must be a (columns, rows) pair, got {boundary!r}",
            field=field_name, value=boundary
        )
    return validate_extent(columns, rows)


def validate_net_id(net_id: Any) -> None:
    """Validate a net identifier.
    
    Args:
        net_id: Net identifier
        
    Raises:
        ValidationError: If net ID is not a non-negative integer
    """
    validate_non_negative_integer(net_id, "net_id")


def validate_non_negative_integer(value: Any, field_name: str) -> None:
    """Validate that a value is a non-negative integer.
    
    Args:
        value: Value to validate
        field_name: Name of field for error reporting
        
    Raises:
        ValidationError: If value is not a non-negative integer
    """
    # numpy integers are Integral; bool is too but never a valid extent or index
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValidationError(
            f"{field_name} must be an integer, got {type(value)}",
            field=field_name, value=value
        )
    
    if value < 0:
        raise ValidationError(
            f"{field_name} must be non-negative, got {value}",
            field=field_name, value=value
        )
