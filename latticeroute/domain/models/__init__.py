"""Domain models package."""
from .routing import (
    NodeKind, NodeType, TapeAdd, TapeRemove, TapeMove, TapeBatchAdd, TapeBatchRemove,
    TapeItem, advance, rewind
)

__all__ = [
    'NodeKind', 'NodeType', 'TapeAdd', 'TapeRemove', 'TapeMove',
    'TapeBatchAdd', 'TapeBatchRemove', 'TapeItem', 'advance', 'rewind'
]
