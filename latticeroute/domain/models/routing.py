"""Domain models for routed cells and the edit records describing them."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Hashable, MutableMapping, Optional, Tuple, Union


class NodeKind(Enum):
    """Role of a lattice cell in a routing session."""
    OBSTACLE = "obstacle"
    BOUNDARY = "boundary"
    START = "start"
    TARGET = "target"
    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"
    ROUTE = "route"


@dataclass(frozen=True)
class NodeType:
    """Value object placed on a cell: its kind plus optional net and cost."""
    kind: NodeKind
    net: Optional[int] = None
    cost: Optional[int] = None

    @classmethod
    def obstacle(cls) -> 'NodeType':
        return cls(NodeKind.OBSTACLE)

    @classmethod
    def boundary(cls) -> 'NodeType':
        return cls(NodeKind.BOUNDARY)

    @classmethod
    def start(cls, net: int) -> 'NodeType':
        return cls(NodeKind.START, net=net)

    @classmethod
    def target(cls, net: int) -> 'NodeType':
        return cls(NodeKind.TARGET, net=net)

    @classmethod
    def unresolved(cls, cost: int) -> 'NodeType':
        return cls(NodeKind.UNRESOLVED, cost=cost)

    @classmethod
    def resolved(cls, cost: int) -> 'NodeType':
        return cls(NodeKind.RESOLVED, cost=cost)

    @classmethod
    def route(cls, net: int, cost: int) -> 'NodeType':
        return cls(NodeKind.ROUTE, net=net, cost=cost)

    def get_net(self) -> Optional[int]:
        """Net of start, target and route cells."""
        if self.kind in (NodeKind.START, NodeKind.TARGET, NodeKind.ROUTE):
            return self.net
        return None

    def get_cost(self) -> Optional[int]:
        """Cost of unresolved, resolved and route cells."""
        if self.kind in (NodeKind.UNRESOLVED, NodeKind.RESOLVED, NodeKind.ROUTE):
            return self.cost
        return None


@dataclass(frozen=True)
class TapeAdd:
    """Place ``value`` at ``key``, remembering what it replaced."""
    key: Hashable
    value: Any
    previous: Any = None


@dataclass(frozen=True)
class TapeRemove:
    """Remove ``value`` from ``key``."""
    key: Hashable
    value: Any


@dataclass(frozen=True)
class TapeMove:
    """Move ``value`` from ``source`` to ``destination``."""
    source: Hashable
    destination: Hashable
    value: Any


@dataclass(frozen=True)
class TapeBatchAdd:
    """Several adds applied as one step: ``key -> (value, previous)``."""
    items: Dict[Hashable, Tuple[Any, Any]] = field(default_factory=dict)


@dataclass(frozen=True)
class TapeBatchRemove:
    """Several removals applied as one step: ``key -> value``."""
    items: Dict[Hashable, Any] = field(default_factory=dict)


TapeItem = Union[TapeAdd, TapeRemove, TapeMove, TapeBatchAdd, TapeBatchRemove]


def advance(state: MutableMapping, item: TapeItem) -> None:
    """Apply an edit record to a mapping."""
    if isinstance(item, TapeAdd):
        state[item.key] = item.value
    elif isinstance(item, TapeRemove):
        state.pop(item.key, None)
    elif isinstance(item, TapeMove):
        state.pop(item.source, None)
        state[item.destination] = item.value
    elif isinstance(item, TapeBatchAdd):
        for key, (value, _) in item.items.items():
            state[key] = value
    elif isinstance(item, TapeBatchRemove):
        for key in item.items:
            state.pop(key, None)
    else:
        raise TypeError(f"Unsupported tape item: {item!r}")


def rewind(state: MutableMapping, item: TapeItem) -> None:
    """Undo an edit record previously applied with :func:`advance`."""
    if isinstance(item, TapeAdd):
        state.pop(item.key, None)
        if item.previous is not None:
            state[item.key] = item.previous
    elif isinstance(item, TapeRemove):
        state[item.key] = item.value
    elif isinstance(item, TapeMove):
        state.pop(item.destination, None)
        state[item.source] = item.value
    elif isinstance(item, TapeBatchAdd):
        for key, (_, previous) in item.items.items():
            state.pop(key, None)
            if previous is not None:
                state[key] = previous
    elif isinstance(item, TapeBatchRemove):
        for key, value in item.items.items():
            state[key] = value
    else:
        raise TypeError(f"Unsupported tape item: {item!r}")
