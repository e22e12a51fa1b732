"""Grid coordinates, undirected edges and typed connections."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

# Connection states
OPEN = "open"
LOCKED = "locked"
SHORTCUT = "shortcut"  # adjacent but deliberately unconnected; render hint only

CONNECTION_STATES = (OPEN, LOCKED, SHORTCUT)


@dataclass(frozen=True)
class Position:
    row: int
    col: int

    def __add__(self, other: "Position") -> "Position":
        return Position(self.row + other.row, self.col + other.col)

    def __mul__(self, factor: int) -> "Position":
        return Position(self.row * factor, self.col * factor)

    __rmul__ = __mul__

    def in_range(self, row_min: int, row_max: int, col_min: int, col_max: int) -> Optional["Position"]:
        """Return self when inside the inclusive bounds, else None."""
        if row_min <= self.row <= row_max and col_min <= self.col <= col_max:
            return self
        return None

    def neighbors(self):
        for offset in DIRECTIONS:
            yield self + offset

    def as_tuple(self) -> Tuple[int, int]:
        return (self.row, self.col)


UP = Position(-1, 0)
DOWN = Position(1, 0)
LEFT = Position(0, -1)
RIGHT = Position(0, 1)

DIRECTIONS = (UP, DOWN, LEFT, RIGHT)


class Edge:
    """Unordered pair of positions; Edge(a, b) == Edge(b, a)."""

    __slots__ = ("a", "b")

    def __init__(self, a: Position, b: Position):
        self.a = a
        self.b = b

    def __eq__(self, other):
        if not isinstance(other, Edge):
            return NotImplemented
        return (self.a == other.a and self.b == other.b) or (self.a == other.b and self.b == other.a)

    def __hash__(self):
        return hash(frozenset((self.a, self.b)))

    def __repr__(self):
        return f"Edge({self.a!r}, {self.b!r})"

    def __iter__(self):
        yield self.a
        yield self.b

    def other(self, pos: Position) -> Position:
        return self.b if pos == self.a else self.a


@dataclass(frozen=True)
class Connection:
    edge: Edge
    state: str = OPEN

    def __post_init__(self):
        if self.state not in CONNECTION_STATES:
            raise ValueError(f"unknown connection state: {self.state}")

    @property
    def traversable(self) -> bool:
        return self.state != SHORTCUT

    def to_dict(self):
        return {
            "a": list(self.edge.a.as_tuple()),
            "b": list(self.edge.b.as_tuple()),
            "state": self.state,
        }


__all__ = [
    "Position",
    "Edge",
    "Connection",
    "DIRECTIONS",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "OPEN",
    "LOCKED",
    "SHORTCUT",
    "CONNECTION_STATES",
]
