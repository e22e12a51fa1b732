"""Fixed-size grid of optional rooms plus the connections between them."""
from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from .cells import Connection, Edge, Position
from .rooms import Room


class RoomMap:
    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"room map extents must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        # row-major: index = row * width + col
        self._cells: List[Optional[Room]] = [None] * (width * height)
        self._connections: List[Connection] = []

    @classmethod
    def with_size(cls, width: int, height: int) -> "RoomMap":
        return cls(width, height)

    def clone(self) -> "RoomMap":
        # Rooms and connections are immutable, shallow list copies isolate the clone
        other = RoomMap(self.width, self.height)
        other._cells = list(self._cells)
        other._connections = list(self._connections)
        return other

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.row < self.height and 0 <= pos.col < self.width

    def _index(self, pos: Position) -> int:
        return pos.row * self.width + pos.col

    def set_room(self, pos: Position, room: Room) -> None:
        if not self.in_bounds(pos):
            raise IndexError(f"position {pos} outside {self.width}x{self.height} map")
        self._cells[self._index(pos)] = room

    def get_room(self, pos: Position) -> Optional[Room]:
        if not self.in_bounds(pos):
            return None
        return self._cells[self._index(pos)]

    def add_connection(self, connection: Connection) -> None:
        self._connections.append(connection)

    def get_connection(self, edge: Edge) -> Optional[Connection]:
        for conn in self._connections:
            if conn.edge == edge:
                return conn
        return None

    @property
    def connections(self) -> Tuple[Connection, ...]:
        return tuple(self._connections)

    def rooms(self) -> Iterator[Tuple[Position, Room]]:
        for row in range(self.height):
            for col in range(self.width):
                room = self._cells[row * self.width + col]
                if room is not None:
                    yield Position(row, col), room

    @property
    def start(self) -> Optional[Position]:
        for pos, room in self.rooms():
            if room.layer == 0:
                return pos
        return None

    @property
    def layer_count(self) -> int:
        """Number of distinct layers present (start layer included)."""
        return len({room.layer for _, room in self.rooms()})

    def keys(self) -> Dict[int, List[Position]]:
        out: Dict[int, List[Position]] = {}
        for pos, room in self.rooms():
            if room.key is not None:
                out.setdefault(room.key, []).append(pos)
        return out

    def to_dict(self):
        return {
            "width": self.width,
            "height": self.height,
            "rooms": [
                {"row": pos.row, "col": pos.col, **room.to_dict()} for pos, room in self.rooms()
            ],
            "connections": [conn.to_dict() for conn in self._connections],
        }

    def __repr__(self):
        return (
            f"RoomMap(width={self.width}, height={self.height}, "
            f"rooms={sum(1 for _ in self.rooms())}, connections={len(self._connections)})"
        )
