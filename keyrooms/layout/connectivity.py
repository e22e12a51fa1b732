"""Key-aware reachability and structural validation for finished room maps."""
from __future__ import annotations

from collections import Counter, deque
from typing import Any, Dict, List, Optional, Set

from .cells import LOCKED, OPEN, Connection, Position
from .room_map import RoomMap


def locked_layer(room_map: RoomMap, conn: Connection) -> Optional[int]:
    """Layer whose key opens ``conn``: the deeper of its two endpoints."""
    a = room_map.get_room(conn.edge.a)
    b = room_map.get_room(conn.edge.b)
    if a is None or b is None:
        return None
    return max(a.layer, b.layer)


def reachable(room_map: RoomMap) -> Set[Position]:
    """Rooms reachable from the start room, collecting keys along the way.

    Open connections are always walkable, locked ones once any key for their
    layer has been picked up, shortcuts never.
    """
    start = room_map.start
    if start is None:
        return set()
    links: Dict[Position, List[Connection]] = {}
    for conn in room_map.connections:
        if conn.state in (OPEN, LOCKED):
            links.setdefault(conn.edge.a, []).append(conn)
            links.setdefault(conn.edge.b, []).append(conn)

    def flood(keys: Set[int]) -> Set[Position]:
        q = deque([start])
        vis = {start}
        while q:
            cur = q.popleft()
            for conn in links.get(cur, []):
                nxt = conn.edge.other(cur)
                if nxt in vis or room_map.get_room(nxt) is None:
                    continue
                if conn.state == LOCKED and locked_layer(room_map, conn) not in keys:
                    continue
                vis.add(nxt)
                q.append(nxt)
        return vis

    keys: Set[int] = set()
    while True:
        visited = flood(keys)
        found = {room_map.get_room(p).key for p in visited if room_map.get_room(p).has_key}
        if found <= keys:
            return visited
        keys |= found


def is_solvable(room_map: RoomMap) -> bool:
    reach = reachable(room_map)
    return all(pos in reach for pos, _ in room_map.rooms())


def validate_map(room_map: RoomMap) -> Dict[str, List[Any]]:
    """Collect structural issues; every list is empty for a well-formed map."""
    issues: Dict[str, List[Any]] = {
        "dangling_edges": [],
        "duplicate_edges": [],
        "non_adjacent_edges": [],
        "key_count_mismatch": [],
        "forward_keys": [],
        "unreachable_rooms": [],
    }
    seen = Counter(conn.edge for conn in room_map.connections)
    issues["duplicate_edges"] = [edge for edge, n in seen.items() if n > 1]
    locked_into: Counter = Counter()
    for conn in room_map.connections:
        a, b = conn.edge.a, conn.edge.b
        if room_map.get_room(a) is None or room_map.get_room(b) is None:
            issues["dangling_edges"].append(conn.edge)
            continue
        if abs(a.row - b.row) + abs(a.col - b.col) != 1:
            issues["non_adjacent_edges"].append(conn.edge)
        if conn.state == LOCKED:
            locked_into[locked_layer(room_map, conn)] += 1
    keys = room_map.keys()
    for layer in sorted(set(locked_into) | set(keys)):
        held = len(keys.get(layer, []))
        if held != locked_into[layer]:
            issues["key_count_mismatch"].append((layer, locked_into[layer], held))
    for layer, holders in keys.items():
        for pos in holders:
            if room_map.get_room(pos).layer >= layer:
                issues["forward_keys"].append(pos)
    reach = reachable(room_map)
    issues["unreachable_rooms"] = [pos for pos, _ in room_map.rooms() if pos not in reach]
    return issues


__all__ = ["locked_layer", "reachable", "is_solvable", "validate_map"]
