from collections import deque

from keyrooms.layout.cells import LOCKED, OPEN


def rooms_by_layer(room_map):
    """Return {layer: [Position, ...]} for every room on the map."""
    out = {}
    for pos, room in room_map.rooms():
        out.setdefault(room.layer, []).append(pos)
    return out


def connections_with_state(room_map, state):
    return [c for c in room_map.connections if c.state == state]


def open_reachable(room_map, start):
    """Positions reachable from start over OPEN connections only."""
    links = {}
    for conn in connections_with_state(room_map, OPEN):
        links.setdefault(conn.edge.a, []).append(conn.edge.b)
        links.setdefault(conn.edge.b, []).append(conn.edge.a)
    q = deque([start])
    vis = {start}
    while q:
        cur = q.popleft()
        for nxt in links.get(cur, []):
            if nxt not in vis:
                vis.add(nxt)
                q.append(nxt)
    return vis


def locked_into_layer(room_map):
    """Count LOCKED connections per layer of their deeper endpoint."""
    counts = {}
    for conn in connections_with_state(room_map, LOCKED):
        layer = max(room_map.get_room(conn.edge.a).layer, room_map.get_room(conn.edge.b).layer)
        counts[layer] = counts.get(layer, 0) + 1
    return counts
