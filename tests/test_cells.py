import pytest

from keyrooms.layout.cells import DIRECTIONS, LOCKED, Connection, Edge, Position


def test_edge_equality_ignores_endpoint_order():
    a, b = Position(0, 0), Position(0, 1)
    assert Edge(a, b) == Edge(b, a)
    assert hash(Edge(a, b)) == hash(Edge(b, a))
    assert len({Edge(a, b), Edge(b, a)}) == 1


def test_edges_with_different_endpoints_differ():
    a, b, c = Position(0, 0), Position(0, 1), Position(1, 0)
    assert Edge(a, b) != Edge(a, c)
    assert Edge(a, b) != (a, b)


def test_edge_other_endpoint():
    a, b = Position(2, 3), Position(2, 4)
    assert Edge(a, b).other(a) == b
    assert Edge(a, b).other(b) == a


def test_position_arithmetic():
    assert Position(1, 2) + Position(-1, 0) == Position(0, 2)
    assert Position(1, -2) * 3 == Position(3, -6)
    assert 2 * Position(1, 1) == Position(2, 2)


def test_in_range_is_inclusive():
    p = Position(2, 4)
    assert p.in_range(0, 2, 0, 4) is p
    assert p.in_range(0, 1, 0, 4) is None
    assert p.in_range(0, 2, 5, 9) is None
    assert Position(-1, 0).in_range(0, 4, 0, 4) is None


def test_neighbors_are_the_four_directions():
    p = Position(5, 5)
    neigh = list(p.neighbors())
    assert len(set(neigh)) == 4
    assert set(neigh) == {p + d for d in DIRECTIONS}
    assert all(abs(n.row - p.row) + abs(n.col - p.col) == 1 for n in neigh)


def test_connection_rejects_unknown_state():
    with pytest.raises(ValueError):
        Connection(Edge(Position(0, 0), Position(0, 1)), "ajar")


def test_connection_to_dict_and_traversable():
    conn = Connection(Edge(Position(0, 0), Position(1, 0)), LOCKED)
    assert conn.to_dict() == {"a": [0, 0], "b": [1, 0], "state": "locked"}
    assert conn.traversable
