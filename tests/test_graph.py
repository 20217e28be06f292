import random

import pytest

from bondgraph.engine import rules
from bondgraph.engine.errors import CapacityExceeded, InvalidPosition, MoveRejected, UnknownNode, UnknownPieceType
from bondgraph.engine.graph import EdgeToggle, PuzzleGraph
from bondgraph.schemas import PieceType

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]


def square_graph(corner_type):
    graph = PuzzleGraph([corner_type])
    nodes = [graph.place_node("corner", position) for position in SQUARE]
    return graph, [node.id for node in nodes]


def test_place_node_uses_up_pieces():
    graph = PuzzleGraph([PieceType(key="inn", required_degree=1, available_count=2)])

    first = graph.place_node("inn", (1, 2))
    graph.place_node("inn", (3, 4))

    assert first.position == (1.0, 2.0)
    assert first.required_degree == 1
    assert graph.remaining("inn") == 0
    with pytest.raises(CapacityExceeded):
        graph.place_node("inn", (5, 6))
    assert graph.remaining("inn") == 0
    assert len(graph.nodes) == 2


def test_non_finite_positions_are_refused(corner_type):
    graph, (a, _, _, _) = square_graph(corner_type)

    with pytest.raises(InvalidPosition):
        graph.place_node("corner", (float("inf"), 0))
    with pytest.raises(InvalidPosition):
        graph.move_node(a, (0, float("nan")))

    assert len(graph.nodes) == 4
    assert graph.node(a).position == (0.0, 0.0)


def test_place_unknown_type():
    graph = PuzzleGraph([])
    with pytest.raises(UnknownPieceType):
        graph.place_node("ghost", (0, 0))


def test_toggle_adds_and_removes_edge(corner_type):
    graph, (a, b, _, _) = square_graph(corner_type)

    assert graph.toggle_edge(a, b) == EdgeToggle.ADDED
    assert graph.has_edge(b, a)
    assert graph.node(a).neighbors == {b}

    assert graph.toggle_edge(b, a) == EdgeToggle.REMOVED
    assert graph.edges == []
    assert graph.node(a).neighbors == set()
    assert graph.node(b).neighbors == set()


def test_self_loop_rejected(corner_type):
    graph, (a, _, _, _) = square_graph(corner_type)
    assert graph.toggle_edge(a, a) == EdgeToggle.REJECTED
    assert graph.edges == []


def test_second_diagonal_of_square_is_rejected(corner_type):
    graph, (a, b, c, d) = square_graph(corner_type)

    assert graph.toggle_edge(a, c) == EdgeToggle.ADDED
    assert graph.toggle_edge(b, d) == EdgeToggle.REJECTED
    assert graph.edges == [(a, c)]
    assert graph.node(b).neighbors == set()


def test_full_node_rejects_more_edges():
    graph = PuzzleGraph([PieceType(key="p", required_degree=1, available_count=3)])
    a, b, c = (graph.place_node("p", position).id for position in [(0, 0), (10, 0), (0, 10)])

    assert graph.toggle_edge(a, b) == EdgeToggle.ADDED
    assert graph.toggle_edge(a, c) == EdgeToggle.REJECTED
    assert graph.degree(a) == 1


def test_connection_rule_is_consulted():
    graph = PuzzleGraph(
        [
            PieceType(key="one", required_degree=1, available_count=2),
            PieceType(key="two", required_degree=2, available_count=1),
        ],
        rule=rules.different_degree(),
    )
    a = graph.place_node("one", (0, 0)).id
    b = graph.place_node("one", (10, 0)).id
    c = graph.place_node("two", (5, 5)).id

    assert graph.toggle_edge(a, b) == EdgeToggle.REJECTED
    assert graph.toggle_edge(a, c) == EdgeToggle.ADDED


def test_removing_an_edge_ignores_rule():
    graph = PuzzleGraph([PieceType(key="p", required_degree=1, available_count=2)])
    a = graph.place_node("p", (0, 0)).id
    b = graph.place_node("p", (10, 0)).id
    graph.toggle_edge(a, b)

    graph.rule = rules.different_degree()
    assert graph.toggle_edge(a, b) == EdgeToggle.REMOVED


def test_unknown_node_raises(corner_type):
    graph, (a, _, _, _) = square_graph(corner_type)
    with pytest.raises(UnknownNode):
        graph.toggle_edge(a, 99)


def test_move_is_rejected_when_edge_would_cross(corner_type):
    graph = PuzzleGraph([corner_type])
    a = graph.place_node("corner", (0, 0)).id
    b = graph.place_node("corner", (10, 0)).id
    c = graph.place_node("corner", (5, 5)).id
    d = graph.place_node("corner", (5, 2)).id
    graph.toggle_edge(a, b)
    graph.toggle_edge(c, d)

    with pytest.raises(MoveRejected):
        graph.move_node(d, (5, -2))
    assert graph.node(d).position == (5.0, 2.0)

    graph.move_node(d, (7, 1))
    assert graph.node(d).position == (7.0, 1.0)
    assert not graph.try_move_node(c, (7, -5))
    assert graph.node(c).position == (5.0, 5.0)


def test_move_without_edges_is_always_allowed(corner_type):
    graph, (a, _, _, _) = square_graph(corner_type)
    graph.move_node(a, (10, 10))
    assert graph.node(a).position == (10.0, 10.0)


def test_edges_sharing_the_moved_node_do_not_block_it():
    graph = PuzzleGraph([PieceType(key="hub", required_degree=3, available_count=4)])
    hub, left, right, top = (graph.place_node("hub", p).id for p in [(0, 0), (-10, 0), (10, 0), (0, 10)])
    for leaf in (left, right, top):
        assert graph.toggle_edge(hub, leaf) == EdgeToggle.ADDED

    graph.move_node(hub, (0, 5))
    assert graph.node(hub).position == (0.0, 5.0)


def test_reset_restores_counts(corner_type):
    graph, (a, b, _, _) = square_graph(corner_type)
    graph.toggle_edge(a, b)

    graph.reset()

    assert graph.nodes == []
    assert graph.edges == []
    assert graph.remaining("corner") == 4
    assert graph.place_node("corner", (0, 0)).id == 0


def test_double_toggle_restores_previous_state(corner_type):
    graph, (a, b, c, d) = square_graph(corner_type)
    graph.toggle_edge(a, b)
    edges_before = graph.edges
    neighbors_before = {node.id: set(node.neighbors) for node in graph.nodes}

    for first, second in [(c, d), (a, b), (a, c), (b, d)]:
        graph.toggle_edge(first, second)
        graph.toggle_edge(first, second)
        assert sorted(graph.edges) == sorted(edges_before)
        assert {node.id: node.neighbors for node in graph.nodes} == neighbors_before


def test_invariants_hold_under_random_gestures():
    rng = random.Random(7)
    piece_types = [
        PieceType(key=f"deg{degree}", required_degree=degree, available_count=4) for degree in range(1, 5)
    ]
    graph = PuzzleGraph(piece_types, rule=rules.or_(rules.adjacent_degree(), rules.specific_degree_pairs([(4, 4)])))
    for piece_type in piece_types:
        for _ in range(piece_type.available_count):
            graph.place_node(piece_type.key, (rng.randint(0, 20), rng.randint(0, 20)))

    ids = [node.id for node in graph.nodes]
    for _ in range(600):
        if rng.random() < 0.7:
            graph.toggle_edge(rng.choice(ids), rng.choice(ids))
        else:
            graph.try_move_node(rng.choice(ids), (rng.randint(0, 20), rng.randint(0, 20)))

        assert not graph.has_crossing()
        for node in graph.nodes:
            assert len(node.neighbors) <= node.required_degree
            assert node.id not in node.neighbors
        assert len(set(graph.edges)) == len(graph.edges)
