import pytest

from bondgraph.engine.geometry import edges_cross, segments_intersect


def test_crossing_diagonals_intersect():
    assert segments_intersect((0, 0), (2, 2), (0, 2), (2, 0))


def test_segments_touching_at_shared_endpoint_do_not_intersect():
    assert not segments_intersect((0, 0), (1, 1), (1, 1), (2, 0))


def test_endpoint_on_other_segment_does_not_intersect():
    # T-junction: the vertical segment starts on the horizontal one
    assert not segments_intersect((0, 0), (2, 0), (1, 0), (1, 1))


@pytest.mark.parametrize(
    "p1, p2, p3, p4",
    [
        ((0, 0), (1, 0), (0, 1), (1, 1)),  # parallel
        ((0, 0), (2, 0), (1, 0), (3, 0)),  # collinear, overlapping
        ((0, 0), (1, 0), (2, -1), (2, 1)),  # lines cross outside the segments
    ],
)
def test_non_crossing_segments(p1, p2, p3, p4):
    assert not segments_intersect(p1, p2, p3, p4)


def test_intersection_is_symmetric():
    args = ((0, 0), (4, 3), (0, 3), (4, 0))
    assert segments_intersect(*args)
    assert segments_intersect(args[2], args[3], args[0], args[1])
    assert segments_intersect(args[1], args[0], args[3], args[2])


def test_edges_sharing_a_node_never_cross():
    positions = {0: (0, 0), 1: (2, 2), 2: (0, 2), 3: (2, 0)}
    assert edges_cross(frozenset((0, 1)), frozenset((2, 3)), positions)
    assert not edges_cross(frozenset((0, 1)), frozenset((1, 2)), positions)
