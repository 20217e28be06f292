from typing import Mapping, Tuple

Point = Tuple[float, float]


def segments_intersect(p1: Point, p2: Point, p3: Point, p4: Point) -> bool:
    """
    Strict intersection test for segments p1-p2 and p3-p4.
    Only crossings strictly inside both segments count, so two edges meeting
    at a shared node are fine. Parallel and collinear segments never intersect.
    """
    x1, y1 = p1
    x2, y2 = p2
    x3, y3 = p3
    x4, y4 = p4

    det = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if det == 0:
        return False

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / det
    u = ((x1 - x3) * (y1 - y2) - (y1 - y3) * (x1 - x2)) / det
    return 0 < t < 1 and 0 < u < 1


def share_endpoint(edge_a, edge_b) -> bool:
    return not edge_a.isdisjoint(edge_b)


def edges_cross(edge_a, edge_b, positions: Mapping[int, Point]) -> bool:
    """Check two edges (pairs of node ids) for a strict crossing. Edges sharing a node never cross."""
    if share_endpoint(edge_a, edge_b):
        return False
    a1, a2 = tuple(edge_a)
    b1, b2 = tuple(edge_b)
    return segments_intersect(positions[a1], positions[a2], positions[b1], positions[b2])
