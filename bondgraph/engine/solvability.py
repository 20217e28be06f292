from collections import deque
from dataclasses import dataclass
from typing import Callable, Optional

from bondgraph.engine.graph import PuzzleGraph

ExtraPredicate = Callable[[PuzzleGraph], bool]


@dataclass(frozen=True)
class SolveReport:
    all_placed: bool
    all_saturated: bool
    connected: bool
    extra: bool

    @property
    def solved(self) -> bool:
        return self.all_placed and self.all_saturated and self.connected and self.extra


def all_placed(graph: PuzzleGraph) -> bool:
    return all(count == 0 for count in graph.remaining_counts().values())


def all_saturated(graph: PuzzleGraph) -> bool:
    return all(len(node.neighbors) == node.required_degree for node in graph.nodes)


def is_connected(graph: PuzzleGraph) -> bool:
    """Breadth-first search from the first node. An empty graph does not count as connected."""
    nodes = graph.nodes
    if not nodes:
        return False
    start = nodes[0].id
    visited = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in graph.node(current).neighbors:
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)
    return len(visited) == len(nodes)


def always(graph: PuzzleGraph) -> bool:
    return True


def every_node_has_same_type_neighbor(graph: PuzzleGraph) -> bool:
    """Each node must be connected to at least one node of its own type"""
    return all(
        any(neighbor.type_key == node.type_key for neighbor in graph.neighbors_of(node.id))
        for node in graph.nodes
    )


def evaluate(graph: PuzzleGraph, extra_predicate: Optional[ExtraPredicate] = None) -> SolveReport:
    extra_predicate = extra_predicate or always
    return SolveReport(
        all_placed=all_placed(graph),
        all_saturated=all_saturated(graph),
        connected=is_connected(graph),
        extra=bool(extra_predicate(graph)),
    )


def is_solved(graph: PuzzleGraph, extra_predicate: Optional[ExtraPredicate] = None) -> bool:
    # cheap checks first
    if not all_placed(graph) or not all_saturated(graph):
        return False
    if not is_connected(graph):
        return False
    return bool((extra_predicate or always)(graph))
