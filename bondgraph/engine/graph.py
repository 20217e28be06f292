import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set, Tuple

from bondgraph.engine import rules
from bondgraph.engine.errors import CapacityExceeded, InvalidPosition, MoveRejected, UnknownNode, UnknownPieceType
from bondgraph.engine.geometry import Point, edges_cross

logger = logging.getLogger(__name__)

Edge = frozenset  # unordered pair of node ids


def to_point(position) -> Point:
    x, y = float(position[0]), float(position[1])
    if not (math.isfinite(x) and math.isfinite(y)):
        raise InvalidPosition(position)
    return x, y


class EdgeToggle(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    REJECTED = "rejected"


@dataclass
class Node:
    id: int
    position: Point
    type_key: str
    required_degree: int
    scale: float = 1.0
    neighbors: Set[int] = field(default_factory=set)

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]

    @property
    def spare_degree(self) -> int:
        return self.required_degree - len(self.neighbors)


class PuzzleGraph:
    """
    Nodes and edges of one level session.

    Nodes live in a flat arena keyed by integer id and only refer to each other
    through id sets. Every mutation keeps these invariants:
      - no self-loops and no duplicate edges
      - a node never has more neighbours than its required degree
      - no two edges without a common node cross
      - placed nodes of a type never exceed the type's available count
    """

    def __init__(self, piece_types: Iterable, rule: Optional[rules.Rule] = None):
        self.piece_types = {piece_type.key: piece_type for piece_type in piece_types}
        self.rule = rule if rule is not None else rules.allow_all()
        self._nodes: Dict[int, Node] = {}
        self._edges: Dict[Edge, None] = {}  # insertion ordered set
        self._remaining: Dict[str, int] = {}
        self._next_id = 0
        self.reset()

    # read access
    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    @property
    def edges(self) -> List[Tuple[int, int]]:
        return [tuple(sorted(edge)) for edge in self._edges]

    def node(self, node_id: int) -> Node:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise UnknownNode(node_id) from None

    def has_edge(self, node_a: int, node_b: int) -> bool:
        return frozenset((node_a, node_b)) in self._edges

    def degree(self, node_id: int) -> int:
        return len(self.node(node_id).neighbors)

    def neighbors_of(self, node_id: int) -> List[Node]:
        return [self._nodes[n] for n in sorted(self.node(node_id).neighbors)]

    def remaining(self, type_key: str) -> int:
        if type_key not in self._remaining:
            raise UnknownPieceType(type_key)
        return self._remaining[type_key]

    def remaining_counts(self) -> Dict[str, int]:
        return dict(self._remaining)

    def placed_count(self, type_key: str) -> int:
        return sum(1 for node in self._nodes.values() if node.type_key == type_key)

    def positions(self) -> Dict[int, Point]:
        return {node_id: node.position for node_id, node in self._nodes.items()}

    # mutations
    def reset(self):
        """Drop all nodes and edges and give back every piece"""
        self._nodes.clear()
        self._edges.clear()
        self._next_id = 0
        self._remaining = {key: piece_type.available_count for key, piece_type in self.piece_types.items()}

    def place_node(self, type_key: str, position: Point) -> Node:
        """Place a new piece of type_key, using up one of the remaining pieces"""
        if self.remaining(type_key) == 0:
            raise CapacityExceeded(type_key)
        node = self.spawn_node(type_key, position)
        self._remaining[type_key] -= 1
        logger.debug("Placed node %s (%s) at %s", node.id, type_key, position)
        return node

    def spawn_node(self, type_key: str, position: Point, scale: Optional[float] = None) -> Node:
        """Add a node without touching the remaining counts. Used when restoring snapshots."""
        piece_type = self.piece_types.get(type_key)
        if piece_type is None:
            raise UnknownPieceType(type_key)
        node = Node(
            id=self._next_id,
            position=to_point(position),
            type_key=type_key,
            required_degree=piece_type.required_degree,
            scale=piece_type.scale if scale is None else scale,
        )
        self._nodes[node.id] = node
        self._next_id += 1
        return node

    def set_remaining(self, type_key: str, count: int):
        """Restore a remaining count, never letting placed + remaining exceed the type's available count"""
        piece_type = self.piece_types.get(type_key)
        if piece_type is None:
            raise UnknownPieceType(type_key)
        ceiling = piece_type.available_count - self.placed_count(type_key)
        self._remaining[type_key] = max(0, min(int(count), ceiling))

    def toggle_edge(self, node_a: int, node_b: int) -> EdgeToggle:
        """
        Remove the edge between node_a and node_b if it exists, otherwise try to add it.
        A disallowed edge is not an error: the graph is left as it was and REJECTED is returned.
        """
        first = self.node(node_a)
        second = self.node(node_b)
        edge = frozenset((node_a, node_b))

        if edge in self._edges:
            self._remove_edge(edge)
            return EdgeToggle.REMOVED

        if node_a == node_b:
            logger.debug("Rejected self-loop on node %s", node_a)
            return EdgeToggle.REJECTED
        if not rules.evaluate(self.rule, first, second):
            logger.debug("Connection rule rejected edge %s-%s", node_a, node_b)
            return EdgeToggle.REJECTED
        if not self._edge_fits(first, second):
            return EdgeToggle.REJECTED

        self._add_edge(edge)
        return EdgeToggle.ADDED

    def restore_edge(self, node_a: int, node_b: int) -> bool:
        """Re-add a saved edge. Structural and geometric checks apply, the connection rule does not."""
        if node_a == node_b or node_a not in self._nodes or node_b not in self._nodes:
            return False
        edge = frozenset((node_a, node_b))
        if edge in self._edges:
            return False
        if not self._edge_fits(self._nodes[node_a], self._nodes[node_b]):
            return False
        self._add_edge(edge)
        return True

    def move_node(self, node_id: int, position: Point) -> Node:
        """
        Move a node, raising MoveRejected if any of its edges would cross another edge.
        Meant to run on every drag sample so the node stops at the last legal spot.
        """
        node = self.node(node_id)
        position = to_point(position)
        if self.crossing_after_move(node_id, position):
            logger.debug("Rejected move of node %s to %s", node_id, position)
            raise MoveRejected(node_id, position)
        node.position = position
        return node

    def try_move_node(self, node_id: int, position: Point) -> bool:
        try:
            self.move_node(node_id, position)
        except MoveRejected:
            return False
        return True

    def crossing_after_move(self, node_id: int, position: Point) -> bool:
        """
        Only edges touching the moved node change shape, so just those are
        compared against the rest. Pairs sharing any node are skipped.
        """
        moving = [edge for edge in self._edges if node_id in edge]
        if not moving:
            return False
        positions = self.positions()
        positions[node_id] = position
        still = [edge for edge in self._edges if node_id not in edge]
        return any(edges_cross(edge, other, positions) for edge in moving for other in still)

    def has_crossing(self) -> bool:
        """Full pairwise check of the current edge set"""
        positions = self.positions()
        edges = list(self._edges)
        for i, edge in enumerate(edges):
            for other in edges[i + 1:]:
                if edges_cross(edge, other, positions):
                    return True
        return False

    # internals
    def _edge_fits(self, first: Node, second: Node) -> bool:
        if first.spare_degree <= 0 or second.spare_degree <= 0:
            logger.debug("No spare degree for edge %s-%s", first.id, second.id)
            return False
        candidate = frozenset((first.id, second.id))
        positions = self.positions()
        for edge in self._edges:
            if edges_cross(candidate, edge, positions):
                logger.debug("Edge %s-%s would cross %s", first.id, second.id, sorted(edge))
                return False
        return True

    def _add_edge(self, edge: Edge):
        node_a, node_b = tuple(edge)
        self._edges[edge] = None
        self._nodes[node_a].neighbors.add(node_b)
        self._nodes[node_b].neighbors.add(node_a)

    def _remove_edge(self, edge: Edge):
        node_a, node_b = tuple(edge)
        del self._edges[edge]
        self._nodes[node_a].neighbors.discard(node_b)
        self._nodes[node_b].neighbors.discard(node_a)
