import logging

from bondgraph.engine.errors import InvalidPosition
from bondgraph.engine.graph import PuzzleGraph
from bondgraph.schemas.snapshot_schema import EdgeSnapshot, PieceSnapshot, PieceTypeCount, Snapshot

logger = logging.getLogger(__name__)


def capture(graph: PuzzleGraph) -> Snapshot:
    """Serialize a graph. Piece indices are positions in the pieces list, not node ids."""
    nodes = graph.nodes
    index_of = {node.id: index for index, node in enumerate(nodes)}

    return Snapshot(
        pieces=[
            PieceSnapshot(
                index=index,
                x=node.x,
                y=node.y,
                piece_type=node.type_key,
                edge_count=node.required_degree,
                scale=node.scale,
            )
            for index, node in enumerate(nodes)
        ],
        edges=[
            EdgeSnapshot(p1_index=index_of[node_a], p2_index=index_of[node_b])
            for node_a, node_b in graph.edges
        ],
        piece_type_counts=[
            PieceTypeCount(key=key, count=count) for key, count in graph.remaining_counts().items()
        ],
    )


def restore(graph: PuzzleGraph, snapshot: Snapshot) -> PuzzleGraph:
    """
    Rebuild graph from a snapshot, replacing whatever it held.

    Pieces of unknown types, pieces over a type's capacity and edges whose
    indices no longer resolve are skipped with a warning.
    """
    graph.reset()

    node_for_index = {}
    for piece in snapshot.pieces:
        piece_type = graph.piece_types.get(piece.piece_type)
        if piece_type is None:
            logger.warning("Skipping saved piece %s: unknown piece type '%s'", piece.index, piece.piece_type)
            continue
        if graph.placed_count(piece.piece_type) >= piece_type.available_count:
            logger.warning("Skipping saved piece %s: no '%s' pieces left", piece.index, piece.piece_type)
            continue
        if piece.index in node_for_index:
            logger.warning("Skipping saved piece with duplicate index %s", piece.index)
            continue
        try:
            node = graph.spawn_node(piece.piece_type, (piece.x, piece.y), scale=piece.scale)
        except InvalidPosition:
            logger.warning("Skipping saved piece %s: invalid position (%s, %s)", piece.index, piece.x, piece.y)
            continue
        node_for_index[piece.index] = node.id

    saved_counts = {entry.key: entry.count for entry in snapshot.piece_type_counts}
    for key, piece_type in graph.piece_types.items():
        graph.set_remaining(key, saved_counts.get(key, piece_type.available_count))

    for edge in snapshot.edges:
        node_a = node_for_index.get(edge.p1_index)
        node_b = node_for_index.get(edge.p2_index)
        if node_a is None or node_b is None:
            logger.warning("Skipping saved edge %s-%s: index out of range", edge.p1_index, edge.p2_index)
            continue
        if not graph.restore_edge(node_a, node_b):
            logger.warning("Skipping saved edge %s-%s: not a legal edge", edge.p1_index, edge.p2_index)

    return graph
