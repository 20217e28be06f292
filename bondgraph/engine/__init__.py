from bondgraph.engine.errors import (
    PuzzleError,
    CapacityExceeded,
    UnknownPieceType,
    UnknownNode,
    MoveRejected,
    UnknownLevel,
    LevelLocked,
    LevelReadOnly,
    InvalidPosition,
)
from bondgraph.engine.geometry import segments_intersect, edges_cross
from bondgraph.engine.graph import PuzzleGraph, Node, EdgeToggle
from bondgraph.engine.solvability import is_solved, SolveReport
