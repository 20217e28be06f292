from bondgraph.schemas.level_schema import (
    LevelStatus, PieceType, LevelDefinition, LevelSummary,
    PlaceNodeRequest, ToggleEdgeRequest, MoveNodeRequest,
    NodeRead, EdgeRead, SolveReportRead, LevelStateRead, GestureResult,
)
from bondgraph.schemas.snapshot_schema import (
    PieceSnapshot, EdgeSnapshot, PieceTypeCount, Snapshot, LevelRecord, ProgressData,
)
