from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional

from bondgraph.schemas.level_schema import LevelStatus


# Field aliases follow the stored record format (camelCase)
class PieceSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    index: int
    x: float
    y: float
    piece_type: str = Field(alias="pieceType")
    edge_count: int = Field(alias="edgeCount")
    scale: float = 1.0


class EdgeSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    p1_index: int = Field(alias="p1Index")
    p2_index: int = Field(alias="p2Index")


class PieceTypeCount(BaseModel):
    key: str
    count: int


class Snapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pieces: List[PieceSnapshot] = Field(default_factory=list)
    edges: List[EdgeSnapshot] = Field(default_factory=list)
    piece_type_counts: List[PieceTypeCount] = Field(default_factory=list, alias="pieceTypeCounts")


class LevelRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: Optional[LevelStatus] = None  # missing means unsolved
    solution: Optional[Snapshot] = None
    solved_at: Optional[int] = Field(default=None, alias="solvedAt")
    in_progress: Optional[Snapshot] = Field(default=None, alias="inProgress")
    last_played: Optional[int] = Field(default=None, alias="lastPlayed")


class ProgressData(BaseModel):
    levels: Dict[str, LevelRecord] = Field(default_factory=dict)
