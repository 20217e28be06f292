from enum import Enum
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel, Field, FiniteFloat

from bondgraph.engine.rules import AllowAll, Rule


class LevelStatus(str, Enum):
    UNSOLVED = "unsolved"
    SOLVED = "solved"
    LOCKED = "locked"


class PieceType(BaseModel):
    key: str
    required_degree: int = Field(ge=0)  # edges a piece of this type needs
    available_count: int = Field(ge=0)
    scale: float = 1.0
    label: Optional[str] = None


class LevelDefinition(BaseModel):
    """Everything the engine needs to run one puzzle level"""
    key: str
    title: str
    piece_types: List[PieceType]
    rule: Rule = Field(default_factory=AllowAll)
    extra_predicate: Optional[Callable] = Field(default=None, exclude=True)  # graph -> bool
    instructions: str = ""


class LevelSummary(BaseModel):
    key: str
    title: str
    status: LevelStatus


class PlaceNodeRequest(BaseModel):
    piece_type: str
    x: FiniteFloat
    y: FiniteFloat


class ToggleEdgeRequest(BaseModel):
    node_a: int
    node_b: int


class MoveNodeRequest(BaseModel):
    x: FiniteFloat
    y: FiniteFloat
    final: bool = False  # True on drag end


class NodeRead(BaseModel):
    id: int
    x: float
    y: float
    piece_type: str
    required_degree: int
    scale: float
    neighbors: List[int]


class EdgeRead(BaseModel):
    node_a: int
    node_b: int


class SolveReportRead(BaseModel):
    all_placed: bool
    all_saturated: bool
    connected: bool
    extra: bool
    solved: bool


class LevelStateRead(BaseModel):
    key: str
    title: str
    status: LevelStatus
    viewing_solved: bool
    nodes: List[NodeRead]
    edges: List[EdgeRead]
    remaining: Dict[str, int]
    report: SolveReportRead
    piece_types: List[PieceType]  # sidebar catalog: degree, label and scale per type


class GestureResult(BaseModel):
    """Outcome of one user gesture plus the level state after it"""
    outcome: str
    node_id: Optional[int] = None
    state: LevelStateRead
