# import moduls/libraries
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session
from typing import List

# import form project
from bondgraph.core.database import get_db
from bondgraph.engine.errors import (
    CapacityExceeded,
    InvalidPosition,
    LevelLocked,
    LevelReadOnly,
    PuzzleError,
    UnknownLevel,
    UnknownNode,
    UnknownPieceType,
)
from bondgraph.levels import get_level
from bondgraph.schemas import (
    GestureResult,
    LevelStateRead,
    LevelSummary,
    MoveNodeRequest,
    PlaceNodeRequest,
    ToggleEdgeRequest,
)
from bondgraph.services import LevelSession, ProgressStore, list_level_summaries


router = APIRouter()

# engine error -> HTTP status
ERROR_STATUS = {
    UnknownLevel: 404,
    UnknownNode: 404,
    UnknownPieceType: 422,
    InvalidPosition: 422,
    LevelLocked: 403,
    LevelReadOnly: 409,
    CapacityExceeded: 409,
}


def to_http_error(error: PuzzleError) -> HTTPException:
    status_code = ERROR_STATUS.get(type(error), 400)
    return HTTPException(status_code=status_code, detail=str(error))


def open_session(level_key: str, db: Session) -> LevelSession:
    """Rebuild the level session from the saved progress"""
    try:
        return LevelSession(get_level(level_key), ProgressStore(db)).open()
    except PuzzleError as e:
        raise to_http_error(e)


# list levels with their status
@router.get("/", response_model=List[LevelSummary])
async def get_levels(db: Session = Depends(get_db)):
    """Get all levels and whether they are solved, unsolved or locked"""
    return list_level_summaries(ProgressStore(db))


# get current level state
@router.get("/{level_key}", response_model=LevelStateRead)
async def get_level_state(level_key: str, db: Session = Depends(get_db)):
    """Get nodes, edges, remaining pieces and solve report of a level"""
    session = open_session(level_key, db)
    return session.state()


@router.get("/{level_key}/instructions", response_class=PlainTextResponse)
async def get_instructions(level_key: str):
    try:
        level = get_level(level_key)
    except UnknownLevel as e:
        raise to_http_error(e)
    return level.instructions


# place a piece
@router.post("/{level_key}/nodes", response_model=GestureResult)
async def place_node(level_key: str, request: PlaceNodeRequest, db: Session = Depends(get_db)):
    """Place a piece from the sidebar"""
    session = open_session(level_key, db)
    try:
        node = session.place_node(request.piece_type, (request.x, request.y))
    except PuzzleError as e:
        raise to_http_error(e)
    return GestureResult(outcome="placed", node_id=node.id, state=session.state())


# connect or disconnect two pieces
@router.post("/{level_key}/edges/toggle", response_model=GestureResult)
async def toggle_edge(level_key: str, request: ToggleEdgeRequest, db: Session = Depends(get_db)):
    """Add the edge between two pieces, or remove it if it already exists"""
    session = open_session(level_key, db)
    try:
        result = session.toggle_edge(request.node_a, request.node_b)
    except PuzzleError as e:
        raise to_http_error(e)
    return GestureResult(outcome=result.value, state=session.state())


# drag a piece
@router.post("/{level_key}/nodes/{node_id}/move", response_model=GestureResult)
async def move_node(level_key: str, node_id: int, request: MoveNodeRequest, db: Session = Depends(get_db)):
    """One drag sample. Rejected samples keep the piece at its last legal spot"""
    session = open_session(level_key, db)
    try:
        moved = session.move_node(node_id, (request.x, request.y), final=request.final)
    except PuzzleError as e:
        raise to_http_error(e)
    return GestureResult(outcome="moved" if moved else "rejected", node_id=node_id, state=session.state())


@router.post("/{level_key}/reset", response_model=LevelStateRead)
async def reset_level(level_key: str, db: Session = Depends(get_db)):
    """Start an unsolved level over"""
    session = open_session(level_key, db)
    try:
        session.reset()
    except PuzzleError as e:
        raise to_http_error(e)
    return session.state()


@router.post("/{level_key}/redo", response_model=LevelStateRead)
async def redo_level(level_key: str, db: Session = Depends(get_db)):
    """Clear a level, including its solution, and start over"""
    try:
        session = LevelSession(get_level(level_key), ProgressStore(db))
    except UnknownLevel as e:
        raise to_http_error(e)
    session.redo()
    return session.state()


@router.post("/{level_key}/lock", response_model=LevelSummary)
async def lock_level(level_key: str, db: Session = Depends(get_db)):
    try:
        level = get_level(level_key)
    except UnknownLevel as e:
        raise to_http_error(e)
    store = ProgressStore(db)
    store.lock(level.key)
    return LevelSummary(key=level.key, title=level.title, status=store.get_status(level.key))


@router.post("/{level_key}/unlock", response_model=LevelSummary)
async def unlock_level(level_key: str, db: Session = Depends(get_db)):
    try:
        level = get_level(level_key)
    except UnknownLevel as e:
        raise to_http_error(e)
    store = ProgressStore(db)
    store.unlock(level.key)
    return LevelSummary(key=level.key, title=level.title, status=store.get_status(level.key))
