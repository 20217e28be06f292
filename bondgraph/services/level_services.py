import logging
from typing import List

from bondgraph.engine import solvability
from bondgraph.engine.errors import LevelLocked, LevelReadOnly
from bondgraph.engine.graph import EdgeToggle, Node, PuzzleGraph
from bondgraph.engine.snapshot import capture, restore
from bondgraph.levels import list_levels
from bondgraph.schemas import (
    EdgeRead,
    LevelDefinition,
    LevelStateRead,
    LevelStatus,
    LevelSummary,
    NodeRead,
    SolveReportRead,
)
from bondgraph.services.progress_services import ProgressStore

logger = logging.getLogger(__name__)


class LevelSession:
    """
    One play session of a level: the puzzle graph plus the progress store.

    Every accepted gesture is followed by a solve check and a save. Once the
    level is solved its solution is frozen and the session becomes read-only
    until the level is redone.
    """

    def __init__(self, definition: LevelDefinition, store: ProgressStore):
        self.definition = definition
        self.store = store
        self.graph = PuzzleGraph(definition.piece_types, definition.rule)
        self.viewing_solved = False

    @property
    def key(self) -> str:
        return self.definition.key

    def open(self) -> "LevelSession":
        """Load the saved solution or the in-progress state for this level"""
        status = self.store.get_status(self.key)
        if status == LevelStatus.LOCKED:
            raise LevelLocked(self.key)

        if status == LevelStatus.SOLVED:
            self.viewing_solved = True
            solution = self.store.get_solution(self.key)
            if solution is None:
                logger.error("No solution found for level %s", self.key)
            else:
                restore(self.graph, solution)
            return self

        in_progress = self.store.get_in_progress(self.key)
        if in_progress is not None:
            restore(self.graph, in_progress)
            logger.debug("Resumed level %s with %d node(s)", self.key, len(self.graph.nodes))
        return self

    # gestures
    def place_node(self, type_key: str, position) -> Node:
        self._ensure_playable()
        node = self.graph.place_node(type_key, position)
        self._commit()
        return node

    def toggle_edge(self, node_a: int, node_b: int) -> EdgeToggle:
        self._ensure_playable()
        result = self.graph.toggle_edge(node_a, node_b)
        if result != EdgeToggle.REJECTED:
            self._commit()
        return result

    def move_node(self, node_id: int, position, final: bool = False) -> bool:
        """
        One drag sample. A rejected sample leaves the node where it was.
        final marks the end of the drag, which always saves and re-checks.
        """
        self._ensure_playable()
        moved = self.graph.try_move_node(node_id, position)
        if moved or final:
            self._commit()
        return moved

    def finish_move(self, node_id: int, position) -> bool:
        return self.move_node(node_id, position, final=True)

    def reset(self):
        """Throw away the unsolved attempt and start over"""
        self._ensure_playable()
        self.store.clear_in_progress(self.key)
        self.graph.reset()

    def redo(self):
        """Forget the level's saved state, including a solution, and start over"""
        self.store.clear_level(self.key)
        self.graph.reset()
        self.viewing_solved = False

    # reporting
    def report(self) -> solvability.SolveReport:
        return solvability.evaluate(self.graph, self.definition.extra_predicate)

    def state(self) -> LevelStateRead:
        report = self.report()
        return LevelStateRead(
            key=self.key,
            title=self.definition.title,
            status=self.store.get_status(self.key),
            viewing_solved=self.viewing_solved,
            nodes=[
                NodeRead(
                    id=node.id,
                    x=node.x,
                    y=node.y,
                    piece_type=node.type_key,
                    required_degree=node.required_degree,
                    scale=node.scale,
                    neighbors=sorted(node.neighbors),
                )
                for node in self.graph.nodes
            ],
            edges=[EdgeRead(node_a=a, node_b=b) for a, b in self.graph.edges],
            remaining=self.graph.remaining_counts(),
            piece_types=self.definition.piece_types,
            report=SolveReportRead(
                all_placed=report.all_placed,
                all_saturated=report.all_saturated,
                connected=report.connected,
                extra=report.extra,
                solved=report.solved,
            ),
        )

    # internals
    def _ensure_playable(self):
        if self.viewing_solved:
            raise LevelReadOnly(self.key)

    def _commit(self):
        snapshot = capture(self.graph)
        if solvability.is_solved(self.graph, self.definition.extra_predicate):
            self.store.mark_solved(self.key, snapshot)
            self.viewing_solved = True
            logger.info("Level %s solved", self.key)
        else:
            self.store.save_in_progress(self.key, snapshot)


def list_level_summaries(store: ProgressStore) -> List[LevelSummary]:
    return [
        LevelSummary(key=level.key, title=level.title, status=store.get_status(level.key))
        for level in list_levels()
    ]
