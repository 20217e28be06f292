import json
import logging
import time
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from bondgraph import models
from bondgraph.core.config import settings
from bondgraph.schemas import LevelRecord, LevelStatus, ProgressData, Snapshot

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


class ProgressStore:
    """
    Handles saving and loading player progress.

    The whole progress record is one JSON document stored under a single key.
    Every call reads the record, changes it and writes it back. Missing or
    unreadable data is treated as "nothing saved yet".
    """

    def __init__(self, db, store_key: Optional[str] = None, clock=now_ms):
        self.db = db
        self.store_key = store_key or settings.PROGRESS_STORE_KEY
        self.clock = clock

    # raw record
    def get_progress(self) -> ProgressData:
        """Load the progress record, or an empty one if there is none or it is corrupt"""
        row = self._get_row()
        if row is None or not row.data:
            return ProgressData()
        try:
            raw = json.loads(row.data)
        except ValueError:
            logger.exception("Failed to parse progress data under '%s', starting fresh", self.store_key)
            return ProgressData()
        return self._parse_progress(raw)

    def save_progress(self, progress: ProgressData):
        data = progress.model_dump_json(by_alias=True, exclude_none=True)
        row = self._get_row()
        try:
            if row is None:
                self.db.add(models.ProgressRecord(key=self.store_key, data=data))
            else:
                row.data = data
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Failed to save progress under '%s'", self.store_key)
            raise

    def reset_all_progress(self):
        """Delete every saved level"""
        row = self._get_row()
        if row is not None:
            self.db.delete(row)
            self.db.commit()
        logger.info("All progress reset")

    # level status
    def get_status(self, level_key: str) -> LevelStatus:
        record = self.get_progress().levels.get(level_key)
        if record is None or record.status is None:
            return LevelStatus.UNSOLVED
        return record.status

    def lock(self, level_key: str):
        progress = self.get_progress()
        record = progress.levels.setdefault(level_key, LevelRecord())
        record.status = LevelStatus.LOCKED
        self.save_progress(progress)

    def unlock(self, level_key: str):
        """Only a locked level becomes unsolved, a solved level stays solved"""
        progress = self.get_progress()
        record = progress.levels.get(level_key)
        if record is None or record.status != LevelStatus.LOCKED:
            return
        record.status = None
        self.save_progress(progress)

    # solutions
    def mark_solved(self, level_key: str, snapshot: Snapshot) -> bool:
        """
        Store the solution of a level. The first solution is kept until the level
        is cleared, later calls return False and change nothing.
        """
        progress = self.get_progress()
        record = progress.levels.setdefault(level_key, LevelRecord())
        if record.status == LevelStatus.SOLVED and record.solution is not None:
            logger.debug("Level %s already has a solution", level_key)
            return False
        record.status = LevelStatus.SOLVED
        record.solution = snapshot
        record.solved_at = self.clock()
        record.in_progress = None
        self.save_progress(progress)
        logger.info("Level %s marked solved", level_key)
        return True

    def get_solution(self, level_key: str) -> Optional[Snapshot]:
        record = self.get_progress().levels.get(level_key)
        return record.solution if record else None

    def clear_level(self, level_key: str):
        """Forget everything about a level, used to redo it"""
        progress = self.get_progress()
        if progress.levels.pop(level_key, None) is not None:
            self.save_progress(progress)
            logger.info("Cleared level %s", level_key)

    # in progress
    def save_in_progress(self, level_key: str, snapshot: Snapshot):
        progress = self.get_progress()
        record = progress.levels.setdefault(level_key, LevelRecord())
        record.in_progress = snapshot
        record.last_played = self.clock()
        self.save_progress(progress)

    def get_in_progress(self, level_key: str) -> Optional[Snapshot]:
        record = self.get_progress().levels.get(level_key)
        return record.in_progress if record else None

    def clear_in_progress(self, level_key: str):
        progress = self.get_progress()
        record = progress.levels.get(level_key)
        if record is not None and record.in_progress is not None:
            record.in_progress = None
            self.save_progress(progress)

    # helpers
    def _get_row(self):
        return (self.db.query(models.ProgressRecord)
                .filter(models.ProgressRecord.key == self.store_key)
                .first())

    def _parse_progress(self, raw) -> ProgressData:
        """Keep every level entry that validates, drop the rest"""
        levels = raw.get("levels") if isinstance(raw, dict) else None
        if not isinstance(levels, dict):
            logger.warning("Progress data under '%s' has no levels mapping, starting fresh", self.store_key)
            return ProgressData()

        progress = ProgressData()
        for level_key, entry in levels.items():
            try:
                progress.levels[level_key] = LevelRecord.model_validate(entry)
            except ValidationError as e:
                logger.warning("Dropping unreadable progress for level %s: %s", level_key, e)
        return progress
