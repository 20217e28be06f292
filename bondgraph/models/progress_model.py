from sqlalchemy import Column, String, Text, DateTime, func
from bondgraph.core.database import Base


class ProgressRecord(Base):
    """Raw progress blob. data holds the JSON text of the whole record, one row per store key."""
    __tablename__ = "progress_records"

    key = Column(String, primary_key=True)
    data = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
