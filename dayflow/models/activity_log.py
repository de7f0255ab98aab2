# models/activity_log.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Uuid, Index
from sqlalchemy.orm import relationship
from dayflow.core.config import Base


class ActivityLog(Base):
    """Time spent on a named activity on a given (user-local) day."""

    __tablename__ = "activity_logs"
    __table_args__ = (Index("ix_activity_logs_user_date", "user_id", "date"),)

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    activity_name = Column(String(100), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    date = Column(String(10), nullable=False)  # YYYY-MM-DD
    entry_type = Column(String(20), nullable=False, default="Log")
    timestamp = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="activity_logs")
