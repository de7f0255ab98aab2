# models/state_log.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Uuid, Index
from sqlalchemy.orm import relationship
from dayflow.core.config import Base


class StateLog(Base):
    __tablename__ = "state_logs"
    __table_args__ = (Index("ix_state_logs_user_check_in", "user_id", "check_in_time"),)

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # 0-10 self ratings
    energy = Column(Integer, nullable=False)
    focus = Column(Integer, nullable=False)
    mood = Column(Integer, nullable=False)
    context = Column(Text, nullable=True)

    check_in_time = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="state_logs")
