# models/notification_preference.py

from datetime import datetime, timezone
from sqlalchemy import Column, Boolean, String, DateTime, JSON, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from dayflow.core.config import Base


class NotificationPreference(Base):
    """One row per user, keyed by the user id."""

    __tablename__ = "notification_preferences"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)

    times = Column(JSON, nullable=False, default=list)  # sorted ["HH:mm", ...]
    enabled = Column(Boolean, nullable=False, default=False)
    calendar_sync = Column(Boolean, nullable=False, default=False)
    calendar_event_ids = Column(JSON, nullable=False, default=dict)  # {"HH:mm": event_id}

    # Last reminder handed out by the poll, so a reload cannot fire it twice
    last_fired_date = Column(String(10), nullable=True)
    last_fired_time = Column(String(5), nullable=True)

    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
                        onupdate=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="notification_preference")
