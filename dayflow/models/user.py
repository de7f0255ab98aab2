# models/user.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime, Integer, Uuid
from sqlalchemy.orm import relationship
from dayflow.core.config import Base


class User(Base):
    """Account and profile in one row: credentials plus the profile fields
    (display name, photo, goals) the AI summary reads."""

    __tablename__ = "users"

    # ---- Base fields ----
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, unique=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # ---- Profile ----
    display_name = Column(String(100), nullable=True)
    photo_url = Column(String(500), nullable=True)
    goals = Column(Text, nullable=True)
    timezone = Column(String(64), nullable=False, default="UTC")
    theme = Column(String(32), nullable=False, default="theme-forest")

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
                        onupdate=lambda: datetime.now(timezone.utc))

    # ---- Security & login tracking ----
    last_login_at = Column(DateTime(timezone=True), nullable=True)
    failed_login_attempts = Column(Integer, default=0)
    lockout_until = Column(DateTime(timezone=True), nullable=True)
    password_changed_at = Column(DateTime(timezone=True), nullable=True)

    # ---- Relationships ----
    activity_logs = relationship("ActivityLog", back_populates="user", cascade="all, delete-orphan")
    state_logs = relationship("StateLog", back_populates="user", cascade="all, delete-orphan")
    saved_activities = relationship("SavedActivity", back_populates="user", cascade="all, delete-orphan")
    planned_activities = relationship("PlannedActivity", back_populates="user", cascade="all, delete-orphan")
    notification_preference = relationship(
        "NotificationPreference", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    google_credential = relationship(
        "GoogleCredential", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
