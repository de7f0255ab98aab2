# models/google_credential.py

from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime, JSON, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from dayflow.core.config import Base


class GoogleCredential(Base):
    """OAuth tokens for the user's Google Calendar; refreshed on use."""

    __tablename__ = "google_credentials"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    access_token = Column(Text, nullable=True)
    refresh_token = Column(Text, nullable=True)
    token_uri = Column(String(255), nullable=False, default="https://oauth2.googleapis.com/token")
    scopes = Column(JSON, nullable=False, default=list)
    expiry = Column(DateTime, nullable=True)  # naive UTC, as google-auth expects
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
                        onupdate=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="google_credential")
