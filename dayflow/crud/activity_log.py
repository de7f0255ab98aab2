# crud/activity_log.py
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session

from dayflow.models.activity_log import ActivityLog


class ActivityLogCRUD:
    """CRUD operations for activity log entries. Every query is scoped to one user."""

    def create_many(
        self, db: Session, *, user_id: UUID, day: str, entries: List[tuple], entry_type: str = "Log"
    ) -> List[ActivityLog]:
        """
        Write one row per (activity name, minutes) pair in a single commit.

        Args:
            db: Database session
            user_id: Owner
            day: Local date as YYYY-MM-DD
            entries: (activity_name, duration_minutes) pairs
            entry_type: Stored entry type

        Returns:
            Created ActivityLog instances
        """
        rows = [
            ActivityLog(
                user_id=user_id,
                activity_name=name,
                duration_minutes=minutes,
                date=day,
                entry_type=entry_type,
            )
            for name, minutes in entries
        ]
        db.add_all(rows)
        db.commit()
        for row in rows:
            db.refresh(row)
        return rows

    def get(self, db: Session, *, user_id: UUID, id: UUID) -> Optional[ActivityLog]:
        return (
            db.query(ActivityLog)
            .filter(ActivityLog.id == id, ActivityLog.user_id == user_id)
            .first()
        )

    def get_by_date(self, db: Session, *, user_id: UUID, day: str) -> List[ActivityLog]:
        return (
            db.query(ActivityLog)
            .filter(ActivityLog.user_id == user_id, ActivityLog.date == day)
            .order_by(ActivityLog.timestamp.asc())
            .all()
        )

    def get_by_date_range(
        self, db: Session, *, user_id: UUID, start: str, end: str
    ) -> List[ActivityLog]:
        """Entries with start <= date <= end; ISO dates compare as strings."""
        return (
            db.query(ActivityLog)
            .filter(
                ActivityLog.user_id == user_id,
                ActivityLog.date >= start,
                ActivityLog.date <= end,
            )
            .order_by(ActivityLog.date.asc(), ActivityLog.timestamp.asc())
            .all()
        )

    def delete(self, db: Session, *, user_id: UUID, id: UUID) -> Optional[ActivityLog]:
        obj = self.get(db, user_id=user_id, id=id)
        if obj:
            db.delete(obj)
            db.commit()
        return obj


crud_activity_log = ActivityLogCRUD()
