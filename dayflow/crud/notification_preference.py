# crud/notification_preference.py
from typing import Dict, List, Optional
from uuid import UUID
from sqlalchemy.orm import Session

from dayflow.models.notification_preference import NotificationPreference


class NotificationPreferenceCRUD:
    """One preference row per user."""

    def get(self, db: Session, *, user_id: UUID) -> Optional[NotificationPreference]:
        return (
            db.query(NotificationPreference)
            .filter(NotificationPreference.user_id == user_id)
            .first()
        )

    def get_or_create(self, db: Session, *, user_id: UUID) -> NotificationPreference:
        """Return the user's preferences, writing the disabled default on first read."""
        obj = self.get(db, user_id=user_id)
        if obj is None:
            obj = NotificationPreference(
                user_id=user_id,
                times=[],
                enabled=False,
                calendar_sync=False,
                calendar_event_ids={},
            )
            db.add(obj)
            db.commit()
            db.refresh(obj)
        return obj

    def update(
        self,
        db: Session,
        *,
        db_obj: NotificationPreference,
        times: Optional[List[str]] = None,
        enabled: Optional[bool] = None,
        calendar_sync: Optional[bool] = None,
    ) -> NotificationPreference:
        if times is not None:
            # New list so the JSON column is seen as changed
            db_obj.times = list(times)
        if enabled is not None:
            db_obj.enabled = enabled
        if calendar_sync is not None:
            db_obj.calendar_sync = calendar_sync
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def set_event_ids(
        self, db: Session, *, db_obj: NotificationPreference, event_ids: Dict[str, str]
    ) -> NotificationPreference:
        db_obj.calendar_event_ids = dict(event_ids)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def mark_fired(
        self, db: Session, *, db_obj: NotificationPreference, day: str, time: str
    ) -> NotificationPreference:
        db_obj.last_fired_date = day
        db_obj.last_fired_time = time
        db.commit()
        db.refresh(db_obj)
        return db_obj


crud_notification_preference = NotificationPreferenceCRUD()
