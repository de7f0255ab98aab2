# crud/planned_activity.py
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session

from dayflow.models.planned_activity import PlannedActivity


class PlannedActivityCRUD:
    """CRUD operations for planned activities."""

    def create(
        self, db: Session, *, user_id: UUID, name: str, day: str, time: Optional[str] = None
    ) -> PlannedActivity:
        db_obj = PlannedActivity(user_id=user_id, activity_name=name, date=day, time=time)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get(self, db: Session, *, user_id: UUID, id: UUID) -> Optional[PlannedActivity]:
        return (
            db.query(PlannedActivity)
            .filter(PlannedActivity.id == id, PlannedActivity.user_id == user_id)
            .first()
        )

    def get_by_date_range(
        self, db: Session, *, user_id: UUID, start: str, end: str
    ) -> List[PlannedActivity]:
        """
        Planned activities with start <= date <= end, ordered by date then time.

        Untimed entries sort before timed ones on the same day.
        """
        return (
            db.query(PlannedActivity)
            .filter(
                PlannedActivity.user_id == user_id,
                PlannedActivity.date >= start,
                PlannedActivity.date <= end,
            )
            .order_by(
                PlannedActivity.date.asc(),
                PlannedActivity.time.is_not(None),
                PlannedActivity.time.asc(),
                PlannedActivity.created_at.asc(),
            )
            .all()
        )

    def delete(self, db: Session, *, user_id: UUID, id: UUID) -> Optional[PlannedActivity]:
        obj = self.get(db, user_id=user_id, id=id)
        if obj:
            db.delete(obj)
            db.commit()
        return obj


crud_planned_activity = PlannedActivityCRUD()
