# crud/state_log.py
from datetime import datetime
from typing import List
from uuid import UUID
from sqlalchemy.orm import Session

from dayflow.models.state_log import StateLog
from dayflow.schemas.logs import MoodLogCreate


class StateLogCRUD:
    """CRUD operations for mood / state check-ins."""

    def create(self, db: Session, *, user_id: UUID, obj_in: MoodLogCreate) -> StateLog:
        db_obj = StateLog(
            user_id=user_id,
            energy=obj_in.energy,
            focus=obj_in.focus,
            mood=obj_in.mood,
            context=obj_in.context,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_between(
        self, db: Session, *, user_id: UUID, start: datetime, end: datetime
    ) -> List[StateLog]:
        """
        Check-ins with start <= check_in_time < end.

        Args:
            db: Database session
            user_id: Owner
            start: Inclusive UTC bound
            end: Exclusive UTC bound
        """
        return (
            db.query(StateLog)
            .filter(
                StateLog.user_id == user_id,
                StateLog.check_in_time >= start,
                StateLog.check_in_time < end,
            )
            .order_by(StateLog.check_in_time.asc())
            .all()
        )


crud_state_log = StateLogCRUD()
