# services/planning.py
from datetime import date
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from dayflow.core.clock import format_day
from dayflow.core.exceptions import NotFoundError, ValidationError
from dayflow.crud.planned_activity import crud_planned_activity
from dayflow.models.planned_activity import PlannedActivity
from dayflow.models.user import User
from dayflow.schemas.planning import PlannedActivityCreate


class PlanningService:
    def __init__(self):
        self.crud = crud_planned_activity

    def plan(self, db: Session, user: User, obj_in: PlannedActivityCreate) -> PlannedActivity:
        """
        Raises:
            ValidationError: If the activity name is blank
        """
        if not obj_in.activity_name:
            raise ValidationError("Please choose an activity to plan.")
        return self.crud.create(
            db,
            user_id=user.id,
            name=obj_in.activity_name,
            day=format_day(obj_in.date),
            time=obj_in.time,
        )

    def list_for_date(self, db: Session, user: User, day: date) -> List[PlannedActivity]:
        day_str = format_day(day)
        return self.crud.get_by_date_range(db, user_id=user.id, start=day_str, end=day_str)

    def list_range(self, db: Session, user: User, start: date, end: date) -> List[PlannedActivity]:
        if start > end:
            raise ValidationError("Start date must not be after end date.")
        return self.crud.get_by_date_range(
            db, user_id=user.id, start=format_day(start), end=format_day(end)
        )

    def delete(self, db: Session, user: User, planned_id: UUID) -> None:
        if not self.crud.delete(db, user_id=user.id, id=planned_id):
            raise NotFoundError("Planned activity not found")


planning_service = PlanningService()
