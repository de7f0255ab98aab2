# services/activities.py
import logging
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from dayflow.core.exceptions import ConflictError, DatabaseConflictError, NotFoundError, ValidationError
from dayflow.crud.saved_activity import crud_saved_activity
from dayflow.data.activity_repository import ACTIVITY_REPOSITORY
from dayflow.models.saved_activity import SavedActivity
from dayflow.models.user import User
from dayflow.schemas.activities import DefaultActivity

logger = logging.getLogger(__name__)


class ActivityService:
    """The onboarding catalogue and the activities a user has chosen to track."""

    def __init__(self):
        self.crud = crud_saved_activity

    def list_default_activities(self) -> List[DefaultActivity]:
        return [DefaultActivity(id=a["id"], name=a["name"]) for a in ACTIVITY_REPOSITORY]

    def list_saved(self, db: Session, user: User) -> List[SavedActivity]:
        return self.crud.get_multi(db, user_id=user.id)

    def add_saved(self, db: Session, user: User, name: str) -> SavedActivity:
        """
        Start tracking an activity.

        Raises:
            ValidationError: If the name is blank
            ConflictError: If the user already tracks an activity with that name
        """
        name = name.strip()
        if not name:
            raise ValidationError("Activity name cannot be empty.")

        duplicate = ConflictError(f"You're already tracking \"{name}\".")
        if self.crud.get_by_name(db, user_id=user.id, name=name):
            raise duplicate
        try:
            saved = self.crud.create(db, user_id=user.id, name=name)
        except DatabaseConflictError as e:
            raise duplicate from e

        logger.info(f"User {user.id} now tracks \"{name}\"")
        return saved

    def remove_saved(self, db: Session, user: User, activity_id: UUID) -> None:
        if not self.crud.delete(db, user_id=user.id, id=activity_id):
            raise NotFoundError("Activity not found")


activity_service = ActivityService()
