# crud/saved_activity.py
from typing import List, Optional
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from dayflow.core.exceptions import DatabaseConflictError
from dayflow.models.saved_activity import SavedActivity


class SavedActivityCRUD:
    """CRUD operations for the activities a user tracks."""

    def create(self, db: Session, *, user_id: UUID, name: str) -> SavedActivity:
        """
        Save an activity for the user.

        Raises:
            DatabaseConflictError: If the user already tracks this name
        """
        db_obj = SavedActivity(user_id=user_id, activity_name=name)
        db.add(db_obj)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise DatabaseConflictError(name) from e
        db.refresh(db_obj)
        return db_obj

    def get(self, db: Session, *, user_id: UUID, id: UUID) -> Optional[SavedActivity]:
        return (
            db.query(SavedActivity)
            .filter(SavedActivity.id == id, SavedActivity.user_id == user_id)
            .first()
        )

    def get_by_name(self, db: Session, *, user_id: UUID, name: str) -> Optional[SavedActivity]:
        """Case-insensitive lookup, so "reading" and "Reading" are one activity."""
        return (
            db.query(SavedActivity)
            .filter(
                SavedActivity.user_id == user_id,
                func.lower(SavedActivity.activity_name) == name.lower(),
            )
            .first()
        )

    def get_multi(self, db: Session, *, user_id: UUID) -> List[SavedActivity]:
        return (
            db.query(SavedActivity)
            .filter(SavedActivity.user_id == user_id)
            .order_by(SavedActivity.activity_name.asc())
            .all()
        )

    def delete(self, db: Session, *, user_id: UUID, id: UUID) -> Optional[SavedActivity]:
        obj = self.get(db, user_id=user_id, id=id)
        if obj:
            db.delete(obj)
            db.commit()
        return obj


crud_saved_activity = SavedActivityCRUD()
