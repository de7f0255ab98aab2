# services/daily_log.py
import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from dayflow.ai import suggest_unlogged_time as unlogged
from dayflow.core.clock import day_bounds_utc, format_day, local_today, user_zone
from dayflow.core.exceptions import NotFoundError, ValidationError
from dayflow.crud.activity_log import crud_activity_log
from dayflow.crud.state_log import crud_state_log
from dayflow.models.activity_log import ActivityLog
from dayflow.models.state_log import StateLog
from dayflow.models.user import User
from dayflow.schemas.ai import UnloggedTimeRequest, UnloggedTimeSuggestion
from dayflow.schemas.logs import (
    ActivityLogOut,
    ExportResult,
    MoodLogCreate,
    SaveDayLogRequest,
    SaveDayLogResponse,
)
from dayflow.services import airtable

logger = logging.getLogger(__name__)

ENTRY_TYPE_LOG = "Log"


class DailyLogService:
    """The daily log page: activity minutes, mood check-ins and their exports."""

    # =====================================================================
    # ACTIVITY LOGS
    # =====================================================================

    def save_day_log(self, db: Session, user: User, obj_in: SaveDayLogRequest) -> SaveDayLogResponse:
        """
        Save the minutes spent on each activity.

        Entries with zero minutes are skipped. The date defaults to today
        in the user's timezone.

        Raises:
            ValidationError: If no entry has a positive duration
        """
        entries = [(e.name, e.duration) for e in obj_in.activities if e.duration > 0]
        if not entries:
            raise ValidationError("No activities to save.")

        day = format_day(obj_in.date or local_today(user))
        logs = crud_activity_log.create_many(
            db, user_id=user.id, day=day, entries=entries, entry_type=ENTRY_TYPE_LOG
        )
        logger.info(f"Saved {len(logs)} activity logs for user {user.id} on {day}")

        export = None
        if obj_in.export_to_airtable:
            export = airtable.save_activities_to_airtable(entries, day)

        return SaveDayLogResponse(
            saved=len(logs),
            date=day,
            logs=[ActivityLogOut.model_validate(log) for log in logs],
            airtable=export,
        )

    def list_activity_logs(self, db: Session, user: User, day: Optional[date] = None) -> List[ActivityLog]:
        return crud_activity_log.get_by_date(
            db, user_id=user.id, day=format_day(day or local_today(user))
        )

    def delete_activity_log(self, db: Session, user: User, log_id: UUID) -> None:
        if not crud_activity_log.delete(db, user_id=user.id, id=log_id):
            raise NotFoundError("Activity log not found")

    def export_to_airtable(self, db: Session, user: User, day: Optional[date] = None) -> ExportResult:
        """Send an already saved day to Airtable."""
        day_str = format_day(day or local_today(user))
        logs = crud_activity_log.get_by_date(db, user_id=user.id, day=day_str)
        if not logs:
            raise ValidationError("No activities to export.")
        return airtable.save_activities_to_airtable(
            [(log.activity_name, log.duration_minutes) for log in logs], day_str
        )

    # =====================================================================
    # MOOD LOGS
    # =====================================================================

    def save_mood(self, db: Session, user: User, obj_in: MoodLogCreate) -> StateLog:
        state = crud_state_log.create(db, user_id=user.id, obj_in=obj_in)
        logger.info(f"Mood logged for user {user.id}")
        return state

    def list_mood_logs(self, db: Session, user: User, day: Optional[date] = None) -> List[StateLog]:
        """Check-ins whose server time falls on ``day`` in the user's timezone."""
        start, end = day_bounds_utc(day or local_today(user), user_zone(user))
        return crud_state_log.get_between(db, user_id=user.id, start=start, end=end)

    # =====================================================================
    # AI SUGGESTIONS
    # =====================================================================

    def suggest_unlogged_time(
        self, db: Session, user: User, request: UnloggedTimeRequest
    ) -> List[UnloggedTimeSuggestion]:
        day = request.date or local_today(user)
        data = unlogged.build_input(db, user, day, request.start, request.end)
        return unlogged.suggest_unlogged_time(data)


daily_log_service = DailyLogService()
