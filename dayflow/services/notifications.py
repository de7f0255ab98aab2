# services/notifications.py
import logging
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from dayflow.core.clock import format_day, format_hhmm, local_now
from dayflow.crud.notification_preference import crud_notification_preference
from dayflow.models.notification_preference import NotificationPreference
from dayflow.models.user import User
from dayflow.schemas.notifications import DueReminder, NotificationPreferenceUpdate, normalize_times
from dayflow.services import google_calendar

logger = logging.getLogger(__name__)

REMINDER_TITLE = "DayFlow Reminder"
REMINDER_BODY = "Don't forget to log your activities for the day!"


def is_due(
    times: Iterable[str],
    current: Tuple[str, str],
    last_fired: Optional[Tuple[str, str]],
) -> bool:
    """
    Decide whether a reminder fires.

    Args:
        times: Configured HH:mm reminder times
        current: (local date, local HH:mm) of the check
        last_fired: (date, HH:mm) of the last reminder handed out, if any

    Returns:
        True when the current minute is a reminder time that has not fired yet
    """
    _, hhmm = current
    return hhmm in set(times) and last_fired != current


class NotificationService:
    """Reminder preferences and the client's polling check."""

    def __init__(self):
        self.crud = crud_notification_preference

    def get_preferences(self, db: Session, user: User) -> NotificationPreference:
        return self.crud.get_or_create(db, user_id=user.id)

    def save_preferences(
        self, db: Session, user: User, obj_in: NotificationPreferenceUpdate
    ) -> NotificationPreference:
        """
        Store new preferences and mirror them into Google Calendar.

        The preferences are committed before the calendar is touched, so a
        calendar failure does not lose the user's choice; the error is
        still raised to the caller.
        """
        pref = self.crud.get_or_create(db, user_id=user.id)
        was_syncing = bool(pref.calendar_sync)

        pref = self.crud.update(
            db,
            db_obj=pref,
            times=obj_in.times,
            enabled=obj_in.enabled,
            calendar_sync=obj_in.calendar_sync,
        )
        logger.info(
            f"Notification preferences saved for user {user.id}: "
            f"times={pref.times} enabled={pref.enabled} calendar_sync={pref.calendar_sync}"
        )

        if pref.calendar_sync:
            google_calendar.reconcile(db, user, pref, pref.times)
        elif was_syncing:
            # Sync switched off: remove every event created earlier
            google_calendar.reconcile(db, user, pref, [])

        db.refresh(pref)
        return pref

    def _replace_times(self, db: Session, user: User, times: List[str]) -> NotificationPreference:
        pref = self.crud.get_or_create(db, user_id=user.id)
        return self.save_preferences(
            db,
            user,
            NotificationPreferenceUpdate(
                times=times, enabled=pref.enabled, calendar_sync=pref.calendar_sync
            ),
        )

    def add_time(self, db: Session, user: User, hhmm: str) -> NotificationPreference:
        pref = self.crud.get_or_create(db, user_id=user.id)
        return self._replace_times(db, user, normalize_times(list(pref.times or []) + [hhmm]))

    def remove_time(self, db: Session, user: User, hhmm: str) -> NotificationPreference:
        pref = self.crud.get_or_create(db, user_id=user.id)
        return self._replace_times(db, user, [t for t in (pref.times or []) if t != hhmm])

    def check_due(self, db: Session, user: User, now: Optional[datetime] = None) -> DueReminder:
        """
        Answer the 30-second poll.

        The comparison uses the user's timezone. A reminder that fires is
        recorded immediately so a second poll in the same minute, or after a
        page reload, does not fire it again.
        """
        pref = self.crud.get_or_create(db, user_id=user.id)
        moment = local_now(user, now)
        current = (format_day(moment.date()), format_hhmm(moment))

        last_fired = None
        if pref.last_fired_date and pref.last_fired_time:
            last_fired = (pref.last_fired_date, pref.last_fired_time)

        if not pref.enabled or not is_due(pref.times or [], current, last_fired):
            logger.debug(f"No reminder due for user {user.id} at {current[1]}")
            return DueReminder(due=False, time=current[1])

        self.crud.mark_fired(db, db_obj=pref, day=current[0], time=current[1])
        logger.info(f"Reminder fired for user {user.id} at {current[1]}")
        return DueReminder(due=True, time=current[1], title=REMINDER_TITLE, body=REMINDER_BODY)


notification_service = NotificationService()
