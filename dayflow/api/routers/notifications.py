# dayflow/api/routers/notifications.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dayflow.core.config import get_db
from dayflow.core.security import get_current_user
from dayflow.models.user import User
from dayflow.schemas.notifications import (
    DueReminder,
    NotificationPreferenceOut,
    NotificationPreferenceUpdate,
    ReminderTimeRequest,
)
from dayflow.services.notifications import notification_service

router = APIRouter(prefix="/settings/notifications", tags=["Notifications"])


@router.get(
    "",
    response_model=NotificationPreferenceOut,
    summary="Reminder preferences"
)
def get_preferences(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Created with reminders disabled on first read."""
    return notification_service.get_preferences(db, current_user)


@router.put(
    "",
    response_model=NotificationPreferenceOut,
    summary="Replace reminder preferences"
)
def save_preferences(
    data: NotificationPreferenceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    - **times**: HH:mm list; duplicates are dropped and the list is sorted
    - **enabled**: browser reminders on or off
    - **calendar_sync**: mirror each time as a daily Google Calendar event

    Returns 401 when calendar sync needs Google Calendar to be (re)connected.
    """
    return notification_service.save_preferences(db, current_user, data)


@router.post(
    "/times",
    response_model=NotificationPreferenceOut,
    summary="Add a reminder time"
)
def add_time(
    data: ReminderTimeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return notification_service.add_time(db, current_user, data.time)


@router.delete(
    "/times/{time}",
    response_model=NotificationPreferenceOut,
    summary="Remove a reminder time"
)
def remove_time(
    time: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return notification_service.remove_time(db, current_user, time)


@router.get(
    "/due",
    response_model=DueReminder,
    summary="Is a reminder due right now?"
)
def check_due(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Polled by the client every 30 seconds. When `due` is true the client shows
    a notification with the returned title and body; each reminder time is
    reported once per day.
    """
    return notification_service.check_due(db, current_user)
