# services/google_calendar.py
"""Google Calendar connection and daily reminder events.

A user connects once through OAuth (offline access); the stored refresh
token keeps the calendar reachable afterwards. Each reminder time gets its
own daily recurring event, and ``notification_preferences.calendar_event_ids``
maps the time to the event so it can be removed again.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Tuple

import httplib2
from google.auth.exceptions import RefreshError, TransportError
from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from sqlalchemy.orm import Session

from dayflow.core.clock import local_now, parse_hhmm, user_zone
from dayflow.core.config import settings
from dayflow.core.exceptions import CalendarAuthError, ConfigurationError, ExternalServiceError
from dayflow.core.security import create_oauth_state, parse_user_id, verify_oauth_state
from dayflow.crud.google_credential import crud_google_credential
from dayflow.crud.notification_preference import crud_notification_preference
from dayflow.models.notification_preference import NotificationPreference
from dayflow.models.user import User
from dayflow.schemas.notifications import CalendarStatus

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar.events"]
AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URI = "https://oauth2.googleapis.com/token"
CALENDAR_ID = "primary"

EVENT_SUMMARY = "Log your day's activities"
RECONNECT_MESSAGE = "Google Calendar authorization has expired. Please reconnect Google Calendar."
UNREACHABLE_MESSAGE = "Could not reach Google Calendar. Please try again."

# TimeoutError and connection errors are OSError subclasses
NETWORK_ERRORS = (OSError, httplib2.HttpLib2Error)


# =====================================================================
# OAUTH
# =====================================================================

def is_configured() -> bool:
    return bool(settings.GOOGLE_CLIENT_ID and settings.GOOGLE_CLIENT_SECRET)


def _require_config() -> None:
    if not is_configured():
        raise ConfigurationError("Google Calendar is not configured on the server.")


def _oauth_flow(state: Optional[str] = None) -> Flow:
    return Flow.from_client_config(
        {
            "web": {
                "client_id": settings.GOOGLE_CLIENT_ID,
                "client_secret": settings.GOOGLE_CLIENT_SECRET,
                "auth_uri": AUTH_URI,
                "token_uri": TOKEN_URI,
            }
        },
        scopes=SCOPES,
        redirect_uri=settings.GOOGLE_REDIRECT_URI,
        state=state,
        # The callback builds a new Flow, so there is no verifier to carry over
        autogenerate_code_verifier=False,
    )


def authorization_url(user: User) -> str:
    """Consent-screen URL; the signed ``state`` brings the user id back to the callback."""
    _require_config()
    flow = _oauth_flow(state=create_oauth_state(user.id))
    url, _ = flow.authorization_url(
        access_type="offline",
        include_granted_scopes="true",
        prompt="consent",
    )
    return url


def handle_callback(db: Session, code: str, state: str) -> User:
    """
    Exchange the authorization code and store the tokens.

    Returns:
        The user the ``state`` was issued to

    Raises:
        HTTPException 401: If the state is forged or expired
        ExternalServiceError: If Google rejects the code
    """
    _require_config()
    user_id = parse_user_id(verify_oauth_state(state))

    flow = _oauth_flow(state=state)
    try:
        flow.fetch_token(code=code)
    except Exception as e:
        logger.error(f"Google token exchange failed for user {user_id}: {e}")
        raise ExternalServiceError("Could not connect Google Calendar. Please try again.") from e

    creds = flow.credentials
    credential = crud_google_credential.upsert(
        db,
        user_id=user_id,
        access_token=creds.token,
        refresh_token=creds.refresh_token,
        token_uri=getattr(creds, "token_uri", None) or TOKEN_URI,
        scopes=list(creds.scopes or SCOPES),
        expiry=creds.expiry,
    )
    logger.info(f"Google Calendar connected for user {user_id}")
    return credential.user


def status(db: Session, user: User) -> CalendarStatus:
    credential = crud_google_credential.get(db, user_id=user.id)
    if credential is None:
        return CalendarStatus(connected=False, scopes=[])
    return CalendarStatus(
        connected=bool(credential.refresh_token or credential.access_token),
        scopes=list(credential.scopes or []),
    )


def disconnect(db: Session, user: User) -> None:
    """
    Forget the tokens and stop syncing.

    Events already created stay in the user's calendar and keep their ids,
    so reconnecting later does not create duplicates.
    """
    crud_google_credential.delete(db, user_id=user.id)
    pref = crud_notification_preference.get(db, user_id=user.id)
    if pref is not None and pref.calendar_sync:
        crud_notification_preference.update(db, db_obj=pref, calendar_sync=False)
    logger.info(f"Google Calendar disconnected for user {user.id}")


# =====================================================================
# CREDENTIALS
# =====================================================================

def get_credentials(db: Session, user: User) -> Credentials:
    """
    Load the stored credentials, refreshing and persisting them when expired.

    Raises:
        CalendarAuthError: If nothing is stored or the refresh is rejected
        ExternalServiceError: If Google cannot be reached for the refresh
    """
    stored = crud_google_credential.get(db, user_id=user.id)
    if stored is None or not (stored.access_token or stored.refresh_token):
        raise CalendarAuthError("Google Calendar is not connected.")

    creds = Credentials(
        token=stored.access_token or None,
        refresh_token=stored.refresh_token or None,
        token_uri=stored.token_uri or TOKEN_URI,
        client_id=settings.GOOGLE_CLIENT_ID,
        client_secret=settings.GOOGLE_CLIENT_SECRET,
        scopes=list(stored.scopes or SCOPES),
    )
    creds.expiry = stored.expiry

    if not creds.valid:
        if not creds.refresh_token:
            raise CalendarAuthError(RECONNECT_MESSAGE)
        try:
            creds.refresh(GoogleAuthRequest())
        except RefreshError as e:
            logger.warning(f"Google token refresh failed for user {user.id}: {e}")
            raise CalendarAuthError(RECONNECT_MESSAGE) from e
        except TransportError as e:
            logger.error(f"Google token refresh unreachable for user {user.id}: {e}")
            raise ExternalServiceError(UNREACHABLE_MESSAGE) from e

        crud_google_credential.upsert(
            db,
            user_id=user.id,
            access_token=creds.token,
            refresh_token=creds.refresh_token,
            token_uri=stored.token_uri or TOKEN_URI,
            scopes=list(stored.scopes or SCOPES),
            expiry=creds.expiry,
        )
    return creds


def calendar_service(db: Session, user: User):
    creds = get_credentials(db, user)
    return build("calendar", "v3", credentials=creds, cache_discovery=False)


def _status_of(exc: HttpError) -> int:
    return int(getattr(exc.resp, "status", 0) or 0)


# =====================================================================
# EVENTS
# =====================================================================

def next_occurrence(hhmm: str, now_local: datetime) -> datetime:
    """
    First local datetime at ``hhmm`` that is still ahead of ``now_local``.

    Days on which ``hhmm`` falls into a daylight-saving gap are skipped.
    """
    at = parse_hhmm(hhmm)
    zone = now_local.tzinfo
    day = now_local.date()
    while True:
        candidate = datetime.combine(day, at, tzinfo=zone)
        start = candidate.astimezone(timezone.utc).astimezone(zone)
        if start > now_local and (start.hour, start.minute) == (at.hour, at.minute):
            return start
        day += timedelta(days=1)


def build_reminder_event(user: User, hhmm: str, now: Optional[datetime] = None) -> dict:
    zone = user_zone(user)
    start = next_occurrence(hhmm, local_now(user, now))
    end = start + timedelta(minutes=settings.REMINDER_EVENT_MINUTES)
    app_url = settings.APP_URL

    return {
        "summary": EVENT_SUMMARY,
        "description": (
            "Time to log your activities! Click here to open the app: "
            f'<a href="{app_url}">{app_url}</a>'
        ),
        "start": {"dateTime": start.isoformat(), "timeZone": zone.key},
        "end": {"dateTime": end.isoformat(), "timeZone": zone.key},
        "recurrence": ["RRULE:FREQ=DAILY"],
        "attendees": [{"email": user.email}],
        "reminders": {
            "useDefault": False,
            "overrides": [{"method": "popup", "minutes": 0}],
        },
    }


def create_reminder_event(db: Session, user: User, hhmm: str, service=None) -> str:
    """
    Create the daily reminder event for ``hhmm``; returns the event id.

    Raises:
        CalendarAuthError: If Google rejects the stored authorization
        ExternalServiceError: On any other API or network failure
    """
    service = service or calendar_service(db, user)
    try:
        created = service.events().insert(
            calendarId=CALENDAR_ID, body=build_reminder_event(user, hhmm)
        ).execute()
    except HttpError as e:
        if _status_of(e) == 401:
            raise CalendarAuthError(RECONNECT_MESSAGE) from e
        logger.error(f"Error creating calendar event at {hhmm} for user {user.id}: {e}")
        raise ExternalServiceError(
            "Failed to create calendar event. Please ensure you have granted calendar permissions."
        ) from e
    except NETWORK_ERRORS as e:
        logger.error(f"Google Calendar unreachable while creating event at {hhmm} for user {user.id}: {e}")
        raise ExternalServiceError(UNREACHABLE_MESSAGE) from e
    return created["id"]


def delete_event(db: Session, user: User, event_id: str, service=None) -> None:
    """Delete a reminder event; an event that is already gone counts as deleted."""
    service = service or calendar_service(db, user)
    try:
        service.events().delete(calendarId=CALENDAR_ID, eventId=event_id).execute()
    except HttpError as e:
        code = _status_of(e)
        if code in (404, 410):
            logger.info(f"Event {event_id} was already deleted.")
            return
        if code == 401:
            raise CalendarAuthError(RECONNECT_MESSAGE) from e
        logger.error(f"Error deleting calendar event {event_id} for user {user.id}: {e}")
        raise ExternalServiceError("Failed to delete calendar event.") from e
    except NETWORK_ERRORS as e:
        logger.error(f"Google Calendar unreachable while deleting event {event_id} for user {user.id}: {e}")
        raise ExternalServiceError(UNREACHABLE_MESSAGE) from e


# =====================================================================
# RECONCILIATION
# =====================================================================

def diff_times(previous: Iterable[str], new: Iterable[str]) -> Tuple[List[str], List[str]]:
    """Return (removed, added), both sorted."""
    before, after = set(previous), set(new)
    return sorted(before - after), sorted(after - before)


def reconcile(
    db: Session, user: User, pref: NotificationPreference, new_times: Iterable[str]
) -> Dict[str, str]:
    """
    Bring the calendar in line with ``new_times``.

    Events whose time is gone are deleted and every time without an event
    gets one. The id map is written back after each step, so when a call
    fails the stored map still matches what exists in the calendar; the
    error is then re-raised.
    """
    event_ids: Dict[str, str] = dict(pref.calendar_event_ids or {})
    removed, added = diff_times(event_ids.keys(), new_times)
    if not removed and not added:
        return event_ids

    service = calendar_service(db, user)

    for hhmm in removed:
        delete_event(db, user, event_ids[hhmm], service=service)
        del event_ids[hhmm]
        crud_notification_preference.set_event_ids(db, db_obj=pref, event_ids=event_ids)

    for hhmm in added:
        event_ids[hhmm] = create_reminder_event(db, user, hhmm, service=service)
        crud_notification_preference.set_event_ids(db, db_obj=pref, event_ids=event_ids)

    logger.info(
        f"Calendar reconciled for user {user.id}: removed={removed} added={added}"
    )
    return event_ids
