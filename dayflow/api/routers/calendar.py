# dayflow/api/routers/calendar.py
from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from dayflow.core.config import get_db, settings
from dayflow.core.security import get_current_user
from dayflow.models.user import User
from dayflow.schemas.notifications import CalendarStatus
from dayflow.services import google_calendar

router = APIRouter(prefix="/calendar/google", tags=["Google Calendar"])


@router.get(
    "/connect",
    summary="Start the Google Calendar connection"
)
def connect(current_user: User = Depends(get_current_user)):
    """Returns the Google consent URL the client should open."""
    return {"authorization_url": google_calendar.authorization_url(current_user)}


@router.get(
    "/callback",
    summary="OAuth redirect target",
    include_in_schema=False
)
def callback(
    code: str,
    state: str,
    db: Session = Depends(get_db)
):
    """Stores the tokens, then sends the browser back to the settings page."""
    google_calendar.handle_callback(db, code, state)
    return RedirectResponse(f"{settings.APP_URL.rstrip('/')}/settings?calendar=connected")


@router.get(
    "/status",
    response_model=CalendarStatus,
    summary="Google Calendar connection status"
)
def calendar_status(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return google_calendar.status(db, current_user)


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Disconnect Google Calendar"
)
def disconnect(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    google_calendar.disconnect(db, current_user)
