from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dayflow.core.clock import validate_hhmm


def normalize_times(times: List[str]) -> List[str]:
    """Validated, de-duplicated, sorted HH:mm strings."""
    return sorted({validate_hhmm(t) for t in times})


class NotificationPreferenceUpdate(BaseModel):
    times: List[str] = Field(default_factory=list, description="Reminder times, HH:mm")
    enabled: bool = False
    calendar_sync: bool = False

    @field_validator("times")
    @classmethod
    def validate_times(cls, v: List[str]) -> List[str]:
        return normalize_times(v)


class ReminderTimeRequest(BaseModel):
    time: str

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        return validate_hhmm(v)


class NotificationPreferenceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    times: List[str]
    enabled: bool
    calendar_sync: bool
    calendar_event_ids: Dict[str, str] = {}


class DueReminder(BaseModel):
    due: bool
    time: str = Field(..., description="User-local HH:mm the check ran at")
    title: Optional[str] = None
    body: Optional[str] = None


class CalendarStatus(BaseModel):
    connected: bool
    scopes: List[str] = []
