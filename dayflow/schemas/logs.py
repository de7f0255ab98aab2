from typing import List, Optional
from uuid import UUID
from datetime import date as DateType, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ----------------------
# Activity logs
# ----------------------
class ActivityEntry(BaseModel):
    """One bubble of the daily log page: an activity and the minutes given to it."""
    name: str = Field(..., min_length=1, max_length=100)
    duration: int = Field(..., ge=0, le=24 * 60, description="Minutes spent")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Activity name cannot be blank")
        return v


class SaveDayLogRequest(BaseModel):
    activities: List[ActivityEntry]
    date: Optional[DateType] = Field(
        default=None, description="Day being logged, defaults to today in the user's timezone"
    )
    export_to_airtable: bool = False


class ActivityLogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    activity_name: str
    duration_minutes: int
    date: str
    entry_type: str
    timestamp: datetime


# ----------------------
# Exports
# ----------------------
class ExportResult(BaseModel):
    success: bool
    error: Optional[str] = None
    records: int = 0


class SaveDayLogResponse(BaseModel):
    saved: int
    date: str
    logs: List[ActivityLogOut]
    airtable: Optional[ExportResult] = None


# ----------------------
# Mood / state logs
# ----------------------
class MoodLogCreate(BaseModel):
    energy: int = Field(..., ge=0, le=10)
    focus: int = Field(..., ge=0, le=10)
    mood: int = Field(..., ge=0, le=10)
    context: Optional[str] = Field(None, max_length=1000)


class MoodLogOut(MoodLogCreate):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    check_in_time: datetime
