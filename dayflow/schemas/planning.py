from typing import Optional
from uuid import UUID
from datetime import date as DateType, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dayflow.core.clock import validate_hhmm


class PlannedActivityCreate(BaseModel):
    activity_name: str = Field(..., min_length=1, max_length=100)
    date: DateType
    time: Optional[str] = Field(None, description="Optional start time, HH:mm")

    @field_validator("activity_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return validate_hhmm(v)


class PlannedActivityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    activity_name: str
    date: str
    time: Optional[str] = None
    created_at: datetime
