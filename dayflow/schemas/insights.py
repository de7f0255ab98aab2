from typing import Dict, List
from datetime import date as DateType

from pydantic import BaseModel, Field

from dayflow.schemas.planning import PlannedActivityOut


class AggregatedActivity(BaseModel):
    name: str
    total_minutes: int
    formatted: str = Field(..., description='Human readable duration, e.g. "1h 30m"')
    percentage: float = Field(..., description="Share of the day's logged minutes, 0-100")


class DaySummary(BaseModel):
    """Dashboard / calendar day view."""
    date: str
    total_minutes: int
    formatted_total: str
    activities: List[AggregatedActivity]
    planned: List[PlannedActivityOut] = []


class WeekDay(BaseModel):
    name: str = Field(..., description="Short weekday name: Mon, Tue, ...")
    date: str
    hours: Dict[str, float] = Field(default_factory=dict, description="Hours per activity")


class WeeklyAnalysis(BaseModel):
    week_start: DateType
    week_end: DateType
    days: List[WeekDay]
    activities: List[str]
    colors: Dict[str, str]
    total_hours: float
