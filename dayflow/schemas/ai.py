# schemas/ai.py
"""Input and output records of the generative-AI flows.

Field names are snake_case in Python and camelCase on the wire, which is
the shape the prompts ask the model to produce.
"""
from typing import List, Optional
from datetime import date as DateType

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from dayflow.core.clock import validate_hhmm


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =====================================================================
# DAILY SUMMARY
# =====================================================================

class MoodAnalysis(CamelModel):
    trend: str = Field(..., description="One-sentence summary of the mood and energy trend")
    highest_energy: Optional[str] = Field(None, description="When energy was highest")
    lowest_energy: Optional[str] = Field(None, description="When energy was lowest")


class ProductivityAnalysis(CamelModel):
    most_productive_activity: Optional[str] = None
    total_productive_hours: float = Field(..., ge=0)
    peak_productivity_time: str


class Suggestion(CamelModel):
    suggestion: str
    reasoning: str


class DailySummary(CamelModel):
    overall_summary: str
    mood_analysis: MoodAnalysis
    productivity_analysis: ProductivityAnalysis
    key_insights: List[str] = Field(default_factory=list)
    suggestions_for_tomorrow: List[Suggestion] = Field(default_factory=list)


class PromptActivity(CamelModel):
    activity_name: str
    duration_minutes: int
    logged_at: str
    kind: Optional[str] = None


class PromptMood(CamelModel):
    energy: int
    focus: int
    mood: int
    context: Optional[str] = None
    logged_at: str


class DailySummaryPromptInput(CamelModel):
    user_goals: str = "Not specified"
    activities: List[PromptActivity] = Field(default_factory=list)
    moods: List[PromptMood] = Field(default_factory=list)


# =====================================================================
# UNLOGGED TIME
# =====================================================================

class PastActivity(CamelModel):
    activity: str
    duration_minutes: int
    timestamp: str


class SuggestUnloggedTimeInput(CamelModel):
    past_activities: List[PastActivity] = Field(default_factory=list)
    unlogged_time_start: str
    unlogged_time_end: str
    available_activities: List[str] = Field(default_factory=list)


class UnloggedTimeSuggestion(CamelModel):
    activity: str
    reasoning: str


class UnloggedTimeRequest(CamelModel):
    """Gap to fill, as local HH:mm on the given day."""
    start: str
    end: str
    date: Optional[DateType] = None

    @field_validator("start", "end")
    @classmethod
    def validate_time(cls, v: str) -> str:
        return validate_hhmm(v)

    @model_validator(mode="after")
    def check_order(self) -> "UnloggedTimeRequest":
        # HH:mm strings sort chronologically
        if self.start >= self.end:
            raise ValueError("The end of the gap must be after its start")
        return self


# =====================================================================
# REPORT E-MAIL
# =====================================================================

class SendSummaryEmailRequest(CamelModel):
    date: Optional[DateType] = None
    summary: Optional[DailySummary] = Field(
        None, description="Summary already shown to the user; generated when omitted"
    )


class EmailResult(BaseModel):
    success: bool
    message: str
