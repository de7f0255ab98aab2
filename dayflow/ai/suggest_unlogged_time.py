# ai/suggest_unlogged_time.py
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from dayflow.ai.flow import Flow, GeminiClient
from dayflow.core.clock import as_utc, format_day, user_zone
from dayflow.crud.activity_log import crud_activity_log
from dayflow.crud.saved_activity import crud_saved_activity
from dayflow.data.activity_repository import default_activity_names
from dayflow.models.user import User
from dayflow.schemas.ai import PastActivity, SuggestUnloggedTimeInput, UnloggedTimeSuggestion


def render_prompt(data: SuggestUnloggedTimeInput) -> str:
    past = "\n".join(
        f"- Activity: {a.activity}, Duration: {a.duration_minutes} minutes, Timestamp: {a.timestamp}"
        for a in data.past_activities
    ) or "- None logged yet"

    return f"""You are an AI assistant that analyzes user activity patterns and suggests possible activities for unlogged time periods.

You are given the following information:

Past Activities:
{past}

Unlogged Time Period: From {data.unlogged_time_start} to {data.unlogged_time_end}

Available Activities: {", ".join(data.available_activities)}

Based on this information, suggest activities that the user might have been doing during the unlogged time period. Provide reasoning for each suggestion.

Format your response as a JSON array of objects, where each object has an "activity" field and a "reasoning" field.
"""


unlogged_time_flow = Flow(
    name="suggestUnloggedTime",
    input_model=SuggestUnloggedTimeInput,
    output_type=List[UnloggedTimeSuggestion],
    render=render_prompt,
    failure_message="The AI failed to suggest activities.",
)


def suggest_unlogged_time(
    data: SuggestUnloggedTimeInput, client: Optional[GeminiClient] = None
) -> List[UnloggedTimeSuggestion]:
    return unlogged_time_flow(data, client=client)


def build_input(db: Session, user: User, day: date, start: str, end: str) -> SuggestUnloggedTimeInput:
    """The day's logs as history; the user's tracked activities, else the default catalogue."""
    zone = user_zone(user)
    past = [
        PastActivity(
            activity=log.activity_name,
            duration_minutes=log.duration_minutes,
            timestamp=as_utc(log.timestamp).astimezone(zone).isoformat(timespec="minutes"),
        )
        for log in crud_activity_log.get_by_date(db, user_id=user.id, day=format_day(day))
    ]
    available = [s.activity_name for s in crud_saved_activity.get_multi(db, user_id=user.id)]

    return SuggestUnloggedTimeInput(
        past_activities=past,
        unlogged_time_start=start,
        unlogged_time_end=end,
        available_activities=available or default_activity_names(),
    )
