# ai/generate_daily_summary.py
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from dayflow.ai.flow import Flow, GeminiClient
from dayflow.core.clock import as_utc, day_bounds_utc, format_day, user_zone
from dayflow.crud.activity_log import crud_activity_log
from dayflow.crud.state_log import crud_state_log
from dayflow.data.activity_repository import find_default_activity
from dayflow.models.user import User
from dayflow.schemas.ai import DailySummary, DailySummaryPromptInput, PromptActivity, PromptMood

SUMMARY_FAILED = "The AI failed to generate a summary."


def render_prompt(data: DailySummaryPromptInput) -> str:
    if data.activities:
        activity_lines = "\n".join(
            f"- Activity: {a.activity_name}, Duration: {a.duration_minutes} minutes "
            f"(Logged at {a.logged_at})" + (f" [{a.kind}]" if a.kind else "")
            for a in data.activities
        )
    else:
        activity_lines = "No activities were logged today."

    if data.moods:
        mood_lines = "\n".join(
            f"- Logged at {m.logged_at}: Energy={m.energy}/10, Focus={m.focus}/10, "
            f"Mood={m.mood}/10. Context: {m.context or 'none'}"
            for m in data.moods
        )
    else:
        mood_lines = "No mood or energy levels were logged today."

    return f"""You are an expert life coach and data analyst named 'DayFlow Insights'. Your task is to provide a comprehensive, empathetic, and actionable daily summary for a user based on their logged activities and mood.

Here is the data for the user's day:

**User's Stated Goals:**
{data.user_goals}

**Activity Logs:**
{activity_lines}

**Mood & Energy Logs:**
{mood_lines}

**Your Task:**

Analyze the provided data and generate a JSON response with the following structure. Be insightful and supportive in your tone.

1.  **overallSummary**: Write a narrative summary (2-3 sentences) of the day. Mention key activities and the general mood.
2.  **moodAnalysis**:
    *   `trend`: Describe the mood/energy trend. Did it improve, decline, or stay stable?
    *   `highestEnergy`: Note when energy was highest, linking it to an activity or time if possible.
    *   `lowestEnergy`: Note when energy was lowest.
3.  **productivityAnalysis**:
    *   `mostProductiveActivity`: Identify the activity that seems most productive (e.g., 'Deep Work').
    *   `totalProductiveHours`: Calculate and sum the hours for productive activities (activities marked [work] count as productive).
    *   `peakProductivityTime`: Based on the logging times and activity types, infer a 'peak productivity' period.
4.  **keyInsights**: Provide 3-4 bullet points of interesting connections or observations.
5.  **suggestionsForTomorrow**: Provide 2 actionable suggestions, each an object with `suggestion` and `reasoning`, linked to the user's data and their stated goals.

**Crucial Instructions:**
- If data is missing (e.g., no mood logs), state that clearly in the relevant analysis section (e.g., "No mood data was logged to analyze.") and do not fabricate insights.
- Your entire response MUST be a valid JSON object with exactly the keys overallSummary, moodAnalysis, productivityAnalysis, keyInsights and suggestionsForTomorrow.
"""


daily_summary_flow = Flow(
    name="generateDailySummary",
    input_model=DailySummaryPromptInput,
    output_type=DailySummary,
    render=render_prompt,
    failure_message=SUMMARY_FAILED,
)


def build_prompt_input(db: Session, user: User, day: date) -> DailySummaryPromptInput:
    """Collect the user's goals and the day's logs, with local "logged at" times."""
    zone = user_zone(user)

    activities = []
    for log in crud_activity_log.get_by_date(db, user_id=user.id, day=format_day(day)):
        default = find_default_activity(log.activity_name)
        activities.append(
            PromptActivity(
                activity_name=log.activity_name,
                duration_minutes=log.duration_minutes,
                logged_at=as_utc(log.timestamp).astimezone(zone).strftime("%I:%M %p"),
                kind=default["kind"].value if default else None,
            )
        )

    start, end = day_bounds_utc(day, zone)
    moods = [
        PromptMood(
            energy=m.energy,
            focus=m.focus,
            mood=m.mood,
            context=m.context,
            logged_at=as_utc(m.check_in_time).astimezone(zone).strftime("%I:%M %p"),
        )
        for m in crud_state_log.get_between(db, user_id=user.id, start=start, end=end)
    ]

    return DailySummaryPromptInput(
        user_goals=(user.goals or "").strip() or "Not specified",
        activities=activities,
        moods=moods,
    )


def generate_daily_summary(
    db: Session, user: User, day: date, client: Optional[GeminiClient] = None
) -> DailySummary:
    return daily_summary_flow(build_prompt_input(db, user, day), client=client)
