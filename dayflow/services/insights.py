# services/insights.py
import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from dayflow.core.clock import format_day, local_today, week_bounds
from dayflow.crud.activity_log import crud_activity_log
from dayflow.crud.planned_activity import crud_planned_activity
from dayflow.models.activity_log import ActivityLog
from dayflow.models.user import User
from dayflow.schemas.insights import AggregatedActivity, DaySummary, WeekDay, WeeklyAnalysis
from dayflow.schemas.planning import PlannedActivityOut

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

ACTIVITY_COLORS = [
    "hsl(210, 80%, 60%)", "hsl(145, 70%, 55%)", "hsl(35, 90%, 65%)", "hsl(340, 85%, 60%)", "hsl(260, 75%, 65%)",
    "hsl(50, 95%, 60%)", "hsl(190, 75%, 50%)", "hsl(310, 60%, 60%)", "hsl(95, 60%, 55%)", "hsl(0, 80%, 65%)",
    "hsl(230, 85%, 70%)", "hsl(120, 50%, 60%)", "hsl(20, 85%, 60%)", "hsl(290, 70%, 70%)", "hsl(170, 70%, 50%)",
    "hsl(70, 80%, 60%)", "hsl(350, 80%, 70%)", "hsl(245, 65%, 65%)", "hsl(10, 70%, 60%)", "hsl(160, 80%, 50%)",
    "hsl(275, 70%, 65%)", "hsl(85, 70%, 55%)", "hsl(200, 90%, 60%)", "hsl(325, 75%, 65%)", "hsl(135, 60%, 50%)",
    "hsl(25, 80%, 60%)", "hsl(220, 70%, 70%)", "hsl(5, 75%, 65%)", "hsl(180, 65%, 55%)", "hsl(40, 85%, 60%)",
]


# =====================================================================
# PURE HELPERS
# =====================================================================

def format_minutes(minutes: int) -> str:
    hours, mins = divmod(int(minutes), 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def name_hash(name: str) -> int:
    """
    ``h = c + ((h << 5) - h)`` over the UTF-16 code units of ``name``.

    Only the shift wraps to 32 bits, the subtraction does not, so the
    value matches what a browser computes for the same string.
    """
    units = name.encode("utf-16-le")
    h = 0
    for i in range(0, len(units), 2):
        code = units[i] | (units[i + 1] << 8)
        h = code + (_to_int32(_to_int32(h) << 5) - h)
    return h


def activity_color(name: str) -> str:
    # |h rem n| == |h| mod n, whatever the sign of h
    return ACTIVITY_COLORS[abs(name_hash(name)) % len(ACTIVITY_COLORS)]


def aggregate(logs: Iterable[ActivityLog]) -> List[AggregatedActivity]:
    """
    Group log entries by activity name.

    Returns:
        One row per activity, most minutes first; percentages are 0 when
        nothing was logged
    """
    totals: Dict[str, int] = {}
    for log in logs:
        totals[log.activity_name] = totals.get(log.activity_name, 0) + log.duration_minutes

    grand_total = sum(totals.values())
    rows = [
        AggregatedActivity(
            name=name,
            total_minutes=minutes,
            formatted=format_minutes(minutes),
            percentage=(minutes / grand_total) * 100 if grand_total > 0 else 0,
        )
        for name, minutes in totals.items()
    ]
    # Stable sort keeps first-logged order among ties
    rows.sort(key=lambda row: row.total_minutes, reverse=True)
    return rows


# =====================================================================
# SERVICE CLASS
# =====================================================================

class InsightService:
    """Read models for the dashboard, the calendar day view and the weekly chart."""

    def _day_summary(self, logs: List[ActivityLog], day: str, planned=None) -> DaySummary:
        total = sum(log.duration_minutes for log in logs)
        return DaySummary(
            date=day,
            total_minutes=total,
            formatted_total=format_minutes(total),
            activities=aggregate(logs),
            planned=[PlannedActivityOut.model_validate(p) for p in (planned or [])],
        )

    def dashboard(self, db: Session, user: User) -> DaySummary:
        day = format_day(local_today(user))
        logs = crud_activity_log.get_by_date(db, user_id=user.id, day=day)
        return self._day_summary(logs, day)

    def day_view(self, db: Session, user: User, day: date) -> DaySummary:
        day_str = format_day(day)
        logs = crud_activity_log.get_by_date(db, user_id=user.id, day=day_str)
        planned = crud_planned_activity.get_by_date_range(
            db, user_id=user.id, start=day_str, end=day_str
        )
        return self._day_summary(logs, day_str, planned)

    def weekly_analysis(
        self, db: Session, user: User, reference: Optional[date] = None
    ) -> WeeklyAnalysis:
        """
        Hours per activity for each day of the Monday-Sunday week around ``reference``.

        Args:
            reference: Any day of the week, defaults to today in the user's timezone
        """
        start, end = week_bounds(reference or local_today(user))
        logs = crud_activity_log.get_by_date_range(
            db, user_id=user.id, start=format_day(start), end=format_day(end)
        )

        days: List[WeekDay] = []
        for offset in range(7):
            current = start + timedelta(days=offset)
            day_str = format_day(current)
            hours: Dict[str, float] = {}
            for log in logs:
                if log.date == day_str:
                    hours[log.activity_name] = hours.get(log.activity_name, 0) + log.duration_minutes / 60
            days.append(WeekDay(name=WEEKDAY_NAMES[current.weekday()], date=day_str, hours=hours))

        names = sorted({log.activity_name for log in logs})
        total_minutes = sum(log.duration_minutes for log in logs)

        logger.debug(f"Weekly analysis for user {user.id}: {len(logs)} logs, {len(names)} activities")
        return WeeklyAnalysis(
            week_start=start,
            week_end=end,
            days=days,
            activities=names,
            colors={name: activity_color(name) for name in names},
            total_hours=round(total_minutes / 60, 2),
        )


insight_service = InsightService()
