# dayflow/schemas/__init__.py

from .user import (
    SignupRequest,
    UserUpdate,
    PasswordChange,
    UserOut,
    UserOutDetailed,
    LoginRequest,
    TokenResponse,
    RefreshTokenRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    SuccessResponse,
)
from .logs import (
    ActivityEntry,
    SaveDayLogRequest,
    ActivityLogOut,
    SaveDayLogResponse,
    MoodLogCreate,
    MoodLogOut,
    ExportResult,
)
from .activities import DefaultActivity, SavedActivityCreate, SavedActivityOut
from .planning import PlannedActivityCreate, PlannedActivityOut
from .insights import AggregatedActivity, DaySummary, WeekDay, WeeklyAnalysis
from .notifications import (
    NotificationPreferenceUpdate,
    NotificationPreferenceOut,
    ReminderTimeRequest,
    DueReminder,
    CalendarStatus,
)


__all__ = [
    # Auth
    "SignupRequest", "UserUpdate", "PasswordChange", "UserOut", "UserOutDetailed",
    "LoginRequest", "TokenResponse", "RefreshTokenRequest",
    "ForgotPasswordRequest", "ResetPasswordRequest", "SuccessResponse",

    # Logs
    "ActivityEntry", "SaveDayLogRequest", "ActivityLogOut", "SaveDayLogResponse",
    "MoodLogCreate", "MoodLogOut", "ExportResult",

    # Activities & planning
    "DefaultActivity", "SavedActivityCreate", "SavedActivityOut",
    "PlannedActivityCreate", "PlannedActivityOut",

    # Insights
    "AggregatedActivity", "DaySummary", "WeekDay", "WeeklyAnalysis",

    # Notifications
    "NotificationPreferenceUpdate", "NotificationPreferenceOut",
    "ReminderTimeRequest", "DueReminder", "CalendarStatus",
]
