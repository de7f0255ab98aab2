# dayflow/models/__init__.py

from dayflow.core.config import Base

# Import all models here so metadata.create_all and app-wide imports work
from .user import User
from .activity_log import ActivityLog
from .state_log import StateLog
from .saved_activity import SavedActivity
from .planned_activity import PlannedActivity
from .notification_preference import NotificationPreference
from .google_credential import GoogleCredential

__all__ = [
    "Base",
    "User",
    "ActivityLog",
    "StateLog",
    "SavedActivity",
    "PlannedActivity",
    "NotificationPreference",
    "GoogleCredential",
]
