# dayflow/data/activity_repository.py
from enum import Enum
from typing import Dict, List, Any


# =====================================================================
# ENUMS
# =====================================================================

class ActivityKind(str, Enum):
    """Rough grouping used by the AI summary when it sums productive hours."""
    WORK = "work"
    MOVEMENT = "movement"
    CONNECTION = "connection"
    RECOVERY = "recovery"


# =====================================================================
# DEFAULT ACTIVITY CATALOGUE
# =====================================================================

ACTIVITY_REPOSITORY: List[Dict[str, Any]] = [
    {"id": "1", "name": "Deep Work", "kind": ActivityKind.WORK},
    {"id": "2", "name": "Shallow Work", "kind": ActivityKind.WORK},
    {"id": "3", "name": "Exercise", "kind": ActivityKind.MOVEMENT},
    {"id": "4", "name": "Take a Walk", "kind": ActivityKind.MOVEMENT},
    {"id": "5", "name": "Talk to Family/Friends", "kind": ActivityKind.CONNECTION},
    {"id": "6", "name": "Read a Book", "kind": ActivityKind.RECOVERY},
    {"id": "7", "name": "Relax / Break", "kind": ActivityKind.RECOVERY},
    {"id": "8", "name": "Gardening", "kind": ActivityKind.RECOVERY},
]


def default_activity_names() -> List[str]:
    return [activity["name"] for activity in ACTIVITY_REPOSITORY]


def find_default_activity(name: str) -> Dict[str, Any] | None:
    for activity in ACTIVITY_REPOSITORY:
        if activity["name"] == name:
            return activity
    return None
