# services/airtable.py
"""Mirror of saved activity logs into an Airtable table."""
import logging
from typing import Iterable, List, Tuple
from urllib.parse import quote

import requests

from dayflow.core.config import settings
from dayflow.schemas.logs import ExportResult

logger = logging.getLogger(__name__)

AIRTABLE_API = "https://api.airtable.com/v0"
# Airtable accepts at most 10 records per create request
BATCH_SIZE = 10

MISSING_CONFIG = "Airtable configuration is missing on the server."
EXPORT_FAILED = "Failed to save activities to Airtable."


def is_configured() -> bool:
    return bool(settings.AIRTABLE_API_KEY and settings.AIRTABLE_BASE_ID and settings.AIRTABLE_TABLE_NAME)


def build_records(entries: Iterable[Tuple[str, int]], day: str) -> List[dict]:
    return [
        {"fields": {"Activity": name, "Duration (minutes)": minutes, "Date": day}}
        for name, minutes in entries
    ]


def save_activities_to_airtable(entries: Iterable[Tuple[str, int]], day: str) -> ExportResult:
    """
    Create one Airtable record per (activity name, minutes) pair.

    Args:
        entries: Activity name and duration pairs
        day: Date written into the "Date" field (YYYY-MM-DD)

    Returns:
        ExportResult; failures are reported, never raised
    """
    if not is_configured():
        logger.error("Airtable environment variables are not set.")
        return ExportResult(success=False, error=MISSING_CONFIG)

    records = build_records(entries, day)
    url = f"{AIRTABLE_API}/{settings.AIRTABLE_BASE_ID}/{quote(settings.AIRTABLE_TABLE_NAME)}"
    headers = {"Authorization": f"Bearer {settings.AIRTABLE_API_KEY}"}

    created = 0
    try:
        for start in range(0, len(records), BATCH_SIZE):
            batch = records[start:start + BATCH_SIZE]
            response = requests.post(
                url,
                json={"records": batch},
                headers=headers,
                timeout=settings.HTTP_TIMEOUT_SECONDS,
            )
            response.raise_for_status()
            created += len(batch)
    except requests.RequestException as e:
        logger.error(f"Error saving to Airtable after {created} records: {e}")
        return ExportResult(success=False, error=EXPORT_FAILED, records=created)

    logger.info(f"Exported {created} activities for {day} to Airtable")
    return ExportResult(success=True, records=created)
