# services/report.py
import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from dayflow.ai import generate_daily_summary as summary_flow
from dayflow.core.clock import local_today
from dayflow.models.user import User
from dayflow.schemas.ai import DailySummary, EmailResult, SendSummaryEmailRequest
from dayflow.services import email as email_service

logger = logging.getLogger(__name__)


def display_name_for(user: User) -> str:
    """Display name, else the local part of the e-mail."""
    if user.display_name and user.display_name.strip():
        return user.display_name.strip()
    return user.email.split("@", 1)[0]


class ReportService:
    """AI daily report and its e-mail copy."""

    def daily_summary(self, db: Session, user: User, day: Optional[date] = None) -> DailySummary:
        day = day or local_today(user)
        logger.info(f"Generating daily summary for user {user.id} on {day}")
        return summary_flow.generate_daily_summary(db, user, day)

    def email_summary(self, db: Session, user: User, request: SendSummaryEmailRequest) -> EmailResult:
        """
        E-mail the summary the user is looking at, generating it when none is sent.
        """
        summary = request.summary or self.daily_summary(db, user, request.date)
        return email_service.send_summary_email(user.email, display_name_for(user), summary)


report_service = ReportService()
