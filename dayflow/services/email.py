# services/email.py
"""Transactional e-mail through the Resend HTTP API."""
import logging
from html import escape
from typing import List

import requests

from dayflow.core.config import settings
from dayflow.schemas.ai import DailySummary, EmailResult

logger = logging.getLogger(__name__)

RESEND_URL = "https://api.resend.com/emails"

NOT_CONFIGURED = "Email server is not configured."
SEND_FAILED = "Failed to send email."


def _post_email(to: List[str], subject: str, html: str) -> None:
    """Send one message; raises ``requests.RequestException`` on any failure."""
    payload = {
        "from": settings.EMAIL_FROM,
        "to": to,
        "subject": subject,
        "html": html,
    }
    response = requests.post(
        RESEND_URL,
        json=payload,
        headers={"Authorization": f"Bearer {settings.RESEND_API_KEY}"},
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )
    response.raise_for_status()


def format_summary_html(summary: DailySummary, user_name: str) -> str:
    insights = "".join(f"<li>{escape(item)}</li>" for item in summary.key_insights)
    suggestions = "".join(
        f"<p><strong>{escape(s.suggestion)}</strong><br>{escape(s.reasoning)}</p>"
        for s in summary.suggestions_for_tomorrow
    )
    productivity = summary.productivity_analysis
    most_productive = escape(productivity.most_productive_activity or "N/A")

    return f"""
    <div style="font-family: sans-serif; line-height: 1.6;">
      <h2>Hello {escape(user_name)}, here is your daily summary!</h2>
      <p>{escape(summary.overall_summary)}</p>

      <h3>Key Insights</h3>
      <ul>
        {insights}
      </ul>

      <h3>Suggestions for Tomorrow</h3>
      {suggestions}

      <hr>

      <h4>Productivity Analysis</h4>
      <p><strong>Most Productive Activity:</strong> {most_productive}</p>
      <p><strong>Total Productive Hours:</strong> {productivity.total_productive_hours:.1f}</p>

      <h4>Mood Analysis</h4>
      <p>{escape(summary.mood_analysis.trend)}</p>

      <p><em>Keep up the great work!</em></p>
    </div>
    """


def send_summary_email(user_email: str, user_name: str, summary: DailySummary) -> EmailResult:
    """
    E-mail a daily summary. Never raises: the outcome is reported in the result.
    """
    if not settings.RESEND_API_KEY:
        logger.error("Resend API key is not configured.")
        return EmailResult(success=False, message=NOT_CONFIGURED)

    try:
        _post_email([user_email], "Your DayFlow Daily Summary", format_summary_html(summary, user_name))
    except requests.RequestException as e:
        logger.error(f"Error sending summary email to {user_email}: {e}")
        return EmailResult(success=False, message=SEND_FAILED)

    logger.info(f"Summary email sent to {user_email}")
    return EmailResult(success=True, message=f"Email sent successfully to {user_email}")


def send_password_reset_email(user_email: str, reset_link: str) -> bool:
    if not settings.RESEND_API_KEY:
        logger.warning("Password reset requested but the email server is not configured.")
        return False

    link = escape(reset_link)
    html = (
        "<p>We received a request to reset your DayFlow password.</p>"
        f"<p><a href=\"{link}\">{link}</a></p>"
        "<p>If you did not ask for this, you can ignore this e-mail.</p>"
    )
    try:
        _post_email([user_email], "Reset your DayFlow password", html)
    except requests.RequestException as e:
        logger.error(f"Error sending password reset email to {user_email}: {e}")
        return False
    return True
