"""Tests for exporting activity logs to Airtable."""

from unittest.mock import patch

import pytest
import requests

from dayflow.core.config import settings
from dayflow.services import airtable


@pytest.fixture
def configured():
    with patch.multiple(
        settings,
        AIRTABLE_API_KEY="pat123",
        AIRTABLE_BASE_ID="appBase",
        AIRTABLE_TABLE_NAME="Daily Log",
    ):
        yield


def test_build_records():
    assert airtable.build_records([("Exercise", 45)], "2024-03-04") == [
        {"fields": {"Activity": "Exercise", "Duration (minutes)": 45, "Date": "2024-03-04"}}
    ]


def test_missing_configuration():
    result = airtable.save_activities_to_airtable([("Exercise", 45)], "2024-03-04")

    assert result.success is False
    assert result.error == "Airtable configuration is missing on the server."


@patch("dayflow.services.airtable.requests.post")
def test_records_sent_in_batches(mock_post, configured):
    entries = [(f"Activity {i}", i + 1) for i in range(23)]

    result = airtable.save_activities_to_airtable(entries, "2024-03-04")

    assert result.success is True
    assert result.records == 23
    assert [len(c.kwargs["json"]["records"]) for c in mock_post.call_args_list] == [10, 10, 3]
    assert mock_post.call_args.args[0] == "https://api.airtable.com/v0/appBase/Daily%20Log"


@patch("dayflow.services.airtable.requests.post")
def test_failure_reports_records_created(mock_post, configured):
    ok = mock_post.return_value
    mock_post.side_effect = [ok, requests.HTTPError("422")]

    result = airtable.save_activities_to_airtable([(f"A{i}", 5) for i in range(15)], "2024-03-04")

    assert result.success is False
    assert result.error == "Failed to save activities to Airtable."
    assert result.records == 10


class TestExportEndpoint:

    def test_empty_day(self, client, auth_headers):
        response = client.post("/logs/export/airtable", params={"date": "2024-03-04"}, headers=auth_headers)

        assert response.status_code == 422
        assert response.json()["detail"] == "No activities to export."

    @patch("dayflow.services.airtable.requests.post")
    def test_exports_saved_day(self, mock_post, client, auth_headers, configured):
        client.post(
            "/logs/activities",
            json={"date": "2024-03-04", "activities": [{"name": "Exercise", "duration": 30}]},
            headers=auth_headers,
        )

        response = client.post("/logs/export/airtable", params={"date": "2024-03-04"}, headers=auth_headers)

        assert response.json() == {"success": True, "error": None, "records": 1}
        sent = mock_post.call_args.kwargs["json"]["records"][0]["fields"]
        assert sent == {"Activity": "Exercise", "Duration (minutes)": 30, "Date": "2024-03-04"}
