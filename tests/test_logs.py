"""Tests for the daily log: activity minutes, mood check-ins and exports."""

from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from dayflow.core.clock import format_day, local_today
from dayflow.schemas.logs import ExportResult


class TestSaveDayLog:

    def test_saves_entries_with_positive_duration(self, client, auth_headers):
        response = client.post(
            "/logs/activities",
            headers=auth_headers,
            json={
                "date": "2024-03-04",
                "activities": [
                    {"name": "Deep Work", "duration": 90},
                    {"name": "Exercise", "duration": 0},
                    {"name": "Read a Book", "duration": 30},
                ],
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["saved"] == 2
        assert body["date"] == "2024-03-04"
        assert {log["activity_name"] for log in body["logs"]} == {"Deep Work", "Read a Book"}
        assert all(log["entry_type"] == "Log" for log in body["logs"])
        assert body["airtable"] is None

    def test_all_zero_is_rejected(self, client, auth_headers):
        response = client.post(
            "/logs/activities",
            headers=auth_headers,
            json={"activities": [{"name": "Deep Work", "duration": 0}]},
        )

        assert response.status_code == 422
        assert response.json()["detail"] == "No activities to save."

    def test_negative_duration_rejected(self, client, auth_headers):
        response = client.post(
            "/logs/activities",
            headers=auth_headers,
            json={"activities": [{"name": "Deep Work", "duration": -5}]},
        )

        assert response.status_code == 422

    def test_date_defaults_to_users_today(self, client, make_user, make_headers):
        user = make_user(email="kiri@dayflow.app", timezone="Pacific/Kiritimati")

        response = client.post(
            "/logs/activities",
            headers=make_headers(user),
            json={"activities": [{"name": "Deep Work", "duration": 60}]},
        )

        assert response.json()["date"] == format_day(local_today(user))

    def test_list_by_date(self, client, auth_headers):
        client.post(
            "/logs/activities",
            headers=auth_headers,
            json={"date": "2024-03-04", "activities": [{"name": "Deep Work", "duration": 60}]},
        )
        client.post(
            "/logs/activities",
            headers=auth_headers,
            json={"date": "2024-03-05", "activities": [{"name": "Exercise", "duration": 30}]},
        )

        response = client.get("/logs/activities", headers=auth_headers, params={"date": "2024-03-05"})

        assert [log["activity_name"] for log in response.json()] == ["Exercise"]

    def test_delete_log(self, client, auth_headers, make_user, make_headers):
        saved = client.post(
            "/logs/activities",
            headers=auth_headers,
            json={"date": "2024-03-04", "activities": [{"name": "Deep Work", "duration": 60}]},
        ).json()
        log_id = saved["logs"][0]["id"]
        other = make_headers(make_user(email="bob@dayflow.app"))

        assert client.delete(f"/logs/activities/{log_id}", headers=other).status_code == 404
        assert client.delete(f"/logs/activities/{log_id}", headers=auth_headers).status_code == 204


class TestAirtableExport:

    def test_export_flag_reports_missing_configuration(self, client, auth_headers):
        response = client.post(
            "/logs/activities",
            headers=auth_headers,
            json={
                "date": "2024-03-04",
                "activities": [{"name": "Deep Work", "duration": 60}],
                "export_to_airtable": True,
            },
        )

        assert response.status_code == 201
        assert response.json()["airtable"] == {
            "success": False,
            "error": "Airtable configuration is missing on the server.",
            "records": 0,
        }

    @patch("dayflow.services.daily_log.airtable.save_activities_to_airtable")
    def test_export_saved_day(self, mock_export, client, auth_headers):
        mock_export.return_value = ExportResult(success=True, records=1)
        client.post(
            "/logs/activities",
            headers=auth_headers,
            json={"date": "2024-03-04", "activities": [{"name": "Deep Work", "duration": 60}]},
        )

        response = client.post("/logs/export/airtable", headers=auth_headers, params={"date": "2024-03-04"})

        assert response.status_code == 200
        assert response.json()["success"] is True
        mock_export.assert_called_once_with([("Deep Work", 60)], "2024-03-04")

    def test_export_empty_day(self, client, auth_headers):
        response = client.post("/logs/export/airtable", headers=auth_headers, params={"date": "2024-03-04"})

        assert response.status_code == 422


class TestMoodLogs:

    def test_save_mood(self, client, auth_headers):
        response = client.post(
            "/logs/mood",
            headers=auth_headers,
            json={"energy": 7, "focus": 6, "mood": 8, "context": "After a walk"},
        )

        assert response.status_code == 201
        body = response.json()
        assert (body["energy"], body["focus"], body["mood"]) == (7, 6, 8)
        assert body["check_in_time"]

    def test_mood_out_of_range(self, client, auth_headers):
        response = client.post("/logs/mood", headers=auth_headers, json={"energy": 11, "focus": 5, "mood": 5})

        assert response.status_code == 422

    def test_list_today(self, client, auth_headers):
        client.post("/logs/mood", headers=auth_headers, json={"energy": 4, "focus": 5, "mood": 6})

        response = client.get("/logs/mood", headers=auth_headers)

        assert len(response.json()) == 1

    def test_list_other_day_is_empty(self, client, auth_headers):
        client.post("/logs/mood", headers=auth_headers, json={"energy": 4, "focus": 5, "mood": 6})
        yesterday = datetime.now(timezone.utc).date() - timedelta(days=1)

        response = client.get("/logs/mood", headers=auth_headers, params={"date": yesterday.isoformat()})

        assert response.json() == []


class TestUnloggedTimeSuggestions:

    @patch("dayflow.ai.flow.GeminiClient.generate_json")
    def test_suggestions(self, mock_generate, client, auth_headers):
        mock_generate.return_value = '[{"activity": "Take a Walk", "reasoning": "You walk after lunch."}]'

        response = client.post(
            "/logs/unlogged-time/suggestions",
            headers=auth_headers,
            json={"start": "13:00", "end": "14:00", "date": date(2024, 3, 4).isoformat()},
        )

        assert response.status_code == 200
        assert response.json() == [{"activity": "Take a Walk", "reasoning": "You walk after lunch."}]
        prompt = mock_generate.call_args.args[0]
        assert "From 13:00 to 14:00" in prompt
        # No saved activities: the default catalogue is offered
        assert "Deep Work" in prompt

    def test_invalid_time(self, client, auth_headers):
        response = client.post(
            "/logs/unlogged-time/suggestions",
            headers=auth_headers,
            json={"start": "1pm", "end": "14:00"},
        )

        assert response.status_code == 422

    @pytest.mark.parametrize("start, end", [("15:00", "14:00"), ("14:00", "14:00")])
    @patch("dayflow.ai.flow.GeminiClient.generate_json")
    def test_inverted_gap_rejected(self, mock_generate, client, auth_headers, start, end):
        response = client.post(
            "/logs/unlogged-time/suggestions",
            headers=auth_headers,
            json={"start": start, "end": end},
        )

        assert response.status_code == 422
        mock_generate.assert_not_called()

    def test_not_configured(self, client, auth_headers):
        response = client.post(
            "/logs/unlogged-time/suggestions",
            headers=auth_headers,
            json={"start": "13:00", "end": "14:00"},
        )

        assert response.status_code == 503
