"""Tests for aggregation, colours, the dashboard and the weekly analysis."""

from types import SimpleNamespace
from unittest.mock import patch

import pytest

from dayflow.services.insights import (
    ACTIVITY_COLORS,
    _to_int32,
    activity_color,
    aggregate,
    format_minutes,
    name_hash,
)


def log(name, minutes):
    return SimpleNamespace(activity_name=name, duration_minutes=minutes)


class TestFormatMinutes:

    @pytest.mark.parametrize(
        "minutes, expected",
        [(0, "0m"), (45, "45m"), (60, "1h 0m"), (135, "2h 15m")],
    )
    def test_format(self, minutes, expected):
        assert format_minutes(minutes) == expected


class TestAggregate:

    def test_groups_and_sorts(self):
        rows = aggregate([log("Deep Work", 60), log("Exercise", 30), log("Deep Work", 30)])

        assert [(r.name, r.total_minutes) for r in rows] == [("Deep Work", 90), ("Exercise", 30)]
        assert rows[0].percentage == pytest.approx(75.0)
        assert rows[1].percentage == pytest.approx(25.0)
        assert rows[0].formatted == "1h 30m"

    def test_empty(self):
        assert aggregate([]) == []

    def test_zero_total_gives_zero_percentage(self):
        rows = aggregate([log("Deep Work", 0)])

        assert rows[0].percentage == 0


class TestActivityColor:

    def test_small_hash(self):
        # 98 + ((97 << 5) - 97)
        assert name_hash("ab") == 3105
        assert activity_color("ab") == ACTIVITY_COLORS[3105 % 30]

    def test_shift_wraps_to_32_bits(self):
        assert _to_int32(2 ** 31) == -(2 ** 31)
        assert _to_int32(2 ** 32 + 5) == 5

    def test_stable_and_in_palette(self):
        name = "Talk to Family/Friends"

        assert activity_color(name) == activity_color(name)
        assert activity_color(name) in ACTIVITY_COLORS

    @patch("dayflow.services.insights.name_hash", return_value=-31)
    def test_negative_hash_uses_absolute_index(self, mock_hash):
        assert activity_color("anything") == ACTIVITY_COLORS[1]


def save(client, headers, day, *entries):
    response = client.post(
        "/logs/activities",
        headers=headers,
        json={"date": day, "activities": [{"name": n, "duration": m} for n, m in entries]},
    )
    assert response.status_code == 201


class TestDashboardAndDayView:

    def test_dashboard_empty(self, client, auth_headers):
        response = client.get("/insights/dashboard", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["activities"] == []
        assert response.json()["formatted_total"] == "0m"

    def test_dashboard_today(self, client, auth_headers):
        client.post(
            "/logs/activities",
            headers=auth_headers,
            json={"activities": [{"name": "Exercise", "duration": 30}, {"name": "Deep Work", "duration": 90}]},
        )

        body = client.get("/insights/dashboard", headers=auth_headers).json()

        assert [a["name"] for a in body["activities"]] == ["Deep Work", "Exercise"]
        assert body["total_minutes"] == 120
        assert body["formatted_total"] == "2h 0m"

    def test_day_view_includes_plans(self, client, auth_headers):
        save(client, auth_headers, "2024-03-04", ("Deep Work", 60))
        client.post(
            "/planning",
            headers=auth_headers,
            json={"activity_name": "Gardening", "date": "2024-03-04", "time": "17:00"},
        )

        body = client.get("/insights/day/2024-03-04", headers=auth_headers).json()

        assert body["activities"][0]["name"] == "Deep Work"
        assert [p["activity_name"] for p in body["planned"]] == ["Gardening"]


class TestWeeklyAnalysis:

    def test_week_rows(self, client, auth_headers):
        # 2024-03-04 is a Monday
        save(client, auth_headers, "2024-03-04", ("Deep Work", 90), ("Exercise", 30))
        save(client, auth_headers, "2024-03-06", ("Deep Work", 60))
        save(client, auth_headers, "2024-03-11", ("Gardening", 60))

        response = client.get("/insights/weekly", headers=auth_headers, params={"date": "2024-03-07"})

        assert response.status_code == 200
        body = response.json()
        assert body["week_start"] == "2024-03-04"
        assert body["week_end"] == "2024-03-10"
        assert [d["name"] for d in body["days"]] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        assert body["days"][0]["hours"] == {"Deep Work": 1.5, "Exercise": 0.5}
        assert body["days"][1]["hours"] == {}
        assert body["days"][2]["hours"] == {"Deep Work": 1.0}
        assert body["activities"] == ["Deep Work", "Exercise"]
        assert body["colors"]["Deep Work"] == activity_color("Deep Work")
        assert body["total_hours"] == 3.0

    def test_empty_week(self, client, auth_headers):
        body = client.get("/insights/weekly", headers=auth_headers, params={"date": "2024-03-07"}).json()

        assert body["activities"] == []
        assert len(body["days"]) == 7
