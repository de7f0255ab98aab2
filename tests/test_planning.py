"""Tests for planned activities."""


def plan(client, headers, **fields):
    return client.post("/planning", headers=headers, json=fields)


class TestPlanning:

    def test_plan_with_time(self, client, auth_headers):
        response = plan(client, auth_headers, activity_name="Exercise", date="2024-03-04", time="07:30")

        assert response.status_code == 201
        body = response.json()
        assert body["date"] == "2024-03-04"
        assert body["time"] == "07:30"

    def test_time_is_optional(self, client, auth_headers):
        response = plan(client, auth_headers, activity_name="Exercise", date="2024-03-04")

        assert response.status_code == 201
        assert response.json()["time"] is None

    def test_invalid_time(self, client, auth_headers):
        response = plan(client, auth_headers, activity_name="Exercise", date="2024-03-04", time="7:30pm")

        assert response.status_code == 422

    def test_blank_name(self, client, auth_headers):
        response = plan(client, auth_headers, activity_name="   ", date="2024-03-04")

        assert response.status_code == 422

    def test_list_for_date_orders_by_time(self, client, auth_headers):
        plan(client, auth_headers, activity_name="Gardening", date="2024-03-04", time="17:00")
        plan(client, auth_headers, activity_name="Exercise", date="2024-03-04", time="07:30")
        plan(client, auth_headers, activity_name="Read a Book", date="2024-03-04")
        plan(client, auth_headers, activity_name="Deep Work", date="2024-03-05", time="09:00")

        response = client.get("/planning", headers=auth_headers, params={"date": "2024-03-04"})

        assert [p["activity_name"] for p in response.json()] == ["Read a Book", "Exercise", "Gardening"]

    def test_list_range(self, client, auth_headers):
        plan(client, auth_headers, activity_name="Exercise", date="2024-03-04")
        plan(client, auth_headers, activity_name="Deep Work", date="2024-03-06")
        plan(client, auth_headers, activity_name="Gardening", date="2024-03-09")

        response = client.get(
            "/planning", headers=auth_headers, params={"start": "2024-03-04", "end": "2024-03-06"}
        )

        assert [p["activity_name"] for p in response.json()] == ["Exercise", "Deep Work"]

    def test_range_start_after_end(self, client, auth_headers):
        response = client.get(
            "/planning", headers=auth_headers, params={"start": "2024-03-06", "end": "2024-03-04"}
        )

        assert response.status_code == 422

    def test_delete(self, client, auth_headers, make_user, make_headers):
        created = plan(client, auth_headers, activity_name="Exercise", date="2024-03-04").json()
        other = make_headers(make_user(email="bob@dayflow.app"))

        assert client.delete(f"/planning/{created['id']}", headers=other).status_code == 404
        assert client.delete(f"/planning/{created['id']}", headers=auth_headers).status_code == 204
        assert client.get("/planning", headers=auth_headers, params={"date": "2024-03-04"}).json() == []
