"""Tests for the default catalogue and saved activities."""


class TestDefaultActivities:

    def test_catalogue(self, client):
        response = client.get("/activities/defaults")

        assert response.status_code == 200
        names = [a["name"] for a in response.json()]
        assert names == [
            "Deep Work",
            "Shallow Work",
            "Exercise",
            "Take a Walk",
            "Talk to Family/Friends",
            "Read a Book",
            "Relax / Break",
            "Gardening",
        ]


class TestSavedActivities:

    def test_add_trims_name(self, client, auth_headers):
        response = client.post("/activities/saved", headers=auth_headers, json={"name": "  Reading  "})

        assert response.status_code == 201
        assert response.json()["activity_name"] == "Reading"

    def test_blank_name_rejected(self, client, auth_headers):
        response = client.post("/activities/saved", headers=auth_headers, json={"name": "   "})

        assert response.status_code == 422

    def test_duplicate_is_conflict(self, client, auth_headers):
        client.post("/activities/saved", headers=auth_headers, json={"name": "Reading"})

        response = client.post("/activities/saved", headers=auth_headers, json={"name": "reading"})

        assert response.status_code == 409
        assert response.json()["detail"] == "You're already tracking \"reading\"."

    def test_list_sorted_by_name(self, client, auth_headers):
        for name in ("Yoga", "Cooking", "Music"):
            client.post("/activities/saved", headers=auth_headers, json={"name": name})

        response = client.get("/activities/saved", headers=auth_headers)

        assert [a["activity_name"] for a in response.json()] == ["Cooking", "Music", "Yoga"]

    def test_lists_are_per_user(self, client, auth_headers, make_user, make_headers):
        client.post("/activities/saved", headers=auth_headers, json={"name": "Yoga"})
        other = make_headers(make_user(email="bob@dayflow.app"))

        assert client.get("/activities/saved", headers=other).json() == []

    def test_remove(self, client, auth_headers):
        created = client.post("/activities/saved", headers=auth_headers, json={"name": "Yoga"}).json()

        response = client.delete(f"/activities/saved/{created['id']}", headers=auth_headers)

        assert response.status_code == 204
        assert client.get("/activities/saved", headers=auth_headers).json() == []

    def test_cannot_remove_someone_elses(self, client, auth_headers, make_user, make_headers):
        created = client.post("/activities/saved", headers=auth_headers, json={"name": "Yoga"}).json()
        other = make_headers(make_user(email="bob@dayflow.app"))

        response = client.delete(f"/activities/saved/{created['id']}", headers=other)

        assert response.status_code == 404
