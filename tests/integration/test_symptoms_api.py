"""Integration tests for the symptoms API."""


def _create(client, **overrides):
    payload = {
        "bristol_type": 6,
        "symptoms": ["bloating"],
        "urgency": 2,
        "pain": 1,
        "occurred_at": "2024-06-10T18:00:00Z",
    }
    payload.update(overrides)
    return client.post("/symptoms", json=payload)


class TestSymptomsApi:
    def test_create(self, client):
        response = _create(client)

        assert response.status_code == 201
        data = response.json()
        assert data["bristol_type"] == 6
        assert data["urgency"] == 2
        assert data["blood"] == 0
        assert data["severity"] is None
        assert data["symptoms"] == ["bloating"]

    def test_out_of_range_rejected(self, client):
        assert _create(client, bristol_type=8).status_code == 422
        assert _create(client, urgency=4).status_code == 422
        assert _create(client, blood=-1).status_code == 422
        assert _create(client, severity=0).status_code == 422

    def test_list_and_delete(self, client):
        first = _create(client, occurred_at="2024-06-10T07:00:00Z").json()
        second = _create(client).json()

        listed = client.get("/symptoms").json()
        assert [s["id"] for s in listed] == [second["id"], first["id"]]

        assert client.delete(f"/symptoms/{first['id']}").status_code == 200
        assert client.delete(f"/symptoms/{first['id']}").status_code == 404
        assert [s["id"] for s in client.get("/symptoms").json()] == [second["id"]]

    def test_filter_by_range(self, client):
        _create(client, occurred_at="2024-06-09T18:00:00Z")
        latest = _create(client).json()

        response = client.get("/symptoms", params={"start": "2024-06-10T00:00:00Z"})

        assert [s["id"] for s in response.json()] == [latest["id"]]
