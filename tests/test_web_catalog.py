"""Tests for skills, behaviors, exercises, links and dogs endpoints."""

import pytest


@pytest.fixture
def skill_id(client):
    return client.post("/skills", json={"name": "Area search"}).json()["id"]


@pytest.fixture
def behavior_id(client, skill_id):
    response = client.post("/behaviors", json={"skill_id": skill_id, "name": "Bark alert"})
    return response.json()["id"]


@pytest.fixture
def exercise_id(client):
    return client.post("/exercises", json={"name": "Runaway"}).json()["id"]


class TestSkillsEndpoints:
    """Tests for /skills."""

    def test_create_skill(self, client):
        response = client.post("/skills", json={"name": "Trailing", "description": "Scent trail"})
        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["name"] == "Trailing"
        assert data["description"] == "Scent trail"

    def test_duplicate_skill_is_409(self, client):
        """Creating the same skill twice returns 409."""
        client.post("/skills", json={"name": "Trailing"})
        response = client.post("/skills", json={"name": "Trailing"})
        assert response.status_code == 409
        assert "error" in response.json()

    def test_blank_name_is_400(self, client):
        response = client.post("/skills", json={"name": "  "})
        assert response.status_code == 400

    def test_list_is_plain_array(self, client):
        client.post("/skills", json={"name": "B"})
        client.post("/skills", json={"name": "A"})
        response = client.get("/skills")
        assert response.status_code == 200
        assert [s["name"] for s in response.json()] == ["A", "B"]

    def test_update_and_delete(self, client, skill_id):
        response = client.put(f"/skills/{skill_id}", json={"name": "Wide area"})
        assert response.status_code == 200
        assert response.json()["name"] == "Wide area"

        assert client.delete(f"/skills/{skill_id}").status_code == 204
        assert client.get(f"/skills/{skill_id}").status_code == 404

    def test_delete_referenced_skill_is_409(self, client, skill_id, behavior_id):
        assert client.delete(f"/skills/{skill_id}").status_code == 409

    def test_delete_missing_is_404(self, client):
        assert client.delete("/skills/99").status_code == 404


class TestBehaviorsEndpoints:
    """Tests for /behaviors."""

    def test_create_with_unknown_skill_is_400(self, client):
        response = client.post("/behaviors", json={"skill_id": 99, "name": "Bark"})
        assert response.status_code == 400

    def test_filter_by_skill(self, client, skill_id, behavior_id):
        other = client.post("/skills", json={"name": "Rubble"}).json()["id"]
        client.post("/behaviors", json={"skill_id": other, "name": "Scratch"})

        response = client.get("/behaviors", params={"skill_id": skill_id})
        assert [b["id"] for b in response.json()] == [behavior_id]
        assert len(client.get("/behaviors").json()) == 2

    def test_update_behavior(self, client, behavior_id):
        response = client.put(f"/behaviors/{behavior_id}", json={"name": "Bark and stay"})
        assert response.status_code == 200
        assert response.json()["name"] == "Bark and stay"


class TestLinksEndpoints:
    """Tests for /behavior-exercises and the exercise filter."""

    def test_strength_6_is_400(self, client, behavior_id, exercise_id):
        response = client.post(
            "/behavior-exercises",
            json={"behavior_id": behavior_id, "exercise_id": exercise_id, "strength": 6},
        )
        assert response.status_code == 400

    def test_link_twice_overwrites(self, client, behavior_id, exercise_id):
        """Posting strength 3 twice leaves one link with strength 3."""
        body = {"behavior_id": behavior_id, "exercise_id": exercise_id, "strength": 3}
        assert client.post("/behavior-exercises", json=body).status_code == 200
        response = client.post("/behavior-exercises", json=body)
        assert response.status_code == 200
        assert response.json() == body

        links = client.get("/behavior-exercises").json()
        assert links == [body]

    def test_exercises_filtered_by_behavior(self, client, behavior_id, exercise_id):
        client.post("/exercises", json={"name": "Blind search"})
        client.post(
            "/behavior-exercises",
            json={"behavior_id": behavior_id, "exercise_id": exercise_id, "strength": 5},
        )

        response = client.get("/exercises", params={"behavior_id": behavior_id})
        assert [e["id"] for e in response.json()] == [exercise_id]


class TestDogsEndpoints:
    """Tests for /dogs."""

    def test_create_dog(self, client):
        response = client.post(
            "/dogs",
            json={"name": "Rex", "callname": "Rexy", "birthdate": "2020-05-01", "notes": "shy"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["birthdate"] == "2020-05-01"
        assert data["notes"] == "shy"

    def test_invalid_birthdate_is_400(self, client):
        response = client.post("/dogs", json={"name": "Rex", "birthdate": "sometime"})
        assert response.status_code == 400

    def test_update_and_delete(self, client):
        dog_id = client.post("/dogs", json={"name": "Rex"}).json()["id"]

        response = client.put(f"/dogs/{dog_id}", json={"name": "Rex", "callname": "R"})
        assert response.status_code == 200
        assert response.json()["callname"] == "R"

        assert client.delete(f"/dogs/{dog_id}").status_code == 204
        assert client.put(f"/dogs/{dog_id}", json={"name": "Rex"}).status_code == 404

    def test_proficiency_of_unknown_dog_is_404(self, client):
        assert client.get("/dogs/5/proficiency").status_code == 404
