"""Tests for the health goal CRUD endpoints."""

import uuid

import pytest
from httpx import ASGITransport, AsyncClient

from goal_service.main import create_app

TARGET_DATE = "2025-12-31T00:00:00.000Z"


def make_goal(**overrides) -> dict:
    goal = {
        "userId": "user-123",
        "title": "Lose Weight",
        "description": "Lose 10 pounds",
        "targetDate": TARGET_DATE,
        "status": "active",
    }
    goal.update(overrides)
    return {key: value for key, value in goal.items() if value is not None}


async def create(client: AsyncClient, **overrides) -> dict:
    response = await client.post("/resource", json=make_goal(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


class TestListGoals:
    """GET /resource"""

    @pytest.mark.asyncio
    async def test_empty_initially(self, client: AsyncClient):
        response = await client.get("/resource")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_returns_created_goals(self, client: AsyncClient):
        created = await create(client)

        response = await client.get("/resource")

        assert response.status_code == 200
        assert response.json() == [created]

    @pytest.mark.asyncio
    async def test_preserves_insertion_order(self, client: AsyncClient):
        titles = ["First goal", "Second goal", "Third goal"]
        for title in titles:
            await create(client, title=title)

        response = await client.get("/resource")

        assert [goal["title"] for goal in response.json()] == titles

    @pytest.mark.asyncio
    async def test_trailing_slash(self, client: AsyncClient):
        await create(client)

        response = await client.get("/resource/")

        assert response.status_code == 200
        assert len(response.json()) == 1

    @pytest.mark.asyncio
    async def test_separate_apps_do_not_share_state(self, client: AsyncClient):
        await create(client)

        other = create_app()
        async with AsyncClient(transport=ASGITransport(app=other), base_url="http://other") as ac:
            response = await ac.get("/resource")

        assert response.json() == []


class TestCreateGoal:
    """POST /resource"""

    @pytest.mark.asyncio
    async def test_create_with_all_fields(self, client: AsyncClient):
        goal = make_goal(
            userId="user-456",
            title="Build Muscle",
            description="Gain 10 pounds of muscle",
            targetDate="2025-06-30T00:00:00.000Z",
        )

        response = await client.post("/resource", json=goal)

        assert response.status_code == 201
        data = response.json()
        assert uuid.UUID(data["id"])
        assert data["userId"] == "user-456"
        assert data["title"] == "Build Muscle"
        assert data["description"] == "Gain 10 pounds of muscle"
        assert data["targetDate"] == "2025-06-30T00:00:00.000Z"
        assert data["status"] == "active"

    @pytest.mark.asyncio
    async def test_create_with_minimal_fields(self, client: AsyncClient):
        response = await client.post(
            "/resource",
            json={"userId": "u1", "title": "Run 5K", "targetDate": "2025-05-15T00:00:00.000Z"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data == {
            "id": data["id"],
            "userId": "u1",
            "title": "Run 5K",
            "description": "",
            "targetDate": "2025-05-15T00:00:00.000Z",
            "status": "active",
        }
        assert data["id"]

    @pytest.mark.asyncio
    async def test_target_date_is_normalized(self, client: AsyncClient):
        data = await create(client, targetDate="2025-05-15")

        assert data["targetDate"] == "2025-05-15T00:00:00.000Z"

    @pytest.mark.asyncio
    async def test_accepts_all_statuses(self, client: AsyncClient):
        for status in ("active", "completed", "abandoned"):
            response = await client.post("/resource", json=make_goal(status=status))

            assert response.status_code == 201
            assert response.json()["status"] == status

    @pytest.mark.asyncio
    async def test_unique_ids(self, client: AsyncClient):
        first = await create(client, title="Goal 1")
        second = await create(client, title="Goal 2")

        assert first["id"] != second["id"]

    @pytest.mark.asyncio
    async def test_client_supplied_id_is_ignored(self, client: AsyncClient):
        data = await create(client, id="my-own-id")

        assert data["id"] != "my-own-id"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"userId": None}, "userId"),
            ({"userId": ""}, "userId"),
            ({"title": None}, "title"),
            ({"title": "Go"}, "title"),
            ({"targetDate": None}, "targetDate"),
            ({"targetDate": "not-a-date"}, "targetDate"),
            ({"status": "invalid-status"}, "status"),
            ({"description": 42}, "description"),
        ],
    )
    async def test_rejects_invalid_payload(self, client: AsyncClient, overrides, field):
        response = await client.post("/resource", json=make_goal(**overrides))

        assert response.status_code == 400
        assert set(response.json()) == {"error"}
        assert field in response.json()["error"]

        listing = await client.get("/resource")
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_reports_first_failing_field(self, client: AsyncClient):
        response = await client.post("/resource", json={"title": "Go", "status": "bogus"})

        assert response.status_code == 400
        assert response.json()["error"] == '"userId" is required'

    @pytest.mark.asyncio
    async def test_rejects_non_object_body(self, client: AsyncClient):
        response = await client.post("/resource", json=["not", "an", "object"])

        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_rejects_malformed_json(self, client: AsyncClient):
        response = await client.post(
            "/resource",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_missing_body(self, client: AsyncClient):
        response = await client.post("/resource")

        assert response.status_code == 400
        assert "userId" in response.json()["error"]


class TestReplaceGoal:
    """PUT /resource/{id}"""

    @pytest.mark.asyncio
    async def test_replaces_every_field_but_id(self, client: AsyncClient):
        original = await create(client, title="Original Title", description="Original")
        updated = {
            "userId": "new-user",
            "title": "Completely New Goal",
            "description": "New description",
            "targetDate": "2025-01-01T00:00:00.000Z",
            "status": "completed",
        }

        response = await client.put(f"/resource/{original['id']}", json=updated)

        assert response.status_code == 200
        assert response.json() == {"id": original["id"], **updated}

    @pytest.mark.asyncio
    async def test_omitted_optional_fields_reset_to_defaults(self, client: AsyncClient):
        original = await create(client, description="Something", status="completed")

        response = await client.put(
            f"/resource/{original['id']}",
            json={"userId": "user-123", "title": "Plain", "targetDate": TARGET_DATE},
        )

        assert response.status_code == 200
        assert response.json()["description"] == ""
        assert response.json()["status"] == "active"

    @pytest.mark.asyncio
    async def test_path_id_wins_over_body_id(self, client: AsyncClient):
        original = await create(client)

        response = await client.put(
            f"/resource/{original['id']}", json=make_goal(id="other-id", status="abandoned")
        )

        assert response.status_code == 200
        assert response.json()["id"] == original["id"]

    @pytest.mark.asyncio
    async def test_keeps_position(self, client: AsyncClient):
        first = await create(client, title="First")
        second = await create(client, title="Second")
        third = await create(client, title="Third")

        await client.put(f"/resource/{second['id']}", json=make_goal(title="Second, edited"))

        listing = (await client.get("/resource")).json()
        assert [goal["id"] for goal in listing] == [first["id"], second["id"], third["id"]]
        assert listing[1]["title"] == "Second, edited"

    @pytest.mark.asyncio
    async def test_unknown_id(self, client: AsyncClient):
        response = await client.put("/resource/non-existent-id", json=make_goal())

        assert response.status_code == 404
        assert response.json() == {"error": "Health goal not found"}

    @pytest.mark.asyncio
    async def test_unknown_id_wins_over_invalid_payload(self, client: AsyncClient):
        response = await client.put("/resource/non-existent-id", json={"title": "Go"})

        assert response.status_code == 404
        assert "not found" in response.json()["error"].lower()

    @pytest.mark.asyncio
    async def test_invalid_payload_leaves_goal_untouched(self, client: AsyncClient):
        original = await create(client)

        response = await client.put(
            f"/resource/{original['id']}", json={"userId": "user-123", "title": "Valid"}
        )

        assert response.status_code == 400
        assert "targetDate" in response.json()["error"]
        assert (await client.get("/resource")).json() == [original]


class TestDeleteGoal:
    """DELETE /resource/{id}"""

    @pytest.mark.asyncio
    async def test_delete_returns_removed_goal(self, client: AsyncClient):
        goal = await create(client)

        response = await client.delete(f"/resource/{goal['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Health goal deleted", "deletedGoal": [goal]}
        assert (await client.get("/resource")).json() == []

    @pytest.mark.asyncio
    async def test_delete_keeps_others_in_order(self, client: AsyncClient):
        first = await create(client, title="First")
        second = await create(client, title="Second")
        third = await create(client, title="Third")

        response = await client.delete(f"/resource/{second['id']}")

        assert response.status_code == 200
        assert (await client.get("/resource")).json() == [first, third]

    @pytest.mark.asyncio
    async def test_unknown_id(self, client: AsyncClient):
        response = await client.delete("/resource/non-existent-id")

        assert response.status_code == 404
        assert "not found" in response.json()["error"].lower()

    @pytest.mark.asyncio
    async def test_delete_twice(self, client: AsyncClient):
        goal = await create(client)

        await client.delete(f"/resource/{goal['id']}")
        response = await client.delete(f"/resource/{goal['id']}")

        assert response.status_code == 404


class TestContentType:
    """Responses are JSON."""

    @pytest.mark.asyncio
    async def test_json_on_get(self, client: AsyncClient):
        response = await client.get("/resource")

        assert "json" in response.headers["content-type"]

    @pytest.mark.asyncio
    async def test_json_on_post(self, client: AsyncClient):
        response = await client.post("/resource", json=make_goal())

        assert "json" in response.headers["content-type"]

    @pytest.mark.asyncio
    async def test_json_on_error(self, client: AsyncClient):
        response = await client.delete("/resource/missing")

        assert "json" in response.headers["content-type"]
