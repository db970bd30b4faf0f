"""Tests for the blog listing and timeline endpoints."""

import uuid

from blogcraft.domains.blogs.entities import APPROVAL_MARKER


async def _new_blog(client, user, topic="Kites"):
    response = await client.post("/generate", json={"topic": topic, "userId": str(user.id)})
    assert response.status_code == 200
    return response.json()["blogId"]


async def _revise(client, user, blog_id, feedback):
    response = await client.post(
        "/generate",
        json={"userId": str(user.id), "blogId": blog_id, "content": "draft", "feedback": feedback},
    )
    assert response.status_code == 200


async def _react(client, blog_id, content, polarity):
    response = await client.post(
        "/feedback/save", json={"blogId": blog_id, "content": content, "type": polarity}
    )
    assert response.status_code == 200


class TestListBlogs:
    """Tests for GET /blogs."""

    async def test_user_id_required(self, client):
        response = await client.get("/blogs")

        assert response.status_code == 400
        assert "userId" in response.json()["error"]

    async def test_malformed_user_id(self, client):
        response = await client.get("/blogs", params={"userId": "not-a-uuid"})
        assert response.status_code == 400

    async def test_unknown_user(self, client):
        response = await client.get("/blogs", params={"userId": str(uuid.uuid4())})

        assert response.status_code == 404
        assert response.json() == {"blogs": [], "error": "User not found"}

    async def test_no_blogs(self, client, user):
        response = await client.get("/blogs", params={"userId": str(user.id)})

        assert response.status_code == 200
        assert response.json()["blogs"] == []

    async def test_newest_blog_first(self, client, user):
        first = await _new_blog(client, user, "First")
        second = await _new_blog(client, user, "Second")

        response = await client.get("/blogs", params={"userId": str(user.id)})

        assert [b["id"] for b in response.json()["blogs"]] == [second, first]

    async def test_only_own_blogs(self, client, user, other_user):
        await _new_blog(client, user)

        response = await client.get("/blogs", params={"userId": str(other_user.id)})

        assert response.json()["blogs"] == []

    async def test_path_variant(self, client, user):
        blog_id = await _new_blog(client, user)

        response = await client.get(f"/blogs/{user.id}")

        assert response.status_code == 200
        assert [b["id"] for b in response.json()["blogs"]] == [blog_id]

    async def test_feedback_newest_first(self, client, user):
        blog_id = await _new_blog(client, user)
        await _react(client, blog_id, "Too long", "negative")
        await _react(client, blog_id, APPROVAL_MARKER, "positive")

        response = await client.get("/blogs", params={"userId": str(user.id)})

        feedback = response.json()["blogs"][0]["feedback"]
        assert [f["type"] for f in feedback] == ["positive", "negative"]
        assert feedback[0]["blogId"] == blog_id


class TestTimeline:
    """Tests for GET /blogs/{blogId}/timeline."""

    async def test_feedback_attributed_to_displayed_version(self, client, user):
        blog_id = await _new_blog(client, user)
        await _react(client, blog_id, "Too long", "negative")
        await _revise(client, user, blog_id, "Too long")
        await _react(client, blog_id, APPROVAL_MARKER, "positive")

        response = await client.get(f"/blogs/{blog_id}/timeline", params={"userId": str(user.id)})

        assert response.status_code == 200
        data = response.json()
        assert data["blogId"] == blog_id
        assert data["topic"] == "Kites"
        entries = data["entries"]
        assert [e["number"] for e in entries] == [2, 1]
        assert [e["isLatest"] for e in entries] == [True, False]
        assert [f["content"] for f in entries[0]["feedback"]] == [APPROVAL_MARKER]
        assert [f["content"] for f in entries[1]["feedback"]] == ["Too long"]
        assert entries[0]["feedbackText"] == "Too long"

    async def test_unknown_blog(self, client, user):
        response = await client.get(f"/blogs/{uuid.uuid4()}/timeline", params={"userId": str(user.id)})

        assert response.status_code == 404
        assert response.json() == {"error": "Blog not found"}

    async def test_blog_of_another_user(self, client, user, other_user):
        blog_id = await _new_blog(client, user)

        response = await client.get(f"/blogs/{blog_id}/timeline", params={"userId": str(other_user.id)})

        assert response.status_code == 404
        assert response.json() == {"error": "Blog not found"}

    async def test_user_id_required(self, client, user):
        blog_id = await _new_blog(client, user)

        response = await client.get(f"/blogs/{blog_id}/timeline")

        assert response.status_code == 400
        assert "userId" in response.json()["error"]
