"""
HTTP surface tests: status codes, envelopes and input validation.
"""

import pytest

from backend.db import base

from tests.conftest import ALICE, BOB, CAROL, MISSING

pytestmark = pytest.mark.asyncio

FOLLOWS = "/api/v1/follows"
USERS = "/api/v1/users"


def follow_body(follower_id, followee_id):
    return {"followerId": follower_id, "followeeId": followee_id}


class TestFollowRoutes:
    async def test_follow_created(self, client):
        response = await client.post(FOLLOWS, json=follow_body(ALICE, BOB))

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User followed successfully"
        assert body["data"]["id"]

    async def test_self_follow(self, client):
        response = await client.post(FOLLOWS, json=follow_body(ALICE, ALICE))

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Cannot follow yourself",
            "code": "SELF_FOLLOW",
        }

    async def test_duplicate_follow(self, client):
        await client.post(FOLLOWS, json=follow_body(ALICE, BOB))
        response = await client.post(FOLLOWS, json=follow_body(ALICE, BOB))

        assert response.status_code == 409
        assert response.json()["code"] == "DUPLICATE_FOLLOW"

    async def test_unknown_followee(self, client):
        response = await client.post(FOLLOWS, json=follow_body(ALICE, MISSING))

        assert response.status_code == 404
        assert response.json()["code"] == "USER_NOT_FOUND"
        assert response.json()["message"] == "Followee user not found"

    async def test_invalid_uuid(self, client):
        response = await client.post(FOLLOWS, json=follow_body("not-a-uuid", BOB))

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "INVALID_INPUT"
        assert body["message"].startswith("followerId")

    async def test_missing_field(self, client):
        response = await client.post(FOLLOWS, json={"followerId": ALICE})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"

    async def test_unfollow(self, client):
        await client.post(FOLLOWS, json=follow_body(ALICE, BOB))

        response = await client.request("DELETE", FOLLOWS, json=follow_body(ALICE, BOB))
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "User unfollowed successfully"}

        again = await client.request("DELETE", FOLLOWS, json=follow_body(ALICE, BOB))
        assert again.status_code == 404
        assert again.json()["code"] == "FOLLOW_NOT_FOUND"

    async def test_check(self, client):
        await client.post(FOLLOWS, json=follow_body(ALICE, BOB))

        response = await client.get(f"{FOLLOWS}/check", params=follow_body(ALICE, BOB))
        reverse = await client.get(f"{FOLLOWS}/check", params=follow_body(BOB, ALICE))

        assert response.json()["data"] == {"isFollowing": True}
        assert reverse.json()["data"] == {"isFollowing": False}

    async def test_check_requires_both_ids(self, client):
        response = await client.get(f"{FOLLOWS}/check", params={"followerId": ALICE})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"


class TestUserRoutes:
    async def test_list_users(self, client):
        response = await client.get(USERS)

        assert response.status_code == 200
        usernames = [user["username"] for user in response.json()["data"]]
        assert usernames == ["alice", "bob", "carol", "diana", "eve"]

    async def test_followers_page(self, client):
        await client.post(FOLLOWS, json=follow_body(ALICE, CAROL))
        await client.post(FOLLOWS, json=follow_body(BOB, CAROL))

        response = await client.get(f"{USERS}/{CAROL}/followers", params={"limit": 1})

        data = response.json()["data"]
        assert response.status_code == 200
        assert data["total"] == 2
        assert data["limit"] == 1
        assert data["offset"] == 0
        assert [item["username"] for item in data["items"]] == ["bob"]

    async def test_following_page_defaults(self, client):
        response = await client.get(f"{USERS}/{ALICE}/following")

        data = response.json()["data"]
        assert data == {"total": 0, "items": [], "limit": 20, "offset": 0}

    @pytest.mark.parametrize("params", [{"limit": 0}, {"limit": 101}, {"offset": -1}, {"limit": "ten"}])
    async def test_bad_pagination(self, client, params):
        response = await client.get(f"{USERS}/{ALICE}/followers", params=params)

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"

    async def test_list_unknown_user(self, client):
        response = await client.get(f"{USERS}/{MISSING}/following")

        assert response.status_code == 404
        assert response.json()["code"] == "USER_NOT_FOUND"

    async def test_counts(self, client):
        await client.post(FOLLOWS, json=follow_body(ALICE, BOB))
        await client.post(FOLLOWS, json=follow_body(ALICE, CAROL))

        following = await client.get(f"{USERS}/{ALICE}/following/count")
        followers = await client.get(f"{USERS}/{BOB}/followers/count")

        assert following.json()["data"] == {"count": 2}
        assert followers.json()["data"] == {"count": 1}

    async def test_count_unknown_user(self, client):
        response = await client.get(f"{USERS}/{MISSING}/followers/count")

        assert response.status_code == 404
        assert response.json()["code"] == "USER_NOT_FOUND"

    async def test_malformed_user_id(self, client):
        response = await client.get(f"{USERS}/abc/followers/count")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"


class TestHealth:
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    async def test_request_id_header(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    async def test_ready_without_database(self, client, monkeypatch):
        monkeypatch.setattr(base, "async_engine", None)

        response = await client.get("/health/ready")

        assert response.status_code == 503

    async def test_ready_with_database(self, client, engine, monkeypatch):
        monkeypatch.setattr(base, "async_engine", engine)

        response = await client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["database"] == "healthy"

    async def test_unknown_route(self, client):
        response = await client.get("/api/v1/nope")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Route not found"}


class TestErrorBodies:
    async def test_method_not_allowed_carries_code(self, client):
        response = await client.put(FOLLOWS, json=follow_body(ALICE, BOB))

        assert response.status_code == 405
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "INVALID_INPUT"
        assert body["message"]


class TestOpenApi:
    async def test_routes_document_success_envelope(self, client):
        schema = (await client.get("/openapi.json")).json()
        paths = schema["paths"]

        created = paths[FOLLOWS]["post"]["responses"]["201"]["content"]["application/json"]["schema"]
        count = paths[f"{USERS}/{{user_id}}/followers/count"]["get"]["responses"]["200"]
        page = paths[f"{USERS}/{{user_id}}/following"]["get"]["responses"]["200"]

        assert "ApiResponse" in created["$ref"]
        assert "FollowCount" in count["content"]["application/json"]["schema"]["$ref"]
        assert "FollowPage" in page["content"]["application/json"]["schema"]["$ref"]
