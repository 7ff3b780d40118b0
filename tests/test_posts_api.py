"""
HTTP-level tests for posts and comments, including ownership rules.
"""

import uuid

import pytest


class TestPublicAccess:
    @pytest.mark.asyncio
    async def test_list_posts_without_auth(self, client):
        resp = await client.get("/posts")
        assert resp.status_code == 200
        assert resp.json() == []

    @pytest.mark.asyncio
    async def test_create_post_without_auth(self, client):
        resp = await client.post("/posts", json={"title": "Hello"})
        assert resp.status_code == 401
        assert resp.json() == {"msg": "no token"}

    @pytest.mark.asyncio
    async def test_create_post_with_bad_token(self, client):
        resp = await client.post(
            "/posts", json={"title": "Hello"}, headers={"Authorization": "Bearer nope"}
        )
        assert resp.status_code == 401
        assert resp.json() == {"msg": "invalid token"}


class TestCreatePost:
    @pytest.mark.asyncio
    async def test_author_comes_from_token(self, client, login_as):
        ada = await login_as("Ada", "ada@x.com")
        resp = await client.post(
            "/posts",
            json={"title": "Hello", "body": "First!", "author_id": str(uuid.uuid4()), "user": "someone"},
            headers=ada["headers"],
        )
        assert resp.status_code == 201
        post = resp.json()
        assert post["author_id"] == ada["user_id"]
        assert post["author"]["email"] == "ada@x.com"

    @pytest.mark.asyncio
    async def test_raw_token_header_accepted(self, client, login_as):
        ada = await login_as("Ada", "ada@x.com")
        resp = await client.post(
            "/posts", json={"title": "Hello"}, headers={"Authorization": ada["token"]}
        )
        assert resp.status_code == 201

    @pytest.mark.asyncio
    async def test_title_required(self, client, login_as):
        ada = await login_as("Ada", "ada@x.com")
        resp = await client.post("/posts", json={"body": "untitled"}, headers=ada["headers"])
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_listing_expands_author(self, client, login_as):
        ada = await login_as("Ada", "ada@x.com")
        await client.post("/posts", json={"title": "Hello"}, headers=ada["headers"])

        resp = await client.get("/posts")
        assert resp.status_code == 200
        [post] = resp.json()
        assert post["author"] == {"id": ada["user_id"], "name": "Ada", "email": "ada@x.com"}


class TestOwnership:
    @pytest.mark.asyncio
    async def test_other_user_cannot_modify(self, client, login_as):
        ada = await login_as("Ada", "ada@x.com")
        bob = await login_as("Bob", "bob@x.com")
        post_id = (await client.post("/posts", json={"title": "Ada's"}, headers=ada["headers"])).json()["id"]

        resp = await client.patch(f"/posts/{post_id}", json={"title": "Bob was here"}, headers=bob["headers"])
        assert resp.status_code == 403
        resp = await client.delete(f"/posts/{post_id}", headers=bob["headers"])
        assert resp.status_code == 403

        assert (await client.get(f"/posts/{post_id}")).json()["title"] == "Ada's"

    @pytest.mark.asyncio
    async def test_owner_can_modify(self, client, login_as):
        ada = await login_as("Ada", "ada@x.com")
        post_id = (await client.post("/posts", json={"title": "Draft"}, headers=ada["headers"])).json()["id"]

        resp = await client.patch(
            f"/posts/{post_id}",
            json={"title": "Final", "author_id": str(uuid.uuid4())},
            headers=ada["headers"],
        )
        assert resp.status_code == 200
        assert resp.json()["title"] == "Final"
        assert resp.json()["author_id"] == ada["user_id"]

        resp = await client.delete(f"/posts/{post_id}", headers=ada["headers"])
        assert resp.status_code == 200
        assert (await client.get(f"/posts/{post_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_update_cannot_blank_title(self, client, login_as):
        ada = await login_as("Ada", "ada@x.com")
        post_id = (await client.post("/posts", json={"title": "Keep me"}, headers=ada["headers"])).json()["id"]

        for title in ("", "   "):
            resp = await client.patch(f"/posts/{post_id}", json={"title": title}, headers=ada["headers"])
            assert resp.status_code == 400
        assert (await client.get(f"/posts/{post_id}")).json()["title"] == "Keep me"

    @pytest.mark.asyncio
    async def test_unknown_post(self, client, login_as):
        ada = await login_as("Ada", "ada@x.com")
        missing = str(uuid.uuid4())
        assert (await client.get(f"/posts/{missing}")).status_code == 404
        assert (await client.patch(f"/posts/{missing}", json={"title": "x"}, headers=ada["headers"])).status_code == 404
        assert (await client.get("/posts/not-a-uuid")).status_code == 404


class TestComments:
    @pytest.mark.asyncio
    async def test_comment_flow(self, client, login_as):
        ada = await login_as("Ada", "ada@x.com")
        bob = await login_as("Bob", "bob@x.com")
        post_id = (await client.post("/posts", json={"title": "Hello"}, headers=ada["headers"])).json()["id"]

        assert (await client.post(f"/posts/{post_id}/comments", json={"body": "hi"})).status_code == 401

        resp = await client.post(f"/posts/{post_id}/comments", json={"body": "Nice"}, headers=bob["headers"])
        assert resp.status_code == 201
        comment = resp.json()
        assert comment["author_id"] == bob["user_id"]
        assert comment["post_id"] == post_id

        listed = (await client.get(f"/posts/{post_id}/comments")).json()
        assert [c["author"]["name"] for c in listed] == ["Bob"]

        resp = await client.patch(f"/comments/{comment['id']}", json={"body": "edited"}, headers=ada["headers"])
        assert resp.status_code == 403
        resp = await client.patch(f"/comments/{comment['id']}", json={"body": "edited"}, headers=bob["headers"])
        assert resp.status_code == 200
        assert resp.json()["body"] == "edited"

        assert (await client.delete(f"/comments/{comment['id']}", headers=bob["headers"])).status_code == 200
        assert (await client.get(f"/posts/{post_id}/comments")).json() == []

    @pytest.mark.asyncio
    async def test_comment_on_missing_post(self, client, login_as):
        ada = await login_as("Ada", "ada@x.com")
        resp = await client.post(
            f"/posts/{uuid.uuid4()}/comments", json={"body": "hello?"}, headers=ada["headers"]
        )
        assert resp.status_code == 404
