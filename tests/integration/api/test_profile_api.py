"""Integration tests for the Profile API."""

from uuid import uuid4

import httpx
import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from infrastructure.auth.provider import TokenUser

PROFILE = {"status": "Developer", "skills": "python, fastapi , sql"}

EXPERIENCE = {
    "title": "Engineer",
    "company": "Acme",
    "location": "Berlin",
    "from": "2020-01-01",
    "current": True,
}

EDUCATION = {
    "school": "MIT",
    "degree": "BSc",
    "fieldofstudy": "Computer Science",
    "from": "2014-09-01",
    "to": "2018-06-30",
}


async def _create_profile(client: AsyncClient, **overrides) -> dict:
    response = await client.post("/api/profile", json={**PROFILE, **overrides})
    assert response.status_code == 200, response.text
    return response.json()


class TestUpsert:
    @pytest.mark.asyncio
    async def test_create_profile(
        self, authenticated_client: AsyncClient, test_user: TokenUser
    ) -> None:
        data = await _create_profile(
            authenticated_client,
            company="Acme",
            social={"twitter": "https://twitter.com/test"},
        )

        assert data["user_id"] == str(test_user.id)
        assert data["user"]["name"] == "Test User"
        assert data["user"]["avatar_url"] == f"https://example.com/{test_user.id}.png"
        assert data["skills"] == ["python", "fastapi", "sql"]
        assert data["company"] == "Acme"
        assert data["social"]["twitter"] == "https://twitter.com/test"
        assert data["experience"] == [] and data["education"] == []

    @pytest.mark.asyncio
    async def test_update_is_sparse_and_merges_social(
        self, authenticated_client: AsyncClient
    ) -> None:
        first = await _create_profile(
            authenticated_client,
            company="Acme",
            bio="Hello",
            social={"twitter": "https://twitter.com/test"},
        )

        second = await _create_profile(
            authenticated_client,
            status="Lead",
            skills=["go"],
            company="",
            social={"youtube": "https://youtube.com/test"},
        )

        assert second["id"] == first["id"]
        assert second["status"] == "Lead"
        assert second["skills"] == ["go"]
        assert second["company"] == "Acme"
        assert second["bio"] == "Hello"
        assert second["social"]["twitter"] == "https://twitter.com/test"
        assert second["social"]["youtube"] == "https://youtube.com/test"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", ["github_username", "githubUsername", "githubusername"])
    async def test_github_username_spellings(
        self, authenticated_client: AsyncClient, key: str
    ) -> None:
        data = await _create_profile(authenticated_client, **{key: "octocat"})

        assert data["github_username"] == "octocat"

        kept = await _create_profile(authenticated_client, status="Lead")
        assert kept["github_username"] == "octocat"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body, field",
        [
            ({"skills": "python"}, "status"),
            ({"status": "   ", "skills": "python"}, "status"),
            ({"status": "Dev"}, "skills"),
            ({"status": "Dev", "skills": " , ,"}, "skills"),
        ],
    )
    async def test_status_and_skills_required(
        self, authenticated_client: AsyncClient, body: dict, field: str
    ) -> None:
        response = await authenticated_client.post("/api/profile", json=body)

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["errors"]] == [field]

        missing = await authenticated_client.get("/api/profile/me")
        assert missing.status_code == 400

    @pytest.mark.asyncio
    async def test_requires_auth(self, api_client: AsyncClient) -> None:
        response = await api_client.post("/api/profile", json=PROFILE)

        assert response.status_code == 401


class TestRead:
    @pytest.mark.asyncio
    async def test_me_without_profile(self, authenticated_client: AsyncClient) -> None:
        response = await authenticated_client.get("/api/profile/me")

        assert response.status_code == 400
        assert response.json()["msg"] == "There is no profile with that user."

    @pytest.mark.asyncio
    async def test_list_and_get_by_user_are_public(
        self,
        authenticated_client: AsyncClient,
        api_client: AsyncClient,
        test_user: TokenUser,
    ) -> None:
        await _create_profile(authenticated_client)

        listed = await api_client.get("/api/profile")
        assert listed.status_code == 200
        assert [p["user_id"] for p in listed.json()] == [str(test_user.id)]

        single = await api_client.get(f"/api/profile/user/{test_user.id}")
        assert single.status_code == 200
        assert single.json()["user"]["name"] == "Test User"

    @pytest.mark.asyncio
    async def test_get_by_unknown_user(self, api_client: AsyncClient) -> None:
        response = await api_client.get(f"/api/profile/user/{uuid4()}")

        assert response.status_code == 400
        assert response.json()["error_code"] == "PROFILE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_get_by_malformed_user_id(self, api_client: AsyncClient) -> None:
        response = await api_client.get("/api/profile/user/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestExperienceAndEducation:
    @pytest.mark.asyncio
    async def test_experience_is_newest_first(self, authenticated_client: AsyncClient) -> None:
        await _create_profile(authenticated_client)

        await authenticated_client.put("/api/profile/experience", json=EXPERIENCE)
        response = await authenticated_client.put(
            "/api/profile/experience",
            json={**EXPERIENCE, "title": "Senior Engineer", "from": "2022-01-01"},
        )

        assert response.status_code == 200
        experience = response.json()["experience"]
        assert [e["title"] for e in experience] == ["Senior Engineer", "Engineer"]
        assert experience[1]["from"] == "2020-01-01"
        assert experience[1]["to"] is None
        assert experience[1]["location"] == "Berlin"
        assert experience[0]["id"] != experience[1]["id"]

    @pytest.mark.asyncio
    async def test_experience_validation(self, authenticated_client: AsyncClient) -> None:
        await _create_profile(authenticated_client)

        response = await authenticated_client.put(
            "/api/profile/experience", json={"title": "Engineer"}
        )

        assert response.status_code == 400
        fields = {e["field"] for e in response.json()["errors"]}
        assert fields == {"company", "from"}

    @pytest.mark.asyncio
    async def test_experience_without_profile(self, authenticated_client: AsyncClient) -> None:
        response = await authenticated_client.put("/api/profile/experience", json=EXPERIENCE)

        assert response.status_code == 404
        assert response.json()["error_code"] == "PROFILE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_remove_experience_twice(self, authenticated_client: AsyncClient) -> None:
        await _create_profile(authenticated_client)
        added = await authenticated_client.put("/api/profile/experience", json=EXPERIENCE)
        entry_id = added.json()["experience"][0]["id"]

        first = await authenticated_client.delete(f"/api/profile/experience/{entry_id}")
        second = await authenticated_client.delete(f"/api/profile/experience/{entry_id}")

        assert first.status_code == 200
        assert first.json()["experience"] == []
        assert second.status_code == 200
        assert second.json()["experience"] == []

    @pytest.mark.asyncio
    async def test_list_mutations_without_profile_are_404(
        self, authenticated_client: AsyncClient
    ) -> None:
        responses = [
            await authenticated_client.put("/api/profile/education", json=EDUCATION),
            await authenticated_client.delete(f"/api/profile/experience/{uuid4()}"),
            await authenticated_client.delete(f"/api/profile/education/{uuid4()}"),
        ]

        assert [r.status_code for r in responses] == [404, 404, 404]
        assert {r.json()["msg"] for r in responses} == {"There is no profile with that user."}

    @pytest.mark.asyncio
    async def test_education_requires_fieldofstudy(self, authenticated_client: AsyncClient) -> None:
        await _create_profile(authenticated_client)
        body = {k: v for k, v in EDUCATION.items() if k != "fieldofstudy"}

        response = await authenticated_client.put("/api/profile/education", json=body)

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["errors"]] == ["fieldofstudy"]

    @pytest.mark.asyncio
    async def test_education_accepts_snake_case_field(
        self, authenticated_client: AsyncClient
    ) -> None:
        await _create_profile(authenticated_client)
        body = {k: v for k, v in EDUCATION.items() if k != "fieldofstudy"}

        response = await authenticated_client.put(
            "/api/profile/education", json={**body, "field_of_study": "Maths"}
        )

        assert response.status_code == 200
        assert response.json()["education"][0]["fieldofstudy"] == "Maths"

    @pytest.mark.asyncio
    async def test_add_and_remove_education(self, authenticated_client: AsyncClient) -> None:
        await _create_profile(authenticated_client)

        added = await authenticated_client.put("/api/profile/education", json=EDUCATION)
        assert added.status_code == 200
        entry = added.json()["education"][0]
        assert entry["fieldofstudy"] == "Computer Science"
        assert "field_of_study" not in entry
        assert entry["from"] == "2014-09-01"
        assert entry["to"] == "2018-06-30"

        removed = await authenticated_client.delete(f"/api/profile/education/{entry['id']}")
        assert removed.json()["education"] == []


class TestDeleteAccount:
    @pytest.mark.asyncio
    async def test_removes_posts_profile_and_user(
        self,
        authenticated_client: AsyncClient,
        api_client: AsyncClient,
        other_headers: dict[str, str],
        test_user: TokenUser,
    ) -> None:
        await _create_profile(authenticated_client)
        mine = await authenticated_client.post("/api/posts", json={"text": "mine"})
        theirs = await api_client.post("/api/posts", json={"text": "theirs"}, headers=other_headers)
        assert mine.status_code == theirs.status_code == 201

        response = await authenticated_client.delete("/api/profile")

        assert response.status_code == 200
        assert response.json() == {"msg": "User removed"}

        posts = await api_client.get("/api/posts", headers=other_headers)
        assert [p["text"] for p in posts.json()] == ["theirs"]

        profile = await api_client.get(f"/api/profile/user/{test_user.id}")
        assert profile.status_code == 400

        me = await authenticated_client.get("/api/auth")
        assert me.status_code == 404


class TestGitHub:
    @pytest.fixture
    def github_app(self, app: FastAPI) -> FastAPI:
        from api.v1.dependencies import get_github_client
        from infrastructure.github.client import GitHubClient

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/users/octocat/repos":
                return httpx.Response(200, json=[{"name": "hello-world"}])
            return httpx.Response(404, json={"message": "Not Found"})

        client = GitHubClient(
            base_url="https://api.github.test", token="", transport=httpx.MockTransport(handler)
        )
        app.dependency_overrides[get_github_client] = lambda: client
        return app

    @pytest.mark.asyncio
    async def test_lists_repos(self, github_app: FastAPI, api_client: AsyncClient) -> None:
        response = await api_client.get("/api/profile/github/octocat")

        assert response.status_code == 200
        assert response.json() == [{"name": "hello-world"}]

    @pytest.mark.asyncio
    async def test_unknown_github_user(self, github_app: FastAPI, api_client: AsyncClient) -> None:
        response = await api_client.get("/api/profile/github/nobody")

        assert response.status_code == 404
        assert response.json()["msg"] == "No github user found."
