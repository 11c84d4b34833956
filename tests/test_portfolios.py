from sqlalchemy.exc import SQLAlchemyError
from uuid_utils.compat import uuid7

from devfolio.core.outcome import StoreFailure
from devfolio.modules.project.models import Project
from devfolio.modules.project.repository import ProjectRepository


async def _create(client, account, title):
    response = await client.post(
        "/api/projects",
        headers=account.headers,
        json={"title": title, "description": f"{title} description"},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["id"]


async def _featured_titles(client, username):
    response = await client.get(f"/api/portfolios/{username}")
    assert response.status_code == 200
    return sorted(p["title"] for p in response.json()["data"]["featured_projects"])


class TestRead:
    async def test_public_portfolio(self, client, alice):
        response = await client.get("/api/portfolios/alice")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["username"] == "alice"
        assert data["user"]["cover_image_url"]
        assert set(data["socials"]) == {"github", "linkedin", "twitter", "website"}
        assert "projects" not in data

    async def test_unknown_username(self, client):
        response = await client.get("/api/portfolios/nobody")
        assert response.status_code == 404
        assert response.json()["message"] == "Portfolio not found"

    async def test_my_portfolio_lists_all_projects(self, client, alice):
        first = await _create(client, alice, "First")
        await _create(client, alice, "Second")
        await client.post(f"/api/portfolios/featured/{first}", headers=alice.headers)

        response = await client.get("/api/portfolios/me/details", headers=alice.headers)
        assert response.status_code == 200
        projects = {p["title"]: p["is_featured"] for p in response.json()["data"]["projects"]}
        assert projects == {"First": True, "Second": False}

    async def test_my_portfolio_requires_authentication(self, client):
        response = await client.get("/api/portfolios/me/details")
        assert response.status_code == 401


class TestUpdate:
    async def test_update_fields_and_skills(self, client, alice):
        response = await client.put(
            "/api/portfolios",
            headers=alice.headers,
            json={"summary": "Backend engineer", "skills": ["Python", "SQL"]},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Portfolio updated successfully"
        assert body["data"]["summary"] == "Backend engineer"
        assert body["data"]["experience"] == ""
        assert sorted(body["data"]["skills"]) == ["Python", "SQL"]

    async def test_omitted_skills_are_kept(self, client, alice):
        await client.put("/api/portfolios", headers=alice.headers, json={"skills": ["Go"]})
        response = await client.put(
            "/api/portfolios", headers=alice.headers, json={"education": "BSc"}
        )
        assert response.json()["data"]["skills"] == ["Go"]
        assert response.json()["data"]["education"] == "BSc"

    async def test_empty_skills_clear(self, client, alice):
        await client.put("/api/portfolios", headers=alice.headers, json={"skills": ["Go"]})
        response = await client.put("/api/portfolios", headers=alice.headers, json={"skills": []})
        assert response.json()["data"]["skills"] == []

    async def test_featured_replace_set_ignores_foreign_ids(self, client, alice, bob, count_rows):
        a1 = await _create(client, alice, "A1")
        a2 = await _create(client, alice, "A2")
        b1 = await _create(client, bob, "B1")

        await client.put(
            "/api/portfolios", headers=alice.headers, json={"featured_projects": [a1]}
        )
        assert await _featured_titles(client, "alice") == ["A1"]

        response = await client.put(
            "/api/portfolios",
            headers=alice.headers,
            json={"featured_projects": [a2, b1, str(uuid7())]},
        )
        assert response.status_code == 200
        assert await _featured_titles(client, "alice") == ["A2"]
        assert await count_rows(Project, Project.is_featured.is_(True)) == 1

    async def test_empty_featured_list_clears(self, client, alice):
        a1 = await _create(client, alice, "A1")
        await client.put(
            "/api/portfolios", headers=alice.headers, json={"featured_projects": [a1]}
        )
        await client.put("/api/portfolios", headers=alice.headers, json={"featured_projects": []})
        assert await _featured_titles(client, "alice") == []

    async def test_malformed_featured_id_changes_nothing(self, client, alice):
        a1 = await _create(client, alice, "A1")
        await client.put(
            "/api/portfolios", headers=alice.headers, json={"featured_projects": [a1]}
        )
        response = await client.put(
            "/api/portfolios",
            headers=alice.headers,
            json={"summary": "changed", "featured_projects": ["nope"]},
        )
        assert response.status_code == 400

        portfolio = (await client.get("/api/portfolios/alice")).json()["data"]
        assert portfolio["summary"] != "changed"
        assert [p["title"] for p in portfolio["featured_projects"]] == ["A1"]

    async def test_failing_step_rolls_back_earlier_steps(self, client, alice, monkeypatch):
        a1 = await _create(client, alice, "A1")
        a2 = await _create(client, alice, "A2")
        await client.put(
            "/api/portfolios",
            headers=alice.headers,
            json={"summary": "Original", "skills": ["Go"], "featured_projects": [a1]},
        )

        async def failing_replace(self, user_id, project_ids):
            return StoreFailure(SQLAlchemyError("disk full"))

        monkeypatch.setattr(ProjectRepository, "replace_featured", failing_replace)
        response = await client.put(
            "/api/portfolios",
            headers=alice.headers,
            json={"summary": "changed", "skills": ["Rust"], "featured_projects": [a2]},
        )
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "TRANSACTION_FAILED"
        assert body["message"] == "Error updating portfolio"

        portfolio = (await client.get("/api/portfolios/alice")).json()["data"]
        assert portfolio["summary"] == "Original"
        assert portfolio["skills"] == ["Go"]
        assert [p["title"] for p in portfolio["featured_projects"]] == ["A1"]


class TestToggleFeatured:
    async def test_toggle_back_and_forth(self, client, alice):
        project_id = await _create(client, alice, "A1")

        first = await client.post(f"/api/portfolios/featured/{project_id}", headers=alice.headers)
        assert first.status_code == 200
        assert first.json()["message"] == "Project featured successfully"
        assert first.json()["data"] == {"project_id": project_id, "is_featured": True}

        second = await client.post(f"/api/portfolios/featured/{project_id}", headers=alice.headers)
        assert second.json()["message"] == "Project unfeatured successfully"
        assert second.json()["data"]["is_featured"] is False

    async def test_foreign_project_looks_missing(self, client, alice, bob):
        project_id = await _create(client, alice, "A1")
        response = await client.post(f"/api/portfolios/featured/{project_id}", headers=bob.headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Project not found or does not belong to you"
        assert await _featured_titles(client, "alice") == []
