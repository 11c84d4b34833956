from devfolio.modules.message.models import Message
from devfolio.modules.portfolio.models import Portfolio
from devfolio.modules.project.models import Project
from devfolio.modules.user.models import SocialLink, User, UserSkill


async def _create_project(client, account, title="Devfolio"):
    response = await client.post(
        "/api/projects",
        headers=account.headers,
        json={"title": title, "description": f"{title} description"},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestDiscovery:
    async def test_list_users_with_project_count(self, client, alice, bob):
        await _create_project(client, alice)
        await _create_project(client, alice, "Second")

        response = await client.get("/api/users")
        assert response.status_code == 200
        body = response.json()
        by_username = {user["username"]: user for user in body["data"]}
        assert by_username["alice"]["project_count"] == 2
        assert by_username["bob"]["project_count"] == 0
        assert body["pagination"] == {"limit": 20, "offset": 0, "total": 2}

    async def test_search_is_case_insensitive(self, client, alice, bob):
        response = await client.get("/api/users", params={"search": "ALI"})
        assert [user["username"] for user in response.json()["data"]] == ["alice"]

    async def test_public_profile(self, client, alice):
        await client.put(
            "/api/users/skills", headers=alice.headers, json={"skills": ["Python", "Go"]}
        )
        await _create_project(client, alice)

        response = await client.get("/api/users/alice")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["username"] == "alice"
        assert sorted(data["skills"]) == ["Go", "Python"]
        assert data["socials"] == {
            "github": None,
            "linkedin": None,
            "twitter": None,
            "website": None,
        }
        assert data["project_count"] == 1
        assert data["created_at"].endswith("Z")

    async def test_unknown_user(self, client):
        response = await client.get("/api/users/nobody")
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"


class TestProfileUpdate:
    async def test_only_present_fields_change(self, client, alice):
        response = await client.put(
            "/api/users/profile", headers=alice.headers, json={"bio": ""}
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["bio"] == ""
        assert data["name"] == "Alice"
        assert data["avatar_url"] == "https://i.pravatar.cc/150?u=alice"

    async def test_empty_body(self, client, alice):
        response = await client.put("/api/users/profile", headers=alice.headers, json={})
        assert response.status_code == 400
        assert response.json()["message"] == "No fields to update"

    async def test_email_taken_by_other_user(self, client, alice, bob):
        response = await client.put(
            "/api/users/profile", headers=alice.headers, json={"email": bob.email}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "DUPLICATE_EMAIL"

        me = await client.get("/api/auth/me", headers=alice.headers)
        assert me.json()["data"]["email"] == alice.email

    async def test_null_name_is_rejected(self, client, alice):
        response = await client.put(
            "/api/users/profile", headers=alice.headers, json={"name": None}
        )
        assert response.status_code == 400

    async def test_requires_authentication(self, client):
        response = await client.put("/api/users/profile", json={"bio": "hi"})
        assert response.status_code == 401


class TestSkills:
    async def test_replace_set(self, client, alice):
        await client.put(
            "/api/users/skills", headers=alice.headers, json={"skills": ["Python", "Go"]}
        )
        response = await client.put(
            "/api/users/skills",
            headers=alice.headers,
            json={"skills": ["Rust", " Rust ", "", "SQL"]},
        )
        assert response.status_code == 200
        assert response.json()["data"]["skills"] == ["Rust", "SQL"]

        me = await client.get("/api/auth/me", headers=alice.headers)
        assert sorted(me.json()["data"]["skills"]) == ["Rust", "SQL"]

    async def test_empty_list_clears(self, client, alice, count_rows):
        await client.put(
            "/api/users/skills", headers=alice.headers, json={"skills": ["Python"]}
        )
        response = await client.put(
            "/api/users/skills", headers=alice.headers, json={"skills": []}
        )
        assert response.status_code == 200
        assert await count_rows(UserSkill, UserSkill.user_id == alice.id) == 0

    async def test_skills_must_be_a_list(self, client, alice):
        response = await client.put(
            "/api/users/skills", headers=alice.headers, json={"skills": "Python"}
        )
        assert response.status_code == 400


class TestSocials:
    async def test_only_non_empty_platforms_are_stored(self, client, alice, count_rows):
        response = await client.put(
            "/api/users/socials",
            headers=alice.headers,
            json={"github": "https://github.com/alice", "twitter": ""},
        )
        assert response.status_code == 200
        assert await count_rows(SocialLink, SocialLink.user_id == alice.id) == 1

        profile = await client.get("/api/users/alice")
        assert profile.json()["data"]["socials"]["github"] == "https://github.com/alice"
        assert profile.json()["data"]["socials"]["twitter"] is None

    async def test_replace_drops_previous_links(self, client, alice):
        await client.put(
            "/api/users/socials",
            headers=alice.headers,
            json={"github": "https://github.com/alice"},
        )
        await client.put(
            "/api/users/socials",
            headers=alice.headers,
            json={"website": "https://alice.dev"},
        )
        socials = (await client.get("/api/users/alice")).json()["data"]["socials"]
        assert socials["github"] is None
        assert socials["website"] == "https://alice.dev"


class TestDeleteAccount:
    async def test_cascades_to_owned_data(self, client, alice, bob, count_rows):
        await _create_project(client, alice)
        await client.put(
            "/api/users/skills", headers=alice.headers, json={"skills": ["Python"]}
        )
        await client.put(
            "/api/users/socials",
            headers=alice.headers,
            json={"github": "https://github.com/alice"},
        )
        await client.post(
            "/api/messages",
            headers=alice.headers,
            json={"recipient_id": str(bob.id), "message": "hi bob"},
        )
        await client.post(
            "/api/messages",
            headers=bob.headers,
            json={"recipient_id": str(alice.id), "message": "hi alice"},
        )

        response = await client.delete("/api/users/account", headers=alice.headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Account deleted successfully"

        assert await count_rows(User, User.id == alice.id) == 0
        assert await count_rows(Portfolio, Portfolio.user_id == alice.id) == 0
        assert await count_rows(Project, Project.user_id == alice.id) == 0
        assert await count_rows(UserSkill, UserSkill.user_id == alice.id) == 0
        assert await count_rows(SocialLink, SocialLink.user_id == alice.id) == 0
        assert await count_rows(Message) == 0
        assert await count_rows(User, User.id == bob.id) == 1

    async def test_delete_twice(self, client, alice):
        await client.delete("/api/users/account", headers=alice.headers)
        response = await client.delete("/api/users/account", headers=alice.headers)
        assert response.status_code == 404
