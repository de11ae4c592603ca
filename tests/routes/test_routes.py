"""Tests for the HTTP API."""

from collections.abc import Awaitable, Callable
from io import BytesIO
from typing import Any

import pytest
from httpx import AsyncClient
from PIL import Image

from journal.models import Role, UserDB
from journal.services.storage.local import LocalStorage

UserFactory = Callable[..., Awaitable[UserDB]]
HeadersFactory = Callable[[UserDB], dict[str, str]]

CONTENT = "<p>There's a peculiar kind of silence that settles over the morning.</p>"


async def create_article(
    client: AsyncClient,
    headers: dict[str, str],
    title: str = "Finding Peace In Chaos",
    **fields: Any,
) -> dict[str, Any]:
    response = await client.post(
        "/admin/articles",
        json={"title": title, "content": CONTENT, **fields},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestPublicArticles:
    """Tests for /articles."""

    @pytest.mark.asyncio
    async def test_drafts_hidden_from_anonymous_visitors(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test that a draft is absent from listings and 404 by slug for visitors."""
        headers = auth_headers(await make_user(Role.AUTHOR))
        draft = await create_article(client, headers, "Unfinished Thoughts")
        await create_article(client, headers, "Morning Pages", published=True)

        listing = await client.get("/articles")
        assert listing.status_code == 200
        assert [item["slug"] for item in listing.json()["items"]] == ["morning-pages"]

        anonymous = await client.get(f"/articles/{draft['slug']}")
        assert anonymous.status_code == 404
        assert anonymous.json() == {"detail": "Article not found"}

        preview = await client.get(f"/articles/{draft['slug']}", headers=headers)
        assert preview.status_code == 200
        assert preview.json()["article"]["published"] is False

    @pytest.mark.asyncio
    async def test_home_feed(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test the five latest published articles and the published total."""
        headers = auth_headers(await make_user(Role.AUTHOR))
        for i in range(6):
            await create_article(client, headers, f"Note {i}", published=True)
        await create_article(client, headers, "Hidden Draft")

        body = (await client.get("/articles/home")).json()

        assert [item["slug"] for item in body["latest"]] == [f"note-{i}" for i in (5, 4, 3, 2, 1)]
        assert body["totalPublished"] == 6

    @pytest.mark.asyncio
    async def test_unknown_slug(self, client: AsyncClient) -> None:
        """Test that a missing article is a 404."""
        response = await client.get("/articles/no-such-article")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_pagination_block(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test ten articles per page and the camelCase pagination fields."""
        headers = auth_headers(await make_user(Role.AUTHOR))
        for i in range(12):
            await create_article(client, headers, f"Essay Number {i}", published=True)

        response = await client.get("/articles", params={"page": 2})

        body = response.json()
        assert len(body["items"]) == 2
        assert body["pagination"] == {
            "page": 2,
            "limit": 10,
            "total": 12,
            "totalPages": 2,
            "hasNext": False,
            "hasPrev": True,
        }
        assert "readTime" in body["items"][0]

    @pytest.mark.asyncio
    async def test_detail_includes_navigation(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test canonical URL, related articles and previous link on the detail page."""
        headers = auth_headers(await make_user(Role.AUTHOR))
        await create_article(client, headers, "First Light", published=True)
        await create_article(client, headers, "Second Wind", published=True)

        body = (await client.get("/articles/second-wind")).json()

        assert body["canonicalUrl"].endswith("/article/second-wind")
        assert [item["slug"] for item in body["related"]] == ["first-light"]
        assert body["previous"] == {"slug": "first-light", "title": "First Light"}
        assert body["next"] is None
        assert body["description"] == (
            "There's a peculiar kind of silence that settles over the morning."
        )


class TestAdminArticles:
    """Tests for /admin/articles."""

    @pytest.mark.asyncio
    async def test_requires_session(self, client: AsyncClient) -> None:
        """Test that missing and invalid tokens are both 401."""
        missing = await client.get("/admin/articles")
        invalid = await client.get(
            "/admin/articles",
            headers={"Authorization": "Bearer not-a-token"},
        )
        assert missing.status_code == 401
        assert invalid.status_code == 401
        assert missing.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_create_derives_slug_and_defaults_to_draft(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test the article returned by create."""
        author = await make_user(Role.AUTHOR)
        article = await create_article(client, auth_headers(author))

        assert article["slug"] == "finding-peace-in-chaos"
        assert article["published"] is False
        assert article["readTime"] == "1 min read"
        assert article["authorId"] == str(author.id)

    @pytest.mark.asyncio
    async def test_duplicate_title_conflicts(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test that a second article with the same slug is a 409."""
        headers = auth_headers(await make_user(Role.AUTHOR))
        await create_article(client, headers)
        response = await client.post(
            "/admin/articles",
            json={"title": "Finding peace in chaos!", "content": CONTENT},
            headers=headers,
        )
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_role_matrix(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test edit and delete rights of other authors, editors and admins."""
        owner = auth_headers(await make_user(Role.AUTHOR))
        other_author = auth_headers(await make_user(Role.AUTHOR))
        editor = auth_headers(await make_user(Role.EDITOR))
        admin = auth_headers(await make_user(Role.ADMIN))
        article = await create_article(client, owner)
        url = f"/admin/articles/{article['id']}"

        response = await client.patch(url, json={"subtitle": "x"}, headers=other_author)
        assert response.status_code == 403
        assert response.json() == {"detail": "You don't have permission to edit this article"}

        response = await client.patch(url, json={"subtitle": "Edited"}, headers=editor)
        assert response.status_code == 200
        assert response.json()["subtitle"] == "Edited"

        assert (await client.delete(url, headers=editor)).status_code == 403
        assert (await client.delete(url, headers=admin)).status_code == 204
        assert (await client.get(url, headers=admin)).status_code == 404

    @pytest.mark.asyncio
    async def test_dashboard_scoping(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test that authors see their own articles and editors see all."""
        mine = auth_headers(await make_user(Role.AUTHOR))
        theirs = auth_headers(await make_user(Role.AUTHOR))
        editor = auth_headers(await make_user(Role.EDITOR))
        await create_article(client, mine, "Mine")
        await create_article(client, theirs, "Theirs")

        own = (await client.get("/admin/articles", headers=mine)).json()
        everything = (await client.get("/admin/articles", headers=editor)).json()

        assert [item["slug"] for item in own["items"]] == ["mine"]
        assert own["items"][0]["canEdit"] is True
        assert own["items"][0]["canDelete"] is True
        assert everything["pagination"]["total"] == 2
        assert all(item["canEdit"] and not item["canDelete"] for item in everything["items"])

    @pytest.mark.asyncio
    async def test_stale_update_conflicts(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test that an outdated expectedUpdatedAt is rejected."""
        headers = auth_headers(await make_user(Role.AUTHOR))
        article = await create_article(client, headers)

        response = await client.patch(
            f"/admin/articles/{article['id']}",
            json={"title": "Late Edit", "expectedUpdatedAt": "2000-01-01T00:00:00Z"},
            headers=headers,
        )
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_blank_title_is_unprocessable(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test the 422 body for a blank title."""
        headers = auth_headers(await make_user(Role.AUTHOR))
        article = await create_article(client, headers)

        response = await client.patch(
            f"/admin/articles/{article['id']}",
            json={"title": "   "},
            headers=headers,
        )

        body = response.json()
        assert response.status_code == 422
        assert body["detail"] == "Validation failed"
        assert body["errors"][0]["field"] == "title"

    @pytest.mark.asyncio
    async def test_title_without_letters_is_bad_request(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test that a title producing an empty slug is a 400."""
        response = await client.post(
            "/admin/articles",
            json={"title": "!!!", "content": CONTENT},
            headers=auth_headers(await make_user(Role.AUTHOR)),
        )
        assert response.status_code == 400


class TestSettings:
    """Tests for the site settings endpoints."""

    @pytest.mark.asyncio
    async def test_public_defaults(self, client: AsyncClient) -> None:
        """Test that the first read returns the default row."""
        response = await client.get("/settings/public")
        body = response.json()
        assert response.status_code == 200
        assert body["id"] == "default"
        assert body["siteName"] == "Journal"
        assert body["allowRegistration"] is True

    @pytest.mark.asyncio
    async def test_authors_cannot_edit(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test that the settings form is editor-only."""
        response = await client.patch(
            "/admin/settings",
            json={"siteName": "Hijacked"},
            headers=auth_headers(await make_user(Role.AUTHOR)),
        )
        assert response.status_code == 403
        assert (await client.get("/settings/public")).json()["siteName"] == "Journal"

    @pytest.mark.asyncio
    async def test_editor_partial_update(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test that only the sent fields change."""
        response = await client.patch(
            "/admin/settings",
            json={"siteName": "Quiet Hours", "showNewsletter": False},
            headers=auth_headers(await make_user(Role.EDITOR)),
        )
        body = response.json()
        assert response.status_code == 200
        assert body["siteName"] == "Quiet Hours"
        assert body["showNewsletter"] is False
        assert body["heroCtaText"] == (await client.get("/settings/public")).json()["heroCtaText"]


class TestAuth:
    """Tests for /auth."""

    @staticmethod
    def account(email: str) -> dict[str, str]:
        return {"name": "Ada Lovelace", "email": email, "password": "correct horse battery"}

    @pytest.mark.asyncio
    async def test_register_roles(self, client: AsyncClient) -> None:
        """Test that the first account is an admin and later ones authors."""
        first = await client.post("/auth/register", json=self.account("first@example.com"))
        second = await client.post("/auth/register", json=self.account("second@example.com"))

        assert first.status_code == 201
        assert first.json()["role"] == "admin"
        assert second.json()["role"] == "author"
        assert "passwordHash" not in first.json()

    @pytest.mark.asyncio
    async def test_closed_registration(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test that disabling registration refuses sign-ups."""
        await client.patch(
            "/admin/settings",
            json={"allowRegistration": False},
            headers=auth_headers(await make_user(Role.ADMIN)),
        )
        response = await client.post("/auth/register", json=self.account("late@example.com"))
        assert response.status_code == 403
        assert response.json() == {"detail": "Registration is currently disabled"}

    @pytest.mark.asyncio
    async def test_login_and_session(self, client: AsyncClient) -> None:
        """Test that a login token resolves to the user's session."""
        await client.post("/auth/register", json=self.account("ada@example.com"))
        login = await client.post(
            "/auth/login",
            json={"email": "ada@example.com", "password": "correct horse battery"},
        )
        assert login.status_code == 200
        token = login.json()["access_token"]

        response = await client.get(
            "/auth/session",
            headers={"Authorization": f"Bearer {token}"},
        )

        body = response.json()
        assert body["user"]["email"] == "ada@example.com"
        assert body["session"]["id"]
        assert body["session"]["expiresAt"]

    @pytest.mark.asyncio
    async def test_wrong_password(self, client: AsyncClient) -> None:
        """Test that bad credentials are a 401."""
        await client.post("/auth/register", json=self.account("ada@example.com"))
        response = await client.post(
            "/auth/login",
            json={"email": "ada@example.com", "password": "wrong horse"},
        )
        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid email or password"}

    @pytest.mark.asyncio
    async def test_anonymous_session_is_null(self, client: AsyncClient) -> None:
        """Test the session lookup without a token."""
        response = await client.get("/auth/session")
        assert response.status_code == 200
        assert response.json() is None


class TestUsers:
    """Tests for /admin/users."""

    @pytest.mark.asyncio
    async def test_admin_cannot_change_own_role(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test that self role changes are a 400."""
        admin = await make_user(Role.ADMIN)
        response = await client.patch(
            f"/admin/users/{admin.id}/role",
            json={"role": "author"},
            headers=auth_headers(admin),
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "You cannot change your own role"

    @pytest.mark.asyncio
    async def test_editors_cannot_list_users(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test that user management is admin-only."""
        response = await client.get(
            "/admin/users",
            headers=auth_headers(await make_user(Role.EDITOR)),
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_changes_role(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test promoting an author to editor."""
        admin = auth_headers(await make_user(Role.ADMIN))
        author = await make_user(Role.AUTHOR)

        response = await client.patch(
            f"/admin/users/{author.id}/role",
            json={"role": "editor"},
            headers=admin,
        )
        assert response.status_code == 200
        assert response.json()["role"] == "editor"

        listing = (await client.get("/admin/users", headers=admin)).json()
        assert listing["total"] == 2


class TestUpload:
    """Tests for /upload."""

    @pytest.mark.asyncio
    async def test_requires_session(self, client: AsyncClient) -> None:
        """Test that anonymous uploads are refused."""
        response = await client.post("/upload", files={"file": ("a.png", b"x", "image/png")})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_missing_file(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test that a request without a file is a 400."""
        response = await client.post(
            "/upload",
            headers=auth_headers(await make_user(Role.AUTHOR)),
        )
        assert response.status_code == 400
        assert response.json() == {"detail": "No file provided"}

    @pytest.mark.asyncio
    async def test_upload_png(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test that an image is stored and recorded in the media library."""
        buffer = BytesIO()
        Image.new("RGB", (8, 6), color=(10, 20, 30)).save(buffer, format="PNG")
        headers = auth_headers(await make_user(Role.EDITOR))

        response = await client.post(
            "/upload",
            files={"file": ("sunrise.png", buffer.getvalue(), "image/png")},
            headers=headers,
        )

        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["url"].startswith("/media/uploads/")
        assert body["mediaId"]

        library = (await client.get("/admin/media", headers=headers)).json()
        assert library["items"][0]["width"] == 8
        assert library["items"][0]["originalFilename"] == "sunrise.png"

    @pytest.mark.asyncio
    async def test_unsupported_type(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test the 415 body listing allowed types."""
        response = await client.post(
            "/upload",
            files={"file": ("doc.pdf", b"%PDF-1.7", "application/pdf")},
            headers=auth_headers(await make_user(Role.AUTHOR)),
        )
        assert response.status_code == 415
        assert "image/png" in response.json()["allowed_types"]


class TestHealth:
    """Tests for the service endpoints."""

    @pytest.mark.asyncio
    async def test_liveness(self, client: AsyncClient) -> None:
        """Test the liveness probe."""
        response = await client.get("/health/live")
        assert response.status_code == 200
        assert response.json()["status"] == "live"

    @pytest.mark.asyncio
    async def test_readiness(self, client: AsyncClient) -> None:
        """Test that the readiness probe reaches the database."""
        response = await client.get("/health/ready")
        assert response.status_code == 200
        assert response.json()["checks"]["database"]["status"] == "pass"

    @pytest.mark.asyncio
    async def test_root(self, client: AsyncClient) -> None:
        """Test the service information endpoint."""
        body = (await client.get("/")).json()
        assert body["version"] == "1.0.0"
        assert body["docs"] == "/docs"


class TestProfile:
    """Tests for /profile."""

    @staticmethod
    def png() -> bytes:
        buffer = BytesIO()
        Image.new("RGB", (4, 4), color=(90, 90, 90)).save(buffer, format="PNG")
        return buffer.getvalue()

    @pytest.mark.asyncio
    async def test_rename(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test that users can change their display name."""
        headers = auth_headers(await make_user(Role.AUTHOR))
        response = await client.patch("/profile", json={"name": "Ada L."}, headers=headers)
        assert response.status_code == 200
        assert (await client.get("/profile", headers=headers)).json()["name"] == "Ada L."

    @pytest.mark.asyncio
    async def test_new_avatar_replaces_old_one(
        self,
        client: AsyncClient,
        storage: LocalStorage,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test that the previous avatar file is deleted from storage."""
        headers = auth_headers(await make_user(Role.AUTHOR))

        first = await client.post(
            "/profile/avatar",
            files={"file": ("me.png", self.png(), "image/png")},
            headers=headers,
        )
        second = await client.post(
            "/profile/avatar",
            files={"file": ("me-again.png", self.png(), "image/png")},
            headers=headers,
        )

        old_url, new_url = first.json()["image"], second.json()["image"]
        assert old_url != new_url
        assert not (storage.root / storage.key_from_url(old_url)).exists()
        assert (storage.root / storage.key_from_url(new_url)).exists()

    @pytest.mark.asyncio
    async def test_avatar_change_keeps_other_users_upload(
        self,
        client: AsyncClient,
        storage: LocalStorage,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test that pointing the avatar at someone else's upload never deletes it."""
        owner = auth_headers(await make_user(Role.AUTHOR))
        other = auth_headers(await make_user(Role.AUTHOR))
        uploaded = (
            await client.post(
                "/upload",
                files={"file": ("mine.png", self.png(), "image/png")},
                headers=owner,
            )
        ).json()

        response = await client.patch("/profile", json={"image": uploaded["url"]}, headers=other)
        assert response.status_code == 200
        response = await client.post(
            "/profile/avatar",
            files={"file": ("me.png", self.png(), "image/png")},
            headers=other,
        )
        assert response.status_code == 200

        assert (storage.root / storage.key_from_url(uploaded["url"])).exists()
        media_ids = [
            item["id"]
            for item in (await client.get("/admin/media", headers=owner)).json()["items"]
        ]
        assert uploaded["mediaId"] in media_ids


class TestMediaLibrary:
    """Tests for /admin/media."""

    @staticmethod
    async def upload(client: AsyncClient, headers: dict[str, str]) -> dict[str, Any]:
        buffer = BytesIO()
        Image.new("RGB", (2, 2)).save(buffer, format="PNG")
        response = await client.post(
            "/upload",
            files={"file": ("tiny.png", buffer.getvalue(), "image/png")},
            headers=headers,
        )
        return response.json()

    @pytest.mark.asyncio
    async def test_stats_and_metadata(
        self,
        client: AsyncClient,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test storage totals and alt text updates."""
        headers = auth_headers(await make_user(Role.AUTHOR))
        uploaded = await self.upload(client, headers)

        stats = (await client.get("/admin/media/stats", headers=headers)).json()
        assert stats["mediaCount"] == 1
        assert stats["totalBytes"] == stats["userBytes"] > 0

        response = await client.patch(
            f"/admin/media/{uploaded['mediaId']}",
            json={"altText": "A grey square"},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json()["altText"] == "A grey square"

    @pytest.mark.asyncio
    async def test_delete_requires_editor(
        self,
        client: AsyncClient,
        storage: LocalStorage,
        make_user: UserFactory,
        auth_headers: HeadersFactory,
    ) -> None:
        """Test that authors cannot delete media and editors can."""
        author = auth_headers(await make_user(Role.AUTHOR))
        editor = auth_headers(await make_user(Role.EDITOR))
        uploaded = await self.upload(client, author)
        url = f"/admin/media/{uploaded['mediaId']}"

        assert (await client.delete(url, headers=author)).status_code == 403
        assert (await client.delete(url, headers=editor)).status_code == 204
        assert not (storage.root / storage.key_from_url(uploaded["url"])).exists()
        assert (await client.get("/admin/media", headers=editor)).json()["items"] == []
