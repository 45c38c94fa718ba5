"""Unit tests for the user repository."""

from __future__ import annotations

from talanta_gallery.core.database.entities import User


class TestUserRepository:
    async def test_get_by_username(self, repos, admin_user):
        assert (await repos.users.get_by_username("curator")).id == admin_user.id
        assert await repos.users.get_by_username("CURATOR") is None

    async def test_get_by_email_ignores_case(self, repos, admin_user):
        assert (await repos.users.get_by_email("  Curator@TalantaArt.example.com ")).id == admin_user.id

    async def test_find_conflict(self, repos, admin_user):
        assert (await repos.users.find_conflict("curator", "new@example.com")).id == admin_user.id
        assert (await repos.users.find_conflict("someone", "CURATOR@talantaart.example.com")).id == admin_user.id
        assert await repos.users.find_conflict("someone", "new@example.com") is None

    async def test_has_admin(self, repos):
        assert await repos.users.has_admin() is False

        await repos.users.create(User(username="root", email="root@example.com", password_hash="x", is_admin=True))

        assert await repos.users.has_admin() is True

    async def test_search(self, repos, admin_user, artist):
        assert [u.id for u in await repos.users.search(search="CURATOR")] == [admin_user.id]
        assert [u.id for u in await repos.users.search(is_admin=False)] == [artist.user_id]
        assert len(await repos.users.search()) == 2
