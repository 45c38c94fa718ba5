"""Unit tests for the exhibition repository."""

from __future__ import annotations

from datetime import datetime

from talanta_gallery.core.database.entities import Exhibition


async def _exhibition(repos, title: str, month: int, current: bool = False) -> Exhibition:
    return await repos.exhibitions.create(
        Exhibition(
            title=title,
            start_date=datetime(2026, month, 1),
            end_date=datetime(2026, month, 28),
            current=current,
        )
    )


class TestExhibitionRepository:
    async def test_list_newest_start_first(self, repos):
        await _exhibition(repos, "Spring", 3)
        await _exhibition(repos, "Summer", 6)

        assert [e.title for e in await repos.exhibitions.list_exhibitions()] == ["Summer", "Spring"]
        assert [e.title for e in await repos.exhibitions.list_exhibitions(limit=1, offset=1)] == ["Spring"]

    async def test_get_current(self, repos):
        assert await repos.exhibitions.get_current() is None

        await _exhibition(repos, "Spring", 3)
        await _exhibition(repos, "Coastlines", 5, current=True)

        assert (await repos.exhibitions.get_current()).title == "Coastlines"

    async def test_clear_current_keeps_exception(self, repos):
        old = await _exhibition(repos, "Old", 2, current=True)
        new = await _exhibition(repos, "New", 4, current=True)

        await repos.exhibitions.clear_current(except_id=new.id)
        await repos.commit()
        await repos.session.refresh(old)
        await repos.session.refresh(new)

        assert old.current is False
        assert new.current is True

    async def test_clear_current_all(self, repos):
        await _exhibition(repos, "Old", 2, current=True)

        await repos.exhibitions.clear_current()
        await repos.commit()

        assert await repos.exhibitions.get_current() is None
