"""Unit tests for slugs, back-office artist management and the artist purge."""

import pytest

from talanta_gallery.core.database.entities import MediaFile
from talanta_gallery.core.errors import ConflictError, NotFoundError
from talanta_gallery.core.models.io.artists import ArtistCreate, ArtistUpdate
from talanta_gallery.server.services.artists import ArtistAdminService, purge_artist, slugify, unique_slug


class TestSlugify:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Amani Wanjiru-Kamau", "amani-wanjiru-kamau"),
            ("  Élodie   Ngũgĩ  ", "elodie-ngugi"),
            ("Studio 54!!", "studio-54"),
            ("---", "artist"),
            ("", "artist"),
        ],
    )
    def test_slugify(self, value, expected):
        assert slugify(value) == expected


@pytest.mark.asyncio
class TestUniqueSlug:
    async def test_suffixes_on_conflict(self, repos, make_artist):
        await make_artist(name="Wanjiru Kamau")
        await make_artist(name="Wanjiru Kamau 2", email="w2@artists.example.org", username="w2")

        assert await unique_slug(repos.artists, "Wanjiru Kamau") == "wanjiru-kamau-3"

    async def test_requested_slug_wins_over_name(self, repos):
        assert await unique_slug(repos.artists, "Wanjiru Kamau", "The Kamau Studio") == "the-kamau-studio"


@pytest.mark.asyncio
class TestPurgeArtist:
    async def test_nothing_is_committed_by_purge(self, repos, artist, make_artwork):
        await make_artwork(artist)
        artist_id, user_id = artist.id, artist.user_id

        result = await purge_artist(repos, artist)
        await repos.rollback()

        assert result.artworks_deleted == 1
        assert await repos.artists.get_by_id(artist_id) is not None
        assert await repos.users.get_by_id(user_id) is not None

    async def test_keep_user(self, repos, artist):
        await purge_artist(repos, artist, delete_user=False)
        await repos.commit()

        assert await repos.artists.get_by_id(artist.id) is None
        assert await repos.users.get_by_id(artist.user_id) is not None

    async def test_returns_media_paths(self, repos, artist):
        await repos.media.create(
            MediaFile(
                artist_id=artist.id,
                filename="f.png",
                original_name="f.png",
                mime_type="image/png",
                media_type="image",
                size=3,
                url="/uploads/f.png",
                path="/srv/uploads/f.png",
            )
        )

        result = await purge_artist(repos, artist)
        await repos.commit()

        assert result.media_deleted == 1
        assert result.media_paths == ["/srv/uploads/f.png"]


@pytest.mark.asyncio
class TestArtistAdminService:
    async def test_create_is_approved_without_login(self, repos):
        artist = await ArtistAdminService(repos).create(ArtistCreate(name="Estate of Elimo Njau"))

        assert artist.approved is True
        assert artist.approved_at is not None
        assert artist.user_id is None

    async def test_create_with_taken_slug(self, repos, artist):
        with pytest.raises(ConflictError, match="'wanjiru-kamau' is already in use"):
            await ArtistAdminService(repos).create(ArtistCreate(name="Someone Else", slug="Wanjiru Kamau"))

    async def test_update_keeps_slug_when_name_unchanged(self, repos, artist):
        updated = await ArtistAdminService(repos).update(
            artist.id, ArtistUpdate(name="Wanjiru Kamau", featured=True)
        )

        assert updated.slug == "wanjiru-kamau"
        assert updated.featured is True

    async def test_unknown_artist(self, repos):
        service = ArtistAdminService(repos)

        with pytest.raises(NotFoundError, match="Artist 77 not found"):
            await service.get(77)
        with pytest.raises(NotFoundError):
            await service.delete(77)
