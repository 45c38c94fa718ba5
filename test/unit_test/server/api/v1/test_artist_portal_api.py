"""
API tests for the artist portal: profile, own artworks and orders that
include the artist's work.
"""

from decimal import Decimal

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


class TestProfile:
    async def test_get_profile(self, client: AsyncClient, artist, artist_headers):
        response = await client.get("/api/artists/profile", headers=artist_headers)

        assert response.status_code == 200
        assert response.json()["id"] == artist.id
        assert response.json()["status"] == "approved"

    async def test_update_profile_reslugs_on_rename(self, client: AsyncClient, artist_headers, make_artist):
        await make_artist(name="Njeri Wambui")

        response = await client.put(
            "/api/artists/profile", json={"name": "Njeri Wambui", "bio": "Printmaker"}, headers=artist_headers
        )

        assert response.status_code == 200
        assert response.json()["slug"] == "njeri-wambui-2"
        assert response.json()["bio"] == "Printmaker"

    async def test_profile_update_cannot_self_approve_or_feature(self, client: AsyncClient, artist_headers):
        response = await client.put(
            "/api/artists/profile", json={"featured": True, "approved": False}, headers=artist_headers
        )

        assert response.status_code == 200
        assert response.json()["featured"] is False
        assert response.json()["approved"] is True

    async def test_null_name_is_rejected(self, client: AsyncClient, artist, artist_headers):
        response = await client.put("/api/artists/profile", json={"name": None}, headers=artist_headers)

        assert response.status_code == 400
        assert response.json()["errors"][0]["loc"] == ["body", "name"]

    async def test_profile_requires_token(self, client: AsyncClient):
        response = await client.get("/api/artists/profile")
        assert response.status_code == 401

    async def test_admin_token_is_not_an_artist(self, client: AsyncClient, admin_headers):
        response = await client.get("/api/artists/profile", headers=admin_headers)
        assert response.status_code == 403


class TestOwnArtworks:
    async def test_create_and_list(self, client: AsyncClient, artist, artist_headers):
        created = await client.post(
            "/api/artists/artworks",
            json={"title": "Tea Pickers", "price": "3400.00", "category": "photography", "medium": "Giclée print"},
            headers=artist_headers,
        )

        assert created.status_code == 201
        assert created.json()["artist_id"] == artist.id
        listed = await client.get("/api/artists/artworks", headers=artist_headers)
        assert [a["title"] for a in listed.json()] == ["Tea Pickers"]

    async def test_artist_id_in_body_is_ignored(self, client: AsyncClient, artist, artist_headers, make_artist):
        other = await make_artist(name="Otieno Ouma")

        created = await client.post(
            "/api/artists/artworks",
            json={"title": "Mine", "price": "10", "artist_id": other.id},
            headers=artist_headers,
        )

        assert created.json()["artist_id"] == artist.id

    async def test_update_and_delete_own(self, client: AsyncClient, artist, artist_headers, make_artwork):
        artwork = await make_artwork(artist)

        updated = await client.put(
            f"/api/artists/artworks/{artwork.id}", json={"price": "1750.00"}, headers=artist_headers
        )
        deleted = await client.delete(f"/api/artists/artworks/{artwork.id}", headers=artist_headers)

        assert Decimal(updated.json()["price"]) == Decimal("1750.00")
        assert deleted.json() == {"message": "Artwork deleted"}

    async def test_other_artists_artwork_is_not_found(
        self, client: AsyncClient, artist_headers, make_artist, make_artwork
    ):
        other = await make_artist(name="Otieno Ouma")
        theirs = await make_artwork(other, title="Theirs")

        updated = await client.put(f"/api/artists/artworks/{theirs.id}", json={"title": "Stolen"}, headers=artist_headers)
        deleted = await client.delete(f"/api/artists/artworks/{theirs.id}", headers=artist_headers)

        assert updated.status_code == 404
        assert deleted.status_code == 404
        assert (await client.get(f"/api/artworks/{theirs.id}")).json()["title"] == "Theirs"

    async def test_availability_and_featured_are_not_artist_editable(
        self, client: AsyncClient, repos, artist, artist_headers, make_artwork
    ):
        artwork = await make_artwork(artist, title="Sold Sunrise", availability="sold")

        updated = await client.put(
            f"/api/artists/artworks/{artwork.id}",
            json={"title": "Sunrise, Lamu", "availability": "available", "featured": True},
            headers=artist_headers,
        )

        assert updated.status_code == 200
        assert updated.json()["title"] == "Sunrise, Lamu"
        assert updated.json()["availability"] == "sold"
        assert updated.json()["featured"] is False
        await repos.session.refresh(artwork)
        assert artwork.availability == "sold"

    async def test_new_artwork_starts_available_and_unfeatured(self, client: AsyncClient, artist_headers):
        created = await client.post(
            "/api/artists/artworks",
            json={"title": "Self Portrait", "price": "90", "availability": "sold", "featured": True},
            headers=artist_headers,
        )

        assert created.status_code == 201
        assert created.json()["availability"] == "available"
        assert created.json()["featured"] is False

    @pytest.mark.parametrize("field", ["title", "description", "price", "category"])
    async def test_null_for_required_field_is_rejected(
        self, client: AsyncClient, repos, artist, artist_headers, make_artwork, field
    ):
        artwork = await make_artwork(artist, title="Kept Title")

        response = await client.put(f"/api/artists/artworks/{artwork.id}", json={field: None}, headers=artist_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Validation failed"
        await repos.session.refresh(artwork)
        assert artwork.title == "Kept Title"

    async def test_image_url_can_be_cleared(self, client: AsyncClient, artist, artist_headers, make_artwork):
        artwork = await make_artwork(artist)

        response = await client.put(
            f"/api/artists/artworks/{artwork.id}", json={"image_url": None}, headers=artist_headers
        )

        assert response.status_code == 200
        assert response.json()["image_url"] is None


class TestOwnOrders:
    async def test_orders_including_own_work(
        self, client: AsyncClient, artist, artist_headers, make_artist, make_artwork
    ):
        other = await make_artist(name="Otieno Ouma")
        mine = await make_artwork(artist, title="Mine")
        theirs = await make_artwork(other, title="Theirs")

        def order(*artwork_ids):
            return {
                "customer_email": "buyer@example.com",
                "customer_name": "Buyer",
                "items": [{"artwork_id": artwork_id} for artwork_id in artwork_ids],
            }

        mixed = (await client.post("/api/orders", json=order(mine.id, theirs.id))).json()
        await client.post("/api/orders", json=order(theirs.id))

        response = await client.get("/api/artists/orders", headers=artist_headers)

        assert [o["id"] for o in response.json()] == [mixed["id"]]
        assert {i["artwork_title"] for i in response.json()[0]["items"]} == {"Mine", "Theirs"}
