from dataclasses import dataclass, field
from decimal import Decimal
from typing import AsyncGenerator, Awaitable, Callable, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel.pool import StaticPool

from talanta_gallery.core.database import create_all, create_engine, create_sessionmaker
from talanta_gallery.core.database.entities import Artist, Artwork, NotificationPreferences, User
from talanta_gallery.core.database.repositories import RepoBundle, build_repos_from_session
from talanta_gallery.core.models.domain import TokenRole
from talanta_gallery.core.security import create_access_token, hash_password
from talanta_gallery.notifications.mailer import MailDeliveryError, Mailer, OutgoingEmail
from talanta_gallery.server.services.media_storage import MediaStorage

# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ADMIN_PASSWORD = "curator-pass-123"
ARTIST_PASSWORD = "brushstrokes-456"


@dataclass
class RecordingTransport:
    """Mail transport keeping every delivered message in memory."""

    sent: List[OutgoingEmail] = field(default_factory=list)
    fail: bool = False

    async def deliver(self, email: OutgoingEmail, from_email: str) -> None:
        if self.fail:
            raise MailDeliveryError("SMTP connection refused")
        self.sent.append(email)

    def to(self, address: str) -> List[OutgoingEmail]:
        return [email for email in self.sent if email.to == address]


@pytest_asyncio.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    async with create_sessionmaker(test_engine)() as session:
        yield session


@pytest.fixture
def repos(session: AsyncSession) -> RepoBundle:
    return build_repos_from_session(session=session)


@pytest.fixture
def mail_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def mailer(mail_transport: RecordingTransport) -> Mailer:
    return Mailer(
        transport=mail_transport,
        from_email="noreply@talantaart.example.com",
        admin_email="admin@talantaart.example.com",
        site_url="https://gallery.test",
    )


@pytest.fixture
def storage(tmp_path) -> MediaStorage:
    media_storage = MediaStorage(tmp_path / "uploads", public_path="/uploads", max_bytes=64 * 1024)
    media_storage.ensure_directory()
    return media_storage


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession, mailer: Mailer, storage: MediaStorage) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with overridden session, mailer and upload storage."""
    from talanta_gallery.core.database import get_session
    from talanta_gallery.server.main import app
    from talanta_gallery.server.services.deps import get_mailer, get_media_storage

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_media_storage] = lambda: storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_password() -> str:
    return ADMIN_PASSWORD


@pytest.fixture
def artist_password() -> str:
    return ARTIST_PASSWORD


@pytest_asyncio.fixture
async def admin_user(repos: RepoBundle) -> User:
    return await repos.users.create(
        User(
            username="curator",
            email="curator@talantaart.example.com",
            password_hash=hash_password(ADMIN_PASSWORD),
            is_admin=True,
        )
    )


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    return bearer(create_access_token(admin_user.id, TokenRole.admin.value))


ArtistFactory = Callable[..., Awaitable[Artist]]


@pytest.fixture
def make_artist(repos: RepoBundle) -> ArtistFactory:
    """Create an artist with a login account directly in the database."""

    async def _make(
        name: str = "Wanjiru Kamau",
        email: Optional[str] = None,
        username: Optional[str] = None,
        approved: bool = True,
        featured: bool = False,
        specialty: str = "Oil painting",
    ) -> Artist:
        slug = name.lower().replace(" ", "-")
        user = await repos.users.create(
            User(
                username=username or slug,
                email=email or f"{slug}@artists.example.org",
                password_hash=hash_password(ARTIST_PASSWORD),
            )
        )
        artist = await repos.artists.create(
            Artist(
                user_id=user.id,
                name=name,
                slug=slug,
                bio=f"{name} works from Nairobi.",
                specialty=specialty,
                featured=featured,
                approved=approved,
            )
        )
        await repos.notification_preferences.create(NotificationPreferences(artist_id=artist.id))
        return artist

    return _make


@pytest_asyncio.fixture
async def artist(make_artist: ArtistFactory) -> Artist:
    return await make_artist()


@pytest_asyncio.fixture
async def artist_headers(artist: Artist) -> dict:
    return bearer(create_access_token(artist.user_id, TokenRole.artist.value, extra={"artist_id": artist.id}))


@pytest.fixture
def artist_auth() -> Callable[[Artist], dict]:
    """Build the Authorization header for any artist."""

    def _headers(target: Artist) -> dict:
        return bearer(create_access_token(target.user_id, TokenRole.artist.value, extra={"artist_id": target.id}))

    return _headers


ArtworkFactory = Callable[..., Awaitable[Artwork]]


@pytest.fixture
def make_artwork(repos: RepoBundle) -> ArtworkFactory:
    """Create an artwork for an artist directly in the database."""

    async def _make(
        artist: Artist,
        title: str = "Savannah at Dusk",
        price: str = "1500.00",
        category: str = "painting",
        availability: str = "available",
        featured: bool = False,
        description: str = "",
    ) -> Artwork:
        return await repos.artworks.create(
            Artwork(
                artist_id=artist.id,
                title=title,
                description=description,
                price=Decimal(price),
                category=category,
                availability=availability,
                featured=featured,
            )
        )

    return _make
