"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request monitoring), registers the exception handlers, includes all API
routers and serves uploaded files. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from talanta_gallery.core.database import async_session_maker, init_db
from talanta_gallery.core.database.repositories import build_repos_from_session
from talanta_gallery.core.logging_config import get_logger, setup_logging
from talanta_gallery.core.monitoring import initialize_logfire

from .api.v1 import (
    admin,
    artist_account,
    artist_portal,
    artists,
    artworks,
    blog,
    contact,
    exhibitions,
    health,
    media,
    newsletter,
    orders,
    search,
    user_accounts,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestMonitoringMiddleware
from .services.accounts import bootstrap_admin
from .services.deps import get_media_storage

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    On startup: create missing tables, bootstrap the admin account when none
    exists and make sure the upload directory is present.
    """
    # Startup
    logger.info(f"Starting up {constant.PROJECT_NAME} server...")
    try:
        await init_db()
        logger.info("Database initialized successfully")
        async with async_session_maker() as session:
            await bootstrap_admin(build_repos_from_session(session=session), settings.admin_bootstrap)
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    get_media_storage().ensure_directory()

    yield

    # Shutdown
    logger.info(f"Shutting down {constant.PROJECT_NAME} server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Talanta Art Gallery API

    Backend of the gallery storefront and back-office: artists and their
    approval workflow, the artwork catalogue, exhibitions, orders, media,
    blog, newsletter and contact email.
    """,
    version="1.0.0",
    openapi_url=f"{constant.API_PREFIX}/openapi.json",
    docs_url=f"{constant.API_PREFIX}/docs",
    redoc_url=f"{constant.API_PREFIX}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestMonitoringMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

api = constant.API_PREFIX

app.include_router(health.router, prefix=api, tags=["health"])
app.include_router(admin.router, prefix=f"{api}/admin", tags=["admin"])
# Portal routes share the /artists prefix and must be matched before /artists/{artist_id}
app.include_router(artist_portal.router, prefix=f"{api}/artists", tags=["artist portal"])
app.include_router(artists.router, prefix=f"{api}/artists", tags=["artists"])
app.include_router(artist_account.router, prefix=f"{api}/artist", tags=["artist account"])
app.include_router(artworks.router, prefix=f"{api}/artworks", tags=["artworks"])
app.include_router(search.router, prefix=f"{api}/search", tags=["search"])
app.include_router(exhibitions.router, prefix=f"{api}/exhibitions", tags=["exhibitions"])
app.include_router(orders.router, prefix=f"{api}/orders", tags=["orders"])
app.include_router(media.router, prefix=f"{api}/media", tags=["media"])
app.include_router(newsletter.router, prefix=f"{api}/newsletter", tags=["newsletter"])
app.include_router(blog.router, prefix=f"{api}/blog", tags=["blog"])
app.include_router(contact.router, prefix=f"{api}/contact", tags=["contact"])
app.include_router(user_accounts.router, prefix=f"{api}/user-accounts", tags=["user accounts"])

app.mount(
    settings.uploads.public_path,
    StaticFiles(directory=settings.uploads.directory, check_dir=False),
    name="uploads",
)


def run() -> None:
    import uvicorn

    uvicorn.run(
        "talanta_gallery.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
