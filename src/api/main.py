"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI
from pymongo.errors import PyMongoError

from catalog.presentation import routes as catalog_routes
from contact.presentation import routes as contact_routes
from dashboard.presentation import routes as dashboard_routes
from infrastructure.database.dependencies import (
    MongoConnectionCache,
    close_database_connection,
    create_connection_cache,
    get_connection_cache,
    get_connection_probe,
    install_connection_cache,
)
from infrastructure.database.exceptions import DatabaseError
from infrastructure.logging import configure_logging
from infrastructure.observability import ConnectionProbe, DefaultStartupProbe
from infrastructure.settings import get_mongo_settings, get_settings
from infrastructure.version import __version__
from purchases.presentation import routes as purchase_routes
from users.presentation import routes as user_routes


@asynccontextmanager
async def rasman_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Settings validation (a missing or malformed MONGODB_URI aborts startup)
    - The process-wide connection cache (connects lazily, closed on shutdown)
    """
    configure_logging(debug=get_settings().debug)
    mongo_settings = get_mongo_settings()
    probe = DefaultStartupProbe()

    cache = create_connection_cache(mongo_settings)
    install_connection_cache(app, cache)
    probe.application_started(
        version=__version__, database=mongo_settings.redacted_uri
    )

    yield

    await close_database_connection(cache, mongo_settings)
    probe.application_stopped()


app = FastAPI(
    title="Rasman Music API",
    description=(
        "Music catalog, purchases, admin dashboard, user management and "
        "contact form for Rasman Music"
    ),
    version=__version__,
    lifespan=rasman_lifespan,
)

app.include_router(catalog_routes.router)
app.include_router(purchase_routes.router)
app.include_router(dashboard_routes.router)
app.include_router(user_routes.router)
app.include_router(contact_routes.router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/db")
async def health_db(
    cache: Annotated[MongoConnectionCache, Depends(get_connection_cache)],
    probe: Annotated[ConnectionProbe, Depends(get_connection_probe)],
) -> dict:
    """Check database connection health.

    Failure details are reported through the probe, never returned.
    """
    try:
        client = await cache.acquire()
        await client.admin.command("ping")
    except (DatabaseError, PyMongoError) as e:
        probe.health_check_failed(target=cache.display_target, error=e)
        return {"status": "error", "connected": False}

    return {"status": "ok", "connected": True}
