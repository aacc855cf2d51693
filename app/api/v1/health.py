"""Health check endpoint: database, profile cache and email delivery status."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_profile_cache
from app.core.config import Settings, get_settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse
from app.services.cache import ProfileCache

router = APIRouter()

_CACHE_STATES = {True: "up", False: "down", None: "disabled"}


@router.get("/", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    cache: Annotated[ProfileCache, Depends(get_profile_cache)],
) -> HealthResponse:
    """
    Always 200 so load balancers can read the body; status is 'degraded' without a database.
    A cache outage does not degrade: profile reads fall through to the database.
    """
    db_ok = check_db_connected(db)
    return HealthResponse(
        status="ok" if db_ok else "degraded",
        environment=settings.APP_ENV,
        database="connected" if db_ok else "disconnected",
        profile_cache=_CACHE_STATES[cache.ping()],
        email="configured" if settings.smtp_configured else "disabled",
    )
