"""Health check endpoint with database connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from charity import __version__
from charity.core.config import settings
from charity.core.database import check_db_connected, get_db
from charity.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """Report liveness and whether the database answers."""
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        version=__version__,
        database="connected" if check_db_connected(db) else "disconnected",
    )
