"""Health check endpoint with database connectivity check."""

from fastapi import APIRouter

from larder.api.v1.dependencies import DbSession
from larder.core.config import settings
from larder.core.database import check_db_connected
from larder.schemas.common import ApiResponse
from larder.schemas.health import HealthData

router = APIRouter()


@router.get("", response_model=ApiResponse[HealthData])
def get_health(db: DbSession) -> ApiResponse[HealthData]:
    """
    Return service health status and database connectivity.
    Like every v1 route it sits behind the API key gate.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"
    return ApiResponse[HealthData](
        message="Service is up",
        data=HealthData(environment=settings.APP_ENV, database=db_status),
    )
