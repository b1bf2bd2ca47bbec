from fastapi import APIRouter

from ats_engine.core.config.scoring import get_scoring_config
from ats_engine.schemas.api import HealthResponse

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    response_model_by_alias=True,
    summary="Health Check",
    description="Check the health status of the application and the loaded scoring config version.",
)
async def health_check():
    return HealthResponse(status="healthy", engine_version=get_scoring_config().version)
