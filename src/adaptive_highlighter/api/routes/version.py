"""
Version information endpoint.
"""

from fastapi import APIRouter

from ...models.api_models import VersionResponse
from ...version import API_VERSION, get_current_engine_version

router = APIRouter()


@router.get("/version", response_model=VersionResponse)
async def get_version() -> VersionResponse:
    """
    Get current API and engine component versions.

    Returns:
        Version information for audit and debugging
    """
    return VersionResponse(
        api_version=API_VERSION,
        engine_version=get_current_engine_version(),
    )
