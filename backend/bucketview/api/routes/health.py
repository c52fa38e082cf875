"""Health check and ping."""

from fastapi import APIRouter, Depends

from bucketview import __version__
from bucketview.schemas.system import HealthResponse
from bucketview.services import get_browser_service
from bucketview.services.browser import BrowserService

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(browser: BrowserService = Depends(get_browser_service)):
    """Liveness plus the state of the bucket listing."""
    return HealthResponse(version=__version__, bucket_status=browser.status.value)


@router.get("/ping")
async def ping():
    """Ultra-lightweight ping."""
    return {"status": "ok"}
