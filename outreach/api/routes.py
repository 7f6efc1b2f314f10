from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session

from outreach.core.config import get_settings
from outreach.core.database import check_connection, get_db
from outreach.dashboard.api import router as dashboard_router
from outreach.hotels.api import router as hotels_router
from outreach.metrics import generate_metrics_payload, metrics_content_type
from outreach.regions.api import router as regions_router
from outreach.users.api import router as users_router

router = APIRouter()
router.include_router(hotels_router)
router.include_router(dashboard_router)
router.include_router(regions_router)
router.include_router(users_router)


@router.get("/api/health", tags=["system"])
def health() -> dict[str, str]:
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.app_env,
    }


@router.get("/api/health/db", tags=["system"])
def health_db(db: Session = Depends(get_db)) -> JSONResponse:
    settings = get_settings()
    if check_connection(db):
        return JSONResponse(content={"status": "ok", "database": "connected"})
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "error",
            "message": "database connection failed",
            "databaseUrlConfigured": bool(settings.database_url),
            "dbParamsConfigured": settings.has_db_params,
        },
    )


@router.get("/metrics", tags=["system"])
def metrics() -> Response:
    settings = get_settings()
    if not settings.metrics_enabled:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
    return Response(content=generate_metrics_payload(), media_type=metrics_content_type())
