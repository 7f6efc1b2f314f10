from contextlib import asynccontextmanager
import logging

import uvicorn
from fastapi import FastAPI
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from outreach.api.routes import router as api_router
from outreach.core.config import get_settings
from outreach.core.database import SessionLocal, close_database, open_database
from outreach.errors import StorageUnavailableError, register_error_handlers
from outreach.logging import configure_logging
from outreach.middleware.correlation_id import CorrelationIdMiddleware
from outreach.middleware.request_logging import RequestLoggingMiddleware
from outreach.otel import get_fastapi_server_request_hook, setup_otel
from outreach.seed import seed_reference_data


configure_logging()
logger = logging.getLogger("outreach.lifecycle")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    try:
        open_database()
    except StorageUnavailableError as exc:
        # Keep serving; every storage-backed request will answer 503.
        logger.error("database.unavailable", extra={"error": str(exc.detail)})
    else:
        if settings.seed_reference_data:
            with SessionLocal() as session:
                seed_reference_data(session)
    logger.info("service.started")
    yield
    close_database()
    logger.info("service.stopped")


app = FastAPI(title="Hotel Outreach API", version="0.1.0", lifespan=lifespan)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(CorrelationIdMiddleware)
register_error_handlers(app)
app.include_router(api_router)

settings = get_settings()
if settings.otel_enabled:
    setup_otel("outreach-api", True)

if not getattr(app, "_is_instrumented_by_opentelemetry", False):
    FastAPIInstrumentor().instrument_app(app, server_request_hook=get_fastapi_server_request_hook())


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_config=None)
