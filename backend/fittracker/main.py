"""
FitTracker Backend - FastAPI Application
"""
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fittracker import __version__
from fittracker.api import backup, insights, metrics, preferences, routines, sessions
from fittracker.core.config import settings
from fittracker.core.database import init_db
from fittracker.core.logging import bind_request_context, get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(
        "Starting FitTracker Backend",
        version=__version__,
        default_focus=settings.DEFAULT_RECOMP_FOCUS,
    )
    await init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down FitTracker Backend")


app = FastAPI(
    title="FitTracker API",
    description="Workout logging and coaching insights backend",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Tag the request's log lines and report status and timing."""
    request_id = bind_request_context(request.method, request.url.path)
    started = time.perf_counter()

    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            "Request failed",
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        response = JSONResponse(status_code=500, content={"detail": "Internal server error"})
    else:
        logger.info(
            "Request handled",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )

    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(sessions.router, prefix="/api/sessions", tags=["sessions"])
app.include_router(insights.router, prefix="/api/insights", tags=["insights"])
app.include_router(preferences.router, prefix="/api/preferences", tags=["preferences"])
app.include_router(metrics.router, prefix="/api/metrics", tags=["metrics"])
app.include_router(backup.router, prefix="/api/backup", tags=["backup"])
app.include_router(routines.router, prefix="/api/routines", tags=["routines"])


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "fittracker-backend", "version": __version__}
