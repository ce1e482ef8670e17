"""
HoopCoach API — FastAPI application factory.
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hoopcoach.ai.client import VisionClient, get_vision_client
from hoopcoach.api.middleware import RequestLoggingMiddleware
from hoopcoach.api.routes_analysis import router as analysis_router
from hoopcoach.api.routes_shots import router as shots_router
from hoopcoach.api.routes_timeline import router as timeline_router
from hoopcoach.config import Settings, configure_logging, get_settings


def create_app(settings: Optional[Settings] = None, client: Optional[VisionClient] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The vision client is built here once and shared through ``app.state``.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="HoopCoach API",
        description="AI shooting-form feedback synchronised to basketball video playback.",
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings
    app.state.vision_client = client if client is not None else get_vision_client(settings)

    # ── Middleware ──────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    # ── Routes ──────────────────────────────────────────
    prefix = settings.API_PREFIX
    app.include_router(analysis_router, prefix=f"{prefix}/analysis", tags=["Analysis"])
    app.include_router(shots_router, prefix=f"{prefix}/shots", tags=["Shots"])
    app.include_router(timeline_router, prefix=f"{prefix}/timeline", tags=["Timeline"])

    # ── Health check ────────────────────────────────────
    @app.get("/health", tags=["System"])
    async def health_check():
        return {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT.value,
            "vision_client": type(app.state.vision_client).__name__ if app.state.vision_client else None,
        }

    @app.get("/", tags=["System"])
    async def root():
        return {
            "app": "HoopCoach",
            "tagline": "AI shot feedback on your own video",
            "version": settings.APP_VERSION,
            "docs": "/docs",
        }

    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("hoopcoach.api.app:app", host=settings.API_HOST, port=settings.API_PORT)


# Module-level app instance for `uvicorn hoopcoach.api.app:app`
app = create_app()
