"""
Student Roster - Main FastAPI Application
"""

import logging
from pathlib import Path
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from .config import Settings, settings
from .api import students_router
from .core import StudentManager
from .core.logging_config import setup_logging
from .middleware import RequestLoggingMiddleware

# Logger will be initialized after setup_logging() is called
logger = logging.getLogger(__name__)


def create_app(config: Settings = settings, manager: Optional[StudentManager] = None) -> FastAPI:
    """
    Build the application around one StudentManager.

    Args:
        config: Settings to use
        manager: Roster to serve; a new empty one if not given
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup and shutdown events."""
        setup_logging(config)

        if config.seed_file:
            count = app.state.manager.load_from_json(Path(config.seed_file).read_text(encoding="utf-8"))
            logger.info(f"Roster seeded with {count} students from {config.seed_file}")

        logger.info(f"Starting {config.app_name} v{config.app_version}")
        logger.info(f"Log level: {config.log_level.upper()}")
        logger.info(f"Debug mode: {config.debug}")
        yield
        logger.info(f"Shutting down {config.app_name}")

    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        description="In-memory student records with instrumented sorting and searching",
        lifespan=lifespan
    )
    app.state.manager = manager if manager is not None else StudentManager()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Added after CORS so it wraps it
    if config.log_api_requests:
        app.add_middleware(RequestLoggingMiddleware)

    app.include_router(students_router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "app": config.app_name,
            "version": config.app_version,
            "status": "running",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "students": len(app.state.manager),
            "version": config.app_version
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "roster.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
