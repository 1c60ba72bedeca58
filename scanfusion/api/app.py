"""
ScanFusion API.

This module creates and configures the FastAPI application that exposes
scanner alignment over HTTP.
"""

from typing import Optional
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
import uvicorn

from .. import __version__
from ..core.config import Config
from ..core.exceptions import AlignmentFailed, AlignmentInputError, ReportParseError
from .routers import alignment_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting ScanFusion API...")
    yield
    logger.info("ScanFusion API shutdown complete")


def create_app(config: Optional[Config] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Optional configuration object

    Returns:
        Configured FastAPI application
    """
    if config is None:
        config = Config.load_default()

    app = FastAPI(
        title="ScanFusion API",
        description="Scanner alignment and beacon survey service",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(alignment_router, prefix="/api/v1")

    app.get("/")(root)
    app.get("/api/v1/health")(health_check)
    app.get("/api/v1/health/ready")(readiness_probe)
    app.get("/api/v1/health/live")(liveness_probe)

    app.add_exception_handler(ReportParseError, report_parse_error_handler)
    app.add_exception_handler(AlignmentFailed, alignment_failed_handler)
    app.add_exception_handler(AlignmentInputError, alignment_input_error_handler)

    return app


async def root():
    """Root endpoint with service information."""
    return {
        "name": "ScanFusion API",
        "version": __version__,
        "status": "running",
        "docs_url": "/docs",
        "endpoints": {
            "alignment": "/api/v1/alignment",
            "health": "/api/v1/health",
        },
    }


async def health_check():
    """Basic health check."""
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def readiness_probe():
    return {"status": "ready"}


async def liveness_probe():
    return {"status": "alive"}


async def report_parse_error_handler(request: Request, exc: ReportParseError):
    """Reject malformed scanner reports."""
    logger.warning(f"Rejected report: {exc} - Path: {request.url.path}")
    return JSONResponse(
        status_code=422,
        content={
            "error": "ReportParseError",
            "detail": str(exc),
            "line_number": exc.line_number,
        },
    )


async def alignment_failed_handler(request: Request, exc: AlignmentFailed):
    """Report scanners that could not be placed."""
    logger.warning(f"Alignment failed: {exc} - Path: {request.url.path}")
    return JSONResponse(
        status_code=422,
        content={
            "error": "AlignmentFailed",
            "detail": str(exc),
            "unresolved": list(exc.unresolved),
        },
    )


async def alignment_input_error_handler(request: Request, exc: AlignmentInputError):
    logger.warning(f"Rejected scanner set: {exc} - Path: {request.url.path}")
    return JSONResponse(
        status_code=422,
        content={
            "error": "AlignmentInputError",
            "detail": str(exc),
        },
    )


def run_server(
    host: Optional[str] = None,
    port: Optional[int] = None,
    config: Optional[Config] = None,
) -> None:
    """
    Run the API server.

    Args:
        host: Host to bind to, defaults to the configured host
        port: Port to bind to, defaults to the configured port
        config: Optional configuration
    """
    config = config or Config.load_default()
    app = create_app(config)

    uvicorn.run(
        app,
        host=host or config.api.host,
        port=port or config.api.port,
        log_level=config.logging.level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    run_server()
