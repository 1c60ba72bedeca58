"""
FastAPI application for the ScanFusion platform.

This module provides REST endpoints for scanner report alignment.
"""

from .app import create_app, run_server
from .routers import alignment_router
from .models import AlignmentRequest, AlignmentResponse, ErrorResponse

__all__ = [
    "create_app",
    "run_server",
    # Routers
    "alignment_router",
    # Models
    "AlignmentRequest",
    "AlignmentResponse",
    "ErrorResponse",
]
