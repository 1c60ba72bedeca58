"""
API routers for the ScanFusion platform.
"""

from .alignment import router as alignment_router

__all__ = [
    "alignment_router",
]
