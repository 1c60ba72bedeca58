"""
Request and response models for the ScanFusion API.
"""

from typing import Optional

from pydantic import BaseModel, Field

from ..core.engine import SurveyReport


class AlignmentRequest(BaseModel):
    """Request to align a scanner report."""
    report: str = Field(..., min_length=1, description="Scanner report text, blocks separated by blank lines")
    overlap_threshold: Optional[int] = Field(None, ge=1, description="Override for the minimum shared beacon count")
    max_passes: Optional[int] = Field(None, ge=1, description="Override for the alignment pass budget")


class AlignmentResponse(SurveyReport):
    """Survey figures for an aligned report."""


class ErrorResponse(BaseModel):
    """Error body returned for rejected reports."""
    error: str
    detail: str
