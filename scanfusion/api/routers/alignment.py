"""
Alignment API endpoints.

This module exposes the survey pipeline over HTTP: a scanner report is
posted as text and the survey figures are returned.
"""

from dataclasses import replace

from fastapi import APIRouter, HTTPException, Request
from loguru import logger

from ...core.config import Config
from ...core.engine import Engine
from ...data.formats import ScannerReportReader
from ..models import AlignmentRequest, AlignmentResponse, ErrorResponse

router = APIRouter(prefix="/alignment", tags=["alignment"])


def _request_config(base: Config, request: AlignmentRequest) -> Config:
    alignment = base.alignment
    if request.overlap_threshold is not None:
        alignment = replace(alignment, overlap_threshold=request.overlap_threshold)
    if request.max_passes is not None:
        alignment = replace(alignment, max_passes=request.max_passes)

    return Config(
        alignment=alignment,
        logging=base.logging,
        api=base.api,
        environment=base.environment,
        debug=base.debug,
        testing=base.testing,
    )


@router.post(
    "",
    response_model=AlignmentResponse,
    responses={422: {"model": ErrorResponse}},
)
def align_report(payload: AlignmentRequest, request: Request) -> AlignmentResponse:
    """
    Align every scanner in a report.

    Parse and alignment failures are reported with status 422.
    """
    config: Config = request.app.state.config

    lines = payload.report.splitlines()
    if len(lines) > config.api.max_report_lines:
        raise HTTPException(
            status_code=413,
            detail=f"Report has {len(lines)} lines, limit is {config.api.max_report_lines}",
        )

    clouds = ScannerReportReader.from_lines(lines)
    if not clouds:
        raise HTTPException(status_code=422, detail="Report contains no scanners")

    logger.info(f"Alignment request with {len(clouds)} scanners")

    engine = Engine(_request_config(config, payload))
    report = engine.survey(clouds)
    return AlignmentResponse(**report.model_dump())
