"""
Core Engine for the ScanFusion platform.

The Engine ties the pipeline together: scanner reports are parsed into
point clouds, every scanner is aligned into the global frame, and the
aligned clouds are reduced to the survey figures.
"""

from typing import Iterable, List, Optional, Sequence, Union
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, Field

from .alignment import AlignmentEngine, Resolved
from .config import Config
from .utils import Timer
from ..data.formats import ScannerReportReader
from ..data.transforms import PointCloud
from ..data.utils import distinct_beacons, max_sensor_distance, sensor_positions


class SurveyReport(BaseModel):
    """Result of aligning a full set of scanner reports."""

    scanner_count: int = Field(..., ge=0, description="Number of scanners in the report")
    distinct_beacon_count: int = Field(..., ge=0, description="Distinct beacons in the global frame")
    max_sensor_distance: int = Field(..., ge=0, description="Largest Manhattan distance between two scanners")
    scanner_positions: List[List[int]] = Field(default_factory=list, description="Scanner positions [x, y, z]")
    passes: int = Field(0, ge=0, description="Alignment passes needed")
    duration_seconds: float = Field(0.0, ge=0, description="Wall-clock alignment time")

    def summary_lines(self) -> List[str]:
        """Human-readable summary, one figure per line."""
        return [
            f"Distinct beacons: {self.distinct_beacon_count}",
            f"Max distance between sensors: {self.max_sensor_distance}",
        ]


class Engine:
    """
    Main engine for ScanFusion.

    This class coordinates parsing, alignment and aggregation and provides
    a single entry point for the CLI and the API.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize the engine.

        Args:
            config: Configuration object, defaults to loading from config files
        """
        self.config = config or Config.load_default()
        self.timer = Timer()
        self.aligner = AlignmentEngine(self.config.alignment)

    def align(
        self,
        clouds: Sequence[PointCloud],
        visit_order: Optional[Sequence[int]] = None,
    ) -> List[Resolved]:
        """Place every scanner in the global frame."""
        with self.timer.measure("alignment", scanners=len(clouds)):
            return self.aligner.align(clouds, visit_order=visit_order)

    def survey(
        self,
        clouds: Sequence[PointCloud],
        visit_order: Optional[Sequence[int]] = None,
    ) -> SurveyReport:
        """
        Align scanners and compute the survey figures.

        Args:
            clouds: Local cloud of each scanner
            visit_order: Optional order for the alignment passes

        Returns:
            Survey report
        """
        logger.info(
            f"Surveying {len(clouds)} scanners "
            f"(overlap threshold {self.config.alignment.overlap_threshold})"
        )

        alignments = self.align(clouds, visit_order=visit_order)
        beacons = distinct_beacons(clouds, alignments)

        report = SurveyReport(
            scanner_count=len(clouds),
            distinct_beacon_count=len(beacons),
            max_sensor_distance=max_sensor_distance(alignments),
            scanner_positions=[list(p.as_tuple()) for p in sensor_positions(alignments)],
            passes=self.aligner.passes,
            duration_seconds=self.timer.get_last_duration("alignment"),
        )

        logger.info(
            f"Survey complete: {report.distinct_beacon_count} beacons, "
            f"max scanner distance {report.max_sensor_distance}"
        )
        return report

    def survey_lines(self, lines: Iterable[str]) -> SurveyReport:
        """Parse report lines and survey them."""
        return self.survey(ScannerReportReader.from_lines(lines))

    def survey_file(self, path: Union[str, Path]) -> SurveyReport:
        """Load a report file and survey it."""
        return self.survey(ScannerReportReader(path).load())
