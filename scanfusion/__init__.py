"""
ScanFusion: scanner alignment and beacon survey.

Independent scanners each report nearby beacons in their own coordinate
frame, with unknown position and one of 24 axis-aligned orientations.
ScanFusion recovers every scanner's placement from the beacons they share
and reports the survey of the whole region.

Features:
- Exact integer geometry over the 24 cube rotations
- Overlap search between scanner point clouds
- Fixed-point alignment of all scanners into one global frame
- Distinct beacon count and maximum scanner separation
- Command line and HTTP interfaces
"""

__version__ = "1.0.0"
__license__ = "MIT"

from .core import (
    Engine,
    SurveyReport,
    AlignmentEngine,
    Resolved,
    Unresolved,
    Config,
    Vector3d,
    RotationMatrix,
    ORIENTATIONS,
    ScanFusionError,
    ReportParseError,
    AlignmentFailed,
    AlignmentInputError,
)
from .data import (
    PointCloud,
    ScannerReportReader,
    distinct_beacons,
    max_sensor_distance,
)

__all__ = [
    "__version__",
    "Engine",
    "SurveyReport",
    "AlignmentEngine",
    "Resolved",
    "Unresolved",
    "Config",
    "Vector3d",
    "RotationMatrix",
    "ORIENTATIONS",
    "ScanFusionError",
    "ReportParseError",
    "AlignmentFailed",
    "AlignmentInputError",
    "PointCloud",
    "ScannerReportReader",
    "distinct_beacons",
    "max_sensor_distance",
]
