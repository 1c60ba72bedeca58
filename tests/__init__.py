"""
Test suite for the ScanFusion platform.

This package contains tests for all modules including:
- Unit tests for the integer geometry and point clouds
- Alignment engine tests against the canonical five-scanner report
- Integration tests for the CLI and the API endpoints
"""

from pathlib import Path

project_root = Path(__file__).parent.parent

# Test configuration
TEST_DATA_DIR = project_root / "tests" / "data"
SCANNER_REPORT = TEST_DATA_DIR / "scanner_report.txt"
EXPECTED_BEACONS = TEST_DATA_DIR / "expected_beacons.txt"

# Known answers for the canonical report
EXPECTED_POSITIONS = [
    (0, 0, 0),
    (68, -1246, -43),
    (1105, -1205, 1229),
    (-92, -2380, -20),
    (-20, -1133, 1061),
]
EXPECTED_BEACON_COUNT = 79
EXPECTED_MAX_DISTANCE = 3621

__all__ = [
    "TEST_DATA_DIR",
    "SCANNER_REPORT",
    "EXPECTED_BEACONS",
    "EXPECTED_POSITIONS",
    "EXPECTED_BEACON_COUNT",
    "EXPECTED_MAX_DISTANCE",
]
