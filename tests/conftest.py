import sys

import pytest
from loguru import logger

from scanfusion.core.config import AlignmentConfig, Config
from scanfusion.core.types import Vector3d
from scanfusion.data.formats import ScannerReportReader
from . import EXPECTED_BEACONS, SCANNER_REPORT


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo sinks installed by code under test."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="INFO")


@pytest.fixture(scope="session")
def report_clouds():
    """Clouds of the canonical five-scanner report."""
    return ScannerReportReader(SCANNER_REPORT).load()


@pytest.fixture(scope="session")
def expected_beacons():
    with open(EXPECTED_BEACONS) as f:
        return {Vector3d.parse(line.strip()) for line in f if line.strip()}


@pytest.fixture
def config():
    """Configuration isolated from the environment and config files."""
    return Config(alignment=AlignmentConfig(), testing=True)
