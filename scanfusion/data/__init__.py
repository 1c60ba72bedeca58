"""
Data module for the ScanFusion platform.

This module provides point clouds, the scanner report reader and the
aggregate queries over aligned scanners.
"""

from .transforms import PointCloud, DEFAULT_OVERLAP_THRESHOLD
from .formats import BaseReader, ScannerReportReader
from .utils import distinct_beacons, max_sensor_distance, sensor_positions

__all__ = [
    # Point clouds
    "PointCloud",
    "DEFAULT_OVERLAP_THRESHOLD",
    # Format readers
    "BaseReader",
    "ScannerReportReader",
    # Aggregation
    "distinct_beacons",
    "max_sensor_distance",
    "sensor_positions",
]
