"""
Core module for the ScanFusion platform.

This module provides the integer geometry types, configuration management,
the alignment engine and the pipeline orchestrator.
"""

from .types import (
    Vector3d,
    RotationMatrix,
    ORIENTATIONS,
    IDENTITY,
    ZERO,
)
from .exceptions import ScanFusionError, ReportParseError, AlignmentFailed, AlignmentInputError
from .config import Config, ConfigManager, AlignmentConfig, LoggingConfig, APIConfig
from .utils import Timer, ProgressTracker, setup_logging
from .alignment import AlignmentEngine, Resolved, Unresolved, SensorState
from .engine import Engine, SurveyReport

__all__ = [
    # Engine
    "Engine",
    "SurveyReport",
    "AlignmentEngine",
    "Resolved",
    "Unresolved",
    "SensorState",
    # Configuration
    "Config",
    "ConfigManager",
    "AlignmentConfig",
    "LoggingConfig",
    "APIConfig",
    # Types
    "Vector3d",
    "RotationMatrix",
    "ORIENTATIONS",
    "IDENTITY",
    "ZERO",
    # Errors
    "ScanFusionError",
    "ReportParseError",
    "AlignmentFailed",
    "AlignmentInputError",
    # Utils
    "Timer",
    "ProgressTracker",
    "setup_logging",
]
