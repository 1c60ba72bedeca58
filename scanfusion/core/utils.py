"""
Utility classes and functions for the ScanFusion platform.

This module provides timing, progress tracking and logging setup.
"""

import sys
import time
import threading
from typing import Dict, Any, Optional, List
from contextlib import contextmanager
from dataclasses import dataclass

import numpy as np
from loguru import logger

from .config import LoggingConfig


@dataclass
class TimingResult:
    """Result of a timing operation."""
    name: str
    duration: float
    start_time: float
    end_time: float
    metadata: Dict[str, Any]


class Timer:
    """
    High-precision timer for performance monitoring.

    Supports context managers and manual timing.
    """

    def __init__(self):
        self.timings: Dict[str, List[TimingResult]] = {}
        self._active_timers: Dict[str, float] = {}
        self._lock = threading.Lock()

    @contextmanager
    def measure(self, name: str, **metadata):
        """
        Context manager for timing code blocks.

        Args:
            name: Name of the timing operation
            **metadata: Additional metadata to store
        """
        start_time = time.perf_counter()
        try:
            yield
        finally:
            end_time = time.perf_counter()
            self._record(name, start_time, end_time, metadata)

    def start(self, name: str) -> None:
        """Start a named timer."""
        with self._lock:
            self._active_timers[name] = time.perf_counter()

    def stop(self, name: str, **metadata) -> float:
        """
        Stop a named timer and return duration.

        Args:
            name: Name of the timer
            **metadata: Additional metadata

        Returns:
            Duration in seconds
        """
        end_time = time.perf_counter()

        with self._lock:
            if name not in self._active_timers:
                raise ValueError(f"Timer '{name}' was not started")
            start_time = self._active_timers.pop(name)

        return self._record(name, start_time, end_time, metadata).duration

    def _record(self, name: str, start_time: float, end_time: float, metadata: Dict[str, Any]) -> TimingResult:
        result = TimingResult(
            name=name,
            duration=end_time - start_time,
            start_time=start_time,
            end_time=end_time,
            metadata=metadata,
        )
        with self._lock:
            self.timings.setdefault(name, []).append(result)
        return result

    def get_stats(self, name: str) -> Dict[str, float]:
        """
        Get statistics for a named timer.

        Args:
            name: Timer name

        Returns:
            Statistics dictionary
        """
        if name not in self.timings:
            return {}

        durations = [t.duration for t in self.timings[name]]

        return {
            "count": len(durations),
            "total": sum(durations),
            "mean": float(np.mean(durations)),
            "median": float(np.median(durations)),
            "std": float(np.std(durations)),
            "min": min(durations),
            "max": max(durations),
        }

    def get_last_duration(self, name: Optional[str] = None) -> float:
        """Get duration of last timing operation."""
        if name:
            if name in self.timings and self.timings[name]:
                return self.timings[name][-1].duration
            return 0.0

        all_timings = [t for timing_list in self.timings.values() for t in timing_list]
        if all_timings:
            return max(all_timings, key=lambda t: t.end_time).duration
        return 0.0

    def clear(self, name: Optional[str] = None) -> None:
        """Clear timing history."""
        with self._lock:
            if name:
                self.timings.pop(name, None)
            else:
                self.timings.clear()
                self._active_timers.clear()

    def summary(self) -> Dict[str, Dict[str, float]]:
        """Get summary of all timings."""
        return {name: self.get_stats(name) for name in self.timings}


def format_duration(seconds: float) -> str:
    """Format duration in seconds to human readable string."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        return f"{seconds/60:.1f}m"
    else:
        return f"{seconds/3600:.1f}h"


class ProgressTracker:
    """Simple progress tracking utility."""

    def __init__(self, total: int, description: str = "Processing"):
        self.total = total
        self.current = 0
        self.description = description
        self.start_time = time.time()

    def update(self, increment: int = 1) -> None:
        """Update progress."""
        self.current += increment
        self._log_progress()

    def _log_progress(self) -> None:
        if self.total > 0 and self.current > 0:
            percent = (self.current / self.total) * 100
            elapsed = time.time() - self.start_time
            eta = (elapsed / self.current) * (self.total - self.current)
            logger.info(
                f"{self.description}: {percent:.1f}% ({self.current}/{self.total}) "
                f"- ETA: {format_duration(eta)}"
            )

    def finish(self) -> None:
        """Mark progress as finished."""
        elapsed = time.time() - self.start_time
        logger.info(f"{self.description}: done in {format_duration(elapsed)}")


def setup_logging(config: Optional[LoggingConfig] = None) -> None:
    """
    Configure loguru sinks from the logging configuration.

    Args:
        config: Logging configuration, defaults to ``LoggingConfig()``
    """
    config = config or LoggingConfig()

    logger.remove()
    logger.add(sys.stderr, level=config.level.upper(), format=config.format)

    if config.file_path:
        logger.add(
            config.file_path,
            level=config.level.upper(),
            format=config.format,
            rotation=config.max_file_size,
            retention=config.retention,
        )
