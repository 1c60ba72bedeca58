"""
Tests for timing, progress and logging utilities.
"""

import pytest
from loguru import logger

from scanfusion.core.config import LoggingConfig
from scanfusion.core.utils import ProgressTracker, Timer, format_duration, setup_logging


class TestTimer:

    def test_measure(self):
        timer = Timer()
        with timer.measure("block", scanners=3):
            pass

        assert timer.get_stats("block")["count"] == 1
        assert timer.timings["block"][0].metadata == {"scanners": 3}
        assert timer.get_last_duration() == timer.get_last_duration("block")

    def test_start_stop(self):
        timer = Timer()
        timer.start("manual")
        assert timer.stop("manual") >= 0
        assert "manual" in timer.summary()

    def test_stop_without_start(self):
        with pytest.raises(ValueError):
            Timer().stop("never")

    def test_clear(self):
        timer = Timer()
        with timer.measure("a"):
            pass
        timer.clear()
        assert timer.get_stats("a") == {}
        assert timer.get_last_duration() == 0.0


@pytest.mark.parametrize("seconds, expected", [
    (12.34, "12.3s"),
    (90, "1.5m"),
    (5400, "1.5h"),
])
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_progress_tracker():
    tracker = ProgressTracker(total=4, description="Aligning")
    tracker.update()
    tracker.update(3)
    tracker.finish()
    assert tracker.current == 4


def test_setup_logging_file_sink(tmp_path):
    log_file = tmp_path / "scanfusion.log"
    setup_logging(LoggingConfig(level="DEBUG", file_path=str(log_file)))

    logger.debug("alignment started")
    logger.remove()

    assert "alignment started" in log_file.read_text()
