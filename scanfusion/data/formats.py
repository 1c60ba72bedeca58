"""
Readers for scanner report data.

A scanner report is a text stream of blocks separated by blank lines. Each
block opens with a header line such as ``--- scanner 0 ---`` followed by one
``x,y,z`` line per beacon, expressed in that scanner's local frame.
"""

import asyncio
from typing import Iterable, Iterator, List, Optional, Union
from pathlib import Path

from loguru import logger

from ..core.exceptions import ReportParseError
from ..core.types import Vector3d
from .transforms import PointCloud


class BaseReader:
    """Base class for data format readers."""

    def __init__(self, data_path: Optional[Union[str, Path]] = None):
        self.data_path = Path(data_path) if data_path else None

    async def load_async(self) -> List[PointCloud]:
        """Load data asynchronously."""
        return await asyncio.to_thread(self.load)

    def load(self) -> List[PointCloud]:
        """Load data synchronously."""
        raise NotImplementedError


class ScannerReportReader(BaseReader):
    """Reader for the plain-text scanner report format."""

    def load(self) -> List[PointCloud]:
        """Load scanner clouds from ``data_path``."""
        if not self.data_path or not self.data_path.is_file():
            raise FileNotFoundError(f"Scanner report not found: {self.data_path}")

        logger.info(f"Loading scanner report from {self.data_path}")

        with open(self.data_path, "rb") as f:
            return self.from_lines(_decode_lines(f))

    @classmethod
    def from_text(cls, text: str) -> List[PointCloud]:
        """Parse a whole report held in memory."""
        return cls.from_lines(text.splitlines())

    @staticmethod
    def from_lines(lines: Iterable[str]) -> List[PointCloud]:
        """
        Parse a stream of report lines into one cloud per scanner.

        Args:
            lines: Report lines, with or without trailing newlines

        Returns:
            Point clouds in report order

        Raises:
            ReportParseError: If a coordinate line is malformed
        """
        clouds: List[PointCloud] = []
        current: Optional[List[Vector3d]] = None

        for line_number, raw_line in enumerate(lines, start=1):
            line = raw_line.strip()

            if not line:
                if current is not None:
                    clouds.append(PointCloud(current))
                    current = None
                continue

            if current is None:
                # Header line; its content only marks the start of a block.
                current = []
                continue

            try:
                current.append(Vector3d.parse(line))
            except ValueError as e:
                raise ReportParseError(line_number, line, str(e)) from e

        if current is not None:
            clouds.append(PointCloud(current))

        logger.debug(f"Parsed {len(clouds)} scanner clouds")
        return clouds


def _decode_lines(raw_lines: Iterable[bytes], encoding: str = "utf-8") -> Iterator[str]:
    for line_number, raw_line in enumerate(raw_lines, start=1):
        try:
            yield raw_line.decode(encoding)
        except UnicodeDecodeError as e:
            text = raw_line.decode(encoding, errors="replace").strip()
            raise ReportParseError(line_number, text, f"not valid {encoding}") from e
