"""
Tests for the scanner report reader.
"""

import asyncio

import pytest

from scanfusion.core.exceptions import ReportParseError
from scanfusion.core.types import Vector3d
from scanfusion.data.formats import ScannerReportReader
from . import SCANNER_REPORT


class TestScannerReportReader:
    """Test parsing of scanner report blocks."""

    def test_load_canonical_report(self):
        clouds = ScannerReportReader(SCANNER_REPORT).load()
        assert [len(c) for c in clouds] == [25, 25, 26, 25, 26]
        assert clouds[0].points[0] == Vector3d(404, -588, -901)
        assert clouds[4].points[-1] == Vector3d(30, -46, -14)

    def test_load_async(self):
        clouds = asyncio.run(ScannerReportReader(SCANNER_REPORT).load_async())
        assert len(clouds) == 5

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ScannerReportReader(tmp_path / "missing.txt").load()

    def test_from_lines_with_newlines(self):
        lines = ["--- scanner 0 ---\n", "1,2,3\n", "4,5,6\n", "\n", "--- scanner 1 ---\n", "-1,-2,-3\n"]
        clouds = ScannerReportReader.from_lines(lines)
        assert len(clouds) == 2
        assert clouds[0].points == (Vector3d(1, 2, 3), Vector3d(4, 5, 6))
        assert clouds[1].points == (Vector3d(-1, -2, -3),)

    def test_trailing_blank_line(self):
        clouds = ScannerReportReader.from_text("--- scanner 0 ---\n1,2,3\n\n")
        assert len(clouds) == 1

    def test_repeated_blank_lines(self):
        text = "--- scanner 0 ---\n1,2,3\n\n\n\n--- scanner 1 ---\n4,5,6"
        clouds = ScannerReportReader.from_text(text)
        assert [len(c) for c in clouds] == [1, 1]

    def test_header_only_block(self):
        clouds = ScannerReportReader.from_text("--- scanner 0 ---\n\n--- scanner 1 ---\n1,1,1")
        assert [len(c) for c in clouds] == [0, 1]

    def test_header_content_is_ignored(self):
        clouds = ScannerReportReader.from_text("anything at all\n7,8,9")
        assert clouds[0].points == (Vector3d(7, 8, 9),)

    def test_empty_stream(self):
        assert ScannerReportReader.from_lines([]) == []

    @pytest.mark.parametrize("bad_line", ["1,2", "1,2,3,4", "x,y,z", "1, 2, three"])
    def test_malformed_line_reports_location(self, bad_line):
        text = f"--- scanner 0 ---\n1,2,3\n{bad_line}\n4,5,6"
        with pytest.raises(ReportParseError) as exc_info:
            ScannerReportReader.from_text(text)

        assert exc_info.value.line_number == 3
        assert exc_info.value.line == bad_line
        assert "line 3" in str(exc_info.value)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            ScannerReportReader.from_text("--- scanner 0 ---\nnot,a,vector")

    def test_invalid_utf8_reports_location(self, tmp_path):
        path = tmp_path / "report.txt"
        path.write_bytes(b"--- scanner 0 ---\n1,2,3\n\xff\xfe,1,1\n")

        with pytest.raises(ReportParseError) as exc_info:
            ScannerReportReader(path).load()

        assert exc_info.value.line_number == 3
        assert "utf-8" in str(exc_info.value)
