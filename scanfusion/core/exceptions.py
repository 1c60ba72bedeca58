"""
Exception hierarchy for the ScanFusion platform.

All concrete errors are fatal: a malformed report cannot be repaired
locally, and a failed alignment means the input does not contain enough
overlap to place every scanner.
"""

from typing import Optional, Sequence, Tuple


class ScanFusionError(Exception):
    """Base class for all ScanFusion errors."""


class ReportParseError(ScanFusionError, ValueError):
    """A scanner report line could not be parsed."""

    def __init__(self, line_number: int, line: str, reason: Optional[str] = None):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        message = f"Invalid coordinate on line {line_number}: {line!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class AlignmentFailed(ScanFusionError):
    """Some scanners could not be placed in the global frame."""

    def __init__(self, unresolved: Sequence[int], passes: int, reason: str = "no progress"):
        self.unresolved: Tuple[int, ...] = tuple(unresolved)
        self.passes = passes
        self.reason = reason
        super().__init__(
            f"Alignment failed after {passes} pass(es) ({reason}); "
            f"unresolved scanners: {list(self.unresolved)}"
        )


class AlignmentInputError(ScanFusionError, ValueError):
    """The scanner set cannot be aligned as given."""
