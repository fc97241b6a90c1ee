"""
Typed outcomes raised by the reader.

Hierarchy:
    VcfStreamError
    ├── VcfIoError       File cannot be opened or read (missing, permissions, not a file).
    ├── VcfFormatError   A header or data line violates the VCF grammar.
    └── EndOfData        No more records. Expected termination, not a defect.
"""
from __future__ import annotations

from typing import Optional

# Reasons attached to VcfIoError.
NOT_FOUND = "not_found"
PERMISSION_DENIED = "permission_denied"
NOT_A_FILE = "not_a_file"
UNKNOWN = "unknown"


class VcfStreamError(Exception):
    """Base class for everything raised by vcfstream."""


class VcfIoError(VcfStreamError):
    """
    Raised when the source file cannot be opened or read.

    Args:
        message: Human-readable description.
        path: Path that was being opened.
        reason: One of ``not_found``, ``permission_denied``, ``not_a_file``, ``unknown``.
    """

    def __init__(self, message: str, path: Optional[str] = None, reason: str = UNKNOWN) -> None:
        super().__init__(message)
        self.path = path
        self.reason = reason

    def __str__(self) -> str:
        base = super().__str__()
        parts = [f"reason={self.reason}"]
        if self.path:
            parts.append(f"path={self.path}")
        return f"{base} | {' '.join(parts)}"


class VcfFormatError(VcfStreamError):
    """
    Raised when a line or field does not follow the VCF grammar.

    Args:
        message: Human-readable description.
        line: Content of the offending line, when known.
        line_number: 1-based line number in the source file, when known.
    """

    def __init__(self, message: str, line: Optional[str] = None, line_number: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.line_number = line_number

    def __str__(self) -> str:
        base = super().__str__()
        parts = []
        if self.line_number is not None:
            parts.append(f"line={self.line_number}")
        if self.line is not None:
            parts.append(f"content={self.line!r}")
        if parts:
            return f"{base} | {' '.join(parts)}"
        return base


class EndOfData(VcfStreamError):
    """Raised by single-record reads once the data lines are exhausted.

    Reaching it again on the same handle raises it again.
    """


__all__ = [
    "VcfStreamError",
    "VcfIoError",
    "VcfFormatError",
    "EndOfData",
    "NOT_FOUND",
    "PERMISSION_DENIED",
    "NOT_A_FILE",
    "UNKNOWN",
]
