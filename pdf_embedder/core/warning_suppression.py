"""
PDF warning suppression for page probing.
File: pdf_embedder/core/warning_suppression.py

Probing opens the same PDF up to a hundred times; pypdf repeats its
structure warnings on every open. These are filtered so that only
warnings about unreadable files reach the terminal.
"""

import io
import sys
import logging
import warnings

from typing import Optional
from contextlib import contextmanager, redirect_stderr


class ProbeWarningFilter:
    """Filter and count pypdf warnings raised while probing."""

    # Noise repeated on every open of a slightly malformed file
    SUPPRESS_PATTERNS = [
        "wrong pointing object",
        "Object stream not found",
        "Invalid destination",
        "Broken outline",
        "Invalid parent",
        "Multiple definitions",
        "Stream length invalid",
        "incorrect startxref",
    ]

    # Always shown
    KEEP_PATTERNS = [
        "Could not read",
        "Permission denied",
        "Encrypted",
    ]

    def __init__(self):
        self.suppressed_count = 0

    def should_suppress(self, text: str) -> bool:
        lowered = text.lower()

        if any(pattern.lower() in lowered for pattern in self.KEEP_PATTERNS):
            return False

        if any(pattern.lower() in lowered for pattern in self.SUPPRESS_PATTERNS):
            self.suppressed_count += 1
            return True

        return False

    def get_summary(self) -> Optional[str]:
        if self.suppressed_count == 0:
            return None
        plural = "s" if self.suppressed_count != 1 else ""
        return f"Suppressed {self.suppressed_count} PDF structure warning{plural}"


class _FilteredStderr(io.StringIO):
    """Pass stderr lines through a ProbeWarningFilter."""

    def __init__(self, warning_filter: ProbeWarningFilter, target):
        super().__init__()
        self.filter = warning_filter
        self.target = target

    def write(self, text: str) -> int:
        for line in text.splitlines(keepends=True):
            if line.strip() and not self.filter.should_suppress(line):
                self.target.write(line)
        return len(text)


class _FilterLogRecords(logging.Filter):
    """Drop pypdf log records the warning filter suppresses."""

    def __init__(self, warning_filter: ProbeWarningFilter):
        super().__init__()
        self.warning_filter = warning_filter

    def filter(self, record: logging.LogRecord) -> bool:
        return not self.warning_filter.should_suppress(record.getMessage())


@contextmanager
def suppress_pdf_warnings():
    """
    Filter noisy pypdf output for the duration of the block.

    Usage:
        with suppress_pdf_warnings() as warning_filter:
            reader = PdfReader(path)
    """
    warning_filter = ProbeWarningFilter()
    log_filter = _FilterLogRecords(warning_filter)
    pypdf_logger = logging.getLogger("pypdf")

    pypdf_logger.addFilter(log_filter)
    try:
        with warnings.catch_warnings():
            warnings.filterwarnings("ignore", category=UserWarning, module="pypdf")
            with redirect_stderr(_FilteredStderr(warning_filter, sys.stderr)):
                yield warning_filter
    finally:
        pypdf_logger.removeFilter(log_filter)


# End of file #
