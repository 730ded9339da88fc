# ==============================================
# Errors
# ==============================================
#
# PURPOSE:
#   Exceptions raised by the analysis core.
#
# CLASSES:
# --------
# - RecordsizeError   → Base class, catch this for "any advisor error"
# - InvalidSample     → Negative or non-integer size. Fatal: the
#                       caller aborts the run (CLI exit status 2).
# - EmptyDataset      → The stream ended with zero files. Not a
#                       failure: turned into an empty report.
#
# ==============================================

from typing import Any, Optional


class RecordsizeError(Exception):
    """Base class for all recordsize-advisor errors."""


class InvalidSample(RecordsizeError):
    """
    A size sample that cannot be a file size (negative or not an integer).

    This means the producer of the size stream broke its contract,
    so the run is aborted rather than retried.
    """

    def __init__(self, size: Any, position: Optional[int] = None):
        self.size = size
        self.position = position
        where = f" at sample #{position}" if position is not None else ""
        super().__init__(f"Invalid file size {size!r}{where}: sizes must be non-negative integers")


class EmptyDataset(RecordsizeError):
    """
    The size stream ended without a single file.

    Not a failure: callers turn it into a "no files found" report.
    The (empty) sealed state is kept on the exception.
    """

    def __init__(self, state):
        self.state = state
        super().__init__("No files found in the specified directory.")
