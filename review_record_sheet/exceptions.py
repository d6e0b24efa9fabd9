"""Error taxonomy for the review record sheet pipeline."""

from typing import Optional


class ReviewSheetError(Exception):
    """Base class for every failure that aborts a run."""


class ConfigurationError(ReviewSheetError):
    """Required configuration is missing or invalid."""


class RemoteError(ReviewSheetError):
    """The Backlog API answered with a non-success status or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ''):
        """Initialize the error.

        Args:
            message: Human-readable description including the request context
            status_code: HTTP status code, or None for transport faults
            body: Raw response body as returned by the server
        """
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(ReviewSheetError):
    """A response body does not match the expected schema."""


class ChooserError(ReviewSheetError):
    """Base class for operator-interaction faults."""


class EmptyListError(ChooserError):
    """There is nothing to choose from."""


class ParseError(ChooserError):
    """The operator's answer is not a well-formed integer."""


class RangeError(ChooserError):
    """The operator's answer is outside the listed positions."""


class ReportWriteError(ReviewSheetError, IOError):
    """The spreadsheet could not be written to disk."""
