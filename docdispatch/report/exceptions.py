"""Custom exceptions for reading and writing the queue report."""

from docdispatch.config.exceptions import PreconditionError


class ReportError(PreconditionError):
    """Base exception for report file problems."""

    pass


class ReportNotFoundError(ReportError):
    """Raised when the report file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Output file not found: {path}",
            suggestions=["Run doc-queue-changes first to generate the output file"],
        )


class InvalidReportError(ReportError):
    """Raised when the report file is not valid JSON or violates the report schema."""

    pass
