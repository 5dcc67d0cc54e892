"""Reading and writing the queue report file."""

from .exceptions import InvalidReportError, ReportError, ReportNotFoundError
from .io import DEFAULT_REPORT_PATH, read_report, write_report

__all__ = [
    "DEFAULT_REPORT_PATH",
    "read_report",
    "write_report",
    "ReportError",
    "ReportNotFoundError",
    "InvalidReportError",
]
