"""Report persistence.

The report is written through a temporary file in the destination directory
and moved into place with ``os.replace``, so readers see either the previous
report or the complete new one.
"""

import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from docdispatch.domain.models import Report
from docdispatch.logging import get_logger

from .exceptions import InvalidReportError, ReportError, ReportNotFoundError

logger = get_logger(__name__, component="report")

DEFAULT_REPORT_PATH = Path("output.json")


def _default_file_mode() -> int:
    """Mode a plain open() would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_report(report: Report, path: Path = DEFAULT_REPORT_PATH) -> Path:
    """
    Atomically write a report, replacing any existing file.

    Args:
        report: Report to serialize
        path: Destination file

    Returns:
        The destination path

    Raises:
        ReportError: If the file cannot be written
    """
    path = Path(path)
    data = report.to_json()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    except OSError as e:
        raise ReportError(f"Failed to write output file {path}: {e}") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(data)
        # mkstemp creates 0600
        os.chmod(tmp_path, _default_file_mode())
        os.replace(tmp_path, path)
    except OSError as e:
        raise ReportError(f"Failed to write output file {path}: {e}") from e
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)

    logger.info(
        f"Output written to: {path}",
        extra={
            "event": "report.written",
            "path": str(path),
            "jobs_with_changes": report.summary.jobs_with_changes,
        },
    )
    return path


def read_report(path: Path = DEFAULT_REPORT_PATH) -> Report:
    """
    Read and validate a report produced by the queue stage.

    Raises:
        ReportNotFoundError: If the file does not exist
        InvalidReportError: If the content is not valid JSON or not a valid report
    """
    path = Path(path)
    if not path.is_file():
        raise ReportNotFoundError(str(path))

    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidReportError(
            f"Invalid JSON in {path}",
            errors=[f"byte {e.start}: not valid UTF-8"],
            suggestions=["Re-run doc-queue-changes to regenerate the output file"],
        ) from e
    except OSError as e:
        raise ReportError(f"Failed to read output file {path}: {e}") from e

    try:
        report = Report.model_validate_json(content)
    except ValidationError as e:
        json_errors = [err for err in e.errors() if err["type"] == "json_invalid"]
        if json_errors:
            raise InvalidReportError(
                f"Invalid JSON in {path}",
                errors=[err["msg"] for err in json_errors],
            ) from e
        raise InvalidReportError(
            f"Invalid report structure in {path}",
            errors=[
                f"{' -> '.join(str(loc) for loc in err['loc']) or 'report'}: {err['msg']}"
                for err in e.errors()
            ],
            suggestions=["Re-run doc-queue-changes to regenerate the output file"],
        ) from e

    logger.debug(
        f"Loaded report with {len(report.jobs)} job(s)",
        extra={"event": "report.loaded", "path": str(path), "job_count": len(report.jobs)},
    )
    return report
