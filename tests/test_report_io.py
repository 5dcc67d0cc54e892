"""Tests for reading and writing the queue report."""

import json
import os
from unittest.mock import patch

import pytest

from docdispatch.report import (
    InvalidReportError,
    ReportError,
    ReportNotFoundError,
    read_report,
    write_report,
)
from tests.helpers import make_job_result, make_report


class TestWriteReport:
    """Test atomic report writing."""

    def test_write_and_read_back(self, tmp_path):
        path = tmp_path / "output.json"
        report = make_report(jobs=[make_job_result()], total_jobs_checked=3)

        assert write_report(report, path) == path
        assert read_report(path) == report

    def test_overwrites_existing_file(self, tmp_path):
        path = tmp_path / "output.json"
        path.write_text("stale")

        write_report(make_report(), path)

        assert json.loads(path.read_text())["summary"]["has_changes"] is False

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "reports" / "nested" / "output.json"
        write_report(make_report(), path)
        assert path.is_file()

    def test_leaves_no_temp_files(self, tmp_path):
        write_report(make_report(jobs=[make_job_result()]), tmp_path / "output.json")
        assert sorted(os.listdir(tmp_path)) == ["output.json"]

    def test_failed_replace_keeps_previous_report(self, tmp_path):
        """A failure mid-write leaves the previous report and no temp file."""
        path = tmp_path / "output.json"
        path.write_text("previous")

        with patch("docdispatch.report.io.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(ReportError, match="disk full"):
                write_report(make_report(), path)

        assert path.read_text() == "previous"
        assert sorted(os.listdir(tmp_path)) == ["output.json"]

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_file_mode_follows_umask(self, tmp_path):
        path = tmp_path / "output.json"
        previous = os.umask(0o022)
        try:
            write_report(make_report(), path)
        finally:
            os.umask(previous)

        assert path.stat().st_mode & 0o777 == 0o644


class TestReadReport:
    """Test report validation on read."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(ReportNotFoundError) as exc_info:
            read_report(tmp_path / "output.json")

        message = str(exc_info.value)
        assert "Output file not found" in message
        assert "doc-queue-changes" in message

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "output.json"
        path.write_text("{not json")

        with pytest.raises(InvalidReportError, match="Invalid JSON"):
            read_report(path)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "output.json"
        path.write_bytes(b"\xff\xfe")

        with pytest.raises(InvalidReportError) as exc_info:
            read_report(path)

        assert "Invalid JSON" in str(exc_info.value)
        assert "not valid UTF-8" in str(exc_info.value)

    def test_invalid_structure(self, tmp_path):
        path = tmp_path / "output.json"
        path.write_text(json.dumps({"summary": {}, "jobs": []}))

        with pytest.raises(InvalidReportError) as exc_info:
            read_report(path)

        assert "Invalid report structure" in str(exc_info.value)
        assert exc_info.value.errors

    def test_inconsistent_summary_rejected(self, tmp_path):
        path = tmp_path / "output.json"
        data = json.loads(make_report(jobs=[make_job_result()]).to_json())
        data["summary"]["jobs_with_changes"] = 5
        path.write_text(json.dumps(data))

        with pytest.raises(InvalidReportError):
            read_report(path)
