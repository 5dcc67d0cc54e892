"""Unit tests for the queue and dispatch pipelines.

Git and gh are replaced by scripted runners; the report file lives in
tmp_path.
"""

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from docdispatch.config.exceptions import (
    ConfigFileNotFoundError,
    ConfigurationError,
    MissingDependencyError,
)
from docdispatch.git import GitClient, NotAGitRepositoryError, RemoteNotFoundError, TargetRepository
from docdispatch.notifications import (
    DispatchAuthenticationError,
    DispatchClient,
    DispatchResponse,
    DispatchService,
)
from docdispatch.pipeline import DispatchPipeline, QueuePipeline
from docdispatch.pipeline.queue import summary_json
from docdispatch.report import ReportNotFoundError, read_report, write_report
from tests.helpers import FakeRunner, git_repository_runner, make_job_result, make_report

FIXED_NOW = datetime(2025, 11, 4, 12, 0, 0, tzinfo=timezone.utc)

CONFIG = {
    "jobs": [
        {"key": "apex-docs", "type": "apex", "input": ["src/a.cls", "src/b.cls"], "documentation": ["docs/apex.md"]},
        {"key": "guide-docs", "type": "guide", "input": ["guide/intro.md"], "documentation": ["docs/guide.md"]},
    ]
}


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "documentation.json"
    path.write_text(json.dumps(CONFIG))
    return path


@pytest.fixture
def output_path(tmp_path):
    return tmp_path / "output.json"


def make_queue(config_path, output_path, runner, which=lambda tool: f"/usr/bin/{tool}"):
    return QueuePipeline(
        config_path=config_path,
        output_path=output_path,
        git_client=GitClient(root=config_path.parent, runner=runner),
        which=which,
        clock=lambda: FIXED_NOW,
    )


class TestQueuePipeline:
    """Test the queue stage end to end with a scripted git."""

    def test_writes_report_for_changed_jobs(self, config_path, output_path):
        runner = git_repository_runner(changed_files=["src/b.cls", "README.md"])

        result = make_queue(config_path, output_path, runner).run()

        report = read_report(output_path)
        assert report == result.report
        assert result.has_changes is True
        assert report.summary.total_jobs_checked == 2
        assert report.summary.jobs_with_changes == 1
        assert report.summary.timestamp == "2025-11-04T12:00:00Z"
        assert report.summary.triggered_by == "Jane Doe"
        job = report.jobs[0]
        assert job.job_key == "apex-docs"
        assert job.modified_files == ["src/b.cls"]
        assert job.urgent is True
        assert job.git_context.branch == "main"
        assert report.git_context.changed_files == ["src/b.cls", "README.md"]

    def test_no_changes_still_writes_report(self, config_path, output_path):
        runner = git_repository_runner(changed_files=[])

        result = make_queue(config_path, output_path, runner).run()

        assert output_path.is_file()
        assert result.report.summary.has_changes is False
        assert result.report.summary.total_jobs_checked == 0

    def test_initial_commit_has_empty_change_set(self, config_path, output_path):
        runner = git_repository_runner(previous=None)

        result = make_queue(config_path, output_path, runner).run()

        assert result.report.git_context.previous_commit == "unknown"
        assert result.report.jobs == []
        assert runner.find_call("-c") is None

    def test_unknown_user(self, config_path, output_path):
        runner = git_repository_runner(user=None, changed_files=["guide/intro.md"])

        report = make_queue(config_path, output_path, runner).run().report

        assert report.summary.triggered_by == "Unknown"
        assert report.jobs[0].metadata.triggered_by == "Unknown"

    def test_missing_git(self, config_path, output_path):
        queue = make_queue(config_path, output_path, git_repository_runner(), which=lambda tool: None)

        with pytest.raises(MissingDependencyError):
            queue.run()

        assert not output_path.exists()

    def test_missing_config_checked_before_repository(self, tmp_path, output_path):
        runner = FakeRunner(default_returncode=128)
        queue = make_queue(tmp_path / "missing.json", output_path, runner)

        with pytest.raises(ConfigFileNotFoundError):
            queue.run()

        assert runner.calls == []
        assert not output_path.exists()

    def test_not_a_repository(self, config_path, output_path):
        queue = make_queue(config_path, output_path, FakeRunner(default_returncode=128))

        with pytest.raises(NotAGitRepositoryError):
            queue.run()

        assert not output_path.exists()

    def test_invalid_config(self, config_path, output_path):
        config_path.write_text('{"jobs": [{"key": "k"}]}')

        with pytest.raises(ConfigurationError):
            make_queue(config_path, output_path, git_repository_runner()).run()

        assert not output_path.exists()

    def test_summary_json(self, config_path, output_path):
        runner = git_repository_runner(changed_files=["guide/intro.md"])
        result = make_queue(config_path, output_path, runner).run()

        summary = json.loads(summary_json(result))

        assert summary == {
            "total_jobs_checked": 2,
            "jobs_with_changes": 1,
            "has_changes": True,
            "timestamp": "2025-11-04T12:00:00Z",
            "triggered_by": "Jane Doe",
        }


@pytest.fixture
def report_path(tmp_path):
    path = tmp_path / "output.json"
    write_report(
        make_report(
            jobs=[
                make_job_result(job_key="apex-docs", job_type="apex"),
                make_job_result(job_key="guide-docs", job_type="guide", modified_files=["guide/intro.md"]),
            ]
        ),
        path,
    )
    return path


@pytest.fixture
def client():
    mock_client = MagicMock(spec=DispatchClient)
    mock_client.send.return_value = DispatchResponse(ok=True, status=0)
    return mock_client


def make_dispatch(report_path, client, runner=None, **kwargs):
    return DispatchPipeline(
        report_path=report_path,
        client=client,
        git_client=GitClient(root=report_path.parent, runner=runner or git_repository_runner()),
        service=DispatchService(client, sleep=lambda seconds: None),
        **kwargs,
    )


class TestDispatchPipeline:
    """Test the dispatch stage coordinator."""

    def test_sends_every_job(self, report_path, client):
        result = make_dispatch(report_path, client).run()

        client.check_ready.assert_called_once()
        assert client.send.call_count == 2
        target = client.send.call_args_list[0][0][0]
        assert target.full_name == "acme/docs"
        assert result.had_errors is False
        assert result.success_count == 2

    def test_partial_failure(self, report_path, client):
        client.send.side_effect = [
            DispatchResponse(ok=False, status=1, output="HTTP 403"),
            DispatchResponse(ok=True, status=0),
        ]

        result = make_dispatch(report_path, client).run()

        assert client.send.call_count == 2
        assert result.success_count == 1
        assert result.error_count == 1
        assert result.had_errors is True

    def test_dry_run_skips_readiness_and_sends(self, report_path, client):
        runner = git_repository_runner()
        result = make_dispatch(report_path, client, runner=runner, dry_run=True, enhanced=True).run()

        client.check_ready.assert_not_called()
        client.send.assert_not_called()
        assert result.success_count == 2
        assert not runner.called_with("config", "user.name")

    def test_dry_run_without_client(self, report_path):
        result = DispatchPipeline(
            report_path=report_path,
            client=None,
            git_client=GitClient(root=report_path.parent, runner=git_repository_runner()),
            dry_run=True,
        ).run()

        assert result.jobs_processed == 2

    def test_real_run_requires_client(self, report_path):
        pipeline = DispatchPipeline(
            report_path=report_path,
            client=None,
            git_client=GitClient(root=report_path.parent, runner=git_repository_runner()),
        )

        with pytest.raises(ConfigurationError):
            pipeline.run()

    def test_enhanced_uses_git_user(self, report_path, client):
        runner = git_repository_runner(user="Sam Maintainer")

        make_dispatch(report_path, client, runner=runner, enhanced=True).run()

        payload = client.send.call_args_list[0][0][1]["client_payload"]
        assert payload["metadata"]["triggered_by"] == "Sam Maintainer"

    def test_target_override_skips_remote(self, report_path, client):
        runner = git_repository_runner(remote=None)

        make_dispatch(
            report_path, client, runner=runner, target=TargetRepository.parse("other/handbook")
        ).run()

        assert client.send.call_args_list[0][0][0].full_name == "other/handbook"
        assert not runner.called_with("config", "--get", "remote.origin.url")

    def test_missing_report(self, tmp_path, client):
        with pytest.raises(ReportNotFoundError):
            make_dispatch(tmp_path / "output.json", client).run()

        client.send.assert_not_called()

    def test_missing_origin(self, report_path, client):
        with pytest.raises(RemoteNotFoundError):
            make_dispatch(report_path, client, runner=git_repository_runner(remote=None)).run()

        client.send.assert_not_called()

    def test_not_authenticated(self, report_path, client):
        client.check_ready.side_effect = DispatchAuthenticationError("GitHub CLI is not authenticated")

        with pytest.raises(DispatchAuthenticationError):
            make_dispatch(report_path, client).run()

        client.send.assert_not_called()

    def test_empty_report(self, tmp_path, client):
        path = tmp_path / "output.json"
        write_report(make_report(), path)

        result = make_dispatch(path, client).run()

        assert result.jobs_processed == 0
        assert result.had_errors is False
        client.send.assert_not_called()
