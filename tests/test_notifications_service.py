"""Unit tests for the dispatch service.

Tests the DispatchService for:
- Basic and enhanced request bodies
- Dry-run behavior (no client calls)
- Per-job failure isolation
- Pacing between successive dispatches
- Empty reports
"""

from unittest.mock import MagicMock, call, patch

import pytest

from docdispatch.git.models import TargetRepository
from docdispatch.notifications import (
    PACING_SECONDS,
    DispatchClient,
    DispatchDeliveryError,
    DispatchResponse,
    DispatchService,
)
from docdispatch.notifications.models import STATUS_DRY_RUN, STATUS_FAILED, STATUS_SENT
from tests.helpers import make_job_result, make_report

TARGET = TargetRepository(owner="acme", name="docs")


@pytest.fixture
def client():
    mock_client = MagicMock(spec=DispatchClient)
    mock_client.send.return_value = DispatchResponse(ok=True, status=0)
    return mock_client


@pytest.fixture
def sleep():
    return MagicMock()


@pytest.fixture
def two_job_report():
    return make_report(
        jobs=[
            make_job_result(job_key="apex-docs", job_type="apex", modified_files=["a.cls"]),
            make_job_result(job_key="flow-docs", job_type="flow", modified_files=["f.flow-meta.xml"]),
        ]
    )


class TestDispatch:
    """Test the dispatch loop."""

    def test_one_call_per_job(self, client, sleep, two_job_report):
        service = DispatchService(client, sleep=sleep)

        result = service.dispatch(two_job_report, TARGET)

        assert client.send.call_count == 2
        assert result.jobs_processed == 2
        assert result.success_count == 2
        assert result.error_count == 0
        assert result.had_errors is False
        assert [o.status for o in result.outcomes] == [STATUS_SENT, STATUS_SENT]
        assert result.target_repository == "acme/docs"

    def test_basic_request_body(self, client, sleep, two_job_report):
        DispatchService(client, sleep=sleep).dispatch(two_job_report, TARGET)

        target, body = client.send.call_args_list[0][0]
        assert target == TARGET
        assert body == {
            "event_type": "update-documentation-apex",
            "client_payload": {"job_key": "apex-docs", "modified_files": "a.cls"},
        }

    def test_enhanced_request_body(self, client, sleep, two_job_report):
        with patch("docdispatch.notifications.service.format_timestamp", return_value="2025-11-04T13:00:00Z"):
            DispatchService(client, sleep=sleep).dispatch(
                two_job_report, TARGET, enhanced=True, triggered_by="Sam"
            )

        body = client.send.call_args_list[1][0][1]
        payload = body["client_payload"]
        assert body["event_type"] == "update-documentation-flow"
        assert payload["job_type"] == "flow"
        assert payload["metadata"]["triggered_by"] == "Sam"
        assert payload["metadata"]["timestamp"] == "2025-11-04T13:00:00Z"
        assert payload["git_context"] == two_job_report.git_context.model_dump()

    def test_one_failure_does_not_stop_others(self, client, sleep, two_job_report):
        """Two jobs, the first call fails: both attempted, one success, one error."""
        client.send.side_effect = [
            DispatchResponse(ok=False, status=1, output="HTTP 404"),
            DispatchResponse(ok=True, status=0),
        ]

        result = DispatchService(client, sleep=sleep).dispatch(two_job_report, TARGET)

        assert client.send.call_count == 2
        assert result.success_count == 1
        assert result.error_count == 1
        assert result.had_errors is True
        assert result.failed_job_keys == ["apex-docs"]
        assert result.outcomes[0].error == "HTTP 404"

    def test_delivery_error_recorded(self, client, sleep, two_job_report):
        client.send.side_effect = [DispatchDeliveryError("gh not runnable"), DispatchResponse(ok=True, status=0)]

        result = DispatchService(client, sleep=sleep).dispatch(two_job_report, TARGET)

        assert result.outcomes[0].status == STATUS_FAILED
        assert result.outcomes[0].error == "gh not runnable"
        assert result.outcomes[1].status == STATUS_SENT

    def test_unexpected_error_recorded(self, client, sleep, two_job_report):
        client.send.side_effect = [RuntimeError("boom"), DispatchResponse(ok=True, status=0)]

        result = DispatchService(client, sleep=sleep).dispatch(two_job_report, TARGET)

        assert result.error_count == 1
        assert result.success_count == 1

    def test_failed_response_without_output(self, client, sleep):
        client.send.return_value = DispatchResponse(ok=False, status=2)
        report = make_report(jobs=[make_job_result()])

        result = DispatchService(client, sleep=sleep).dispatch(report, TARGET)

        assert result.outcomes[0].error == "exit status 2"

    def test_empty_report_is_noop(self, client, sleep):
        result = DispatchService(client, sleep=sleep).dispatch(make_report(), TARGET)

        client.send.assert_not_called()
        sleep.assert_not_called()
        assert result.jobs_processed == 0
        assert result.had_errors is False


class TestDryRun:
    """Test dry-run behavior."""

    def test_dry_run_never_calls_client(self, client, sleep, two_job_report):
        result = DispatchService(client, sleep=sleep).dispatch(two_job_report, TARGET, dry_run=True)

        client.send.assert_not_called()
        assert result.success_count == 2
        assert result.dry_run is True
        assert [o.status for o in result.outcomes] == [STATUS_DRY_RUN, STATUS_DRY_RUN]

    def test_dry_run_without_client(self, sleep, two_job_report):
        result = DispatchService(None, sleep=sleep).dispatch(two_job_report, TARGET, dry_run=True)
        assert result.success_count == 2

    def test_real_run_without_client_fails_each_job(self, sleep, two_job_report):
        result = DispatchService(None, sleep=sleep).dispatch(two_job_report, TARGET)
        assert result.error_count == 2


class TestPacing:
    """Test the delay between successive dispatches."""

    def test_sleeps_between_jobs(self, client, sleep):
        report = make_report(jobs=[make_job_result(job_key=f"job-{i}") for i in range(3)])

        DispatchService(client, sleep=sleep).dispatch(report, TARGET)

        assert sleep.call_args_list == [call(PACING_SECONDS), call(PACING_SECONDS)]

    def test_single_job_no_sleep(self, client, sleep):
        DispatchService(client, sleep=sleep).dispatch(make_report(jobs=[make_job_result()]), TARGET)
        sleep.assert_not_called()

    def test_custom_pacing(self, client, sleep, two_job_report):
        DispatchService(client, sleep=sleep, pacing_seconds=0).dispatch(two_job_report, TARGET)
        sleep.assert_called_once_with(0)

    def test_pacing_applies_to_failures(self, client, sleep, two_job_report):
        client.send.side_effect = DispatchDeliveryError("down")
        DispatchService(client, sleep=sleep).dispatch(two_job_report, TARGET)
        sleep.assert_called_once_with(PACING_SECONDS)
