"""Domain models shared by the queue and dispatch stages."""

from .models import QUEUED, JobMetadata, JobResult, Report, ReportGitContext, ReportSummary

__all__ = ["QUEUED", "JobMetadata", "JobResult", "Report", "ReportGitContext", "ReportSummary"]
