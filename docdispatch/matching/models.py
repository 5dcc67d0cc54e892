"""Data models for the change matcher."""

from dataclasses import dataclass, field
from typing import List

from docdispatch.config.models import JobDefinition

URGENCY_FILE_COUNT = "file_count"
URGENCY_SENSITIVE_EXTENSION = "sensitive_extension"


@dataclass(frozen=True)
class MatchResult:
    """Result of checking one job's inputs against the changed file set.

    Attributes:
        job: The job definition that was evaluated
        modified_files: Job inputs that changed, in the job's declaration order
        urgent: Whether the change warrants priority handling
        urgency_reasons: Which urgency rules fired (file_count, sensitive_extension)
    """

    job: JobDefinition
    modified_files: List[str] = field(default_factory=list)
    urgent: bool = False
    urgency_reasons: List[str] = field(default_factory=list)

    @property
    def is_match(self) -> bool:
        return bool(self.modified_files)

    @property
    def modified_count(self) -> int:
        return len(self.modified_files)
