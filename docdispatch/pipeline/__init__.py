"""Pipeline orchestration for the queue and dispatch stages."""

from .dispatch import DispatchPipeline
from .models import QueueRunResult
from .queue import QueuePipeline

__all__ = [
    "QueuePipeline",
    "DispatchPipeline",
    "QueueRunResult",
]
