"""Non-fatal checks for documentation configuration."""

import warnings
from typing import Any, Dict, List

GLOB_CHARACTERS = ("*", "?", "[")


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    jobs = config_dict.get("jobs", [])
    if isinstance(jobs, list) and not jobs:
        warning_messages.append("Configuration defines no jobs; nothing will be queued")

    if not isinstance(jobs, list):
        return warning_messages

    for job in jobs:
        if not isinstance(job, dict):
            continue
        key = job.get("key", "Unknown")

        inputs = job.get("input", [])
        if isinstance(inputs, list):
            if not inputs:
                warning_messages.append(f"Job '{key}' has no input paths and can never trigger")
            for path in inputs:
                # Input paths are matched literally
                if isinstance(path, str) and any(ch in path for ch in GLOB_CHARACTERS):
                    warning_messages.append(
                        f"Job '{key}' input '{path}' looks like a glob; it is matched literally"
                    )

        if not job.get("documentation"):
            warning_messages.append(f"Job '{key}' lists no documentation files")

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
