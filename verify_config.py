#!/usr/bin/env python3
"""Simple script to verify documentation.example.json structure without dependencies."""

import json
import sys
from pathlib import Path


def verify_config_structure(config_file: Path = Path("documentation.example.json")) -> bool:
    """Verify a documentation config has the expected structure."""
    if not config_file.exists():
        print(f"✗ {config_file} not found")
        return False

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        print(f"✗ Failed to parse {config_file}: {e}")
        return False

    errors = []

    if not isinstance(config, dict) or "jobs" not in config:
        errors.append("Missing required key: jobs")
    elif not isinstance(config["jobs"], list):
        errors.append("'jobs' must be a list")
    else:
        seen_keys = set()
        for idx, job in enumerate(config["jobs"]):
            if not isinstance(job, dict):
                errors.append(f"Job {idx} is not an object")
                continue

            for key in ("key", "type", "input"):
                if key not in job:
                    errors.append(f"Job {idx} missing key: {key}")

            if "input" in job and not isinstance(job["input"], list):
                errors.append(f"Job {idx} 'input' must be a list of paths")
            if "documentation" in job and not isinstance(job["documentation"], list):
                errors.append(f"Job {idx} 'documentation' must be a list of paths")

            if job.get("key") in seen_keys:
                errors.append(f"Job {idx} reuses key: {job['key']}")
            seen_keys.add(job.get("key"))

    if errors:
        print(f"✗ {config_file} validation failed:")
        for error in errors:
            print(f"  - {error}")
        return False

    jobs = config["jobs"]
    print(f"✓ {config_file} structure is valid")
    print(f"  - {len(jobs)} jobs configured")
    print(f"  - {sum(len(job['input']) for job in jobs)} watched input paths")
    print(f"  - Job types: {', '.join(sorted({job['type'] for job in jobs})) or 'none'}")
    return True


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("documentation.example.json")
    sys.exit(0 if verify_config_structure(path) else 1)
