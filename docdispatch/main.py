"""Command-line entry points for the documentation change dispatcher."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from docdispatch.config.environment import EnvironmentConfig, load_environment_config
from docdispatch.config.exceptions import ConfigurationError, PreconditionError
from docdispatch.config.loader import DEFAULT_CONFIG_PATH
from docdispatch.config.models import DispatchTransport, LogFormat, LogLevel
from docdispatch.git.client import GitClient
from docdispatch.git.models import TargetRepository
from docdispatch.logging import get_logger
from docdispatch.logging.config import configure_logging
from docdispatch.notifications.clients import build_client
from docdispatch.pipeline import DispatchPipeline, QueuePipeline
from docdispatch.pipeline.queue import summary_json
from docdispatch.report.io import DEFAULT_REPORT_PATH

logger = get_logger(__name__, component="cli")


def load_runtime_environment(
    log_level_override: Optional[str] = None,
    log_format_override: Optional[str] = None,
) -> EnvironmentConfig:
    """
    Load environment configuration and apply CLI overrides.

    Log level priority: CLI > Environment > INFO.

    Raises:
        ConfigurationError: If an environment variable is invalid
    """
    env_config = load_environment_config()

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = LogLevel.INFO.value

    if log_format_override:
        env_config.log_format = log_format_override

    return env_config


def _add_logging_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-level",
        default=None,
        choices=[level.value for level in LogLevel],
        help="Log level (overrides LOG_LEVEL)",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=[fmt.value for fmt in LogFormat],
        help="Log format (overrides LOG_FORMAT)",
    )


def build_queue_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doc-queue-changes",
        description="Match the files changed in the last commit against documentation jobs",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to the documentation configuration (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_REPORT_PATH,
        help=f"Where to write the report (default: {DEFAULT_REPORT_PATH})",
    )
    _add_logging_arguments(parser)
    return parser


def build_dispatch_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doc-dispatch",
        description="Send one repository dispatch event per job in the queue report",
        epilog=(
            "Basic payload: job_key, modified_files. "
            "Enhanced payload adds documentation_files, job_type, modified_count, "
            "urgent, git_context and metadata."
        ),
    )
    parser.add_argument(
        "--enhanced",
        action="store_true",
        help="Send the enhanced payload with full job and git context",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be sent without sending anything",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_REPORT_PATH,
        help=f"Report written by doc-queue-changes (default: {DEFAULT_REPORT_PATH})",
    )
    parser.add_argument(
        "--repo",
        default=None,
        metavar="OWNER/NAME",
        help="Target repository (default: parsed from the origin remote)",
    )
    parser.add_argument(
        "--transport",
        default=None,
        choices=[t.value for t in DispatchTransport],
        help="Dispatch transport (overrides DISPATCH_TRANSPORT)",
    )
    _add_logging_arguments(parser)
    return parser


def _report_precondition_failure(error: PreconditionError, event: str) -> int:
    print(f"Error: {error}", file=sys.stderr)
    logger.error(
        f"Precondition failed: {error.message}",
        extra={"event": event, "error_type": type(error).__name__},
    )
    return 1


def queue_main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for ``doc-queue-changes``.

    Returns:
        Exit code (0 for success including no changes, 1 on failure).
    """
    args = build_queue_parser().parse_args(argv)

    try:
        env_config = load_runtime_environment(args.log_level, args.log_format)
    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1

    configure_logging(
        level=env_config.log_level,
        format_type=env_config.log_format,
        environment=env_config.environment,
    )

    try:
        result = QueuePipeline(config_path=args.config, output_path=args.output).run()
    except PreconditionError as e:
        return _report_precondition_failure(e, "queue.precondition_failed")
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error during queue run",
            extra={"event": "queue.run.failed", "error_type": type(e).__name__, "error": str(e)},
            exc_info=True,
        )
        return 1

    print(summary_json(result))
    return 0


def dispatch_main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for ``doc-dispatch``.

    Returns:
        Exit code (0 when every dispatch succeeded, 1 otherwise).
    """
    start_time = time.time()
    args = build_dispatch_parser().parse_args(argv)

    try:
        env_config = load_runtime_environment(args.log_level, args.log_format)
    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1

    configure_logging(
        level=env_config.log_level,
        format_type=env_config.log_format,
        environment=env_config.environment,
    )

    try:
        target = TargetRepository.parse(args.repo) if args.repo else None

        client = None if args.dry_run else build_client(env_config, args.transport)

        pipeline = DispatchPipeline(
            report_path=args.output,
            client=client,
            git_client=GitClient(),
            target=target,
            enhanced=args.enhanced,
            dry_run=args.dry_run,
        )
        result = pipeline.run()
    except PreconditionError as e:
        return _report_precondition_failure(e, "dispatch.precondition_failed")
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error during dispatch run",
            extra={"event": "dispatch.run.failed", "error_type": type(e).__name__, "error": str(e)},
            exc_info=True,
        )
        return 1

    logger.debug(
        "Dispatch command finished",
        extra={"event": "dispatch.command.finished", "uptime_seconds": round(time.time() - start_time, 2)},
    )
    return 1 if result.had_errors else 0

