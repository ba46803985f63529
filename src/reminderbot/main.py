"""Entry point for the PR reminder bot."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

from .cli import parse_args
from .config import load_config, parse_repo_list
from .errors import AuthenticationError, ConfigurationError, RemoteCallError
from .github_client import GitHubClient
from .scanner import run_scan

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_CONFIGURATION = 2
EXIT_AUTHENTICATION = 3
EXIT_REMOTE = 4

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stdout with ISO-8601 timestamps."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
    )


def orchestrate_reminder_scan(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, run one scan and map the outcome to an exit code.

    Per-repository failures do not change the exit code; only errors raised
    before any repository is scanned do.
    """
    try:
        args = parse_args(argv)
        configure_logging(args.log_level)

        config = load_config(
            owner=args.owner,
            repos=parse_repo_list(args.repos),
            review_hours=args.review_hours,
            lookback_days=args.lookback_days,
            dry_run=args.dry_run,
            include_forks=args.include_forks,
            include_archived=args.include_archived,
            api_url=args.api_url,
        )
        client = GitHubClient(config=config)

        if config.dry_run:
            logger.info("Dry run enabled; no comments will be posted.")

        summary = run_scan(config, client)
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return EXIT_CONFIGURATION
    except AuthenticationError as exc:
        logger.error("Authentication error: %s", exc)
        return EXIT_AUTHENTICATION
    except RemoteCallError as exc:
        logger.error("GitHub API error: %s", exc, extra={"status_code": exc.status_code})
        return EXIT_REMOTE
    except Exception:
        logger.exception("Unexpected error during reminder scan")
        return EXIT_UNEXPECTED

    logger.info(
        "Completed run: %d/%d repositories scanned, %d failed; reminders posted=%d dry_run=%d failed=%d",
        summary.repositories_scanned,
        summary.repositories_targeted,
        summary.repositories_failed,
        summary.reminders_posted,
        summary.reminders_dry_run,
        summary.reminders_failed,
    )
    for repository in summary.failed_repositories:
        logger.warning("Repository not fully processed: %s", repository)
    return EXIT_OK


def main() -> None:
    """Console script entry point."""
    raise SystemExit(orchestrate_reminder_scan())


if __name__ == "__main__":
    main()
