"""Sequencing of one reminder scan across all target repositories."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from .branches import find_undeleted_branches
from .config import Config
from .executor import ActionExecutor
from .github_client import GitHubClient
from .models import RepositoryRef, ScanSummary
from .resolver import RepositoryResolver
from .reviewers import find_stale_reviewers

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def scan_repository(
    client: GitHubClient,
    executor: ActionExecutor,
    repository: RepositoryRef,
    config: Config,
    summary: ScanSummary,
    now: datetime,
) -> None:
    """Run the reviewer check, then the branch check, for one repository."""
    for reminder in find_stale_reviewers(client, repository, config.review_hours, now):
        summary.record(executor.execute(reminder, config.dry_run))

    for reminder in find_undeleted_branches(client, repository, config.lookback_days, now):
        summary.record(executor.execute(reminder, config.dry_run))


def run_scan(
    config: Config,
    client: GitHubClient,
    clock: Clock = utc_now,
    resolver: Optional[RepositoryResolver] = None,
) -> ScanSummary:
    """Scan every target repository and return the run's counters.

    Resolution errors propagate, since nothing has been scanned yet. Any error
    while scanning a single repository is logged and recorded, and the scan
    moves on to the next repository.
    """
    resolver = resolver or RepositoryResolver(client)
    repositories = resolver.resolve(config)
    logger.info("Target repositories: %s", ", ".join(str(repo) for repo in repositories))

    executor = ActionExecutor(client, config.review_hours)
    summary = ScanSummary(repositories_targeted=len(repositories))

    for repository in repositories:
        try:
            scan_repository(client, executor, repository, config, summary, clock())
        except Exception as exc:
            logger.error(
                "Error processing repo %s: %s",
                repository,
                getattr(exc, "status_code", None) or exc,
                exc_info=logger.isEnabledFor(logging.DEBUG),
            )
            summary.failed_repositories.append(str(repository))
        else:
            summary.repositories_scanned += 1

    return summary
