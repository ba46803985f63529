"""Detection of merged pull requests whose source branch was left behind."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterator, List

from .errors import NotFoundError, RemoteCallError
from .github_client import GitHubClient
from .models import BranchCleanupReminder, PullRequest, RepositoryRef
from .pager import iter_pull_request_pages

logger = logging.getLogger(__name__)


def find_undeleted_branches(
    client: GitHubClient,
    repository: RepositoryRef,
    lookback_days: int,
    now: datetime,
) -> Iterator[BranchCleanupReminder]:
    """Yield a reminder for each recently merged PR whose branch still exists.

    Business logic:
    - Closed PRs are paged newest-updated first.
    - Only PRs updated within ``lookback_days`` are considered; of those only
      merged PRs get a ``heads/{branch}`` existence check.
    - A missing ref means the branch was already deleted and is skipped.
      Other lookup failures are logged and skipped.
    - A page with no PR inside the window ends pagination. Sorting by
      ``updated`` descending guarantees every later page is older.
    """
    since = now - timedelta(days=lookback_days)
    logger.info(
        "Checking merged PRs for undeleted branches",
        extra={"repository": str(repository), "lookback_days": lookback_days},
    )

    def any_within_window(page: List[PullRequest]) -> bool:
        return any(pr.updated_at >= since for pr in page)

    pages = iter_pull_request_pages(
        client,
        repository.owner,
        repository.name,
        state="closed",
        sort="updated",
        direction="desc",
        should_continue=any_within_window,
    )
    for page in pages:
        for pr in page:
            if pr.updated_at < since or pr.merged_at is None:
                continue
            if branch_exists(client, repository, pr.head_branch):
                yield BranchCleanupReminder(
                    owner=repository.owner,
                    repo=repository.name,
                    pr_number=pr.number,
                    branch_name=pr.head_branch,
                    author_login=pr.author,
                )


def branch_exists(client: GitHubClient, repository: RepositoryRef, branch_name: str) -> bool:
    """Return whether ``heads/{branch_name}`` exists; lookup errors count as absent."""
    try:
        client.get_branch_ref(repository.owner, repository.name, branch_name)
    except NotFoundError:
        return False
    except RemoteCallError as exc:
        logger.warning(
            "Error checking ref %s: %s",
            branch_name,
            exc.status_code or exc,
            extra={"repository": str(repository)},
        )
        return False
    return True
