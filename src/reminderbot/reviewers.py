"""Detection of requested reviewers who have not responded in time.

Waiting time is measured from pull request creation, not from the moment an
individual reviewer was requested. A reviewer added to an old pull request is
therefore reminded on the next scan.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterator, Optional, Set

from .errors import NotFoundError, RemoteCallError
from .github_client import GitHubClient
from .models import PullRequest, RepositoryRef, ReviewerReminder
from .pager import iter_pull_request_pages

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600.0


def hours_since_created(pr: PullRequest, now: datetime) -> float:
    """Return hours elapsed between PR creation and ``now``."""
    return (now - pr.created_at).total_seconds() / SECONDS_PER_HOUR


def find_stale_reviewers(
    client: GitHubClient,
    repository: RepositoryRef,
    review_hours: float,
    now: datetime,
) -> Iterator[ReviewerReminder]:
    """Yield a reminder for every requested reviewer past the threshold.

    All open pull requests are scanned. A reviewer who has submitted any
    review, whatever its outcome, is never reminded. The threshold is strict:
    exactly ``review_hours`` hours does not trigger a reminder.
    """
    logger.info(
        "Checking open PRs for inactive reviewers",
        extra={"repository": str(repository), "review_hours": review_hours},
    )

    for page in iter_pull_request_pages(client, repository.owner, repository.name, state="open"):
        for pr in page:
            if not pr.requested_reviewers:
                continue

            reviewed = reviewed_logins(client, repository, pr.number)
            if reviewed is None:
                continue
            hours_waited = hours_since_created(pr, now)

            for reviewer in sorted(pr.requested_reviewers):
                if reviewer in reviewed:
                    continue
                if hours_waited > review_hours:
                    yield ReviewerReminder(
                        owner=repository.owner,
                        repo=repository.name,
                        pr_number=pr.number,
                        reviewer_login=reviewer,
                        hours_waited=hours_waited,
                    )


def reviewed_logins(client: GitHubClient, repository: RepositoryRef, pr_number: int) -> Optional[Set[str]]:
    """Return logins that reviewed the PR, or ``None`` when reviews cannot be listed."""
    try:
        reviews = client.list_reviews(repository.owner, repository.name, pr_number)
    except NotFoundError:
        return None
    except RemoteCallError as exc:
        logger.warning(
            "Error listing reviews for PR #%s: %s",
            pr_number,
            exc.status_code or exc,
            extra={"repository": str(repository)},
        )
        return None
    return {review.reviewer_login for review in reviews}
