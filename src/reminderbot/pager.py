"""Page-at-a-time retrieval of a repository's pull requests."""

from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Optional

from .github_client import GitHubClient
from .models import PullRequest

logger = logging.getLogger(__name__)

PULL_REQUEST_PAGE_SIZE = 50

PagePredicate = Callable[[List[PullRequest]], bool]


def iter_pull_request_pages(
    client: GitHubClient,
    owner: str,
    repo: str,
    state: str,
    page_size: int = PULL_REQUEST_PAGE_SIZE,
    sort: Optional[str] = None,
    direction: Optional[str] = None,
    should_continue: Optional[PagePredicate] = None,
) -> Iterator[List[PullRequest]]:
    """Yield pull request pages lazily, one remote call per page.

    Iteration ends at the first empty page. When ``should_continue`` is given
    it is called with each page after the consumer has processed it; a false
    result ends iteration before the next page is requested. Every call starts
    again from page 1.
    """
    page = 1
    while True:
        items = client.list_pull_requests(
            owner,
            repo,
            state=state,
            page=page,
            per_page=page_size,
            sort=sort,
            direction=direction,
        )
        if not items:
            return

        yield items

        if should_continue is not None and not should_continue(items):
            logger.debug(
                "Stopping pagination early",
                extra={"repository": f"{owner}/{repo}", "state": state, "page": page},
            )
            return
        page += 1
