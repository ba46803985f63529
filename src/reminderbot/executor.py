"""Rendering and delivery of reminder comments."""

from __future__ import annotations

import logging
from decimal import Decimal

from .errors import RemoteCallError
from .github_client import GitHubClient
from .models import ActionOutcome, BranchCleanupReminder, ReminderAction, ReviewerReminder

logger = logging.getLogger(__name__)

REVIEWER_TEMPLATE = (
    "@{reviewer} You were requested for review {hours:.1f} hours ago "
    "(threshold {threshold}h). Please review this PR."
)
BRANCH_TEMPLATE = (
    "@{author} The PR was merged but the branch `{branch}` still exists. "
    "Please delete it if it's no longer needed."
)


def format_threshold(value: float) -> str:
    """Render the threshold in plain decimal notation without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return format(Decimal(repr(float(value))), "f")


def render_message(action: ReminderAction, review_hours: float) -> str:
    """Return the comment body posted for ``action``."""
    if isinstance(action, ReviewerReminder):
        return REVIEWER_TEMPLATE.format(
            reviewer=action.reviewer_login,
            hours=action.hours_waited,
            threshold=format_threshold(review_hours),
        )
    if isinstance(action, BranchCleanupReminder):
        return BRANCH_TEMPLATE.format(author=action.author_login, branch=action.branch_name)
    raise TypeError(f"Unsupported reminder action: {action!r}")


class ActionExecutor:
    """Posts reminder comments, or only logs them in dry-run mode."""

    def __init__(self, client: GitHubClient, review_hours: float) -> None:
        self._client = client
        self._review_hours = review_hours

    def execute(self, action: ReminderAction, dry_run: bool) -> ActionOutcome:
        """Carry out one reminder; never raises for remote failures."""
        body = render_message(action, self._review_hours)
        repository = f"{action.owner}/{action.repo}"

        if dry_run:
            logger.info("[DRY_RUN] Would comment on PR #%s (%s): %s", action.pr_number, repository, body)
            return ActionOutcome.DRY_RUN

        try:
            self._client.create_issue_comment(action.owner, action.repo, action.pr_number, body)
        except RemoteCallError as exc:
            logger.error(
                "Failed to comment on PR #%s (%s): status=%s",
                action.pr_number,
                repository,
                exc.status_code,
                extra={"error": str(exc)},
            )
            return ActionOutcome.FAILED

        if isinstance(action, ReviewerReminder):
            logger.info(
                "Commented reminder on PR #%s for @%s",
                action.pr_number,
                action.reviewer_login,
                extra={"repository": repository},
            )
        else:
            logger.info(
                "Commented branch reminder on PR #%s",
                action.pr_number,
                extra={"repository": repository},
            )
        return ActionOutcome.POSTED
