"""Tests for undeleted branch detection on merged pull requests."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import Mock, call

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from reminderbot.branches import branch_exists, find_undeleted_branches
from reminderbot.errors import NotFoundError, RemoteCallError
from reminderbot.models import BranchCleanupReminder, PullRequest, RepositoryRef

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
REPO = RepositoryRef("acme", "api")


def _make_pr(
    number: int = 42,
    days_since_update: float = 2,
    merged: bool = True,
    branch: str = "feature-x",
    author: str = "alice",
) -> PullRequest:
    updated = NOW - timedelta(days=days_since_update)
    return PullRequest(
        number=number,
        state="closed",
        created_at=updated - timedelta(days=1),
        updated_at=updated,
        merged_at=updated if merged else None,
        head_branch=branch,
        author=author,
    )


def _client(pages) -> Mock:
    client = Mock()
    client.list_pull_requests.side_effect = list(pages) + [[]]
    client.get_branch_ref.return_value = {"ref": "refs/heads/x"}
    return client


def test_merged_pr_with_existing_branch_gets_one_reminder():
    """Verify a recently merged PR whose branch exists produces exactly one reminder."""
    client = _client([[_make_pr()]])

    reminders = list(find_undeleted_branches(client, REPO, 14, NOW))

    assert reminders == [
        BranchCleanupReminder(
            owner="acme", repo="api", pr_number=42, branch_name="feature-x", author_login="alice"
        )
    ]
    client.get_branch_ref.assert_called_once_with("acme", "api", "feature-x")


def test_closed_prs_are_requested_newest_updated_first():
    """Verify closed PRs are paged by updated time, descending."""
    client = _client([])

    list(find_undeleted_branches(client, REPO, 14, NOW))

    kwargs = client.list_pull_requests.call_args.kwargs
    assert kwargs["state"] == "closed"
    assert kwargs["sort"] == "updated"
    assert kwargs["direction"] == "desc"


def test_deleted_branch_is_skipped_silently():
    """Verify a missing ref means no reminder."""
    client = _client([[_make_pr()]])
    client.get_branch_ref.side_effect = NotFoundError("gone")

    assert list(find_undeleted_branches(client, REPO, 14, NOW)) == []


def test_other_lookup_failure_is_logged_and_skipped(caplog):
    """Verify non-404 ref lookup errors skip only that PR."""
    client = _client([[_make_pr(number=1, branch="a"), _make_pr(number=2, branch="b")]])
    client.get_branch_ref.side_effect = [RemoteCallError("boom", status_code=500), {"ref": "refs/heads/b"}]

    reminders = list(find_undeleted_branches(client, REPO, 14, NOW))

    assert [r.pr_number for r in reminders] == [2]
    assert "Error checking ref a: 500" in caplog.text


def test_closed_but_unmerged_pr_is_not_checked():
    """Verify only merged PRs get a branch existence check."""
    client = _client([[_make_pr(merged=False)]])

    assert list(find_undeleted_branches(client, REPO, 14, NOW)) == []
    client.get_branch_ref.assert_not_called()


def test_out_of_window_prs_are_never_checked():
    """Verify merged PRs updated before the lookback window are ignored."""
    client = _client([[_make_pr(number=1, branch="new"), _make_pr(number=2, days_since_update=20, branch="old")]])

    reminders = list(find_undeleted_branches(client, REPO, 14, NOW))

    assert [r.branch_name for r in reminders] == ["new"]
    client.get_branch_ref.assert_called_once_with("acme", "api", "new")


def test_page_entirely_outside_window_is_never_followed():
    """Verify page 2 is not requested when page 1 has no PR inside the window."""
    client = _client([[_make_pr(days_since_update=30)], [_make_pr(days_since_update=31)]])

    assert list(find_undeleted_branches(client, REPO, 14, NOW)) == []
    assert client.list_pull_requests.call_count == 1
    client.get_branch_ref.assert_not_called()


def test_old_second_page_is_requested_but_third_is_not():
    """Verify paging continues after an in-window page and stops after an old one."""
    client = _client([
        [_make_pr(number=1, days_since_update=1)],
        [_make_pr(number=2, days_since_update=30)],
        [_make_pr(number=3, days_since_update=40)],
    ])

    reminders = list(find_undeleted_branches(client, REPO, 14, NOW))

    assert [r.pr_number for r in reminders] == [1]
    assert [c.kwargs["page"] for c in client.list_pull_requests.call_args_list] == [1, 2]
    assert client.get_branch_ref.call_args_list == [call("acme", "api", "feature-x")]


def test_partially_in_window_page_keeps_paging():
    """Verify one in-window PR is enough to request the next page."""
    client = _client([
        [_make_pr(number=1, days_since_update=1), _make_pr(number=2, days_since_update=20)],
        [_make_pr(number=3, days_since_update=3, branch="feature-y")],
    ])

    reminders = list(find_undeleted_branches(client, REPO, 14, NOW))

    assert [r.pr_number for r in reminders] == [1, 3]
    assert client.list_pull_requests.call_count == 3


def test_branch_exists_reports_presence():
    """Verify branch_exists is True only when the ref lookup succeeds."""
    client = Mock()
    assert branch_exists(client, REPO, "main") is True

    client.get_branch_ref.side_effect = NotFoundError("gone")
    assert branch_exists(client, REPO, "main") is False
