"""Domain models for pull-request reminder scanning.

These dataclasses intentionally model only the subset of GitHub payload fields
that are required to decide whether a reminder is due.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import FrozenSet, List, Optional, Union


@dataclass(frozen=True, slots=True)
class RepositoryRef:
    """Identifies one repository to scan."""

    owner: str
    name: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(slots=True)
class Repository:
    """Represents one item of an owner's repository listing."""

    owner: str
    name: str
    fork: bool
    archived: bool


@dataclass(frozen=True, slots=True)
class PullRequest:
    """Represents the minimal pull request data required for reminder decisions."""

    number: int
    state: str
    created_at: datetime
    updated_at: datetime
    merged_at: Optional[datetime]
    head_branch: str
    author: str
    requested_reviewers: FrozenSet[str] = frozenset()


@dataclass(frozen=True, slots=True)
class Review:
    """Records that a reviewer has reviewed a pull request, whatever the outcome."""

    reviewer_login: str
    pull_request_number: int


@dataclass(frozen=True, slots=True)
class ReviewerReminder:
    """A reminder for a requested reviewer who has not reviewed yet."""

    owner: str
    repo: str
    pr_number: int
    reviewer_login: str
    hours_waited: float


@dataclass(frozen=True, slots=True)
class BranchCleanupReminder:
    """A reminder for the author of a merged PR whose branch still exists."""

    owner: str
    repo: str
    pr_number: int
    branch_name: str
    author_login: str


ReminderAction = Union[ReviewerReminder, BranchCleanupReminder]


class ActionOutcome(enum.Enum):
    """Result of executing one reminder action."""

    DRY_RUN = "dry_run"
    POSTED = "posted"
    FAILED = "failed"


@dataclass(slots=True)
class ScanSummary:
    """Aggregated counters for one scan run."""

    repositories_targeted: int = 0
    repositories_scanned: int = 0
    reminders_posted: int = 0
    reminders_dry_run: int = 0
    reminders_failed: int = 0
    failed_repositories: List[str] = field(default_factory=list)

    @property
    def repositories_failed(self) -> int:
        return len(self.failed_repositories)

    def record(self, outcome: ActionOutcome) -> None:
        """Count one executor outcome."""
        if outcome is ActionOutcome.POSTED:
            self.reminders_posted += 1
        elif outcome is ActionOutcome.DRY_RUN:
            self.reminders_dry_run += 1
        else:
            self.reminders_failed += 1
