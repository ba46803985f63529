"""Command-line argument parsing for the PR reminder bot.

Every option falls back to an environment variable so the same entry point
works as a scheduled CLI job and as a GitHub Action step, where inputs arrive
as ``INPUT_<NAME>`` variables.
"""

from __future__ import annotations

import argparse
import os
from typing import Optional, Sequence

from .config import DEFAULT_API_URL, DEFAULT_LOOKBACK_DAYS, DEFAULT_REVIEW_HOURS


def _env(*names: str) -> Optional[str]:
    """Return the first non-empty environment value among ``names``."""
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


def _env_flag(*names: str) -> bool:
    return (_env(*names) or "false").strip().lower() == "true"


def _non_negative_float(value: str) -> float:
    """Parse and validate a non-negative float CLI value.

    Raises:
        argparse.ArgumentTypeError: If value is not a number >= 0.
    """
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be a number") from exc

    if parsed < 0:
        raise argparse.ArgumentTypeError("must be greater than or equal to 0")

    return parsed


def _positive_int(value: str) -> int:
    """Parse and validate a positive integer CLI value.

    Raises:
        argparse.ArgumentTypeError: If value is not a positive integer.
    """
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be an integer") from exc

    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")

    return parsed


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for a reminder scan.

    Returns:
        Parsed arguments with owner, repos, thresholds and mode flags.
    """
    parser = argparse.ArgumentParser(
        prog="pr-reminder-bot",
        description=(
            "Remind inactive pull-request reviewers and authors of merged PRs "
            "whose branch was not deleted."
        ),
    )

    parser.add_argument(
        "--owner",
        default=_env("OWNER", "INPUT_OWNER", "ORG") or "",
        help="Organization or user owning the repositories (env: OWNER).",
    )
    parser.add_argument(
        "--repos",
        default=_env("REPOS", "INPUT_REPOS") or "",
        help="Comma-separated 'owner/repo' or 'repo' entries; omit to auto-discover (env: REPOS).",
    )
    parser.add_argument(
        "--review-hours",
        type=_non_negative_float,
        default=_env("REVIEW_HOURS", "INPUT_REVIEW_HOURS") or DEFAULT_REVIEW_HOURS,
        help=f"Hours before an unreviewed request triggers a reminder (default: {DEFAULT_REVIEW_HOURS:g}).",
    )
    parser.add_argument(
        "--lookback-days",
        type=_positive_int,
        default=_env("MAX_CLOSED_LOOKBACK_DAYS", "INPUT_MAX_CLOSED_LOOKBACK_DAYS") or DEFAULT_LOOKBACK_DAYS,
        help=f"Days of closed PRs to check for undeleted branches (default: {DEFAULT_LOOKBACK_DAYS}).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=_env_flag("DRY_RUN", "INPUT_DRY_RUN"),
        help="Log reminders without posting comments (env: DRY_RUN=true).",
    )
    parser.add_argument(
        "--include-forks",
        action="store_true",
        default=_env_flag("INCLUDE_FORKS", "INPUT_INCLUDE_FORKS"),
        help="Include forked repositories during auto-discovery.",
    )
    parser.add_argument(
        "--include-archived",
        action="store_true",
        default=_env_flag("INCLUDE_ARCHIVED", "INPUT_INCLUDE_ARCHIVED"),
        help="Include archived repositories during auto-discovery.",
    )
    parser.add_argument(
        "--api-url",
        default=_env("GITHUB_API_URL") or DEFAULT_API_URL,
        help="GitHub REST API base URL.",
    )
    parser.add_argument(
        "--log-level",
        default=_env("LOG_LEVEL") or "INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging verbosity (default: INFO).",
    )

    return parser.parse_args(argv)
