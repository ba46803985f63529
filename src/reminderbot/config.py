"""Configuration parsing and validation for the PR reminder bot."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from .errors import AuthenticationError, ConfigurationError

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_REVIEW_HOURS = 12.0
DEFAULT_LOOKBACK_DAYS = 14


@dataclass(frozen=True)
class Config:
    """Validated runtime settings, fixed for the whole run."""

    owner: str = ""
    repos: Tuple[str, ...] = ()
    review_hours: float = DEFAULT_REVIEW_HOURS
    lookback_days: int = DEFAULT_LOOKBACK_DAYS
    dry_run: bool = False
    include_forks: bool = False
    include_archived: bool = False
    token: str = field(default="", repr=False)
    api_url: str = DEFAULT_API_URL


def parse_repo_list(raw: Optional[str]) -> Tuple[str, ...]:
    """Split a comma-separated repository list, dropping blank entries."""
    if not raw:
        return ()
    return tuple(entry.strip() for entry in raw.split(",") if entry.strip())


def load_config(
    owner: str,
    repos: Sequence[str],
    review_hours: float = DEFAULT_REVIEW_HOURS,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
    dry_run: bool = False,
    include_forks: bool = False,
    include_archived: bool = False,
    api_url: str = DEFAULT_API_URL,
) -> Config:
    """Build and validate application configuration.

    Args:
        owner: GitHub organization or user that owns the repositories.
        repos: Explicit ``owner/name`` or bare ``name`` entries; may be empty.
        review_hours: Hours after PR creation before a reviewer is reminded.
        lookback_days: Days of closed-PR history scanned for leftover branches.
        dry_run: Log reminders instead of posting them.
        include_forks: Keep forked repositories during auto-discovery.
        include_archived: Keep archived repositories during auto-discovery.
        api_url: Base URL of the GitHub REST API.

    Returns:
        A validated ``Config`` instance.

    Raises:
        ConfigurationError: If neither owner nor repos are given, or a
            numeric setting is out of range.
        AuthenticationError: If ``GITHUB_TOKEN`` is not configured.
    """
    owner = (owner or "").strip()
    repo_specs = tuple(entry.strip() for entry in repos if entry and entry.strip())

    if not owner and not repo_specs:
        raise ConfigurationError(
            "Either an owner or an explicit repository list is required. "
            "Set 'OWNER' (or pass --owner) to auto-discover repositories."
        )
    if review_hours < 0:
        raise ConfigurationError("Invalid value for 'review_hours': expected a number >= 0.")
    if lookback_days <= 0:
        raise ConfigurationError(
            "Invalid value for 'lookback_days': expected an integer greater than 0."
        )

    token: str = (os.getenv("GITHUB_TOKEN") or os.getenv("INPUT_GITHUB_TOKEN") or "").strip()
    if not token:
        raise AuthenticationError(
            "Missing required GitHub token. "
            "Set the 'GITHUB_TOKEN' environment variable before running the reminder bot."
        )

    return Config(
        owner=owner,
        repos=repo_specs,
        review_hours=float(review_hours),
        lookback_days=int(lookback_days),
        dry_run=dry_run,
        include_forks=include_forks,
        include_archived=include_archived,
        token=token,
        api_url=api_url.rstrip("/"),
    )
