"""GitHub REST API client for pull-request reminder scanning."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests

from .config import Config
from .errors import NotFoundError, RemoteCallError
from .models import PullRequest, Repository, Review


class GitHubClient:
    """Small, typed client for the GitHub repository and pull request APIs.

    Every method except ``list_reviews`` issues exactly one HTTP request.
    A 404 answer raises ``NotFoundError``; any other failure raises
    ``RemoteCallError``. Nothing is retried.
    """

    _API_VERSION = "2022-11-28"
    _REVIEW_PAGE_SIZE = 100

    def __init__(self, config: Config, timeout_seconds: int = 30) -> None:
        """Initialize an authenticated GitHub API client.

        Args:
            config: Validated runtime configuration including the token.
            timeout_seconds: Per-request timeout in seconds.
        """
        self._timeout_seconds = timeout_seconds
        self._base_url = config.api_url.rstrip("/")

        self._session = requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {config.token}",
                "X-GitHub-Api-Version": self._API_VERSION,
            }
        )

    def _build_url(self, path: str) -> str:
        """Build a fully qualified API URL from a path below the API root."""
        return f"{self._base_url}/{path.lstrip('/')}"

    def _parse_datetime(self, value: Optional[str]) -> Optional[datetime]:
        """Parse GitHub ISO8601 timestamps into timezone-aware datetimes."""
        if not value:
            return None

        normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
        parsed = datetime.fromisoformat(normalized)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Execute one request and return its decoded JSON payload.

        Raises:
            NotFoundError: If GitHub returns HTTP 404.
            RemoteCallError: If the request fails, returns HTTP >= 400,
                or does not return valid JSON.
        """
        url = self._build_url(path)
        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=json_body,
                timeout=self._timeout_seconds,
            )
        except requests.RequestException as exc:
            raise RemoteCallError(f"GitHub request failed: {method} {url}") from exc

        status_code = response.status_code
        if status_code == 404:
            raise NotFoundError(f"GitHub resource not found: {method} {url}")
        if status_code >= 400:
            raise RemoteCallError(
                f"GitHub API request failed: {method} {url} returned {status_code} - {response.text}",
                status_code=status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise RemoteCallError(
                f"GitHub API returned invalid JSON: {method} {url}",
                status_code=status_code,
            ) from exc

    def _get_list(self, path: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        payload = self._request("GET", path, params=params)
        if not isinstance(payload, list):
            raise RemoteCallError(f"GitHub API returned unexpected payload shape: GET {path}")
        return payload

    def _to_repository(self, item: Dict[str, Any]) -> Repository:
        owner = item.get("owner") or {}
        return Repository(
            owner=str(owner.get("login", "")),
            name=str(item.get("name", "")),
            fork=bool(item.get("fork")),
            archived=bool(item.get("archived")),
        )

    def list_repositories_for_org(self, owner: str, page: int, per_page: int) -> List[Repository]:
        """List one page of an organization's repositories."""
        items = self._get_list(f"orgs/{owner}/repos", params={"page": page, "per_page": per_page})
        return [self._to_repository(item) for item in items]

    def list_repositories_for_user(self, owner: str, page: int, per_page: int) -> List[Repository]:
        """List one page of a user's repositories."""
        items = self._get_list(f"users/{owner}/repos", params={"page": page, "per_page": per_page})
        return [self._to_repository(item) for item in items]

    def list_pull_requests(
        self,
        owner: str,
        repo: str,
        state: str,
        page: int,
        per_page: int,
        sort: Optional[str] = None,
        direction: Optional[str] = None,
    ) -> List[PullRequest]:
        """List one page of pull requests in the given state.

        ``sort`` and ``direction`` are only sent when provided, so GitHub's
        default ordering (newest created first) applies otherwise.
        """
        params: Dict[str, Any] = {"state": state, "page": page, "per_page": per_page}
        if sort is not None:
            params["sort"] = sort
        if direction is not None:
            params["direction"] = direction

        pull_requests: List[PullRequest] = []
        for item in self._get_list(f"repos/{owner}/{repo}/pulls", params=params):
            number = item.get("number")
            created_at = self._parse_datetime(item.get("created_at"))
            updated_at = self._parse_datetime(item.get("updated_at"))

            if number is None or created_at is None or updated_at is None:
                raise RemoteCallError(
                    "GitHub pull request payload is missing required fields: "
                    f"repo={owner}/{repo}, payload={item}"
                )

            head = item.get("head") or {}
            user = item.get("user") or {}
            reviewers = frozenset(
                str(reviewer["login"])
                for reviewer in item.get("requested_reviewers") or []
                if reviewer.get("login")
            )
            pull_requests.append(
                PullRequest(
                    number=int(number),
                    state=str(item.get("state", state)),
                    created_at=created_at,
                    updated_at=updated_at,
                    merged_at=self._parse_datetime(item.get("merged_at")),
                    head_branch=str(head.get("ref", "")),
                    author=str(user.get("login", "")),
                    requested_reviewers=reviewers,
                )
            )

        return pull_requests

    def list_reviews(self, owner: str, repo: str, pr_number: int) -> List[Review]:
        """List every submitted review for a pull request, following all pages."""
        reviews: List[Review] = []
        page = 1

        while True:
            items = self._get_list(
                f"repos/{owner}/{repo}/pulls/{pr_number}/reviews",
                params={"page": page, "per_page": self._REVIEW_PAGE_SIZE},
            )
            if not items:
                break

            for item in items:
                user = item.get("user") or {}
                login = user.get("login")
                if not login:
                    continue
                reviews.append(Review(reviewer_login=str(login), pull_request_number=pr_number))
            page += 1

        return reviews

    def get_branch_ref(self, owner: str, repo: str, branch_name: str) -> Dict[str, Any]:
        """Return the ``heads/{branch_name}`` ref; raises ``NotFoundError`` if it is gone."""
        ref = requests.utils.quote(branch_name, safe="/")
        return self._request("GET", f"repos/{owner}/{repo}/git/ref/heads/{ref}")

    def create_issue_comment(self, owner: str, repo: str, pr_number: int, body: str) -> Dict[str, Any]:
        """Post a comment on the pull request's conversation."""
        return self._request(
            "POST",
            f"repos/{owner}/{repo}/issues/{pr_number}/comments",
            json_body={"body": body},
        )
