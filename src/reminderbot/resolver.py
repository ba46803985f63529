"""Resolution of the repositories a scan targets.

Repositories come either from an explicit list (``owner/name`` or bare
``name`` entries) or from auto-discovery over the owner's repository listing.
"""

from __future__ import annotations

import enum
import logging
from typing import List, Sequence, Tuple

from .config import Config
from .errors import ConfigurationError, NotFoundError
from .github_client import GitHubClient
from .models import Repository, RepositoryRef

logger = logging.getLogger(__name__)

DISCOVERY_PAGE_SIZE = 100


class DiscoveryMode(enum.Enum):
    """Which listing endpoint auto-discovery uses for the owner."""

    UNKNOWN = "unknown"
    ORG = "org"
    USER = "user"


def parse_repo_specs(specs: Sequence[str], default_owner: str = "") -> List[RepositoryRef]:
    """Parse explicit repository entries into references.

    Raises:
        ConfigurationError: If a bare name has no owner to fall back to, or an
            entry has more than one ``/``.
    """
    parsed: List[RepositoryRef] = []
    for entry in specs:
        entry = entry.strip()
        if not entry:
            continue

        parts = entry.split("/")
        if len(parts) == 1:
            if not default_owner:
                raise ConfigurationError(
                    f"Repository '{entry}' missing owner. "
                    "Provide OWNER or use the 'owner/repo' form."
                )
            parsed.append(RepositoryRef(owner=default_owner, name=parts[0]))
        elif len(parts) == 2 and all(parts):
            parsed.append(RepositoryRef(owner=parts[0], name=parts[1]))
        else:
            raise ConfigurationError(f"Invalid repo spec: '{entry}'. Use 'owner/repo' or 'repo'.")

    return parsed


class RepositoryResolver:
    """Turns configuration into the ordered list of repositories to scan."""

    def __init__(self, client: GitHubClient, page_size: int = DISCOVERY_PAGE_SIZE) -> None:
        self._client = client
        self._page_size = page_size

    def resolve(self, config: Config) -> List[RepositoryRef]:
        """Return scan targets, preferring the explicit list over discovery.

        Raises:
            ConfigurationError: If neither repos nor an owner are configured,
                or an explicit entry is malformed.
        """
        explicit = parse_repo_specs(config.repos, default_owner=config.owner)
        if explicit:
            return explicit

        if not config.owner:
            raise ConfigurationError("OWNER is required when no explicit repositories are provided.")

        return self.discover(config)

    def discover(self, config: Config) -> List[RepositoryRef]:
        """Page through the owner's repositories and keep the eligible ones.

        The first page decides between organization and user listing; that
        decision holds for the remaining pages.
        """
        logger.info("Auto-discovering repositories", extra={"owner": config.owner})

        mode = DiscoveryMode.UNKNOWN
        targets: List[RepositoryRef] = []
        page = 1

        while True:
            mode, items = self._fetch_page(config.owner, page, mode)
            if not items:
                break

            for repository in items:
                if self._is_eligible(repository, config):
                    targets.append(RepositoryRef(owner=repository.owner, name=repository.name))
            page += 1

        logger.debug(
            "Auto-discovery finished",
            extra={"owner": config.owner, "mode": mode.value, "repositories": len(targets)},
        )
        return targets

    def _fetch_page(
        self,
        owner: str,
        page: int,
        mode: DiscoveryMode,
    ) -> Tuple[DiscoveryMode, List[Repository]]:
        if mode is not DiscoveryMode.USER:
            try:
                items = self._client.list_repositories_for_org(owner, page, self._page_size)
                return DiscoveryMode.ORG, items
            except NotFoundError:
                if mode is DiscoveryMode.ORG:
                    raise
                logger.info(
                    "Owner is not an organization; listing user repositories instead",
                    extra={"owner": owner},
                )

        items = self._client.list_repositories_for_user(owner, page, self._page_size)
        return DiscoveryMode.USER, items

    @staticmethod
    def _is_eligible(repository: Repository, config: Config) -> bool:
        if repository.fork and not config.include_forks:
            return False
        if repository.archived and not config.include_archived:
            return False
        return True

