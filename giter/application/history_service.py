"""Application service for aggregating commit history across repositories."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

from giter.config import Settings
from giter.domain.commit_history import CommitHistoryEntry, RawCommit, RepositorySummary
from giter.infrastructure.github_client import GitHubRESTClient, UpstreamError

logger = logging.getLogger(__name__)

# (commits, error) for one repository; exactly one side is set
FetchResult = Tuple[Optional[List[RawCommit]], Optional[UpstreamError]]


class HistoryService:
    """Service building one flat commit history for every public repository of an account."""

    def __init__(self, github_client: GitHubRESTClient, settings: Optional[Settings] = None):
        """
        Initialize history service.

        Args:
            github_client: GitHub API client
            settings: Runtime settings. If None, uses the client's settings.
        """
        self.github_client = github_client
        self.settings = settings or github_client.settings

    def build_history(self) -> List[CommitHistoryEntry]:
        """
        Build the commit history of every public repository of the configured account.

        Failing to list repositories aborts the whole build. A repository whose
        commits cannot be fetched is logged and skipped.

        Returns:
            Entries grouped by repository in listing order, commits in the
            order GitHub returned them

        Raises:
            UpstreamError: If the repository listing fails
        """
        account = self.settings.account
        logger.info(f"Building commit history for {account}")

        try:
            repositories = self.github_client.list_public_repositories(account)
        except UpstreamError as e:
            logger.error(f"Failed to fetch repositories for {account}: {e}")
            raise

        history: List[CommitHistoryEntry] = []
        for repository, (commits, error) in zip(repositories, self._fetch_all(repositories)):
            if error is not None:
                logger.warning(
                    f"Failed to fetch commits for repository {repository.name} "
                    f"({repository.full_name}): {error}"
                )
                continue

            logger.debug(f"Fetched {len(commits)} commits for repository {repository.name}")
            history.extend(CommitHistoryEntry.from_commit(repository, commit) for commit in commits)

        logger.info(f"Returning {len(history)} commits from {len(repositories)} repositories")
        return history

    def _fetch_all(self, repositories: List[RepositorySummary]) -> List[FetchResult]:
        """Fetch commits for each repository, keeping listing order."""
        workers = min(self.settings.max_workers, len(repositories))
        if workers <= 1:
            return [self._fetch_one(repository) for repository in repositories]

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="commit-fetch") as executor:
            return list(executor.map(self._fetch_one, repositories))

    def _fetch_one(self, repository: RepositorySummary) -> FetchResult:
        try:
            return self.github_client.list_commits(repository.full_name), None
        except UpstreamError as e:
            return None, e
