"""GitHub REST API client for repository and commit listings."""

import json
import logging
from typing import Any, Dict, List, Optional

import requests

from giter.config import Settings
from giter.domain.commit_history import (
    RawCommit,
    RepositorySummary,
    decode_commits,
    decode_repositories,
)

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """Base class for failures talking to the GitHub API."""
    pass


class TransportError(UpstreamError):
    """Raised when GitHub cannot be reached or the request times out."""

    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url


class UpstreamAPIError(UpstreamError):
    """Raised when GitHub answers with a non-2xx status."""

    def __init__(self, url: str, status_code: int, reason: str, body: str):
        super().__init__(f"GitHub API error: {status_code} {reason} - {body}")
        self.url = url
        self.status_code = status_code
        self.reason = reason
        self.body = body


class DecodeError(UpstreamError):
    """Raised when a response body does not have the expected JSON shape."""
    pass


class GitHubRESTClient:
    """Client for the GitHub REST API v3 endpoints used to build commit history."""

    # GitHub caps page size at 100; only the first page is ever requested
    PAGE_SIZE = 100
    MEDIA_TYPE = "application/vnd.github.v3+json"
    USER_AGENT = "giter"

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        """
        Initialize GitHub REST client.

        Args:
            settings: Runtime settings. If None, uses defaults.
            session: HTTP session to send requests with. If None, every call goes
                through a fresh connection via ``requests.get``.
        """
        self.settings = settings or Settings()
        self.session = session
        self.headers = {"User-Agent": self.USER_AGENT}

    def get(self, url: str, accept: str, params: Optional[Dict[str, Any]] = None) -> bytes:
        """
        Issue a GET request and return the raw body.

        Args:
            url: Absolute request URL
            accept: Value for the Accept header
            params: Query parameters

        Returns:
            Response body bytes of a 2xx response

        Raises:
            TransportError: On network failure or timeout
            UpstreamAPIError: On a non-2xx status
        """
        headers = dict(self.headers)
        headers["Accept"] = accept

        http = self.session or requests
        try:
            response = http.get(
                url,
                params=params,
                headers=headers,
                timeout=self.settings.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(url, f"Request to {url} timed out after {self.settings.timeout}s: {e}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(url, f"Request to {url} failed: {e}") from e

        with response:
            try:
                body = response.content
            except requests.exceptions.RequestException as e:
                raise TransportError(url, f"Reading response from {url} failed: {e}") from e

            if not 200 <= response.status_code < 300:
                text = response.text
                logger.error(
                    f"GitHub API returned {response.status_code} {response.reason} for {url}: {text}"
                )
                raise UpstreamAPIError(url, response.status_code, response.reason or "", text)

            return body

    def _get_json(self, url: str, params: Dict[str, Any]) -> Any:
        body = self.get(url, self.MEDIA_TYPE, params=params)
        try:
            return json.loads(body)
        except ValueError as e:
            logger.error(f"Failed to decode JSON response from {url}: {e}")
            raise DecodeError(f"Invalid JSON from {url}: {e}") from e

    def list_public_repositories(self, account: str) -> List[RepositorySummary]:
        """
        Fetch the public repositories of an account.

        Only the first page is requested, so accounts with more than
        PAGE_SIZE public repositories are truncated.

        Args:
            account: GitHub user name

        Returns:
            Repositories in the order GitHub lists them

        Raises:
            UpstreamError: If the request fails or the body cannot be decoded
        """
        url = f"{self.settings.api_base}/users/{account}/repos"
        logger.debug(f"Fetching repositories for {account} from {url}")

        payload = self._get_json(url, {"type": "public", "per_page": self.PAGE_SIZE})
        try:
            repositories = decode_repositories(payload)
        except ValueError as e:
            logger.error(f"Failed to decode repositories for {account}: {e}")
            raise DecodeError(f"Unexpected repositories payload from {url}: {e}") from e

        logger.info(f"Fetched {len(repositories)} repositories for {account}")
        return repositories

    def list_commits(self, full_name: str) -> List[RawCommit]:
        """
        Fetch the newest commits on a repository's default branch.

        Args:
            full_name: Repository in ``owner/name`` form

        Returns:
            Commits in the order GitHub returns them (newest first)

        Raises:
            UpstreamError: If the request fails or the body cannot be decoded
        """
        url = f"{self.settings.api_base}/repos/{full_name}/commits"
        logger.debug(f"Fetching commits for {full_name} from {url}")

        payload = self._get_json(url, {"per_page": self.PAGE_SIZE})
        try:
            commits = decode_commits(payload)
        except ValueError as e:
            logger.error(f"Failed to decode commits for {full_name}: {e}")
            raise DecodeError(f"Unexpected commits payload from {url}: {e}") from e

        logger.debug(f"Fetched {len(commits)} commits for {full_name}")
        return commits
