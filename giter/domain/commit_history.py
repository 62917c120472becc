"""Domain entities for repository commit history."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List

SHORT_SHA_LENGTH = 7


@dataclass(frozen=True)
class RepositorySummary:
    """Immutable public repository entity."""

    name: str
    full_name: str
    description: str
    html_url: str


@dataclass(frozen=True)
class RawCommit:
    """Immutable commit entity as returned by the commits endpoint."""

    sha: str
    message: str
    author_name: str
    author_email: str
    author_date: datetime
    html_url: str


@dataclass(frozen=True)
class CommitHistoryEntry:
    """Flattened commit record returned to the front end."""

    repository_name: str
    commit_message: str
    commit_sha: str
    commit_time: datetime
    commit_url: str

    @classmethod
    def from_commit(cls, repository: RepositorySummary, commit: RawCommit) -> "CommitHistoryEntry":
        return cls(
            repository_name=repository.name,
            commit_message=commit.message,
            commit_sha=commit.sha[:SHORT_SHA_LENGTH],
            commit_time=commit.author_date,
            commit_url=commit.html_url,
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "repository_name": self.repository_name,
            "commit_message": self.commit_message,
            "commit_sha": self.commit_sha,
            "commit_time": format_timestamp(self.commit_time),
            "commit_url": self.commit_url,
        }


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp as sent by GitHub (``2024-01-31T12:00:00Z``)."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Render a datetime as RFC 3339, using ``Z`` for UTC."""
    rendered = value.isoformat()
    if rendered.endswith("+00:00"):
        rendered = rendered[: -len("+00:00")] + "Z"
    return rendered


def _require_list(payload: Any, kind: str) -> List[Any]:
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array of {kind}, got {type(payload).__name__}")
    return payload


def _require_object(node: Any, kind: str, index: int) -> Dict[str, Any]:
    if not isinstance(node, dict):
        raise ValueError(f"{kind} #{index} is not a JSON object")
    return node


def _require_str(node: Dict[str, Any], key: str, kind: str, index: int) -> str:
    value = node.get(key)
    if not isinstance(value, str):
        raise ValueError(f"{kind} #{index} is missing string field '{key}'")
    return value


def _optional_str(node: Dict[str, Any], key: str) -> str:
    # GitHub sends null for empty descriptions and unknown authors
    value = node.get(key)
    return value if isinstance(value, str) else ""


def decode_repositories(payload: Any) -> List[RepositorySummary]:
    """
    Decode the list-repositories response.

    Args:
        payload: Parsed JSON body of ``GET /users/{account}/repos``

    Returns:
        Repositories in the order the API returned them

    Raises:
        ValueError: If the payload does not have the expected shape
    """
    repositories = []
    for index, raw in enumerate(_require_list(payload, "repositories")):
        node = _require_object(raw, "repository", index)
        repositories.append(
            RepositorySummary(
                name=_require_str(node, "name", "repository", index),
                full_name=_require_str(node, "full_name", "repository", index),
                description=_optional_str(node, "description"),
                html_url=_optional_str(node, "html_url"),
            )
        )
    return repositories


def decode_commits(payload: Any) -> List[RawCommit]:
    """
    Decode the list-commits response.

    Message and author live under the nested ``commit`` object; ``sha`` and
    ``html_url`` are top level. A sha shorter than the short form is
    rejected rather than truncated.

    Raises:
        ValueError: If the payload does not have the expected shape
    """
    commits = []
    for index, raw in enumerate(_require_list(payload, "commits")):
        node = _require_object(raw, "commit", index)

        sha = _require_str(node, "sha", "commit", index)
        if len(sha) < SHORT_SHA_LENGTH:
            raise ValueError(f"commit #{index} has a sha shorter than {SHORT_SHA_LENGTH} characters: {sha!r}")

        details = _require_object(node.get("commit"), "commit.commit", index)
        author = _require_object(details.get("author"), "commit.commit.author", index)
        date_value = _require_str(author, "date", "commit.commit.author", index)
        try:
            author_date = parse_timestamp(date_value)
        except ValueError as e:
            raise ValueError(f"commit #{index} has an invalid author date {date_value!r}: {e}") from e

        commits.append(
            RawCommit(
                sha=sha,
                message=_optional_str(details, "message"),
                author_name=_optional_str(author, "name"),
                author_email=_optional_str(author, "email"),
                author_date=author_date,
                html_url=_optional_str(node, "html_url"),
            )
        )
    return commits
