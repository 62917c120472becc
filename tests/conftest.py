"""
Pytest configuration and shared fixtures.
"""

import json
from unittest.mock import MagicMock

import pytest
import requests

from giter.config import Settings


def make_commit_payload(sha, message="init", date="2024-01-31T12:00:00Z", full_name="u/a"):
    """Build one element of a list-commits response."""
    return {
        "sha": sha,
        "commit": {
            "message": message,
            "author": {
                "name": "Suda",
                "email": "suda@example.com",
                "date": date,
            },
        },
        "html_url": f"https://github.com/{full_name}/commit/{sha}",
    }


def make_response(status_code=200, payload=None, body=None, reason="OK"):
    """Mock requests.Response usable as a context manager."""
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.encoding = "utf-8"
    if body is None:
        body = json.dumps(payload).encode("utf-8")
    response.content = body
    response.text = body.decode("utf-8", errors="replace")
    return response


def make_real_response(status_code, body, reason, encoding):
    """Real requests.Response with a fully consumed body."""
    response = requests.models.Response()
    response.status_code = status_code
    response.reason = reason
    response.encoding = encoding
    response._content = body
    response._content_consumed = True
    return response


@pytest.fixture
def settings():
    """Settings pointing at a fake API host."""
    return Settings(account="u", api_base="https://api.example.test", timeout=10)


@pytest.fixture
def sample_repositories_payload():
    """Sample list-repositories response data."""
    return [
        {
            "name": "a",
            "full_name": "u/a",
            "description": "First repository",
            "html_url": "https://github.com/u/a",
        },
        {
            "name": "b",
            "full_name": "u/b",
            "description": None,
            "html_url": "https://github.com/u/b",
        },
    ]


@pytest.fixture
def sample_commits_payload():
    """Sample list-commits response data, newest first."""
    return [
        make_commit_payload(
            "1234567890abcdef1234567890abcdef12345678",
            message="Add feature\n\nLonger body",
            date="2024-02-01T09:30:00Z",
        ),
        make_commit_payload(
            "abcdef1234567890abcdef1234567890abcdef12",
            message="init",
            date="2024-01-31T12:00:00Z",
        ),
    ]
