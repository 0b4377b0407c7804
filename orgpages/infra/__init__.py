"""
Infrastructure layer for orgpages.

Contains abstractions for external systems:
- GitHubClient: GitHub API access
- FileStore: Curated fragment reads and page writes

These provide clean interfaces that can be mocked for testing.
"""

from .github_client import GitHubClient, RateLimitStatus
from .file_store import FileStore

__all__ = [
    'GitHubClient',
    'RateLimitStatus',
    'FileStore',
]
