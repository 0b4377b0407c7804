"""Shared fixtures for orgpages tests."""

from typing import Dict, FrozenSet, Iterable, List, Optional

import pytest

from orgpages.config import SiteConfig
from orgpages.domain import EnrichedRepository, RawRepository, Taxonomy
from orgpages.exit_codes import TransportError


TAXONOMY = Taxonomy.from_mapping({
    "data": "Data analysis and visualization",
    "digital-scholarship": "Digital scholarship",
    "geospatial": "Geographic information systems (GIS) and mapping",
})


class FakeGitHubClient:
    """
    In-memory stand-in for GitHubClient.

    Topics and READMEs are looked up by repository name; names listed in
    `failing` raise from get_topics, as a broken client would.
    """

    def __init__(
        self,
        repos: Optional[List[RawRepository]] = None,
        topics: Optional[Dict[str, Iterable[str]]] = None,
        readmes: Optional[Dict[str, str]] = None,
        failing: Iterable[str] = (),
        list_error: Optional[Exception] = None,
    ):
        self.repos = repos or []
        self.topics = {k: frozenset(v) for k, v in (topics or {}).items()}
        self.readmes = readmes or {}
        self.failing = set(failing)
        self.list_error = list_error
        self.calls: List[tuple] = []

    def list_org_repos(self, org: str) -> List[RawRepository]:
        self.calls.append(('list', org))
        if self.list_error:
            raise self.list_error
        return list(self.repos)

    def get_topics(self, org: str, name: str) -> FrozenSet[str]:
        self.calls.append(('topics', org, name))
        if name in self.failing:
            raise RuntimeError(f"boom for {name}")
        return self.topics.get(name, frozenset())

    def get_readme(self, org: str, name: str) -> str:
        self.calls.append(('readme', org, name))
        return self.readmes.get(name, "")


@pytest.fixture
def taxonomy():
    return TAXONOMY


@pytest.fixture
def site_config(tmp_path):
    """SiteConfig writing into a temporary directory."""
    return SiteConfig(
        org="test-org",
        taxonomy=TAXONOMY,
        output_dir=tmp_path / "out",
        fragments_dir=tmp_path / "fragments",
    )


@pytest.fixture
def make_repo():
    """Factory for EnrichedRepository with sensible defaults."""
    def _make(name, title=None, topics=(), archived=False, blurb=None):
        return EnrichedRepository(
            name=name,
            title=title or name,
            url=f"https://test-org.github.io/{name}/",
            blurb=blurb,
            archived=archived,
            topics=frozenset(topics),
        )
    return _make


@pytest.fixture
def fake_client_factory():
    return FakeGitHubClient


@pytest.fixture
def transport_error():
    return TransportError("HTTP 500: repos page 1", status_code=500)

