"""
Enrichment service for orgpages.

Turns repositories from the organization listing into EnrichedRepository
records: topics and README are fetched for each one, a display title and
blurb are derived, and the canonical GitHub Pages URL is attached.

A failure on one repository drops that repository only.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional
import logging

from ..config import SiteConfig
from ..domain import RawRepository, EnrichedRepository
from ..exit_codes import EnrichmentError
from ..infra import GitHubClient
from ..readme import extract_title_and_blurb, resolve_title

logger = logging.getLogger(__name__)


@dataclass
class EnrichmentResult:
    """Result of an enrichment pass."""
    repositories: List[EnrichedRepository] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)  # No description
    failed: Dict[str, str] = field(default_factory=dict)  # name -> error

    @property
    def success(self) -> bool:
        return len(self.failed) == 0


class EnrichmentService:
    """
    Service for enriching listed repositories.

    Example:
        service = EnrichmentService(config, github_client)
        result = service.enrich_all(github_client.list_org_repos(config.org))
        for repo in result.repositories:
            print(repo.title, repo.url)
    """

    def __init__(self, config: SiteConfig, github_client: Optional[GitHubClient] = None):
        """
        Initialize EnrichmentService.

        Args:
            config: Run configuration
            github_client: GitHub client instance (creates default if None)
        """
        self.config = config
        self.github = github_client or GitHubClient(config.github)

    def enrich(self, raw: RawRepository) -> EnrichedRepository:
        """
        Enrich a single repository.

        Args:
            raw: Repository from the organization listing

        Returns:
            EnrichedRepository

        Raises:
            EnrichmentError: If anything goes wrong for this repository
        """
        org = self.config.org
        try:
            topics = self.github.get_topics(org, raw.name)
            readme = self.github.get_readme(org, raw.name)
            summary = extract_title_and_blurb(readme)

            return EnrichedRepository(
                name=raw.name,
                title=resolve_title(summary, raw.description, raw.name),
                blurb=summary.blurb,
                url=self.config.pages_url(raw.name),
                archived=raw.archived,
                topics=frozenset(topics),
            )
        except EnrichmentError:
            raise
        except Exception as e:
            raise EnrichmentError(raw.name, str(e) or e.__class__.__name__) from e

    def _enrich_or_record(self, raw: RawRepository, result: EnrichmentResult) -> Optional[EnrichedRepository]:
        try:
            return self.enrich(raw)
        except EnrichmentError as e:
            logger.warning(f"Skipping {raw.name}: {e}")
            result.failed[raw.name] = str(e)
            return None

    def enrich_all(self, repos: Iterable[RawRepository]) -> EnrichmentResult:
        """
        Enrich every repository that has a description.

        Repositories are processed one at a time unless the configuration
        allows more workers. Either way the output keeps the listing order.

        Args:
            repos: Repositories from the organization listing

        Returns:
            EnrichmentResult with enriched, skipped and failed repositories
        """
        result = EnrichmentResult()
        candidates: List[RawRepository] = []

        for raw in repos:
            if not raw.has_description:
                logger.debug(f"Skipping {raw.name}: no description")
                result.skipped.append(raw.name)
                continue
            candidates.append(raw)

        enriched: Dict[str, EnrichedRepository] = {}

        if self.config.max_workers <= 1:
            for raw in candidates:
                repo = self._enrich_or_record(raw, result)
                if repo is not None:
                    enriched[raw.name] = repo
        else:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                futures = {executor.submit(self._enrich_or_record, raw, result): raw for raw in candidates}

                for future in as_completed(futures):
                    repo = future.result()
                    if repo is not None:
                        enriched[futures[future].name] = repo

        result.repositories = [enriched[raw.name] for raw in candidates if raw.name in enriched]
        result.failed = {raw.name: result.failed[raw.name] for raw in candidates if raw.name in result.failed}

        logger.info(
            f"Enriched {len(result.repositories)} repositories "
            f"({len(result.skipped)} without description, {len(result.failed)} failed)"
        )
        return result
