"""
Page generation pipeline for orgpages.

Runs the stages in order: list repositories, enrich, classify, render,
write. Nothing is written unless every stage before the write succeeds.
"""

import locale
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from .config import SiteConfig
from .domain import Grouping
from .exit_codes import ConfigError
from .infra import FileStore, GitHubClient
from .pages import render_all_page, render_featured_page
from .services import EnrichmentResult, EnrichmentService, classify, collation_key, locale_collation_key
from .services.classifier import SortKey

logger = logging.getLogger(__name__)


@dataclass
class SiteResult:
    """Outcome of a pipeline run."""
    listed: int
    enrichment: EnrichmentResult
    all_grouping: Grouping
    featured_grouping: Grouping
    written: Dict[str, Path] = field(default_factory=dict)


def get_sort_key(config: SiteConfig) -> SortKey:
    """Title sort key for the configured collation."""
    if not config.collation_locale:
        return collation_key
    try:
        return locale_collation_key(config.collation_locale)
    except locale.Error as e:
        raise ConfigError(f"Collation locale {config.collation_locale!r} unavailable: {e}") from e


def build_site(
    config: SiteConfig,
    github_client: Optional[GitHubClient] = None,
    store: Optional[FileStore] = None,
) -> SiteResult:
    """
    Generate the complete and featured listing pages.

    Args:
        config: Run configuration
        github_client: GitHub client instance (creates default if None)
        store: File store for fragments and output (creates default if None)

    Returns:
        SiteResult describing what was classified and written

    Raises:
        TransportError: If the organization's repositories cannot be listed
    """
    github = github_client or GitHubClient(config.github)
    store = store or FileStore(config.fragments_dir, config.output_dir)
    sort_key = get_sort_key(config)

    repos = github.list_org_repos(config.org)

    enrichment = EnrichmentService(config, github).enrich_all(repos)

    all_grouping = classify(enrichment.repositories, config.workshop_tag, config.taxonomy, sort_key)
    featured_grouping = classify(enrichment.repositories, config.featured_tag, config.taxonomy, sort_key)

    all_fragment = store.read_fragment_or_empty(config.all_fragment)
    featured_fragment = store.read_fragment_or_empty(config.featured_fragment)

    pages = {
        config.all_page: render_all_page(all_grouping, all_fragment, config),
        config.featured_page: render_featured_page(featured_grouping, featured_fragment, config),
    }
    written = store.write_pages(pages)
    logger.info(f"Pages generated: {', '.join(pages)}")

    return SiteResult(
        listed=len(repos),
        enrichment=enrichment,
        all_grouping=all_grouping,
        featured_grouping=featured_grouping,
        written=written,
    )
