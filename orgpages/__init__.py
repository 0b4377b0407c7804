"""
orgpages - Static workshop listings for a GitHub organization.

orgpages lists an organization's repositories, pulls a display title and
a short blurb out of each README, groups repositories by topic and renders
two static pages: a complete listing and a featured subset.

Quick Start:
    from orgpages import load_config, build_site

    config = load_config()          # defaults, config file, environment
    result = build_site(config)     # writes all.html and index.html

    for category, repos in result.featured_grouping.non_empty():
        print(category.label, [r.title for r in repos])

Domain Objects:
    RawRepository - Repository as listed by the GitHub API
    EnrichedRepository - Repository with title, blurb and page URL
    Category / Taxonomy - Ordered topic sections
    Grouping - Classified repositories per category

Services:
    EnrichmentService - Topics and README summary per repository
    classify - Tag filtering and category grouping
"""

__version__ = "1.0.0"

from .domain import (
    RawRepository,
    EnrichedRepository,
    Category,
    Taxonomy,
    Grouping,
)

from .services import (
    EnrichmentService,
    classify,
    filter_by_tag,
    group_by_category,
)

from .readme import extract_title_and_blurb

from .config import load_config, SiteConfig

from .pipeline import build_site

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "RawRepository",
    "EnrichedRepository",
    "Category",
    "Taxonomy",
    "Grouping",
    # Services
    "EnrichmentService",
    "classify",
    "filter_by_tag",
    "group_by_category",
    "extract_title_and_blurb",
    # Configuration
    "load_config",
    "SiteConfig",
    # Pipeline
    "build_site",
]
