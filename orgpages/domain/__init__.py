"""
Domain layer for orgpages.

Contains pure domain objects with no I/O or side effects:
- RawRepository: Repository as listed by the GitHub API
- EnrichedRepository: Repository with display title, blurb and page URL
- Category / Taxonomy: Ordered topic → heading sections
- Grouping: Classified repositories per category

These objects are immutable and provide to_dict() for JSON output.
"""

from .repository import RawRepository, EnrichedRepository
from .category import Category, Taxonomy, Grouping

__all__ = [
    'RawRepository',
    'EnrichedRepository',
    'Category',
    'Taxonomy',
    'Grouping',
]
