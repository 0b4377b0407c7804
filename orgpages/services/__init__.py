"""
Service layer for orgpages.

Services contain the pipeline's logic, using domain objects and
infrastructure clients:
- EnrichmentService: Topics, README title/blurb and page URL per repository
- classifier: Tag filtering and category grouping
"""

from .enrichment_service import EnrichmentService, EnrichmentResult
from .classifier import classify, collation_key, filter_by_tag, group_by_category, locale_collation_key

__all__ = [
    'EnrichmentService',
    'EnrichmentResult',
    'classify',
    'collation_key',
    'filter_by_tag',
    'group_by_category',
    'locale_collation_key',
]
