"""
Classification for orgpages.

Filters enriched repositories by a membership tag and groups them into
the taxonomy's categories, each sorted by display title.
"""

import locale
import threading
from typing import Callable, Iterable, List, Tuple

from pyuca import Collator

from ..domain import EnrichedRepository, Grouping, Taxonomy

SortKey = Callable[[str], object]

_locale_lock = threading.Lock()
_collator = Collator()


def collation_key(title: str) -> Tuple[int, ...]:
    """
    Sort key using the Unicode Collation Algorithm's root collation.

    Letters compare case- and accent-insensitively first ("apple" before
    "Banana", "Øresund" between "Mapping" and "Python"), and punctuation
    and symbols sort before digits. Accents, then case (lowercase first)
    only break ties. Equal titles give equal keys, so a stable sort keeps
    their input order.
    """
    return _collator.sort_key(title)


def locale_collation_key(locale_name: str) -> SortKey:
    """
    Build a sort key that collates with `locale.strxfrm` under a named locale.

    Raises:
        locale.Error: If the locale is not available on this system
    """
    with _locale_lock:
        previous = locale.setlocale(locale.LC_COLLATE)
        try:
            locale.setlocale(locale.LC_COLLATE, locale_name)
        finally:
            locale.setlocale(locale.LC_COLLATE, previous)

    def key(title: str):
        # LC_COLLATE is process-wide, so switch it only for the transform
        with _locale_lock:
            previous = locale.setlocale(locale.LC_COLLATE)
            try:
                locale.setlocale(locale.LC_COLLATE, locale_name)
                return locale.strxfrm(title)
            finally:
                locale.setlocale(locale.LC_COLLATE, previous)

    return key


def filter_by_tag(repos: Iterable[EnrichedRepository], tag: str) -> List[EnrichedRepository]:
    """Keep repositories carrying `tag`, in input order."""
    return [repo for repo in repos if repo.has_topic(tag)]


def group_by_category(
    repos: Iterable[EnrichedRepository],
    taxonomy: Taxonomy,
    sort_key: SortKey = collation_key,
) -> Grouping:
    """
    Group repositories by taxonomy category.

    A repository lands in every category whose key is among its topics.
    Each category is sorted by display title; the sort is stable, so
    equal titles keep their input order. Categories without members are
    kept as empty tuples.

    Args:
        repos: Repositories to group
        taxonomy: Ordered categories
        sort_key: Key function applied to display titles

    Returns:
        Grouping in taxonomy order
    """
    repos = list(repos)
    groups = []
    for category in taxonomy:
        members = [repo for repo in repos if repo.has_topic(category.key)]
        members.sort(key=lambda repo: sort_key(repo.title))
        groups.append((category.key, tuple(members)))
    return Grouping(taxonomy=taxonomy, groups=tuple(groups))


def classify(
    repos: Iterable[EnrichedRepository],
    tag: str,
    taxonomy: Taxonomy,
    sort_key: SortKey = collation_key,
) -> Grouping:
    """Filter by membership tag, then group by category."""
    return group_by_category(filter_by_tag(repos, tag), taxonomy, sort_key)
