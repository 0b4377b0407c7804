"""
Category domain objects for orgpages.

A Category pairs a GitHub topic value with the heading shown on the pages.
A Taxonomy is the fixed, ordered set of categories; sections are always
emitted in declared order.

A Grouping is the classifier's output: one tuple of repositories per
category key, empty tuples included.
"""

from dataclasses import dataclass
from typing import Dict, Any, Iterator, Mapping, Tuple

from .repository import EnrichedRepository


@dataclass(frozen=True)
class Category:
    """
    Topic key with its section heading.

    Examples:
        Category("geospatial", "Geographic information systems (GIS) and mapping")
    """
    key: str
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {'key': self.key, 'label': self.label}

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class Taxonomy:
    """Ordered, immutable collection of categories."""

    categories: Tuple[Category, ...] = ()

    def __post_init__(self):
        keys = [c.key for c in self.categories]
        duplicates = sorted({k for k in keys if keys.count(k) > 1})
        if duplicates:
            raise ValueError(f"Duplicate category keys: {', '.join(duplicates)}")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> 'Taxonomy':
        """Build from a topic → heading mapping, keeping its order."""
        return cls(tuple(Category(str(key), str(label)) for key, label in mapping.items()))

    def keys(self) -> Tuple[str, ...]:
        return tuple(c.key for c in self.categories)

    def label_for(self, key: str) -> str:
        for category in self.categories:
            if category.key == key:
                return category.label
        raise KeyError(key)

    def __iter__(self) -> Iterator[Category]:
        return iter(self.categories)

    def __len__(self) -> int:
        return len(self.categories)

    def to_dict(self) -> Dict[str, str]:
        return {c.key: c.label for c in self.categories}


@dataclass(frozen=True)
class Grouping:
    """
    Repositories per category, in taxonomy order.

    Every taxonomy key is present; categories with no members hold an
    empty tuple and are skipped by non_empty().
    """

    taxonomy: Taxonomy
    groups: Tuple[Tuple[str, Tuple[EnrichedRepository, ...]], ...] = ()

    def get(self, key: str) -> Tuple[EnrichedRepository, ...]:
        for group_key, repos in self.groups:
            if group_key == key:
                return repos
        raise KeyError(key)

    def __getitem__(self, key: str) -> Tuple[EnrichedRepository, ...]:
        return self.get(key)

    def keys(self) -> Tuple[str, ...]:
        return tuple(key for key, _ in self.groups)

    def items(self) -> Iterator[Tuple[Category, Tuple[EnrichedRepository, ...]]]:
        """Yield (category, repositories) for every category."""
        for category in self.taxonomy:
            yield category, self.get(category.key)

    def non_empty(self) -> Iterator[Tuple[Category, Tuple[EnrichedRepository, ...]]]:
        """Yield (category, repositories) for categories with members."""
        for category, repos in self.items():
            if repos:
                yield category, repos

    @property
    def is_empty(self) -> bool:
        return not any(repos for _, repos in self.groups)

    def counts(self) -> Dict[str, int]:
        return {key: len(repos) for key, repos in self.groups}

    def to_dict(self) -> Dict[str, Any]:
        """Plain view for JSON output and comparisons."""
        return {key: [r.to_dict() for r in repos] for key, repos in self.groups}
