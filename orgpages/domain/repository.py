"""
Repository domain objects for orgpages.

RawRepository is what the GitHub organization listing gives us.
EnrichedRepository is the normalized record the classifier and page
renderer work with. Both are immutable.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, FrozenSet, Tuple


@dataclass(frozen=True)
class RawRepository:
    """Repository metadata as listed by the GitHub API."""
    name: str
    description: Optional[str] = None
    archived: bool = False
    topics: Tuple[str, ...] = ()  # Immutable tuple instead of list

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> 'RawRepository':
        """
        Create from a GitHub API repository object.

        Raises:
            ValueError: If the payload has no usable name
        """
        name = data.get('name')
        if not isinstance(name, str) or not name:
            raise ValueError(f"Repository payload without a name: {data!r}")

        description = data.get('description')
        if description is not None and not isinstance(description, str):
            description = str(description)

        return cls(
            name=name,
            description=description,
            archived=bool(data.get('archived', False)),
            topics=tuple(data.get('topics') or ()),
        )

    @property
    def has_description(self) -> bool:
        """True unless the description is missing or blank."""
        return bool(self.description and self.description.strip())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'description': self.description,
            'archived': self.archived,
            'topics': list(self.topics),
        }


@dataclass(frozen=True)
class EnrichedRepository:
    """
    Repository ready for classification and rendering.

    `title` is never empty: it comes from the README heading, falling back
    to the description and then to the repository name. `blurb` is the
    optional "Description:" line from the README.
    """

    name: str
    title: str
    url: str
    blurb: Optional[str] = None
    archived: bool = False
    topics: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if not self.title:
            raise ValueError(f"EnrichedRepository {self.name!r} needs a title")

    def has_topic(self, topic: str) -> bool:
        """Check whether the repository carries a topic tag."""
        return topic in self.topics

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'name': self.name,
            'title': self.title,
            'blurb': self.blurb,
            'url': self.url,
            'archived': self.archived,
            'topics': sorted(self.topics),
        }

    def __str__(self) -> str:
        return f"{self.title} ({self.name})"

    def __repr__(self) -> str:
        return f"EnrichedRepository(name={self.name!r}, title={self.title!r})"
