"""
README title/blurb extraction for orgpages.

This is deliberately not a markdown parser. Two fields are pulled out of
the raw README text:

- title: the first line whose first non-space character is '#', with the
  run of '#' characters and surrounding whitespace removed
- blurb: the first line that starts with "Description:", with that prefix
  removed and the rest trimmed

The first match wins for each field; heading depth is not considered.
"""

import re
from dataclasses import dataclass
from typing import Optional

HEADING_MARKER = '#'
BLURB_PREFIX = 'Description:'

_LINE_SPLIT = re.compile(r'\r?\n')
_HEADING = re.compile(r'^\s*#+\s*')


@dataclass(frozen=True)
class ReadmeSummary:
    """Title and blurb found in a README, either may be missing."""
    title: Optional[str] = None
    blurb: Optional[str] = None


def parse_heading(line: str) -> Optional[str]:
    """Return the heading text of a '#' line, or None for other lines."""
    if not line.lstrip().startswith(HEADING_MARKER):
        return None
    text = _HEADING.sub('', line, count=1).strip()
    return text or None


def parse_blurb(line: str) -> Optional[str]:
    """Return the text after a leading "Description:" prefix, or None."""
    if not line.startswith(BLURB_PREFIX):
        return None
    text = line[len(BLURB_PREFIX):].strip()
    return text or None


def extract_title_and_blurb(text: Optional[str]) -> ReadmeSummary:
    """
    Scan README text for a title and a blurb.

    Lines are read in order and scanning stops once both fields are
    found. Lines that reduce to empty text (a bare '#', a bare
    "Description:") do not count as a match.

    Examples:
        >>> extract_title_and_blurb("# Intro\\nDescription: Learn X\\n")
        ReadmeSummary(title='Intro', blurb='Learn X')
        >>> extract_title_and_blurb("")
        ReadmeSummary(title=None, blurb=None)
    """
    title = None
    blurb = None
    if not text:
        return ReadmeSummary()

    for line in _LINE_SPLIT.split(text):
        if title is None:
            title = parse_heading(line)
        if blurb is None:
            blurb = parse_blurb(line)
        if title is not None and blurb is not None:
            break

    return ReadmeSummary(title=title, blurb=blurb)


def resolve_title(summary: ReadmeSummary, description: Optional[str], name: str) -> str:
    """
    Pick the display title: README heading, then description, then name.
    """
    if summary.title:
        return summary.title
    if description and description.strip():
        return description.strip()
    return name
