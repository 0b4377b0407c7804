"""
HTML page rendering for orgpages.

Builds the two static documents from classified repositories:
- all.html: every workshop, one list item per repository per category
- index.html: featured workshops, one card per repository per category

Curated fragments are appended verbatim. Categories without members are
left out entirely.
"""

from typing import List

from .config import SiteConfig
from .domain import EnrichedRepository, Grouping

ARCHIVED_SUFFIX = " (archived)"
ARCHIVED_CLASS = "archived"


def _html_escape(text: str) -> str:
    """Minimal HTML escaping for safe output."""
    return (
        text.replace('&', '&amp;')
        .replace('<', '&lt;')
        .replace('>', '&gt;')
        .replace('"', '&quot;')
    )


def link_text(repo: EnrichedRepository) -> str:
    """Display text for a repository link, marking archived ones."""
    return repo.title + (ARCHIVED_SUFFIX if repo.archived else "")


def render_link(repo: EnrichedRepository) -> str:
    """Anchor tag opening the repository's page in a new tab."""
    cls = f' class="{ARCHIVED_CLASS}"' if repo.archived else ""
    return (
        f'<a{cls} href="{_html_escape(repo.url)}" target="_blank" rel="noopener noreferrer">'
        f'{_html_escape(link_text(repo))}</a>'
    )


def render_list_item(repo: EnrichedRepository) -> str:
    return f"<li>{render_link(repo)}</li>"


def render_card(repo: EnrichedRepository) -> str:
    blurb = f'<p class="blurb">{_html_escape(repo.blurb)}</p>' if repo.blurb else ""
    return f"""<div class="workshop-card">
        {render_link(repo)}
        {blurb}
        </div>"""


def render_all_sections(grouping: Grouping) -> str:
    """List sections for the complete listing."""
    sections: List[str] = []
    for category, repos in grouping.non_empty():
        items = "\n".join(render_list_item(repo) for repo in repos)
        sections.append(f"""<section>
  <h2>{_html_escape(category.label)}</h2>
  <ul>{items}</ul>
</section>""")
    return "\n\n".join(sections)


def render_featured_sections(grouping: Grouping) -> str:
    """Card grid sections for the featured listing."""
    sections: List[str] = []
    for category, repos in grouping.non_empty():
        items = "\n".join(render_card(repo) for repo in repos)
        sections.append(f"""<section>
        <h2>{_html_escape(category.label)}</h2>
        <div class="workshop-grid">
          {items}
        </div>
      </section>""")
    return "\n\n".join(sections)


def _page_header(config: SiteConfig) -> str:
    site = config.site
    org_url = _html_escape(config.org_url)
    return f"""<section>
    <div class="header-flex">
      <div id="header-img">
        <img src="{_html_escape(site.logo)}" alt="{_html_escape(site.logo_alt)}"/>
      </div>
      <div id="header-text">
        {_html_escape(site.name)}
      </div>
      <div id="header-link">
        <a href="{org_url}">github.com/{_html_escape(config.org)}</a>
      </div>
    </div>
  </section>"""


def _document(config: SiteConfig, title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>{_html_escape(title)}</title>
  <link rel="stylesheet" href="{_html_escape(config.site.stylesheet)}">
</head>
<body>
  {_page_header(config)}
{body}
</body>
</html>"""


def render_all_page(grouping: Grouping, fragment: str, config: SiteConfig) -> str:
    """
    Render the complete listing.

    Args:
        grouping: Repositories tagged for the complete listing
        fragment: Curated HTML appended after the generated sections
        config: Run configuration (site texts, organization)
    """
    site = config.site
    events = _html_escape(site.events_url)
    featured = _html_escape(config.featured_url)
    body = f"""  <h1>{_html_escape(site.all_heading)}</h1>
  <p>For currently scheduled workshops visit <a href="{events}">{events}</a><br />
  For a shorter list of featured workshops visit <a href="{featured}">{featured}</a></p>
  {render_all_sections(grouping)}
  {fragment}"""
    return _document(config, site.all_title, body)


def render_featured_page(grouping: Grouping, fragment: str, config: SiteConfig) -> str:
    """
    Render the featured listing.

    Args:
        grouping: Repositories tagged as featured
        fragment: Curated HTML appended after the generated sections
        config: Run configuration (site texts, organization)
    """
    site = config.site
    all_url = _html_escape(config.all_url)
    body = f"""  <h1>{_html_escape(site.featured_heading)}</h1>
  <p>For a list of all workshops visit <a href="{all_url}">{all_url}</a></p>
  {render_featured_sections(grouping)}
  {fragment}"""
    return _document(config, site.featured_title, body)
