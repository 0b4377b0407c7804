"""
Tests for HTML page rendering.

These tests verify that page rendering:
1. Omits categories without members
2. Marks archived repositories in both documents
3. Includes blurbs on featured cards only when present
4. Appends curated fragments verbatim
"""

from dataclasses import replace

from orgpages import pages
from orgpages.config import SiteText
from orgpages.services import group_by_category


class TestLinks:

    def test_active_link(self, make_repo):
        html = pages.render_link(make_repo("r", title="Intro"))
        assert html == (
            '<a href="https://test-org.github.io/r/" target="_blank" '
            'rel="noopener noreferrer">Intro</a>'
        )

    def test_archived_link(self, make_repo):
        html = pages.render_link(make_repo("r", title="Old", archived=True))
        assert 'class="archived"' in html
        assert ">Old (archived)</a>" in html

    def test_title_is_escaped(self, make_repo):
        html = pages.render_link(make_repo("r", title="R & <Python>"))
        assert "R &amp; &lt;Python&gt;" in html

    def test_card_with_blurb(self, make_repo):
        html = pages.render_card(make_repo("r", title="T", blurb="Learn X"))
        assert '<div class="workshop-card">' in html
        assert '<p class="blurb">Learn X</p>' in html

    def test_card_without_blurb(self, make_repo):
        assert 'class="blurb"' not in pages.render_card(make_repo("r", title="T"))


class TestAllPage:

    def test_sections_for_non_empty_categories_only(self, site_config, make_repo):
        grouping = group_by_category([make_repo("g", title="GIS 101", topics=["geospatial"])], site_config.taxonomy)
        html = pages.render_all_page(grouping, "", site_config)

        assert "<h2>Geographic information systems (GIS) and mapping</h2>" in html
        assert "Data analysis and visualization" not in html
        assert "Digital scholarship" not in html
        assert html.count("<li>") == 1

    def test_archived_marker(self, site_config, make_repo):
        repos = [
            make_repo("old", title="Old", topics=["data"], archived=True),
            make_repo("new", title="New", topics=["data"]),
        ]
        html = pages.render_all_page(group_by_category(repos, site_config.taxonomy), "", site_config)

        assert html.count('class="archived"') == 1
        assert html.count("(archived)") == 1
        assert ">New</a>" in html

    def test_repository_in_two_categories_listed_twice(self, site_config, make_repo):
        repo = make_repo("both", title="Both", topics=["data", "geospatial"])
        html = pages.render_all_page(group_by_category([repo], site_config.taxonomy), "", site_config)
        assert html.count(">Both</a>") == 2

    def test_fragment_and_header(self, site_config, make_repo):
        fragment = "<section><h2>Research data management</h2></section>"
        grouping = group_by_category([], site_config.taxonomy)
        html = pages.render_all_page(grouping, fragment, site_config)

        assert html.startswith("<!DOCTYPE html>")
        assert fragment in html
        assert '<a href="https://github.com/test-org/">github.com/test-org</a>' in html
        assert "https://test-org.github.io/" in html
        assert "<section>\n  <h2>" not in html

    def test_site_text_from_config(self, site_config):
        config = replace(site_config, site=SiteText(name="My Lab", all_title="All of it", all_heading="Everything"))
        html = pages.render_all_page(group_by_category([], config.taxonomy), "", config)
        assert "<title>All of it</title>" in html
        assert "<h1>Everything</h1>" in html
        assert "My Lab" in html


class TestFeaturedPage:

    def test_cards_and_blurbs(self, site_config, make_repo):
        repos = [
            make_repo("a", title="Alpha", topics=["data"], blurb="First blurb"),
            make_repo("b", title="Beta", topics=["data"], archived=True),
        ]
        html = pages.render_featured_page(group_by_category(repos, site_config.taxonomy), "", site_config)

        assert '<div class="workshop-grid">' in html
        assert html.count('<div class="workshop-card">') == 2
        assert '<p class="blurb">First blurb</p>' in html
        assert html.count('class="blurb"') == 1
        assert "Beta (archived)" in html
        assert 'class="archived"' in html

    def test_links_to_all_page(self, site_config):
        html = pages.render_featured_page(group_by_category([], site_config.taxonomy), "<p>curated</p>", site_config)
        assert "https://test-org.github.io/all.html" in html
        assert "<p>curated</p>" in html
        assert "workshop-card" not in html
