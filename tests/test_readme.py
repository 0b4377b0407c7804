"""Tests for README title/blurb extraction."""

import pytest

from orgpages.readme import (
    ReadmeSummary,
    extract_title_and_blurb,
    parse_blurb,
    parse_heading,
    resolve_title,
)


class TestExtractTitleAndBlurb:
    """Tests for extract_title_and_blurb."""

    def test_heading_and_description(self):
        summary = extract_title_and_blurb("# Intro\nDescription: Learn X\n")
        assert summary.title == "Intro"
        assert summary.blurb == "Learn X"

    @pytest.mark.parametrize("text", ["", None])
    def test_empty_text(self, text):
        assert extract_title_and_blurb(text) == ReadmeSummary(None, None)

    def test_crlf_line_endings(self):
        summary = extract_title_and_blurb("# Title\r\nDescription: Blurb\r\n")
        assert summary.title == "Title"
        assert summary.blurb == "Blurb"

    def test_first_heading_wins(self):
        """Deeper or later headings are not preferred over the first one."""
        text = "## Setup\n# Real Title\n"
        assert extract_title_and_blurb(text).title == "Setup"

    def test_multiple_hashes_and_spaces_stripped(self):
        assert extract_title_and_blurb("###    Spaced out   ").title == "Spaced out"

    def test_indented_heading(self):
        assert extract_title_and_blurb("text\n   # Indented\n").title == "Indented"

    def test_bare_heading_is_skipped(self):
        assert extract_title_and_blurb("#\n# Second\n").title == "Second"

    def test_blurb_without_heading(self):
        summary = extract_title_and_blurb("Some text\nDescription:   Short blurb  \n")
        assert summary.title is None
        assert summary.blurb == "Short blurb"

    def test_blurb_requires_prefix_at_line_start(self):
        summary = extract_title_and_blurb("# T\n  Description: indented\nsee Description: inline\n")
        assert summary.blurb is None

    def test_first_blurb_wins(self):
        summary = extract_title_and_blurb("Description: one\nDescription: two\n")
        assert summary.blurb == "one"

    def test_blurb_before_title(self):
        summary = extract_title_and_blurb("Description: first\n\n# Later title\n")
        assert summary.title == "Later title"
        assert summary.blurb == "first"


class TestLineParsers:

    def test_parse_heading_non_heading(self):
        assert parse_heading("plain text") is None

    def test_parse_blurb_empty(self):
        assert parse_blurb("Description:") is None

    def test_parse_blurb_case_sensitive(self):
        assert parse_blurb("description: lower") is None


class TestResolveTitle:
    """Title priority: README heading, description, name."""

    def test_readme_heading_preferred(self):
        assert resolve_title(ReadmeSummary("Heading"), "Desc", "name") == "Heading"

    def test_description_fallback(self):
        assert resolve_title(extract_title_and_blurb(""), "My Repo", "my-repo") == "My Repo"

    def test_name_fallback(self):
        assert resolve_title(extract_title_and_blurb(None), None, "my-repo") == "my-repo"

    def test_blank_description_falls_through(self):
        assert resolve_title(ReadmeSummary(), "  ", "my-repo") == "my-repo"
