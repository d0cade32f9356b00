"""Tests for MarkdownDocument."""

import pytest

from mdquery_mcp.document import MarkdownDocument, parse_markdown
from mdquery_mcp.errors import NotFoundError, SourceError, StructuralError, ValidationError
from mdquery_mcp.parser.markdown import Section


class TestTitle:
    def test_title(self, sample_readme):
        assert MarkdownDocument(sample_readme).title == "My Project"

    def test_setext_title(self, underline_markdown):
        assert MarkdownDocument(underline_markdown).title == "Heading 1"

    def test_missing_title(self):
        document = MarkdownDocument("## Only a subsection\n\ntext\n")
        with pytest.raises(StructuralError, match="Title \\(h1\\) not found"):
            document.title

    def test_title_and_description(self, sample_readme):
        info = MarkdownDocument(sample_readme).title_and_description()
        assert info["title"] == "My Project"
        assert info["description"].startswith("A small library that does useful things.")
        assert "## Installation" in info["description"]


class TestSections:
    def test_first_section(self, sample_readme):
        assert MarkdownDocument(sample_readme).first_section() == Section(
            level=1, heading="My Project", body="A small library that does useful things.",
        )

    def test_first_section_empty(self):
        with pytest.raises(NotFoundError, match="Document has no headings."):
            MarkdownDocument("no headings at all").first_section()

    def test_flat_and_absorbed(self, hash_markdown):
        document = MarkdownDocument(hash_markdown)
        assert len(document.sections) == len(document.flat_sections) == 3
        assert document.flat_sections[0].body == "Some body text."
        assert "## Heading 2" in document.sections[0].body

    def test_parse_markdown(self, hash_markdown):
        assert parse_markdown(hash_markdown) == list(MarkdownDocument(hash_markdown).sections)

    def test_sections_are_immutable(self, hash_markdown):
        document = MarkdownDocument(hash_markdown)
        with pytest.raises(AttributeError):
            document.sections[0].body = "changed"

    def test_crlf(self):
        document = MarkdownDocument("# Title\r\n\r\nBody.\r\n")
        assert document.sections == (Section(1, "Title", "Body."),)


class TestHeadingCounts:
    def test_counts(self, sample_readme):
        assert MarkdownDocument(sample_readme).count_headings_by_level() == {1: 1, 2: 4, 3: 2}

    def test_combined(self, combo_markdown):
        assert MarkdownDocument(combo_markdown).count_headings_by_level() == {1: 2, 2: 2, 3: 1}

    def test_heading_levels(self, sample_readme):
        document = MarkdownDocument(sample_readme)
        assert document.heading_levels(2) == 4
        assert document.heading_levels(5) == 0
        assert document.heading_levels() == {1: 1, 2: 4, 3: 2}

    def test_empty(self):
        assert MarkdownDocument("").count_headings_by_level() == {}


class TestSectionsByHeading:
    def test_keyword(self, sample_readme):
        sections = MarkdownDocument(sample_readme).sections_by_heading("install")
        assert [s.heading for s in sections] == ["Installation"]
        assert "## Windows" in sections[0].body

    def test_case_insensitive(self, sample_readme):
        sections = MarkdownDocument(sample_readme).sections_by_heading("LICENSE")
        assert sections[0].body == "MIT License. See LICENSE."

    def test_multiple(self, combo_markdown):
        sections = MarkdownDocument(combo_markdown).sections_by_heading("heading")
        assert len(sections) == 5

    def test_not_found(self, sample_readme):
        with pytest.raises(NotFoundError) as exc_info:
            MarkdownDocument(sample_readme).sections_by_heading("nope")
        assert str(exc_info.value) == "No heading found with provided keyword: 'nope'"

    def test_empty_keyword(self, sample_readme):
        with pytest.raises(ValidationError):
            MarkdownDocument(sample_readme).sections_by_heading("")


class TestFrontMatter:
    CONTENT = "---\ntitle: Doc\n---\n\n# Real\n\nBody\n"

    def test_stripped_by_default(self):
        document = MarkdownDocument(self.CONTENT)
        assert [s.heading for s in document.sections] == ["Real"]
        assert document.metadata == {"title": "Doc"}

    def test_kept_when_disabled(self):
        document = MarkdownDocument(self.CONTENT, front_matter=False)
        assert [s.heading for s in document.sections] == ["title: Doc", "Real"]
        assert document.metadata == {}

    def test_leading_rule_kept_as_content(self):
        text = "---\n\n# Project\n\nIntro.\n\n---\n\n## Usage\n\nRun it.\n"
        assert [s.heading for s in parse_markdown(text)] == ["Project", "Usage"]
        assert MarkdownDocument(text).metadata == {}


class TestFromFile:
    def test_from_file(self, readme_file):
        document = MarkdownDocument.from_file(readme_file)
        assert document.title == "My Project"
        assert document.source == str(readme_file)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceError, match="File does not exist"):
            MarkdownDocument.from_file(tmp_path / "missing.md")
