"""Tests for markdown renderer."""

import logging

import mistune
import pytest
from factorsite.core.renderer import MarkdownRenderer, TocEntry, slugify


class TestMarkdownRendererRender:
    """Tests for MarkdownRenderer.render()."""

    def test__simple_markdown__renders_to_html(self) -> None:
        """Render a simple markdown document to HTML."""
        result = MarkdownRenderer().render("# Guide\n\nThis is a guide.")

        assert "<p>This is a guide.</p>" in result.html
        assert result.title == "Guide"
        assert result.fallback is False

    def test__headings__get_anchor_ids(self) -> None:
        """Give headings slug ids."""
        result = MarkdownRenderer().render("# Guide\n\n## Getting Started\n\nText.")

        assert '<h2 id="getting-started">Getting Started</h2>' in result.html

    def test__headings__extracts_toc(self) -> None:
        """Extract level 2 and 3 headings, excluding the title."""
        result = MarkdownRenderer().render("""# Guide

## Introduction

Content here.

## Getting Started

More content.

### Installation

Steps.

#### Deep

Not listed.
""")

        assert result.toc == [
            TocEntry(level=2, title="Introduction", id="introduction"),
            TocEntry(level=2, title="Getting Started", id="getting-started"),
            TocEntry(level=3, title="Installation", id="installation"),
        ]

    def test__duplicate_headings__get_unique_ids(self) -> None:
        """Suffix repeated heading slugs."""
        result = MarkdownRenderer().render("## Usage\n\nA.\n\n## Usage\n\nB.")

        assert [entry.id for entry in result.toc] == ["usage", "usage-1"]

    def test__no_h1__has_no_title(self) -> None:
        """Report no title when the document lacks an H1."""
        result = MarkdownRenderer().render("Just a paragraph.")

        assert result.title is None
        assert result.toc == []

    def test__empty_text__renders_empty(self) -> None:
        """Render an empty document without failing."""
        result = MarkdownRenderer().render("")

        assert result.html.strip() == ""
        assert result.fallback is False

    def test__tables__are_rendered(self) -> None:
        """Render GFM tables."""
        result = MarkdownRenderer().render("| a | b |\n|---|---|\n| 1 | 2 |\n")

        assert "<table>" in result.html
        assert "<td>1</td>" in result.html

    def test__code_blocks__are_escaped(self) -> None:
        """Escape HTML inside fenced code."""
        result = MarkdownRenderer().render("```\n<b>bold</b>\n```\n")

        assert "&lt;b&gt;bold&lt;/b&gt;" in result.html

    def test__raw_html__passes_through(self) -> None:
        """Keep raw HTML blocks from trusted documents unescaped."""
        result = MarkdownRenderer().render('<div class="note">Read first.</div>\n')

        assert '<div class="note">Read first.</div>' in result.html

    def test__unbalanced_markup__degrades_gracefully(self) -> None:
        """Render malformed markdown as best effort."""
        result = MarkdownRenderer().render("# Title\n\n**unclosed *emphasis [link](\n\n```\nno end")

        assert result.fallback is False
        assert "unclosed" in result.html

    def test__parser_failure__falls_back_to_escaped_source(
        self,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Fall back to escaped text when the parser raises."""

        def broken_markdown(*args, **kwargs):
            raise RuntimeError("parser exploded")

        monkeypatch.setattr(mistune, "create_markdown", broken_markdown)

        with caplog.at_level(logging.WARNING, logger="factorsite.core.renderer"):
            result = MarkdownRenderer().render("# Title\n\n<script>x</script>")

        assert result.fallback is True
        assert result.html == "<pre># Title\n\n&lt;script&gt;x&lt;/script&gt;</pre>"
        assert result.title is None
        assert "parser exploded" in caplog.text

    def test__renderer__is_reusable(self) -> None:
        """Keep no state between renders."""
        renderer = MarkdownRenderer()

        first = renderer.render("## Usage\n\nA.")
        second = renderer.render("## Usage\n\nB.")

        assert first.toc == second.toc == [TocEntry(level=2, title="Usage", id="usage")]


class TestSlugify:
    """Tests for slugify()."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Getting Started", "getting-started"),
            ("What's new?", "whats-new"),
            ("  Spaces   and--dashes ", "spaces-and-dashes"),
            ("Config_file", "config-file"),
            ("!!!", ""),
        ],
    )
    def test__slugify__produces_anchor(self, text: str, expected: str) -> None:
        """Convert heading text to an anchor id."""
        assert slugify(text) == expected
