"""Tests for the Markdown layout and writer."""

from pathlib import Path

import pytest

from src.output.markdown import MarkdownWriter
from src.utils.config import ProjectConfig


@pytest.fixture
def writer(tmp_path: Path) -> MarkdownWriter:
    return MarkdownWriter(output_path=str(tmp_path / "DOCUMENTATION.md"))


class TestBoilerplate:
    """Tests for the introduction and table of contents."""

    def test_introduction_sections(self, writer: MarkdownWriter) -> None:
        intro = writer.render_introduction()
        assert intro.startswith("## Introduction\n\n")
        assert "Welcome to the `YourPackage` documentation." in intro
        assert "## Installation" in intro
        assert "composer require yourvendor/yourpackage" in intro

    def test_install_fence_is_closed(self, writer: MarkdownWriter) -> None:
        intro = writer.render_introduction()
        assert intro.count("```") == 2
        assert intro.rstrip().endswith("```")

    def test_table_of_contents(self, writer: MarkdownWriter) -> None:
        toc = writer.render_table_of_contents()
        assert toc.startswith("# YourPackage Documentation")
        for anchor in ("#introduction", "#installation", "#usage", "#api-reference"):
            assert anchor in toc

    def test_project_metadata(self, tmp_path: Path) -> None:
        project = ProjectConfig(
            name="Acme",
            description="Tools for roadrunners.",
            install_command="composer require acme/acme",
        )
        writer = MarkdownWriter(str(tmp_path / "out.md"), project=project)
        assert "`Acme`" in writer.render_introduction()
        assert "Tools for roadrunners." in writer.render_introduction()
        assert "composer require acme/acme" in writer.render_introduction()
        assert writer.render_table_of_contents().startswith("# Acme Documentation")


class TestSections:
    """Tests for headings and section layout."""

    def test_headings(self) -> None:
        assert MarkdownWriter.class_heading("Foo") == "## Class `Foo`"
        assert MarkdownWriter.method_heading("bar") == "### Method `bar()`"

    def test_section_is_verbatim(self) -> None:
        body = "Some *generated* text.\n\n```php\n$x = 1;\n```"
        section = MarkdownWriter.render_section("## Class `Foo`", body)
        assert section == f"## Class `Foo`\n\n{body}\n\n"

    def test_empty_document_is_boilerplate_only(self, writer: MarkdownWriter) -> None:
        content = writer.render_document([])
        assert content == (
            writer.render_introduction()
            + "\n\n"
            + writer.render_table_of_contents()
            + "\n\n"
        )
        assert "## Class" not in content

    def test_sections_in_order(self, writer: MarkdownWriter) -> None:
        content = writer.render_document(
            ["## Class `A`\n\na\n\n", "## Class `B`\n\nb\n\n"]
        )
        assert content.index("`A`") < content.index("`B`")
        assert content.index("# YourPackage Documentation") < content.index("`A`")


class TestWriteDocument:
    """Tests for writing the document to disk."""

    def test_nothing_written_before_call(self, tmp_path: Path) -> None:
        path = tmp_path / "DOCUMENTATION.md"
        writer = MarkdownWriter(str(path))
        writer.render_document(["## Class `Foo`\n\nx\n\n"])
        assert not path.exists()

    def test_writes_content(self, writer: MarkdownWriter) -> None:
        path = writer.write_document("# Hello\n")
        assert path == writer.output_path
        assert path.read_text(encoding="utf-8") == "# Hello\n"

    def test_overwrites_previous_file(self, writer: MarkdownWriter) -> None:
        writer.output_path.write_text("stale content from an earlier run")
        writer.write_document("fresh")
        assert writer.output_path.read_text(encoding="utf-8") == "fresh"

    def test_creates_parent_dirs(self, tmp_path: Path) -> None:
        writer = MarkdownWriter(str(tmp_path / "docs" / "api" / "DOCUMENTATION.md"))
        path = writer.write_document("content")
        assert path.exists()
