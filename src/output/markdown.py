"""Markdown layout and output for the generated documentation.

Renders the introduction boilerplate, the table of contents stub and
the per-class and per-method sections, and writes the finished
document to disk in a single write.
"""

import logging
from pathlib import Path
from typing import Optional

from src.generators.prompts import create_environment
from src.utils.config import ProjectConfig

logger = logging.getLogger(__name__)


class MarkdownWriter:
    """Lays out and writes the documentation file.

    Nothing touches the output path until write_document() is called.
    """

    def __init__(
        self,
        output_path: str = "DOCUMENTATION.md",
        project: Optional[ProjectConfig] = None,
        templates_dir: Optional[str] = None,
    ) -> None:
        """Initialize the Markdown writer.

        Args:
            output_path: File the document is written to.
            project: Project metadata for the introduction block.
            templates_dir: Optional templates directory override.
        """
        self.output_path = Path(output_path)
        self.project = project or ProjectConfig()
        self._env = create_environment(templates_dir)

    def render_introduction(self) -> str:
        """Render the introduction and installation boilerplate."""
        return self._env.get_template("introduction.md.j2").render(project=self.project)

    def render_table_of_contents(self) -> str:
        """Render the document title and table of contents stub."""
        return self._env.get_template("table_of_contents.md.j2").render(
            project=self.project
        )

    @staticmethod
    def class_heading(name: str) -> str:
        return f"## Class `{name}`"

    @staticmethod
    def method_heading(name: str) -> str:
        return f"### Method `{name}()`"

    @staticmethod
    def render_section(heading: str, body: str) -> str:
        """Render one heading followed by its generated text.

        Args:
            heading: Markdown heading line.
            body: Generated documentation text.

        Returns:
            The section, terminated by a blank line.
        """
        return f"{heading}\n\n{body}\n\n"

    def render_document(self, sections: list[str]) -> str:
        """Join the boilerplate and all sections into one document.

        Args:
            sections: Rendered sections in output order.

        Returns:
            The complete Markdown document.
        """
        head = f"{self.render_introduction()}\n\n{self.render_table_of_contents()}\n\n"
        return head + "".join(sections)

    def write_document(self, content: str) -> Path:
        """Write the document, replacing any previous content.

        Args:
            content: The complete Markdown document.

        Returns:
            Path to the written file.
        """
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_path.write_text(content, encoding="utf-8")
        logger.info(
            "Wrote documentation: %s (%d chars)", self.output_path, len(content)
        )
        return self.output_path
