"""Prompt builder backed by Jinja2 templates.

Renders the three fixed instruction templates (class, method, other
code) from the templates/ directory. Fragments are embedded verbatim
inside a fenced code block; nothing is escaped.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader

from src.parsers.structure import Language

logger = logging.getLogger(__name__)

_DEFAULT_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


class SegmentKind(str, Enum):
    """Kind of code segment a prompt is built for."""

    CLASS = "class"
    METHOD = "method"
    OTHER = "other"


_PROMPT_TEMPLATES = {
    SegmentKind.CLASS: "class_prompt.j2",
    SegmentKind.METHOD: "method_prompt.j2",
    SegmentKind.OTHER: "code_prompt.j2",
}


def create_environment(templates_dir: Optional[str] = None) -> Environment:
    """Create the Jinja2 environment for prompt and Markdown templates.

    Args:
        templates_dir: Path to the templates directory. Uses the
            package templates/ directory if not specified.

    Returns:
        A configured Jinja2 Environment.
    """
    path = Path(templates_dir) if templates_dir else _DEFAULT_TEMPLATES_DIR
    if not path.exists():
        logger.warning("Templates directory not found: %s", path)

    return Environment(
        loader=FileSystemLoader(str(path)),
        trim_blocks=True,
        lstrip_blocks=True,
    )


class PromptBuilder:
    """Builds documentation prompts for classes, methods and other code.

    Rendering is deterministic: the same fragment, kind and name always
    produce the same prompt.
    """

    def __init__(
        self,
        templates_dir: Optional[str] = None,
        language: Language = Language.PHP,
    ) -> None:
        """Initialize the prompt builder.

        Args:
            templates_dir: Path to the templates directory. Uses the
                default templates/ directory if not specified.
            language: Language used for the code fence and wording when
                build() is not given one.
        """
        self._templates_path = (
            Path(templates_dir) if templates_dir else _DEFAULT_TEMPLATES_DIR
        )
        self._env = create_environment(str(self._templates_path))
        self.language = language
        logger.debug("Prompt builder initialized with: %s", self._templates_path)

    def build(
        self,
        code: str,
        kind: SegmentKind,
        name: str,
        language: Optional[Language] = None,
    ) -> str:
        """Render the prompt for a code fragment.

        Args:
            code: Code fragment to embed in the fenced block.
            kind: Which of the three templates to use.
            name: Entity name mentioned in the instruction.
            language: Source language; defaults to the builder's language.

        Returns:
            Rendered prompt string ready for the completion backend.
        """
        return self._render(
            _PROMPT_TEMPLATES[SegmentKind(kind)],
            code=code,
            name=name,
            language=language or self.language,
        )

    def _render(self, template_name: str, **kwargs: Any) -> str:
        """Render a template with the given context variables.

        Raises:
            TemplateNotFound: If the template file does not exist.
        """
        template = self._env.get_template(template_name)
        rendered = template.render(**kwargs)
        logger.debug("Rendered template %s (%d chars)", template_name, len(rendered))
        return rendered

    def list_templates(self) -> list[str]:
        """List all available template files.

        Returns:
            List of template file names.
        """
        return self._env.list_templates()
