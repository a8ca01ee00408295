"""Documentation assembly: one prompt per class and per method.

Walks the extracted classes in order, asks the completion client to
document a skeleton of each class and each of its methods, and joins
the answers under Markdown headings.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from src.errors import BackendError
from src.generators.llm_client import CompletionClient
from src.generators.prompts import PromptBuilder, SegmentKind
from src.generators.skeletons import class_skeleton, method_skeleton
from src.output.markdown import MarkdownWriter
from src.parsers.structure import ClassRecord, Language

logger = logging.getLogger(__name__)

_FAILURE_PLACEHOLDER = "_Documentation could not be generated: {reason}_"


@dataclass
class SectionFailure:
    """A section whose documentation could not be generated.

    Attributes:
        heading: Heading of the affected section.
        reason: Error message from the backend.
    """

    heading: str
    reason: str


@dataclass
class AssemblyResult:
    """Result of assembling the documentation document.

    Attributes:
        content: The complete Markdown document.
        class_count: Number of class sections written.
        method_count: Number of method sections written.
        failures: Sections that fell back to a placeholder.
    """

    content: str
    class_count: int = 0
    method_count: int = 0
    failures: list[SectionFailure] = field(default_factory=list)


class DocumentAssembler:
    """Builds the documentation document from extracted classes.

    Args:
        prompt_builder: Renders prompts for skeletons.
        client: Completion backend.
        writer: Markdown layout helper.
        default_namespace: PHP namespace for classes declared outside one.
        fail_fast: Re-raise BackendError instead of writing a placeholder.
    """

    def __init__(
        self,
        prompt_builder: PromptBuilder,
        client: CompletionClient,
        writer: MarkdownWriter,
        default_namespace: Optional[str] = None,
        fail_fast: bool = False,
    ) -> None:
        self.prompts = prompt_builder
        self.client = client
        self.writer = writer
        self.default_namespace = default_namespace
        self.fail_fast = fail_fast

    def assemble(self, classes: list[ClassRecord]) -> AssemblyResult:
        """Generate documentation for every class and method.

        Args:
            classes: Extracted classes in discovery order.

        Returns:
            An AssemblyResult holding the Markdown document.

        Raises:
            BackendError: If fail_fast is set and a completion fails.
        """
        sections: list[str] = []
        result = AssemblyResult(content="")

        for record in classes:
            logger.info("Generating documentation for class: %s", record.name)
            heading = self.writer.class_heading(record.name)
            code = class_skeleton(record, self.default_namespace)
            body = self._document(
                code, SegmentKind.CLASS, record.name, record.language, heading, result
            )
            sections.append(self.writer.render_section(heading, body))
            result.class_count += 1

            for method in record.methods:
                logger.info("Generating documentation for method: %s()", method.name)
                heading = self.writer.method_heading(method.name)
                code = method_skeleton(method, record.language)
                body = self._document(
                    code,
                    SegmentKind.METHOD,
                    method.name,
                    record.language,
                    heading,
                    result,
                )
                sections.append(self.writer.render_section(heading, body))
                result.method_count += 1

        result.content = self.writer.render_document(sections)
        return result

    def _document(
        self,
        code: str,
        kind: SegmentKind,
        name: str,
        language: Language,
        heading: str,
        result: AssemblyResult,
    ) -> str:
        """Request documentation for one skeleton.

        Returns:
            Generated text, or a placeholder if the backend failed.
        """
        prompt = self.prompts.build(code, kind, name, language)
        try:
            return self.client.complete(prompt)
        except BackendError as e:
            if self.fail_fast:
                raise
            logger.error("Documentation for %s failed: %s", heading, e)
            result.failures.append(SectionFailure(heading=heading, reason=str(e)))
            return _FAILURE_PLACEHOLDER.format(reason=e)
