"""End-to-end documentation run.

Discovery, extraction, assembly and the final write, in that order and
one step at a time. The output file is written once, after every
section has been generated.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from src.generators.assembler import AssemblyResult, DocumentAssembler
from src.generators.llm_client import CompletionClient, create_client
from src.generators.prompts import PromptBuilder
from src.output.markdown import MarkdownWriter
from src.parsers.discovery import discover_source_files
from src.parsers.extractor import StructureExtractor
from src.parsers.structure import ClassRecord
from src.utils.config import AppConfig

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Outcome of a documentation run.

    Attributes:
        files: Source files that were processed.
        classes: Extracted classes in output order.
        assembly: The assembled document, None for dry runs.
        output_path: Written file, None for dry runs.
    """

    files: list[str] = field(default_factory=list)
    classes: list[ClassRecord] = field(default_factory=list)
    assembly: Optional[AssemblyResult] = None
    output_path: Optional[Path] = None


class DocumentationPipeline:
    """Runs the whole scan-and-document pipeline.

    Args:
        config: Application configuration.
        client: Completion client; created from config.backend if omitted.
        extractor: Structure extractor; the default parsers if omitted.
    """

    def __init__(
        self,
        config: AppConfig,
        client: Optional[CompletionClient] = None,
        extractor: Optional[StructureExtractor] = None,
    ) -> None:
        self.config = config
        self._client = client
        self.extractor = extractor or StructureExtractor()

    @property
    def client(self) -> CompletionClient:
        if self._client is None:
            self._client = create_client(self.config.backend)
        return self._client

    def discover(self) -> list[str]:
        """List the source files to document."""
        source = self.config.source
        return discover_source_files(
            source.root_dir, source.extensions, source.exclude_dirs
        )

    def extract(self, files: Optional[list[str]] = None) -> list[ClassRecord]:
        """Extract classes from the given files, or from discovery."""
        if files is None:
            files = self.discover()
        return self.extractor.extract_all(files)

    def run(self, dry_run: bool = False) -> PipelineResult:
        """Run discovery, extraction, assembly and the final write.

        Args:
            dry_run: Stop after extraction; no backend calls, no write.

        Returns:
            A PipelineResult describing the run.

        Raises:
            BackendError: If backend.fail_fast is set and a completion fails.
            OSError: If the output file cannot be written.
        """
        files = self.discover()
        logger.info(
            "Found %d source files under %s", len(files), self.config.source.root_dir
        )

        classes = self.extract(files)
        result = PipelineResult(files=files, classes=classes)
        if dry_run:
            return result

        writer = MarkdownWriter(
            output_path=self.config.output.path, project=self.config.project
        )
        assembler = DocumentAssembler(
            prompt_builder=PromptBuilder(),
            client=self.client,
            writer=writer,
            default_namespace=self.config.project.namespace,
            fail_fast=self.config.backend.fail_fast,
        )
        result.assembly = assembler.assemble(classes)
        result.output_path = writer.write_document(result.assembly.content)

        if result.assembly.failures:
            logger.warning(
                "%d sections could not be generated", len(result.assembly.failures)
            )
        return result
