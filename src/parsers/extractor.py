"""Structure extraction: source files to ClassRecord lists.

Each language parser exposes the same two-step capability, parse() and
for_each_class_node(), so the extractor never touches a parser's own
node types. Method bodies are cut from the already-read source text by
line span.
"""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, Optional, Protocol

from src.errors import ParseError
from src.parsers.js_parser import JSParser, TSParser
from src.parsers.php_parser import PHPParser
from src.parsers.python_parser import PythonParser
from src.parsers.structure import (
    ClassNode,
    ClassRecord,
    Language,
    MethodRecord,
    SourceFile,
)

logger = logging.getLogger(__name__)


class ClassNodeParser(Protocol):
    """Capability every language parser provides."""

    language: Language

    def parse(self, source: str, file_path: str = "<string>") -> Any: ...

    def for_each_class_node(
        self, tree: Any, callback: Callable[[ClassNode], None]
    ) -> None: ...


def _default_parsers() -> dict[str, ClassNodeParser]:
    js = JSParser()
    return {
        ".php": PHPParser(),
        ".py": PythonParser(),
        ".js": js,
        ".jsx": js,
        ".mjs": js,
        ".ts": TSParser(),
        ".tsx": TSParser(tsx=True),
    }


class StructureExtractor:
    """Extracts classes and methods from source files.

    Args:
        parsers: Mapping of file suffix to parser. Defaults to the
            built-in PHP, Python, JavaScript and TypeScript parsers.
    """

    def __init__(self, parsers: Optional[dict[str, ClassNodeParser]] = None) -> None:
        self._parsers = parsers if parsers is not None else _default_parsers()

    def parser_for(self, file_path: str) -> Optional[ClassNodeParser]:
        """Return the parser registered for a file's suffix, if any."""
        return self._parsers.get(Path(file_path).suffix)

    def extract_file(self, file_path: str) -> list[ClassRecord]:
        """Extract all classes from one source file.

        Parse failures are logged and yield an empty list so the caller
        can continue with the next file.

        Args:
            file_path: Path to the source file.

        Returns:
            ClassRecords in pre-order of the syntax tree.
        """
        parser = self.parser_for(file_path)
        if parser is None:
            logger.warning("No parser registered for %s, skipping", file_path)
            return []

        try:
            with open(
                file_path, encoding="utf-8-sig", errors="replace", newline=""
            ) as f:
                text = f.read()
        except OSError as e:
            logger.warning("Cannot read %s: %s", file_path, e)
            return []

        source = SourceFile(path=file_path, text=text)
        try:
            return self.extract_source(source, parser)
        except ParseError as e:
            logger.warning("Parse error in file %s: %s", file_path, e)
            return []

    def extract_source(
        self, source: SourceFile, parser: ClassNodeParser
    ) -> list[ClassRecord]:
        """Extract all classes from in-memory source text.

        Args:
            source: The source file and its text.
            parser: Parser for the source's language.

        Returns:
            ClassRecords in pre-order of the syntax tree.

        Raises:
            ParseError: If the source cannot be parsed.
        """
        tree = parser.parse(source.text, source.path)
        classes: list[ClassRecord] = []

        def record(node: ClassNode) -> None:
            classes.append(self._to_record(node, source, parser.language))

        parser.for_each_class_node(tree, record)

        logger.debug("Extracted %d classes from %s", len(classes), source.path)
        return classes

    def extract_all(self, file_paths: Iterable[str]) -> list[ClassRecord]:
        """Extract classes from several files, in the given order.

        Args:
            file_paths: Source files to process.

        Returns:
            All ClassRecords, file by file.
        """
        classes: list[ClassRecord] = []
        for file_path in file_paths:
            logger.info("Processing file: %s", file_path)
            classes.extend(self.extract_file(file_path))
        return classes

    @staticmethod
    def _to_record(
        node: ClassNode, source: SourceFile, language: Language
    ) -> ClassRecord:
        methods = tuple(
            MethodRecord(
                name=method.name,
                doc_comment=method.doc_comment,
                body=source.line_span(method.start_line, method.end_line),
                start_line=method.start_line,
                end_line=method.end_line,
            )
            for method in node.methods
        )
        return ClassRecord(
            name=node.name,
            doc_comment=node.doc_comment,
            methods=methods,
            file_path=source.path,
            language=language,
            namespace=node.namespace,
            start_line=node.start_line,
            end_line=node.end_line,
        )
