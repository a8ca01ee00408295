"""Data models for representing extracted class structures.

Defines the records produced by extraction (ClassRecord, MethodRecord)
and the parser-neutral node views (ClassNode, MethodNode) that language
parsers hand to the extractor. These models form the shared vocabulary
between parsers and documentation generators.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class Language(str, Enum):
    """Supported source languages."""

    PHP = "php"
    PYTHON = "python"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"

    @property
    def label(self) -> str:
        """Display name used in prompts."""
        return _LANGUAGE_LABELS[self]

    @classmethod
    def from_path(cls, path: str) -> Optional[Language]:
        """Detect the language of a source file from its suffix.

        Args:
            path: Path to the source file.

        Returns:
            The matching Language, or None for unsupported suffixes.
        """
        return _SUFFIX_LANGUAGES.get(Path(path).suffix)


_LANGUAGE_LABELS = {
    Language.PHP: "PHP",
    Language.PYTHON: "Python",
    Language.JAVASCRIPT: "JavaScript",
    Language.TYPESCRIPT: "TypeScript",
}

_SUFFIX_LANGUAGES = {
    ".php": Language.PHP,
    ".py": Language.PYTHON,
    ".js": Language.JAVASCRIPT,
    ".jsx": Language.JAVASCRIPT,
    ".mjs": Language.JAVASCRIPT,
    ".ts": Language.TYPESCRIPT,
    ".tsx": Language.TYPESCRIPT,
}


@dataclass
class SourceFile:
    """A source file read once during a discovery pass.

    Attributes:
        path: Path to the file.
        text: Full file contents.
    """

    path: str
    text: str

    @property
    def lines(self) -> list[str]:
        """Source lines with their line endings preserved.

        Splits on "\\n" only, matching how the parsers count lines.
        """
        parts = self.text.split("\n")
        lines = [part + "\n" for part in parts[:-1]]
        if parts[-1]:
            lines.append(parts[-1])
        return lines

    def line_span(self, start_line: int, end_line: int) -> str:
        """Return the verbatim text of lines start_line..end_line.

        Args:
            start_line: First line, 1-indexed.
            end_line: Last line, 1-indexed and inclusive.

        Returns:
            The joined lines, or an empty string for an empty range.
        """
        if start_line < 1 or end_line < start_line:
            return ""
        return "".join(self.lines[start_line - 1 : end_line])


@dataclass
class MethodNode:
    """Parser-neutral view of a method declaration.

    Attributes:
        name: Method name.
        doc_comment: Raw doc-comment text, empty if absent.
        start_line: 1-indexed first line of the declaration.
        end_line: 1-indexed last line of the declaration.
    """

    name: str
    doc_comment: str = ""
    start_line: int = 0
    end_line: int = 0


@dataclass
class ClassNode:
    """Parser-neutral view of a class declaration.

    Attributes:
        name: Class name.
        doc_comment: Raw doc-comment text, empty if absent.
        methods: Member methods in declaration order.
        namespace: Namespace in effect at the declaration, if any.
        start_line: 1-indexed first line of the declaration.
        end_line: 1-indexed last line of the declaration.
    """

    name: str
    doc_comment: str = ""
    methods: list[MethodNode] = field(default_factory=list)
    namespace: Optional[str] = None
    start_line: int = 0
    end_line: int = 0


@dataclass(frozen=True)
class MethodRecord:
    """An extracted method.

    Attributes:
        name: Method name, unique within its class only.
        doc_comment: Doc-comment text, possibly empty.
        body: Verbatim source lines of the method.
        start_line: 1-indexed first line of the method.
        end_line: 1-indexed last line of the method.
    """

    name: str
    doc_comment: str = ""
    body: str = ""
    start_line: int = 0
    end_line: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of this method.
        """
        return {
            "name": self.name,
            "doc_comment": self.doc_comment,
            "body": self.body,
            "start_line": self.start_line,
            "end_line": self.end_line,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MethodRecord:
        """Deserialize from a dictionary.

        Args:
            data: Dictionary with method fields.

        Returns:
            A new MethodRecord instance.
        """
        return cls(
            name=data["name"],
            doc_comment=data.get("doc_comment", ""),
            body=data.get("body", ""),
            start_line=data.get("start_line", 0),
            end_line=data.get("end_line", 0),
        )


@dataclass(frozen=True)
class ClassRecord:
    """An extracted class with its methods in declaration order.

    Attributes:
        name: Class name.
        doc_comment: Doc-comment text, possibly empty.
        methods: Extracted methods in declaration order.
        file_path: File the class was found in.
        language: Source language of the file.
        namespace: Namespace in effect at the declaration, if any.
        start_line: 1-indexed first line of the class.
        end_line: 1-indexed last line of the class.
    """

    name: str
    doc_comment: str = ""
    methods: tuple[MethodRecord, ...] = ()
    file_path: str = ""
    language: Language = Language.PHP
    namespace: Optional[str] = None
    start_line: int = 0
    end_line: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of this class.
        """
        return {
            "name": self.name,
            "doc_comment": self.doc_comment,
            "methods": [m.to_dict() for m in self.methods],
            "file_path": self.file_path,
            "language": self.language.value,
            "namespace": self.namespace,
            "start_line": self.start_line,
            "end_line": self.end_line,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClassRecord:
        """Deserialize from a dictionary.

        Args:
            data: Dictionary with class fields.

        Returns:
            A new ClassRecord instance.
        """
        return cls(
            name=data["name"],
            doc_comment=data.get("doc_comment", ""),
            methods=tuple(MethodRecord.from_dict(m) for m in data.get("methods", [])),
            file_path=data.get("file_path", ""),
            language=Language(data.get("language", "php")),
            namespace=data.get("namespace"),
            start_line=data.get("start_line", 0),
            end_line=data.get("end_line", 0),
        )
