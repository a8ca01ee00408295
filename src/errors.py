"""Exception hierarchy for the class documentation generator.

Parse failures are recovered per file by the extractor; backend failures
are raised by the completion clients and handled by the assembler.
"""

from typing import Optional


class ClassDocError(Exception):
    """Base class for all errors raised by the generator."""


class ParseError(ClassDocError):
    """A source file could not be parsed into a syntax tree.

    Attributes:
        file_path: Path of the file that failed to parse.
        message: Human-readable parser message.
        line: 1-indexed line of the first error, if known.
    """

    def __init__(
        self, file_path: str, message: str, line: Optional[int] = None
    ) -> None:
        self.file_path = file_path
        self.message = message
        self.line = line
        location = f" on line {line}" if line else ""
        super().__init__(f"{message}{location}")


class BackendError(ClassDocError):
    """The completion backend failed to produce a response.

    Raised on timeouts, non-zero exits, empty output, or API errors once
    all retry attempts are exhausted.

    Attributes:
        retryable: Whether another attempt could succeed.
    """

    def __init__(self, message: str, retryable: bool = True) -> None:
        self.retryable = retryable
        super().__init__(message)
