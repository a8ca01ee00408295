"""Synthetic code skeletons sent to the backend instead of real code.

A skeleton keeps only a declaration's doc-comment and its name around an
empty body. Class skeletons never include method bodies.
"""

import textwrap
from typing import Optional

from src.parsers.structure import ClassRecord, Language, MethodRecord


def class_skeleton(record: ClassRecord, default_namespace: Optional[str] = None) -> str:
    """Render the skeleton of a class declaration.

    Args:
        record: The extracted class.
        default_namespace: PHP namespace used when the class was declared
            outside any namespace.

    Returns:
        Source text for the skeleton.
    """
    doc = record.doc_comment
    if record.language == Language.PHP:
        namespace = record.namespace or default_namespace
        header = "<?php\n"
        if namespace:
            header += f"namespace {namespace};\n\n"
        return f"{header}{doc}\nclass {record.name} {{\n // ... \n}}"

    if record.language == Language.PYTHON:
        return f"class {record.name}:\n{_python_body(doc)}"

    return f"{_prefix(doc)}class {record.name} {{\n  // ...\n}}"


def method_skeleton(method: MethodRecord, language: Language) -> str:
    """Render the skeleton of a method declaration.

    Args:
        method: The extracted method.
        language: Language of the enclosing file.

    Returns:
        Source text for the skeleton.
    """
    doc = method.doc_comment
    if language == Language.PHP:
        return f"<?php\n{doc}\npublic function {method.name}() {{\n // ... \n}}"

    if language == Language.PYTHON:
        return f"def {method.name}(self):\n{_python_body(doc)}"

    return f"{_prefix(doc)}{method.name}() {{\n  // ...\n}}"


def _prefix(doc: str) -> str:
    return f"{doc}\n" if doc else ""


def _python_body(docstring: str) -> str:
    if not docstring:
        return "    ..."
    return textwrap.indent(f'"""{docstring}"""', "    ") + "\n\n    ..."
