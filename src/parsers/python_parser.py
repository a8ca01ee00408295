"""Python source parser using the ast module.

Finds class definitions and their directly defined methods. The
doc-comment of a Python class or method is its docstring.
"""

import ast
import logging
from collections.abc import Callable, Iterator

from src.errors import ParseError
from src.parsers.structure import ClassNode, Language, MethodNode

logger = logging.getLogger(__name__)

_FUNCTION_TYPES = (ast.FunctionDef, ast.AsyncFunctionDef)


class PythonParser:
    """Parses Python source into an ast tree and walks its classes."""

    language = Language.PYTHON

    def parse(self, source: str, file_path: str = "<string>") -> ast.Module:
        """Parse Python source code.

        Args:
            source: Python source code as a string.
            file_path: Path used in error messages.

        Returns:
            The parsed module tree.

        Raises:
            ParseError: If the source contains invalid Python syntax.
        """
        try:
            tree = ast.parse(source, filename=file_path)
        except SyntaxError as e:
            raise ParseError(file_path, e.msg or "Syntax error", e.lineno) from e
        except ValueError as e:
            # Null bytes in the source on older interpreters.
            raise ParseError(file_path, str(e)) from e

        logger.debug("Parsed %s", file_path)
        return tree

    def for_each_class_node(
        self, tree: ast.Module, callback: Callable[[ClassNode], None]
    ) -> None:
        """Invoke callback for every class definition, in pre-order.

        Args:
            tree: A tree returned by parse().
            callback: Called once per class definition.
        """
        for node in self._iter_preorder(tree):
            if isinstance(node, ast.ClassDef):
                callback(self._build_class_node(node))

    def _build_class_node(self, node: ast.ClassDef) -> ClassNode:
        methods = [
            self._build_method_node(item)
            for item in node.body
            if isinstance(item, _FUNCTION_TYPES)
        ]
        return ClassNode(
            name=node.name,
            doc_comment=ast.get_docstring(node) or "",
            methods=methods,
            start_line=self._start_line(node),
            end_line=node.end_lineno or node.lineno,
        )

    def _build_method_node(
        self, node: ast.FunctionDef | ast.AsyncFunctionDef
    ) -> MethodNode:
        return MethodNode(
            name=node.name,
            doc_comment=ast.get_docstring(node) or "",
            start_line=self._start_line(node),
            end_line=node.end_lineno or node.lineno,
        )

    @staticmethod
    def _start_line(
        node: ast.ClassDef | ast.FunctionDef | ast.AsyncFunctionDef,
    ) -> int:
        """First line of a definition, including its decorators."""
        return min([node.lineno] + [d.lineno for d in node.decorator_list])

    @staticmethod
    def _iter_preorder(root: ast.AST) -> Iterator[ast.AST]:
        stack = [root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(list(ast.iter_child_nodes(node))))
