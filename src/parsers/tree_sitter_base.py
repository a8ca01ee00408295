"""Shared tree-sitter plumbing for the brace-language parsers.

Subclasses declare which node types are classes, methods and namespaces;
this base class handles parsing, error detection, pre-order traversal
and doc-comment lookup.
"""

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Optional

import tree_sitter

from src.errors import ParseError
from src.parsers.structure import ClassNode, Language, MethodNode

logger = logging.getLogger(__name__)


@dataclass
class SyntaxTree:
    """A parsed tree together with the bytes it was parsed from."""

    root: tree_sitter.Node
    source_bytes: bytes


class TreeSitterParser:
    """Base parser over a tree-sitter grammar.

    Attributes:
        language: Source language handled by the parser.
        class_types: Node types recorded as classes.
        method_types: Node types recorded as methods inside a class body.
        namespace_types: Node types that open a namespace.
    """

    language: Language
    class_types: frozenset[str] = frozenset({"class_declaration"})
    method_types: frozenset[str] = frozenset()
    namespace_types: frozenset[str] = frozenset()

    def __init__(self, ts_language: tree_sitter.Language) -> None:
        self._ts_language = ts_language

    def parse(self, source: str, file_path: str = "<string>") -> SyntaxTree:
        """Parse source text into a syntax tree.

        Args:
            source: Source code to parse.
            file_path: Path used in error messages.

        Returns:
            The parsed SyntaxTree.

        Raises:
            ParseError: If the tree contains error or missing nodes.
        """
        source_bytes = source.encode("utf-8")
        parser = tree_sitter.Parser(self._ts_language)
        tree = parser.parse(source_bytes)
        root = tree.root_node

        if root.has_error:
            error_node = self._first_error(root)
            line = error_node.start_point.row + 1 if error_node else None
            raise ParseError(file_path, "Syntax error", line)

        logger.debug("Parsed %s (%d bytes)", file_path, len(source_bytes))
        return SyntaxTree(root=root, source_bytes=source_bytes)

    def for_each_class_node(
        self, tree: SyntaxTree, callback: Callable[[ClassNode], None]
    ) -> None:
        """Invoke callback for every class node, in pre-order.

        Nested classes are reported as independent entries after their
        enclosing class.

        Args:
            tree: A tree returned by parse().
            callback: Called once per class node.
        """
        namespace: Optional[str] = None
        for node in self._iter_preorder(tree.root):
            if node.type in self.namespace_types:
                namespace = self._namespace_name(node, tree.source_bytes)
            elif node.type in self.class_types:
                class_node = self._build_class_node(node, tree.source_bytes, namespace)
                if class_node:
                    callback(class_node)

    def _build_class_node(
        self,
        node: tree_sitter.Node,
        source_bytes: bytes,
        namespace: Optional[str],
    ) -> Optional[ClassNode]:
        """Build a ClassNode from a class declaration node.

        Args:
            node: A class declaration node.
            source_bytes: Source as bytes.
            namespace: Namespace in effect at the declaration.

        Returns:
            A ClassNode, or None for anonymous classes.
        """
        name_node = node.child_by_field_name("name")
        if not name_node:
            return None

        methods = []
        body_node = node.child_by_field_name("body")
        if body_node:
            for child in body_node.children:
                if child.type in self.method_types:
                    method = self._build_method_node(child, source_bytes)
                    if method:
                        methods.append(method)

        return ClassNode(
            name=self._node_text(name_node, source_bytes),
            doc_comment=self._doc_comment(node, source_bytes),
            methods=methods,
            namespace=namespace,
            start_line=node.start_point.row + 1,
            end_line=node.end_point.row + 1,
        )

    def _build_method_node(
        self, node: tree_sitter.Node, source_bytes: bytes
    ) -> Optional[MethodNode]:
        name_node = node.child_by_field_name("name")
        if not name_node:
            return None

        return MethodNode(
            name=self._node_text(name_node, source_bytes),
            doc_comment=self._doc_comment(node, source_bytes),
            start_line=node.start_point.row + 1,
            end_line=node.end_point.row + 1,
        )

    def _doc_comment(self, node: tree_sitter.Node, source_bytes: bytes) -> str:
        """Return the nearest /** ... */ comment directly preceding a node.

        Plain comments between the doc-comment and the declaration are
        skipped; any other node ends the search.

        Args:
            node: The declaration node.
            source_bytes: Source as bytes.

        Returns:
            The raw comment text, or an empty string.
        """
        prev = self._comment_anchor(node).prev_named_sibling
        while prev is not None and prev.type == "comment":
            text = self._node_text(prev, source_bytes)
            if text.startswith("/**"):
                return text
            prev = prev.prev_named_sibling
        return ""

    def _comment_anchor(self, node: tree_sitter.Node) -> tree_sitter.Node:
        """Node whose previous sibling holds the doc-comment."""
        return node

    def _namespace_name(
        self, node: tree_sitter.Node, source_bytes: bytes
    ) -> Optional[str]:
        name_node = node.child_by_field_name("name")
        if not name_node:
            return None
        return self._node_text(name_node, source_bytes)

    @staticmethod
    def _iter_preorder(root: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
        stack = [root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    @classmethod
    def _first_error(cls, root: tree_sitter.Node) -> Optional[tree_sitter.Node]:
        for node in cls._iter_preorder(root):
            if node.type == "ERROR" or node.is_missing:
                return node
        return None

    @staticmethod
    def _node_text(node: tree_sitter.Node, source_bytes: bytes) -> str:
        return source_bytes[node.start_byte : node.end_byte].decode(
            "utf-8", errors="replace"
        )
