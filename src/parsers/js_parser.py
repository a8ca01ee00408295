"""JavaScript and TypeScript parsers using tree-sitter.

Extracts class declarations, their method definitions and JSDoc
comments. Exported classes take their JSDoc from before the export
statement.
"""

import tree_sitter
import tree_sitter_javascript as tsjs
import tree_sitter_typescript as tsts

from src.parsers.structure import Language
from src.parsers.tree_sitter_base import TreeSitterParser

_JS_LANGUAGE = tree_sitter.Language(tsjs.language())
_TS_LANGUAGE = tree_sitter.Language(tsts.language_typescript())
_TSX_LANGUAGE = tree_sitter.Language(tsts.language_tsx())


class JSParser(TreeSitterParser):
    """Parses JavaScript (and JSX) source files."""

    language = Language.JAVASCRIPT
    class_types = frozenset({"class_declaration"})
    method_types = frozenset({"method_definition"})

    def __init__(self) -> None:
        super().__init__(_JS_LANGUAGE)

    def _comment_anchor(self, node: tree_sitter.Node) -> tree_sitter.Node:
        # `export class Foo {}`: the JSDoc precedes the export statement.
        if node.parent is not None and node.parent.type == "export_statement":
            return node.parent
        return node


class TSParser(JSParser):
    """Parses TypeScript source files.

    Args:
        tsx: Use the TSX grammar (for .tsx files).
    """

    language = Language.TYPESCRIPT
    class_types = frozenset({"class_declaration", "abstract_class_declaration"})

    def __init__(self, tsx: bool = False) -> None:
        TreeSitterParser.__init__(self, _TSX_LANGUAGE if tsx else _TS_LANGUAGE)
