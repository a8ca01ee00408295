"""PHP source parser using tree-sitter.

Finds class declarations, their methods and /** ... */ doc-comments,
and the namespace each class is declared in.
"""

import tree_sitter
import tree_sitter_php as tsphp

from src.parsers.structure import Language
from src.parsers.tree_sitter_base import TreeSitterParser

_PHP_LANGUAGE = tree_sitter.Language(tsphp.language_php())


class PHPParser(TreeSitterParser):
    """Parses PHP files, including the leading <?php tag."""

    language = Language.PHP
    class_types = frozenset({"class_declaration"})
    method_types = frozenset({"method_declaration"})
    namespace_types = frozenset({"namespace_definition"})

    def __init__(self) -> None:
        super().__init__(_PHP_LANGUAGE)
