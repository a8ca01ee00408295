"""Class Documentation Generator.

Scans a source tree for class and method definitions and asks a
language-model backend (Ollama by default) to write Markdown
documentation for each of them.
"""

__version__ = "0.1.0"
