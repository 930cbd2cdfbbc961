"""TypeScript/JavaScript parser using tree-sitter.

The tree-sitter node ``type`` string is the node kind that analyzers
dispatch on. tree-sitter recovers from syntax errors instead of failing,
so a tree containing error or missing nodes is reported as a failed parse.
"""

import logging
import os
from typing import Iterator

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Content could not be parsed as valid source."""
    pass


class TypeScriptParser:
    """Parser for .ts, .tsx, .js and .jsx sources."""

    GRAMMARS = {
        ".ts": "typescript",
        ".tsx": "tsx",
        ".js": "javascript",
        ".jsx": "javascript",
    }

    def __init__(self):
        """Load the grammars once; parsers are created per call."""
        self.languages = {
            "typescript": tree_sitter.Language(tree_sitter_typescript.language_typescript()),
            "tsx": tree_sitter.Language(tree_sitter_typescript.language_tsx()),
            "javascript": tree_sitter.Language(tree_sitter_javascript.language()),
        }
        logger.debug(f"Initialized tree-sitter grammars: {list(self.languages.keys())}")

    def grammar_for(self, file_path: str) -> str:
        """Return the grammar name for a path, raising ParseError if unsupported."""
        ext = os.path.splitext(file_path)[1].lower()
        if ext not in self.GRAMMARS:
            raise ParseError(f"{file_path}: no grammar for extension '{ext}'")
        return self.GRAMMARS[ext]

    def parse(self, content: str, file_path: str) -> tree_sitter.Tree:
        """
        Parse file content into a syntax tree.

        Args:
            content: Source text
            file_path: Path used to select the grammar and in error messages

        Returns:
            The tree-sitter Tree

        Raises:
            ParseError: If the grammar is unknown or the source has syntax errors
        """
        language = self.languages[self.grammar_for(file_path)]
        parser = tree_sitter.Parser(language)
        tree = parser.parse(content.encode("utf-8"))

        if tree.root_node.has_error:
            line = first_error_line(tree.root_node)
            raise ParseError(f"{file_path}: syntax error near line {line}")
        return tree


def iter_nodes(node: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    """Yield ``node`` and its descendants depth-first, in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def node_line(node: tree_sitter.Node) -> int:
    """1-based start line of a node."""
    return node.start_point[0] + 1


def first_error_line(root: tree_sitter.Node) -> int:
    for node in iter_nodes(root):
        if node.is_error or node.is_missing:
            return node_line(node)
    return node_line(root)
