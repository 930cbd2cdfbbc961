"""Structural analyzer for function length and cyclomatic complexity.

Walks the syntax tree, and for every function-like construct with a braced
body measures:

- statement count: direct statements of the body block
- cyclomatic complexity: 1 plus one per branch, loop, catch clause,
  non-empty case clause and ``&&``/``||`` operator in the body

A nested function is a boundary for its parent's complexity. It is measured
on its own when the walk reaches it.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import tree_sitter

from nextjs_reviewer.analyzers.base import Analyzer, FileRecord, Finding
from nextjs_reviewer.analyzers.rules import (
    MAX_CYCLOMATIC_COMPLEXITY,
    MAX_STATEMENTS_PER_FUNCTION,
    make_finding,
)
from nextjs_reviewer.parsers.typescript_parser import TypeScriptParser, iter_nodes, node_line

logger = logging.getLogger(__name__)

FUNCTION_KINDS = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "method_definition",
    "arrow_function",
})

LOGICAL_OPERATORS = frozenset({"&&", "||"})


def _always(node: tree_sitter.Node) -> int:
    return 1


def _non_empty_case(node: tree_sitter.Node) -> int:
    value = node.child_by_field_name("value")
    statements = [
        child for child in node.named_children
        if child.type != "comment" and child != value
    ]
    return 1 if statements else 0


def _logical_operator(node: tree_sitter.Node) -> int:
    operator = node.child_by_field_name("operator")
    return 1 if operator is not None and operator.type in LOGICAL_OPERATORS else 0


# Complexity increment per node kind
COMPLEXITY_RULES: dict[str, Callable[[tree_sitter.Node], int]] = {
    "if_statement": _always,
    "ternary_expression": _always,
    "for_statement": _always,
    "for_in_statement": _always,  # for-in and for-of
    "while_statement": _always,
    "do_statement": _always,
    "catch_clause": _always,
    "switch_case": _non_empty_case,
    "binary_expression": _logical_operator,
}


@dataclass(frozen=True)
class FunctionMetrics:
    """Metrics for one function-like construct."""

    name: str
    line: int
    statement_count: int
    complexity: int


def braced_body(node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    body = node.child_by_field_name("body")
    if body is not None and body.type == "statement_block":
        return body
    return None


def statement_count(body: tree_sitter.Node) -> int:
    """Number of top-level statements in a block."""
    return sum(1 for child in body.named_children if child.type != "comment")


def cyclomatic_complexity(body: tree_sitter.Node) -> int:
    """Complexity of a function body, stopping at nested functions."""
    complexity = 1
    stack = [body]
    while stack:
        node = stack.pop()
        if node.type in FUNCTION_KINDS:
            continue
        rule = COMPLEXITY_RULES.get(node.type)
        if rule is not None:
            complexity += rule(node)
        stack.extend(node.children)
    return complexity


def function_name(node: tree_sitter.Node) -> str:
    name_node = node.child_by_field_name("name")
    if name_node is None and node.parent is not None and node.parent.type in (
        "variable_declarator",
        "public_field_definition",
        "field_definition",
        "pair",
    ):
        name_node = node.parent.child_by_field_name("name") or node.parent.child_by_field_name("key")
    if name_node is None:
        return "<anonymous>"
    return name_node.text.decode("utf-8", errors="replace")


class StructureAnalyzer(Analyzer):
    """Flags functions that are too long or too complex."""

    name = "structure"

    def __init__(self, parser: Optional[TypeScriptParser] = None) -> None:
        self.parser = parser or TypeScriptParser()

    def measure(self, content: str, file_path: str) -> list[FunctionMetrics]:
        """
        Measure every function-like construct with a braced body.

        Raises:
            ParseError: If the content does not parse
        """
        tree = self.parser.parse(content, file_path)
        metrics = []
        for node in iter_nodes(tree.root_node):
            if node.type not in FUNCTION_KINDS:
                continue
            body = braced_body(node)
            if body is None:
                continue
            metrics.append(
                FunctionMetrics(
                    name=function_name(node),
                    line=node_line(node),
                    statement_count=statement_count(body),
                    complexity=cyclomatic_complexity(body),
                )
            )
        return metrics

    def analyze(self, record: FileRecord) -> list[Finding]:
        findings = []
        for metrics in self.measure(record.content, record.path):
            if metrics.statement_count > MAX_STATEMENTS_PER_FUNCTION:
                findings.append(
                    make_finding(
                        "max-lines-per-function",
                        record.path,
                        metrics.line,
                        f"Function is too long ({metrics.statement_count} statements). "
                        "Consider splitting it into smaller functions.",
                    )
                )
            if metrics.complexity > MAX_CYCLOMATIC_COMPLEXITY:
                findings.append(
                    make_finding(
                        "cyclomatic-complexity",
                        record.path,
                        metrics.line,
                        f"Cyclomatic complexity is too high ({metrics.complexity}). "
                        "Consider simplifying this function.",
                    )
                )
        logger.debug(f"Measured structure of {record.path}: {len(findings)} findings")
        return findings
