"""Line-level checks for TypeScript usage and general code quality.

Every check is a pure function of a single line. The promise and await
checks are single-line heuristics: chains split across lines are not
followed, and a name is judged by how it reads rather than by its type.
"""

import re
from typing import Callable, Optional

from nextjs_reviewer.analyzers.base import Analyzer, FileRecord, Finding
from nextjs_reviewer.analyzers.rules import MAX_LINE_LENGTH, make_finding

LineCheck = Callable[[str], Optional[str]]

ANY_MARKERS = (": any", "<any>", " as any")
NON_NULL_MARKERS = ("!.", "!;")

THEN_CALL_PATTERN = re.compile(r"\.then\s*\(")
AWAIT_VALUE_PATTERN = re.compile(r"await\s+[^(]")
AWAIT_EXEMPT_PATTERN = re.compile(r"(async|await\s+\w+\()")
AWAIT_HEAD_PATTERN = re.compile(r"await\s+(\w+)")
PROMISE_LIKE_NAME = re.compile(r"Promise|fetch|async")
CONSOLE_PATTERN = re.compile(r"console\.(log|error|warn|info|debug)")
TODO_PATTERN = re.compile(r"//\s*(TODO|FIXME|HACK|XXX)")
TRAILING_WHITESPACE_PATTERN = re.compile(r"\s+$")


def check_any(line: str) -> Optional[str]:
    if any(marker in line for marker in ANY_MARKERS):
        return 'Avoid the "any" type. Use a specific type instead.'
    return None


def check_non_null_assertion(line: str) -> Optional[str]:
    if any(marker in line for marker in NON_NULL_MARKERS):
        return "Avoid non-null assertions (!). Consider an explicit null check."
    return None


def check_floating_promise(line: str) -> Optional[str]:
    if THEN_CALL_PATTERN.search(line) and "await" not in line and "return" not in line:
        return "Unhandled promise detected. Await it or handle the promise explicitly."
    return None


def check_unnecessary_await(line: str) -> Optional[str]:
    if not AWAIT_VALUE_PATTERN.search(line) or AWAIT_EXEMPT_PATTERN.search(line):
        return None
    match = AWAIT_HEAD_PATTERN.search(line)
    if match and not PROMISE_LIKE_NAME.search(match.group(1)):
        return f'Possibly unnecessary await on "{match.group(1)}". Check that it returns a promise.'
    return None


def check_console(line: str) -> Optional[str]:
    if CONSOLE_PATTERN.search(line):
        return "Remove console statements before shipping to production."
    return None


def check_todo_comment(line: str) -> Optional[str]:
    match = TODO_PATTERN.search(line)
    if match:
        return f"{match.group(1)} comment found. It needs follow-up."
    return None


def check_line_length(line: str) -> Optional[str]:
    if len(line) > MAX_LINE_LENGTH:
        return f"Line is too long ({len(line)} characters). Consider wrapping it."
    return None


def check_trailing_whitespace(line: str) -> Optional[str]:
    if TRAILING_WHITESPACE_PATTERN.search(line):
        return "Trailing whitespace detected."
    return None


class LineAnalyzer(Analyzer):
    """Runs every line check against every line, top to bottom."""

    name = "line"

    CHECKS: tuple[tuple[str, LineCheck], ...] = (
        ("no-any", check_any),
        ("no-non-null-assertion", check_non_null_assertion),
        ("floating-promises", check_floating_promise),
        ("unnecessary-await", check_unnecessary_await),
        ("no-console", check_console),
        ("todo-comments", check_todo_comment),
        ("max-line-length", check_line_length),
        ("no-trailing-spaces", check_trailing_whitespace),
    )

    def analyze(self, record: FileRecord) -> list[Finding]:
        findings = []
        for line_num, line in enumerate(record.lines, 1):
            for rule_id, check in self.CHECKS:
                message = check(line)
                if message:
                    findings.append(make_finding(rule_id, record.path, line_num, message))
        return findings
