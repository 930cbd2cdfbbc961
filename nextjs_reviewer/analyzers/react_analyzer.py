"""React and Next.js checks for JSX files.

These are text heuristics. The hardcoded-text check in particular both
over- and under-fires on JSX text mixed with expressions.
"""

import re

from nextjs_reviewer.analyzers.base import Analyzer, FileRecord, Finding
from nextjs_reviewer.analyzers.rules import make_finding

JSX_EXTENSIONS = (".tsx", ".jsx")

HOOK_PATTERN = re.compile(
    r"use(State|Effect|Callback|Memo|Reducer|Context|LayoutEffect|ImperativeHandle|DebugValue)"
)
CONDITIONAL_PATTERN = re.compile(r"if\s*\(|for\s*\(|while\s*\(|}\s*else")
HOOK_LOOKBACK_LINES = 3

IMG_TAG_PATTERN = re.compile(r"<img\s+src=")
ANCHOR_PATTERN = re.compile(r"<a\s+href=")
EXTERNAL_ANCHOR_PATTERN = re.compile(r"""<a\s+href=["']https?:""")

HARDCODED_TEXT_PATTERN = re.compile(r">([^<>{}\n]+[a-zA-Z]+[^<>{}\n]+)<")
EXPRESSION_TEXT_PATTERN = re.compile(r"^\{.*\}$")
CONSTANT_TEXT_PATTERN = re.compile(r"^[A-Z_]+$")
MAX_QUOTED_TEXT = 50

DATA_FETCHING_PATTERN = re.compile(r"fetch\(|axios\.|useQuery|useSWR")
DATA_FETCHING_EXPORTS = ("getStaticProps", "getServerSideProps", "getStaticPaths")


def _in_directory(file_path: str, directory: str) -> bool:
    normalized = "/" + file_path.replace("\\", "/").lstrip("/")
    return f"/{directory}/" in normalized


class ReactAnalyzer(Analyzer):
    """Checks hooks usage, Next.js components and hardcoded UI text."""

    name = "react"

    def analyze(self, record: FileRecord) -> list[Finding]:
        if not record.path.endswith(JSX_EXTENSIONS):
            return []

        findings = []
        lines = record.lines
        is_route_file = _in_directory(record.path, "pages") or _in_directory(record.path, "app")

        for index, line in enumerate(lines):
            line_num = index + 1

            if HOOK_PATTERN.search(line):
                preceding = "\n".join(lines[max(0, index - HOOK_LOOKBACK_LINES):index])
                if CONDITIONAL_PATTERN.search(preceding):
                    findings.append(make_finding(
                        "hooks-conditional",
                        record.path,
                        line_num,
                        "A React hook appears to be called conditionally. "
                        "Hooks must be called in the same order on every render.",
                    ))

            if is_route_file and IMG_TAG_PATTERN.search(line):
                findings.append(make_finding(
                    "next-image",
                    record.path,
                    line_num,
                    "Use next/image instead of <img> for better performance.",
                ))

            if ANCHOR_PATTERN.search(line) and not EXTERNAL_ANCHOR_PATTERN.search(line):
                findings.append(make_finding(
                    "next-link",
                    record.path,
                    line_num,
                    "Use next/link instead of <a> for internal navigation.",
                ))

            text = self._hardcoded_text(line)
            if text:
                quoted = text[:MAX_QUOTED_TEXT] + ("..." if len(text) > MAX_QUOTED_TEXT else "")
                findings.append(make_finding(
                    "i18n-hardcoded",
                    record.path,
                    line_num,
                    f'Consider i18n for hardcoded text: "{quoted}"',
                ))

        if self._needs_page_data_fetching(record):
            findings.append(make_finding(
                "next-data-fetching",
                record.path,
                1,
                "Consider getStaticProps or getServerSideProps for data fetching in pages.",
            ))

        return findings

    def _hardcoded_text(self, line: str) -> str:
        match = HARDCODED_TEXT_PATTERN.search(line)
        if not match:
            return ""
        text = match.group(1).strip()
        if len(text) <= 3:
            return ""
        if EXPRESSION_TEXT_PATTERN.match(text) or CONSTANT_TEXT_PATTERN.match(text):
            return ""
        return text

    def _needs_page_data_fetching(self, record: FileRecord) -> bool:
        if not _in_directory(record.path, "pages"):
            return False
        if any(name in record.content for name in DATA_FETCHING_EXPORTS):
            return False
        return bool(DATA_FETCHING_PATTERN.search(record.content))
