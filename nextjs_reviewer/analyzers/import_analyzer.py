"""Duplicate import detection computed from source text."""

import re

from nextjs_reviewer.analyzers.base import Analyzer, FileRecord, Finding
from nextjs_reviewer.analyzers.rules import make_finding

IMPORT_LINE_PATTERN = re.compile(r"^import\b")
MODULE_SPECIFIER_PATTERN = re.compile(r"""from ['"]([^'"]+)['"]""")


class DuplicateImportAnalyzer(Analyzer):
    """Reports each module imported more than once, at its first import line."""

    name = "imports"

    def analyze(self, record: FileRecord) -> list[Finding]:
        first_seen: dict[str, int] = {}
        duplicated: list[str] = []

        for line_num, line in enumerate(record.lines, 1):
            if not IMPORT_LINE_PATTERN.match(line):
                continue
            match = MODULE_SPECIFIER_PATTERN.search(line)
            if not match:
                continue
            module = match.group(1)
            if module not in first_seen:
                first_seen[module] = line_num
            elif module not in duplicated:
                duplicated.append(module)

        return [
            make_finding(
                "no-duplicate-imports",
                record.path,
                first_seen[module],
                f'Duplicate import from "{module}". Merge imports from the same module.',
            )
            for module in duplicated
        ]
