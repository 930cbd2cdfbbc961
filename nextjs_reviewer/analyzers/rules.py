"""Fixed rule catalogue shared by every analyzer and the report."""

from dataclasses import dataclass
from typing import Optional

from nextjs_reviewer.analyzers.base import Category, Finding, Severity

MAX_LINE_LENGTH = 120
MAX_STATEMENTS_PER_FUNCTION = 50
MAX_CYCLOMATIC_COMPLEXITY = 10


@dataclass(frozen=True)
class Rule:
    """A named check with its default severity."""

    rule_id: str
    category: Category
    severity: Severity
    description: str


RULES: dict[str, Rule] = {
    rule.rule_id: rule
    for rule in (
        # TypeScript
        Rule("no-any", Category.TYPESCRIPT, Severity.ERROR, "Disallow the any type"),
        Rule(
            "no-non-null-assertion",
            Category.TYPESCRIPT,
            Severity.WARNING,
            "Avoid non-null assertions (!)",
        ),
        Rule("floating-promises", Category.TYPESCRIPT, Severity.ERROR, "Detect unhandled promises"),
        Rule("unnecessary-await", Category.TYPESCRIPT, Severity.WARNING, "Check for needless await"),
        Rule(
            "cyclomatic-complexity",
            Category.TYPESCRIPT,
            Severity.WARNING,
            f"Functions with complexity above {MAX_CYCLOMATIC_COMPLEXITY}",
        ),
        Rule(
            "max-lines-per-function",
            Category.TYPESCRIPT,
            Severity.WARNING,
            f"Functions with more than {MAX_STATEMENTS_PER_FUNCTION} statements",
        ),
        # React / Next.js
        Rule(
            "hooks-conditional",
            Category.REACT_NEXTJS,
            Severity.ERROR,
            "Detect hooks called conditionally",
        ),
        Rule("next-image", Category.REACT_NEXTJS, Severity.WARNING, "Prefer next/image over <img>"),
        Rule(
            "next-link",
            Category.REACT_NEXTJS,
            Severity.WARNING,
            "Prefer next/link for internal navigation",
        ),
        Rule("i18n-hardcoded", Category.REACT_NEXTJS, Severity.INFO, "Detect hardcoded UI text"),
        Rule(
            "next-data-fetching",
            Category.REACT_NEXTJS,
            Severity.INFO,
            "Suggest SSR/SSG for page data fetching",
        ),
        # Code quality
        Rule("no-console", Category.CODE_QUALITY, Severity.WARNING, "Detect console statements"),
        Rule("todo-comments", Category.CODE_QUALITY, Severity.INFO, "Detect TODO/FIXME comments"),
        Rule(
            "max-line-length",
            Category.CODE_QUALITY,
            Severity.INFO,
            f"Lines longer than {MAX_LINE_LENGTH} characters",
        ),
        Rule("no-trailing-spaces", Category.CODE_QUALITY, Severity.INFO, "Detect trailing whitespace"),
        Rule(
            "no-duplicate-imports",
            Category.CODE_QUALITY,
            Severity.WARNING,
            "Detect repeated imports of one module",
        ),
    )
}


def get_rule(rule_id: str) -> Rule:
    """Look up a catalogue rule, raising KeyError for unknown ids."""
    return RULES[rule_id]


def rules_by_category() -> dict[Category, list[Rule]]:
    grouped: dict[Category, list[Rule]] = {category: [] for category in Category}
    for rule in RULES.values():
        grouped[rule.category].append(rule)
    return grouped


def make_finding(
    rule_id: str,
    file: str,
    line: int,
    message: str,
    column: Optional[int] = None,
) -> Finding:
    """Build a finding carrying the catalogue severity for ``rule_id``."""
    rule = get_rule(rule_id)
    return Finding(
        file=file,
        line=line,
        severity=rule.severity,
        rule=rule.rule_id,
        message=message,
        column=column,
    )
