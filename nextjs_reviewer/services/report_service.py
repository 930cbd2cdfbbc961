"""Markdown report for a review run."""

import logging
from collections import defaultdict
from pathlib import Path
from typing import Iterable

from nextjs_reviewer.analyzers import Category, Finding, Severity
from nextjs_reviewer.analyzers.rules import rules_by_category
from nextjs_reviewer.schemas.review import ReviewMetadata, ReviewStats

logger = logging.getLogger(__name__)

SEVERITY_TITLES = {
    Severity.ERROR: ":red_circle: Errors",
    Severity.WARNING: ":yellow_circle: Warnings",
    Severity.INFO: ":blue_circle: Info",
}

CATEGORY_TITLES = {
    Category.TYPESCRIPT: "TypeScript",
    Category.REACT_NEXTJS: "React/Next.js",
    Category.CODE_QUALITY: "Code quality",
}


def compute_stats(findings: Iterable[Finding], total_files: int) -> ReviewStats:
    findings = list(findings)
    return ReviewStats(
        total_files=total_files,
        total_issues=len(findings),
        errors=sum(1 for f in findings if f.severity == Severity.ERROR),
        warnings=sum(1 for f in findings if f.severity == Severity.WARNING),
        info=sum(1 for f in findings if f.severity == Severity.INFO),
    )


def order_findings(findings: Iterable[Finding]) -> list[tuple[Severity, str, list[Finding]]]:
    """
    Group findings by severity tier, then file, then ascending line.

    Severity follows error, warning, info; files are alphabetical; findings
    on the same line keep their detection order.

    Returns:
        (severity, file, findings) triples for non-empty groups only
    """
    grouped: dict[Severity, dict[str, list[Finding]]] = {
        severity: defaultdict(list) for severity in Severity
    }
    for finding in findings:
        grouped[finding.severity][finding.file].append(finding)

    ordered = []
    for severity in Severity:
        for file in sorted(grouped[severity]):
            items = sorted(grouped[severity][file], key=lambda f: f.line)
            ordered.append((severity, file, items))
    return ordered


class ReportService:
    """Renders and writes review reports."""

    TITLE = "Next.js Code Review Report"

    def render(self, findings: Iterable[Finding], metadata: ReviewMetadata) -> str:
        """Render the full Markdown report."""
        findings = list(findings)
        stats = compute_stats(findings, metadata.eligible_files)
        counts = {
            Severity.ERROR: stats.errors,
            Severity.WARNING: stats.warnings,
            Severity.INFO: stats.info,
        }

        parts = [f"# {self.TITLE}\n\n"]
        parts.append(f"**Generated at:** {metadata.generated_at.isoformat()}\n")
        parts.append(f"**Current branch:** {metadata.current_branch}\n")
        parts.append(f"**Base branch:** {metadata.base_branch}\n")
        parts.append(f"**Files reviewed:** {stats.total_files}\n")
        parts.append(f"**Total issues:** {stats.total_issues}\n\n")

        parts.append("## Summary\n\n")
        for severity in Severity:
            parts.append(f"- {SEVERITY_TITLES[severity]}: {counts[severity]}\n")
        parts.append("\n")

        current = None
        for severity, file, items in order_findings(findings):
            if severity != current:
                parts.append(f"## {SEVERITY_TITLES[severity]} ({counts[severity]})\n\n")
                current = severity
            parts.append(f"### `{file}`\n\n")
            for finding in items:
                parts.append(f"- **Line {finding.line}** [`{finding.rule}`]: {finding.message}\n")
            parts.append("\n")

        parts.append("## Applied review rules\n\n")
        for category, rules in rules_by_category().items():
            parts.append(f"### {CATEGORY_TITLES[category]}\n")
            for rule in rules:
                parts.append(f"- {rule.rule_id}: {rule.description}\n")
            parts.append("\n")

        return "".join(parts)

    def write(
        self,
        findings: Iterable[Finding],
        metadata: ReviewMetadata,
        output_dir: str | Path,
    ) -> Path:
        """
        Write the report as ``review_<timestamp>.md`` under ``output_dir``.

        Returns:
            Absolute path of the written report
        """
        out_dir = Path(output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)

        timestamp = metadata.generated_at.strftime("%Y%m%dT%H%M%S")
        report_path = (out_dir / f"review_{timestamp}.md").resolve()
        report_path.write_text(self.render(findings, metadata), encoding="utf-8")

        logger.info(f"Wrote review report: {report_path}")
        return report_path
