"""Review service: runs every analyzer over the changed files of a branch."""

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Optional

from nextjs_reviewer.analyzers import (
    Analyzer,
    DuplicateImportAnalyzer,
    FileRecord,
    Finding,
    LineAnalyzer,
    ReactAnalyzer,
    Severity,
    StructureAnalyzer,
)
from nextjs_reviewer.parsers import ParseError
from nextjs_reviewer.schemas.review import ReviewStats
from nextjs_reviewer.services.git_service import GitService
from nextjs_reviewer.services.report_service import compute_stats

logger = logging.getLogger(__name__)

REVIEWABLE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")
EXCLUDED_PATH_SEGMENTS = ("node_modules", ".next", "dist", "build", "coverage")


def is_reviewable(file_path: str) -> bool:
    """A path is reviewable if its extension is supported and it is not excluded."""
    ext = os.path.splitext(file_path)[1]
    return ext in REVIEWABLE_EXTENSIONS and not any(
        segment in file_path for segment in EXCLUDED_PATH_SEGMENTS
    )


class ReviewSession:
    """Accumulates findings for one run. Safe to extend from worker threads."""

    def __init__(
        self,
        base_branch: str,
        changed_files: Iterable[str] = (),
        eligible_files: Iterable[str] = (),
    ):
        self.base_branch = base_branch
        self.changed_files = list(changed_files)
        self.eligible_files = list(eligible_files)
        self._findings: list[Finding] = []
        self._lock = threading.Lock()

    def extend(self, findings: Iterable[Finding]) -> None:
        batch = list(findings)
        with self._lock:
            self._findings.extend(batch)

    @property
    def findings(self) -> tuple[Finding, ...]:
        with self._lock:
            return tuple(self._findings)

    def by_severity(self) -> dict[Severity, list[Finding]]:
        grouped: dict[Severity, list[Finding]] = {severity: [] for severity in Severity}
        for finding in self.findings:
            grouped[finding.severity].append(finding)
        return grouped

    def stats(self) -> ReviewStats:
        return compute_stats(self.findings, len(self.eligible_files))


class ReviewService:
    """Reviews the files changed between a base branch and HEAD."""

    def __init__(
        self,
        project_root: str | Path,
        git_service: Optional[GitService] = None,
        max_workers: int = 1,
    ):
        self.project_root = Path(project_root)
        self.git_service = git_service or GitService(self.project_root)
        self.max_workers = max(1, max_workers)
        self.text_analyzers: list[Analyzer] = [
            LineAnalyzer(),
            DuplicateImportAnalyzer(),
            ReactAnalyzer(),
        ]
        self.structure_analyzer = StructureAnalyzer()

    def run(self, base_branch: str) -> ReviewSession:
        """
        Review every eligible changed file.

        Args:
            base_branch: Branch to compare the current HEAD against

        Returns:
            ReviewSession holding the changed files and all findings

        Raises:
            ChangeSetError: If the changed-file set cannot be resolved
        """
        changed = self.git_service.changed_files(base_branch)
        eligible = [path for path in changed if is_reviewable(path)]
        session = ReviewSession(base_branch, changed_files=changed, eligible_files=eligible)

        if not changed:
            logger.info(f"No files changed between the current branch and {base_branch}")
            return session

        logger.info(f"Reviewing {len(eligible)} of {len(changed)} changed files")

        if self.max_workers > 1 and len(eligible) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                for findings in pool.map(self.review_path, eligible):
                    session.extend(findings)
        else:
            for path in eligible:
                session.extend(self.review_path(path))

        logger.info(f"Review finished: {len(session.findings)} findings")
        return session

    def review_path(self, file_path: str) -> list[Finding]:
        """Read and review one changed file. Missing or unreadable files are skipped."""
        record = self.read_file(file_path)
        if record is None:
            return []
        return self.review_file(record)

    def read_file(self, file_path: str) -> Optional[FileRecord]:
        full_path = self.project_root / file_path
        if not full_path.is_file():
            logger.info(f"Skipping deleted file: {file_path}")
            return None
        try:
            content = full_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning(f"Skipping unreadable file {file_path}: {e}")
            return None
        return FileRecord(path=file_path, content=content)

    def review_file(self, record: FileRecord) -> list[Finding]:
        """Run all analyzers on one file. A parse failure only drops the structural checks."""
        logger.info(f"Reviewing: {record.path}")
        findings: list[Finding] = []
        for analyzer in self.text_analyzers:
            findings.extend(analyzer.analyze(record))

        try:
            findings.extend(self.structure_analyzer.analyze(record))
        except ParseError as e:
            logger.warning(f"Structural checks skipped: {e}")

        return findings
