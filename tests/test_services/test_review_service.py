"""Tests for the review orchestration service."""

import threading
from unittest.mock import MagicMock

import pytest

from nextjs_reviewer.analyzers.base import Finding, Severity
from nextjs_reviewer.services.git_service import ChangeSetError
from nextjs_reviewer.services.review_service import (
    ReviewService,
    ReviewSession,
    is_reviewable,
)


def write_files(root, files: dict[str, str]) -> None:
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def make_service(root, changed: list[str], max_workers: int = 1) -> ReviewService:
    git_service = MagicMock()
    git_service.changed_files.return_value = changed
    return ReviewService(root, git_service=git_service, max_workers=max_workers)


class TestReviewableFiles:
    """Test file eligibility filtering."""

    @pytest.mark.parametrize("path,expected", [
        ("src/app/page.tsx", True),
        ("lib/util.ts", True),
        ("components/Button.jsx", True),
        ("scripts/build.js", False),
        ("node_modules/react/index.js", False),
        (".next/server/page.js", False),
        ("dist/index.js", False),
        ("coverage/lcov.js", False),
        ("styles/globals.css", False),
        ("README.md", False),
        ("types/index.d.ts", True),
    ])
    def test_is_reviewable(self, path, expected):
        """Supported extensions outside excluded folders are reviewed."""
        assert is_reviewable(path) is expected


class TestReviewSession:
    """Test the findings accumulator."""

    def finding(self, severity: Severity, line: int = 1) -> Finding:
        return Finding(file="a.ts", line=line, severity=severity, rule="r", message="m")

    def test_empty_session(self):
        """A new session has no findings and zero stats."""
        session = ReviewSession("develop")
        stats = session.stats()

        assert session.findings == ()
        assert stats.total_issues == 0
        assert stats.total_files == 0

    def test_by_severity_covers_all_levels(self):
        """Every severity is a key even when empty."""
        session = ReviewSession("develop")
        session.extend([self.finding(Severity.ERROR), self.finding(Severity.ERROR, 2)])

        grouped = session.by_severity()
        assert list(grouped) == [Severity.ERROR, Severity.WARNING, Severity.INFO]
        assert len(grouped[Severity.ERROR]) == 2
        assert grouped[Severity.INFO] == []

    def test_stats(self):
        """Counts add up to the total."""
        session = ReviewSession("develop", eligible_files=["a.ts", "b.ts"])
        session.extend([
            self.finding(Severity.ERROR),
            self.finding(Severity.WARNING),
            self.finding(Severity.WARNING),
            self.finding(Severity.INFO),
        ])
        stats = session.stats()

        assert (stats.errors, stats.warnings, stats.info) == (1, 2, 1)
        assert stats.total_issues == 4
        assert stats.total_files == 2

    def test_concurrent_extend(self):
        """Extending from many threads loses nothing."""
        session = ReviewSession("develop")

        def worker():
            for i in range(100):
                session.extend([self.finding(Severity.INFO, i)])

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(session.findings) == 800


class TestReviewServiceRun:
    """Test full runs against files on disk with a mocked change set."""

    def test_single_any_annotation(self, tmp_path, sample_ts_any):
        """One any annotation in one changed file gives one error."""
        write_files(tmp_path, {"src/x.ts": sample_ts_any})
        service = make_service(tmp_path, ["src/x.ts"])

        session = service.run("develop")
        stats = session.stats()

        assert [(f.file, f.line, f.rule) for f in session.findings] == [("src/x.ts", 1, "no-any")]
        assert (stats.errors, stats.warnings, stats.info) == (1, 0, 0)
        assert stats.total_files == 1
        service.git_service.changed_files.assert_called_once_with("develop")

    def test_empty_change_set(self, tmp_path):
        """No changed files means no findings and zero stats."""
        service = make_service(tmp_path, [])

        session = service.run("develop")

        assert session.findings == ()
        assert session.stats().total_files == 0
        assert session.stats().total_issues == 0

    def test_ineligible_files_not_read(self, tmp_path):
        """Files outside the reviewable set are ignored."""
        write_files(tmp_path, {
            "styles/site.css": "a { color: red; }  \n",
            "node_modules/pkg/index.ts": "const x: any = 1;\n",
        })
        service = make_service(tmp_path, ["styles/site.css", "node_modules/pkg/index.ts"])

        session = service.run("develop")

        assert session.changed_files == ["styles/site.css", "node_modules/pkg/index.ts"]
        assert session.eligible_files == []
        assert session.findings == ()

    def test_deleted_file_skipped(self, tmp_path, sample_ts_any):
        """Files listed by git but missing on disk are skipped."""
        write_files(tmp_path, {"src/kept.ts": sample_ts_any})
        service = make_service(tmp_path, ["src/removed.ts", "src/kept.ts"])

        session = service.run("develop")

        assert {f.file for f in session.findings} == {"src/kept.ts"}
        assert session.stats().total_files == 2

    def test_parse_failure_keeps_line_findings(self, tmp_path, sample_ts_broken):
        """A file that fails to parse still gets its line findings."""
        write_files(tmp_path, {"src/broken.ts": sample_ts_broken})
        service = make_service(tmp_path, ["src/broken.ts"])

        session = service.run("develop")
        rules = [f.rule for f in session.findings]

        assert "no-console" in rules
        assert "cyclomatic-complexity" not in rules
        assert "max-lines-per-function" not in rules

    def test_structural_findings_included(self, tmp_path, make_branchy_function):
        """Structural findings come through the full pipeline."""
        write_files(tmp_path, {"lib/branchy.ts": make_branchy_function("branchy", 12)})
        service = make_service(tmp_path, ["lib/branchy.ts"])

        session = service.run("develop")

        assert [(f.rule, f.line) for f in session.findings] == [("cyclomatic-complexity", 1)]

    def test_parallel_matches_sequential(self, tmp_path, sample_ts_any, sample_tsx_component):
        """Worker count does not change the set of findings."""
        files = {
            "src/a.ts": sample_ts_any,
            "pages/index.tsx": sample_tsx_component,
            "src/c.ts": "console.log('x');  \n// TODO: remove\n",
            "src/d.ts": "import a from 'x';\nimport b from 'x';\n",
        }
        write_files(tmp_path, files)

        sequential = make_service(tmp_path, list(files)).run("develop")
        parallel = make_service(tmp_path, list(files), max_workers=4).run("develop")

        assert set(sequential.findings) == set(parallel.findings)
        assert len(sequential.findings) == len(parallel.findings)

    def test_change_set_error_propagates(self, tmp_path):
        """Failure to resolve the change set aborts the run."""
        git_service = MagicMock()
        git_service.changed_files.side_effect = ChangeSetError("bad ref")
        service = ReviewService(tmp_path, git_service=git_service)

        with pytest.raises(ChangeSetError):
            service.run("no-such-branch")

    def test_invalid_utf8_is_replaced(self, tmp_path):
        """Undecodable bytes do not abort the review."""
        path = tmp_path / "src" / "bin.ts"
        path.parent.mkdir(parents=True)
        path.write_bytes(b"const s = '\xff';\nconsole.log(s);\n")
        service = make_service(tmp_path, ["src/bin.ts"])

        session = service.run("develop")

        assert [(f.rule, f.line) for f in session.findings] == [("no-console", 2)]
