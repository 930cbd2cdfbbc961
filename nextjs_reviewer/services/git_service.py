"""Service for resolving the set of files changed on the current branch."""

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class ChangeSetError(Exception):
    """The changed-file set could not be determined."""
    pass


class GitService:
    """Thin wrapper over the git commands the review needs."""

    GIT_TIMEOUT = 60  # seconds

    def __init__(self, repo_path: str | Path):
        self.repo_path = Path(repo_path)

    def _run_git(self, *args: str) -> str:
        """Run a git command against the repository and return its stdout."""
        cmd = ["git", "-C", str(self.repo_path), *args]
        try:
            process = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.GIT_TIMEOUT,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise ChangeSetError(f"Git command failed: {' '.join(args)}: {e}") from e

        if process.returncode != 0:
            message = (process.stderr or process.stdout or "unknown git error").strip()
            raise ChangeSetError(f"Git command failed: {' '.join(args)}\n{message[:500]}")
        return process.stdout

    def merge_base(self, base_ref: str) -> str:
        """Return the merge-base commit of HEAD and ``base_ref``."""
        sha = self._run_git("merge-base", "HEAD", base_ref).strip()
        if not sha:
            raise ChangeSetError(f"No merge base between HEAD and {base_ref}")
        return sha

    def changed_files(self, base_ref: str) -> list[str]:
        """
        List files changed since the merge point with ``base_ref``.

        Args:
            base_ref: Branch or commit to compare against

        Returns:
            Relative file paths in git's order

        Raises:
            ChangeSetError: If the repository or base reference is unusable
        """
        merge_base = self.merge_base(base_ref)
        diff = self._run_git("diff", "--name-only", f"{merge_base}...HEAD")
        files = [line.strip() for line in diff.splitlines() if line.strip()]
        logger.info(f"Found {len(files)} changed files since {merge_base[:8]} ({base_ref})")
        return files

    def current_branch(self) -> str:
        """Name of the checked-out branch, or ``unknown`` outside a repository."""
        try:
            return self._run_git("rev-parse", "--abbrev-ref", "HEAD").strip() or "unknown"
        except ChangeSetError as e:
            logger.debug(f"Could not resolve current branch: {e}")
            return "unknown"
