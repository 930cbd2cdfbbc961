"""Command line entry point: ``nextjs-review [PROJECT_PATH] [BASE_BRANCH]``."""

import logging
from pathlib import Path
from typing import Optional

import typer

from nextjs_reviewer.config import get_settings
from nextjs_reviewer.schemas.review import ReviewMetadata
from nextjs_reviewer.services.git_service import ChangeSetError
from nextjs_reviewer.services.report_service import ReportService
from nextjs_reviewer.services.review_service import ReviewService

logger = logging.getLogger(__name__)

app = typer.Typer(help="Review files changed on the current branch of a Next.js project")


def resolve_arguments(
    first: Optional[str],
    second: Optional[str],
    default_branch: str,
) -> tuple[Path, str]:
    """
    Interpret the positional arguments.

    One argument is a project path if it looks like a path or exists on disk,
    otherwise a base branch. Two arguments are path and branch.
    """
    if first is None:
        return Path.cwd(), default_branch
    if second is not None:
        return Path(first), second
    if "/" in first or "\\" in first or Path(first).exists():
        return Path(first), default_branch
    return Path.cwd(), first


@app.command()
def review(
    project_path: Optional[str] = typer.Argument(None, help="Project directory or base branch"),
    base_branch: Optional[str] = typer.Argument(None, help="Branch to compare against"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Report directory"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", min=1, help="Parallel file reviews"),
) -> None:
    """Review changed .ts/.tsx/.js/.jsx files and write a Markdown report."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    project_root, base = resolve_arguments(project_path, base_branch, settings.base_branch)
    project_root = project_root.resolve()
    logger.info(f"Starting review of {project_root} against {base}")

    service = ReviewService(project_root, max_workers=workers or settings.max_workers)
    try:
        session = service.run(base)
    except ChangeSetError as e:
        logger.error(
            f"Could not list changed files. Check that {project_root} is a git repository "
            f"and that '{base}' exists. {e}"
        )
        raise typer.Exit(code=1)

    metadata = ReviewMetadata(
        base_branch=base,
        current_branch=service.git_service.current_branch(),
        eligible_files=len(session.eligible_files),
    )
    report_path = ReportService().write(
        session.findings,
        metadata,
        output_dir or settings.output_dir,
    )

    stats = session.stats()
    typer.echo(
        f"{stats.total_issues} issues ({stats.errors} errors, {stats.warnings} warnings, "
        f"{stats.info} info) in {stats.total_files} files"
    )
    typer.echo(f"Report written to {report_path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
