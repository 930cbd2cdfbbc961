"""Schemas for review run metadata and statistics."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class ReviewStats(BaseModel):
    """Finding counts for a review run."""

    total_files: int = Field(default=0, ge=0, description="Eligible changed files")
    total_issues: int = Field(default=0, ge=0)
    errors: int = Field(default=0, ge=0)
    warnings: int = Field(default=0, ge=0)
    info: int = Field(default=0, ge=0)


class ReviewMetadata(BaseModel):
    """Run metadata printed in the report header."""

    base_branch: str
    current_branch: str = "unknown"
    eligible_files: int = Field(default=0, ge=0)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
