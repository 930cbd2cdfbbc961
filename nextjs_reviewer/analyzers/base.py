"""Base analyzer interfaces for changed-file reviews."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Severity(str, Enum):
    """Finding severity levels, in report order."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Category(str, Enum):
    """Rule categories used to group the rule catalogue."""

    TYPESCRIPT = "typescript"
    REACT_NEXTJS = "react-nextjs"
    CODE_QUALITY = "code-quality"


@dataclass(frozen=True)
class Finding:
    """One deviation from a rule, located at a file and line."""

    file: str
    line: int
    severity: Severity
    rule: str
    message: str
    column: Optional[int] = None


@dataclass(frozen=True)
class FileRecord:
    """Content of one eligible file, read once per run."""

    path: str
    content: str

    @property
    def lines(self) -> list[str]:
        return self.content.split("\n")


class Analyzer:
    """Base class for analyzers."""

    name: str = "base"

    def analyze(self, record: FileRecord) -> list[Finding]:
        raise NotImplementedError
