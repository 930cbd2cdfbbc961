"""Analyzer registry."""

from nextjs_reviewer.analyzers.base import Analyzer, Category, FileRecord, Finding, Severity
from nextjs_reviewer.analyzers.import_analyzer import DuplicateImportAnalyzer
from nextjs_reviewer.analyzers.line_analyzer import LineAnalyzer
from nextjs_reviewer.analyzers.react_analyzer import ReactAnalyzer
from nextjs_reviewer.analyzers.structure_analyzer import StructureAnalyzer

__all__ = [
    "Analyzer",
    "Category",
    "FileRecord",
    "Finding",
    "Severity",
    "DuplicateImportAnalyzer",
    "LineAnalyzer",
    "ReactAnalyzer",
    "StructureAnalyzer",
]
