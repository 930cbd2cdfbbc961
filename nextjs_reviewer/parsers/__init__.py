"""Source parsers."""

from nextjs_reviewer.parsers.typescript_parser import ParseError, TypeScriptParser

__all__ = ["ParseError", "TypeScriptParser"]
