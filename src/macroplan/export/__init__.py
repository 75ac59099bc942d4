"""Output formatters, grocery lists and plan serialization."""

from macroplan.export.formatters import JSONFormatter, MarkdownFormatter, TableFormatter

__all__ = ["TableFormatter", "JSONFormatter", "MarkdownFormatter"]
