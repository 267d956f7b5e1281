"""The error raised by every stage of the compiler."""

from __future__ import annotations

import sys

from .span import Span


class KaoriError(Exception):
    """A diagnostic tied to a span of the source text."""

    def __init__(self, span: Span, message: str) -> None:
        super().__init__(message)
        self.span = span
        self.message = message

    def report(self, source: str) -> None:
        """Print the diagnostic with the offending source line underlined."""
        print(self._render(source), file=sys.stdout)

    def _render(self, source: str) -> str:
        start = min(max(self.span.start, 0), len(source))
        line_start = source.rfind("\n", 0, start) + 1
        line_end = source.find("\n", start)
        if line_end == -1:
            line_end = len(source)

        line_number = source.count("\n", 0, line_start) + 1
        column = start - line_start + 1
        text = source[line_start:line_end]
        width = max(1, min(self.span.end, line_end) - start)
        gutter = " " * len(str(line_number))

        return "\n".join(
            [
                f"Error: {self.message}",
                f"{gutter}--> source:{line_number}:{column}",
                f"{gutter} |",
                f"{line_number} | {text}",
                f"{gutter} | {' ' * (column - 1)}{'^' * width} {self.message}",
            ]
        )