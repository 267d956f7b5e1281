"""Positions of tokens and nodes in the source text."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    """Half-open range of character offsets into the source text."""

    start: int = 0
    end: int = 0

    def merge(self, other: Span) -> Span:
        """Return the span from the start of this span to the end of ``other``."""
        return Span(self.start, other.end)