"""A cursor over the lexer's tokens, used by the parser."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .errors import KaoriError
from .span import Span
from .tokens import Token, TokenKind


class TokenStream:
    """Cursor over tokens that knows the source they came from."""

    def __init__(self, source: str, tokens: Iterable[Token]) -> None:
        self._source = source
        self._tokens = list(tokens)
        self._index = 0

    @property
    def token_kind(self) -> TokenKind:
        """Kind of the current token."""
        return self._tokens[self._index].kind

    @property
    def span(self) -> Span:
        """Span of the current token."""
        return self._tokens[self._index].span

    @property
    def lexeme(self) -> str:
        """Source text of the current token."""
        span = self.span
        return self._source[span.start : span.end]

    def at_end(self) -> bool:
        """Whether the current token is the end of the file."""
        return self.token_kind is TokenKind.END_OF_FILE

    def advance(self) -> None:
        """Move to the next token."""
        self._index += 1

    def consume(self, expected: TokenKind) -> None:
        """Step past the current token if it is ``expected``; raise otherwise."""
        found = self.token_kind
        if found is not expected:
            raise KaoriError(self.span, f"expected {expected}, but found {found}")
        self.advance()

    def look_ahead(self, expected: Sequence[TokenKind]) -> bool:
        """Whether the next tokens, from the current one on, have these kinds."""
        window = self._tokens[self._index : self._index + len(expected)]
        return len(window) == len(expected) and all(
            token.kind is kind for token, kind in zip(window, expected)
        )