"""Turns source text into a list of tokens."""

from __future__ import annotations

from .errors import KaoriError
from .span import Span
from .tokens import Token, TokenKind

_DIGITS = "0123456789"

_KEYWORDS = {
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "while": TokenKind.WHILE,
    "for": TokenKind.FOR,
    "break": TokenKind.BREAK,
    "continue": TokenKind.CONTINUE,
    "return": TokenKind.RETURN,
    "def": TokenKind.FUNCTION,
    "struct": TokenKind.STRUCT,
    "print": TokenKind.PRINT,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "bool": TokenKind.BOOL,
    "number": TokenKind.NUMBER,
}

_TWO_CHAR_SYMBOLS = {
    "++": TokenKind.INCREMENT,
    "--": TokenKind.DECREMENT,
    "->": TokenKind.THIN_ARROW,
    "&&": TokenKind.AND,
    "||": TokenKind.OR,
    "!=": TokenKind.NOT_EQUAL,
    "==": TokenKind.EQUAL,
    ">=": TokenKind.GREATER_EQUAL,
    "<=": TokenKind.LESS_EQUAL,
}

_ONE_CHAR_SYMBOLS = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.MULTIPLY,
    "/": TokenKind.DIVIDE,
    "%": TokenKind.MODULO,
    "!": TokenKind.NOT,
    "=": TokenKind.ASSIGN,
    ">": TokenKind.GREATER,
    "<": TokenKind.LESS,
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    ":": TokenKind.COLON,
}


class Lexer:
    """Scans a source string into tokens, ending with an end-of-file token."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._position = 0
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Scan the whole source; raise KaoriError on an invalid token."""
        self._position = 0
        self._tokens = []

        while not self._at_end():
            self._next_token()

        eof_at = max(self._position - 1, 0)
        self._tokens.append(Token(TokenKind.END_OF_FILE, Span(eof_at, eof_at)))
        return self._tokens

    def _at_end(self) -> bool:
        return self._position >= len(self._source)

    def _push(self, kind: TokenKind, start: int) -> None:
        self._tokens.append(Token(kind, Span(start, self._position)))

    def _next_token(self) -> None:
        char = self._source[self._position]

        if char == '"':
            self._string_literal()
        elif self._source.startswith("/*", self._position):
            self._multiline_comment()
        elif self._source.startswith("//", self._position):
            self._line_comment()
        elif char.isalpha():
            self._identifier_or_keyword()
        elif char in _DIGITS:
            self._number_literal()
        elif char.isspace():
            self._white_space()
        else:
            self._symbol()

    def _white_space(self) -> None:
        while not self._at_end() and self._source[self._position].isspace():
            self._position += 1

    def _multiline_comment(self) -> None:
        close = self._source.find("*/", self._position + 2)
        self._position = (len(self._source) if close == -1 else close) + 2

    def _line_comment(self) -> None:
        newline = self._source.find("\n", self._position + 2)
        self._position = (len(self._source) if newline == -1 else newline) + 1

    def _identifier_or_keyword(self) -> None:
        start = self._position
        while not self._at_end() and (
            self._source[self._position].isalnum() or self._source[self._position] == "_"
        ):
            self._position += 1

        word = self._source[start : self._position]
        self._push(_KEYWORDS.get(word, TokenKind.IDENTIFIER), start)

    def _skip_digits(self) -> None:
        while not self._at_end() and self._source[self._position] in _DIGITS:
            self._position += 1

    def _number_literal(self) -> None:
        start = self._position
        self._skip_digits()
        if not self._at_end() and self._source[self._position] == ".":
            self._position += 1
        self._skip_digits()
        self._push(TokenKind.NUMBER_LITERAL, start)

    def _string_literal(self) -> None:
        start = self._position
        closing = self._source.find('"', start + 1)

        if closing == -1:
            self._position = len(self._source)
            raise KaoriError(
                Span(start, self._position), "invalid unfinished string literal"
            )

        self._position = closing + 1
        self._push(TokenKind.STRING_LITERAL, start)

    def _symbol(self) -> None:
        start = self._position
        pair = self._source[start : start + 2]

        if pair in _TWO_CHAR_SYMBOLS:
            kind = _TWO_CHAR_SYMBOLS[pair]
            self._position += 2
        else:
            char = self._source[start]
            kind = _ONE_CHAR_SYMBOLS.get(char, TokenKind.INVALID)
            if kind is TokenKind.INVALID:
                raise KaoriError(Span(start, start), f"{char} is not a valid token")
            self._position += 1

        self._push(kind, start)


def tokenize(source: str) -> list[Token]:
    """Scan ``source`` into tokens."""
    return Lexer(source).tokenize()