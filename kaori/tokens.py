"""Token kinds and tokens produced by the lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .span import Span


class TokenKind(Enum):
    """Kind of a lexical token; ``str()`` gives its spelling."""

    def __new__(cls, display: str) -> TokenKind:
        member = object.__new__(cls)
        member._value_ = len(cls.__members__)
        member._display = display
        return member

    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    MODULO = "%"

    INCREMENT = "++"
    DECREMENT = "--"

    AND = "&&"
    OR = "||"
    NOT = "!"
    NOT_EQUAL = "!="
    EQUAL = "=="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="

    ASSIGN = "="
    COMMA = ","
    SEMICOLON = ";"
    COLON = ":"
    THIN_ARROW = "->"

    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"

    FUNCTION = "def"
    FOR = "for"
    WHILE = "while"
    BREAK = "break"
    CONTINUE = "continue"
    IF = "if"
    ELSE = "else"
    RETURN = "return"
    STRUCT = "struct"
    PRINT = "print"
    TRUE = "true"
    FALSE = "false"
    BOOL = "bool"
    NUMBER = "number"

    IDENTIFIER = "identifier"
    STRING_LITERAL = "string"
    NUMBER_LITERAL = "number"

    INVALID = "invalid"
    END_OF_FILE = "EOF"

    def __str__(self) -> str:
        return self._display


@dataclass(frozen=True)
class Token:
    """A token kind together with where it sits in the source."""

    kind: TokenKind
    span: Span