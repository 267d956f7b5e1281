import pytest

from kaori.errors import KaoriError
from kaori.lexer import tokenize
from kaori.token_stream import TokenStream
from kaori.tokens import TokenKind


def stream(source):
    return TokenStream(source, tokenize(source))


def test_walks_through_declaration():
    ts = stream("x : number")
    assert ts.token_kind is TokenKind.IDENTIFIER
    assert ts.lexeme == "x"
    ts.advance()
    ts.consume(TokenKind.COLON)
    assert not ts.at_end()
    assert ts.lexeme == "number"
    ts.consume(TokenKind.NUMBER)
    assert ts.at_end()


def test_consume_mismatch_reports_expected_and_found():
    ts = stream("x")
    with pytest.raises(KaoriError) as caught:
        ts.consume(TokenKind.SEMICOLON)
    assert caught.value.message == "expected ;, but found identifier"
    assert caught.value.span == ts.span


def test_failed_consume_does_not_advance():
    ts = stream("x y")
    with pytest.raises(KaoriError):
        ts.consume(TokenKind.COMMA)
    assert ts.token_kind is TokenKind.IDENTIFIER
    assert ts.lexeme == "x"


def test_look_ahead_matches_sequence():
    assert stream("a = 1").look_ahead([TokenKind.IDENTIFIER, TokenKind.ASSIGN])
    assert not stream("a + 1").look_ahead([TokenKind.IDENTIFIER, TokenKind.ASSIGN])


def test_look_ahead_past_end_is_false():
    ts = stream("a")
    assert not ts.look_ahead(
        [TokenKind.IDENTIFIER, TokenKind.END_OF_FILE, TokenKind.SEMICOLON]
    )


def test_look_ahead_with_nothing_is_true():
    assert stream("").look_ahead([]) is True


def test_look_ahead_starts_at_current_token():
    ts = stream("a : b")
    ts.advance()
    assert ts.look_ahead([TokenKind.COLON, TokenKind.IDENTIFIER])
    assert not ts.look_ahead([TokenKind.IDENTIFIER])


def test_empty_source_is_at_end():
    ts = stream("")
    assert ts.at_end()
    assert ts.token_kind is TokenKind.END_OF_FILE