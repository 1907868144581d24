import pytest

from gcfg.token import Token


@pytest.mark.parametrize(
    "tok, text",
    [
        (Token.ASSIGN, "="),
        (Token.LBRACK, "["),
        (Token.RBRACK, "]"),
        (Token.EOL, "\n"),
        (Token.IDENT, "IDENT"),
        (Token.STRING, "STRING"),
        (Token.EOF, "EOF"),
        (Token.COMMENT, "COMMENT"),
        (Token.ILLEGAL, "ILLEGAL"),
    ],
)
def test_token_text(tok, text):
    assert str(tok) == text


def test_literal_tokens():
    assert Token.IDENT.is_literal() is True
    assert Token.STRING.is_literal() is True
    assert Token.ASSIGN.is_literal() is False
    assert Token.EOL.is_literal() is False


def test_operator_tokens():
    assert Token.ASSIGN.is_operator() is True
    assert Token.LBRACK.is_operator() is True
    assert Token.RBRACK.is_operator() is True
    assert Token.EOL.is_operator() is True
    assert Token.IDENT.is_operator() is False


@pytest.mark.parametrize("tok", [Token.ILLEGAL, Token.EOF, Token.COMMENT])
def test_special_tokens_are_neither(tok):
    assert not tok.is_literal()
    assert not tok.is_operator()


@pytest.mark.parametrize(
    "tok, literal, operator",
    [
        (Token.ILLEGAL, False, False),
        (Token.EOF, False, False),
        (Token.COMMENT, False, False),
        (Token.IDENT, True, False),
        (Token.STRING, True, False),
        (Token.ASSIGN, False, True),
        (Token.LBRACK, False, True),
        (Token.RBRACK, False, True),
        (Token.EOL, False, True),
    ],
)
def test_literal_and_operator_classes(tok, literal, operator):
    assert tok.is_literal() is literal
    assert tok.is_operator() is operator