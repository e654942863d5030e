"""
Tokenizer tests.

Validates token types, values and positions, including the INDENT and
DEDENT tokens derived from block indentation.
"""

import pytest

from jecs import JecsLexer
from jecs import SourcePosition
from jecs import TokenType


def token_types(text: str) -> list[TokenType]:
    return [token.type for token in JecsLexer(text).tokenize()]


def test_simple_entry() -> None:
    tokens = list(JecsLexer("a: 1\n").tokenize())

    assert [(t.type, t.value) for t in tokens] == [
        (TokenType.KEY, "a"),
        (TokenType.COLON, None),
        (TokenType.NUMBER, "1"),
        (TokenType.NEWLINE, None),
        (TokenType.EOF, None),
    ]
    assert [t.position.column for t in tokens] == [1, 2, 4, 5, 1]
    assert tokens[-1].position == SourcePosition(2, 1, 5, 5)


def test_indentation_tokens() -> None:
    assert token_types("a:\n  b: 1\n  c:\n    - x\nd: 2\n") == [
        TokenType.KEY,
        TokenType.COLON,
        TokenType.NEWLINE,
        TokenType.INDENT,
        TokenType.KEY,
        TokenType.COLON,
        TokenType.NUMBER,
        TokenType.NEWLINE,
        TokenType.KEY,
        TokenType.COLON,
        TokenType.NEWLINE,
        TokenType.INDENT,
        TokenType.DASH,
        TokenType.BARE,
        TokenType.NEWLINE,
        TokenType.DEDENT,
        TokenType.DEDENT,
        TokenType.KEY,
        TokenType.COLON,
        TokenType.NUMBER,
        TokenType.NEWLINE,
        TokenType.EOF,
    ]


def test_dedents_at_end_of_input() -> None:
    assert token_types("a:\n  b:\n    c: 1")[-3:] == [
        TokenType.DEDENT,
        TokenType.DEDENT,
        TokenType.EOF,
    ]


@pytest.mark.parametrize(
    "value,expected_type",
    [
        ("true", TokenType.TRUE),
        ("false", TokenType.FALSE),
        ("null", TokenType.NULL),
        ("True", TokenType.BARE),
        ("nulls", TokenType.BARE),
        ("12", TokenType.NUMBER),
        ("-0.25", TokenType.NUMBER),
        ("+3", TokenType.NUMBER),
        ("1e5", TokenType.BARE),
        ("1.2.3", TokenType.BARE),
        ("\uff11", TokenType.BARE),
        ('"true"', TokenType.STRING),
    ],
)
def test_scalar_classification(value: str, expected_type: TokenType) -> None:
    """
    Validates keywords and numbers are recognized by exact spelling only.
    """
    tokens = list(JecsLexer(f"a: {value}").tokenize())
    assert tokens[2].type is expected_type


def test_inline_collection_tokens() -> None:
    tokens = list(JecsLexer('a: {b: [1, "x"], c: d e}').tokenize())

    assert [(t.type, t.value) for t in tokens[2:-2]] == [
        (TokenType.LBRACE, None),
        (TokenType.BARE, "b"),
        (TokenType.COLON, None),
        (TokenType.LBRACKET, None),
        (TokenType.NUMBER, "1"),
        (TokenType.COMMA, None),
        (TokenType.STRING, "x"),
        (TokenType.RBRACKET, None),
        (TokenType.COMMA, None),
        (TokenType.BARE, "c"),
        (TokenType.COLON, None),
        (TokenType.BARE, "d e"),
        (TokenType.RBRACE, None),
    ]


def test_inline_collection_spans_lines() -> None:
    """
    Validates newlines and comments inside braces are whitespace.
    """
    types = token_types("a: [\n  1, # one\n\n  2\n]\nb: 3\n")

    assert types.count(TokenType.NEWLINE) == 2
    assert TokenType.INDENT not in types


def test_unterminated_inline_collection_ends_stream() -> None:
    tokens = list(JecsLexer("a: [1,\n").tokenize())

    assert tokens[-1].type is TokenType.EOF
    assert tokens[-1].position == SourcePosition(2, 1, 7, 7)


def test_trailing_text_becomes_bare_token() -> None:
    assert token_types('a: "x" y # c') == [
        TokenType.KEY,
        TokenType.COLON,
        TokenType.STRING,
        TokenType.BARE,
        TokenType.NEWLINE,
        TokenType.EOF,
    ]


def test_line_without_colon_is_scalar() -> None:
    tokens = list(JecsLexer("hello \\# world # c\n7\n").tokenize())

    assert [(t.type, t.value) for t in tokens] == [
        (TokenType.BARE, "hello # world"),
        (TokenType.NEWLINE, None),
        (TokenType.NUMBER, "7"),
        (TokenType.NEWLINE, None),
        (TokenType.EOF, None),
    ]


def test_multiline_string_token() -> None:
    tokens = list(JecsLexer('a: """\n  one\n  two\n  """\n').tokenize())

    assert tokens[2].type is TokenType.STRING
    assert tokens[2].value == "one\ntwo"
    assert tokens[2].position.column == 4


def test_byte_offsets_follow_utf8_width() -> None:
    tokens = list(JecsLexer("\u00e9: \u540d x", byte_base=3).tokenize())

    assert [t.position.offset for t in tokens[:3]] == [3, 5, 7]
    assert [t.position.index for t in tokens[:3]] == [0, 1, 3]
    assert tokens[2].value == "\u540d x"


def test_tokenize_restarts() -> None:
    """
    Validates each tokenize call scans the text from the beginning.
    """
    lexer = JecsLexer("a:\n  - 1\n")
    first = list(lexer.tokenize())
    second = list(lexer.tokenize())

    assert first == second
    assert lexer.indent_stack == [0]
