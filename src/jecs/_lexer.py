"""
Tokenizer for JECS documents.

Block structure is expressed through indentation, which the lexer turns
into INDENT and DEDENT tokens the way Python's tokenizer does. Inline
collections written with braces and brackets may span several lines;
while one is open, newlines and comments are plain whitespace.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ._errors import ErrorKind
from ._errors import JecsDecodeError
from ._errors import SourcePosition
from ._profile import ProfileContext


class TokenType(Enum):
    """Token categories produced by the lexer."""

    # Entries
    KEY = "key"
    COLON = "':'"
    DASH = "'-'"

    # Literals
    STRING = "string"
    BARE = "bare value"
    NUMBER = "number"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"

    # Inline collections
    LBRACE = "'{'"
    RBRACE = "'}'"
    LBRACKET = "'['"
    RBRACKET = "']'"
    COMMA = "','"

    # Layout
    NEWLINE = "end of line"
    INDENT = "indent"
    DEDENT = "dedent"
    EOF = "end of input"


SCALAR_TYPES = frozenset(
    {
        TokenType.STRING,
        TokenType.BARE,
        TokenType.NUMBER,
        TokenType.TRUE,
        TokenType.FALSE,
        TokenType.NULL,
    }
)

_KEYWORDS = {
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "null": TokenType.NULL,
}

_PUNCTUATION = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
}

_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "#": "#",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

# ASCII digits only, no exponent
_NUMBER = re.compile(r"[+-]?[0-9]+(?:\.[0-9]+)?")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

_LINE_END = "\r\n"
_BLOCK_STOP = "#\r\n"
_FLOW_STOP = ",:[]{}#\r\n"
_MULTILINE_QUOTE = '"""'


@dataclass(frozen=True)
class JecsToken:
    """
    A lexical unit with the position of its first character.

    The value holds decoded text for keys and strings, the source spelling
    for other scalars and None for punctuation and layout tokens.
    """

    type: TokenType
    value: Any
    position: SourcePosition


class JecsLexer:
    """
    Scans decoded JECS text into a lazy token stream.

    Line and column counters advance with every consumed character; the
    byte offset advances by the character's UTF-8 width, starting from
    the number of bytes the normalizer dropped in front of the text.
    """

    def __init__(self, text: str, byte_base: int = 0):
        self.text = text
        self.length = len(text)
        self.byte_base = byte_base
        self._reset()

    def _reset(self) -> None:
        self.pos = 0
        self.line = 1
        self.col = 1
        self.offset = self.byte_base
        self.indent_stack = [0]
        self.flow_depth = 0

    def position(self) -> SourcePosition:
        """Returns the position of the current character."""
        return SourcePosition(self.line, self.col, self.pos, self.offset)

    def error(
        self,
        message: str,
        position: SourcePosition | None = None,
        kind: ErrorKind = ErrorKind.LEX_ERROR,
    ) -> JecsDecodeError:
        return JecsDecodeError(kind, message, position or self.position())

    def at_end(self) -> bool:
        return self.pos >= self.length

    def peek(self, ahead: int = 0) -> str:
        """Returns a character without advancing, NUL past the end."""
        pos = self.pos + ahead
        return self.text[pos] if pos < self.length else "\0"

    def advance(self) -> str:
        """Returns current character and advances position."""
        ch = self.text[self.pos]
        self.pos += 1
        if ch == "\n" or (ch == "\r" and self.peek() != "\n"):
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        self.offset += 1 if ch < "\x80" else len(ch.encode("utf-8"))
        return ch

    def at_line_end(self) -> bool:
        return self.at_end() or self.text[self.pos] in _LINE_END

    def skip_spaces(self) -> None:
        while not self.at_end() and self.text[self.pos] in " \t":
            self.advance()

    def skip_comment(self) -> None:
        if self.peek() == "#":
            while not self.at_line_end():
                self.advance()

    def skip_newline(self) -> None:
        if self.advance() == "\r" and self.peek() == "\n":
            self.advance()

    def tokenize(self) -> Iterator[JecsToken]:
        """
        Yields the tokens of the whole document, ending with EOF.

        Each call starts over from the first character. Scanning stops at
        the first character no token rule accepts.
        """
        self._reset()
        while True:
            indent = self._next_entry_line()
            if indent is None:
                break
            yield from self._indentation_tokens(indent)
            yield from self._scan_entry()
            if self.flow_depth:
                # An inline collection is still open at end of input
                yield JecsToken(TokenType.EOF, None, self.position())
                return
            yield from self._finish_line()

        end = self.position()
        while len(self.indent_stack) > 1:
            self.indent_stack.pop()
            yield JecsToken(TokenType.DEDENT, None, end)
        yield JecsToken(TokenType.EOF, None, end)

    def _next_entry_line(self) -> int | None:
        """
        Skips blank and comment lines, returns the next line's indentation.

        Leaves the position on the first character of the entry, or
        returns None once the input is exhausted.
        """
        while True:
            indent = 0
            while self.peek() == " ":
                self.advance()
                indent += 1

            if self.peek() == "\t":
                if not self._rest_is_blank():
                    raise self.error("Tabs are not allowed in indentation")
                self.skip_spaces()

            if self.at_end():
                return None
            self.skip_comment()
            if self.at_line_end():
                if self.at_end():
                    return None
                self.skip_newline()
                continue
            return indent

    def _rest_is_blank(self) -> bool:
        pos = self.pos
        while pos < self.length and self.text[pos] in " \t":
            pos += 1
        return pos >= self.length or self.text[pos] in "#\r\n"

    def _indentation_tokens(self, indent: int) -> list[JecsToken]:
        current = self.indent_stack[-1]
        position = self.position()
        if indent > current:
            self.indent_stack.append(indent)
            return [JecsToken(TokenType.INDENT, None, position)]

        if indent < current:
            if indent not in self.indent_stack:
                raise self.error(
                    f"Wrongly indented entry, indentation {indent} does not "
                    "match any enclosing level",
                    position,
                    ErrorKind.BAD_INDENTATION,
                )
            tokens = []
            while self.indent_stack[-1] > indent:
                self.indent_stack.pop()
                tokens.append(JecsToken(TokenType.DEDENT, None, position))
            return tokens

        return []

    def _scan_entry(self) -> Iterator[JecsToken]:
        """Scans a map entry, a list entry or an inline root collection."""
        ch = self.peek()
        start = self.position()

        if ch in "{[":
            yield from self._scan_flow()
            return

        if ch == "-":
            self.advance()
            yield JecsToken(TokenType.DASH, None, start)
            yield from self._scan_block_value()
            return

        if ch == ":":
            raise self.error("Line has no key, encountered ':'")

        if ch == '"':
            token = self._scan_quoted()
            self.skip_spaces()
            if self.peek() != ":":
                yield token
                return
            key = token.value
        elif not self._line_has_colon():
            # A key-less line is a lone scalar for the parser to reject
            yield self._scan_bare(_BLOCK_STOP)
            return
        else:
            key = self._scan_key()

        yield JecsToken(TokenType.KEY, key, start)
        yield JecsToken(TokenType.COLON, None, self.position())
        self.advance()
        yield from self._scan_block_value()

    def _line_has_colon(self) -> bool:
        end = self.pos
        while end < self.length and self.text[end] not in _LINE_END:
            end += 1
        return self.text.find(":", self.pos, end) != -1

    def _scan_key(self) -> str:
        with ProfileContext("scan_key"):
            start = self.pos
            while self.peek() != ":":
                ch = self.peek()
                if ch == "#":
                    raise self.error("Key may not contain a '#' character")
                self._check_control(ch)
                self.advance()
            return self.text[start : self.pos].rstrip(" \t")

    def _scan_block_value(self) -> Iterator[JecsToken]:
        """Scans the value following ':' or '-', if the line holds one."""
        self.skip_spaces()
        if self.at_line_end() or self.peek() == "#":
            return

        ch = self.peek()
        if ch == '"':
            if self.text.startswith(_MULTILINE_QUOTE, self.pos):
                yield self._scan_multiline()
            else:
                yield self._scan_quoted()
        elif ch in "{[":
            yield from self._scan_flow()
        else:
            yield self._scan_bare(_BLOCK_STOP)

    def _finish_line(self) -> Iterator[JecsToken]:
        """
        Ends a block line with a NEWLINE token.

        Anything but a comment left after the value is handed to the
        parser as a bare token so that it can report the stray text.
        """
        self.skip_spaces()
        if not self.at_line_end() and self.peek() != "#":
            yield self._scan_bare(_BLOCK_STOP)
        self.skip_comment()
        yield JecsToken(TokenType.NEWLINE, None, self.position())
        if not self.at_end():
            self.skip_newline()

    def _scan_flow(self) -> Iterator[JecsToken]:
        """Scans an inline collection up to its matching closing bracket."""
        with ProfileContext("scan_flow"):
            while True:
                self._skip_flow_whitespace()
                if self.at_end():
                    return

                ch = self.peek()
                start = self.position()
                if ch in _PUNCTUATION:
                    self.advance()
                    if ch in "{[":
                        self.flow_depth += 1
                    elif ch in "}]":
                        self.flow_depth -= 1
                    yield JecsToken(_PUNCTUATION[ch], None, start)
                    if self.flow_depth == 0:
                        return
                elif ch == '"':
                    yield self._scan_quoted()
                else:
                    yield self._scan_bare(_FLOW_STOP)

    def _skip_flow_whitespace(self) -> None:
        while not self.at_end():
            ch = self.peek()
            if ch in " \t":
                self.advance()
            elif ch in _LINE_END:
                self.skip_newline()
            elif ch == "#":
                self.skip_comment()
            else:
                break

    def _scan_bare(self, stops: str) -> JecsToken:
        """Scans an unquoted scalar and classifies its spelling."""
        with ProfileContext("scan_bare"):
            start = self.position()
            chars = []
            while not self.at_end():
                ch = self.peek()
                if ch in stops:
                    break
                if ch == "\\" and self.peek(1) == "#":
                    self.advance()
                    ch = "#"
                else:
                    self._check_control(ch)
                chars.append(ch)
                self.advance()

            text = "".join(chars).rstrip(" \t")
            if text in _KEYWORDS:
                return JecsToken(_KEYWORDS[text], text, start)
            if _NUMBER.fullmatch(text):
                return JecsToken(TokenType.NUMBER, text, start)
            return JecsToken(TokenType.BARE, text, start)

    def _scan_quoted(self) -> JecsToken:
        """Scans a single-line double-quoted string, resolving escapes."""
        with ProfileContext("scan_quoted"):
            start = self.position()
            self.advance()
            chars = []
            while True:
                if self.at_line_end():
                    raise self.error("Unterminated string starting at", start)
                ch = self.peek()
                if ch == '"':
                    self.advance()
                    break
                if ch == "\\":
                    chars.append(self._read_escape())
                    continue
                self._check_control(ch)
                chars.append(ch)
                self.advance()
            return JecsToken(TokenType.STRING, "".join(chars), start)

    def _read_escape(self) -> str:
        start = self.position()
        self.advance()
        if self.at_line_end():
            raise self.error("Incomplete escape sequence", start)
        ch = self.advance()
        if ch in _ESCAPES:
            return _ESCAPES[ch]
        if ch == "u":
            digits = self.text[self.pos : self.pos + 4]
            if len(digits) != 4 or not _HEX_DIGITS.issuperset(digits):
                raise self.error(
                    f"Invalid unicode escape sequence: \\u{digits}", start
                )
            for _ in range(4):
                self.advance()
            return chr(int(digits, 16))
        raise self.error(f"Invalid escape sequence: \\{ch}", start)

    def _scan_multiline(self) -> JecsToken:
        """
        Scans a value opened by a line ending in three double quotes.

        Content lines must be indented deeper than the opening line and
        share one indentation; the closing quotes sit at that same
        indentation. Comments and trailing spaces are stripped, blank
        lines are kept as empty lines.
        """
        with ProfileContext("scan_multiline"):
            start = self.position()
            for _ in _MULTILINE_QUOTE:
                self.advance()
            self.skip_spaces()
            self.skip_comment()
            if not self.at_line_end():
                raise self.error("Multi-line string opener must end its line")

            opener_indent = self.indent_stack[-1]
            content_indent = None
            lines: list[str] = []
            while True:
                if self.at_end():
                    raise self.error(
                        "Multi-line string started at line "
                        f"{start.line}, but file ends unexpectedly"
                    )
                self.skip_newline()

                indent = 0
                while self.peek() == " ":
                    self.advance()
                    indent += 1
                self.skip_comment()
                if self.at_line_end():
                    lines.append("")
                    continue

                if content_indent is None:
                    if indent <= opener_indent:
                        raise self.error(
                            "Multi-line string lines must have more "
                            "indentation than its opener",
                            kind=ErrorKind.BAD_INDENTATION,
                        )
                    content_indent = indent
                elif indent != content_indent:
                    raise self.error(
                        "Multi-line string lines must have consistent "
                        "indentation until its terminator",
                        kind=ErrorKind.BAD_INDENTATION,
                    )

                content = self._scan_bare(_BLOCK_STOP).value
                self.skip_comment()
                if content == _MULTILINE_QUOTE:
                    break
                lines.append(content)

            return JecsToken(TokenType.STRING, "\n".join(lines), start)

    def _check_control(self, ch: str) -> None:
        if ch < " " and ch != "\t":
            raise self.error(f"Unexpected character {ch!r}")
