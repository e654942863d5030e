"""Recursive descent parser building a JecsValue tree from lexer tokens."""

from typing import Any
from typing import NoReturn

from ._config import ParseConfig
from ._errors import ErrorKind
from ._errors import JecsDecodeError
from ._lexer import SCALAR_TYPES
from ._lexer import JecsLexer
from ._lexer import JecsToken
from ._lexer import TokenType
from ._profile import ProfileContext
from ._values import JecsValue
from ._values import ValueKind

_ROOT_DESCRIPTIONS = {
    TokenType.DASH: "a list entry",
    TokenType.LBRACKET: "a list",
    TokenType.STRING: "a string",
    TokenType.NUMBER: "a number",
    TokenType.TRUE: "a boolean",
    TokenType.FALSE: "a boolean",
    TokenType.NULL: "null",
}

_UNTERMINATED = {
    ErrorKind.UNTERMINATED_MAP: "map",
    ErrorKind.UNTERMINATED_LIST: "list",
}


class JecsParser:
    """
    Builds a value tree with one token of lookahead.

    Fails on the first grammar violation; there is no error recovery.
    Every map or list entered counts towards the configured maximum
    nesting depth, the root map being depth 1.
    """

    def __init__(self, lexer: JecsLexer, config: ParseConfig):
        self.lexer = lexer
        self.config = config
        self.depth = 0
        self._tokens = lexer.tokenize()
        self.current_token: JecsToken | None = None

    @property
    def token(self) -> JecsToken:
        if self.current_token is None:
            raise RuntimeError("No token has been read yet")
        return self.current_token

    def advance_token(self) -> JecsToken:
        """Advances to next token and returns it; EOF repeats forever."""
        token = self.current_token
        if token is None or token.type != TokenType.EOF:
            self.current_token = next(self._tokens)
        return self.token

    def _fail(
        self, kind: ErrorKind, msg: str, token: JecsToken | None = None
    ) -> NoReturn:
        raise JecsDecodeError(kind, msg, (token or self.token).position)

    def _enter(self) -> None:
        self.depth += 1
        if self.depth > self.config.max_depth:
            self._fail(
                ErrorKind.NESTING_TOO_DEEP,
                f"Maximum nesting depth of {self.config.max_depth} exceeded",
            )

    def _leave(self) -> None:
        self.depth -= 1

    def _store(
        self,
        entries: dict[str, JecsValue],
        key_token: JecsToken,
        value: JecsValue,
    ) -> None:
        key = key_token.value
        if self.config.strict and key in entries:
            self._fail(
                ErrorKind.DUPLICATE_KEY, f"Duplicate key '{key}'", key_token
            )
        entries[key] = value

    def _expect_line_end(self) -> None:
        if self.token.type == TokenType.NEWLINE:
            self.advance_token()
        elif self.token.type != TokenType.EOF:
            self._fail(ErrorKind.EXPECTED_DELIMITER, "Expecting end of line")

    def parse_document(self) -> JecsValue:
        """Parses the whole token stream; the root is always a map."""
        with ProfileContext("parse_document", self.lexer.length):
            token = self.advance_token()

            if token.type == TokenType.EOF:
                return JecsValue(ValueKind.MAP, {})

            if token.type == TokenType.INDENT:
                self._fail(
                    ErrorKind.BAD_INDENTATION,
                    "Root level entries need indentation level 0",
                )

            if token.type == TokenType.LBRACE:
                root = self.parse_map()
                self._expect_line_end()
                if self.token.type != TokenType.EOF:
                    self._fail(ErrorKind.EXPECTED_DELIMITER, "Extra data")
                return root

            if token.type != TokenType.KEY:
                what = _ROOT_DESCRIPTIONS.get(token.type, "a bare value")
                self._fail(
                    ErrorKind.UNEXPECTED_ROOT,
                    f"Document must start with a map entry, not {what}",
                )

            return self.parse_block_map()

    def parse_block_map(self) -> JecsValue:
        """Parses consecutive 'key: value' lines of one indentation level."""
        with ProfileContext("parse_block_map"):
            self._enter()
            entries: dict[str, JecsValue] = {}

            while self.token.type == TokenType.KEY:
                key_token = self.token
                if self.advance_token().type != TokenType.COLON:
                    self._fail(
                        ErrorKind.EXPECTED_DELIMITER, "Expecting ':' delimiter"
                    )
                self.advance_token()
                self._store(entries, key_token, self._parse_entry_value())

            if self.token.type not in (TokenType.DEDENT, TokenType.EOF):
                self._fail_entry(TokenType.DASH)
            self._leave()
            return JecsValue(ValueKind.MAP, entries)

    def parse_block_list(self) -> JecsValue:
        """Parses consecutive '- value' lines of one indentation level."""
        with ProfileContext("parse_block_list"):
            self._enter()
            items: list[JecsValue] = []

            while self.token.type == TokenType.DASH:
                self.advance_token()
                items.append(self._parse_entry_value())

            if self.token.type not in (TokenType.DEDENT, TokenType.EOF):
                self._fail_entry(TokenType.KEY)
            self._leave()
            return JecsValue(ValueKind.LIST, items)

    def _fail_entry(self, other: TokenType | None = None) -> NoReturn:
        """Reports a line that cannot continue the current block."""
        if self.token.type == TokenType.INDENT:
            self._fail(ErrorKind.BAD_INDENTATION, "Unexpected indentation")
        if self.token.type == other:
            self._fail(
                ErrorKind.UNEXPECTED_TOKEN,
                "Cannot mix list and map entries within the same parent",
            )
        if self.token.type in SCALAR_TYPES:
            self._fail(ErrorKind.EXPECTED_DELIMITER, "Expecting ':' after key")
        self._fail(
            ErrorKind.UNEXPECTED_TOKEN,
            f"Expecting map or list entry, got {self.token.type.value}",
        )

    def _parse_entry_value(self) -> JecsValue:
        """
        Parses what follows ':' or '-' on a block line.

        A line without a value owns the deeper indented lines below it; if
        there are none the entry is null.
        """
        if self.token.type != TokenType.NEWLINE:
            value = self.parse_value()
            self._expect_line_end()
            return value

        if self.advance_token().type != TokenType.INDENT:
            return JecsValue(ValueKind.NULL, None)

        token = self.advance_token()
        if token.type == TokenType.KEY:
            value = self.parse_block_map()
        elif token.type == TokenType.DASH:
            value = self.parse_block_list()
        else:
            self._fail_entry()

        # Closes the indented block
        self.advance_token()
        return value

    def parse_value(self) -> JecsValue:
        """Parses any value based on current token."""
        token = self.token

        if token.type == TokenType.LBRACE:
            return self.parse_map()
        if token.type == TokenType.LBRACKET:
            return self.parse_list()
        if token.type not in SCALAR_TYPES:
            self._fail(
                ErrorKind.UNEXPECTED_TOKEN,
                f"Expecting value, got {token.type.value}",
            )

        self.advance_token()
        if token.type == TokenType.STRING:
            return JecsValue(ValueKind.STRING, token.value)
        if token.type == TokenType.BARE:
            return JecsValue(ValueKind.STRING, token.value, token.value)
        if token.type == TokenType.NUMBER:
            number = self._parse_number(token.value)
            return JecsValue(ValueKind.NUMBER, number, token.value)
        if token.type == TokenType.NULL:
            return JecsValue(ValueKind.NULL, None, token.value)
        return JecsValue(
            ValueKind.BOOLEAN, token.type == TokenType.TRUE, token.value
        )

    def _parse_number(self, text: str) -> Any:
        with ProfileContext("parse_number", len(text)):
            if self.config.parse_number:
                return self.config.parse_number(text)
            return float(text)

    def parse_map(self) -> JecsValue:
        """Parses an inline '{key: value, ...}' map."""
        with ProfileContext("parse_map"):
            open_token = self.token
            self._enter()
            entries: dict[str, JecsValue] = {}

            if self.advance_token().type == TokenType.RBRACE:
                self.advance_token()
                self._leave()
                return JecsValue(ValueKind.MAP, entries)

            unterminated = ErrorKind.UNTERMINATED_MAP
            while True:
                key_token = self._require_open(open_token, unterminated)
                if key_token.type not in SCALAR_TYPES:
                    self._fail(
                        ErrorKind.UNEXPECTED_TOKEN,
                        f"Expecting key, got {key_token.type.value}",
                    )
                self.advance_token()

                colon = self._require_open(open_token, unterminated)
                if colon.type != TokenType.COLON:
                    self._fail(
                        ErrorKind.EXPECTED_DELIMITER, "Expecting ':' delimiter"
                    )
                self.advance_token()

                self._require_open(open_token, unterminated)
                self._store(entries, key_token, self.parse_value())

                if not self._continue_collection(
                    open_token, TokenType.RBRACE, unterminated
                ):
                    break

            self._leave()
            return JecsValue(ValueKind.MAP, entries)

    def parse_list(self) -> JecsValue:
        """Parses an inline '[value, ...]' list."""
        with ProfileContext("parse_list"):
            open_token = self.token
            self._enter()
            items: list[JecsValue] = []

            if self.advance_token().type == TokenType.RBRACKET:
                self.advance_token()
                self._leave()
                return JecsValue(ValueKind.LIST, items)

            unterminated = ErrorKind.UNTERMINATED_LIST
            while True:
                self._require_open(open_token, unterminated)
                items.append(self.parse_value())

                if not self._continue_collection(
                    open_token, TokenType.RBRACKET, unterminated
                ):
                    break

            self._leave()
            return JecsValue(ValueKind.LIST, items)

    def _require_open(
        self, open_token: JecsToken, kind: ErrorKind
    ) -> JecsToken:
        """Returns the current token, failing if the input ended instead."""
        if self.token.type == TokenType.EOF:
            opened = open_token.position
            self._fail(
                kind,
                f"Unterminated {_UNTERMINATED[kind]} starting at line "
                f"{opened.line}, column {opened.column}",
            )
        return self.token

    def _continue_collection(
        self, open_token: JecsToken, closer: TokenType, kind: ErrorKind
    ) -> bool:
        """Handles the token after an entry, returns True if more follow."""
        token = self._require_open(open_token, kind)
        if token.type == closer:
            self.advance_token()
            return False
        if token.type != TokenType.COMMA:
            self._fail(ErrorKind.EXPECTED_DELIMITER, "Expecting ',' delimiter")

        if self.advance_token().type == closer:
            self._fail(
                ErrorKind.UNEXPECTED_TOKEN,
                "Illegal trailing comma before end of "
                f"{_UNTERMINATED[kind]}",
                token,
            )
        return True
