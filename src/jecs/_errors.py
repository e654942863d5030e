"""Error types shared by every stage of JECS parsing."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class SourcePosition:
    """
    Location of a character or token in the input.

    Line and column are 1-based, index counts decoded characters and
    offset counts bytes of the original buffer (BOM included).
    """

    line: int = 1
    column: int = 1
    index: int = 0
    offset: int = 0


class ErrorKind(Enum):
    """Failure categories reported by the normalizer, lexer and parser."""

    ENCODING_ERROR = "EncodingError"
    LEX_ERROR = "LexError"
    UNEXPECTED_ROOT = "UnexpectedRoot"
    UNTERMINATED_MAP = "UnterminatedMap"
    UNTERMINATED_LIST = "UnterminatedList"
    EXPECTED_DELIMITER = "ExpectedDelimiter"
    UNEXPECTED_TOKEN = "UnexpectedToken"
    NESTING_TOO_DEEP = "NestingTooDeep"
    BAD_INDENTATION = "BadIndentation"
    DUPLICATE_KEY = "DuplicateKey"
    INPUT_TOO_LARGE = "InputTooLarge"


class JecsDecodeError(ValueError):
    """
    Handles JECS parsing failures with precise position information.

    Raised for the first problem found in a document, whichever stage
    finds it. Carries the failure kind, the message and the line, column,
    character index and byte offset of the offending token or character.
    """

    def __init__(
        self,
        kind: ErrorKind,
        msg: str,
        position: SourcePosition | None = None,
    ) -> None:
        if not isinstance(kind, ErrorKind):
            raise TypeError("kind must be an ErrorKind")
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")

        position = position or SourcePosition()
        self.kind = kind
        self.msg = msg
        self.position = position
        self.lineno = position.line
        self.colno = position.column
        self.pos = position.index
        self.offset = position.offset

        super().__init__(f"{msg} at line {self.lineno}, column {self.colno}")

    def __reduce__(self):  # type: ignore[no-untyped-def]
        return type(self), (self.kind, self.msg, self.position)


class JecsTypeError(TypeError):
    """Raised when a value is read as a kind it does not hold."""

    def __init__(self, expected_type: str, encountered_type: str) -> None:
        self.expected_type = expected_type
        self.encountered_type = encountered_type
        super().__init__(
            f"Expected {expected_type} JECS data type, got {encountered_type}"
        )


class JecsValueError(ValueError):
    """Raised when a scalar cannot be interpreted as the requested data."""

    def __init__(self, data_type: str, value: str) -> None:
        self.data_type = data_type
        self.value = value
        super().__init__(
            f"Failed to parse {data_type} data with value '{value}'"
        )
