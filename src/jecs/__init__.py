"""
Parser for JECS, the indentation based configuration notation.

Turns a complete JECS document into a tree of typed values whose root is
always a map, or raises a single JecsDecodeError describing the first
problem in the input::

    import jecs

    manifest = jecs.parse(b"ID: MyMod\\nPriority: 3\\nTags: [a, b]\\n")
    manifest["Priority"].as_number()  # 3.0

    jecs.loads("server:\\n  port: 8080\\n")  # {'server': {'port': 8080.0}}
"""

from pathlib import Path
from typing import IO
from typing import Any

from ._config import ParseConfig
from ._errors import ErrorKind
from ._errors import JecsDecodeError
from ._errors import JecsTypeError
from ._errors import JecsValueError
from ._errors import SourcePosition
from ._lexer import JecsLexer
from ._lexer import JecsToken
from ._lexer import TokenType
from ._normalize import Buffer
from ._normalize import decode_source
from ._normalize import encode_text
from ._parser import JecsParser
from ._profile import HotPathStats
from ._profile import ProfileContext
from ._profile import clear_hot_path_stats
from ._profile import format_hot_path_stats
from ._profile import get_hot_path_stats
from ._values import JecsValue
from ._values import PythonValue
from ._values import ValueKind

__version__ = "0.1.0"


def _parse_document(data: Buffer, config: ParseConfig) -> JecsValue:
    """Runs the normalizer, lexer and parser over one complete buffer."""
    with ProfileContext("parse", len(data)):
        text, skipped = decode_source(data, config.max_size)
        lexer = JecsLexer(text, skipped)
        return JecsParser(lexer, config).parse_document()


def parse(data: Buffer, **kwargs: Any) -> JecsValue:
    """
    Parses a JECS document held in a byte buffer.

    A leading UTF-8 byte order mark is ignored. Keyword arguments build
    the ParseConfig for this call. Raises JecsDecodeError for malformed
    input; the returned value is always a map.
    """
    if not isinstance(data, bytes | bytearray | memoryview):
        raise TypeError(
            f"the JECS document must be bytes, not {type(data).__name__}"
        )

    config = ParseConfig(**kwargs)
    return _parse_document(data, config)


def parse_text(text: str, **kwargs: Any) -> JecsValue:
    """Parses an already decoded JECS document."""
    return parse(encode_text(text), **kwargs)


def parse_file(path: str | Path, **kwargs: Any) -> JecsValue:
    """
    Parses the JECS file at path.

    Errors raised while reading the file propagate unchanged.
    """
    return parse(Path(path).read_bytes(), **kwargs)


def loads(s: str | bytes | bytearray, **kwargs: Any) -> PythonValue:
    """Parses a JECS document into plain Python dicts, lists and scalars."""
    if isinstance(s, str):
        return parse_text(s, **kwargs).to_python()
    if isinstance(s, bytes | bytearray):
        return parse(s, **kwargs).to_python()
    raise TypeError(
        f"the JECS object must be str or bytes, not {type(s).__name__}"
    )


def load(fp: IO[str] | IO[bytes], **kwargs: Any) -> PythonValue:
    """Parses a JECS document from a text or binary file-like object."""
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return loads(fp.read(), **kwargs)


__all__ = [
    "ErrorKind",
    "HotPathStats",
    "JecsDecodeError",
    "JecsLexer",
    "JecsParser",
    "JecsToken",
    "JecsTypeError",
    "JecsValue",
    "JecsValueError",
    "ParseConfig",
    "SourcePosition",
    "TokenType",
    "ValueKind",
    "clear_hot_path_stats",
    "format_hot_path_stats",
    "get_hot_path_stats",
    "load",
    "loads",
    "parse",
    "parse_file",
    "parse_text",
]
