"""Turns a raw byte buffer into text the lexer can scan."""

import codecs
from typing import TypeAlias

from ._errors import ErrorKind
from ._errors import JecsDecodeError
from ._errors import SourcePosition
from ._profile import ProfileContext

BOM = codecs.BOM_UTF8

Buffer: TypeAlias = bytes | bytearray | memoryview


def decode_source(
    data: Buffer, max_size: int | None = None
) -> tuple[str, int]:
    """
    Strips an optional UTF-8 byte order mark and decodes the rest.

    Returns the decoded text together with the number of bytes dropped in
    front of it, so that byte offsets reported later still point into the
    caller's buffer.
    """
    with ProfileContext("decode_source", len(data)):
        raw = bytes(data)
        if max_size is not None and len(raw) > max_size:
            raise JecsDecodeError(
                ErrorKind.INPUT_TOO_LARGE,
                f"Input of {len(raw)} bytes exceeds the limit of {max_size}",
                SourcePosition(offset=max_size),
            )

        skipped = len(BOM) if raw.startswith(BOM) else 0
        try:
            return raw[skipped:].decode("utf-8"), skipped
        except UnicodeDecodeError as e:
            bad = skipped + e.start
            raise JecsDecodeError(
                ErrorKind.ENCODING_ERROR,
                f"Invalid UTF-8 byte 0x{raw[bad]:02x}",
                _position_after(raw[skipped:bad].decode("utf-8"), bad),
            ) from e


def encode_text(text: str) -> bytes:
    """Encodes already decoded text so it can go through decode_source."""
    if not isinstance(text, str):
        raise TypeError(
            f"the JECS text must be str, not {type(text).__name__}"
        )
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        prefix = text[: e.start]
        raise JecsDecodeError(
            ErrorKind.ENCODING_ERROR,
            f"Character {text[e.start]!r} cannot be encoded as UTF-8",
            _position_after(prefix, len(prefix.encode("utf-8"))),
        ) from e


def _position_after(prefix: str, offset: int) -> SourcePosition:
    """Position of the character following an already decoded prefix."""
    line = 1 + prefix.count("\n") + prefix.count("\r") - prefix.count("\r\n")
    line_start = max(prefix.rfind("\n"), prefix.rfind("\r")) + 1
    return SourcePosition(
        line=line,
        column=len(prefix) - line_start + 1,
        index=len(prefix),
        offset=offset,
    )
