"""
The typed value tree returned by a successful parse.

A JecsValue is a tagged union: its kind says which of the six JECS data
types it holds and its data is the matching Python object. Maps hold
JecsValue children keyed by string in document order, lists hold them in
document order. Numbers are floats unless a parse_number hook chose a
different type.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from decimal import Decimal
from enum import Enum
from typing import Any
from typing import TypeAlias

from ._errors import JecsTypeError
from ._errors import JecsValueError

# Plain Python counterpart of a value tree
PythonValue: TypeAlias = (
    "str | float | bool | None | dict[str, PythonValue] | list[PythonValue]"
)

_UNSIGNED = re.compile(r"\+?[0-9]+")
_COLOR = re.compile(r"[0-9A-F]{6}")
_MAX_UNSIGNED = 2**32 - 1
_MAX_UNSIGNED_DIGITS = len(str(_MAX_UNSIGNED))
_COMPONENT_PREFIX = "C-"


def _read_unsigned(text: str) -> int | None:
    """Parses a 32 bit unsigned number, or returns None if text is not one."""
    if not _UNSIGNED.fullmatch(text):
        return None
    digits = text.removeprefix("+").lstrip("0") or "0"
    if len(digits) > _MAX_UNSIGNED_DIGITS:
        return None
    number = int(digits)
    return number if number <= _MAX_UNSIGNED else None


class ValueKind(Enum):
    """The six data types a JECS value can hold."""

    MAP = "Map"
    LIST = "List"
    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    NULL = "Null"


@dataclass(frozen=True)
class JecsValue:
    """
    One node of a parsed JECS document.

    Equality is deep and structural; values of different kinds are never
    equal, so the boolean true differs from the number 1. The source
    spelling of unquoted scalars is kept in text and ignored by equality.
    """

    kind: ValueKind
    data: Any = None
    text: str | None = field(default=None, compare=False, repr=False)

    @classmethod
    def of(cls, obj: Any) -> "JecsValue":
        """Builds a value tree from plain Python objects."""
        if isinstance(obj, JecsValue):
            return obj
        if obj is None:
            return cls(ValueKind.NULL)
        if isinstance(obj, bool):
            return cls(ValueKind.BOOLEAN, obj)
        if isinstance(obj, int | float):
            return cls(ValueKind.NUMBER, float(obj))
        if isinstance(obj, Decimal):
            return cls(ValueKind.NUMBER, obj)
        if isinstance(obj, str):
            return cls(ValueKind.STRING, obj)
        if isinstance(obj, Mapping):
            entries = {}
            for key, value in obj.items():
                if not isinstance(key, str):
                    msg = f"keys must be str, not {type(key).__name__}"
                    raise TypeError(msg)
                entries[key] = cls.of(value)
            return cls(ValueKind.MAP, entries)
        if isinstance(obj, list | tuple):
            return cls(ValueKind.LIST, [cls.of(item) for item in obj])
        msg = f"Object of type {type(obj).__name__} is not a JECS value"
        raise TypeError(msg)

    def is_map(self) -> bool:
        return self.kind is ValueKind.MAP

    def is_list(self) -> bool:
        return self.kind is ValueKind.LIST

    def is_string(self) -> bool:
        return self.kind is ValueKind.STRING

    def is_number(self) -> bool:
        return self.kind is ValueKind.NUMBER

    def is_bool(self) -> bool:
        return self.kind is ValueKind.BOOLEAN

    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    def _expect(self, kind: ValueKind) -> Any:
        if self.kind is not kind:
            raise JecsTypeError(kind.name, self.kind.name)
        return self.data

    def as_map(self) -> dict[str, "JecsValue"]:
        return self._expect(ValueKind.MAP)

    def as_list(self) -> list["JecsValue"]:
        return self._expect(ValueKind.LIST)

    def as_string(self) -> str:
        return self._expect(ValueKind.STRING)

    def as_number(self) -> Any:
        return self._expect(ValueKind.NUMBER)

    def as_bool(self) -> bool:
        return self._expect(ValueKind.BOOLEAN)

    def __getitem__(self, key: str | int) -> "JecsValue":
        if self.kind is ValueKind.MAP or self.kind is ValueKind.LIST:
            return self.data[key]
        raise JecsTypeError("MAP or LIST", self.kind.name)

    def __contains__(self, key: str) -> bool:
        return key in self.as_map()

    def get(self, key: str, default: Any = None) -> Any:
        """Returns the child stored under key in a map, or default."""
        return self.as_map().get(key, default)

    def _scalar_text(self, data_type: str) -> str:
        """Source text of a string or number, for the parsing accessors."""
        if self.kind is ValueKind.STRING:
            return self.data
        if self.kind is ValueKind.NUMBER:
            if self.text is not None:
                return self.text
            if isinstance(self.data, float) and self.data.is_integer():
                return str(int(self.data))
            return str(self.data)
        raise JecsTypeError(data_type, self.kind.name)

    def as_unsigned(self) -> int:
        """Reads a whole number that fits into 32 unsigned bits."""
        text = self._scalar_text("unsigned")
        number = _read_unsigned(text)
        if number is None:
            raise JecsValueError("unsigned", text)
        return number

    def as_double(self) -> float:
        """
        Reads a float from a number or from a string spelling one.

        Strings may use any float spelling, including exponents, inf and
        nan, but no surrounding whitespace or digit separators.
        """
        text = self._scalar_text("double")
        if self.kind is ValueKind.NUMBER:
            return float(self.data)
        if text != text.strip() or "_" in text:
            raise JecsValueError("double", text)
        try:
            return float(text)
        except ValueError as e:
            raise JecsValueError("double", text) from e

    def as_color(self) -> tuple[int, int, int]:
        """Reads an RRGGBB color written as six uppercase hex digits."""
        text = self._scalar_text("color")
        if not _COLOR.fullmatch(text):
            raise JecsValueError("color", text)
        return int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16)

    def as_component_address(self) -> int:
        """Reads a component address of the form 'C-<unsigned>'."""
        text = self._scalar_text("component address")
        rest = text.removeprefix(_COMPONENT_PREFIX)
        number = None if rest == text else _read_unsigned(rest)
        if number is None:
            raise JecsValueError("component address", text)
        return number

    def to_python(self) -> PythonValue:
        """Converts the tree into plain dicts, lists and scalars."""
        if self.kind is ValueKind.MAP:
            return {key: value.to_python() for key, value in self.data.items()}
        if self.kind is ValueKind.LIST:
            return [value.to_python() for value in self.data]
        return self.data
