"""
Pytest configuration and shared fixtures for jecs tests.

Provides immutable test case data and a small block notation writer used
as a round-trip oracle; the library itself never serializes.
"""

from dataclasses import dataclass
from typing import Any

import pytest

from jecs import ErrorKind


@dataclass(frozen=True)
class JecsTestCase:
    """
    Immutable container for JECS test case data.

    Holds test input and expected behavior for consistent test execution.
    """

    description: str
    input_data: str
    expected_output: Any = None
    expected_kind: ErrorKind | None = None


@pytest.fixture
def jecs_pass_cases() -> list[JecsTestCase]:
    """
    Provides JECS documents that must parse, with their plain Python form.

    Covers block maps and lists, inline collections, every scalar form and
    the layout rules for comments, blank lines and multi-line strings.
    """
    return [
        JecsTestCase("empty document", "", {}),
        JecsTestCase("comments only", "# nothing\n\n   # here\n", {}),
        JecsTestCase("inline empty map", "{}", {}),
        JecsTestCase(
            "scalars",
            "name: Cheese\n"
            "count: 3\n"
            "ratio: -0.5\n"
            "enabled: true\n"
            "disabled: false\n"
            "nothing: null\n",
            {
                "name": "Cheese",
                "count": 3.0,
                "ratio": -0.5,
                "enabled": True,
                "disabled": False,
                "nothing": None,
            },
        ),
        JecsTestCase(
            "nested blocks",
            "server:\n"
            "  host: localhost\n"
            "  ports:\n"
            "    - 80\n"
            "    - 443\n"
            "  tls:\n"
            "    enabled: false\n",
            {
                "server": {
                    "host": "localhost",
                    "ports": [80.0, 443.0],
                    "tls": {"enabled": False},
                }
            },
        ),
        JecsTestCase(
            "list of maps",
            "mods:\n  -\n    id: a\n  -\n    id: b\n",
            {"mods": [{"id": "a"}, {"id": "b"}]},
        ),
        JecsTestCase(
            "inline collections",
            'tags: [a, b, "c d"]\npoint: {x: 1, y: 2}\n',
            {"tags": ["a", "b", "c d"], "point": {"x": 1.0, "y": 2.0}},
        ),
        JecsTestCase(
            "inline list spanning lines",
            "tags: [\n  a, # first\n  b\n]\nnext: 1\n",
            {"tags": ["a", "b"], "next": 1.0},
        ),
        JecsTestCase(
            "comment after value",
            "name: Cheese # the best\n",
            {"name": "Cheese"},
        ),
        JecsTestCase(
            "escaped hash", "color: \\#FF0000\n", {"color": "#FF0000"}
        ),
        JecsTestCase(
            "bare value with spaces",
            "title: Hello World  \n",
            {"title": "Hello World"},
        ),
        JecsTestCase(
            "quoted escapes",
            'text: "a\\tb\\n\\"q\\" \\u00e9 # kept"\n',
            {"text": 'a\tb\n"q" \u00e9 # kept'},
        ),
        JecsTestCase(
            "key without value",
            "a:\nb: 1\n",
            {"a": None, "b": 1.0},
        ),
        JecsTestCase(
            "near-miss booleans stay strings",
            "a: True\nb: FALSE\nc: yes\nd: on\ne: Null\n",
            {"a": "True", "b": "FALSE", "c": "yes", "d": "on", "e": "Null"},
        ),
        JecsTestCase(
            "number-like text",
            "a: 1e5\nb: 0x14\nc: 1.\nd: .5\n",
            {"a": "1e5", "b": "0x14", "c": "1.", "d": ".5"},
        ),
        JecsTestCase(
            "multi-line string",
            'text: """\n  Hello\n\n  World # not content\n  """\nnext: 1\n',
            {"text": "Hello\n\nWorld", "next": 1.0},
        ),
        JecsTestCase(
            "root inline map",
            "{a: 1, b: [true, null]}\n",
            {"a": 1.0, "b": [True, None]},
        ),
        JecsTestCase(
            "dedent over several levels",
            "a:\n  b:\n    c: 1\nd: 2\n",
            {"a": {"b": {"c": 1.0}}, "d": 2.0},
        ),
        JecsTestCase(
            "quoted keys",
            '"my key": 1\n"with:colon": x\n',
            {"my key": 1.0, "with:colon": "x"},
        ),
        JecsTestCase(
            "non-ascii text",
            "name: K\u00e4se\n\u540d\u524d: [\u00e9]\n",
            {"name": "K\u00e4se", "\u540d\u524d": ["\u00e9"]},
        ),
        JecsTestCase(
            "signed numbers in lists",
            "values:\n  - -5\n  - +2.25\n",
            {"values": [-5.0, 2.25]},
        ),
    ]


@pytest.fixture
def jecs_fail_cases() -> list[JecsTestCase]:
    """
    Provides malformed JECS documents with the failure kind they raise.
    """
    return [
        JecsTestCase("list at root", "- a\n", None, ErrorKind.UNEXPECTED_ROOT),
        JecsTestCase(
            "inline list at root", "[1, 2]\n", None, ErrorKind.UNEXPECTED_ROOT
        ),
        JecsTestCase(
            "string at root", '"text"\n', None, ErrorKind.UNEXPECTED_ROOT
        ),
        JecsTestCase(
            "indented root", "  a: 1\n", None, ErrorKind.BAD_INDENTATION
        ),
        JecsTestCase("unclosed map", "{", None, ErrorKind.UNTERMINATED_MAP),
        JecsTestCase(
            "unclosed nested map",
            "a: {b: {}",
            None,
            ErrorKind.UNTERMINATED_MAP,
        ),
        JecsTestCase(
            "unclosed list", "a: [1, 2\n", None, ErrorKind.UNTERMINATED_LIST
        ),
        JecsTestCase(
            "unclosed nested list",
            "a: [[1]\n",
            None,
            ErrorKind.UNTERMINATED_LIST,
        ),
        JecsTestCase(
            "trailing comma", "a: [1,]\n", None, ErrorKind.UNEXPECTED_TOKEN
        ),
        JecsTestCase(
            "mismatched closer", "a: [}\n", None, ErrorKind.UNEXPECTED_TOKEN
        ),
        JecsTestCase(
            "missing colon in inline map",
            "a: {b 1}\n",
            None,
            ErrorKind.EXPECTED_DELIMITER,
        ),
        JecsTestCase(
            "text after inline list",
            "a: [1] x\n",
            None,
            ErrorKind.EXPECTED_DELIMITER,
        ),
        JecsTestCase(
            "text after root map",
            "{a: 1}\nb: 2\n",
            None,
            ErrorKind.EXPECTED_DELIMITER,
        ),
        JecsTestCase(
            "line without key", ": value\n", None, ErrorKind.LEX_ERROR
        ),
        JecsTestCase(
            "key without colon", "key\n", None, ErrorKind.UNEXPECTED_ROOT
        ),
        JecsTestCase(
            "number at root", "3.5\n", None, ErrorKind.UNEXPECTED_ROOT
        ),
        JecsTestCase("hash in key", "ke#y: 1\n", None, ErrorKind.LEX_ERROR),
        JecsTestCase(
            "tab indentation", "a:\n\tb: 1\n", None, ErrorKind.LEX_ERROR
        ),
        JecsTestCase(
            "unterminated string", 'a: "open\n', None, ErrorKind.LEX_ERROR
        ),
        JecsTestCase("bad escape", 'a: "\\x"\n', None, ErrorKind.LEX_ERROR),
        JecsTestCase(
            "control character", "a: b\x01c\n", None, ErrorKind.LEX_ERROR
        ),
        JecsTestCase(
            "multi-line string at end of input",
            'text: """\n  a\n',
            None,
            ErrorKind.LEX_ERROR,
        ),
        JecsTestCase(
            "multi-line string not indented",
            'text: """\nno indent\n"""\n',
            None,
            ErrorKind.BAD_INDENTATION,
        ),
        JecsTestCase(
            "dedent to unknown level",
            "a:\n    b: 1\n  c: 2\n",
            None,
            ErrorKind.BAD_INDENTATION,
        ),
        JecsTestCase(
            "indented line after value",
            "a: 1\n  b: 2\n",
            None,
            ErrorKind.BAD_INDENTATION,
        ),
        JecsTestCase(
            "list entry among map entries",
            "a:\n  b: 1\n  - x\n",
            None,
            ErrorKind.UNEXPECTED_TOKEN,
        ),
        JecsTestCase(
            "map entry among list entries",
            "a:\n  - x\n  b: 1\n",
            None,
            ErrorKind.UNEXPECTED_TOKEN,
        ),
    ]


def _quote(text: str) -> str:
    chars = []
    for ch in text:
        if ch in '"\\':
            chars.append("\\" + ch)
        elif ch in _CONTROL_ESCAPES:
            chars.append(_CONTROL_ESCAPES[ch])
        elif ch < " ":
            chars.append(f"\\u{ord(ch):04x}")
        else:
            chars.append(ch)
    return '"' + "".join(chars) + '"'


_CONTROL_ESCAPES = {
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _scalar(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return repr(float(value))
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, dict):
        return "{}"
    return "[]"


def _dump_entries(obj: dict | list, indent: int, lines: list[str]) -> None:
    pad = " " * indent
    if isinstance(obj, dict):
        heads = [(f"{pad}{_quote(key)}:", value) for key, value in obj.items()]
    else:
        heads = [(f"{pad}-", item) for item in obj]

    for head, value in heads:
        if isinstance(value, dict | list) and value:
            lines.append(head)
            _dump_entries(value, indent + 2, lines)
        else:
            lines.append(f"{head} {_scalar(value)}")


def dump_jecs(obj: dict[str, Any]) -> str:
    """
    Writes plain Python data as a block notation JECS document.

    Keys and strings are always quoted and numbers are written as floats,
    so only values whose repr has no exponent survive the round trip.
    """
    lines: list[str] = []
    _dump_entries(obj, 0, lines)
    return "".join(line + "\n" for line in lines)
