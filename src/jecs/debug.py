"""Human readable rendering of parsed JECS documents."""

import sys
from typing import TextIO

from ._values import JecsValue
from ._values import ValueKind


def format_tree(value: JecsValue) -> str:
    """
    Renders a value tree with box drawing guides, one node per line.

    Maps and lists show as <map> and <list>, strings are quoted, null
    shows as ---::

        └ <map>
          ├ name: 'Cheese'
          └ tags: <list>
            └ 'food'
    """
    lines: list[str] = []
    _render(value, "└ ", "  ", lines)
    return "\n".join(lines)


def debug_print(value: JecsValue, file: TextIO | None = None) -> None:
    """Prints format_tree(value) to file, stdout by default."""
    print(format_tree(value), file=file or sys.stdout)


def _render(
    value: JecsValue, entry_prefix: str, prefix: str, lines: list[str]
) -> None:
    if value.kind is ValueKind.MAP:
        lines.append(f"{entry_prefix}<map>")
        entries = list(value.data.items())
        for index, (key, child) in enumerate(entries):
            last = index == len(entries) - 1
            _render(
                child,
                f"{prefix}{'└' if last else '├'} {key}: ",
                f"{prefix}{' ' if last else '│'} ",
                lines,
            )
    elif value.kind is ValueKind.LIST:
        lines.append(f"{entry_prefix}<list>")
        for index, child in enumerate(value.data):
            last = index == len(value.data) - 1
            _render(
                child,
                f"{prefix}{'└' if last else '├'} ",
                f"{prefix}{' ' if last else '│'} ",
                lines,
            )
    elif value.kind is ValueKind.NULL:
        lines.append(f"{entry_prefix}---")
    elif value.kind is ValueKind.STRING:
        lines.append(f"{entry_prefix}'{value.data}'")
    elif value.kind is ValueKind.BOOLEAN:
        lines.append(f"{entry_prefix}{'true' if value.data else 'false'}")
    else:
        lines.append(f"{entry_prefix}{value.text or value.data}")
