"""Parsing options."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

ParseNumberHook = Callable[[str], Any] | None

DEFAULT_MAX_DEPTH = 128

# Each nesting level costs two Python frames in the recursive descent
MAX_DEPTH_LIMIT = 400


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures JECS parsing behavior with immutable settings.

    Built fresh for every parse call from the keyword arguments of the
    public entry points, so no parser state is shared between calls.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    strict: bool = False
    parse_number: ParseNumberHook = None
    max_size: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.strict, bool):
            raise TypeError("strict must be a boolean")
        if isinstance(self.max_depth, bool) or not isinstance(
            self.max_depth, int
        ):
            raise TypeError("max_depth must be an integer")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        if self.max_depth > MAX_DEPTH_LIMIT:
            raise ValueError(f"max_depth must be at most {MAX_DEPTH_LIMIT}")
        if self.parse_number is not None and not callable(self.parse_number):
            raise TypeError("parse_number must be callable")
        if self.max_size is not None:
            if isinstance(self.max_size, bool) or not isinstance(
                self.max_size, int
            ):
                raise TypeError("max_size must be an integer or None")
            if self.max_size < 0:
                raise ValueError("max_size must be non-negative")
