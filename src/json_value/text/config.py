"""TextConfig: immutable options shared by the Reader and the Writer.

The defaults reproduce the classic text format: no backslash escapes,
single- or double-quoted strings, and objects allowed anywhere a value is.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["TextConfig"]


@dataclass(frozen=True, slots=True)
class TextConfig:
    """Immutable configuration for reading and writing value text.

    Attributes:
        escapes: When True the Reader decodes backslash escapes inside quoted
            strings (``\\"``, ``\\\\``, ``\\n``, ``\\uXXXX`` ...) and the Writer
            escapes quotes, backslashes and control characters.  When False
            (default) string contents are copied verbatim in both directions,
            so a string containing its own quote character does not round-trip.
        single_quotes: Accept ``'...'`` strings and keys in addition to
            ``"..."``.  Default True.
        max_depth: Maximum array/object nesting accepted by the Reader (>= 1).
            Default 256.  The Reader recurses once per level, so values far
            above the default can exhaust the interpreter recursion limit.
        strict_terminators: When True (default) a ``}`` closing an array or a
            ``]`` closing an object is malformed input.  When False either
            closer ends either container.
    """

    escapes: bool = False
    single_quotes: bool = True
    max_depth: int = 256
    strict_terminators: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            msg = f"max_depth must be an int, got {type(self.max_depth).__name__}"
            raise ValueError(msg)
        if self.max_depth < 1:
            msg = f"max_depth must be >= 1, got {self.max_depth}"
            raise ValueError(msg)
