"""Error codes and exception hierarchy for json-value.

Every failure the library raises carries a stable ``code`` string so callers
can branch on it without matching message text.  The concrete classes also
inherit from the matching builtin (``ValueError``, ``IndexError``,
``TypeError``) so ordinary ``except`` clauses keep working.

Comparison across kinds is NOT an error: values of different kinds are simply
unequal and order by their kind.
"""

from __future__ import annotations

__all__ = [
    "ERR_DEPTH",
    "ERR_KIND",
    "ERR_MALFORMED",
    "ERR_OUT_OF_RANGE",
    "ERR_UNEXPECTED_END",
    "DepthLimitError",
    "KindError",
    "MalformedInputError",
    "OutOfRangeError",
    "UnexpectedEndError",
    "ValueModelError",
]

# -- Error codes -------------------------------------------------------------

ERR_MALFORMED: str = "ERR_MALFORMED"  # text does not match the grammar
ERR_UNEXPECTED_END: str = "ERR_UNEXPECTED_END"  # stream ended mid-value
ERR_DEPTH: str = "ERR_DEPTH"  # nesting deeper than TextConfig.max_depth
ERR_OUT_OF_RANGE: str = "ERR_OUT_OF_RANGE"  # array index past the end
ERR_KIND: str = "ERR_KIND"  # operation not valid for the value's kind


class ValueModelError(Exception):
    """Base class for every error raised by json-value.

    Attributes:
        code: One of the ``ERR_*`` constants above.
    """

    code: str = ""

    def __init__(self, msg: str = "", code: str | None = None) -> None:
        if code is not None:
            self.code = code
        super().__init__(msg or self.code)


class MalformedInputError(ValueModelError, ValueError):
    """The text stream does not match the grammar at ``offset``.

    Attributes:
        offset:   Zero-based character offset of the offending character.
        expected: Short description of what the reader was looking for.
        found:    The character (or ``""`` at end of input) actually seen.
    """

    code = ERR_MALFORMED

    def __init__(self, offset: int, expected: str, found: str) -> None:
        self.offset = offset
        self.expected = expected
        self.found = found
        shown = repr(found) if found else "end of input"
        super().__init__(f"at offset {offset}: expected {expected}, found {shown}")


class UnexpectedEndError(MalformedInputError):
    """The stream ended before the current value was complete."""

    code = ERR_UNEXPECTED_END

    def __init__(self, offset: int, expected: str) -> None:
        super().__init__(offset, expected, "")


class DepthLimitError(MalformedInputError):
    """Arrays/objects nest deeper than the configured ``max_depth``."""

    code = ERR_DEPTH

    def __init__(self, offset: int, max_depth: int, found: str) -> None:
        self.max_depth = max_depth
        super().__init__(offset, f"nesting depth <= {max_depth}", found)


class OutOfRangeError(ValueModelError, IndexError):
    """Array index outside ``[-size, size)``."""

    code = ERR_OUT_OF_RANGE

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"index {index} out of range for array of size {size}")


class KindError(ValueModelError, TypeError):
    """An operation needs a different kind of value than it was given."""

    code = ERR_KIND

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected {expected} value, got {actual}")
