"""CharStream: one-character look-ahead over a string or text file.

The Reader needs exactly three primitives from its input: read one
character, look at the next character without consuming it, and push one
character back.  ``CharStream`` provides them over either an in-memory
``str`` or any object with a ``read(n)`` method (``io.StringIO``, an open
text file), and tracks the character offset used in error reports.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

__all__ = ["CharStream", "TextSource"]


@runtime_checkable
class TextSource(Protocol):
    """Anything with a text ``read(size)`` method."""

    def read(self, size: int = -1, /) -> str: ...


class CharStream:
    """Character cursor with single push-back.

    Example::

        stream = CharStream("  [1]")
        stream.read_significant()   # "["
        stream.offset               # 3
    """

    __slots__ = ("_source", "_text", "_pos", "_pushed", "_offset")

    def __init__(self, source: str | TextSource) -> None:
        if isinstance(source, str):
            self._source: TextSource | None = None
            self._text = source
        else:
            self._source = source
            self._text = ""
        self._pos = 0
        self._pushed: str | None = None
        self._offset = 0

    @property
    def offset(self) -> int:
        """Number of characters consumed so far (push-back un-consumes)."""
        return self._offset

    def read(self) -> str:
        """Consume and return the next character, or ``""`` at end of input."""
        if self._pushed is not None:
            ch, self._pushed = self._pushed, None
            self._offset += 1
            return ch
        if self._pos >= len(self._text) and not self._fill():
            return ""
        ch = self._text[self._pos]
        self._pos += 1
        self._offset += 1
        return ch

    def peek(self) -> str:
        """Return the next character without consuming it (``""`` at end)."""
        ch = self.read()
        if ch:
            self.unread(ch)
        return ch

    def unread(self, ch: str) -> None:
        """Push ``ch`` back so the next ``read()`` returns it again.

        Only one character of push-back is supported.
        """
        if self._pushed is not None:
            raise RuntimeError("CharStream supports a single character of push-back")
        self._pushed = ch
        self._offset -= 1

    def skip_whitespace(self) -> None:
        while True:
            ch = self.read()
            if not ch:
                return
            if not ch.isspace():
                self.unread(ch)
                return

    def read_significant(self) -> str:
        """Skip whitespace and consume the next character (``""`` at end)."""
        self.skip_whitespace()
        return self.read()

    def at_end(self) -> bool:
        """True when only whitespace (or nothing) remains."""
        self.skip_whitespace()
        return not self.peek()

    def _fill(self) -> bool:
        if self._source is None:
            return False
        chunk = self._source.read(4096)
        if not chunk:
            self._source = None
            return False
        self._text = chunk
        self._pos = 0
        return True
