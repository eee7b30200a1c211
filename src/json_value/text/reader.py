"""Reader: recursive-descent parser from a character stream to Value trees.

Grammar (whitespace between tokens is skipped)::

    value  := string | number | array | object | 'true' | 'false' | 'null'
    array  := '[' (value (','? value)*)? ']'
    object := '{' (pair (','? pair)*)? '}'
    pair   := string ':' value
    string := '"' ... '"' | "'" ... "'"

The reader never backtracks more than one character.  ``read_value`` returns
an UNDEFINED value when it meets a closing ``]`` or ``}``; that is how the
array and object loops detect their terminator.  A separating ``,`` in front
of a value is consumed, so the same loop serves both comma-separated and
whitespace-separated sequences.

Every grammar violation raises ``MalformedInputError`` (or a subclass)
carrying the character offset, what was expected and what was found.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from json_value.errors import DepthLimitError, MalformedInputError, UnexpectedEndError
from json_value.model.kinds import Kind
from json_value.model.value import Value
from json_value.text.config import TextConfig
from json_value.text.stream import CharStream, TextSource

__all__ = ["Reader"]

logger = logging.getLogger(__name__)

_DIGITS = frozenset("0123456789")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_SIMPLE_ESCAPES = {
    '"': '"',
    "'": "'",
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


class Reader:
    """Parses values from a string, a text file, or a ``CharStream``.

    A Reader keeps its position between calls, so a stream holding several
    values can be consumed one value at a time, or by iterating the reader.

    Example::

        reader = Reader('[1,2,3] {"a":1}')
        reader.read_value()     # ARRAY [1, 2, 3]
        reader.read_value()     # OBJECT {"a": 1}

        list(Reader("1 2 'three'"))   # three values
    """

    def __init__(
        self,
        source: str | TextSource | CharStream,
        config: TextConfig | None = None,
    ) -> None:
        self._stream = source if isinstance(source, CharStream) else CharStream(source)
        self._config: TextConfig = config if config is not None else TextConfig()
        self._depth = 0
        # The "]" or "}" that made the last read_value() return UNDEFINED.
        self._closer = ""

    @property
    def offset(self) -> int:
        """Character offset of the next unread character."""
        return self._stream.offset

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[Value]:
        """Yield top-level values until only whitespace remains."""
        while not self._stream.at_end():
            yield self.read_document()

    def at_end(self) -> bool:
        return self._stream.at_end()

    def read_document(self) -> Value:
        """Read one top-level value; a stray ``]`` or ``}`` is malformed."""
        value = self.read_value()
        if not value:
            raise MalformedInputError(self._stream.offset - 1, "value", self._closer)
        logger.debug("read %s value ending at offset %d", value.kind.label, self.offset)
        return value

    def read_value(self) -> Value:
        """Read the next value.

        Returns:
            The parsed value, or an UNDEFINED value if the next significant
            character is ``]`` or ``}`` (which is consumed).

        Raises:
            MalformedInputError: The text does not match the grammar.
            UnexpectedEndError:  The input ended before a value was read.
            DepthLimitError:     Nesting exceeds ``TextConfig.max_depth``.
        """
        stream = self._stream
        ch = stream.read_significant()

        if ch == "]" or ch == "}":
            self._closer = ch
            return Value()

        if ch == ",":
            ch = stream.read_significant()
            if ch == "]" or ch == "}":
                raise self._error("value after ','", ch)

        if not ch:
            raise self._error("value", ch)
        if ch == "[":
            return self._read_elements()
        if ch == "{":
            return Value._make(Kind.OBJECT, self._read_members())
        if self._is_quote(ch):
            return Value.string(self._read_string_body(ch))
        if ch == "f":
            self._expect_literal("false")
            return Value.boolean(False)
        if ch == "t":
            self._expect_literal("true")
            return Value.boolean(True)
        if ch == "n":
            self._expect_literal("null")
            return Value.null()

        stream.unread(ch)
        return Value.number(self._read_number())

    def read_array(self) -> Value:
        """Read ``[ ... ]`` and return it as an ARRAY value."""
        self._expect_char("[")
        return self._read_elements()

    def read_object(self) -> dict[str, Value]:
        """Read ``{ ... }`` and return its members as a key-sorted dict.

        Duplicate keys: the last occurrence wins.
        """
        self._expect_char("{")
        return self._read_members()

    def read_pair(self) -> tuple[str, Value] | None:
        """Read one ``key : value`` member, or None at the object's ``}``.

        A ``,`` separating this pair from the previous one is consumed.
        """
        stream = self._stream
        ch = stream.read_significant()
        if ch == ",":
            ch = stream.read_significant()
            if ch == "}" or ch == "]":
                raise self._error("quoted key after ','", ch)

        if ch == "}" or ch == "]":
            if ch == "]" and self._config.strict_terminators:
                raise self._error("quoted key or '}'", ch)
            return None
        if not self._is_quote(ch):
            raise self._error("quoted key or '}'", ch)

        key = self._read_string_body(ch)
        colon = stream.read_significant()
        if colon != ":":
            raise self._error("':'", colon)

        value = self.read_value()
        if not value:
            raise MalformedInputError(stream.offset - 1, f"value for key {key!r}", self._closer)
        return key, value

    def read_string(self) -> str:
        """Read a quoted string and return its contents."""
        quote = self._stream.read_significant()
        if not self._is_quote(quote):
            raise self._error("quoted string", quote)
        return self._read_string_body(quote)

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def _read_elements(self) -> Value:
        """Parse array elements after the opening ``[``.

        Freshly parsed children belong to no one else, so they are moved into
        the new container without copying.
        """
        self._enter("[")
        try:
            elements: list[Value] = []
            while element := self.read_value():
                elements.append(element)
        finally:
            self._depth -= 1
        if self._config.strict_terminators and self._closer != "]":
            raise MalformedInputError(self._stream.offset - 1, "']'", self._closer)
        return Value._make(Kind.ARRAY, elements)

    def _read_members(self) -> dict[str, Value]:
        """Parse object members after the opening ``{``."""
        self._enter("{")
        try:
            members: dict[str, Value] = {}
            while (pair := self.read_pair()) is not None:
                key, value = pair
                members[key] = value
        finally:
            self._depth -= 1
        return dict(sorted(members.items(), key=lambda member: member[0]))

    def _enter(self, opener: str) -> None:
        if self._depth >= self._config.max_depth:
            raise DepthLimitError(self._stream.offset - 1, self._config.max_depth, opener)
        self._depth += 1

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def _is_quote(self, ch: str) -> bool:
        return ch == '"' or (ch == "'" and self._config.single_quotes)

    def _read_string_body(self, quote: str) -> str:
        """Read characters up to the matching ``quote`` (already consumed)."""
        stream = self._stream
        chars: list[str] = []
        while True:
            ch = stream.read()
            if not ch:
                raise self._error(f"closing {quote}", ch)
            if ch == quote:
                return "".join(chars)
            if ch == "\\" and self._config.escapes:
                chars.append(self._read_escape())
            else:
                chars.append(ch)

    def _read_escape(self) -> str:
        ch = self._stream.read()
        if ch in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[ch]
        if ch != "u":
            raise self._error("escape character", ch)
        code = self._read_hex4()
        if 0xD800 <= code <= 0xDBFF:
            # A high surrogate must be followed by an escaped low surrogate.
            for expected in "\\u":
                ch = self._stream.read()
                if ch != expected:
                    raise self._error("low surrogate escape", ch)
            low = self._read_hex4()
            if not 0xDC00 <= low <= 0xDFFF:
                raise MalformedInputError(self._stream.offset - 1, "low surrogate", f"\\u{low:04x}")
            code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
        return chr(code)

    def _read_hex4(self) -> int:
        digits: list[str] = []
        for _ in range(4):
            ch = self._stream.read()
            if ch not in _HEX_DIGITS:
                raise self._error("hex digit", ch)
            digits.append(ch)
        return int("".join(digits), 16)

    def _expect_literal(self, word: str) -> None:
        """Match the rest of ``word``; its first character is already consumed."""
        for expected in word[1:]:
            ch = self._stream.read()
            if ch != expected:
                raise self._error(repr(word), ch)

    def _read_number(self) -> float:
        """Read ``[+-]?digits[.digits][(e|E)[+-]?digits]`` and return a float."""
        stream = self._stream
        token: list[str] = []
        ch = stream.read()
        if ch == "+" or ch == "-":
            token.append(ch)
            ch = stream.read()

        ch, whole = self._read_digits(token, ch)
        fraction = 0
        if ch == ".":
            token.append(ch)
            ch, fraction = self._read_digits(token, stream.read())
        if whole == 0 and fraction == 0:
            raise self._error("value" if not token else "digit", ch)

        if ch == "e" or ch == "E":
            token.append(ch)
            ch = stream.read()
            if ch == "+" or ch == "-":
                token.append(ch)
                ch = stream.read()
            ch, exponent = self._read_digits(token, ch)
            if exponent == 0:
                raise self._error("exponent digit", ch)

        if ch:
            stream.unread(ch)
        return float("".join(token))

    def _read_digits(self, token: list[str], ch: str) -> tuple[str, int]:
        """Append consecutive ASCII digits starting at ``ch``; return (next, count)."""
        count = 0
        while ch in _DIGITS:
            token.append(ch)
            count += 1
            ch = self._stream.read()
        return ch, count

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def _expect_char(self, expected: str) -> None:
        ch = self._stream.read_significant()
        if ch != expected:
            raise self._error(repr(expected), ch)

    def _error(self, expected: str, found: str) -> MalformedInputError:
        """Build the error for an unexpected, already-consumed ``found``."""
        if not found:
            return UnexpectedEndError(self._stream.offset, expected)
        return MalformedInputError(self._stream.offset - 1, expected, found)
