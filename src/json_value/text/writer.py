"""Writer: renders Value trees (and key/value mappings) as text.

The output is the inverse of the Reader's grammar, not strict JSON:

- STRING   -> ``"text"``; contents are copied verbatim unless
  ``TextConfig.escapes`` is set, so an embedded ``"`` is not escaped.
- NUMBER   -> integral values without a fraction (``3``), everything else
  as the shortest repr that reads back exactly (``0.1``, ``1e+300``).
  ``nan``, ``inf`` and ``-inf`` are written as such and do not read back.
- ARRAY    -> ``[a,b,c]``
- OBJECT   -> ``{"k":v,...}`` in sorted key order
- TRUE / FALSE / NULL -> ``true`` / ``false`` / ``null``
- INT32 / INT64 -> decimal integer (reads back as NUMBER)
- DATE     -> POSIX seconds (reads back as NUMBER)
- BYTES    -> the raw byte values as latin-1 characters, unquoted; this is
  not readable text and BYTES values must not be round-tripped through it.
- UNDEFINED -> ``*undefined*``
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Protocol

from json_value.model.kinds import Kind
from json_value.model.value import Value, _check_key
from json_value.text.config import TextConfig

__all__ = ["Writer"]

_CONTROL_ESCAPES = {
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
_ESCAPE_TABLE: dict[int, str] = {code: f"\\u{code:04x}" for code in range(0x20)}
_ESCAPE_TABLE.update({ord(ch): escaped for ch, escaped in _CONTROL_ESCAPES.items()})
_ESCAPE_TABLE.update({ord('"'): '\\"', ord("\\"): "\\\\"})


class TextSink(Protocol):
    def write(self, text: str, /) -> Any: ...


class Writer:
    """Stateless renderer from Value trees to text.

    Example::

        writer = Writer()
        writer.write(Value([1.0, "a", True]))   # '[1,"a",true]'
        writer.write_object({"b": 2, "a": 1})   # '{"a":1,"b":2}'
    """

    def __init__(self, config: TextConfig | None = None) -> None:
        self._config: TextConfig = config if config is not None else TextConfig()

    def write(self, value: Value) -> str:
        """Render ``value`` and return the text."""
        out: list[str] = []
        self._render(value, out)
        return "".join(out)

    def write_object(self, members: Mapping[str, Any]) -> str:
        """Render a key/value mapping as an object, keys in sorted order.

        Member values may be Values or literals ``Value.from_python`` accepts.
        Keys must be strings; any other key raises ``TypeError``.
        """
        out: list[str] = []
        self._render_members(
            {_check_key(key): _as_value(member) for key, member in members.items()}, out
        )
        return "".join(out)

    def write_to(self, value: Value, sink: TextSink) -> None:
        """Render ``value`` into a text file-like ``sink``."""
        sink.write(self.write(value))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render(self, value: Value, out: list[str]) -> None:
        kind = value.kind
        payload = value.payload

        if kind == Kind.STRING:
            out.append(self._quote(payload))
        elif kind == Kind.NUMBER:
            out.append(_format_number(payload))
        elif kind == Kind.ARRAY:
            out.append("[")
            for i, element in enumerate(payload):
                if i:
                    out.append(",")
                self._render(element, out)
            out.append("]")
        elif kind == Kind.OBJECT:
            self._render_members(payload, out)
        elif kind == Kind.TRUE:
            out.append("true")
        elif kind == Kind.FALSE:
            out.append("false")
        elif kind == Kind.NULL:
            out.append("null")
        elif kind == Kind.BYTES:
            out.append(payload.decode("latin-1"))
        elif kind in (Kind.INT32, Kind.INT64):
            out.append(str(payload))
        elif kind == Kind.DATE:
            out.append(str(math.floor(payload.timestamp())))
        else:
            out.append("*undefined*")

    def _render_members(self, members: Mapping[str, Value], out: list[str]) -> None:
        out.append("{")
        for i, key in enumerate(sorted(members)):
            if i:
                out.append(",")
            out.append(self._quote(key))
            out.append(":")
            self._render(members[key], out)
        out.append("}")

    def _quote(self, text: str) -> str:
        if self._config.escapes:
            text = text.translate(_ESCAPE_TABLE)
        return f'"{text}"'


def _as_value(member: Any) -> Value:
    return member if isinstance(member, Value) else Value.from_python(member)


def _format_number(number: float) -> str:
    if math.isnan(number):
        return "nan"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    if number.is_integer() and abs(number) < 1e16:
        text = str(int(number))
        if text == "0" and math.copysign(1.0, number) < 0:
            return "-0"
        return text
    return repr(number)
