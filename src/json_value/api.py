"""Public API functions for json-value.

Module-level shortcuts over ``Reader`` and ``Writer``.  Each call creates a
fresh Reader or Writer, so no state is shared between calls.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from json_value.model.value import Value
from json_value.text.config import TextConfig
from json_value.text.reader import Reader
from json_value.text.stream import TextSource
from json_value.text.writer import TextSink, Writer

__all__ = [
    "dump",
    "dumps",
    "dumps_object",
    "iter_values",
    "load",
    "loads",
    "loads_object",
]


def loads(text: str, config: TextConfig | None = None) -> Value:
    """Parse the first value in ``text``.

    Text after the first complete value is ignored; use ``iter_values`` to
    read every value in a stream.

    Args:
        text:   Source text.
        config: Reader options.  Defaults to ``TextConfig()`` when None.

    Returns:
        The parsed value.

    Raises:
        MalformedInputError: If the text does not start with a valid value.
    """
    return Reader(text, config=config).read_document()


def load(fp: TextSource, config: TextConfig | None = None) -> Value:
    """Parse the first value from a text file-like object."""
    return Reader(fp, config=config).read_document()


def loads_object(text: str, config: TextConfig | None = None) -> dict[str, Value]:
    """Parse ``{ ... }`` from ``text`` and return its members as a key-sorted dict."""
    return Reader(text, config=config).read_object()


def iter_values(
    source: str | TextSource,
    config: TextConfig | None = None,
) -> Iterator[Value]:
    """Yield every top-level value in ``source``, in order.

    Values may be separated by whitespace or commas.
    """
    return iter(Reader(source, config=config))


def dumps(value: Any, config: TextConfig | None = None) -> str:
    """Render a Value (or any literal ``Value.from_python`` accepts) as text."""
    if not isinstance(value, Value):
        value = Value.from_python(value)
    return Writer(config=config).write(value)


def dump(value: Any, fp: TextSink, config: TextConfig | None = None) -> None:
    """Render ``value`` into a text file-like object."""
    fp.write(dumps(value, config=config))


def dumps_object(members: Mapping[str, Any], config: TextConfig | None = None) -> str:
    """Render a key/value mapping as ``{"key":value,...}`` in sorted key order."""
    return Writer(config=config).write_object(members)
