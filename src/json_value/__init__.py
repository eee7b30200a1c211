"""json-value - JSON values with BSON-style extensions, plus a text reader and writer."""

from __future__ import annotations

from json_value.api import (
    dump,
    dumps,
    dumps_object,
    iter_values,
    load,
    loads,
    loads_object,
)
from json_value.errors import (
    DepthLimitError,
    KindError,
    MalformedInputError,
    OutOfRangeError,
    UnexpectedEndError,
    ValueModelError,
)
from json_value.model import Kind, Ordering, Value, compare
from json_value.text import CharStream, Reader, TextConfig, Writer

__version__: str = "0.1.0"
__all__: list[str] = [
    "CharStream",
    "DepthLimitError",
    "Kind",
    "KindError",
    "MalformedInputError",
    "Ordering",
    "OutOfRangeError",
    "Reader",
    "TextConfig",
    "UnexpectedEndError",
    "Value",
    "ValueModelError",
    "Writer",
    "compare",
    "dump",
    "dumps",
    "dumps_object",
    "iter_values",
    "load",
    "loads",
    "loads_object",
]
