"""Value: an owning, mutable wrapper around one kind-tagged payload.

A ``Value`` pairs a ``Kind`` with exactly one payload interpretation:

==========  ======================================================
Kind        Payload
==========  ======================================================
STRING      ``str``
NUMBER      ``float``
OBJECT      ``dict[str, Value]`` kept in sorted key order
ARRAY       ``list[Value]``
BYTES       ``bytes``
INT32       ``int`` within the signed 32-bit range
INT64       ``int`` within the signed 64-bit range
DATE        timezone-aware UTC ``datetime``
TRUE        ``None``
FALSE       ``None``
NULL        ``None``
UNDEFINED   ``None``
==========  ======================================================

Values have value semantics.  Every way of putting one value into another
(``assign``, ``append``, ``extend``, item assignment, the typed constructors)
stores a deep copy, so no two values ever share a mutable array or object.
Plain Python name binding (``b = a``) still aliases, as it does for any
Python object; use ``a.copy()`` or ``b.assign(a)`` for an independent copy.

Example::

    from json_value import Value

    v = Value("x")
    v.append(5.0)          # promotion: v is now ["x", 5]
    assert v == ["x", 5.0]
    assert v[1] == 5.0
"""

from __future__ import annotations

import operator
from collections.abc import Iterable, Iterator, Mapping
from datetime import datetime, timezone
from typing import Any

import numpy as np

from json_value.errors import KindError, OutOfRangeError
from json_value.model.kinds import Kind
from json_value.model.ordering import Ordering, compare

__all__ = ["Value"]

_INT32 = np.iinfo(np.int32)
_INT64 = np.iinfo(np.int64)

# Distinguishes ``Value()`` (UNDEFINED) from ``Value(None)`` (NULL).
_UNSET: Any = object()


class Value:
    """A kind-tagged JSON value with BSON-style extensions.

    ``Value()`` is UNDEFINED.  ``Value(literal)`` converts a native Python
    literal with ``Value.from_python``.  The typed classmethod constructors
    (``string``, ``number``, ``array`` ...) build one specific kind.
    """

    __slots__ = ("_kind", "_payload")

    def __init__(self, literal: Any = _UNSET) -> None:
        self._kind: Kind = Kind.UNDEFINED
        self._payload: Any = None
        if literal is not _UNSET:
            self.assign(literal)

    # ------------------------------------------------------------------
    # Typed constructors
    # ------------------------------------------------------------------

    @classmethod
    def _make(cls, kind: Kind, payload: Any = None) -> Value:
        value = cls()
        value._kind = kind
        value._payload = payload
        return value

    @classmethod
    def string(cls, text: str) -> Value:
        if not isinstance(text, str):
            raise TypeError(f"string payload must be str, got {type(text).__name__}")
        return cls._make(Kind.STRING, text)

    @classmethod
    def number(cls, number: float) -> Value:
        return cls._make(Kind.NUMBER, float(number))

    @classmethod
    def array(cls, items: int | Iterable[Any] = 0) -> Value:
        """Build an ARRAY.

        Args:
            items: Either an element count ``n`` (producing ``n`` UNDEFINED
                elements) or an iterable of values/literals, each copied in.
        """
        if isinstance(items, int) and not isinstance(items, bool):
            if items < 0:
                raise ValueError(f"array size must be >= 0, got {items}")
            return cls._make(Kind.ARRAY, [cls() for _ in range(items)])
        return cls._make(Kind.ARRAY, [_owned(item) for item in items])

    @classmethod
    def object_(cls, members: Mapping[str, Any] | Iterable[tuple[str, Any]] = ()) -> Value:
        """Build an OBJECT from a mapping or (key, value) pairs.

        Keys must be strings.  With repeated keys the last one wins.
        """
        pairs = members.items() if isinstance(members, Mapping) else members
        payload: dict[str, Value] = {}
        for key, item in pairs:
            payload[_check_key(key)] = _owned(item)
        return cls._make(Kind.OBJECT, _sorted_members(payload))

    @classmethod
    def bytes_(cls, data: bytes | bytearray | memoryview) -> Value:
        return cls._make(Kind.BYTES, bytes(data))

    @classmethod
    def boolean(cls, flag: bool) -> Value:
        return cls._make(Kind.TRUE if flag else Kind.FALSE)

    @classmethod
    def null(cls) -> Value:
        return cls._make(Kind.NULL)

    @classmethod
    def int32(cls, number: int) -> Value:
        """Build an INT32; raises ``OverflowError`` outside the 32-bit range."""
        return cls._make(Kind.INT32, _fixed_width(number, _INT32, "int32"))

    @classmethod
    def int64(cls, number: int) -> Value:
        """Build an INT64; raises ``OverflowError`` outside the 64-bit range."""
        return cls._make(Kind.INT64, _fixed_width(number, _INT64, "int64"))

    @classmethod
    def date(cls, instant: datetime | float | np.datetime64) -> Value:
        """Build a DATE from a datetime, POSIX seconds, or ``numpy.datetime64``.

        Naive datetimes are taken to be UTC.  The payload is always an aware
        UTC ``datetime``.
        """
        return cls._make(Kind.DATE, _utc_instant(instant))

    @classmethod
    def from_python(cls, obj: Any) -> Value:
        """Convert a native Python (or numpy) literal into a fresh Value.

        Mapping: ``str`` -> STRING, ``int``/``float`` -> NUMBER,
        ``bool`` -> TRUE/FALSE, ``None`` -> NULL, bytes-like -> BYTES,
        ``datetime`` -> DATE, mappings -> OBJECT, lists/tuples -> ARRAY,
        ``numpy.int32``/``numpy.int64`` -> INT32/INT64, other numpy
        integers and floats -> NUMBER, ``numpy.datetime64`` -> DATE.
        An existing ``Value`` is deep-copied.

        Raises:
            TypeError: If ``obj`` has no corresponding kind.
        """
        if isinstance(obj, Value):
            return obj.copy()
        # bool (and numpy's bool_) must be checked before the integer types
        if isinstance(obj, (bool, np.bool_)):
            return cls.boolean(bool(obj))
        if isinstance(obj, np.int32):
            return cls.int32(int(obj))
        if isinstance(obj, np.int64):
            return cls.int64(int(obj))
        if isinstance(obj, (int, float, np.integer, np.floating)):
            return cls.number(float(obj))
        if isinstance(obj, str):
            return cls.string(obj)
        if obj is None:
            return cls.null()
        if isinstance(obj, (bytes, bytearray, memoryview)):
            return cls.bytes_(obj)
        if isinstance(obj, (datetime, np.datetime64)):
            return cls.date(obj)
        if isinstance(obj, Mapping):
            return cls.object_(obj)
        if isinstance(obj, (list, tuple)):
            return cls.array(obj)
        raise TypeError(f"Unsupported value type: {type(obj)!r}")

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def kind(self) -> Kind:
        return self._kind

    @property
    def payload(self) -> Any:
        """The raw payload.  Treat containers as read-only; mutate via Value."""
        return self._payload

    def __bool__(self) -> bool:
        """True for every kind except UNDEFINED ("is a value present?")."""
        return self._kind is not Kind.UNDEFINED

    def __len__(self) -> int:
        """Element count for ARRAY/OBJECT, payload length for STRING/BYTES.

        STRING length counts code points, as ``len(str)`` does; use
        ``len(v.as_str().encode())`` for the UTF-8 byte count.
        """
        if self._kind in (Kind.ARRAY, Kind.OBJECT, Kind.STRING, Kind.BYTES):
            return len(self._payload)
        raise KindError("array, object, string or bytes", self._kind.label)

    def __iter__(self) -> Iterator[Any]:
        """Iterate array elements, or object keys in sorted order."""
        if self._kind in (Kind.ARRAY, Kind.OBJECT):
            return iter(self._payload)
        raise KindError("array or object", self._kind.label)

    def __contains__(self, item: object) -> bool:
        if self._kind == Kind.OBJECT:
            return item in self._payload
        if self._kind == Kind.ARRAY:
            return any(element == item for element in self._payload)
        raise KindError("array or object", self._kind.label)

    # ------------------------------------------------------------------
    # Copy / assignment
    # ------------------------------------------------------------------

    def copy(self) -> Value:
        """Return a deep copy sharing no mutable storage with ``self``."""
        return Value._make(self._kind, _copy_payload(self._kind, self._payload))

    def __copy__(self) -> Value:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Value:
        return self.copy()

    def assign(self, other: Any) -> Value:
        """Replace this value's kind and payload with a deep copy of ``other``.

        ``other`` may be a ``Value`` or any literal ``from_python`` accepts.
        Self-assignment is a no-op.  Returns ``self``.
        """
        if other is self:
            return self
        fresh = _owned(other)
        self._kind = fresh._kind
        self._payload = fresh._payload
        return self

    def clear(self) -> None:
        """Release the payload and reset to UNDEFINED."""
        self._kind = Kind.UNDEFINED
        self._payload = None

    def set_string(self, text: str) -> Value:
        return self.assign(Value.string(text))

    def set_number(self, number: float) -> Value:
        return self.assign(Value.number(number))

    def set_boolean(self, flag: bool) -> Value:
        return self.assign(Value.boolean(flag))

    def set_null(self) -> Value:
        return self.assign(Value.null())

    def set_bytes(self, data: bytes | bytearray | memoryview) -> Value:
        return self.assign(Value.bytes_(data))

    def set_date(self, instant: datetime | float | np.datetime64) -> Value:
        return self.assign(Value.date(instant))

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------

    def __getitem__(self, index: int | str) -> Value:
        """Return the live element at ``index`` (ARRAY) or member ``index`` (OBJECT).

        Raises:
            OutOfRangeError: Array index outside ``[-len, len)``.
            KeyError:        Object has no such key.
            KindError:       Value is neither ARRAY nor OBJECT.
        """
        if self._kind == Kind.ARRAY:
            return self._payload[self._check_index(index)]
        if self._kind == Kind.OBJECT:
            return self._payload[_check_key(index)]
        raise KindError("array or object", self._kind.label)

    def __setitem__(self, index: int | str, item: Any) -> None:
        """Store a copy of ``item`` at an array index or under an object key.

        Assigning to a new object key inserts it, keeping keys sorted.
        """
        if self._kind == Kind.ARRAY:
            self._payload[self._check_index(index)] = _owned(item)
        elif self._kind == Kind.OBJECT:
            key = _check_key(index)
            if key in self._payload:
                self._payload[key] = _owned(item)
            else:
                self._payload = _sorted_members({**self._payload, key: _owned(item)})
        else:
            raise KindError("array or object", self._kind.label)

    def __delitem__(self, key: str) -> None:
        if self._kind != Kind.OBJECT:
            raise KindError("object", self._kind.label)
        del self._payload[_check_key(key)]

    def _check_index(self, index: Any) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"array index must be int, got {type(index).__name__}")
        size = len(self._payload)
        if not -size <= index < size:
            raise OutOfRangeError(index, size)
        return index

    # ------------------------------------------------------------------
    # Append with promotion
    # ------------------------------------------------------------------

    def append(self, item: Any) -> Value:
        """Append a copy of ``item`` as one element.

        UNDEFINED becomes ``[item]``; any other non-array value ``v`` becomes
        ``[v, item]``; an array grows by one at the end.  An ARRAY ``item`` is
        appended as a single nested element (see ``extend`` to concatenate).
        Returns ``self``.
        """
        element = _owned(item)
        self._promote()
        self._payload.append(element)
        return self

    def extend(self, items: Value | Iterable[Any]) -> Value:
        """Concatenate copies of ``items`` onto this value.

        ``items`` is an ARRAY value or an iterable of values/literals.  The
        same promotion rules as ``append`` apply.  Returns ``self``.
        """
        if isinstance(items, Value):
            if items._kind != Kind.ARRAY:
                raise KindError("array", items._kind.label)
            elements = [element.copy() for element in items._payload]
        else:
            elements = [_owned(item) for item in items]
        self._promote()
        self._payload.extend(elements)
        return self

    def _promote(self) -> None:
        if self._kind == Kind.ARRAY:
            return
        elements = [] if self._kind == Kind.UNDEFINED else [Value._make(self._kind, self._payload)]
        self._kind = Kind.ARRAY
        self._payload = elements

    # ------------------------------------------------------------------
    # Typed accessors
    # ------------------------------------------------------------------

    def _expect(self, *kinds: Kind) -> Any:
        if self._kind not in kinds:
            raise KindError(" or ".join(kind.label for kind in kinds), self._kind.label)
        return self._payload

    def as_str(self) -> str:
        return self._expect(Kind.STRING)

    def as_float(self) -> float:
        return self._expect(Kind.NUMBER)

    def as_bool(self) -> bool:
        self._expect(Kind.TRUE, Kind.FALSE)
        return self._kind == Kind.TRUE

    def as_bytes(self) -> bytes:
        return self._expect(Kind.BYTES)

    def as_int(self) -> int:
        return self._expect(Kind.INT32, Kind.INT64)

    def as_datetime(self) -> datetime:
        return self._expect(Kind.DATE)

    def as_list(self) -> list[Value]:
        """Shallow list of the live element values."""
        return list(self._expect(Kind.ARRAY))

    def as_dict(self) -> dict[str, Value]:
        """Shallow dict of the live member values, in key order."""
        return dict(self._expect(Kind.OBJECT))

    def to_python(self) -> Any:
        """Recursively convert to native Python values.

        Raises:
            KindError: If the tree contains an UNDEFINED value.
        """
        kind = self._kind
        if kind == Kind.ARRAY:
            return [element.to_python() for element in self._payload]
        if kind == Kind.OBJECT:
            return {key: member.to_python() for key, member in self._payload.items()}
        if kind.is_boolean:
            return kind == Kind.TRUE
        if kind == Kind.NULL:
            return None
        if kind == Kind.UNDEFINED:
            raise KindError("defined", kind.label)
        return self._payload

    # ------------------------------------------------------------------
    # Ordering / equality
    # ------------------------------------------------------------------

    def compare(self, other: Any) -> Ordering:
        """Three-way compare against a Value or a convertible literal.

        Raises:
            TypeError: If ``other`` cannot be converted to a Value.
        """
        return compare(self, other if isinstance(other, Value) else Value.from_python(other))

    def __eq__(self, other: object) -> bool:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return compare(self, operand) is Ordering.EQUAL

    def __ne__(self, other: object) -> bool:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return compare(self, operand) is not Ordering.EQUAL

    def __lt__(self, other: object) -> bool:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return compare(self, operand) is Ordering.LESS

    def __le__(self, other: object) -> bool:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return compare(self, operand) in (Ordering.LESS, Ordering.EQUAL)

    def __gt__(self, other: object) -> bool:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return compare(self, operand) is Ordering.GREATER

    def __ge__(self, other: object) -> bool:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return compare(self, operand) in (Ordering.GREATER, Ordering.EQUAL)

    # Mutable, so unhashable.
    __hash__ = None  # type: ignore[assignment]

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        if self._payload is None:
            return f"Value({self._kind.name})"
        return f"Value({self._kind.name}, {self._payload!r})"

    def __str__(self) -> str:
        from json_value.text.writer import Writer

        return Writer().write(self)


# ---------------------------------------------------------------------------
# Module helpers
# ---------------------------------------------------------------------------


def _owned(item: Any) -> Value:
    """Return a Value the caller exclusively owns (copy or fresh conversion)."""
    return item.copy() if isinstance(item, Value) else Value.from_python(item)


def _operand(other: object) -> Value | None:
    if isinstance(other, Value):
        return other
    try:
        return Value.from_python(other)
    except (TypeError, ValueError, OverflowError):
        return None


def _copy_payload(kind: Kind, payload: Any) -> Any:
    if kind == Kind.ARRAY:
        return [element.copy() for element in payload]
    if kind == Kind.OBJECT:
        return {key: member.copy() for key, member in payload.items()}
    # Remaining payloads are immutable.
    return payload


def _sorted_members(members: dict[str, Value]) -> dict[str, Value]:
    return dict(sorted(members.items(), key=lambda pair: pair[0]))


def _check_key(key: Any) -> str:
    if not isinstance(key, str):
        raise TypeError(f"object key must be str, got {type(key).__name__}")
    return key


def _fixed_width(number: Any, info: np.iinfo, label: str) -> int:
    if isinstance(number, (bool, np.bool_)):
        raise TypeError(f"{label} payload must be an integer, got bool")
    value = operator.index(number)
    if not int(info.min) <= value <= int(info.max):
        raise OverflowError(f"{value} outside {label} range [{info.min}, {info.max}]")
    return value


def _utc_instant(instant: Any) -> datetime:
    if isinstance(instant, np.datetime64):
        instant = instant.astype("datetime64[us]").astype(datetime)
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            return instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(timezone.utc)
    if isinstance(instant, bool) or not isinstance(instant, (int, float)):
        raise TypeError(f"date payload must be datetime or seconds, got {type(instant).__name__}")
    return datetime.fromtimestamp(instant, tz=timezone.utc)
