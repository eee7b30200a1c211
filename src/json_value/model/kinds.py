"""Kind IntEnum: the closed set of value kinds.

Declaration order is significant.  When two values of different kinds are
compared, the kind with the smaller integer value sorts first, so every
string sorts before every number, every number before every object, and so
on down to UNDEFINED, which sorts last.
"""

from __future__ import annotations

from enum import IntEnum, auto

__all__ = ["Kind"]


class Kind(IntEnum):
    """Discriminant selecting which payload a ``Value`` carries.

    - STRING    : text
    - NUMBER    : double-precision float
    - OBJECT    : key-sorted mapping of string keys to values
    - ARRAY     : ordered sequence of values
    - TRUE      : boolean true (no payload)
    - FALSE     : boolean false (no payload)
    - NULL      : null (no payload)
    - BYTES     : raw byte sequence (extended)
    - INT32     : signed 32-bit integer (extended)
    - INT64     : signed 64-bit integer (extended)
    - DATE      : UTC time instant (extended)
    - UNDEFINED : "no value"; also the reader's end-of-sequence marker
    """

    STRING = auto()
    NUMBER = auto()
    OBJECT = auto()
    ARRAY = auto()
    TRUE = auto()
    FALSE = auto()
    NULL = auto()
    BYTES = auto()
    INT32 = auto()
    INT64 = auto()
    DATE = auto()
    UNDEFINED = auto()

    @property
    def label(self) -> str:
        """Lowercase name used in error messages (``"array"``, ``"int32"``)."""
        return self.name.lower()

    @property
    def is_container(self) -> bool:
        return self in (Kind.OBJECT, Kind.ARRAY)

    @property
    def is_boolean(self) -> bool:
        return self in (Kind.TRUE, Kind.FALSE)

    @property
    def is_extended(self) -> bool:
        """True for the BSON-style kinds that have no plain-JSON spelling."""
        return self in (Kind.BYTES, Kind.INT32, Kind.INT64, Kind.DATE)
