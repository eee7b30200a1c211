"""Ordering and equality relation over ``Value`` trees.

A single ``compare()`` function defines the relation; ``Value``'s rich
comparison operators are all derived from its result.

Rules, in order:

1. Different kinds order by ``Kind`` declaration order and are never equal,
   except that FALSE sorts before TRUE.  Both booleans still sit between
   ARRAY and NULL.
2. Same kind compares payloads:

   - STRING, BYTES, INT32, INT64, DATE: natural order of the payload.
     Strings compare full-length by code point, which matches UTF-8 byte
     order, so embedded NUL characters compare correctly.
   - NUMBER: IEEE-754.  A NaN operand makes the pair UNORDERED, so ``==``,
     ``<`` and ``>`` are all False, exactly as for native floats.
   - ARRAY: lexicographic by element; a proper prefix sorts first.
   - OBJECT: lexicographic over (key, value) pairs in key order.
   - TRUE, FALSE, NULL, UNDEFINED: payload-free, so same kind is EQUAL.

An UNORDERED element inside an array or object makes the containers
UNORDERED as well.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any

from json_value.model.kinds import Kind

if TYPE_CHECKING:
    from json_value.model.value import Value

__all__ = ["Ordering", "compare"]


class Ordering(Enum):
    """Three-way comparison result plus UNORDERED for NaN-bearing pairs."""

    LESS = -1
    EQUAL = 0
    GREATER = 1
    UNORDERED = 2

    def reverse(self) -> Ordering:
        """Return the ordering seen from the other operand's side."""
        if self is Ordering.LESS:
            return Ordering.GREATER
        if self is Ordering.GREATER:
            return Ordering.LESS
        return self


_PAYLOAD_FREE = frozenset({Kind.TRUE, Kind.FALSE, Kind.NULL, Kind.UNDEFINED})


def compare(a: Value, b: Value) -> Ordering:
    """Compare two values and return their ``Ordering``.

    Args:
        a: Left value.
        b: Right value.

    Returns:
        LESS, EQUAL or GREATER; UNORDERED when a NaN number takes part.
    """
    if a.kind != b.kind:
        if a.kind.is_boolean and b.kind.is_boolean:
            return Ordering.LESS if a.kind == Kind.FALSE else Ordering.GREATER
        return Ordering.LESS if a.kind < b.kind else Ordering.GREATER

    kind = a.kind
    if kind in _PAYLOAD_FREE:
        return Ordering.EQUAL
    if kind == Kind.NUMBER:
        return _compare_numbers(a.payload, b.payload)
    if kind == Kind.ARRAY:
        return _compare_sequences(a.payload, b.payload)
    if kind == Kind.OBJECT:
        return _compare_mappings(a.payload, b.payload)
    return _compare_scalars(a.payload, b.payload)


def _compare_scalars(x: Any, y: Any) -> Ordering:
    if x < y:
        return Ordering.LESS
    if y < x:
        return Ordering.GREATER
    return Ordering.EQUAL


def _compare_numbers(x: float, y: float) -> Ordering:
    if math.isnan(x) or math.isnan(y):
        return Ordering.UNORDERED
    return _compare_scalars(x, y)


def _compare_sequences(xs: Sequence[Value], ys: Sequence[Value]) -> Ordering:
    for x, y in zip(xs, ys):
        result = compare(x, y)
        if result is not Ordering.EQUAL:
            return result
    return _compare_scalars(len(xs), len(ys))


def _compare_mappings(xs: Mapping[str, Value], ys: Mapping[str, Value]) -> Ordering:
    # Object payloads keep their keys sorted, so iteration order is key order.
    for (kx, vx), (ky, vy) in zip(xs.items(), ys.items()):
        if kx != ky:
            return Ordering.LESS if kx < ky else Ordering.GREATER
        result = compare(vx, vy)
        if result is not Ordering.EQUAL:
            return result
    return _compare_scalars(len(xs), len(ys))
