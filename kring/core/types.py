"""Defines config dataclasses and capacity helpers for the ring buffer."""

import operator
from dataclasses import dataclass
from typing import Tuple

from kring.core.errors import CapacityError

CURSOR_BITS = 64
CURSOR_MASK = (1 << CURSOR_BITS) - 1


@dataclass(frozen=True)
class RingBufferConfig:
    """Static options used to build a `RingBuffer`."""

    capacity: int = 64
    dtype: str = "object"
    shape: Tuple[int, ...] = ()
    strict_index: bool = False


def is_power_of_two(value: int) -> bool:
    """Return True if *value* is a positive power of two."""
    return value > 0 and (value & (value - 1)) == 0


def validate_capacity(capacity: object) -> int:
    """Return *capacity* as a plain int, or raise `CapacityError`."""
    # bool is an int subclass; True would otherwise pass as capacity 1
    if isinstance(capacity, bool):
        raise CapacityError(f"capacity must be an integer (got {capacity!r})")
    try:
        value = operator.index(capacity)
    except TypeError:
        raise CapacityError(f"capacity must be an integer (got {capacity!r})") from None
    if not is_power_of_two(value):
        raise CapacityError(
            "capacity must be a power of two and ≥1 "
            f"(got {value})"
        )
    return value
