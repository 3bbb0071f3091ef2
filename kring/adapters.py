"""
Opt-in interop helpers layered over the core `RingBuffer`.

* `write_bytes` – ingest any buffer-protocol object (bytes, bytearray,
  memoryview, ndarray) into a numeric ring
* `drain` – consume everything currently readable
* `is_ring` – structural check against the `Ring` protocol

None of these add semantics; they are pass-throughs to the core API.
"""

from __future__ import annotations

from typing import Any, Iterator, TypeVar

import numpy as np

from kring.core.buffer import RingBuffer
from kring.core.ring import Ring

T = TypeVar("T")

__all__ = ["write_bytes", "drain", "is_ring"]


def write_bytes(ring: RingBuffer[Any], data: Any) -> bool:
    """Reinterpret *data* as ``ring.dtype`` elements and bulk-write them.

    All-or-nothing, exactly like `RingBuffer.write_many`.  For a ``uint8``
    ring every byte is one element; wider dtypes consume ``itemsize`` bytes
    (times the element shape) per element.
    """
    if ring.dtype == object:
        raise TypeError("write_bytes needs a numeric ring, not dtype=object")

    raw = memoryview(data).cast("B")
    if not raw.nbytes:
        return False
    elem_bytes = ring.dtype.itemsize * int(np.prod(ring.shape, dtype=np.int64))
    if raw.nbytes % elem_bytes:
        raise ValueError(
            f"{raw.nbytes} bytes is not a whole number of "
            f"{elem_bytes}-byte elements"
        )
    elems = np.frombuffer(raw, dtype=ring.dtype).reshape((-1, *ring.shape))
    return ring.write_many(elems)


def drain(ring: Ring[T]) -> Iterator[T]:
    """Yield elements oldest-first until the ring reports empty."""
    while True:
        ok, value = ring.try_read()
        if not ok:
            return
        yield value  # type: ignore[misc]


def is_ring(obj: object) -> bool:
    """`True` if *obj* structurally satisfies `Ring`."""
    return isinstance(obj, Ring)
