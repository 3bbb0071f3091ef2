# kring/core/buffer.py
"""
A **generic, fixed-capacity, single-producer / single-consumer ring buffer**.

* Capacity is a power of two, so ``cursor % capacity`` becomes
  ``cursor & mask``.
* The two cursors run freely (64-bit, wrapping like a machine ``size_t``);
  only the *slot index* is masked.  That is what lets ``full`` and ``empty``
  be told apart without a counter and without sacrificing a slot.
* Never overwrites unread data – a write to a full ring returns ``False``.
* **Not** thread-safe.  If producer and consumer live on different threads,
  the caller owns the synchronisation.

Storage is a NumPy array of shape ``(capacity, *shape)``.  The default
``dtype=object`` stores arbitrary Python objects by reference; numeric
dtypes copy values into place.
"""

from __future__ import annotations

import logging
import operator
from typing import Any, Generic, Iterable, Iterator, Mapping, Optional, Tuple, TypeVar

import numpy as np
from numpy.typing import DTypeLike

from kring.core.errors import OutOfRangeError
from kring.core.types import CURSOR_MASK, RingBufferConfig, validate_capacity
from kring.utils.config import get_config_value

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RingBuffer(Generic[T]):
    """Bounded FIFO over a power-of-two array with free-running cursors.

    Parameters
    ----------
    capacity : int
        Number of slots.  Must be a power of two and ≥1.
    dtype : numpy dtype-like, optional
        Element storage type.  ``object`` (default) keeps references.
    shape : tuple[int, ...], optional
        Shape of one element, e.g. ``(3,)`` for xyz samples.
    strict_index : bool, optional
        Reject ``ring[len(ring)]``.  By default that one-past-end index is
        let through (and logged), matching the historical bound check.
    """

    __slots__ = ("_storage", "_mask", "_shape", "_strict", "_cwrite", "_cread")

    def __init__(
        self,
        capacity: int = 64,
        *,
        dtype: DTypeLike = object,
        shape: Tuple[int, ...] = (),
        strict_index: bool = False,
    ) -> None:
        capacity = validate_capacity(capacity)
        self._shape: Tuple[int, ...] = tuple(int(d) for d in shape)
        if any(d < 1 for d in self._shape):
            raise ValueError(f"element shape dimensions must be ≥1 (got {self._shape})")
        self._storage = np.empty((capacity, *self._shape), dtype=dtype)
        self._mask = capacity - 1
        self._strict = bool(strict_index)
        self._cwrite = 0
        self._cread = 0
        logger.debug(
            "RingBuffer created: capacity=%d dtype=%s shape=%s",
            capacity, self._storage.dtype, self._shape,
        )

    @classmethod
    def from_config(
        cls, config: "RingBufferConfig | Mapping[str, Any] | Any"
    ) -> "RingBuffer[Any]":
        """Build a ring from a `RingBufferConfig`, dict or `DictConfig`."""
        defaults = RingBufferConfig()
        shape = get_config_value(config, "shape", defaults.shape) or ()
        return cls(
            get_config_value(config, "capacity", defaults.capacity),
            dtype=get_config_value(config, "dtype", defaults.dtype),
            shape=tuple(shape),
            strict_index=bool(get_config_value(config, "strict_index", defaults.strict_index)),
        )

    # ------------------------------------------------------------------ #
    # cursor arithmetic
    # ------------------------------------------------------------------ #

    def _distance(self) -> int:
        """Unsigned ``write - read``, modulo 2**64."""
        return (self._cwrite - self._cread) & CURSOR_MASK

    def is_empty(self) -> bool:
        """True iff nothing is waiting to be read."""
        return self._cwrite == self._cread

    def is_full(self) -> bool:
        """True iff the cursor distance has reached the capacity bit."""
        return (self._distance() & ~self._mask) != 0

    def count(self) -> int:
        """Masked element count.

        A full ring reports 0 here, the same residue as an empty one; use
        `is_full` / `is_empty` (or ``len``) to tell them apart.
        """
        return self._distance() & self._mask

    def __len__(self) -> int:
        """True number of unread elements, 0..capacity."""
        if self.is_full():
            return self._mask + 1
        return self.count()

    def free(self) -> int:
        """Number of writes that would currently succeed."""
        return self._mask + 1 - len(self)

    # ------------------------------------------------------------------ #
    # producer API
    # ------------------------------------------------------------------ #

    def write(self, value: T) -> bool:
        """Append one element.  Returns False (and changes nothing) if full."""
        if self.is_full():
            return False
        self._store(self._cwrite & self._mask, value)
        self._cwrite = (self._cwrite + 1) & CURSOR_MASK
        return True

    def write_many(self, values: Iterable[T]) -> bool:
        """Append all of *values* in order, or none of them.

        Fails for an empty batch or one larger than `free`.  Numeric input
        is converted and shape-checked before the first element lands, so a
        bad element raises instead of leaving a partial write behind.
        """
        if not hasattr(values, "__len__"):
            values = list(values)
        n = len(values)  # type: ignore[arg-type]
        if n == 0 or n > self.free():
            return False

        if self._storage.dtype != object:
            batch = self._cast(values)
            if batch.shape != (n, *self._shape):
                raise ValueError(
                    f"expected batch shape {(n, *self._shape)}, got {batch.shape}"
                )
            values = batch
        elif self._shape:
            for value in values:  # type: ignore[union-attr]
                self._check_shape(value)

        for value in values:  # type: ignore[union-attr]
            self.write(value)
        return True

    def __lshift__(self, value: T) -> "RingBuffer[T]":
        """``ring << a << b`` – chained writes; a full ring drops silently."""
        self.write(value)
        return self

    # ------------------------------------------------------------------ #
    # consumer API
    # ------------------------------------------------------------------ #

    def _pop(self) -> tuple[bool, Optional[T]]:
        if self.is_empty():
            return False, None
        value = self._load(self._cread & self._mask)
        self._cread = (self._cread + 1) & CURSOR_MASK
        return True, value

    def try_read(self) -> tuple[bool, Optional[T]]:
        """Consume the oldest element.  Returns ``(ok, value)``."""
        return self._pop()

    def read(self, default: Optional[T] = None) -> Optional[T]:
        """Consume the oldest element, or return *default* if empty."""
        ok, value = self._pop()
        return value if ok else default

    # ------------------------------------------------------------------ #
    # positional access (non-consuming)
    # ------------------------------------------------------------------ #

    def __getitem__(self, index: int) -> T:
        """Return the *index*-th oldest unread element.

        Raises `OutOfRangeError` when the ring is empty, for negative
        indices, or when ``index > len(self)``.  ``index == len(self)``
        passes unless ``strict_index`` is set; it reads a stale slot.
        """
        try:
            i = operator.index(index)
        except TypeError:
            raise TypeError(
                f"ring buffer indices must be integers, not {type(index).__name__}"
            ) from None

        size = len(self)
        if size == 0 or i < 0 or i > size or (self._strict and i == size):
            raise OutOfRangeError(
                f"index {i} located in invalid range for ring buffer of length {size}"
            )
        if i == size:
            logger.warning(
                "one-past-end access ring[%d] with %d unread elements returns a stale slot",
                i, size,
            )
        return self._load((self._cread + i) & self._mask)

    def first(self) -> T:
        """Oldest unread element, without consuming it."""
        return self[0]

    def last(self) -> T:
        """Newest element, without consuming it."""
        if self.is_empty():
            raise OutOfRangeError("last() on an empty ring buffer")
        return self[len(self) - 1]

    def __iter__(self) -> Iterator[T]:
        """Oldest-to-newest walk over the unread elements."""
        for i in range(len(self)):
            yield self._load((self._cread + i) & self._mask)

    def snapshot(self) -> np.ndarray:
        """Ordered copy of the unread elements, shape ``(len, *shape)``."""
        slots = np.asarray(
            [(self._cread + i) & self._mask for i in range(len(self))],
            dtype=np.intp,
        )
        return self._storage[slots]

    # ------------------------------------------------------------------ #
    # house-keeping
    # ------------------------------------------------------------------ #

    def clear(self) -> None:
        """Reset both cursors.  Storage is left as-is, just unreachable."""
        self._cwrite = 0
        self._cread = 0
        logger.debug("RingBuffer cleared (capacity=%d)", self._mask + 1)

    def physical_view(self) -> np.ndarray:
        """Read-only view of storage from **physical** slot 0.

        Unordered: the oldest element sits at ``read_cursor & mask`` and
        the window may wrap.  Meant for diagnostic dumps, not consumption.
        The result cannot be made writable again; object rings get a frozen
        copy holding the same element references.
        """
        if self._storage.dtype == object:
            # object arrays export no buffer
            frozen = self._storage.copy()
            frozen.flags.writeable = False
            return frozen
        readonly = memoryview(self._storage).cast("B").toreadonly()
        return np.ndarray(self._storage.shape, dtype=self._storage.dtype, buffer=readonly)

    # ------------------------------------------------------------------ #
    # element transfer
    # ------------------------------------------------------------------ #

    def _cast(self, value: Any) -> np.ndarray:
        try:
            return np.asarray(value, dtype=self._storage.dtype)
        except OverflowError as err:
            raise ValueError(f"value out of range for {self._storage.dtype}: {err}") from err

    def _check_shape(self, value: Any) -> np.ndarray:
        arr = self._cast(value)
        if arr.shape != self._shape:
            raise ValueError(f"expected shape {self._shape}, got {arr.shape}")
        return arr

    def _store(self, slot: int, value: Any) -> None:
        if self._shape:
            self._storage[slot, ...] = self._check_shape(value)
        elif self._storage.dtype == object:
            self._storage[slot] = value
        else:
            self._storage[slot] = self._cast(value)

    def _load(self, slot: int) -> Any:
        if self._shape:
            return self._storage[slot].copy()   # producer may overwrite later
        return self._storage[slot]

    # ------------------------------------------------------------------ #
    # introspection
    # ------------------------------------------------------------------ #

    @property
    def capacity(self) -> int:
        return self._mask + 1

    @property
    def mask(self) -> int:
        return self._mask

    @property
    def dtype(self) -> np.dtype:
        return self._storage.dtype

    @property
    def shape(self) -> Tuple[int, ...]:
        return self._shape

    @property
    def strict_index(self) -> bool:
        return self._strict

    @property
    def write_cursor(self) -> int:
        return self._cwrite

    @property
    def read_cursor(self) -> int:
        return self._cread

    def __repr__(self) -> str:
        return (
            f"RingBuffer(capacity={self.capacity}, len={len(self)}, "
            f"dtype={self._storage.dtype}, shape={self._shape})"
        )


__all__ = ["RingBuffer"]
