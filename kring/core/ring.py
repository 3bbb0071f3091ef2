"""
Structural contract for bounded single-producer / single-consumer rings.

* `Ring` – protocol any ring must satisfy (type-checker contract)
* `RingBuffer` in `kring.core.buffer` is the canonical implementation
"""

from __future__ import annotations

from typing import (
    Optional,
    Protocol,
    Sequence,
    TypeVar,
    runtime_checkable,
)

T = TypeVar("T")


@runtime_checkable
class Ring(Protocol[T]):
    """Minimal API any ring must expose."""

    # producer
    def write(self, value: T) -> bool: ...
    def write_many(self, values: Sequence[T]) -> bool: ...
    # consumer
    def read(self, default: Optional[T] = None) -> Optional[T]: ...
    def try_read(self) -> tuple[bool, Optional[T]]: ...
    # state
    def is_empty(self) -> bool: ...
    def is_full(self) -> bool: ...
    def clear(self) -> None: ...
    def __len__(self) -> int: ...
    @property
    def capacity(self) -> int: ...


__all__ = ["Ring"]
