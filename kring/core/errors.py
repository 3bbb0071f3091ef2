"""Exceptions raised by the ring buffer."""


class RingBufferError(Exception):
    """Base class for all ring-buffer errors."""


class CapacityError(RingBufferError, ValueError):
    """Capacity is zero, negative, or not a power of two."""


class OutOfRangeError(RingBufferError, IndexError):
    """Positional access outside the readable window."""


__all__ = ["RingBufferError", "CapacityError", "OutOfRangeError"]
