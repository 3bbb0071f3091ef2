"""kring – fixed-capacity power-of-two ring buffer."""

__version__ = "0.1.0"

from kring.core.buffer import RingBuffer
from kring.core.errors import CapacityError, OutOfRangeError, RingBufferError
from kring.core.ring import Ring
from kring.core.types import RingBufferConfig

__all__ = [
    "RingBuffer",
    "Ring",
    "RingBufferConfig",
    "RingBufferError",
    "CapacityError",
    "OutOfRangeError",
]
