"""Example script that hands samples from a producer to a consumer.

Streams xyz samples into a small `kring.RingBuffer`, consuming them at a
slower rate than they are produced, so the producer regularly sees a full
ring and has to back off instead of overwriting unread samples.
"""

import logging
import math

import colorlogging
import numpy as np

from kring import RingBuffer
from kring.adapters import drain, write_bytes

logger = logging.getLogger(__name__)

CAPACITY = 8
STEPS = 64


def run_spsc_demo() -> None:
    """Run the producer / consumer loop and log what happens."""
    ring: RingBuffer[np.ndarray] = RingBuffer(CAPACITY, dtype=np.float64, shape=(3,))
    logger.info("Created %r", ring)

    dropped = 0
    consumed = 0

    for step in range(STEPS):
        t = step * 0.1
        sample = np.array([math.cos(t), math.sin(t), t])

        # Producer: never overwrites, so a full ring means back off
        if not ring.write(sample):
            dropped += 1

        # Consumer runs at a third of the producer's rate
        if step % 3 == 0:
            ok, xyz = ring.try_read()
            if ok:
                consumed += 1
                logger.debug("step %d consumed %s", step, xyz)

    logger.info("Consumed %d, dropped %d, %d still buffered", consumed, dropped, len(ring))
    logger.info("Oldest %s, newest %s", ring.first(), ring.last())

    # Physical layout is unordered; only good for a diagnostic dump
    logger.info("Physical slots (read cursor at %d):\n%s", ring.read_cursor & ring.mask, ring.physical_view())

    remaining = list(drain(ring))
    logger.info("Drained %d samples, ring empty: %s", len(remaining), ring.is_empty())

    # Byte stream into a uint8 ring, all-or-nothing
    byte_ring = RingBuffer(16, dtype=np.uint8)
    logger.info("write_bytes(12 bytes) -> %s", write_bytes(byte_ring, b"hello, ring!"))
    logger.info("write_bytes(8 more)   -> %s (only %d free)", write_bytes(byte_ring, b"overflow"), byte_ring.free())
    logger.info("Buffered bytes: %r", bytes(byte_ring.snapshot()))


def main() -> None:
    colorlogging.configure()
    run_spsc_demo()


if __name__ == "__main__":
    main()
