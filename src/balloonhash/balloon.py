"""
The Mixer: Single-Instance Balloon Hashing

Fill a buffer of digest-sized blocks with a hash chain, then re-mix every
block tCost times, each time absorbing the previous block, the block
itself, and DELTA blocks at pseudorandom indices.

Every hash invocation is framed as

    H(counter || ...)

with counter an 8-byte big-endian integer that starts at 0 and increases
by one per invocation, so no two invocations of a run share a prefix.

Pseudorandom indices depend only on salt and position (t, m, i):

    other = int_be(H(counter || salt || t || m || i)) mod sCost

The whole digest is reduced, not a truncated 64-bit prefix.
"""

from __future__ import annotations
import logging
import struct

from .errors import BalloonParameterError
from .hashes import HashCapability
from .params import DELTA, check_buffer, check_bytes, check_cost


logger = logging.getLogger(__name__)

_U64 = struct.Struct('>Q')


def be64(n: int) -> bytes:
    """8-byte big-endian encoding of an unsigned integer."""
    return _U64.pack(n)


class _Chain:
    """Counter-framed hash invocations over one exclusively owned capability."""

    __slots__ = ('h', 'counter')

    def __init__(self, h: HashCapability):
        self.h = h
        self.counter = 0

    def __call__(self, *parts: bytes) -> bytes:
        h = self.h
        h.absorb(_U64.pack(self.counter))
        self.counter += 1
        for part in parts:
            h.absorb(part)
        return h.digest()


def balloon(
    h: HashCapability,
    passphrase: bytes,
    salt: bytes,
    s_cost: int,
    t_cost: int,
) -> bytes:
    """
    Memory-hard Balloon hash of passphrase with salt.

    Args:
        h: Hash capability, owned by this call until it returns
        passphrase: Secret input
        salt: Public salt
        s_cost: Number of digest-sized blocks in the buffer (>= 1)
        t_cost: Number of mixing rounds (>= 0)

    Returns:
        h.digest_size bytes
    """
    passphrase = check_bytes('passphrase', passphrase)
    salt = check_bytes('salt', salt)
    check_cost('s_cost', s_cost, 1)
    check_cost('t_cost', t_cost, 0)
    block_size = h.digest_size
    if block_size < 1:
        raise BalloonParameterError(f"Hash capability has invalid digest size {block_size}")
    buf_size = check_buffer(s_cost, block_size)

    logger.debug("balloon start: s_cost=%d t_cost=%d block_size=%d", s_cost, t_cost, block_size)

    h.reset()
    H = _Chain(h)
    buf = bytearray(buf_size)

    # Fill
    prev = H(passphrase, salt)
    buf[0:block_size] = prev
    for m in range(1, s_cost):
        prev = H(prev)
        buf[m * block_size:(m + 1) * block_size] = prev

    # Mix
    for t in range(t_cost):
        for m in range(s_cost):
            lo = m * block_size
            hi = lo + block_size
            prev = H(prev, buf[lo:hi])
            buf[lo:hi] = prev

            prefix = salt + be64(t) + be64(m)
            for i in range(DELTA):
                idx = H(prefix, be64(i))
                other = int.from_bytes(idx, 'big') % s_cost
                olo = other * block_size
                prev = H(prev, buf[olo:olo + block_size])
                buf[lo:hi] = prev

    logger.debug("balloon done: %d hash invocations", H.counter)
    return prev
