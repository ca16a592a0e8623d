"""
Public Parameters for Balloon Hashing

BalloonParams bundles the caller-chosen costs with the algorithm name.
DELTA is pinned: changing it changes every output.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union
import struct
import sys

from .errors import BalloonParameterError
from .hashes import HashAlgorithm, HashFactory, get_hash_factory


DELTA = 3
"""Pseudorandom dependencies mixed into each block per round."""

MAX_COST = (1 << 64) - 1
"""Costs and counters are framed as unsigned 64-bit integers."""


def check_cost(name: str, value: int, minimum: int) -> int:
    """Validate an integer cost against [minimum, MAX_COST]."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise BalloonParameterError(f"{name} must be an integer, got {type(value).__name__}")
    if value < minimum:
        raise BalloonParameterError(f"{name} must be >= {minimum}, got {value}")
    if value > MAX_COST:
        raise BalloonParameterError(f"{name} must fit in 64 bits, got {value}")
    return value


def check_buffer(s_cost: int, block_size: int) -> int:
    """Validate that an s_cost-block buffer is addressable; return its size."""
    size = s_cost * block_size
    if size > sys.maxsize:
        raise BalloonParameterError(
            f"Buffer of {s_cost} blocks x {block_size} bytes exceeds the addressable size"
        )
    return size


def check_bytes(name: str, value: bytes) -> bytes:
    """Accept any bytes-like input and return it as immutable bytes."""
    if isinstance(value, str):
        raise BalloonParameterError(f"{name} must be bytes, not str; encode it first")
    try:
        return bytes(memoryview(value))
    except TypeError:
        raise BalloonParameterError(
            f"{name} must be bytes-like, got {type(value).__name__}"
        ) from None


@dataclass(frozen=True)
class BalloonParams:
    """
    Cost parameters for balloon_hash().

    Validated on construction; immutable and hashable.
    """

    space_cost: int = 1024
    """Number of digest-sized blocks in the buffer."""

    time_cost: int = 3
    """Number of full mixing rounds."""

    parallelism: int = 1
    """Number of independent instances XOR-combined."""

    algorithm: Union[HashAlgorithm, str] = HashAlgorithm.SHA256
    """Hash primitive plugged into every instance."""

    def __post_init__(self):
        check_cost('space_cost', self.space_cost, 1)
        check_cost('time_cost', self.time_cost, 0)
        check_cost('parallelism', self.parallelism, 1)
        # Normalize strings to the enum; raises UnsupportedHashError.
        get_hash_factory(self.algorithm)
        if not isinstance(self.algorithm, HashAlgorithm):
            object.__setattr__(self, 'algorithm', HashAlgorithm(str(self.algorithm).lower()))

    @property
    def hash_factory(self) -> HashFactory:
        """Zero-argument factory producing fresh capabilities."""
        return get_hash_factory(self.algorithm)

    @property
    def block_size(self) -> int:
        """Block size in bytes (digest size of the algorithm)."""
        return self.hash_factory().digest_size

    @property
    def memory_bytes(self) -> int:
        """Buffer size of a single instance."""
        return self.space_cost * self.block_size

    @property
    def hash_invocations(self) -> int:
        """Hash calls performed by one instance."""
        return self.space_cost + self.time_cost * self.space_cost * (1 + 2 * DELTA)

    def serialize(self) -> bytes:
        """
        Canonical encoding, used to identify a parameter set.

        Format:
            space_cost(8) || time_cost(8) || parallelism(8) || delta(8) ||
            algorithm_len(2) || algorithm
        """
        name = self.algorithm.value.encode('ascii')
        return b''.join([
            struct.pack('>QQQQ', self.space_cost, self.time_cost, self.parallelism, DELTA),
            struct.pack('>H', len(name)),
            name,
        ])

    def __str__(self) -> str:
        return (
            f"balloon(s={self.space_cost}, t={self.time_cost}, "
            f"p={self.parallelism}, h={self.algorithm.value})"
        )
