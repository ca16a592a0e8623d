"""
Hash Capabilities

The mixer never chooses a hash function: it is handed a capability with
three operations and a fixed digest size.

    reset()        clear everything absorbed so far
    absorb(data)   append bytes to the pending input
    digest()       finalize, return the hash, and reset for reuse

The digest size of the capability is the block size of the whole run.

Concrete capabilities wrap hashlib constructors and the blake3 library.
A capability is stateful and must be owned by exactly one run; the
parallel combiner therefore takes a zero-argument factory and builds one
capability per instance.
"""

from __future__ import annotations
import hashlib
from abc import ABC, abstractmethod
from enum import Enum
from functools import partial
from typing import Callable, Dict, Union

import blake3

from .errors import UnsupportedHashError


# =============================================================================
# CAPABILITY INTERFACE
# =============================================================================

class HashCapability(ABC):
    """
    Resettable, stateful hash primitive.

    digest() finalizes and implicitly resets, so consecutive
    absorb/digest sequences never see residual input.
    """

    @property
    @abstractmethod
    def digest_size(self) -> int:
        """Digest size in bytes (the block size of a run)."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Discard all absorbed input."""
        pass

    @abstractmethod
    def absorb(self, data: bytes) -> 'HashCapability':
        """Append data to the pending input."""
        pass

    @abstractmethod
    def digest(self) -> bytes:
        """Finalize, return the digest and reset."""
        pass


HashFactory = Callable[[], HashCapability]


# =============================================================================
# HASHLIB ADAPTER
# =============================================================================

class HashlibCapability(HashCapability):
    """
    Capability over a fixed-length hashlib constructor.

    Any name accepted by hashlib.new() with a fixed digest size works,
    e.g. 'sha256', 'sha512', 'sha3_256', 'blake2b'. SHAKE variants have no
    fixed digest size and are rejected.
    """

    def __init__(self, name: str = 'sha256'):
        try:
            probe = hashlib.new(name)
        except ValueError:
            raise UnsupportedHashError(f"Unknown hashlib algorithm: {name}") from None
        if probe.digest_size == 0:
            raise UnsupportedHashError(f"Variable-length hash not supported: {name}")
        self.name = name
        self._hasher = probe

    @property
    def digest_size(self) -> int:
        return self._hasher.digest_size

    def reset(self) -> None:
        self._hasher = hashlib.new(self.name)

    def absorb(self, data: bytes) -> 'HashlibCapability':
        self._hasher.update(data)
        return self

    def digest(self) -> bytes:
        out = self._hasher.digest()
        self.reset()
        return out

    def __repr__(self) -> str:
        return f"HashlibCapability({self.name!r})"


# =============================================================================
# BLAKE3 ADAPTER
# =============================================================================

class Blake3Capability(HashCapability):
    """
    Capability over the native blake3 library.

    BLAKE3 is an XOF; the capability pins an output length so that the
    block size stays constant for the run.
    """

    DEFAULT_DIGEST_SIZE = 32

    def __init__(self, digest_size: int = DEFAULT_DIGEST_SIZE):
        if digest_size < 1:
            raise UnsupportedHashError(f"BLAKE3 digest size must be positive, got {digest_size}")
        self._digest_size = digest_size
        self._hasher = blake3.blake3()

    @property
    def digest_size(self) -> int:
        return self._digest_size

    def reset(self) -> None:
        self._hasher = blake3.blake3()

    def absorb(self, data: bytes) -> 'Blake3Capability':
        self._hasher.update(data)
        return self

    def digest(self) -> bytes:
        out = self._hasher.digest(length=self._digest_size)
        self.reset()
        return out

    def __repr__(self) -> str:
        return f"Blake3Capability({self._digest_size})"


# =============================================================================
# REGISTRY
# =============================================================================

class HashAlgorithm(Enum):
    """Hash algorithms available by name."""
    SHA256 = 'sha256'
    SHA384 = 'sha384'
    SHA512 = 'sha512'
    SHA3_256 = 'sha3_256'
    SHA3_512 = 'sha3_512'
    BLAKE2B = 'blake2b'
    BLAKE2S = 'blake2s'
    BLAKE3 = 'blake3'


# Factories are partials over classes so they pickle into worker processes.
_FACTORIES: Dict[HashAlgorithm, HashFactory] = {
    alg: partial(HashlibCapability, alg.value)
    for alg in HashAlgorithm
    if alg is not HashAlgorithm.BLAKE3
}
_FACTORIES[HashAlgorithm.BLAKE3] = Blake3Capability


def get_hash_factory(algorithm: Union[HashAlgorithm, str] = HashAlgorithm.SHA256) -> HashFactory:
    """
    Resolve an algorithm name to a zero-argument capability factory.

    Raises UnsupportedHashError for names outside HashAlgorithm.
    """
    if not isinstance(algorithm, HashAlgorithm):
        try:
            algorithm = HashAlgorithm(str(algorithm).lower())
        except ValueError:
            raise UnsupportedHashError(f"Unknown hash algorithm: {algorithm}") from None
    return _FACTORIES[algorithm]


def new_capability(algorithm: Union[HashAlgorithm, str] = HashAlgorithm.SHA256) -> HashCapability:
    """Create a fresh capability for the named algorithm."""
    return get_hash_factory(algorithm)()
