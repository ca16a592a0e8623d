"""
balloonhash: Memory-Hard Balloon Hashing

Turns any resettable hash primitive into a memory-hard password hash.

Usage:
    from balloonhash import balloon, balloon_m, HashlibCapability

    # Single instance
    digest = balloon(HashlibCapability('sha256'), b'hunter42', b'examplesalt', 1024, 3)

    # Four instances, XOR-combined
    from balloonhash import get_hash_factory
    digest = balloon_m(get_hash_factory('sha256'), b'hunter42', b'examplesalt', 1024, 3, 4)

    # With a parameter bundle
    from balloonhash import balloon_hash, BalloonParams
    digest = balloon_hash(b'hunter42', b'examplesalt', BalloonParams(space_cost=1024, parallelism=4))
"""

import logging

from .errors import BalloonError, BalloonParameterError, UnsupportedHashError
from .hashes import (
    HashCapability,
    HashFactory,
    HashlibCapability,
    Blake3Capability,
    HashAlgorithm,
    get_hash_factory,
    new_capability,
)
from .params import BalloonParams, DELTA
from .balloon import balloon
from .parallel import balloon_m, balloon_hash, xor_fold

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Errors
    "BalloonError",
    "BalloonParameterError",
    "UnsupportedHashError",
    # Capabilities
    "HashCapability",
    "HashFactory",
    "HashlibCapability",
    "Blake3Capability",
    "HashAlgorithm",
    "get_hash_factory",
    "new_capability",
    # Parameters
    "BalloonParams",
    "DELTA",
    # Core
    "balloon",
    "balloon_m",
    "balloon_hash",
    "xor_fold",
]
