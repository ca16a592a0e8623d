"""
Parallel Combiner

Runs M independent Balloon instances and XORs their digests:

    out = balloon(H_1, P, S || be64(1)) ^ ... ^ balloon(H_M, P, S || be64(M))

Each instance gets its own capability from the factory, its own counter
and its own buffer, so instances share nothing. Results are folded in
completion order; XOR is commutative, so scheduling never changes the
output.
"""

from __future__ import annotations
import logging
from concurrent.futures import Executor, ThreadPoolExecutor, as_completed
from typing import Iterable, Optional

from .balloon import balloon, be64
from .errors import BalloonError, BalloonParameterError
from .hashes import HashFactory
from .params import BalloonParams, check_buffer, check_bytes, check_cost


logger = logging.getLogger(__name__)


def instance_salt(salt: bytes, k: int) -> bytes:
    """Salt of the k-th (1-based) instance: salt || be64(k)."""
    return salt + be64(k)


def xor_fold(digests: Iterable[bytes], size: int) -> bytes:
    """XOR equal-length digests together."""
    out = bytearray(size)
    for digest in digests:
        if len(digest) != size:
            raise BalloonError(
                f"Instance digest has {len(digest)} bytes, expected {size}"
            )
        for i, v in enumerate(digest):
            out[i] ^= v
    return bytes(out)


def _run_instance(
    hash_factory: HashFactory,
    passphrase: bytes,
    salt: bytes,
    s_cost: int,
    t_cost: int,
    k: int,
) -> bytes:
    return balloon(hash_factory(), passphrase, instance_salt(salt, k), s_cost, t_cost)


def balloon_m(
    hash_factory: HashFactory,
    passphrase: bytes,
    salt: bytes,
    s_cost: int,
    t_cost: int,
    m: int,
    max_workers: Optional[int] = None,
    executor: Optional[Executor] = None,
) -> bytes:
    """
    XOR of m concurrent Balloon instances.

    Args:
        hash_factory: Zero-argument callable returning a fresh capability
        passphrase, salt, s_cost, t_cost: As for balloon()
        m: Number of instances (>= 1)
        max_workers: Pool size when no executor is given
        executor: Caller-owned executor; left running on return

    Returns:
        One digest, hash_factory().digest_size bytes

    If any instance raises, the exception propagates and no digest is
    returned.
    """
    passphrase = check_bytes('passphrase', passphrase)
    salt = check_bytes('salt', salt)
    check_cost('s_cost', s_cost, 1)
    check_cost('t_cost', t_cost, 0)
    check_cost('m', m, 1)
    if max_workers is not None:
        check_cost('max_workers', max_workers, 1)
    size = hash_factory().digest_size
    if size < 1:
        raise BalloonParameterError(f"Hash capability has invalid digest size {size}")
    check_buffer(s_cost, size)

    logger.debug("balloon_m start: m=%d s_cost=%d t_cost=%d", m, s_cost, t_cost)

    if m == 1 and executor is None:
        return xor_fold([_run_instance(hash_factory, passphrase, salt, s_cost, t_cost, 1)], size)

    own_executor = executor is None
    if own_executor:
        executor = ThreadPoolExecutor(max_workers=max_workers)
    try:
        futures = [
            executor.submit(_run_instance, hash_factory, passphrase, salt, s_cost, t_cost, k)
            for k in range(1, m + 1)
        ]
        # Join barrier: every instance must finish before the fold.
        try:
            digests = [f.result() for f in as_completed(futures)]
        except BaseException:
            for f in futures:
                f.cancel()
            raise
    finally:
        if own_executor:
            executor.shutdown(wait=True)

    logger.debug("balloon_m done: folded %d digests", len(digests))
    return xor_fold(digests, size)


def balloon_hash(
    passphrase: bytes,
    salt: bytes,
    params: Optional[BalloonParams] = None,
    executor: Optional[Executor] = None,
) -> bytes:
    """
    Balloon hash with a BalloonParams bundle.

    Always runs the combiner, so parallelism=1 still suffixes be64(1)
    to the salt.
    """
    params = params or BalloonParams()
    logger.debug("balloon_hash: %s", params)
    return balloon_m(
        params.hash_factory,
        passphrase,
        salt,
        params.space_cost,
        params.time_cost,
        params.parallelism,
        executor=executor,
    )
