"""Shared fixtures: an instrumented capability that records every invocation."""

from typing import Optional

import pytest

from balloonhash.hashes import HashCapability, HashlibCapability


class RecordingCapability(HashCapability):
    """
    Wraps a real capability and records the bytes absorbed by each
    invocation (everything between two digest() calls).
    """

    def __init__(self, inner: Optional[HashCapability] = None):
        self.inner = inner or HashlibCapability('sha256')
        self.invocations = []
        self.resets = 0
        self._pending = []

    @property
    def digest_size(self) -> int:
        return self.inner.digest_size

    def reset(self) -> None:
        self.resets += 1
        self._pending = []
        self.inner.reset()

    def absorb(self, data: bytes) -> 'RecordingCapability':
        self._pending.append(bytes(data))
        self.inner.absorb(data)
        return self

    def digest(self) -> bytes:
        self.invocations.append(b''.join(self._pending))
        self._pending = []
        return self.inner.digest()


@pytest.fixture
def recording():
    return RecordingCapability()
