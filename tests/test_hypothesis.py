"""
Property-Based Testing with Hypothesis

Small costs keep each example cheap; the properties are independent of
cost size.
"""

import struct

from hypothesis import given, strategies as st, settings

from balloonhash import balloon, balloon_m, xor_fold, HashlibCapability, get_hash_factory, DELTA
from balloonhash.balloon import be64

from conftest import RecordingCapability


costs = st.integers(min_value=1, max_value=6)
rounds = st.integers(min_value=0, max_value=2)
data = st.binary(max_size=64)


class TestDeterminism:

    @given(passphrase=data, salt=data, s_cost=costs, t_cost=rounds)
    @settings(max_examples=100, deadline=None)
    def test_balloon_deterministic(self, passphrase, salt, s_cost, t_cost):
        a = balloon(HashlibCapability('sha256'), passphrase, salt, s_cost, t_cost)
        b = balloon(HashlibCapability('sha256'), passphrase, salt, s_cost, t_cost)
        assert a == b
        assert len(a) == 32


class TestFraming:

    @given(passphrase=data, salt=data, s_cost=costs, t_cost=rounds)
    @settings(max_examples=100, deadline=None)
    def test_counter_and_count(self, passphrase, salt, s_cost, t_cost):
        h = RecordingCapability()
        balloon(h, passphrase, salt, s_cost, t_cost)
        counters = [struct.unpack('>Q', inv[:8])[0] for inv in h.invocations]
        assert counters == list(range(s_cost + t_cost * s_cost * (1 + 2 * DELTA)))


class TestCombiner:

    @given(passphrase=data, salt=data, s_cost=st.integers(1, 3),
           t_cost=st.integers(0, 1), m=st.integers(1, 4))
    @settings(max_examples=50, deadline=None)
    def test_equals_manual_xor(self, passphrase, salt, s_cost, t_cost, m):
        expected = xor_fold(
            [balloon(HashlibCapability('sha256'), passphrase, salt + be64(k), s_cost, t_cost)
             for k in range(1, m + 1)],
            32,
        )
        assert balloon_m(get_hash_factory('sha256'), passphrase, salt, s_cost, t_cost, m) == expected

    @given(digests=st.lists(st.binary(min_size=8, max_size=8), max_size=6), seed=st.randoms())
    def test_fold_order_free(self, digests, seed):
        shuffled = list(digests)
        seed.shuffle(shuffled)
        assert xor_fold(digests, 8) == xor_fold(shuffled, 8)

    @given(digest=st.binary(min_size=16, max_size=16))
    def test_fold_self_inverse(self, digest):
        assert xor_fold([digest, digest], 16) == bytes(16)
