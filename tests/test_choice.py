"""Tests for keyed and collection-level helpers."""

import pytest
from helpers import ReplaySource
from hypothesis import given
from hypothesis import strategies as st

from weighted_windows import (
    InvalidDistribution,
    ParkMillerSource,
    RandomSourceFailure,
    random_item,
    shuffle,
    weighted_key,
)


def test_weighted_key_follows_mapping_order():
    weights = {"a": 1.0, "b": 0.0, "c": 3.0}
    assert weighted_key(weights, ReplaySource([0.0])) == "a"
    assert weighted_key(weights, ReplaySource([0.5])) == "c"


@pytest.mark.property_based
@given(seed=st.integers(min_value=0, max_value=10_000))
def test_weighted_key_never_picks_zero_weight(seed):
    rng = ParkMillerSource(seed)
    weights = {"lo": 0.0, "mid": 2.0, "off": 0.0, "hi": 5.0}
    for _ in range(20):
        assert weighted_key(weights, rng) in {"mid", "hi"}


@pytest.mark.parametrize("bad", [{}, {"a": 0.0}, {"a": -1.0, "b": 2.0}])
def test_weighted_key_rejects_invalid(bad):
    with pytest.raises(InvalidDistribution):
        weighted_key(bad, ParkMillerSource(1))


def test_random_item():
    items = ["x", "y", "z"]
    assert random_item(items, ReplaySource([0.0])) == "x"
    assert random_item(items, ReplaySource([0.5])) == "y"
    assert random_item(items, ReplaySource([0.99])) == "z"


def test_random_item_empty():
    with pytest.raises(InvalidDistribution):
        random_item([], ParkMillerSource(1))


def test_random_item_bad_draw():
    with pytest.raises(RandomSourceFailure):
        random_item([1, 2], ReplaySource([1.0]))


@pytest.mark.property_based
@given(items=st.lists(st.integers(), max_size=30), seed=st.integers(min_value=0, max_value=10_000))
def test_shuffle_is_permutation_of_copy(items, seed):
    original = list(items)
    out = shuffle(items, ParkMillerSource(seed))
    assert items == original
    assert sorted(out) == sorted(original)


def test_shuffle_deterministic_for_seed():
    data = list(range(20))
    assert shuffle(data, ParkMillerSource(5)) == shuffle(data, ParkMillerSource(5))
