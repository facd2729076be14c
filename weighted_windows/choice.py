from __future__ import annotations

from typing import Hashable, Mapping, Sequence, TypeVar

from .errors import InvalidDistribution, RandomSourceFailure
from .sampler import WeightedSampler

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


def weighted_key(weights: Mapping[K, float], rng) -> K:
    """Draw a key of ``weights`` with probability proportional to its value.

    Keys are considered in mapping iteration order. For repeated draws over
    the same mapping, build a :class:`WeightedSampler` once and index
    ``list(weights)`` with its samples instead.
    """
    keys = list(weights)
    sampler = WeightedSampler.build([float(weights[k]) for k in keys])
    return keys[sampler.sample(rng)]


def _uniform_index(n: int, rng) -> int:
    u = rng.random()
    if not 0.0 <= u < 1.0:
        raise RandomSourceFailure(f"random source returned {u!r}, expected a value in [0, 1)")
    return min(int(u * n), n - 1)


def random_item(items: Sequence[T], rng) -> T:
    if len(items) == 0:
        raise InvalidDistribution("cannot select a random item from an empty sequence")
    return items[_uniform_index(len(items), rng)]


def shuffle(items: Sequence[T], rng) -> list[T]:
    """Fisher-Yates shuffle of a copy of ``items``."""
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = _uniform_index(i + 1, rng)
        out[i], out[j] = out[j], out[i]
    return out
