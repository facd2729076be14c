from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import torch

from .errors import InvalidDistribution, RandomSourceFailure

Tensor = torch.Tensor

logger = logging.getLogger(__name__)


def _as_weight_vector(weights) -> Tensor:
    if isinstance(weights, Tensor):
        w = weights.detach().to(dtype=torch.float64)
    else:
        w = torch.as_tensor(weights, dtype=torch.float64)
    if w.ndim != 1:
        raise InvalidDistribution(f"weights must be 1D, got shape {tuple(w.shape)}")
    if w.numel() == 0:
        raise InvalidDistribution("weights must be non-empty")
    bad = ~torch.isfinite(w)
    if torch.any(bad):
        i = int(torch.nonzero(bad)[0].item())
        raise InvalidDistribution(f"weight must be finite, got {float(w[i].item())} at index {i}")
    neg = w < 0
    if torch.any(neg):
        i = int(torch.nonzero(neg)[0].item())
        raise InvalidDistribution(f"weight must be >= 0, got {float(w[i].item())} at index {i}")
    return w


@dataclass(frozen=True, eq=False)
class WeightedSampler:
    """Inverse-CDF sampler over a fixed weight vector.

    The prefix sums are built once by :meth:`build`; :meth:`sample` only reads
    them, so one instance may be shared between threads that each own their
    random source.
    """
    cumulative: Tensor   # (n,) running sums, cumulative[-1] == total
    last_positive: int   # highest index with nonzero weight

    @classmethod
    def build(cls, weights: Sequence[float] | Tensor) -> "WeightedSampler":
        w = _as_weight_vector(weights)
        cumulative = torch.cumsum(w, dim=0)
        total = float(cumulative[-1].item())
        if not total > 0.0:
            raise InvalidDistribution("sum of weights must be > 0")
        if not math.isfinite(total):
            raise InvalidDistribution("sum of weights overflows")

        positive = torch.nonzero(w > 0)
        last_positive = int(positive[-1].item())
        n_zero = w.numel() - positive.numel()
        if n_zero:
            logger.warning("%d of %d weights are zero and will never be drawn", n_zero, w.numel())
        logger.debug("built sampler over %d weights, total %.6g", w.numel(), total)

        return cls(cumulative=cumulative, last_positive=last_positive)

    def rebuild(self, weights: Sequence[float] | Tensor) -> "WeightedSampler":
        """Return a new sampler for ``weights``; this instance is left untouched."""
        logger.debug("rebuilding sampler (previous size %d)", len(self))
        return type(self).build(weights)

    @property
    def total(self) -> float:
        return float(self.cumulative[-1].item())

    def __len__(self) -> int:
        return int(self.cumulative.numel())

    def probabilities(self) -> Tensor:
        """Normalised weights recovered from the prefix sums."""
        w = torch.diff(self.cumulative, prepend=self.cumulative.new_zeros(1))
        return w / self.cumulative[-1]

    def _locate(self, u: Tensor) -> Tensor:
        # first index whose running sum exceeds u * total
        target = u * self.cumulative[-1]
        idx = torch.searchsorted(self.cumulative, target, right=True)
        return torch.clamp(idx, max=self.last_positive)

    def sample(self, rng) -> int:
        """Draw one index in [0, len(self)) with probability proportional to its weight."""
        u = rng.random()
        if not 0.0 <= u < 1.0:
            raise RandomSourceFailure(f"random source returned {u!r}, expected a value in [0, 1)")
        return int(self._locate(torch.tensor([u], dtype=torch.float64, device=self.cumulative.device))[0].item())

    def sample_n(self, rng, n: int) -> Tensor:
        """Draw ``n`` indices at once; returns a (n,) int64 tensor."""
        n = int(n)
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")
        u = torch.as_tensor(rng.draws(n), dtype=torch.float64)
        if u.shape != (n,):
            raise RandomSourceFailure(f"random source returned shape {tuple(u.shape)}, expected ({n},)")
        u = u.to(dtype=torch.float64, device=self.cumulative.device)
        if n and not bool(torch.all((u >= 0.0) & (u < 1.0))):
            raise RandomSourceFailure("random source returned draws outside [0, 1)")
        return self._locate(u)


def build(weights: Sequence[float] | Tensor) -> WeightedSampler:
    return WeightedSampler.build(weights)


def sample(sampler: WeightedSampler, rng) -> int:
    return sampler.sample(rng)


def rebuild(sampler: WeightedSampler, weights: Sequence[float] | Tensor) -> WeightedSampler:
    return sampler.rebuild(weights)
