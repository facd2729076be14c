r"""Gaussian-mixture window weights.

For query positions :math:`p` and components :math:`(A_k, m_k, \sigma_k)`,

.. math::
    w(p) = \sum_k A_k \bigl(1 + B\, n(\sigma_k)\, g(p; m_k, \sigma_k)\bigr),
    \qquad n(\sigma) = (2\pi\sigma)^{-1/2},
    \qquad g(p; m, \sigma) = \exp\!\bigl(-\tfrac12 z^2\bigr),\ z = (p - m)/\sigma,

where :math:`B` is the base floor supplied by the caller.  The kernel is a
single ``exp`` of ``-0.5 * z * z``; no general power function is involved.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import torch

from .errors import InvalidParameter
from .gaussian_mixture import ComponentSet, GaussianComponent

Tensor = torch.Tensor

logger = logging.getLogger(__name__)


def normalizer(std: Tensor) -> Tensor:
    """1 / sqrt(2*pi*std)."""
    return torch.rsqrt(std * math.tau)


def gaussian_kernel(p: Tensor, mean: Tensor, std: Tensor) -> Tensor:
    """exp(-0.5 * z^2) with z = (p - mean) / std, broadcasting."""
    z = (p - mean) / std
    return torch.exp(-0.5 * z * z)


@dataclass(frozen=True)
class MixtureWeightEvaluator:
    """Evaluate mixture weights over window positions.

    ``base_floor`` is the amplitude floor B; it has no default and must be
    supplied by the calling application.
    """
    base_floor: float
    dtype: torch.dtype = torch.float64
    device: torch.device | str = "cpu"

    def __post_init__(self):
        B = float(self.base_floor)
        if not math.isfinite(B) or B <= 0.0:
            raise InvalidParameter(f"base_floor must be finite and > 0, got {self.base_floor}")

    def _components(self, components) -> ComponentSet:
        if isinstance(components, ComponentSet):
            return components.to(dtype=self.dtype, device=self.device)
        return ComponentSet.from_components(components, dtype=self.dtype, device=self.device)

    def _positions(self, positions) -> Tensor:
        p = torch.as_tensor(positions, dtype=self.dtype, device=self.device)
        if p.ndim != 1:
            raise InvalidParameter(f"positions must be 1D, got shape {tuple(p.shape)}")
        bad = ~torch.isfinite(p)
        if torch.any(bad):
            i = int(torch.nonzero(bad)[0].item())
            raise InvalidParameter(f"position must be finite, got {float(p[i].item())} at index {i}")
        return p

    def evaluate(
        self,
        components: ComponentSet | Sequence[GaussianComponent],
        positions: Sequence[float] | Tensor,
    ) -> Tensor:
        """Return the (P,) weight vector for ``positions``.

        All inputs are validated before any arithmetic. An empty component
        set yields zeros.
        """
        comps = self._components(components)
        p = self._positions(positions)
        logger.debug("evaluating %d positions against %d components", p.numel(), comps.K)

        if comps.K == 0:
            return torch.zeros_like(p)

        # (P,1) against (1,K)
        kern = gaussian_kernel(p.unsqueeze(-1), comps.means.unsqueeze(0), comps.deviations.unsqueeze(0))
        scale = float(self.base_floor) * normalizer(comps.deviations)  # (K,)
        terms = comps.amplitudes * (1.0 + scale * kern)                # (P,K)
        return torch.sum(terms, dim=1)

    def __call__(self, components, positions) -> Tensor:
        return self.evaluate(components, positions)


def evaluate(
    components: ComponentSet | Sequence[GaussianComponent],
    positions: Sequence[float] | Tensor,
    *,
    base_floor: float,
) -> Tensor:
    """Functional form of :meth:`MixtureWeightEvaluator.evaluate`."""
    return MixtureWeightEvaluator(base_floor=base_floor).evaluate(components, positions)
