from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import torch

from .errors import InvalidParameter

Tensor = torch.Tensor


@dataclass(frozen=True)
class GaussianComponent:
    """One Gaussian bump: amplitude, mean and deviation (deviation > 0)."""
    amplitude: float
    mean: float
    deviation: float


def _check_finite(name: str, values: Tensor) -> None:
    bad = ~torch.isfinite(values)
    if torch.any(bad):
        k = int(torch.nonzero(bad)[0].item())
        raise InvalidParameter(f"{name} must be finite, got {float(values[k].item())} at component {k}")


@dataclass(frozen=True, eq=False)
class ComponentSet:
    """Torch bundle of K Gaussian components, validated on construction."""
    amplitudes: Tensor  # (K,)
    means: Tensor       # (K,)
    deviations: Tensor  # (K,)

    def __post_init__(self):
        for name in ("amplitudes", "means", "deviations"):
            if getattr(self, name).ndim != 1:
                raise InvalidParameter(f"{name} must be (K,)")
        K = self.amplitudes.numel()
        if self.means.numel() != K or self.deviations.numel() != K:
            raise InvalidParameter("amplitudes/means/deviations length mismatch")

        _check_finite("amplitude", self.amplitudes)
        _check_finite("mean", self.means)
        _check_finite("deviation", self.deviations)

        bad = self.deviations <= 0
        if torch.any(bad):
            k = int(torch.nonzero(bad)[0].item())
            raise InvalidParameter(f"deviation must be > 0, got {float(self.deviations[k].item())} at component {k}")
        neg = self.amplitudes < 0
        if torch.any(neg):
            k = int(torch.nonzero(neg)[0].item())
            raise InvalidParameter(f"amplitude must be >= 0, got {float(self.amplitudes[k].item())} at component {k}")

    @classmethod
    def from_components(
        cls,
        components: Iterable[GaussianComponent],
        *,
        dtype: torch.dtype = torch.float64,
        device: torch.device | str = "cpu",
    ) -> "ComponentSet":
        comps = list(components)
        rows = [(float(c.amplitude), float(c.mean), float(c.deviation)) for c in comps]
        data = torch.tensor(rows, dtype=dtype, device=device).reshape(len(rows), 3)
        return cls(amplitudes=data[:, 0], means=data[:, 1], deviations=data[:, 2])

    def to(self, dtype: torch.dtype, device: torch.device | str) -> "ComponentSet":
        return ComponentSet(
            amplitudes=self.amplitudes.to(dtype=dtype, device=device),
            means=self.means.to(dtype=dtype, device=device),
            deviations=self.deviations.to(dtype=dtype, device=device),
        )

    @property
    def K(self) -> int:
        return int(self.amplitudes.numel())

    def __len__(self) -> int:
        return self.K

    def __getitem__(self, k: int) -> GaussianComponent:
        return GaussianComponent(
            amplitude=float(self.amplitudes[k].item()),
            mean=float(self.means[k].item()),
            deviation=float(self.deviations[k].item()),
        )
