"""Random sources consumed by the sampler.

A random source exposes ``random() -> float`` in [0, 1) and
``draws(n) -> Tensor`` of shape (n,) in [0, 1). ``random.Random`` satisfies
the scalar half of the protocol and may be passed to ``WeightedSampler.sample``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import torch

Tensor = torch.Tensor


@runtime_checkable
class RandomSource(Protocol):
    def random(self) -> float: ...

    def draws(self, n: int) -> Tensor: ...


@dataclass
class TorchRandomSource:
    """Seeded ``torch.Generator`` producing float64 uniforms in [0, 1)."""
    seed: int = 0
    device: torch.device | str = "cpu"
    generator: torch.Generator = field(init=False, repr=False)

    def __post_init__(self):
        self.device = torch.device(self.device)
        self.generator = torch.Generator(device=self.device)
        self.generator.manual_seed(int(self.seed))

    def random(self) -> float:
        return float(torch.rand((), dtype=torch.float64, device=self.device, generator=self.generator).item())

    def draws(self, n: int) -> Tensor:
        return torch.rand((int(n),), dtype=torch.float64, device=self.device, generator=self.generator)


class ParkMillerSource:
    """Park-Miller minimal standard generator with a Bays-Durham shuffle table.

    Produces the same stream for a given seed on every platform. Outputs lie
    in (0, 1 - 1.2e-7].
    """

    NTAB = 32
    IA = 16807
    IM = 2147483647
    IQ = 127773
    IR = 2836
    NDIV = 1 + (IM - 1) // NTAB
    AM = 1.0 / IM
    RNMX = 1.0 - 1.2e-7

    def __init__(self, seed: int = 0):
        self._idum = 0
        self._iy = 0
        self._iv = [0] * self.NTAB
        self._current_seed = 0
        self.set_seed(seed)

    @property
    def current_seed(self) -> int:
        return self._current_seed

    def set_seed(self, seed: int) -> None:
        seed = int(seed)
        self._current_seed = seed
        # a non-positive state forces table initialisation on the next draw
        self._idum = -seed if seed >= 0 else seed
        self._iy = 0

    def set_seed_if_different(self, seed: int) -> None:
        if self._current_seed != int(seed):
            self.set_seed(seed)

    def _step(self) -> int:
        # Schrage's method: IA * idum mod IM without overflow
        k = self._idum // self.IQ
        self._idum = self.IA * (self._idum - k * self.IQ) - self.IR * k
        if self._idum < 0:
            self._idum += self.IM
        return self._idum

    def next_int(self) -> int:
        """Next raw integer in [1, IM - 1]."""
        if self._idum <= 0 or self._iy == 0:
            self._idum = max(-self._idum, 1)
            for j in range(self.NTAB + 7, -1, -1):
                self._step()
                if j < self.NTAB:
                    self._iv[j] = self._idum
            self._iy = self._iv[0]

        self._step()
        j = self._iy // self.NDIV
        self._iy = self._iv[j]
        self._iv[j] = self._idum
        return self._iy

    def random(self) -> float:
        return min(self.AM * self.next_int(), self.RNMX)

    def draws(self, n: int) -> Tensor:
        return torch.tensor([self.random() for _ in range(int(n))], dtype=torch.float64)
