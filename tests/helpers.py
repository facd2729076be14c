"""Importable test helpers (conftest.py only provides fixtures)."""

import math

import torch


class ReplaySource:
    """Random source that replays a fixed list of uniforms."""

    def __init__(self, values):
        self.values = [float(v) for v in values]
        self.pos = 0

    def random(self) -> float:
        u = self.values[self.pos]
        self.pos += 1
        return u

    def draws(self, n: int):
        out = self.values[self.pos:self.pos + n]
        self.pos += n
        return torch.tensor(out, dtype=torch.float64)


class FailingSource:
    """Random source whose every draw raises."""

    class Broken(OSError):
        pass

    def random(self) -> float:
        raise self.Broken("entropy pool unavailable")

    def draws(self, n: int):
        raise self.Broken("entropy pool unavailable")


def pow_kernel_weights(amps, mus, stds, positions, base_floor):
    """Mixture weights with the kernel written as a general power of e.

    Slow reference formulation, kept only to check parity of the exp form.
    """
    out = []
    for p in positions:
        total = 0.0
        for a, m, s in zip(amps, mus, stds):
            z = (p - m) / s
            norm = 1.0 / ((s * (2.0 * math.pi)) ** 0.5)
            total += a * (1.0 + base_floor * norm * (math.e ** (-0.5 * z ** 2.0)))
        out.append(total)
    return out
