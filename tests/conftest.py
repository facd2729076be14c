"""Shared fixtures for the weight and sampler tests.

For importable helpers, use:
  from helpers import ReplaySource, FailingSource, pow_kernel_weights
"""

import pytest
import torch

from weighted_windows import GaussianComponent, MixtureWeightEvaluator

BASE_FLOOR = 20000.0


@pytest.fixture
def evaluator():
    return MixtureWeightEvaluator(base_floor=BASE_FLOOR)


@pytest.fixture
def five_bumps():
    amps = [1.0, 2.0, 3.0, 4.0, 5.0]
    mus = [100.0, 200.0, 300.0, 400.0, 500.0]
    stds = [50.0, 60.0, 70.0, 80.0, 90.0]
    return [GaussianComponent(a, m, s) for a, m, s in zip(amps, mus, stds)]


@pytest.fixture
def windows():
    return torch.arange(100, dtype=torch.float64) * 10.0
