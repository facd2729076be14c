import logging

from .errors import InvalidDistribution, InvalidParameter, RandomSourceFailure
from .gaussian_mixture import ComponentSet, GaussianComponent
from .weights import MixtureWeightEvaluator, evaluate, gaussian_kernel, normalizer
from .sampler import WeightedSampler, build, rebuild, sample
from .rng import ParkMillerSource, RandomSource, TorchRandomSource
from .choice import random_item, shuffle, weighted_key

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "InvalidDistribution",
    "InvalidParameter",
    "RandomSourceFailure",
    "ComponentSet",
    "GaussianComponent",
    "MixtureWeightEvaluator",
    "evaluate",
    "gaussian_kernel",
    "normalizer",
    "WeightedSampler",
    "build",
    "rebuild",
    "sample",
    "ParkMillerSource",
    "RandomSource",
    "TorchRandomSource",
    "random_item",
    "shuffle",
    "weighted_key",
]
