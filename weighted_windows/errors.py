from __future__ import annotations


class InvalidParameter(ValueError):
    """A mixture component or evaluator setting is outside its valid domain."""


class InvalidDistribution(ValueError):
    """A weight vector cannot define a discrete distribution."""


class RandomSourceFailure(RuntimeError):
    """A random source produced draws the sampler cannot use."""
