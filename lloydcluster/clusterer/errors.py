# Copyright (c) 2025 massivedatascience
# Licensed under the Apache License, Version 2.0

"""
Exceptions raised by the clustering engine.
"""


class ClusteringError(Exception):
    """Base class for every error raised by :mod:`lloydcluster.clusterer`."""


class SeedingError(ClusteringError, ValueError):
    """
    Raised when the initial centroids cannot be chosen.

    Covers asking for more distinct random seeds than there are points,
    asking for fewer than one cluster, and explicit seeds that disagree
    with the requested cluster count or point outside the dataset.
    """


class UnsetDimensionError(ClusteringError, KeyError):
    """
    Raised when reading a dimension an item never stored.

    Attributes
    ----------
    dimension : int
        The dimension index that was requested.
    """

    def __init__(self, dimension: int, message: str = ""):
        self.dimension = dimension
        super(UnsetDimensionError, self).__init__(
            message or f"dimension {dimension} is not set"
        )

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return self.args[0]


class NonConvergenceError(ClusteringError, RuntimeError):
    """
    Raised by an unbounded run that reaches the configured safety cap.

    Attributes
    ----------
    iterations : int
        Number of iterations executed before giving up.
    """

    def __init__(self, iterations: int):
        self.iterations = iterations
        super(NonConvergenceError, self).__init__(
            f"centroids did not converge after {iterations} iteration(s)"
        )
