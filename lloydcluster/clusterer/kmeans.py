# Copyright (c) 2025 massivedatascience
# Licensed under the Apache License, Version 2.0

"""
Lloyd's-algorithm k-means over integer coordinate items.

The engine owns a fixed dataset reference, one :class:`Cluster` per
requested centre, the active dimension indices and a snapshot of every
centroid taken at the start of the latest pass. A run stops when no
centroid moved (exact integer comparison) or when the iteration cap is hit.
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .cluster import Cluster
from .errors import ClusteringError, NonConvergenceError, SeedingError
from .items import CenterItem, Item
from .utils import (
    RandomState,
    build_dimension_indices,
    component_equals,
    distance,
    random_distinct_indices,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 50


@dataclass(frozen=True)
class TrainingSummary:
    """
    Snapshot of an engine's state after a run.

    Attributes
    ----------
    k : int
        Number of clusters.
    effective_k : int
        Clusters holding at least one member.
    dim : int
        Number of active dimensions.
    num_points : int
        Dataset size.
    iterations : int
        Assignment passes executed on this engine since it was seeded.
    converged : bool
        Whether the latest pass left every centroid unchanged.
    total_distance : float
        Sum of member-to-centroid distances over all clusters.
    elapsed_millis : float
        Wall time spent in assignment passes.
    """

    k: int
    effective_k: int
    dim: int
    num_points: int
    iterations: int
    converged: bool
    total_distance: float
    elapsed_millis: float

    @property
    def avg_iteration_millis(self) -> float:
        """Average time per pass in milliseconds."""
        if self.iterations == 0:
            return 0.0
        return self.elapsed_millis / self.iterations

    def convergence_report(self) -> str:
        """One-paragraph human readable report."""
        status = "converged" if self.converged else "did not converge"
        return (
            f"KMeans with k={self.k} ({self.effective_k} non-empty) on "
            f"{self.num_points} points in {self.dim} dimension(s) {status} after "
            f"{self.iterations} iteration(s); total distance "
            f"{self.total_distance:.4f}; {self.elapsed_millis:.1f}ms "
            f"({self.avg_iteration_millis:.2f}ms per iteration)."
        )


class KMeans:
    """
    Iterative k-means clustering over integer items.

    Parameters
    ----------
    dimension : int
        Number of dimensions; the active indices start as ``0..dimension-1``.
    data : sequence of Item
        The dataset. It is referenced, not copied, and never modified.
    n_clusters : int, optional
        Number of clusters. Required unless explicit seeds are given.
    order : callable, optional
        Sort key applied to each cluster's members before its centroid is
        recomputed, e.g. :func:`~lloydcluster.clusterer.utils.default_item_order`.
    seed_indices : sequence of int, optional
        Dataset indices to seed the centroids from.
    seed_items : sequence of Item, optional
        Items to seed the centroids from. Mutually exclusive with
        ``seed_indices``.
    random_state : int or numpy.random.Generator, optional
        Source of randomness when no explicit seeds are given.
    safety_cap : int, optional
        Upper bound on passes for an unbounded ``run(0)``. When reached,
        :class:`~lloydcluster.clusterer.errors.NonConvergenceError` is raised.
        ``None`` keeps ``run(0)`` unbounded.

    Raises
    ------
    SeedingError
        If the centroids cannot be seeded.

    Examples
    --------
    >>> from lloydcluster.clusterer import KMeans, Point
    >>> data = [Point(0, 0), Point(1, 1), Point(9, 8), Point(8, 9)]
    >>> kmeans = KMeans(2, data, seed_indices=[0, 2])
    >>> kmeans.run(20)
    2
    >>> kmeans.centroids().tolist()
    [[0, 0], [8, 8]]
    """

    def __init__(
        self,
        dimension: int,
        data: Sequence[Item],
        n_clusters: Optional[int] = None,
        *,
        order: Optional[Callable[[Item], float]] = None,
        seed_indices: Optional[Sequence[int]] = None,
        seed_items: Optional[Sequence[Item]] = None,
        random_state: RandomState = None,
        safety_cap: Optional[int] = None,
    ):
        if safety_cap is not None and safety_cap < 1:
            raise ValueError(f"safety_cap must be positive, got {safety_cap}")

        self._data = data
        self._order = order
        self._safety_cap = safety_cap
        self._dimension_indices: Tuple[int, ...] = tuple(build_dimension_indices(dimension))
        self._seed_indices, self._initial_seeds = self._resolve_seeds(
            n_clusters, seed_indices, seed_items, random_state
        )
        self._seed_clusters()

    def _resolve_seeds(self, n_clusters, seed_indices, seed_items, random_state):
        if seed_indices is not None and seed_items is not None:
            raise SeedingError("pass either seed_indices or seed_items, not both")

        size = len(self._data)
        if seed_items is not None:
            seeds = list(seed_items)
            indices = None
        else:
            if seed_indices is None:
                if n_clusters is None:
                    raise SeedingError("n_clusters is required without explicit seeds")
                seed_indices = random_distinct_indices(n_clusters, size, random_state)
            indices = [int(i) for i in seed_indices]
            for index in indices:
                if not 0 <= index < size:
                    raise SeedingError(
                        f"seed index {index} is outside a dataset of {size} points"
                    )
            seeds = [self._data[i] for i in indices]

        if not seeds:
            raise SeedingError("at least one cluster is required")
        if n_clusters is not None and n_clusters != len(seeds):
            raise SeedingError(
                f"n_clusters={n_clusters} does not match {len(seeds)} explicit seed(s)"
            )
        return (tuple(indices) if indices is not None else None), tuple(seeds)

    def _seed_clusters(self) -> None:
        dims = self._dimension_indices
        self._clusters: List[Cluster] = [
            Cluster(dims, CenterItem.from_item(seed, dims), self._order)
            for seed in self._initial_seeds
        ]
        self._previous: List[Optional[CenterItem]] = [None] * len(self._clusters)
        self._assignments: Optional[List[Cluster]] = None
        self._iterations = 0
        self._elapsed = 0.0
        LOGGER.debug(
            "Seeded %d cluster(s) over dimensions %s", len(self._clusters), list(dims)
        )

    @property
    def data(self) -> Sequence[Item]:
        return self._data

    @property
    def n_clusters(self) -> int:
        return len(self._clusters)

    @property
    def clusters(self) -> List[Cluster]:
        return self._clusters

    @property
    def dimension_indices(self) -> Tuple[int, ...]:
        return self._dimension_indices

    @property
    def initial_seeds(self) -> Tuple[Item, ...]:
        """Items the centroids were seeded from."""
        return self._initial_seeds

    @property
    def seed_indices(self) -> Optional[Tuple[int, ...]]:
        """Dataset indices of the seeds, or ``None`` when seeded from items."""
        return self._seed_indices

    @property
    def previous_centroids(self) -> List[Optional[CenterItem]]:
        """Centroids as they were at the start of the latest pass."""
        return list(self._previous)

    @property
    def iterations(self) -> int:
        return self._iterations

    @property
    def order(self) -> Optional[Callable[[Item], float]]:
        return self._order

    @order.setter
    def order(self, order: Optional[Callable[[Item], float]]) -> None:
        self._order = order
        for cluster in self._clusters:
            cluster.order = order

    def set_dimension_indices(self, dimension_indices: Sequence[int]) -> None:
        """
        Switch to a new set of active dimensions.

        Every centroid is rebuilt from its original seed over the new
        dimensions. Progress made under the previous dimensions is dropped.
        """
        self._dimension_indices = tuple(int(d) for d in dimension_indices)
        self._seed_clusters()

    def run_iteration(self) -> None:
        """Run one assign-then-update pass over the whole dataset."""
        started = time.perf_counter()
        dims = self._dimension_indices

        for i, cluster in enumerate(self._clusters):
            self._previous[i] = cluster.centroid.copy()
            cluster.clear()

        assignments = []
        for item in self._data:
            nearest = None
            min_distance = math.inf
            for cluster in self._clusters:
                d = distance(item, cluster.centroid, dims)
                if d < min_distance:
                    min_distance = d
                    nearest = cluster
            nearest.add_member(item, min_distance)
            assignments.append(nearest)

        for cluster in self._clusters:
            cluster.recompute_centroid()

        self._assignments = assignments
        self._iterations += 1
        self._elapsed += time.perf_counter() - started

    def run(self, max_iterations: int = DEFAULT_MAX_ITERATIONS) -> int:
        """
        Iterate until the centroids stop moving or the cap is reached.

        Parameters
        ----------
        max_iterations : int, default=50
            Maximum number of passes. ``0`` means no cap: the run only ends
            on convergence, which integer means are not guaranteed to reach,
            unless a ``safety_cap`` was configured. A negative value runs
            nothing.

        Returns
        -------
        int
            Passes executed by this call.

        Raises
        ------
        NonConvergenceError
            If ``max_iterations`` is 0 and the safety cap is reached.
        """
        if max_iterations < 0:
            LOGGER.warning("max_iterations=%d is negative; nothing to run", max_iterations)
            return 0

        count = 0
        while True:
            self.run_iteration()
            count += 1
            converged = self.has_converged()
            LOGGER.debug("Iteration %d finished, converged=%s", count, converged)
            if converged:
                break
            if max_iterations > 0 and count >= max_iterations:
                LOGGER.warning(
                    "Stopped at the iteration cap (%d) before converging", max_iterations
                )
                break
            if max_iterations == 0 and self._safety_cap is not None and count >= self._safety_cap:
                LOGGER.warning("Safety cap of %d iteration(s) reached", self._safety_cap)
                raise NonConvergenceError(count)

        LOGGER.info("KMeans run finished: iterations=%d converged=%s", count, converged)
        return count

    def has_converged(self) -> bool:
        """True when no centroid moved during the latest pass."""
        if any(previous is None for previous in self._previous):
            return False
        return all(
            component_equals(previous, cluster.centroid, self._dimension_indices)
            for previous, cluster in zip(self._previous, self._clusters)
        )

    def get_clusters(self, order: Optional[Callable[[Cluster], float]] = None) -> List[Cluster]:
        """
        Return the clusters, first sorting them in place by ``order`` if given.

        Centroid snapshots move with their clusters, so :meth:`has_converged`
        is unaffected by the sort.
        """
        if order is not None:
            paired = sorted(zip(self._clusters, self._previous), key=lambda p: order(p[0]))
            self._clusters[:] = [cluster for cluster, _ in paired]
            self._previous[:] = [previous for _, previous in paired]
        return self._clusters

    def centroids(self) -> np.ndarray:
        """Centroids as a ``(k, d)`` int64 array over the active dimensions."""
        return np.array(
            [cluster.centroid.as_tuple(self._dimension_indices) for cluster in self._clusters],
            dtype=np.int64,
        )

    def labels(self) -> List[int]:
        """
        Index of the cluster each dataset point joined in the latest pass.

        Raises
        ------
        ClusteringError
            If no pass has run since seeding.
        """
        if self._assignments is None:
            raise ClusteringError("no assignment pass has run yet")
        positions = {id(cluster): i for i, cluster in enumerate(self._clusters)}
        return [positions[id(cluster)] for cluster in self._assignments]

    def predict(self, item: Item) -> int:
        """Index of the cluster whose centroid is nearest ``item``; ties go to the lower index."""
        nearest = 0
        min_distance = math.inf
        for i, cluster in enumerate(self._clusters):
            d = distance(item, cluster.centroid, self._dimension_indices)
            if d < min_distance:
                min_distance = d
                nearest = i
        return nearest

    @property
    def summary(self) -> TrainingSummary:
        return TrainingSummary(
            k=len(self._clusters),
            effective_k=sum(1 for cluster in self._clusters if cluster.members),
            dim=len(self._dimension_indices),
            num_points=len(self._data),
            iterations=self._iterations,
            converged=self.has_converged(),
            total_distance=float(sum(cluster.total_distance for cluster in self._clusters)),
            elapsed_millis=self._elapsed * 1000.0,
        )
