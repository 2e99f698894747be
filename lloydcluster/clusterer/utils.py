# Copyright (c) 2025 massivedatascience
# Licensed under the Apache License, Version 2.0

"""
Distance, ordering and sampling helpers shared by clusters and the engine.

Ordering rules are sort key functions. ``default_item_order`` sorts items
nearest-to-origin first; ``default_cluster_order`` sorts clusters
farthest-from-origin first.
"""

import logging
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Union

import numpy as np

from .errors import SeedingError
from .items import CenterItem, Item

if TYPE_CHECKING:
    from .cluster import Cluster

LOGGER = logging.getLogger(__name__)

Dimensions = Union[int, Sequence[int]]
RandomState = Union[None, int, np.random.Generator]


def build_dimension_indices(dimension: int) -> List[int]:
    """Return ``[0, 1, ..., dimension - 1]``."""
    return list(range(dimension))


def _as_indices(dims: Dimensions) -> Sequence[int]:
    if isinstance(dims, (int, np.integer)):
        return build_dimension_indices(int(dims))
    return dims


def origin(dims: Dimensions) -> CenterItem:
    """Return the all-zero point over ``dims``."""
    base = CenterItem()
    for dim in _as_indices(dims):
        base.set(dim, 0)
    return base


def distance(source: Item, target: Optional[Item], dims: Dimensions) -> float:
    """
    Distance between two items, restricted to ``dims``.

    With a single dimension this is the absolute difference; otherwise it
    is the Euclidean norm of the per-dimension differences. A ``target``
    of ``None`` measures from the origin.

    Parameters
    ----------
    source, target : Item
        Items to compare. ``target`` may be ``None``.
    dims : int or sequence of int
        Dimension indices to use, or a dimension count meaning ``0..n-1``.

    Returns
    -------
    float
    """
    dims = _as_indices(dims)
    if target is None:
        target = origin(dims)

    if len(dims) == 1:
        return float(abs(source.get(dims[0]) - target.get(dims[0])))

    # Differences are taken on Python ints so large int64 values cannot wrap.
    differences = np.array(
        [source.get(d) - target.get(d) for d in dims], dtype=np.float64
    )
    return float(np.sqrt(np.dot(differences, differences)))


def default_item_order(dims: Dimensions) -> Callable[[Item], float]:
    """Sort key putting items nearest the origin first."""
    dims = list(_as_indices(dims))

    def key(item: Item) -> float:
        return distance(item, None, dims)

    return key


def default_cluster_order() -> Callable[["Cluster"], float]:
    """Sort key putting clusters whose centroid is farthest from the origin first."""

    def key(cluster: "Cluster") -> float:
        return -distance(cluster.centroid, None, cluster.dimension_indices)

    return key


def random_distinct_indices(
    count: int, size: int, random_state: RandomState = None
) -> List[int]:
    """
    Draw ``count`` distinct indices uniformly from ``[0, size)``.

    Collisions are redrawn until a fresh index comes up.

    Parameters
    ----------
    count : int
        Number of indices to draw.
    size : int
        Exclusive upper bound.
    random_state : int, numpy.random.Generator or None
        Seed or generator. ``None`` draws fresh OS entropy.

    Raises
    ------
    SeedingError
        If ``count`` is negative or greater than ``size``.
    """
    if count < 0:
        raise SeedingError(f"cannot draw a negative number of seeds ({count})")
    if count > size:
        raise SeedingError(
            f"cannot seed {count} distinct centers from {size} points"
        )

    rng = np.random.default_rng(random_state)
    chosen: List[int] = []
    seen = set()
    while len(chosen) < count:
        candidate = int(rng.integers(size))
        if candidate in seen:
            continue
        seen.add(candidate)
        chosen.append(candidate)
    LOGGER.debug("Drew seed indices %s from %d points", chosen, size)
    return chosen


def component_equals(source: Item, target: Item, dims: Sequence[int]) -> bool:
    """True when ``source`` and ``target`` hold the same integer at every index in ``dims``."""
    return all(source.get(d) == target.get(d) for d in dims)


def copy_item_data(source: Item, target: Item, dims: Dimensions) -> Item:
    """Copy ``source``'s values at ``dims`` into ``target`` and return ``target``."""
    for dim in _as_indices(dims):
        target.set(dim, source.get(dim))
    return target


def cluster_values(clusters: Sequence["Cluster"], dim: int) -> List[List[int]]:
    """Member values at ``dim``, one list per cluster, in member order."""
    return [[item.get(dim) for item in cluster.members] for cluster in clusters]
