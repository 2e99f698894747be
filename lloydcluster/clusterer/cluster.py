# Copyright (c) 2025 massivedatascience
# Licensed under the Apache License, Version 2.0

"""
A single cluster: one centroid plus the points assigned to it in the
current pass.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from .items import CenterItem, Item
from .utils import distance

LOGGER = logging.getLogger(__name__)


def _truncating_mean(total: int, count: int) -> int:
    # Rounds toward zero, unlike floor division on negative totals.
    quotient = abs(total) // count
    return -quotient if total < 0 else quotient


class Cluster:
    """
    A centroid and the members assigned to it during one assignment pass.

    Members are references to dataset points, never copies. The member list
    is emptied by :meth:`clear` at the start of every pass and rebuilt by
    :meth:`add_member`.

    Parameters
    ----------
    dimension_indices : sequence of int
        Active dimension indices. The engine hands every cluster the same
        tuple.
    centroid : CenterItem, optional
        Starting centroid.
    order : callable, optional
        Sort key applied to the members before the centroid is recomputed.
        Members end up in descending key order.

    Attributes
    ----------
    total_distance : float
        Sum of member distances to the centroid, as accumulated by
        :meth:`add_member` or recomputed by :meth:`recompute_total_distance`.
    """

    def __init__(
        self,
        dimension_indices: Sequence[int],
        centroid: Optional[CenterItem] = None,
        order: Optional[Callable[[Item], float]] = None,
    ):
        self._dimension_indices: Tuple[int, ...] = tuple(dimension_indices)
        self.centroid = centroid
        self.order = order
        self.members: List[Item] = []
        self.total_distance = 0.0

    @property
    def dimension_indices(self) -> Tuple[int, ...]:
        return self._dimension_indices

    @property
    def dimension(self) -> int:
        return len(self._dimension_indices)

    def add_member(self, item: Item, distance_to_centroid: float) -> None:
        """Append ``item`` and add its distance to the running total."""
        self.total_distance += distance_to_centroid
        self.members.append(item)

    def clear(self) -> None:
        """Drop all members and zero the total distance. The centroid is kept."""
        self.members.clear()
        self.total_distance = 0.0

    def recompute_centroid(self) -> CenterItem:
        """
        Replace the centroid with the truncated integer mean of the members.

        A cluster with no members gets a centroid of zeros over every active
        dimension; its previous position is not kept.

        Returns
        -------
        CenterItem
            The new centroid.
        """
        if self.order is not None:
            self.members.sort(key=self.order)
            self.members.reverse()
        self.centroid = self._mean_centroid()
        return self.centroid

    def _mean_centroid(self) -> CenterItem:
        centroid = CenterItem()
        count = len(self.members)
        if count == 0:
            LOGGER.debug("Empty cluster; resetting centroid to the origin")
        for dim in self._dimension_indices:
            if count == 0:
                centroid.set(dim, 0)
                continue
            total = sum(member.get(dim) for member in self.members)
            centroid.set(dim, _truncating_mean(total, count))
        return centroid

    def merge_from(self, other: "Cluster") -> None:
        """
        Take over ``other``'s members and recompute the centroid.

        Member order is left as appended. ``other`` keeps its own member
        list; discard it afterwards.
        """
        self.members.extend(other.members)
        self.centroid = self._mean_centroid()

    def recompute_total_distance(self) -> float:
        """Recompute :attr:`total_distance` from the current centroid and members."""
        self.total_distance = 0.0
        for member in self.members:
            self.total_distance += distance(member, self.centroid, self._dimension_indices)
        return self.total_distance

    def __len__(self) -> int:
        return len(self.members)

    def __repr__(self) -> str:
        return (
            f"Cluster(centroid={self.centroid!r}, members={len(self.members)}, "
            f"total_distance={self.total_distance:.4f})"
        )
