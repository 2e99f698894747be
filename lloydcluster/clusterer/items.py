# Copyright (c) 2025 massivedatascience
# Licensed under the Apache License, Version 2.0

"""
Coordinate items read and written by the clustering engine.

Every item exposes the same two-method capability: ``get(dim)`` returns the
integer stored at a dimension index and ``set(dim, value)`` stores one. Two
shapes are provided:

- :class:`Point` is a dataset point. Its arity is fixed when it is built and
  every axis is always present. The engine only ever reads it.
- :class:`CenterItem` is a centroid. It starts empty and stores whatever
  dimensions are written to it, so it can represent any dimension subset.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Sequence, Tuple

import numpy as np

from .errors import UnsetDimensionError


class Item(ABC):
    """Anything that stores an integer per dimension index."""

    @abstractmethod
    def get(self, dim: int) -> int:
        """Return the value stored at ``dim``."""

    @abstractmethod
    def set(self, dim: int, value: int) -> bool:
        """Store ``value`` at ``dim``."""

    def as_tuple(self, dims: Iterable[int]) -> Tuple[int, ...]:
        """Return the values at ``dims`` as a tuple, in ``dims`` order."""
        return tuple(self.get(d) for d in dims)


class Point(Item):
    """
    A dense dataset point with a fixed number of integer axes.

    Values live in a read-only ``int64`` NumPy array.

    Parameters
    ----------
    *values : int
        One value per axis. At least one axis is required.

    Examples
    --------
    >>> p = Point(3, 4)
    >>> p.get(1)
    4
    >>> len(p)
    2
    """

    __slots__ = ("_values",)

    def __init__(self, *values: int):
        if len(values) == 1 and isinstance(values[0], (list, tuple, np.ndarray)):
            values = tuple(values[0])
        if not values:
            raise ValueError("a point needs at least one axis")
        array = np.array([int(v) for v in values], dtype=np.int64)
        array.setflags(write=False)
        self._values = array

    def get(self, dim: int) -> int:
        if not 0 <= dim < len(self._values):
            raise UnsetDimensionError(
                dim, f"dimension {dim} is out of range for a {len(self._values)}-axis point"
            )
        return int(self._values[dim])

    def set(self, dim: int, value: int) -> bool:
        if not 0 <= dim < len(self._values):
            raise UnsetDimensionError(
                dim, f"dimension {dim} is out of range for a {len(self._values)}-axis point"
            )
        values = self._values.copy()
        values[dim] = int(value)
        values.setflags(write=False)
        self._values = values
        return True

    @property
    def values(self) -> np.ndarray:
        """Read-only view of all axes."""
        return self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Point({', '.join(str(int(v)) for v in self._values)})"


class CenterItem(Item):
    """
    A sparse, mutable centroid keyed by dimension index.

    Reading a dimension that was never written raises
    :class:`~lloydcluster.clusterer.errors.UnsetDimensionError`.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Dict[int, int] = None):
        self._data: Dict[int, int] = {}
        if data:
            for dim, value in data.items():
                self.set(dim, value)

    @classmethod
    def from_item(cls, item: Item, dims: Sequence[int]) -> "CenterItem":
        """Build a centroid holding ``item``'s values over ``dims``."""
        center = cls()
        for dim in dims:
            center.set(dim, item.get(dim))
        return center

    def get(self, dim: int) -> int:
        try:
            return self._data[dim]
        except KeyError:
            raise UnsetDimensionError(dim) from None

    def set(self, dim: int, value: int) -> bool:
        self._data[dim] = int(value)
        return True

    @property
    def dimensions(self) -> Tuple[int, ...]:
        """Dimension indices that currently hold a value."""
        return tuple(self._data)

    def copy(self) -> "CenterItem":
        return CenterItem(self._data)

    def __repr__(self) -> str:
        return f"CenterItem({self._data!r})"
