# Copyright (c) 2025 massivedatascience
# Licensed under the Apache License, Version 2.0

"""
Integer K-Means Clustering
==========================

Lloyd's-algorithm k-means over integer coordinate vectors, with a
configurable set of active dimensions, pluggable seeding and member
ordering, and exact-equality convergence.

Classes:
    KMeans: The clustering engine
    Cluster: One centroid and its current members
    Point: Dense dataset point
    CenterItem: Sparse centroid
    TrainingSummary: Run statistics
    IntegerKMeans: PySpark estimator around the engine
    IntegerKMeansModel: Fitted PySpark model

Example:
    >>> from lloydcluster.clusterer import KMeans, Point
    >>>
    >>> data = [Point(0, 0), Point(1, 1), Point(9, 8), Point(8, 9)]
    >>> kmeans = KMeans(2, data, n_clusters=2, random_state=42)
    >>> iterations = kmeans.run(20)
    >>>
    >>> for cluster in kmeans.get_clusters():
    ...     print(cluster.centroid, cluster.members)
"""

from .cluster import Cluster
from .errors import ClusteringError, NonConvergenceError, SeedingError, UnsetDimensionError
from .items import CenterItem, Item, Point
from .kmeans import KMeans, TrainingSummary
from .spark import IntegerKMeans, IntegerKMeansModel
from .utils import (
    build_dimension_indices,
    cluster_values,
    component_equals,
    copy_item_data,
    default_cluster_order,
    default_item_order,
    distance,
    origin,
    random_distinct_indices,
)

__all__ = [
    "KMeans",
    "TrainingSummary",
    "Cluster",
    "Item",
    "Point",
    "CenterItem",
    "IntegerKMeans",
    "IntegerKMeansModel",
    "ClusteringError",
    "SeedingError",
    "UnsetDimensionError",
    "NonConvergenceError",
    "build_dimension_indices",
    "cluster_values",
    "component_equals",
    "copy_item_data",
    "default_cluster_order",
    "default_item_order",
    "distance",
    "origin",
    "random_distinct_indices",
]
