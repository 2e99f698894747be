#!/usr/bin/env python
# Copyright (c) 2025 massivedatascience
# Licensed under the Apache License, Version 2.0

"""
Clustering the same points on different dimension subsets.

Axis 0 is a play count, axis 1 a listener age and axis 2 a genre code.
Switching the active dimensions re-seeds every centroid from its original
seed point.
"""

from lloydcluster.clusterer import KMeans, Point, cluster_values, default_item_order


def main():
    data = [
        Point(120, 19, 3),
        Point(135, 22, 3),
        Point(15, 61, 1),
        Point(22, 58, 1),
        Point(130, 64, 2),
        Point(10, 20, 2),
    ]

    kmeans = KMeans(3, data, seed_indices=[0, 2], order=default_item_order(3))

    print("All dimensions:")
    kmeans.run()
    print(f"  centroids: {kmeans.centroids().tolist()}")
    print(f"  play counts per cluster: {cluster_values(kmeans.clusters, 0)}")

    for dims in ([0], [1], [0, 1]):
        kmeans.set_dimension_indices(dims)
        kmeans.order = default_item_order(dims)
        iterations = kmeans.run()
        print(f"\nDimensions {dims} ({iterations} iteration(s)):")
        print(f"  centroids: {kmeans.centroids().tolist()}")
        print(f"  labels: {kmeans.labels()}")


if __name__ == "__main__":
    main()
