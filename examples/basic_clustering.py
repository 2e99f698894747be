#!/usr/bin/env python
# Copyright (c) 2025 massivedatascience
# Licensed under the Apache License, Version 2.0

"""
Basic clustering example using the KMeans engine on integer points.
"""

import logging

from lloydcluster.clusterer import KMeans, Point, default_cluster_order


def main():
    logging.basicConfig(level=logging.INFO)

    # Create sample data - two well-separated clusters
    data = [
        Point(0, 0),
        Point(1, 1),
        Point(1, 0),
        Point(9, 8),
        Point(8, 9),
        Point(9, 9),
    ]

    print("Input data:")
    for point in data:
        print(f"  {point}")

    # Create and run the engine
    kmeans = KMeans(2, data, n_clusters=2, random_state=42)

    print("\nRunning k-means...")
    iterations = kmeans.run(20)
    print(f"Finished after {iterations} iteration(s), converged={kmeans.has_converged()}")

    # Display clusters, farthest from the origin first
    print("\nClusters:")
    for i, cluster in enumerate(kmeans.get_clusters(default_cluster_order())):
        centroid = cluster.centroid.as_tuple(kmeans.dimension_indices)
        print(f"  Cluster {i}: centroid={centroid} members={cluster.members}")

    # Summary statistics
    print(f"\n{kmeans.summary.convergence_report()}")

    # Predict cluster for a new point
    new_point = Point(2, 3)
    print(f"\nNew point {new_point} assigned to cluster: {kmeans.predict(new_point)}")


if __name__ == "__main__":
    main()
