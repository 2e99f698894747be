#!/usr/bin/env python
# Copyright (c) 2025 massivedatascience
# Licensed under the Apache License, Version 2.0

"""
Clustering a Spark DataFrame of integer feature vectors with IntegerKMeans.
"""

from pyspark.sql import SparkSession
from pyspark.ml.linalg import Vectors

from lloydcluster.clusterer import IntegerKMeans


def main():
    # Create Spark session
    spark = (
        SparkSession.builder.appName("IntegerKMeansClustering")
        .config("spark.ui.enabled", "false")
        .getOrCreate()
    )
    spark.sparkContext.setLogLevel("WARN")

    data = spark.createDataFrame(
        [
            (Vectors.dense([0.0, 0.0]),),
            (Vectors.dense([1.0, 1.0]),),
            (Vectors.dense([1.0, 0.0]),),
            (Vectors.dense([9.0, 8.0]),),
            (Vectors.dense([8.0, 9.0]),),
            (Vectors.dense([9.0, 9.0]),),
        ],
        ["features"],
    )

    print("Input data:")
    data.show()

    kmeans = IntegerKMeans(k=2, maxIter=20, seed=42, distanceCol="distance")

    print("\nTraining model...")
    model = kmeans.fit(data)

    print(f"\nNumber of clusters: {model.numClusters}")
    print(f"Number of features: {model.numFeatures}")
    print("\nCluster centers:")
    for i, center in enumerate(model.clusterCenters()):
        print(f"  Cluster {i}: {center}")

    predictions = model.transform(data)
    print("\nPredictions:")
    predictions.select("features", "prediction", "distance").show()

    print(f"\nTotal distance to centers: {model.computeCost(data):.4f}")
    print(model.summary.convergence_report())

    new_point = Vectors.dense([2.0, 3.0])
    print(f"\nNew point {new_point} assigned to cluster: {model.predict(new_point)}")

    spark.stop()


if __name__ == "__main__":
    main()
