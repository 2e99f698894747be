# Copyright (c) 2025 massivedatascience
# Licensed under the Apache License, Version 2.0

"""
Tests for the IntegerKMeans PySpark wrapper.
"""

import os
import shutil
import unittest

import numpy as np
from pyspark.sql import SparkSession
from pyspark.ml.linalg import Vectors

from lloydcluster.clusterer import IntegerKMeans, IntegerKMeansModel

HAS_JAVA = bool(shutil.which("java") or os.environ.get("JAVA_HOME"))


@unittest.skipUnless(HAS_JAVA, "Spark tests need a Java runtime")
class IntegerKMeansTest(unittest.TestCase):
    """Test cases for IntegerKMeans."""

    @classmethod
    def setUpClass(cls):
        """Set up Spark session for tests."""
        cls.spark = (
            SparkSession.builder.master("local[2]")
            .appName("IntegerKMeansTest")
            .config("spark.ui.enabled", "false")
            .config("spark.sql.shuffle.partitions", "4")
            .getOrCreate()
        )
        cls.spark.sparkContext.setLogLevel("WARN")

    @classmethod
    def tearDownClass(cls):
        """Tear down Spark session."""
        cls.spark.stop()

    def _blobs(self):
        return self.spark.createDataFrame(
            [
                (Vectors.dense([0.0, 0.0]),),
                (Vectors.dense([1.0, 1.0]),),
                (Vectors.dense([9.0, 8.0]),),
                (Vectors.dense([8.0, 9.0]),),
            ],
            ["features"],
        )

    def test_basic_clustering(self):
        """Test basic clustering of two groups."""
        data = self._blobs()

        kmeans = IntegerKMeans(k=2, maxIter=20, seed=42)
        model = kmeans.fit(data)

        self.assertEqual(model.numClusters, 2)
        self.assertEqual(model.numFeatures, 2)

        centers = model.clusterCenters()
        self.assertEqual(centers.shape, (2, 2))
        self.assertEqual(centers.dtype, np.int64)
        self.assertEqual(sorted(centers.tolist()), [[0, 0], [8, 8]])

        predictions = model.transform(data)
        self.assertEqual(predictions.count(), 4)

        pred_values = [row.prediction for row in predictions.collect()]
        self.assertEqual(pred_values[0], pred_values[1])
        self.assertEqual(pred_values[2], pred_values[3])
        self.assertNotEqual(pred_values[0], pred_values[2])

    def test_array_features(self):
        """Test integer array features."""
        data = self.spark.createDataFrame(
            [([0, 0],), ([0, 1],), ([100, 100],), ([101, 100],)],
            "features array<long>",
        )
        model = IntegerKMeans(k=2, seed=3).fit(data)
        self.assertEqual(sorted(model.clusterCenters().tolist()), [[0, 0], [100, 100]])

    def test_non_integral_features_rejected(self):
        """Test that fractional values fail the fit."""
        data = self.spark.createDataFrame(
            [(Vectors.dense([0.5, 0.0]),), (Vectors.dense([1.0, 1.0]),)],
            ["features"],
        )
        with self.assertRaises(ValueError):
            IntegerKMeans(k=1).fit(data)

    def test_distance_column(self):
        """Test distance column output."""
        data = self._blobs()

        kmeans = IntegerKMeans(k=2, maxIter=10, distanceCol="distance", seed=42)
        model = kmeans.fit(data)

        predictions = model.transform(data)
        self.assertTrue("distance" in predictions.columns)

        distances = [row.distance for row in predictions.collect()]
        self.assertTrue(all(d >= 0 for d in distances))

    def test_predict_single_point(self):
        """Test single point prediction."""
        data = self._blobs()
        model = IntegerKMeans(k=2, maxIter=20, seed=42).fit(data)

        near_origin = model.predict(Vectors.dense([0.0, 1.0]))
        far = model.predict(Vectors.dense([9.0, 9.0]))
        self.assertIn(near_origin, [0, 1])
        self.assertNotEqual(near_origin, far)
        self.assertEqual(model.predict([8, 9]), far)

    def test_compute_cost(self):
        """Test cost computation."""
        data = self._blobs()
        model = IntegerKMeans(k=2, maxIter=20, seed=42).fit(data)

        cost = model.computeCost(data)
        # Centres (0, 0) and (8, 8): 0 + sqrt(2) + 1 + 1.
        self.assertAlmostEqual(cost, 2.0 + np.sqrt(2.0))

    def test_dimension_indices(self):
        """Test clustering on a subset of features."""
        data = self.spark.createDataFrame(
            [
                (Vectors.dense([0.0, 0.0]),),
                (Vectors.dense([1.0, 100.0]),),
                (Vectors.dense([50.0, 0.0]),),
                (Vectors.dense([51.0, 100.0]),),
            ],
            ["features"],
        )
        model = IntegerKMeans(k=2, dimensionIndices=[0], seed=42).fit(data)
        self.assertEqual(model.numFeatures, 1)
        self.assertEqual(sorted(model.clusterCenters().tolist()), [[0], [50]])

    def test_summary(self):
        """Test training summary."""
        model = IntegerKMeans(k=2, maxIter=20, seed=42).fit(self._blobs())
        self.assertTrue(model.hasSummary())
        summary = model.summary
        self.assertEqual(summary.k, 2)
        self.assertEqual(summary.num_points, 4)
        self.assertTrue(summary.converged)

    def test_model_without_summary(self):
        """Test a model built directly."""
        model = IntegerKMeansModel(np.array([[1, 2]]), [0, 1])
        self.assertFalse(model.hasSummary())
        with self.assertRaises(RuntimeError):
            model.summary

    def test_reproducibility(self):
        """Test that same seed produces same results."""
        data = self._blobs().cache()

        model1 = IntegerKMeans(k=2, maxIter=20, seed=42).fit(data)
        predictions1 = [row.prediction for row in model1.transform(data).collect()]

        model2 = IntegerKMeans(k=2, maxIter=20, seed=42).fit(data)
        predictions2 = [row.prediction for row in model2.transform(data).collect()]

        self.assertEqual(predictions1, predictions2)

    def test_too_many_clusters(self):
        """Test that k above the row count fails."""
        with self.assertRaises(ValueError):
            IntegerKMeans(k=5, seed=1).fit(self._blobs())


class IntegerKMeansParamsTest(unittest.TestCase):
    """Test cases for IntegerKMeans params; no Spark session needed."""

    def test_parameter_defaults(self):
        kmeans = IntegerKMeans()
        self.assertEqual(kmeans.getK(), 2)
        self.assertEqual(kmeans.getMaxIter(), 50)
        self.assertEqual(kmeans.getFeaturesCol(), "features")
        self.assertEqual(kmeans.getPredictionCol(), "prediction")
        self.assertIsNone(kmeans.getDistanceCol())
        self.assertIsNone(kmeans.getDimensionIndices())
        self.assertIsNone(kmeans.getSafetyCap())

    def test_parameter_getters(self):
        kmeans = IntegerKMeans(
            k=5,
            maxIter=30,
            seed=7,
            dimensionIndices=[0, 2],
            safetyCap=500,
        )

        self.assertEqual(kmeans.getK(), 5)
        self.assertEqual(kmeans.getMaxIter(), 30)
        self.assertEqual(kmeans.getSeed(), 7)
        self.assertEqual(kmeans.getDimensionIndices(), [0, 2])
        self.assertEqual(kmeans.getSafetyCap(), 500)

    def test_parameter_setters(self):
        kmeans = IntegerKMeans()

        kmeans.setK(7)
        self.assertEqual(kmeans.getK(), 7)

        kmeans.setMaxIter(0)
        self.assertEqual(kmeans.getMaxIter(), 0)

        kmeans.setDistanceCol("dist")
        self.assertEqual(kmeans.getDistanceCol(), "dist")

        kmeans.setDimensionIndices([1])
        self.assertEqual(kmeans.getDimensionIndices(), [1])


if __name__ == "__main__":
    unittest.main()
