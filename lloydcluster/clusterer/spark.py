# Copyright (c) 2025 massivedatascience
# Licensed under the Apache License, Version 2.0

"""
PySpark Estimator and Model wrapping the integer k-means engine.

Fitting collects the features column to the driver and runs
:class:`~lloydcluster.clusterer.kmeans.KMeans` there; the fitted model
scores DataFrames with UDFs. Nothing is iterated in a distributed way.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from pyspark import keyword_only
from pyspark.ml import Estimator, Model
from pyspark.ml.linalg import Vector
from pyspark.ml.param import Param, Params, TypeConverters
from pyspark.ml.param.shared import HasFeaturesCol, HasMaxIter, HasPredictionCol, HasSeed
from pyspark.sql import DataFrame
from pyspark.sql import functions as F
from pyspark.sql.types import DoubleType, IntegerType

from .items import CenterItem, Point
from .kmeans import DEFAULT_MAX_ITERATIONS, KMeans, TrainingSummary
from .utils import distance

LOGGER = logging.getLogger(__name__)


def _to_point(features: Any) -> Point:
    """Convert an ML vector or a sequence of integral numbers to a :class:`Point`."""
    if features is None:
        raise ValueError("features value is null")
    raw = features.toArray().tolist() if isinstance(features, Vector) else list(features)
    values = []
    for value in raw:
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError(f"feature value {value} is not an integer")
            value = int(value)
        values.append(int(value))
    return Point(*values)


def _nearest(point: Point, centers: Sequence[CenterItem], dims: Sequence[int]) -> Tuple[int, float]:
    nearest = 0
    min_distance = float("inf")
    for i, center in enumerate(centers):
        d = distance(point, center, dims)
        if d < min_distance:
            min_distance = d
            nearest = i
    return nearest, min_distance


class IntegerKMeansParams(HasFeaturesCol, HasPredictionCol, HasMaxIter, HasSeed):
    """
    Params for IntegerKMeans and IntegerKMeansModel.

    Parameters
    ----------
    k : int, default=2
        Number of clusters (1 <= k <= number of rows).

    maxIter : int, default=50
        Maximum number of iterations. 0 runs until the centroids stop moving.

    seed : int, optional
        Random seed for picking the initial centroids.

    featuresCol : str, default="features"
        Features column: ML vectors or arrays holding integral values.

    predictionCol : str, default="prediction"
        Prediction column name.

    distanceCol : str, optional
        Column name for output distance to the assigned centroid.

    dimensionIndices : list of int, optional
        Feature indices used for distances and centroids. Defaults to all.

    safetyCap : int, optional
        Hard bound on iterations when maxIter is 0.
    """

    k = Param(
        Params._dummy(),
        "k",
        "Number of clusters to create (must be >= 1).",
        typeConverter=TypeConverters.toInt,
    )

    distanceCol = Param(
        Params._dummy(),
        "distanceCol",
        "Column name for distance to cluster center",
        typeConverter=TypeConverters.toString,
    )

    dimensionIndices = Param(
        Params._dummy(),
        "dimensionIndices",
        "Feature indices that take part in clustering",
        typeConverter=TypeConverters.toListInt,
    )

    safetyCap = Param(
        Params._dummy(),
        "safetyCap",
        "Hard iteration bound used when maxIter is 0",
        typeConverter=TypeConverters.toInt,
    )

    def __init__(self, *args):
        super(IntegerKMeansParams, self).__init__(*args)
        self._setDefault(
            k=2,
            featuresCol="features",
            predictionCol="prediction",
            maxIter=DEFAULT_MAX_ITERATIONS,
        )

    def getK(self) -> int:
        """Gets the value of k or its default value."""
        return self.getOrDefault(self.k)

    def getDistanceCol(self) -> Optional[str]:
        """Gets the value of distanceCol, or None when unset."""
        if not self.isDefined(self.distanceCol):
            return None
        return self.getOrDefault(self.distanceCol)

    def getDimensionIndices(self) -> Optional[List[int]]:
        """Gets the value of dimensionIndices, or None when unset."""
        if not self.isDefined(self.dimensionIndices):
            return None
        return self.getOrDefault(self.dimensionIndices)

    def getSafetyCap(self) -> Optional[int]:
        """Gets the value of safetyCap, or None when unset."""
        if not self.isDefined(self.safetyCap):
            return None
        return self.getOrDefault(self.safetyCap)


class IntegerKMeans(Estimator, IntegerKMeansParams):
    """
    K-means over integer feature vectors with exact-equality convergence.

    Examples
    --------
    >>> from pyspark.ml.linalg import Vectors
    >>> data = spark.createDataFrame([
    ...     (Vectors.dense([0.0, 0.0]),),
    ...     (Vectors.dense([1.0, 1.0]),),
    ...     (Vectors.dense([9.0, 8.0]),),
    ...     (Vectors.dense([8.0, 9.0]),)
    ... ], ["features"])
    >>> model = IntegerKMeans(k=2, maxIter=20, seed=42).fit(data)
    >>> model.transform(data).select("features", "prediction").show()

    Notes
    -----
    - The features column is collected to the driver.
    - A cluster left empty by a pass has its centroid reset to zeros.

    See Also
    --------
    IntegerKMeansModel : The fitted model
    """

    @keyword_only
    def __init__(
        self,
        *,
        k: int = 2,
        featuresCol: str = "features",
        predictionCol: str = "prediction",
        distanceCol: Optional[str] = None,
        dimensionIndices: Optional[List[int]] = None,
        maxIter: int = DEFAULT_MAX_ITERATIONS,
        seed: Optional[int] = None,
        safetyCap: Optional[int] = None,
    ):
        super(IntegerKMeans, self).__init__()
        kwargs = self._input_kwargs
        self.setParams(**kwargs)

    @keyword_only
    def setParams(
        self,
        *,
        k: int = 2,
        featuresCol: str = "features",
        predictionCol: str = "prediction",
        distanceCol: Optional[str] = None,
        dimensionIndices: Optional[List[int]] = None,
        maxIter: int = DEFAULT_MAX_ITERATIONS,
        seed: Optional[int] = None,
        safetyCap: Optional[int] = None,
    ):
        """
        Set parameters for IntegerKMeans.
        """
        kwargs = {key: value for key, value in self._input_kwargs.items() if value is not None}
        return self._set(**kwargs)

    def setK(self, value: int):
        """Sets the value of k."""
        return self._set(k=value)

    def setDistanceCol(self, value: str):
        """Sets the value of distanceCol."""
        return self._set(distanceCol=value)

    def setDimensionIndices(self, value: List[int]):
        """Sets the value of dimensionIndices."""
        return self._set(dimensionIndices=value)

    def setSafetyCap(self, value: int):
        """Sets the value of safetyCap."""
        return self._set(safetyCap=value)

    def setMaxIter(self, value: int):
        """Sets the value of maxIter."""
        return self._set(maxIter=value)

    def setSeed(self, value: int):
        """Sets the value of seed."""
        return self._set(seed=value)

    def setFeaturesCol(self, value: str):
        """Sets the value of featuresCol."""
        return self._set(featuresCol=value)

    def setPredictionCol(self, value: str):
        """Sets the value of predictionCol."""
        return self._set(predictionCol=value)

    def _fit(self, dataset: DataFrame) -> "IntegerKMeansModel":
        rows = dataset.select(self.getFeaturesCol()).collect()
        points = [_to_point(row[0]) for row in rows]
        if not points:
            raise ValueError("cannot fit IntegerKMeans on an empty dataset")
        dimension = len(points[0])
        if any(len(point) != dimension for point in points):
            raise ValueError("all feature vectors must have the same length")

        # HasSeed defaults to a class-name hash, which may be negative.
        rng = np.random.default_rng(abs(self.getSeed()))
        engine = KMeans(
            dimension,
            points,
            self.getK(),
            random_state=rng,
            safety_cap=self.getSafetyCap(),
        )
        dims = self.getDimensionIndices()
        if dims is not None:
            engine.set_dimension_indices(dims)

        iterations = engine.run(self.getMaxIter())
        LOGGER.info(
            "Fitted IntegerKMeans on %d rows: k=%d iterations=%d",
            len(points),
            engine.n_clusters,
            iterations,
        )
        model = IntegerKMeansModel(engine.centroids(), engine.dimension_indices, engine.summary)
        return self._copyValues(model)


class IntegerKMeansModel(Model, IntegerKMeansParams):
    """
    Model fitted by IntegerKMeans.

    Attributes
    ----------
    clusterCenters : np.ndarray
        Integer centres (k x d, d = number of active dimensions).

    numClusters : int
        Number of clusters.

    numFeatures : int
        Number of active dimensions.

    Examples
    --------
    >>> centers = model.clusterCenters()
    >>> predictions = model.transform(test_data)
    >>> cluster = model.predict(Vectors.dense([2.0, 3.0]))
    >>> cost = model.computeCost(data)
    """

    def __init__(
        self,
        centers: Optional[np.ndarray] = None,
        dimensionIndices: Optional[Sequence[int]] = None,
        summary: Optional[TrainingSummary] = None,
    ):
        super(IntegerKMeansModel, self).__init__()
        self._centers = np.asarray(centers if centers is not None else [], dtype=np.int64)
        self._dims = list(dimensionIndices) if dimensionIndices is not None else []
        self._summary = summary

    def _center_items(self) -> List[CenterItem]:
        return [CenterItem(dict(zip(self._dims, map(int, row)))) for row in self._centers]

    def clusterCenters(self) -> np.ndarray:
        """
        Get the cluster centers as a NumPy array.

        Returns
        -------
        np.ndarray
            int64 array of shape (k, d).
        """
        return self._centers.copy()

    @property
    def numClusters(self) -> int:
        """Number of clusters."""
        return len(self._centers)

    @property
    def numFeatures(self) -> int:
        """Number of active dimensions."""
        return len(self._dims)

    def predict(self, value: Any) -> int:
        """
        Predict the cluster for a single data point.

        Ties go to the lowest cluster index.
        """
        return _nearest(_to_point(value), self._center_items(), self._dims)[0]

    def computeCost(self, dataset: DataFrame) -> float:
        """
        Sum of distances from each row to its nearest cluster center.

        Parameters
        ----------
        dataset : DataFrame
            Dataset to evaluate (must have features column).
        """
        centers = self._center_items()
        rows = dataset.select(self.getFeaturesCol()).collect()
        return float(sum(_nearest(_to_point(row[0]), centers, self._dims)[1] for row in rows))

    def hasSummary(self) -> bool:
        """True if the model was fitted in this session."""
        return self._summary is not None

    @property
    def summary(self) -> TrainingSummary:
        """Training summary of the fit that produced this model."""
        if self._summary is None:
            raise RuntimeError("No training summary available for this IntegerKMeansModel")
        return self._summary

    def _transform(self, dataset: DataFrame) -> DataFrame:
        centers = self._center_items()
        dims = list(self._dims)

        def assign(features):
            return _nearest(_to_point(features), centers, dims)

        features = F.col(self.getFeaturesCol())
        predict_udf = F.udf(lambda v: assign(v)[0], IntegerType())
        result = dataset.withColumn(self.getPredictionCol(), predict_udf(features))

        distance_col = self.getDistanceCol()
        if distance_col:
            distance_udf = F.udf(lambda v: float(assign(v)[1]), DoubleType())
            result = result.withColumn(distance_col, distance_udf(features))
        return result
