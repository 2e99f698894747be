#!/usr/bin/env python
# Copyright (c) 2025 massivedatascience
# Licensed under the Apache License, Version 2.0

"""
Setup configuration for the lloydcluster package.
"""

from setuptools import setup, find_packages
import os

# Read version from package
with open(os.path.join("lloydcluster", "__init__.py")) as f:
    for line in f:
        if line.startswith("__version__"):
            version = line.split("=")[1].strip().strip('"').strip("'")
            break

# Read long description from README
long_description = """
# Lloyd Cluster

Iterative k-means clustering over integer coordinate vectors.

## Features

- **Integer Centroids**: Centroids are truncated integer means; convergence is
  exact integer equality
- **Dimension Subsets**: Cluster on any subset of coordinate indices and
  re-seed when the subset changes
- **Pluggable Seeding**: Explicit seed points or indices, or distinct random
  picks from an injectable generator
- **Member Ordering**: Optional sort key applied to cluster members
- **Spark ML Integration**: Estimator/Model pair for DataFrames

## Installation

```bash
pip install lloydcluster
```

## Quick Start

```python
from lloydcluster.clusterer import KMeans, Point

data = [Point(0, 0), Point(1, 1), Point(9, 8), Point(8, 9)]

kmeans = KMeans(2, data, n_clusters=2, random_state=42)
iterations = kmeans.run(20)

for cluster in kmeans.get_clusters():
    print(cluster.centroid, cluster.members)
```
"""

setup(
    name="lloydcluster",
    version=version,
    description="Iterative k-means clustering over integer coordinate vectors",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="MassiveDataScience",
    author_email="support@massivedatascience.com",
    license="Apache License 2.0",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    python_requires=">=3.8",
    install_requires=[
        "pyspark>=3.4.0",
        "numpy>=1.20.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=3.0.0",
            "black>=22.0.0",
            "flake8>=4.0.0",
            "mypy>=0.950",
        ],
        "docs": [
            "sphinx>=4.0.0",
            "sphinx-rtd-theme>=1.0.0",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering",
        "Topic :: Software Development :: Libraries",
    ],
    keywords="clustering kmeans lloyd integer machine-learning pyspark",
)
