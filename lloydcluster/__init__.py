# Copyright (c) 2025 massivedatascience
# Licensed under the Apache License, Version 2.0

"""
Lloyd Cluster
=============

Iterative k-means clustering over integer coordinate vectors.
"""

__version__ = "0.1.0"
__all__ = ["clusterer"]
