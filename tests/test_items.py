# Copyright (c) 2025 massivedatascience
# Licensed under the Apache License, Version 2.0

"""
Tests for dataset points and centroids.
"""

import unittest

import numpy as np

from lloydcluster.clusterer import CenterItem, Point, UnsetDimensionError


class PointTest(unittest.TestCase):
    """Test cases for Point."""

    def test_get_returns_each_axis(self):
        point = Point(7, -3, 12)
        self.assertEqual(len(point), 3)
        self.assertEqual(point.get(0), 7)
        self.assertEqual(point.get(1), -3)
        self.assertEqual(point.get(2), 12)

    def test_accepts_a_sequence(self):
        self.assertEqual(Point([4, 5]).as_tuple([0, 1]), (4, 5))
        self.assertEqual(Point(np.array([1, 2, 3])).as_tuple(range(3)), (1, 2, 3))

    def test_out_of_range_dimension_fails(self):
        point = Point(1, 2)
        with self.assertRaises(UnsetDimensionError) as ctx:
            point.get(2)
        self.assertEqual(ctx.exception.dimension, 2)
        with self.assertRaises(UnsetDimensionError):
            point.get(-1)
        with self.assertRaises(UnsetDimensionError):
            point.set(5, 0)

    def test_empty_point_rejected(self):
        with self.assertRaises(ValueError):
            Point()

    def test_values_are_read_only(self):
        point = Point(1, 2)
        self.assertFalse(point.values.flags.writeable)
        with self.assertRaises(ValueError):
            point.values[0] = 9

    def test_set_replaces_value(self):
        point = Point(1, 2)
        before = point.values
        self.assertTrue(point.set(1, 20))
        self.assertEqual(point.get(1), 20)
        # Arrays handed out earlier are not modified.
        self.assertEqual(int(before[1]), 2)

    def test_large_values(self):
        point = Point(2 ** 62, -(2 ** 62))
        self.assertEqual(point.get(0), 2 ** 62)
        self.assertEqual(point.get(1), -(2 ** 62))


class CenterItemTest(unittest.TestCase):
    """Test cases for CenterItem."""

    def test_starts_empty(self):
        center = CenterItem()
        self.assertEqual(center.dimensions, ())
        with self.assertRaises(UnsetDimensionError):
            center.get(0)

    def test_unset_dimension_is_a_key_error(self):
        with self.assertRaises(KeyError):
            CenterItem({0: 1}).get(3)

    def test_set_and_get(self):
        center = CenterItem()
        self.assertTrue(center.set(4, 11))
        self.assertTrue(center.set(1, -2))
        self.assertEqual(center.get(4), 11)
        self.assertEqual(center.get(1), -2)
        self.assertEqual(set(center.dimensions), {1, 4})

    def test_from_item_copies_selected_dimensions(self):
        center = CenterItem.from_item(Point(1, 2, 3), [0, 2])
        self.assertEqual(center.as_tuple([0, 2]), (1, 3))
        with self.assertRaises(UnsetDimensionError):
            center.get(1)

    def test_copy_is_independent(self):
        center = CenterItem({0: 5})
        clone = center.copy()
        clone.set(0, 6)
        self.assertEqual(center.get(0), 5)
        self.assertEqual(clone.get(0), 6)


if __name__ == "__main__":
    unittest.main()
