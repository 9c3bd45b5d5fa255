#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tests for the k-d tree spatial index.
"""

import numpy as np
import pytest

from radar_processor.exceptions import SpatialIndexError
from radar_processor.processing.spatial_index import SpatialIndex


def test_range_query_returns_input_positions(group_with_outlier):
    index = SpatialIndex().build(group_with_outlier)

    result = index.range_query((0.0, 0.0, 0.0), 1.0)

    assert result.tolist() == [0, 1, 2, 3, 4]
    np.testing.assert_allclose(index.point(5), (100.0, 0.0, 0.0))


def test_range_query_boundary_is_inclusive():
    index = SpatialIndex().build([(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 2.0, 0.0)])

    assert index.range_query((0.0, 0.0, 0.0), 1.0).tolist() == [0, 1]


def test_neighbors_of_includes_the_point_itself(tight_group):
    index = SpatialIndex().build(tight_group)

    assert 3 in index.neighbors_of(3, 0.01).tolist()
    assert index.neighbors_of(3, 0.01).tolist() == [3]


def test_query_point_need_not_be_indexed(tight_group):
    index = SpatialIndex().build(tight_group)

    assert index.range_query((50.0, 50.0, 50.0), 1.0).size == 0


def test_empty_index_answers_empty():
    index = SpatialIndex().build([])

    assert len(index) == 0
    assert index.is_built
    result = index.range_query((0.0, 0.0, 0.0), 10.0)
    assert result.size == 0
    assert result.dtype == np.intp


def test_build_copies_the_input(tight_group):
    index = SpatialIndex().build(tight_group)
    tight_group[:] = 1000.0

    assert index.range_query((0.0, 0.0, 0.0), 1.0).tolist() == [0, 1, 2, 3, 4]


def test_wrong_shape_is_rejected():
    with pytest.raises(SpatialIndexError):
        SpatialIndex().build([(0.0, 1.0), (2.0, 3.0)])


def test_non_finite_points_are_rejected():
    with pytest.raises(SpatialIndexError):
        SpatialIndex().build([(0.0, 0.0, 0.0), (np.nan, 0.0, 0.0)])


def test_query_before_build_fails():
    with pytest.raises(SpatialIndexError):
        SpatialIndex().range_query((0.0, 0.0, 0.0), 1.0)


def test_negative_radius_fails(tight_group):
    index = SpatialIndex().build(tight_group)

    with pytest.raises(ValueError):
        index.range_query((0.0, 0.0, 0.0), -1.0)


def test_matches_brute_force(two_blobs):
    index = SpatialIndex(leafsize=4).build(two_blobs)

    for pid in (0, 17, 45, 85):
        distances = np.linalg.norm(two_blobs - two_blobs[pid], axis=1)
        expected = np.flatnonzero(distances <= 1.0).tolist()
        assert index.neighbors_of(pid, 1.0).tolist() == expected
