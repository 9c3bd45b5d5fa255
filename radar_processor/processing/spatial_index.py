#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Spatial index for radar point clouds.

This module wraps a k-d tree so that the clustering code can ask for all
points within a radius of a query point and get back the positions of those
points in the original input sequence.
"""

import logging
from typing import Sequence, Union

import numpy as np
from scipy.spatial import cKDTree

from radar_processor.exceptions import SpatialIndexError

logger = logging.getLogger(__name__)


class SpatialIndex:
    """
    Three-dimensional point index backed by ``scipy.spatial.cKDTree``.

    The index is built once per frame and never updated in place. Query
    results are indices into the sequence passed to :meth:`build`.

    Attributes:
        leafsize: Number of points at which the tree switches to brute force.
    """

    def __init__(self, leafsize: int = 16):
        self.leafsize = leafsize
        self._points = None
        self._tree = None

    def build(self, points: Union[np.ndarray, Sequence[Sequence[float]]]) -> "SpatialIndex":
        """
        Build the index over a set of 3-D points.

        Args:
            points: Array-like of shape (N, 3). An empty sequence is allowed.

        Returns:
            The index itself, to allow ``SpatialIndex().build(points)``.

        Raises:
            SpatialIndexError: If the points are malformed or the tree
                cannot be constructed.
        """
        data = np.asarray(points, dtype=np.float64)
        if data.size == 0:
            self._points = np.empty((0, 3), dtype=np.float64)
            self._tree = None
            return self

        if data.ndim != 2 or data.shape[1] != 3:
            raise SpatialIndexError(f"Expected points of shape (N, 3), got {data.shape}")
        if not np.all(np.isfinite(data)):
            raise SpatialIndexError("Point coordinates must be finite")

        try:
            # copy_data keeps the tree independent of the caller's buffer
            self._tree = cKDTree(data, leafsize=self.leafsize, copy_data=True)
        except (MemoryError, ValueError) as e:
            self._points = None
            self._tree = None
            raise SpatialIndexError(f"Failed to build spatial index: {e}") from e

        self._points = self._tree.data
        logger.debug("Built spatial index over %d points", len(data))
        return self

    @property
    def is_built(self) -> bool:
        return self._points is not None

    def __len__(self) -> int:
        return 0 if self._points is None else len(self._points)

    def point(self, index: int) -> np.ndarray:
        """Return the stored coordinates of the point at ``index``."""
        if self._points is None:
            raise SpatialIndexError("Spatial index has not been built")
        return self._points[index]

    def range_query(self, point, radius: float) -> np.ndarray:
        """
        Find all indexed points within ``radius`` of ``point``.

        The boundary is inclusive. If ``point`` is itself indexed, its own
        index is part of the result.

        Args:
            point: Query coordinate, length 3.
            radius: Search radius, must not be negative.

        Returns:
            Sorted array of indices into the input sequence.
        """
        if self._points is None:
            raise SpatialIndexError("Spatial index has not been built")
        if radius < 0:
            raise ValueError(f"radius must not be negative, got {radius}")
        if self._tree is None:
            return np.array([], dtype=np.intp)

        indices = self._tree.query_ball_point(np.asarray(point, dtype=np.float64), r=radius,
                                              return_sorted=True)
        return np.asarray(indices, dtype=np.intp)

    def neighbors_of(self, index: int, radius: float) -> np.ndarray:
        """
        Range query centered on an indexed point.

        The point itself is still included; callers exclude it by index.
        """
        return self.range_query(self.point(index), radius)
