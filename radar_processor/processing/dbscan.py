#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Density-based clustering (DBSCAN) of radar point clouds.

Neighborhoods are answered by a k-d tree spatial index built fresh for every
run. All bookkeeping (visited and assigned flags, the expansion work list) is
local to a single call of :meth:`DBSCAN.run`, so one clusterer instance can be
shared between frames.
"""

import logging
import math
from collections import deque
from dataclasses import dataclass, field
from typing import List

import numpy as np

from radar_processor.exceptions import ConfigurationError
from radar_processor.processing.spatial_index import SpatialIndex

logger = logging.getLogger(__name__)

NOISE = -1


@dataclass
class ClusterResult:
    """
    Output of one clustering run.

    Attributes:
        clusters: Member indices of each cluster, in discovery order.
        noise: Indices of points that were not assigned to any cluster.
        labels: Cluster id per input point, NOISE (-1) for noise.
    """

    clusters: List[List[int]] = field(default_factory=list)
    noise: List[int] = field(default_factory=list)
    labels: np.ndarray = field(default_factory=lambda: np.array([], dtype=np.int32))

    @property
    def num_clusters(self) -> int:
        return len(self.clusters)

    def cluster_sizes(self) -> List[int]:
        return [len(members) for members in self.clusters]


class _RunState:
    """Per-run bookkeeping, discarded when the run returns."""

    def __init__(self, size: int):
        self.visited = np.zeros(size, dtype=bool)
        self.assigned = np.zeros(size, dtype=bool)
        self.labels = np.full(size, NOISE, dtype=np.int32)
        self.clusters: List[List[int]] = []

    def add_to_cluster(self, pid: int, cid: int) -> None:
        self.clusters[cid].append(pid)
        self.assigned[pid] = True
        self.labels[pid] = cid


class DBSCAN:
    """
    DBSCAN (Density-Based Spatial Clustering of Applications with Noise).

    A point is a core point when its epsilon-neighborhood, the point itself
    included, holds at least ``min_points`` points. Core points start and grow
    clusters; other points never propagate a cluster.

    Attributes:
        epsilon: Neighborhood radius.
        min_points: Minimum neighborhood size of a core point.
        expand_border_points: If True, non-core points reached from a core
            point are added to its cluster. If False, only core points are
            added while expanding.
        leafsize: Leaf size for the underlying k-d tree.
    """

    def __init__(
        self,
        epsilon: float = 1.0,
        min_points: int = 5,
        expand_border_points: bool = False,
        leafsize: int = 16
    ):
        if not math.isfinite(epsilon) or epsilon <= 0:
            raise ConfigurationError(f"epsilon must be a positive finite number, got {epsilon}")
        if int(min_points) != min_points or min_points < 1:
            raise ConfigurationError(f"min_points must be an integer >= 1, got {min_points}")
        self.epsilon = float(epsilon)
        self.min_points = int(min_points)
        self.expand_border_points = expand_border_points
        self.leafsize = leafsize

    def run(self, points) -> ClusterResult:
        """
        Cluster a set of 3-D points.

        Args:
            points: Array-like of shape (N, 3).

        Returns:
            ClusterResult with clusters numbered in the order their seeds are
            found while scanning the input.

        Raises:
            SpatialIndexError: If the spatial index cannot be built.
        """
        index = SpatialIndex(leafsize=self.leafsize).build(points)
        size = len(index)
        state = _RunState(size)

        for pid in range(size):
            if state.visited[pid]:
                continue
            state.visited[pid] = True

            neighbors = self._region_query(index, pid)
            if not self._is_core(neighbors):
                # Candidate noise; a later expansion may still claim it
                continue

            cid = len(state.clusters)
            state.clusters.append([])
            state.add_to_cluster(pid, cid)
            self._expand_cluster(index, state, pid, cid, neighbors)

        noise = np.flatnonzero(~state.assigned).tolist()
        logger.debug("DBSCAN found %d clusters and %d noise points in %d points",
                     len(state.clusters), len(noise), size)
        return ClusterResult(clusters=state.clusters, noise=noise, labels=state.labels)

    def _region_query(self, index: SpatialIndex, pid: int) -> List[int]:
        """Indices within epsilon of ``pid``, excluding ``pid`` itself."""
        return [int(n) for n in index.neighbors_of(pid, self.epsilon) if n != pid]

    def _is_core(self, neighbors: List[int]) -> bool:
        return len(neighbors) + 1 >= self.min_points

    def _expand_cluster(
        self,
        index: SpatialIndex,
        state: _RunState,
        seed: int,
        cid: int,
        neighbors: List[int]
    ) -> None:
        border = deque(neighbors)
        enqueued = {seed}
        enqueued.update(neighbors)

        while border:
            pid = border.popleft()

            if state.visited[pid]:
                # Seen before as candidate noise, now reachable from a core point
                if self.expand_border_points and not state.assigned[pid]:
                    state.add_to_cluster(pid, cid)
                continue

            state.visited[pid] = True
            pid_neighbors = self._region_query(index, pid)

            if self._is_core(pid_neighbors):
                state.add_to_cluster(pid, cid)
                for nid in pid_neighbors:
                    if nid not in enqueued:
                        enqueued.add(nid)
                        border.append(nid)
            elif self.expand_border_points:
                state.add_to_cluster(pid, cid)
